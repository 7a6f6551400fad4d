"""Discord snowflake identifiers."""
from datetime import datetime, timezone
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from hookcord.errors import MalformedId


DISCORD_EPOCH = 1420070400000  # 2015-01-01T00:00:00Z in milliseconds

WORKER_BITS = 0x3E0000
PROCESS_ID_BITS = 0x1F000
INCREMENT_BITS = 0xFFF

TIMESTAMP_SHIFT = 22
WORKER_SHIFT = 17
PROCESS_ID_SHIFT = 12

MAX_SNOWFLAKE = (1 << 64) - 1
MAX_TIMESTAMP = DISCORD_EPOCH + (1 << 42) - 1


class Snowflake:
    """
    A 64-bit Discord ID split into its components.

    Layout, most significant bits first:
    - 42 bits: milliseconds since DISCORD_EPOCH
    - 5 bits: internal worker ID
    - 5 bits: internal process ID
    - 12 bits: per-process increment

    Equality and hashing use the packed 64-bit value. On the wire a
    snowflake is always a string of decimal digits.
    """

    __slots__ = ("timestamp", "worker_id", "process_id", "increment")

    def __init__(
        self,
        timestamp: int = DISCORD_EPOCH,
        worker_id: int = 0,
        process_id: int = 0,
        increment: int = 0,
    ) -> None:
        if not DISCORD_EPOCH <= timestamp <= MAX_TIMESTAMP:
            raise MalformedId(timestamp, "timestamp outside the 42-bit range after the epoch")
        if not 0 <= worker_id < 32:
            raise MalformedId(worker_id, "worker_id must fit in 5 bits")
        if not 0 <= process_id < 32:
            raise MalformedId(process_id, "process_id must fit in 5 bits")
        if not 0 <= increment < 4096:
            raise MalformedId(increment, "increment must fit in 12 bits")
        object.__setattr__(self, "timestamp", timestamp)
        object.__setattr__(self, "worker_id", worker_id)
        object.__setattr__(self, "process_id", process_id)
        object.__setattr__(self, "increment", increment)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("Snowflake is immutable")

    @classmethod
    def decode(cls, raw: int) -> "Snowflake":
        """Split a packed 64-bit value into its fields."""
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise MalformedId(raw, "expected an integer")
        if not 0 <= raw <= MAX_SNOWFLAKE:
            raise MalformedId(raw, "outside the unsigned 64-bit range")
        return cls(
            timestamp=(raw >> TIMESTAMP_SHIFT) + DISCORD_EPOCH,
            worker_id=(raw & WORKER_BITS) >> WORKER_SHIFT,
            process_id=(raw & PROCESS_ID_BITS) >> PROCESS_ID_SHIFT,
            increment=raw & INCREMENT_BITS,
        )

    @classmethod
    def parse(cls, text: str) -> "Snowflake":
        """Parse the decimal string form used on the wire."""
        if not isinstance(text, str) or not text.isascii() or not text.isdigit():
            raise MalformedId(text)
        return cls.decode(int(text))

    def encode(self) -> int:
        """Pack the fields back into the 64-bit value."""
        raw = (self.timestamp - DISCORD_EPOCH) << TIMESTAMP_SHIFT
        raw |= self.worker_id << WORKER_SHIFT
        raw |= self.process_id << PROCESS_ID_SHIFT
        raw |= self.increment
        return raw

    @property
    def created_at(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp / 1000, tz=timezone.utc)

    def __int__(self) -> int:
        return self.encode()

    def __str__(self) -> str:
        return str(self.encode())

    def __repr__(self) -> str:
        return f"Snowflake({self.encode()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snowflake):
            return NotImplemented
        return self.encode() == other.encode()

    def __hash__(self) -> int:
        return hash(self.encode())

    @classmethod
    def validate(cls, value: Any) -> "Snowflake":
        if isinstance(value, Snowflake):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        return cls.decode(value)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls.validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used="always"
            ),
        )

"""Error types raised while verifying, decoding and answering interactions."""
from typing import Any, Optional


class InteractionError(Exception):
    """Base error for the interactions webhook."""


class ConfigError(InteractionError):
    """Required configuration is missing or invalid."""


class InvalidSignature(InteractionError):
    """The request signature could not be verified.

    Hex decoding problems and cryptographic failures are both reported
    through this one type.
    """

    def __init__(self, message: str = "Invalid request signature") -> None:
        super().__init__(message)


class MissingHeader(InteractionError):
    """A required signature header is absent from the request."""

    def __init__(self, header: str) -> None:
        super().__init__(f"Missing required header: {header}")
        self.header = header


class MalformedId(InteractionError, ValueError):
    """A value is not a valid unsigned 64-bit snowflake."""

    def __init__(self, value: Any, reason: str = "not an unsigned 64-bit decimal") -> None:
        super().__init__(f"Malformed snowflake {value!r}: {reason}")
        self.value = value


class DecodeError(InteractionError, ValueError):
    """Base error for tagged envelope decoding."""


class InvalidJson(DecodeError):
    """The body is not valid JSON."""


class MissingDiscriminant(DecodeError):
    """The `type` field is absent or not an unsigned integer."""

    def __init__(self, family: str, value: Any = None) -> None:
        super().__init__(
            f"{family}: missing or invalid 'type' discriminant (got {value!r})"
        )
        self.family = family


class UnknownVariant(DecodeError):
    """The `type` discriminant has no registered decoder."""

    def __init__(self, family: str, tag: int) -> None:
        super().__init__(f"{family}: unknown variant type {tag}")
        self.family = family
        self.tag = tag


class SchemaMismatch(DecodeError):
    """The value does not match the decoder selected by its discriminant."""

    def __init__(self, family: str, tag: int, cause: Exception) -> None:
        super().__init__(f"{family}: type {tag} does not match its schema: {cause}")
        self.family = family
        self.tag = tag
        self.cause = cause


class NoHandlerRegistered(InteractionError):
    """No handler was supplied for an interaction kind."""

    def __init__(self, kind: str) -> None:
        super().__init__(f"No {kind} handler registered")
        self.kind = kind


class DiscordAPIError(InteractionError):
    """Discord's REST API answered with an error status."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int,
        body: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

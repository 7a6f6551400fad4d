"""Decoding of JSON objects whose shape is selected by their `type` field."""
import json
from typing import Annotated, Any, Callable, Dict, Generic, Mapping, Optional, Tuple, TypeVar, Union

from pydantic import BaseModel, PlainValidator

from hookcord.errors import InvalidJson, MissingDiscriminant, SchemaMismatch, UnknownVariant


T = TypeVar("T")

DISCRIMINANT = "type"


class TaggedDecoder(Generic[T]):
    """
    Decode a tagged union from a generic JSON value.

    Each variant is registered under its integer discriminant, either as a
    pydantic model class or as any callable taking the raw value. Decoding
    reads `type`, picks the matching variant and validates the whole value
    with it:

    - `type` absent, negative or not an integer -> MissingDiscriminant
    - no variant registered for `type` -> UnknownVariant
    - the variant rejects the value -> SchemaMismatch (wraps the cause)

    Unknown discriminants are never mapped to a default variant.
    """

    def __init__(self, family: str, variants: Optional[Mapping[int, Any]] = None) -> None:
        self.family = family
        self._variants: Dict[int, Callable[[Any], T]] = {}
        self._model_types: Tuple[type, ...] = ()
        for tag, variant in (variants or {}).items():
            self.add(tag, variant)

    def add(self, tag: int, variant: Any) -> None:
        """Register `variant` as the decoder for discriminant `tag`."""
        tag = int(tag)
        if tag in self._variants:
            raise ValueError(f"{self.family}: type {tag} is already registered")
        if isinstance(variant, type) and issubclass(variant, BaseModel):
            self._variants[tag] = variant.model_validate
            self._model_types += (variant,)
        else:
            self._variants[tag] = variant

    def register(self, tag: int) -> Callable[[Any], Any]:
        """Decorator form of `add` for model classes."""
        def decorator(variant: Any) -> Any:
            self.add(tag, variant)
            return variant
        return decorator

    @property
    def tags(self) -> frozenset:
        return frozenset(self._variants)

    def decode(self, value: Any) -> T:
        """Decode an already parsed JSON value."""
        tag = value.get(DISCRIMINANT) if isinstance(value, dict) else None
        if isinstance(tag, bool) or not isinstance(tag, int) or tag < 0:
            raise MissingDiscriminant(self.family, tag)

        decoder = self._variants.get(tag)
        if decoder is None:
            raise UnknownVariant(self.family, tag)

        try:
            return decoder(value)
        except Exception as exc:
            # Covers pydantic.ValidationError and lookups failing in plain callables
            raise SchemaMismatch(self.family, tag, exc) from exc

    __call__ = decode

    def decode_json(self, raw: Union[bytes, str]) -> T:
        """Parse raw JSON text and decode it."""
        try:
            value = json.loads(raw)
        except (ValueError, RecursionError) as exc:
            raise InvalidJson(f"{self.family}: body is not valid JSON: {exc}") from exc
        return self.decode(value)

    def _validate_field(self, value: Any) -> Any:
        if self._model_types and isinstance(value, self._model_types):
            return value
        return self.decode(value)

    def annotation(self) -> Any:
        """
        Type annotation that decodes a model field with this decoder.

        Already decoded variant instances are accepted as they are, so
        models can also be built directly in Python.
        """
        return Annotated[Any, PlainValidator(self._validate_field)]

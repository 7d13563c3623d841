"""
Response body decoding.

Every typed decode goes through this module. The interesting case is
OneOrManyDecoder: some endpoints answer with a bare object when exactly one
entry exists and with an array of the same object otherwise. The body is
classified first and decoded a second time into a list, so callers always
get a sequence.
"""
import json
from abc import ABC, abstractmethod
from typing import Any, Generic, List, Type, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from ..exceptions import DecodeError
from ..types import JsonShape

T = TypeVar("T")

MAX_SNIPPET = 500


def body_snippet(body: Union[bytes, str], max_len: int = MAX_SNIPPET) -> str:
    """Printable, truncated preview of a response body."""
    if isinstance(body, (bytes, bytearray)):
        text = bytes(body).decode("utf-8", errors="replace")
    else:
        text = body
    if len(text) <= max_len:
        return text
    return text[:max_len] + "... (truncated)"


def classify_shape(value: Any) -> JsonShape:
    """Outer shape of an already parsed JSON value."""
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "scalar"


class Decoder(ABC, Generic[T]):
    """Turns a buffered response body into a typed value."""

    @abstractmethod
    def decode(self, body: bytes) -> T:
        ...


class JsonDecoder(Decoder[T]):
    """Validates the body against a single type (model, list of models, dict...)."""

    def __init__(self, type_: Any):
        self.type_ = type_
        self._adapter = TypeAdapter(type_)

    def decode(self, body: bytes) -> T:
        try:
            return self._adapter.validate_json(body)
        except ValidationError as e:
            raise DecodeError(
                f"Cannot decode response into {_type_name(self.type_)}: {e}",
                body=body_snippet(body),
                cause=e,
            ) from e


class TextDecoder(Decoder[str]):
    """Plain text bodies, e.g. ``api/system/ping``."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def decode(self, body: bytes) -> str:
        try:
            return body.decode(self.encoding)
        except UnicodeDecodeError as e:
            raise DecodeError(
                f"Response body is not valid {self.encoding}", body=body_snippet(body), cause=e
            ) from e


class OneOrManyDecoder(Decoder[List[T]]):
    """Decodes either ``{...}`` or ``[{...}, ...]`` into ``List[item_type]``."""

    def __init__(self, item_type: Type[T]):
        self.item_type = item_type
        self._one = TypeAdapter(item_type)
        self._many = TypeAdapter(List[item_type])  # type: ignore[valid-type]

    def decode(self, body: bytes) -> List[T]:
        # First pass only looks at the outer shape
        try:
            raw = json.loads(body)
        except ValueError as e:
            raise DecodeError(
                f"Response body is not valid JSON: {e}", body=body_snippet(body), cause=e
            ) from e

        shape = classify_shape(raw)
        try:
            if shape == "array":
                return self._many.validate_json(body)
            return [self._one.validate_json(body)]
        except ValidationError as e:
            raise DecodeError(
                f"Cannot decode JSON {shape} into {_type_name(self.item_type)}: {e}",
                body=body_snippet(body),
                cause=e,
            ) from e


def decoder_for(target: Any) -> Decoder:
    """Return ``target`` if it already is a Decoder, otherwise build one for the type."""
    if isinstance(target, Decoder):
        return target
    if target is str:
        return TextDecoder()
    return JsonDecoder(target)


def _type_name(type_: Any) -> str:
    return getattr(type_, "__name__", None) or repr(type_)

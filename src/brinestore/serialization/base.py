"""Codec protocol — one wire format for single values and whole databases."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, ClassVar

from pydantic import TypeAdapter, ValidationError

from brinestore.exceptions import SerializationError

ScalarMap = dict[str, bytes]
ListMap = dict[str, list[bytes]]
Database = tuple[ScalarMap, ListMap]

DB_DECODE_ERROR = "Cannot deserialize DB"

_TEXT_DATABASE: TypeAdapter[tuple[dict[str, str], dict[str, list[str]]]] = TypeAdapter(
    tuple[dict[str, str], dict[str, list[str]]]
)
_BINARY_DATABASE: TypeAdapter[Database] = TypeAdapter(Database)


class Codec(ABC):
    """Abstract base for all serialization backends.

    A codec turns a single value into ``bytes`` and back, and does the same
    for the whole ``(scalar_map, list_map)`` pair.  The store never looks
    inside the value bytes, so each codec is free to pick its own layout
    as long as ``decode_value(encode_value(v))`` gives ``v`` back.

    Encodings must be canonical (same value, same bytes) because list
    removal by value compares encoded bytes.
    """

    name: ClassVar[str] = "base"

    @abstractmethod
    def encode_value(self, value: Any) -> bytes:
        """Encode one value.  Raise :class:`SerializationError` on failure."""
        ...

    @abstractmethod
    def decode_value(self, data: bytes) -> Any:
        """Decode one value.  Raise :class:`SerializationError` on failure."""
        ...

    @abstractmethod
    def encode_database(self, scalars: ScalarMap, lists: ListMap) -> bytes:
        """Encode the scalar map and the list map as one document."""
        ...

    @abstractmethod
    def decode_database(self, data: bytes) -> Database:
        """Inverse of :meth:`encode_database`."""
        ...


def text_database(scalars: ScalarMap, lists: ListMap) -> list[Any]:
    """Re-represent every stored value as a UTF-8 string for text formats."""
    try:
        return [
            {key: value.decode("utf-8") for key, value in scalars.items()},
            {name: [item.decode("utf-8") for item in items] for name, items in lists.items()},
        ]
    except UnicodeDecodeError as exc:
        raise SerializationError(f"Stored value is not valid UTF-8: {exc}") from exc


def database_from_text(obj: Any) -> Database:
    """Validate a decoded text document and turn its strings back into bytes."""
    try:
        scalars, lists = _TEXT_DATABASE.validate_python(obj)
    except ValidationError as exc:
        raise SerializationError(DB_DECODE_ERROR) from exc
    return (
        {key: value.encode("utf-8") for key, value in scalars.items()},
        {name: [item.encode("utf-8") for item in items] for name, items in lists.items()},
    )


def database_from_binary(obj: Any) -> Database:
    """Validate a decoded binary document."""
    try:
        return _BINARY_DATABASE.validate_python(obj, strict=False)
    except ValidationError as exc:
        raise SerializationError(DB_DECODE_ERROR) from exc

"""Read-only iteration views over a store's scalar map and its lists.

Both iterators walk a snapshot taken when they are created.  Mutating the
store while iterating is safe but not reflected; ask the store for a new
iterator to see the current state.  Values stay encoded until a caller
asks for them, so a bad item only affects that item.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from brinestore._internal.coerce import coerce
from brinestore.exceptions import SerializationError
from brinestore.serialization import Serializer


def decode_as(serializer: Serializer, data: bytes, as_type: Any) -> Any | None:
    try:
        raw = serializer.decode_value(data)
    except SerializationError:
        return None
    if as_type is None:
        return raw
    return coerce(raw, as_type)


class StoreItem:
    """One ``(key, value)`` pair of the scalar map."""

    __slots__ = ("_key", "_data", "_serializer")

    def __init__(self, key: str, data: bytes, serializer: Serializer) -> None:
        self._key = key
        self._data = data
        self._serializer = serializer

    @property
    def key(self) -> str:
        return self._key

    def get_value(self, as_type: Any = None) -> Any | None:
        """Decode the value, optionally as *as_type*.  ``None`` if it does not fit."""
        return decode_as(self._serializer, self._data, as_type)

    def __repr__(self) -> str:
        return f"StoreItem(key={self._key!r})"


class ListItem:
    """One element of a list."""

    __slots__ = ("_data", "_serializer")

    def __init__(self, data: bytes, serializer: Serializer) -> None:
        self._data = data
        self._serializer = serializer

    def get_item(self, as_type: Any = None) -> Any | None:
        """Decode the element, optionally as *as_type*.  ``None`` if it does not fit."""
        return decode_as(self._serializer, self._data, as_type)


class StoreIterator(Iterator[StoreItem]):
    """Iterates the scalar map in unspecified order."""

    def __init__(self, items: list[tuple[str, bytes]], serializer: Serializer) -> None:
        self._items = iter(items)
        self._serializer = serializer

    def __next__(self) -> StoreItem:
        key, data = next(self._items)
        return StoreItem(key, data, self._serializer)


class ListIterator(Iterator[ListItem]):
    """Iterates one list in list order."""

    def __init__(self, items: list[bytes], serializer: Serializer) -> None:
        self._items = iter(items)
        self._serializer = serializer

    def __next__(self) -> ListItem:
        return ListItem(next(self._items), self._serializer)

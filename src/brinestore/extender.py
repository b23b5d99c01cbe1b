"""ListExtender — chainable appends onto one list of a store."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from brinestore.exceptions import ListNotFoundError

if TYPE_CHECKING:
    from brinestore.store import BrineStore


class ListExtender:
    """Returned by ``list_create``, ``list_append`` and ``list_extend``.

    Each call forwards to the store and returns a fresh extender, so
    appends can be chained::

        db.list_create("fruits").append("apple").extend(["pear", "plum"])

    Dump failures propagate exactly as they do from the store (the list has
    already been rolled back).  If the list was deleted in the meantime,
    :class:`ListNotFoundError` is raised.
    """

    def __init__(self, store: BrineStore, name: str) -> None:
        self._store = store
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def append(self, value: Any) -> ListExtender:
        extender = self._store.list_append(self._name, value)
        if extender is None:
            raise ListNotFoundError(self._name)
        return extender

    def extend(self, values: Iterable[Any]) -> ListExtender:
        extender = self._store.list_extend(self._name, values)
        if extender is None:
            raise ListNotFoundError(self._name)
        return extender

    def __repr__(self) -> str:
        return f"ListExtender(name={self._name!r})"

"""BrineStore — in-memory key-value and list store backed by a single file."""

from __future__ import annotations

import contextlib
import logging
import os
import time
from collections.abc import Callable, Iterable
from pathlib import Path
from types import TracebackType
from typing import Any

from brinestore._internal.clock import Clock, MonotonicClock
from brinestore.exceptions import BrineStoreError, ListNotFoundError, StoreIOError
from brinestore.extender import ListExtender
from brinestore.iterators import ListIterator, StoreIterator, decode_as
from brinestore.policy import DumpMode, DumpPolicy
from brinestore.serialization import SerializationMethod, Serializer
from brinestore.serialization.base import ListMap, ScalarMap

logger = logging.getLogger(__name__)


class BrineStore:
    """Keys map either to one value or to a list of values, never both.

    Values are encoded with the store's codec as soon as they come in and
    only decoded when read.  A read may ask for a type with ``as_type``;
    when the stored value does not fit, the read returns ``None``.

    Every mutation consults the :class:`DumpPolicy`.  If the resulting dump
    fails, the mutation is undone before the error propagates, so the
    in-memory state after a failed call is the state before it.

    Parameters:
        path:          Database file.  Nothing is written until the first dump.
        dump_policy:   When to write the file (see :class:`DumpPolicy`).
        serialization: On-disk format; also used for every stored value.
        clock:         Injectable clock for the periodic policy.

    Stores hold unsaved state, so close them (or use ``with``) when done:
    ``close()`` writes the file unless the policy is ``NEVER`` or
    ``UPON_REQUEST``.  Do not rely on garbage collection to persist data.
    """

    def __init__(
        self,
        path: str | os.PathLike[str],
        dump_policy: DumpPolicy,
        serialization: SerializationMethod | str = SerializationMethod.JSON,
        *,
        clock: Clock | None = None,
    ) -> None:
        self._path = Path(path)
        self._policy = dump_policy
        self._serializer = Serializer(serialization)
        self._clock = clock or MonotonicClock()
        self._map: ScalarMap = {}
        self._lists: ListMap = {}
        self._last_dump = self._clock.now()
        self._closed = False

    # ── construction ─────────────────────────────────────────

    @classmethod
    def new(
        cls,
        path: str | os.PathLike[str],
        dump_policy: DumpPolicy,
        serialization: SerializationMethod | str = SerializationMethod.JSON,
        *,
        clock: Clock | None = None,
    ) -> BrineStore:
        """Create an empty store.  The file is not touched."""
        return cls(path, dump_policy, serialization, clock=clock)

    @classmethod
    def load(
        cls,
        path: str | os.PathLike[str],
        dump_policy: DumpPolicy,
        serialization: SerializationMethod | str = SerializationMethod.JSON,
        *,
        clock: Clock | None = None,
    ) -> BrineStore:
        """Load a store from *path*.

        Raises:
            StoreIOError: The file cannot be read (including when it is missing).
            SerializationError: The file is not a database in this format.
        """
        store = cls(path, dump_policy, serialization, clock=clock)
        try:
            content = store._path.read_bytes()
        except OSError as exc:
            raise StoreIOError(exc) from exc

        store._map, store._lists = store._serializer.decode_database(content)
        logger.debug(
            "Loaded %d keys and %d lists from %s",
            len(store._map),
            len(store._lists),
            store._path,
        )
        return store

    @classmethod
    def load_read_only(
        cls,
        path: str | os.PathLike[str],
        serialization: SerializationMethod | str = SerializationMethod.JSON,
    ) -> BrineStore:
        """Load with :meth:`DumpPolicy.never`; changes stay in memory."""
        return cls.load(path, DumpPolicy.never(), serialization)

    @classmethod
    def new_json(cls, path: str | os.PathLike[str], dump_policy: DumpPolicy) -> BrineStore:
        return cls.new(path, dump_policy, SerializationMethod.JSON)

    @classmethod
    def new_bin(cls, path: str | os.PathLike[str], dump_policy: DumpPolicy) -> BrineStore:
        return cls.new(path, dump_policy, SerializationMethod.BIN)

    @classmethod
    def new_yaml(cls, path: str | os.PathLike[str], dump_policy: DumpPolicy) -> BrineStore:
        return cls.new(path, dump_policy, SerializationMethod.YAML)

    @classmethod
    def new_cbor(cls, path: str | os.PathLike[str], dump_policy: DumpPolicy) -> BrineStore:
        return cls.new(path, dump_policy, SerializationMethod.CBOR)

    @classmethod
    def load_json(cls, path: str | os.PathLike[str], dump_policy: DumpPolicy) -> BrineStore:
        return cls.load(path, dump_policy, SerializationMethod.JSON)

    @classmethod
    def load_bin(cls, path: str | os.PathLike[str], dump_policy: DumpPolicy) -> BrineStore:
        return cls.load(path, dump_policy, SerializationMethod.BIN)

    @classmethod
    def load_yaml(cls, path: str | os.PathLike[str], dump_policy: DumpPolicy) -> BrineStore:
        return cls.load(path, dump_policy, SerializationMethod.YAML)

    @classmethod
    def load_cbor(cls, path: str | os.PathLike[str], dump_policy: DumpPolicy) -> BrineStore:
        return cls.load(path, dump_policy, SerializationMethod.CBOR)

    # ── persistence ──────────────────────────────────────────

    def dump(self) -> None:
        """Write the whole store to its file.

        The data goes to a sibling temporary file first, which then replaces
        the target in one rename, so the target is never half written.
        A no-op under ``NEVER``.

        Raises:
            SerializationError: The maps cannot be encoded.
            StoreIOError: Writing or renaming failed.  The target is untouched.
        """
        if self._policy.mode is DumpMode.NEVER:
            return

        data = self._serializer.encode_database(self._map, self._lists)
        temp_path = self._path.with_name(f"{self._path.name}.temp.{time.time_ns()}")
        try:
            with open(temp_path, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(temp_path, self._path)
        except OSError as exc:
            with contextlib.suppress(OSError):
                temp_path.unlink(missing_ok=True)
            raise StoreIOError(exc) from exc

        self._last_dump = self._clock.now()
        logger.debug(
            "Dumped %d keys and %d lists to %s",
            len(self._map),
            len(self._lists),
            self._path,
        )

    def _dump_if_needed(self) -> None:
        mode = self._policy.mode
        if mode is DumpMode.AUTO:
            self.dump()
        elif mode is DumpMode.PERIODIC:
            if self._clock.now() - self._last_dump >= self._policy.interval:
                self.dump()

    def _commit(self, rollback: Callable[[], None]) -> None:
        """Apply the dump policy; undo the pending change if the dump fails."""
        try:
            self._dump_if_needed()
        except BrineStoreError:
            rollback()
            logger.warning("Dump to %s failed, change rolled back", self._path)
            raise

    def close(self) -> None:
        """Dump one last time (``AUTO``/``PERIODIC`` only).  Idempotent.

        If the final dump fails the store stays open, so ``close()`` can be
        retried once the cause is fixed.
        """
        if self._closed:
            return
        if self._policy.writes_on_close:
            self.dump()
        self._closed = True

    def __enter__(self) -> BrineStore:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.close()
            return
        try:
            self.close()
        except BrineStoreError:
            # the in-flight exception wins
            logger.warning(
                "Final dump of %s failed while handling %s",
                self._path,
                exc_type.__name__,
                exc_info=True,
            )

    # ── key-value ────────────────────────────────────────────

    def set(self, key: str, value: Any) -> None:
        """Store *value* under *key*, replacing a value or a list of that name."""
        data = self._serializer.encode_value(value)
        previous = self._map.get(key)
        evicted = self._lists.pop(key, None)
        self._map[key] = data

        def rollback() -> None:
            if previous is None:
                del self._map[key]
            else:
                self._map[key] = previous
            if evicted is not None:
                self._lists[key] = evicted

        self._commit(rollback)

    def get(self, key: str, as_type: Any = None) -> Any | None:
        """Return the value under *key*, or ``None``.

        ``None`` also covers values that cannot be decoded as *as_type*.
        """
        data = self._map.get(key)
        if data is None:
            return None
        return decode_as(self._serializer, data, as_type)

    def exists(self, key: str) -> bool:
        """``True`` if *key* names a value or a list."""
        return key in self._map or key in self._lists

    def get_all(self) -> list[str]:
        """All keys, values first, then lists."""
        return [*self._map, *self._lists]

    def total_keys(self) -> int:
        return len(self._map) + len(self._lists)

    def remove(self, key: str) -> bool:
        """Remove a value or a list.  ``False`` if *key* is unknown."""
        if key in self._map:
            data = self._map.pop(key)

            def restore_value() -> None:
                self._map[key] = data

            self._commit(restore_value)
            return True

        if key in self._lists:
            items = self._lists.pop(key)

            def restore_list() -> None:
                self._lists[key] = items

            self._commit(restore_list)
            return True

        return False

    # ── lists ────────────────────────────────────────────────

    def list_create(self, name: str) -> ListExtender:
        """Create an empty list, replacing a value or list of that name."""
        evicted = self._map.pop(name, None)
        previous = self._lists.get(name)
        self._lists[name] = []

        def rollback() -> None:
            if previous is None:
                del self._lists[name]
            else:
                self._lists[name] = previous
            if evicted is not None:
                self._map[name] = evicted

        self._commit(rollback)
        return ListExtender(self, name)

    def list_exists(self, name: str) -> bool:
        return name in self._lists

    def list_append(self, name: str, value: Any) -> ListExtender | None:
        """Append one value.  ``None`` if the list does not exist."""
        return self.list_extend(name, [value])

    def list_extend(self, name: str, values: Iterable[Any]) -> ListExtender | None:
        """Append several values.  ``None`` if the list does not exist.

        All values are encoded before the list changes, so an encoding error
        leaves the list as it was.
        """
        items = self._lists.get(name)
        if items is None:
            return None

        encoded = [self._serializer.encode_value(value) for value in values]
        original_len = len(items)
        items.extend(encoded)

        def rollback() -> None:
            del items[original_len:]

        self._commit(rollback)
        return ListExtender(self, name)

    def list_get(self, name: str, index: int, as_type: Any = None) -> Any | None:
        """Return item *index* of list *name*, or ``None``.

        ``None`` covers a missing list, an index outside ``[0, length)`` and
        an item that cannot be decoded as *as_type*.
        """
        items = self._lists.get(name)
        if items is None or not 0 <= index < len(items):
            return None
        return decode_as(self._serializer, items[index], as_type)

    def list_length(self, name: str) -> int:
        """Length of list *name*; 0 if it does not exist."""
        items = self._lists.get(name)
        return len(items) if items is not None else 0

    def list_remove_at(self, name: str, index: int, as_type: Any = None) -> Any | None:
        """Remove item *index* and return it decoded.

        Returns ``None`` (and changes nothing) for a missing list or an index
        out of range.
        """
        items = self._lists.get(name)
        if items is None or not 0 <= index < len(items):
            return None

        data = items.pop(index)

        def rollback() -> None:
            items.insert(index, data)

        self._commit(rollback)
        return decode_as(self._serializer, data, as_type)

    def list_remove_value(self, name: str, value: Any) -> bool:
        """Remove the first item whose encoding equals that of *value*."""
        items = self._lists.get(name)
        if items is None:
            return False

        data = self._serializer.encode_value(value)
        try:
            index = items.index(data)
        except ValueError:
            return False
        del items[index]

        def rollback() -> None:
            items.insert(index, data)

        self._commit(rollback)
        return True

    def list_delete(self, name: str) -> int:
        """Delete list *name* and return how many items it had (0 if missing)."""
        items = self._lists.pop(name, None)
        if items is None:
            return 0

        def rollback() -> None:
            self._lists[name] = items

        self._commit(rollback)
        return len(items)

    # ── iteration ────────────────────────────────────────────

    def iter(self) -> StoreIterator:
        """Iterate over a snapshot of the key-value pairs (lists excluded)."""
        return StoreIterator(list(self._map.items()), self._serializer)

    def list_iter(self, name: str) -> ListIterator:
        """Iterate over a snapshot of list *name*.

        Raises:
            ListNotFoundError: The list does not exist.
        """
        items = self._lists.get(name)
        if items is None:
            raise ListNotFoundError(name)
        return ListIterator(list(items), self._serializer)

    # ── introspection ────────────────────────────────────────

    @property
    def path(self) -> Path:
        return self._path

    @property
    def dump_policy(self) -> DumpPolicy:
        return self._policy

    @property
    def serialization(self) -> SerializationMethod:
        return self._serializer.method

    @property
    def closed(self) -> bool:
        return self._closed

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.exists(key)

    def __len__(self) -> int:
        return self.total_keys()

    def __repr__(self) -> str:
        return (
            f"BrineStore(path={str(self._path)!r}, "
            f"policy={self._policy.mode.value!r}, "
            f"serialization={self._serializer.method.value!r})"
        )

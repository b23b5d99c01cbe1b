"""brinestore — a small embeddable key-value and list store.

Keys hold either one value or a list of values.  Everything lives in
memory and is written to a single file, in the format of your choice,
according to the store's dump policy.
"""

from brinestore.config import StoreConfig, open_store
from brinestore.exceptions import (
    BrineStoreError,
    ListNotFoundError,
    SerializationError,
    StoreIOError,
)
from brinestore.extender import ListExtender
from brinestore.iterators import ListItem, ListIterator, StoreItem, StoreIterator
from brinestore.policy import DumpMode, DumpPolicy
from brinestore.serialization import SerializationMethod, Serializer
from brinestore.store import BrineStore

__all__ = [
    "BrineStore",
    "BrineStoreError",
    "DumpMode",
    "DumpPolicy",
    "ListExtender",
    "ListItem",
    "ListIterator",
    "ListNotFoundError",
    "SerializationError",
    "SerializationMethod",
    "Serializer",
    "StoreConfig",
    "StoreIOError",
    "StoreItem",
    "StoreIterator",
    "open_store",
]

"""MsgpackCodec — compact binary encoding via MessagePack."""

from __future__ import annotations

from typing import Any

import msgpack
from msgpack.exceptions import UnpackException
from pydantic_core import PydanticSerializationError, to_jsonable_python

from brinestore.exceptions import SerializationError
from brinestore.serialization.base import (
    DB_DECODE_ERROR,
    Codec,
    Database,
    ListMap,
    ScalarMap,
    database_from_binary,
)


def _canonical(value: Any) -> Any:
    """Sort mapping keys recursively; MessagePack keeps insertion order."""
    if isinstance(value, dict):
        try:
            keys = sorted(value)
        except TypeError:
            # mixed key types have no total order
            keys = list(value)
        return {key: _canonical(value[key]) for key in keys}
    if isinstance(value, (list, tuple)):
        return [_canonical(item) for item in value]
    return value


def _unpack(data: bytes) -> Any:
    return msgpack.unpackb(data, raw=False, strict_map_key=False)


class MsgpackCodec(Codec):
    """Binary backend.  ``bytes`` values are stored natively (bin type)."""

    name = "bin"

    def encode_value(self, value: Any) -> bytes:
        try:
            return msgpack.packb(_canonical(value), default=to_jsonable_python, use_bin_type=True)
        except (TypeError, ValueError, OverflowError, PydanticSerializationError) as exc:
            raise SerializationError(f"Cannot serialize value as MessagePack: {exc}") from exc

    def decode_value(self, data: bytes) -> Any:
        try:
            return _unpack(data)
        except (TypeError, ValueError, UnpackException) as exc:
            raise SerializationError(f"Cannot deserialize MessagePack value: {exc}") from exc

    def encode_database(self, scalars: ScalarMap, lists: ListMap) -> bytes:
        return msgpack.packb([scalars, lists], use_bin_type=True)

    def decode_database(self, data: bytes) -> Database:
        try:
            obj = _unpack(data)
        except (TypeError, ValueError, UnpackException) as exc:
            raise SerializationError(DB_DECODE_ERROR) from exc
        return database_from_binary(obj)

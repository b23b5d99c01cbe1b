"""CborCodec — self-describing binary encoding via cbor2."""

from __future__ import annotations

from datetime import UTC
from typing import Any

import cbor2
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

_ENCODE_ERRORS = (cbor2.CBORError, TypeError, ValueError, PydanticSerializationError)
_DECODE_ERRORS = (cbor2.CBORError, TypeError, ValueError, EOFError, OverflowError)


def _lower(encoder: cbor2.CBOREncoder, value: Any) -> None:
    encoder.encode(to_jsonable_python(value))


class CborCodec(Codec):
    """CBOR backend in canonical mode.

    Naive datetimes are written as UTC; they decode as aware datetimes.
    """

    name = "cbor"

    def encode_value(self, value: Any) -> bytes:
        try:
            return cbor2.dumps(value, canonical=True, timezone=UTC, default=_lower)
        except _ENCODE_ERRORS as exc:
            raise SerializationError(f"Cannot serialize value as CBOR: {exc}") from exc

    def decode_value(self, data: bytes) -> Any:
        try:
            return cbor2.loads(data)
        except _DECODE_ERRORS as exc:
            raise SerializationError(f"Cannot deserialize CBOR value: {exc}") from exc

    def encode_database(self, scalars: ScalarMap, lists: ListMap) -> bytes:
        try:
            return cbor2.dumps([scalars, lists])
        except _ENCODE_ERRORS as exc:
            raise SerializationError(f"Cannot serialize DB as CBOR: {exc}") from exc

    def decode_database(self, data: bytes) -> Database:
        try:
            obj = cbor2.loads(data)
        except _DECODE_ERRORS as exc:
            raise SerializationError(DB_DECODE_ERROR) from exc
        return database_from_binary(obj)

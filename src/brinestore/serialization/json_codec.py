"""JsonCodec — compact, key-sorted JSON text."""

from __future__ import annotations

import json
from typing import Any

from pydantic_core import PydanticSerializationError, to_jsonable_python

from brinestore.exceptions import SerializationError
from brinestore.serialization.base import (
    DB_DECODE_ERROR,
    Codec,
    Database,
    ListMap,
    ScalarMap,
    database_from_text,
    text_database,
)


def _dumps(obj: Any) -> bytes:
    return json.dumps(
        obj,
        default=to_jsonable_python,
        sort_keys=True,
        ensure_ascii=False,
        separators=(",", ":"),
    ).encode("utf-8")


class JsonCodec(Codec):
    """JSON backend built on the standard library ``json`` module.

    Values that JSON has no native form for (models, dataclasses, dates,
    UUIDs, ``bytes``) go through ``pydantic_core.to_jsonable_python``.
    """

    name = "json"

    def encode_value(self, value: Any) -> bytes:
        try:
            return _dumps(value)
        except (TypeError, ValueError, PydanticSerializationError) as exc:
            raise SerializationError(f"Cannot serialize value as JSON: {exc}") from exc

    def decode_value(self, data: bytes) -> Any:
        try:
            return json.loads(data)
        except ValueError as exc:
            raise SerializationError(f"Cannot deserialize JSON value: {exc}") from exc

    def encode_database(self, scalars: ScalarMap, lists: ListMap) -> bytes:
        return _dumps(text_database(scalars, lists))

    def decode_database(self, data: bytes) -> Database:
        try:
            obj = json.loads(data)
        except ValueError as exc:
            raise SerializationError(DB_DECODE_ERROR) from exc
        return database_from_text(obj)

"""YamlCodec — human-readable YAML via PyYAML's safe loader and dumper."""

from __future__ import annotations

from typing import Any

import yaml
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


class _Dumper(yaml.SafeDumper):
    """Safe dumper that never emits anchors and lowers unknown objects."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def _represent_object(dumper: yaml.SafeDumper, data: Any) -> yaml.Node:
    return dumper.represent_data(to_jsonable_python(data))


_Dumper.add_multi_representer(object, _represent_object)


def _dumps(obj: Any) -> bytes:
    text: str = yaml.dump(
        obj,
        Dumper=_Dumper,
        sort_keys=True,
        allow_unicode=True,
        default_flow_style=False,
    )
    return text.encode("utf-8")


class YamlCodec(Codec):
    name = "yaml"

    def encode_value(self, value: Any) -> bytes:
        try:
            return _dumps(value)
        except (yaml.YAMLError, TypeError, ValueError, PydanticSerializationError) as exc:
            raise SerializationError(f"Cannot serialize value as YAML: {exc}") from exc

    def decode_value(self, data: bytes) -> Any:
        try:
            return yaml.safe_load(data)
        except yaml.YAMLError as exc:
            raise SerializationError(f"Cannot deserialize YAML value: {exc}") from exc

    def encode_database(self, scalars: ScalarMap, lists: ListMap) -> bytes:
        try:
            return _dumps(text_database(scalars, lists))
        except yaml.YAMLError as exc:
            raise SerializationError(f"Cannot serialize DB as YAML: {exc}") from exc

    def decode_database(self, data: bytes) -> Database:
        try:
            obj = yaml.safe_load(data)
        except yaml.YAMLError as exc:
            raise SerializationError(DB_DECODE_ERROR) from exc
        return database_from_text(obj)

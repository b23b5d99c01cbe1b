"""Serializer — picks the codec for a store and forwards to it.

Uses the Registry pattern to map each :class:`SerializationMethod` to a
codec class, so the store never branches on the file format.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, ClassVar

from brinestore.serialization.base import Codec, Database, ListMap, ScalarMap
from brinestore.serialization.cbor_codec import CborCodec
from brinestore.serialization.json_codec import JsonCodec
from brinestore.serialization.msgpack_codec import MsgpackCodec
from brinestore.serialization.yaml_codec import YamlCodec

logger = logging.getLogger(__name__)


class SerializationMethod(str, Enum):
    """Supported on-disk formats."""

    JSON = "json"
    BIN = "bin"
    YAML = "yaml"
    CBOR = "cbor"


class Serializer:
    """Format-agnostic front for one codec.

    Example:
        serializer = Serializer(SerializationMethod.YAML)
        data = serializer.encode_value({"a": 1})
        serializer.decode_value(data)  # {"a": 1}
    """

    _registry: ClassVar[dict[SerializationMethod, type[Codec]]] = {
        SerializationMethod.JSON: JsonCodec,
        SerializationMethod.BIN: MsgpackCodec,
        SerializationMethod.YAML: YamlCodec,
        SerializationMethod.CBOR: CborCodec,
    }

    def __init__(self, method: SerializationMethod | str = SerializationMethod.JSON) -> None:
        self._method = SerializationMethod(method)
        self._codec: Codec = self._registry[self._method]()
        logger.debug("Using %s codec", self._codec.name)

    @classmethod
    def register(cls, method: SerializationMethod, codec_class: type[Codec]) -> None:
        """Replace the codec used for *method*.

        Args:
            method: Format to bind.
            codec_class: :class:`Codec` subclass, instantiated per serializer.
        """
        if not issubclass(codec_class, Codec):
            raise TypeError(f"{codec_class!r} is not a Codec subclass")
        cls._registry = {**cls._registry, method: codec_class}

    @property
    def method(self) -> SerializationMethod:
        return self._method

    @property
    def codec(self) -> Codec:
        return self._codec

    # ── forwarding ───────────────────────────────────────────

    def encode_value(self, value: Any) -> bytes:
        return self._codec.encode_value(value)

    def decode_value(self, data: bytes) -> Any:
        return self._codec.decode_value(data)

    def encode_database(self, scalars: ScalarMap, lists: ListMap) -> bytes:
        return self._codec.encode_database(scalars, lists)

    def decode_database(self, data: bytes) -> Database:
        return self._codec.decode_database(data)

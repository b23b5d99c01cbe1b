"""Serialization backends for the on-disk database and stored values."""

from brinestore.serialization.base import Codec
from brinestore.serialization.cbor_codec import CborCodec
from brinestore.serialization.json_codec import JsonCodec
from brinestore.serialization.msgpack_codec import MsgpackCodec
from brinestore.serialization.serializer import SerializationMethod, Serializer
from brinestore.serialization.yaml_codec import YamlCodec

__all__ = [
    "CborCodec",
    "Codec",
    "JsonCodec",
    "MsgpackCodec",
    "SerializationMethod",
    "Serializer",
    "YamlCodec",
]

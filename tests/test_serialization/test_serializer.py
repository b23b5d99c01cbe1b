"""Tests for the Serializer dispatcher."""

import pytest

from brinestore.serialization import (
    CborCodec,
    JsonCodec,
    MsgpackCodec,
    SerializationMethod,
    Serializer,
    YamlCodec,
)


@pytest.mark.parametrize(
    ("method", "codec_cls"),
    [
        (SerializationMethod.JSON, JsonCodec),
        (SerializationMethod.BIN, MsgpackCodec),
        (SerializationMethod.YAML, YamlCodec),
        (SerializationMethod.CBOR, CborCodec),
    ],
)
def test_picks_codec_for_method(method, codec_cls):
    serializer = Serializer(method)
    assert serializer.method is method
    assert isinstance(serializer.codec, codec_cls)


def test_accepts_method_name():
    assert Serializer("yaml").method is SerializationMethod.YAML


def test_default_is_json():
    assert Serializer().method is SerializationMethod.JSON


def test_unknown_method_raises():
    with pytest.raises(ValueError):
        Serializer("xml")


def test_forwards_to_codec():
    serializer = Serializer(SerializationMethod.JSON)
    data = serializer.encode_value({"a": 1})

    assert data == b'{"a":1}'
    assert serializer.decode_value(data) == {"a": 1}

    db = serializer.encode_database({"a": data}, {"L": []})
    assert serializer.decode_database(db) == ({"a": data}, {"L": []})


class ShoutingJsonCodec(JsonCodec):
    name = "shouting-json"


def test_register_replaces_codec(monkeypatch):
    monkeypatch.setattr(Serializer, "_registry", dict(Serializer._registry))
    Serializer.register(SerializationMethod.JSON, ShoutingJsonCodec)

    assert isinstance(Serializer(SerializationMethod.JSON).codec, ShoutingJsonCodec)
    assert isinstance(Serializer(SerializationMethod.YAML).codec, YamlCodec)


def test_register_rejects_non_codec():
    with pytest.raises(TypeError):
        Serializer.register(SerializationMethod.JSON, dict)  # type: ignore[arg-type]

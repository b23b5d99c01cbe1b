"""Tests for load errors and rollback when an automatic dump fails."""

import os

import pytest

from brinestore import (
    BrineStore,
    BrineStoreError,
    DumpPolicy,
    SerializationError,
    SerializationMethod,
    StoreIOError,
)


@pytest.fixture
def populated_json_db(json_db):
    json_db.set("num", 100)
    json_db.set("float", 1.1)
    json_db.set("string", "my string")
    json_db.set("vec", [1, 2, 3])
    json_db.list_create("list1").extend([1, 2, 3])
    return json_db


@pytest.fixture
def failing_replace(monkeypatch):
    def refuse(src, dst):
        raise PermissionError(13, "Permission denied", str(dst))

    monkeypatch.setattr(os, "replace", refuse)


# ── load ─────────────────────────────────────────────────────


@pytest.mark.parametrize("reader", [BrineStore.load_bin, BrineStore.load_cbor])
def test_load_with_wrong_format(populated_json_db, json_path, reader):
    with pytest.raises(SerializationError) as exc_info:
        reader(json_path, DumpPolicy.never())
    assert str(exc_info.value) == "Cannot deserialize DB"


def test_yaml_happens_to_read_json(populated_json_db, json_path):
    db = BrineStore.load_yaml(json_path, DumpPolicy.never())
    assert db.get("num", int) == 100
    assert db.list_length("list1") == 3


def test_load_missing_file(tmp_path):
    with pytest.raises(StoreIOError) as exc_info:
        BrineStore.load_bin(tmp_path / "doesnt_exist.db", DumpPolicy.never())
    assert isinstance(exc_info.value.os_error, FileNotFoundError)
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def test_load_garbage(tmp_path):
    path = tmp_path / "garbage.db"
    path.write_bytes(b"\x00\x01 definitely not a database")

    for method in SerializationMethod:
        with pytest.raises(SerializationError):
            BrineStore.load(path, DumpPolicy.never(), method)


def test_errors_share_base_class():
    assert issubclass(StoreIOError, BrineStoreError)
    assert issubclass(SerializationError, BrineStoreError)


# ── rollback ─────────────────────────────────────────────────


def test_dump_failure_rolls_back_every_mutator(populated_json_db, json_path, failing_replace):
    db = populated_json_db

    with pytest.raises(StoreIOError):
        db.set("num", 200)
    assert db.get("num", int) == 100

    with pytest.raises(StoreIOError):
        db.set("new", 1)
    assert not db.exists("new")

    with pytest.raises(StoreIOError):
        db.dump()

    with pytest.raises(StoreIOError):
        db.remove("num")
    assert db.get("num", int) == 100

    with pytest.raises(StoreIOError):
        db.remove("list1")
    assert db.list_length("list1") == 3

    with pytest.raises(StoreIOError):
        db.list_create("list2")
    assert not db.exists("list2")

    with pytest.raises(StoreIOError):
        db.list_append("list1", 100)
    assert db.list_length("list1") == 3

    with pytest.raises(StoreIOError):
        db.list_extend("list1", ["aa", "bb"])
    assert db.list_length("list1") == 3

    with pytest.raises(StoreIOError):
        db.list_delete("list1")
    assert db.exists("list1")

    with pytest.raises(StoreIOError):
        db.list_remove_at("list1", 0)
    assert [db.list_get("list1", i, int) for i in range(3)] == [1, 2, 3]

    with pytest.raises(StoreIOError):
        db.list_remove_value("list1", 2)
    assert [db.list_get("list1", i, int) for i in range(3)] == [1, 2, 3]


def test_rollback_restores_namespace_partition(populated_json_db, failing_replace):
    db = populated_json_db

    with pytest.raises(StoreIOError):
        db.set("list1", "scalar")
    assert db.list_length("list1") == 3
    assert db.get("list1") is None

    with pytest.raises(StoreIOError):
        db.list_create("num")
    assert db.get("num", int) == 100
    assert not db.list_exists("num")

    with pytest.raises(StoreIOError):
        db.list_create("list1")
    assert db.list_length("list1") == 3


def test_failed_dump_leaves_file_and_no_temp(populated_json_db, json_path, tmp_path, failing_replace):
    with pytest.raises(StoreIOError):
        populated_json_db.set("num", 200)

    assert BrineStore.load_read_only(json_path).get("num", int) == 100
    assert [p.name for p in tmp_path.iterdir()] == ["json_db.db"]


def test_unwritable_directory(tmp_path, method):
    db = BrineStore.new(tmp_path / "missing" / "db", DumpPolicy.auto(), method)

    with pytest.raises(StoreIOError):
        db.set("k", 1)

    assert not db.exists("k")
    assert db.total_keys() == 0


def test_periodic_failure_retries_on_next_mutation(tmp_path, clock, monkeypatch):
    path = tmp_path / "db"
    db = BrineStore.new(path, DumpPolicy.periodic(5), clock=clock)
    real_replace = os.replace

    def refuse(src, dst):
        raise PermissionError(13, "Permission denied", str(dst))

    clock.advance(5)
    monkeypatch.setattr(os, "replace", refuse)
    with pytest.raises(StoreIOError):
        db.set("a", 1)
    assert not db.exists("a")

    monkeypatch.setattr(os, "replace", real_replace)
    db.set("b", 2)

    assert BrineStore.load_read_only(path).get("b", int) == 2

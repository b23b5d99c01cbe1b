"""Tests for the store and list iteration views."""

import pytest

from brinestore import BrineStore, DumpPolicy, ListItem, ListNotFoundError, StoreItem


@pytest.fixture
def db(tmp_path, method):
    return BrineStore.new(tmp_path / "iter.db", DumpPolicy.never(), method)


def test_iterate_key_values(db):
    db.set("key1", 1)
    db.set("key2", 2)
    db.set("key3", "three")
    db.list_create("list1").extend([1, 2])

    items = {item.key: item for item in db.iter()}

    assert set(items) == {"key1", "key2", "key3"}
    assert all(isinstance(item, StoreItem) for item in items.values())
    assert items["key1"].get_value(int) == 1
    assert items["key2"].get_value() == 2
    assert items["key3"].get_value(int) is None
    assert items["key3"].get_value(str) == "three"


def test_iterate_empty_store(db):
    assert list(db.iter()) == []


def test_iterate_list_in_order(db):
    db.list_create("list1").extend([1, "two", [3]])

    items = list(db.list_iter("list1"))

    assert all(isinstance(item, ListItem) for item in items)
    assert [item.get_item() for item in items] == [1, "two", [3]]
    assert items[0].get_item(int) == 1
    assert items[1].get_item(int) is None


def test_iterate_empty_list(db):
    db.list_create("list1")
    assert list(db.list_iter("list1")) == []


def test_list_iter_on_missing_list_raises(db):
    db.set("scalar", 1)

    with pytest.raises(ListNotFoundError) as exc_info:
        db.list_iter("nope")
    assert exc_info.value.name == "nope"
    assert str(exc_info.value) == "List 'nope' doesn't exist"

    with pytest.raises(KeyError):
        db.list_iter("scalar")


def test_iterators_are_snapshots(db):
    db.set("a", 1)
    db.list_create("list1").extend([1, 2])

    store_iter = db.iter()
    list_iter = db.list_iter("list1")

    db.set("b", 2)
    db.remove("a")
    db.list_append("list1", 3)

    assert [item.key for item in store_iter] == ["a"]
    assert [item.get_item(int) for item in list_iter] == [1, 2]
    assert sorted(item.key for item in db.iter()) == ["b"]


def test_iterator_protocol(db):
    db.set("a", 1)
    iterator = db.iter()

    assert iter(iterator) is iterator
    assert next(iterator).key == "a"
    with pytest.raises(StopIteration):
        next(iterator)

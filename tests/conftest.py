"""Shared test fixtures."""

import pytest

from brinestore import BrineStore, DumpPolicy, SerializationMethod

ALL_METHODS = list(SerializationMethod)


class FakeClock:
    def __init__(self, start: float = 1000.0):
        self._now = start

    def now(self) -> float:
        return self._now

    def advance(self, seconds: float) -> None:
        self._now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(params=ALL_METHODS, ids=[m.value for m in ALL_METHODS])
def method(request):
    return request.param


@pytest.fixture
def db_path(tmp_path, method):
    return tmp_path / f"test.{method.value}.db"


@pytest.fixture
def auto_db(db_path, method):
    return BrineStore.new(db_path, DumpPolicy.auto(), method)


@pytest.fixture
def json_path(tmp_path):
    return tmp_path / "json_db.db"


@pytest.fixture
def json_db(json_path):
    return BrineStore.new_json(json_path, DumpPolicy.auto())

from dataclasses import dataclass

import pytest

from ekit.syncmap import SyncMap


@dataclass(eq=False)
class User:
    name: str = ""


@pytest.fixture
def loaded_map():
    found = User(name="found")
    empty = User()
    m = SyncMap()
    m.store("found", found)
    m.store("found but empty", empty)
    m.store("found but nil", None)
    return m, found, empty


def test_load_found(loaded_map):
    m, found, _ = loaded_map
    val, ok = m.load("found")
    assert ok is True
    assert val is found


def test_load_found_but_empty(loaded_map):
    m, _, empty = loaded_map
    val, ok = m.load("found but empty")
    assert ok is True
    assert val is empty


def test_load_found_but_nil(loaded_map):
    m, _, _ = loaded_map
    assert m.load("found but nil") == (None, True)


def test_load_not_found(loaded_map):
    m, _, _ = loaded_map
    assert m.load("not found") == (None, False)


def test_load_or_store_non_nil():
    m, user = SyncMap(), User(name="Tom")
    val, loaded = m.load_or_store(user.name, user)
    assert loaded is False
    assert val is user

    val, loaded = m.load_or_store("Tom", User(name="Tom-copy"))
    assert loaded is True
    assert val is user


def test_load_or_store_nil():
    m, user = SyncMap(), User(name="Jerry")
    assert m.load_or_store(user.name, None) == (None, False)
    assert m.load_or_store(user.name, user) == (None, True)


def test_load_or_store_func_non_nil():
    m, user = SyncMap(), User(name="Tom")
    val, loaded = m.load_or_store_func(user.name, lambda: user)
    assert loaded is False
    assert val is user

    val, loaded = m.load_or_store_func(user.name, lambda: User(name="Tom"))
    assert loaded is True
    assert val is user


def test_load_or_store_func_nil():
    m = SyncMap()
    assert m.load_or_store_func("Tom", lambda: None) == (None, False)
    assert m.load_or_store_func("Tom", lambda: None) == (None, True)


def test_load_or_store_func_not_called_when_present():
    m = SyncMap()
    m.store("Tom", 1)
    calls = []

    def factory():
        calls.append(1)
        return 2

    assert m.load_or_store_func("Tom", factory) == (1, True)
    assert calls == []


def test_load_or_store_func_error():
    m = SyncMap()

    def failing():
        raise RuntimeError("初始话失败")

    with pytest.raises(RuntimeError, match="初始话失败"):
        m.load_or_store_func("Jerry", failing)
    assert m.load("Jerry") == (None, False)


def test_load_and_delete_non_nil():
    m, user = SyncMap(), User(name="Jerry")
    m.store("Jerry", user)
    val, loaded = m.load_and_delete(user.name)
    assert loaded is True
    assert val is user
    assert m.load_and_delete(user.name) == (None, False)


def test_load_and_delete_nil():
    m = SyncMap()
    m.store("Tom", None)
    assert m.load_and_delete("Tom") == (None, True)
    assert m.load_and_delete("Tom") == (None, False)


def test_delete():
    m, user = SyncMap(), User(name="Tom")
    m.store(user.name, user)
    val, ok = m.load(user.name)
    assert ok is True
    assert val is user
    m.delete(user.name)
    assert m.load(user.name) == (None, False)


def test_range_string_keys():
    m, tom, jerry = SyncMap(), User(name="Tom"), User(name="Jerry")
    m.store(tom.name, tom)
    m.store(jerry.name, jerry)
    m.store("nil", None)
    shadow = {}

    def collect(key, val):
        shadow[key] = val
        return True

    m.range(collect)
    assert shadow["Tom"] is tom
    assert shadow["Jerry"] is jerry
    assert "nil" in shadow and shadow["nil"] is None
    assert len(shadow) == 3


def test_range_object_keys():
    m, tom = SyncMap(), User(name="Tom")
    m.store(tom, "Tom")
    m.store(None, "nil")
    shadow = {}

    def collect(key, val):
        shadow[key] = val
        return True

    m.range(collect)
    assert shadow[tom] == tom.name
    assert shadow[None] == "nil"


def test_range_stops_on_false():
    m = SyncMap()
    for i in range(5):
        m.store(i, i * 10)
    seen = []

    def first_only(key, val):
        seen.append((key, val))
        return False

    m.range(first_only)
    assert len(seen) == 1
    key, val = seen[0]
    assert val == key * 10
    assert m.load(key) == (val, True)


def test_range_sum():
    m = SyncMap()
    m.store("Tom", 18)
    m.store("Jerry", 35)
    total = []
    m.range(lambda k, v: total.append(v) or True)
    assert sum(total) == 53


def test_store_and_load_int():
    m = SyncMap()
    m.store("key1", 123)
    assert m.load("key1") == (123, True)
    m.delete("key1")
    assert m.load("key1") == (None, False)
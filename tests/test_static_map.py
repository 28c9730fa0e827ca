import copy

import pytest

from linearize import (
    I8,
    U32,
    LengthMismatchError,
    StaticCopyMap,
    StaticMap,
    StorageTooLargeError,
    constants,
)

from key_types import Color, Hollow, Pair, Shape


def _bool_map():
    return StaticMap.from_fn(bool, lambda key: 22 if key else 11)


def test_from_fn_calls_once_per_key_in_index_order():
    calls = []

    def record(key):
        calls.append(key)
        return len(calls)

    m = StaticMap.from_fn(Shape, record)
    assert calls == list(m.keys())
    assert len(calls) == 5
    assert m.to_list() == [1, 2, 3, 4, 5]


def test_lookup_and_assignment():
    m = _bool_map()
    assert m[False] == 11
    assert m[True] == 22
    m[True] = 33
    assert m.to_list() == [11, 33]
    assert len(m) == 2
    assert list(m) == [False, True]
    assert list(m.values()) == [11, 33]
    assert list(m.items()) == [(False, 11), (True, 33)]
    assert m.to_dict() == {False: 11, True: 33}


def test_keys_cannot_be_removed():
    m = _bool_map()
    with pytest.raises(TypeError):
        del m[True]


def test_from_list_borrows_backing_list():
    values = [0, 0, 0]
    m = StaticMap.from_list(Color, values)
    m[Color.GREEN] = 5
    assert values == [0, 5, 0]
    assert m.as_list() is values


def test_from_values_checks_length():
    m = StaticMap.from_values(Color, iter("abc"))
    assert m[Color.BLUE] == "c"
    with pytest.raises(LengthMismatchError) as excinfo:
        StaticMap.try_from(Color, [1, 2])
    assert excinfo.value.expected == 3
    assert excinfo.value.actual == 2
    assert isinstance(excinfo.value, ValueError)


def test_default_creates_fresh_values():
    m = StaticMap.default(Color, list)
    m[Color.RED].append(1)
    assert m.to_list() == [[1], [], []]


def test_filled_and_from_items():
    assert StaticMap.filled(bool, "x").to_list() == ["x", "x"]
    m = StaticMap.from_items(Color, [(Color.BLUE, 3), (Color.RED, 1), (Color.BLUE, 4)], int)
    assert m.to_list() == [1, 0, 4]


def test_map_and_map_values():
    m = _bool_map()
    labelled = m.map(lambda key, value: f"{key}:{value}")
    assert labelled.to_list() == ["False:11", "True:22"]
    assert m.map_values(lambda value: value + 1).to_list() == [12, 23]
    assert m.to_list() == [11, 22]


def test_clear_resets_to_type_defaults():
    m = StaticMap.from_values(Color, [3, "text", [1]])
    m.clear()
    assert m.to_list() == [0, "", []]
    m.clear(lambda: None)
    assert m.to_list() == [None, None, None]


def test_extend_overwrites_given_keys():
    m = _bool_map()
    m.extend([(True, 1)])
    assert m.to_list() == [11, 1]


def test_copies_are_independent():
    m = StaticMap.default(bool, list)
    shallow = m.copy()
    shallow[False] = ["replaced"]
    assert m[False] == []
    assert copy.copy(m) == m

    deep = copy.deepcopy(m)
    deep[True].append(1)
    assert m[True] == []


def test_iter_mut_writes_through():
    m = _bool_map()
    for entry in m.iter_mut():
        entry.value = entry.value * 2 if entry.key else -entry.value
    assert m.to_list() == [-11, 44]
    key, value = next(m.iter_mut())
    assert (key, value) == (False, -11)


def test_into_iter_is_a_snapshot():
    m = _bool_map()
    it = m.into_iter()
    m[False] = 0
    assert list(it) == [(False, 11), (True, 22)]


def test_iterators_are_double_ended():
    m = StaticMap.from_values(Color, [1, 2, 3])
    items = m.items()
    assert items.next_back() == (Color.BLUE, 3)
    assert len(items) == 2
    assert list(reversed(m)) == [Color.BLUE, Color.GREEN, Color.RED]


def test_equality_ordering_and_hash():
    a = StaticMap.from_values(bool, [1, 2])
    b = StaticMap.from_values(bool, [1, 3])
    assert a == StaticMap.from_values(bool, [1, 2])
    assert a != b
    assert a < b
    assert b >= a
    assert hash(a) == hash(StaticMap.from_values(bool, [1, 2]))
    assert {a: "seen"}[StaticMap.from_values(bool, [1, 2])] == "seen"
    assert a != StaticMap.from_values(Color, [1, 2, 3])
    with pytest.raises(TypeError):
        a < StaticMap.from_values(Color, [1, 2, 3])


def test_repr_lists_entries():
    assert repr(_bool_map()) == "StaticMap({False: 11, True: 22})"


def test_uninhabited_key_type_gives_empty_map():
    m = StaticMap.from_fn(Hollow, lambda key: pytest.fail("never called"))
    assert len(m) == 0
    assert list(m.items()) == []


def test_into_copy_and_as_copy():
    m = StaticMap.from_values(Color, [1, 2, 3])
    with pytest.raises(TypeError):
        m.as_copy()
    copied = m.into_copy("int16")
    assert isinstance(copied, StaticCopyMap)
    assert copied.dtype.name == "int16"
    assert copied == m
    view = copied.as_static_map()
    assert view.as_copy().as_array() is copied.as_array()


def test_storage_is_capped(monkeypatch):
    with pytest.raises(StorageTooLargeError):
        StaticMap.filled(U32, 0)
    monkeypatch.setattr(constants, "MAX_STORAGE_LENGTH", 4)
    with pytest.raises(StorageTooLargeError) as excinfo:
        StaticMap.filled(Pair, 0)
    assert excinfo.value.length == 6
    assert excinfo.value.limit == 4


def test_failed_clear_leaves_map_untouched():
    m = StaticMap.from_values(Color, [1, "text", range(3)])
    with pytest.raises(TypeError):
        m.clear()
    assert m.to_list() == [1, "text", range(3)]


def test_out_of_range_integer_keys_are_rejected():
    m = StaticMap.from_fn(I8, lambda key: key)
    with pytest.raises(ValueError):
        m[-129]
    with pytest.raises(ValueError):
        m[128] = 0
    assert m[-128] == -128

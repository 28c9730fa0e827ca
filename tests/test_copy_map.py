import copy

import numpy as np
import pytest

from linearize import LengthMismatchError, StaticCopyMap, StaticMap

from key_types import Color


def _bool_map():
    return StaticCopyMap.from_fn(bool, lambda key: 22 if key else 11, dtype=np.uint8)


def test_values_are_python_scalars():
    m = _bool_map()
    assert m[True] == 22
    assert type(m[True]) is int
    assert m.dtype == np.uint8
    assert m.to_list() == [11, 22]


def test_copy_is_a_flat_array_copy():
    m = _bool_map()
    twin = m.copy()
    twin[False] = 0
    assert m[False] == 11
    assert isinstance(copy.copy(m), StaticCopyMap)
    assert copy.deepcopy(m) == m


def test_as_array_shares_memory():
    m = _bool_map()
    m.as_array()[1] = 99
    assert m[True] == 99


def test_from_array_wraps_without_copy():
    array = np.arange(3, dtype=np.int32)
    m = StaticCopyMap.from_array(Color, array)
    m[Color.RED] = 7
    assert array[0] == 7
    with pytest.raises(LengthMismatchError):
        StaticCopyMap.from_array(Color, np.arange(4))


def test_object_arrays_are_rejected():
    with pytest.raises(TypeError):
        StaticCopyMap.from_array(Color, np.array([1, "a", None], dtype=object))


def test_bytes_round_trip():
    m = StaticCopyMap.from_values(Color, [1, 2, 3], dtype="<u2")
    data = m.tobytes()
    assert data == b"\x01\x00\x02\x00\x03\x00"
    restored = StaticCopyMap.from_bytes(Color, data, "<u2")
    assert restored == m
    with pytest.raises(ValueError):
        restored[Color.RED] = 5
    writable = StaticCopyMap.from_bytes(Color, bytearray(data), "<u2")
    writable[Color.RED] = 5
    assert writable.to_list() == [5, 2, 3]


def test_from_bytes_checks_byte_length():
    with pytest.raises(LengthMismatchError) as excinfo:
        StaticCopyMap.from_bytes(Color, b"\x00" * 5, "<u2")
    assert excinfo.value.expected == 6
    assert excinfo.value.actual == 5


def test_conversions_to_static_map():
    m = _bool_map()
    view = m.as_static_map()
    assert type(view) is StaticMap
    view[True] = 1
    assert m[True] == 1

    detached = m.into_static_map()
    detached[True] = 2
    assert m[True] == 1
    assert detached.as_list() == [11, 2]
    assert m.into_static_map() == m


def test_bulk_operations_stay_array_backed():
    m = StaticCopyMap.from_values(Color, [1, 2, 3])
    doubled = m.map_values(lambda value: value * 2)
    assert isinstance(doubled, StaticCopyMap)
    assert doubled.to_list() == [2, 4, 6]
    m.clear()
    assert m.to_list() == [0, 0, 0]
    assert StaticCopyMap.filled(bool, 1.5).to_list() == [1.5, 1.5]
    assert StaticCopyMap.zeros(Color, np.int8).to_list() == [0, 0, 0]


def test_from_list_to_array_backed_map():
    m = StaticMap.from_list(bool, [1, 2]).into_copy()
    assert isinstance(m, StaticCopyMap)
    assert m.as_copy() is not m
    assert m.as_copy().as_array() is m.as_array()

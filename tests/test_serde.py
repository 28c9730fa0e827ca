import json
from typing import Literal, Optional

import pytest

from linearize import (
    SKIP_NONE,
    USE_DEFAULT,
    MapDecodeError,
    MapShapeError,
    MissingKeyError,
    StaticCopyMap,
    StaticMap,
    UnknownKeyError,
    dumps,
    from_mapping,
    loads,
    to_mapping,
)

from key_types import Color, Pair


def _bool_map():
    return StaticMap.from_fn(bool, lambda key: 22 if key else 11)


def test_bool_map_serializes_as_json_object():
    m = _bool_map()
    assert to_mapping(m) == {"false": 11, "true": 22}
    assert json.loads(dumps(m)) == {"false": 11, "true": 22}
    assert from_mapping(bool, {"true": 22, "false": 11}) == m


def test_copy_map_uses_same_format():
    m = _bool_map().into_copy()
    assert to_mapping(m) == {"false": 11, "true": 22}
    restored = loads(bool, dumps(m), copy=True)
    assert isinstance(restored, StaticCopyMap)
    assert restored == m


def test_enum_keys_use_member_names_in_index_order():
    m = StaticMap.from_values(Color, [11, 22, 33])
    assert list(to_mapping(m)) == ["RED", "GREEN", "BLUE"]
    assert loads(Color, dumps(m)) == m


def test_composite_keys_use_compact_json():
    m = StaticMap.from_fn(Pair, lambda key: key.color.value)
    data = to_mapping(m)
    assert data['{"color":"GREEN","flag":true}'] == "g"
    assert from_mapping(Pair, data) == m


def test_missing_key_names_the_key():
    with pytest.raises(MissingKeyError) as excinfo:
        from_mapping(bool, {"false": 11})
    assert "Missing key true in static map" in str(excinfo.value)
    assert excinfo.value.key == "true"
    assert isinstance(excinfo.value, MapDecodeError)
    assert not isinstance(excinfo.value, MapShapeError)


def test_non_mapping_payload_is_a_shape_error():
    with pytest.raises(MapShapeError) as excinfo:
        loads(bool, "[11, 22]")
    assert "a map" in str(excinfo.value)


def test_unknown_keys_are_rejected():
    with pytest.raises(UnknownKeyError):
        from_mapping(bool, {"false": 1, "true": 2, "maybe": 3})
    with pytest.raises(UnknownKeyError):
        from_mapping(Color, {"PURPLE": 1})


def test_use_default_fills_missing_keys():
    m = from_mapping(bool, {"false": 11}, policy=USE_DEFAULT, default_factory=int)
    assert m[False] == 11
    assert m[True] == 0
    with pytest.raises(ValueError):
        from_mapping(bool, {}, policy=USE_DEFAULT)


def test_skip_none_omits_and_restores_none():
    m = StaticMap.from_values(bool, [11, None])
    data = to_mapping(m, policy=SKIP_NONE)
    assert data == {"false": 11}
    restored = from_mapping(bool, data, policy=SKIP_NONE)
    assert restored[False] == 11
    assert restored[True] is None


def test_value_codecs_are_applied():
    m = StaticMap.from_values(Color, [1, 2, 3])
    text = dumps(m, encode_value=str, sort_keys=True)
    assert json.loads(text) == {"BLUE": "3", "GREEN": "2", "RED": "1"}
    assert loads(Color, text, decode_value=int) == m


def test_string_and_json_keys_survive_a_round_trip():
    key_type = Literal["1", 1]
    m = StaticMap.from_fn(key_type, repr)
    data = to_mapping(m)
    assert data == {'"1"': "'1'", "1": "1"}
    assert from_mapping(key_type, data).to_list() == ["'1'", "1"]

    optional = StaticMap.from_values(Optional[Literal["null"]], ["none", "text"])
    assert to_mapping(optional) == {"null": "none", '"null"': "text"}

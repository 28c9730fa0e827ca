from typing import Annotated, Literal, Optional, Union

import pytest

from linearize import (
    BOOL,
    NEVER,
    NotLinearizableError,
    ProductLinearization,
    SumLinearization,
    U8,
    Variant,
    length_of,
    linearization_of,
    linearize,
    variants,
)

from key_types import Color, Hollow, Maybe, Pair, Reading, Shape


def test_record_uses_mixed_radix_with_first_field_most_significant():
    lin = linearization_of(Pair)
    assert lin.length == 6
    assert lin.strides == (3, 1)
    assert lin.linearize(Pair(False, Color.RED)) == 0
    assert lin.linearize(Pair(True, Color.GREEN)) == 4
    assert list(lin.variants())[:4] == [
        Pair(False, Color.RED),
        Pair(False, Color.GREEN),
        Pair(False, Color.BLUE),
        Pair(True, Color.RED),
    ]


def test_record_round_trips_every_index():
    lin = linearization_of(Reading)
    assert lin.length == 512
    for index in (0, 1, 255, 256, 511):
        assert lin.linearize(lin.delinearize_unchecked(index)) == index
    assert lin.linearize(Reading(True, 3)) == 259


def test_tuples_are_products():
    lin = linearization_of(tuple[bool, bool])
    assert lin.length == 4
    assert lin.linearize((True, False)) == 2
    assert list(lin.variants()) == [(False, False), (False, True), (True, False), (True, True)]

    empty = linearization_of(tuple[()])
    assert empty.length == 1
    assert list(empty.variants()) == [()]


def test_variable_length_tuples_are_rejected():
    with pytest.raises(NotLinearizableError):
        linearization_of(tuple[bool, ...])


def test_optional_puts_none_first():
    lin = linearization_of(Optional[bool])
    assert lin.length == 3
    assert [lin.linearize(value) for value in (None, False, True)] == [0, 1, 2]
    assert list(lin.variants()) == [None, False, True]
    assert lin.key_to_text(None) == "null"
    assert lin.key_from_text("null") is None
    assert lin.key_from_text("false") is False


def test_union_of_distinct_classes():
    lin = linearization_of(Union[bool, Color])
    assert lin.length == 5
    assert lin.linearize(True) == 1
    assert lin.linearize(Color.RED) == 2
    assert lin.delinearize_unchecked(4) is Color.BLUE


def test_union_members_need_distinct_runtime_classes():
    with pytest.raises(NotLinearizableError):
        linearization_of(Union[bool, Annotated[bool, BOOL]])


def test_derived_union_order_and_bases():
    lin = linearization_of(Shape)
    assert lin.length == 5
    assert lin.bases == (0, 1, 3)
    assert list(variants(Shape)) == [
        Shape.A(),
        Shape.B(False),
        Shape.B(True),
        Shape.C(a=False),
        Shape.C(a=True),
    ]
    for index, value in enumerate(variants(Shape)):
        assert lin.linearize(value) == index
    assert lin.variant_range(1) == range(1, 3)
    assert lin.variant_position(Shape.C(a=True)) == 2


def test_union_key_text():
    lin = linearization_of(Shape)
    assert lin.key_to_text(Shape.A()) == "A"
    assert lin.key_to_text(Shape.C(a=True)) == '{"C":{"a":true}}'
    assert lin.key_from_text('{"B":{"value":false}}') == Shape.B(False)
    assert lin.key_from_text("A") == Shape.A()


def test_record_key_text():
    lin = linearization_of(Pair)
    text = lin.key_to_text(Pair(True, Color.GREEN))
    assert text == '{"color":"GREEN","flag":true}'
    assert lin.key_from_text(text) == Pair(True, Color.GREEN)


def test_uninhabited_field_makes_record_uninhabited():
    assert length_of(Hollow) == 0
    assert list(variants(Hollow)) == []


def test_uninhabited_variant_owns_empty_range():
    lin = linearization_of(Maybe)
    assert lin.length == 1
    assert lin.bases == (0, 0)
    assert list(lin.variants()) == [Maybe.Nothing()]
    assert linearize(Maybe, Maybe.Nothing()) == 0


def test_manual_sum_of_products():
    flags = ProductLinearization(
        "flags",
        [("a", BOOL), ("b", BOOL)],
        tuple,
        tuple,
    )
    lin = SumLinearization(
        "choice",
        [Variant("small", U8), Variant("flags", flags)],
        lambda value: 1 if isinstance(value, tuple) else 0,
    )
    assert lin.length == 260
    assert lin.linearize(255) == 255
    assert lin.linearize((True, True)) == 259
    assert lin.delinearize_unchecked(257) == (False, True)
    assert lin.describe()["variants"][1]["base"] == 256


def test_enumeration_matches_nested_loops():
    expected = [Pair(flag, color) for flag in (False, True) for color in Color]
    enumerated = list(variants(Pair))
    assert enumerated == expected
    assert len(set(enumerated)) == length_of(Pair)


def test_uninhabited_field_position_does_not_matter():
    for fields in ([("never", NEVER), ("flag", BOOL)], [("flag", BOOL), ("never", NEVER)]):
        lin = ProductLinearization("hollow", fields, tuple, tuple)
        assert lin.length == 0
        assert list(lin.variants()) == []


def test_none_comes_first_in_wider_optional_unions():
    for tp in (Optional[Union[bool, Color]], bool | Color | None, Union[None, bool, Color]):
        lin = linearization_of(tp)
        assert lin.length == 6
        assert lin.linearize(None) == 0
        assert lin.linearize(False) == 1
        assert lin.linearize(Color.BLUE) == 5
        assert list(lin.variants())[:2] == [None, False]


def test_optional_string_keys_do_not_collide_with_null():
    lin = linearization_of(Optional[Literal["null"]])
    assert [lin.key_to_text(value) for value in lin.variants()] == ["null", '"null"']
    assert lin.key_from_text('"null"') == "null"
    assert lin.key_from_text("null") is None

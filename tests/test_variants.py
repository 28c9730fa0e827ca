import pytest

from linearize import U8, Variants, variants

from key_types import Color


def test_exact_size_shrinks_from_both_ends():
    it = variants(Color)
    assert len(it) == 3
    assert next(it) is Color.RED
    assert len(it) == 2
    assert it.next_back() is Color.BLUE
    assert len(it) == 1
    assert next(it) is Color.GREEN
    assert len(it) == 0
    with pytest.raises(StopIteration):
        next(it)
    with pytest.raises(StopIteration):
        it.next_back()
    assert it.next_back(None) is None


def test_front_and_back_never_cross():
    it = Variants(U8)
    seen = []
    while True:
        front = next(it, None)
        if front is None:
            break
        seen.append(front)
        back = it.next_back(None)
        if back is None:
            break
        seen.append(back)
    assert sorted(seen) == list(range(256))


def test_nth_skips_and_saturates():
    it = Variants(U8)
    assert it.nth(10) == 10
    assert it.nth_back(5) == 250
    assert len(it) == 250 - 11
    assert it.nth(1000, "done") == "done"
    assert len(it) == 0
    with pytest.raises(ValueError):
        Variants(U8).nth(-1)


def test_count_and_last_consume():
    it = Variants(U8)
    next(it)
    assert it.count() == 255
    assert len(it) == 0

    it = Variants(U8)
    assert it.last() == 255
    assert it.last(None) is None


def test_clone_is_independent():
    it = variants(bool)
    twin = it.clone()
    assert next(it) is False
    assert list(twin) == [False, True]
    assert list(it) == [True]


def test_reversed_walks_from_the_back():
    assert list(reversed(variants(Color))) == [Color.BLUE, Color.GREEN, Color.RED]
    it = Variants(U8)
    next(it)
    assert next(reversed(it)) == 255

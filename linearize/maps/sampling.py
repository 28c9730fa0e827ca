"""Fill static maps with random values drawn from numpy generators."""

from __future__ import annotations

from typing import Any, Callable

import numpy as np

from .. import constants
from ..bijection.resolve import linearization_of
from .copy_map import StaticCopyMap
from .static_map import StaticMap
from .storage import check_storage_length


def sample_map(key_type, distribution: Callable[[np.random.Generator], Any], rng=None) -> StaticMap:
    """Draw one value per key, in ascending index order.

    ``rng`` is anything ``numpy.random.default_rng`` accepts: ``None``, a
    seed, or an existing ``Generator``.
    """

    rng = np.random.default_rng(rng)
    return StaticMap.from_fn(key_type, lambda _key: distribution(rng))


def sample_copy_map(
    key_type, sampler: Callable[[np.random.Generator, int], Any], rng=None
) -> StaticCopyMap:
    """Draw every value in one vectorized call ``sampler(rng, length)``.

    >>> sample_copy_map(bool, lambda rng, size: rng.integers(0, 10, size), rng=0).length
    2
    """

    rng = np.random.default_rng(rng)
    lin = linearization_of(key_type)
    check_storage_length(lin.length)
    return StaticCopyMap.from_array(lin, np.asarray(sampler(rng, lin.length)))


def size_hint(key_type, element_hint: tuple[int, int | None]) -> tuple[int, int | None]:
    """Scale a per-value ``(lower, upper)`` size hint to a whole map.

    The lower bound saturates at ``USIZE_MAX``; an upper bound that would
    exceed it becomes ``None`` (unbounded).
    """

    length = linearization_of(key_type).length
    lo, hi = element_hint
    lo = min(lo * length, constants.USIZE_MAX)
    if hi is not None:
        hi = hi * length
        if hi > constants.USIZE_MAX:
            hi = None
    return lo, hi


__all__ = [
    "sample_copy_map",
    "sample_map",
    "size_hint",
]

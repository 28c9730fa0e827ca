"""Static maps whose values are plain-old-data stored in a numpy array."""

from __future__ import annotations

from typing import Any, Callable, Iterable

import numpy as np

from ..bijection.resolve import linearization_of
from .static_map import StaticMap
from .storage import ArrayStorage, ListStorage


class StaticCopyMap(StaticMap):
    """A :class:`StaticMap` backed by a one-dimensional numpy array.

    Copying is a flat copy of the array, and the map can be reinterpreted
    as raw bytes (and rebuilt from them) without touching individual
    values. Values read back are Python scalars.
    """

    def __init__(self, key_type, storage):
        if not isinstance(storage, ArrayStorage):
            raise TypeError(
                f"StaticCopyMap requires array storage, got {type(storage).__name__}"
            )
        super().__init__(key_type, storage)

    @classmethod
    def from_fn(cls, key_type, cb: Callable[[Any], Any], dtype=None) -> "StaticCopyMap":
        lin = linearization_of(key_type)
        storage = ArrayStorage.from_fn(
            lin.length, lambda index: cb(lin.delinearize_unchecked(index)), dtype
        )
        return cls(lin, storage)

    @classmethod
    def from_list(cls, key_type, values: list, dtype=None) -> "StaticCopyMap":
        return cls.from_values(key_type, values, dtype)

    @classmethod
    def from_values(cls, key_type, values: Iterable, dtype=None) -> "StaticCopyMap":
        lin = linearization_of(key_type)
        return cls(lin, ArrayStorage.from_values(list(values), lin.length, dtype))

    try_from = from_values

    @classmethod
    def filled(cls, key_type, value: Any, dtype=None) -> "StaticCopyMap":
        lin = linearization_of(key_type)
        storage = ArrayStorage.zeros(lin.length, dtype or np.asarray(value).dtype)
        storage.fill(value)
        return cls(lin, storage)

    @classmethod
    def zeros(cls, key_type, dtype=np.int64) -> "StaticCopyMap":
        lin = linearization_of(key_type)
        return cls(lin, ArrayStorage.zeros(lin.length, dtype))

    @classmethod
    def from_array(cls, key_type, array: np.ndarray) -> "StaticCopyMap":
        """Wrap ``array`` without copying; writes are shared both ways."""

        lin = linearization_of(key_type)
        return cls(lin, ArrayStorage.wrap(array, lin.length))

    @classmethod
    def from_bytes(cls, key_type, data, dtype) -> "StaticCopyMap":
        """Reinterpret ``data`` as one ``dtype`` value per key.

        The map is read-only when ``data`` is an immutable ``bytes`` object.
        """

        lin = linearization_of(key_type)
        return cls(lin, ArrayStorage.from_buffer(data, lin.length, dtype))

    @property
    def dtype(self) -> np.dtype:
        return self._storage.dtype

    def as_array(self) -> np.ndarray:
        return self._storage.array

    def tobytes(self) -> bytes:
        return self._storage.tobytes()

    def _derived(self, cb: Callable[[int], Any]) -> "StaticCopyMap":
        return StaticCopyMap(self._linearization, ArrayStorage.from_fn(self.length, cb))

    def clear(self, default_factory: Callable[[], Any] | None = None) -> None:
        if default_factory is None:
            self._storage.zero()
        else:
            super().clear(default_factory)

    def as_static_map(self) -> StaticMap:
        """A general :class:`StaticMap` view over the same array."""

        return StaticMap(self._linearization, self._storage)

    def into_static_map(self) -> StaticMap:
        """A list-backed :class:`StaticMap` holding copies of the values."""

        return StaticMap(self._linearization, ListStorage(self._storage.to_list()))


__all__ = ["StaticCopyMap"]

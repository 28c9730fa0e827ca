"""Fixed-size backing arrays for static maps.

A map owns exactly one storage object holding one value per index of its
key type. ``ListStorage`` holds arbitrary Python objects; ``ArrayStorage``
holds a one-dimensional numpy array with a plain-old-data dtype and is
what makes a map trivially copyable and castable to and from raw bytes.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Callable

import numpy as np

from .. import constants
from ..errors import LengthMismatchError, StorageTooLargeError

log = logging.getLogger(__name__)

_LARGE_ALLOCATION = 1 << 16


def check_storage_length(length: int) -> int:
    """Refuse lengths above ``constants.MAX_STORAGE_LENGTH``."""

    limit = constants.MAX_STORAGE_LENGTH
    if length > limit:
        raise StorageTooLargeError(length, limit)
    if length >= _LARGE_ALLOCATION:
        log.debug("allocating storage with %d slots", length)
    return length


class ListStorage:
    """A Python list of exactly ``length`` values."""

    kind = "list"

    def __init__(self, values: list):
        self.values = values

    @classmethod
    def from_fn(cls, length: int, cb: Callable[[int], Any]) -> "ListStorage":
        check_storage_length(length)
        return cls([cb(index) for index in range(length)])

    @classmethod
    def filled(cls, length: int, value: Any) -> "ListStorage":
        check_storage_length(length)
        return cls([value] * length)

    @classmethod
    def wrap(cls, values: list, length: int) -> "ListStorage":
        """Adopt ``values`` without copying it."""

        if len(values) != length:
            raise LengthMismatchError(length, len(values))
        return cls(values)

    @property
    def length(self) -> int:
        return len(self.values)

    def __len__(self) -> int:
        return len(self.values)

    def __getitem__(self, index: int) -> Any:
        return self.values[index]

    def __setitem__(self, index: int, value: Any) -> None:
        self.values[index] = value

    def copy(self) -> "ListStorage":
        return ListStorage(list(self.values))

    def deepcopy(self, memo) -> "ListStorage":
        return ListStorage(copy.deepcopy(self.values, memo))

    def to_list(self) -> list:
        return list(self.values)

    def snapshot(self) -> tuple:
        return tuple(self.values)

    def fill(self, value: Any) -> None:
        self.values[:] = [value] * len(self.values)


class ArrayStorage:
    """A one-dimensional numpy array with a plain-old-data dtype.

    Items are returned as Python scalars (``ndarray.item``).
    """

    kind = "array"

    def __init__(self, array: np.ndarray):
        if array.ndim != 1:
            raise ValueError(f"storage must be one-dimensional, got shape {array.shape}")
        if array.dtype.hasobject:
            raise TypeError("array storage requires a plain-old-data dtype, got object")
        self.array = array

    @classmethod
    def from_fn(cls, length: int, cb: Callable[[int], Any], dtype=None) -> "ArrayStorage":
        check_storage_length(length)
        return cls(np.array([cb(index) for index in range(length)], dtype=dtype))

    @classmethod
    def from_values(cls, values, length: int, dtype=None) -> "ArrayStorage":
        """Copy ``values`` into a new array of exactly ``length`` items."""

        array = np.array(values, dtype=dtype)
        if array.ndim != 1 or array.shape[0] != length:
            raise LengthMismatchError(length, array.shape[0] if array.ndim else 0)
        return cls(array)

    @classmethod
    def wrap(cls, array: np.ndarray, length: int) -> "ArrayStorage":
        """Adopt ``array`` without copying it."""

        if array.ndim != 1 or array.shape[0] != length:
            raise LengthMismatchError(length, array.size)
        return cls(array)

    @classmethod
    def zeros(cls, length: int, dtype) -> "ArrayStorage":
        check_storage_length(length)
        return cls(np.zeros(length, dtype=dtype))

    @classmethod
    def from_buffer(cls, data, length: int, dtype) -> "ArrayStorage":
        """Reinterpret a bytes-like object as ``length`` items without copying.

        The resulting storage is read-only when ``data`` is immutable.
        """

        dtype = np.dtype(dtype)
        nbytes = memoryview(data).nbytes
        if nbytes != length * dtype.itemsize:
            raise LengthMismatchError(length * dtype.itemsize, nbytes)
        if length == 0:
            return cls(np.zeros(0, dtype=dtype))
        return cls(np.frombuffer(data, dtype=dtype, count=length))

    @property
    def length(self) -> int:
        return self.array.shape[0]

    @property
    def dtype(self) -> np.dtype:
        return self.array.dtype

    def __len__(self) -> int:
        return self.array.shape[0]

    def __getitem__(self, index: int) -> Any:
        return self.array[index].item()

    def __setitem__(self, index: int, value: Any) -> None:
        self.array[index] = value

    def copy(self) -> "ArrayStorage":
        return ArrayStorage(self.array.copy())

    def deepcopy(self, memo) -> "ArrayStorage":
        return self.copy()

    def to_list(self) -> list:
        return self.array.tolist()

    def snapshot(self) -> tuple:
        return tuple(self.array.tolist())

    def fill(self, value: Any) -> None:
        self.array[:] = value

    def zero(self) -> None:
        self.array[:] = np.zeros_like(self.array)

    def tobytes(self) -> bytes:
        return self.array.tobytes()


__all__ = [
    "ArrayStorage",
    "ListStorage",
    "check_storage_length",
]

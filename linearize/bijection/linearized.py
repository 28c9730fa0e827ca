"""Pre-computed output of ``Linearization.linearize``."""

from __future__ import annotations

from typing import Any


class Linearized:
    """A cached index that is known to be in range for its linearization.

    Maps are indexed by recomputing the bijection on every access. When the
    same key is used several times, wrap it once and index with the wrapper.

    Equality, ordering and hashing only look at the index, and the
    representation does not show the original value.
    """

    __slots__ = ("_index", "_linearization")

    def __init__(self, linearization, value: Any):
        self._linearization = linearization
        self._index = linearization.linearize(value)

    @classmethod
    def from_index_unchecked(cls, linearization, index: int) -> "Linearized":
        """Wrap an index that the caller guarantees is below ``length``."""

        assert 0 <= index < linearization.length, (
            f"index {index} out of range for {linearization.name}"
        )
        obj = cls.__new__(cls)
        obj._linearization = linearization
        obj._index = index
        return obj

    @property
    def index(self) -> int:
        return self._index

    @property
    def linearization(self):
        return self._linearization

    def get(self) -> int:
        return self._index

    def delinearize(self) -> Any:
        """Return a value equal to the one this index was computed from."""

        return self._linearization.delinearize_unchecked(self._index)

    def __index__(self) -> int:
        return self._index

    def __int__(self) -> int:
        return self._index

    def __setattr__(self, name, value):
        if hasattr(self, "_index"):
            raise AttributeError("Linearized is immutable")
        object.__setattr__(self, name, value)

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self

    def __reduce__(self):
        return (Linearized.from_index_unchecked, (self._linearization, self._index))

    def __repr__(self) -> str:
        return f"Linearized({self._index})"

    def __hash__(self) -> int:
        return hash(self._index)

    @staticmethod
    def _other_index(other):
        if isinstance(other, Linearized):
            return other._index
        if isinstance(other, int) and not isinstance(other, bool):
            return other
        return None

    def __eq__(self, other):
        index = self._other_index(other)
        if index is None:
            return NotImplemented
        return self._index == index

    def __lt__(self, other):
        index = self._other_index(other)
        if index is None:
            return NotImplemented
        return self._index < index

    def __le__(self, other):
        index = self._other_index(other)
        if index is None:
            return NotImplemented
        return self._index <= index

    def __gt__(self, other):
        index = self._other_index(other)
        if index is None:
            return NotImplemented
        return self._index > index

    def __ge__(self, other):
        index = self._other_index(other)
        if index is None:
            return NotImplemented
        return self._index >= index


__all__ = ["Linearized"]

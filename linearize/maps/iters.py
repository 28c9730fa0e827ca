"""Iterators over the entries of a static map."""

from __future__ import annotations

from typing import Any

from ..bijection.variants import IndexCursor


class Iter(IndexCursor):
    """``(key, value)`` pairs in ascending index order."""

    def __init__(self, linearization, storage):
        super().__init__(0, linearization.length)
        self.linearization = linearization
        self.storage = storage

    def _item(self, index):
        return self.linearization.delinearize_unchecked(index), self.storage[index]


class Values(IndexCursor):
    """Stored values in ascending index order."""

    def __init__(self, storage):
        super().__init__(0, len(storage))
        self.storage = storage

    def _item(self, index):
        return self.storage[index]


class Entry:
    """A writable view of a single slot produced by :class:`IterMut`."""

    __slots__ = ("key", "index", "_storage")

    def __init__(self, key: Any, index: int, storage):
        self.key = key
        self.index = index
        self._storage = storage

    @property
    def value(self) -> Any:
        return self._storage[self.index]

    @value.setter
    def value(self, new_value: Any) -> None:
        self._storage[self.index] = new_value

    def __iter__(self):
        yield self.key
        yield self.value

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"Entry({self.key!r}: {self.value!r})"


class IterMut(Iter):
    """``Entry`` objects; assigning ``entry.value`` writes into the map.

    Every slot is handed out at most once, from whichever end is consumed.
    """

    def _item(self, index):
        return Entry(self.linearization.delinearize_unchecked(index), index, self.storage)


class IntoIter(IndexCursor):
    """``(key, value)`` pairs over a snapshot detached from the map."""

    def __init__(self, linearization, storage):
        self.values = storage.snapshot()
        super().__init__(0, len(self.values))
        self.linearization = linearization

    def _item(self, index):
        return self.linearization.delinearize_unchecked(index), self.values[index]


__all__ = [
    "Entry",
    "IntoIter",
    "Iter",
    "IterMut",
    "Values",
]

"""Double-ended, exact-sized enumerators over index ranges."""

from __future__ import annotations

import copy
from typing import Any

_EXHAUSTED = object()


class IndexCursor:
    """Half-open cursor ``[front, back)`` over the indices of a linearization.

    ``__next__`` advances ``front`` and :meth:`next_back` retracts ``back``.
    Once both meet the cursor stays exhausted. Subclasses turn an index into
    an item by overriding :meth:`_item`.
    """

    def __init__(self, front: int, back: int):
        self._front = front
        self._back = back

    def _item(self, index: int) -> Any:
        raise NotImplementedError

    def __iter__(self):
        return self

    def __len__(self) -> int:
        return self._back - self._front

    def __next__(self):
        if self._front >= self._back:
            raise StopIteration
        index = self._front
        self._front += 1
        return self._item(index)

    def next_back(self, default=_EXHAUSTED):
        """Consume an item from the back end."""

        if self._front >= self._back:
            if default is _EXHAUSTED:
                raise StopIteration
            return default
        self._back -= 1
        return self._item(self._back)

    def nth(self, n: int, default=_EXHAUSTED):
        """Skip ``n`` items from the front and return the next one."""

        if n < 0:
            raise ValueError("nth() requires a non-negative offset")
        self._front = min(self._front + n, self._back)
        if default is _EXHAUSTED:
            return next(self)
        return next(self, default)

    def nth_back(self, n: int, default=_EXHAUSTED):
        """Skip ``n`` items from the back and return the one before them."""

        if n < 0:
            raise ValueError("nth_back() requires a non-negative offset")
        self._back = max(self._back - n, self._front)
        return self.next_back(default)

    def count(self) -> int:
        remaining = len(self)
        self._front = self._back
        return remaining

    def last(self, default=_EXHAUSTED):
        if self._front >= self._back:
            if default is _EXHAUSTED:
                raise StopIteration
            return default
        item = self._item(self._back - 1)
        self._front = self._back
        return item

    def clone(self):
        """Duplicate the remaining range; history is not carried over."""

        return copy.copy(self)

    def __reversed__(self):
        while self._front < self._back:
            yield self.next_back()

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"<{type(self).__name__} [{self._front}, {self._back})>"


class Variants(IndexCursor):
    """Every value of a linearizable type, in ascending index order."""

    def __init__(self, linearization):
        super().__init__(0, linearization.length)
        self.linearization = linearization

    def _item(self, index):
        return self.linearization.delinearize_unchecked(index)


__all__ = [
    "IndexCursor",
    "Variants",
]

"""Total maps from a linearizable key type to values, backed by one array.

A :class:`StaticMap` holds exactly one value for every value of its key
type. Lookups linearize the key and index the backing storage; there is no
hashing and no notion of a missing key.

>>> m = StaticMap.from_fn(bool, lambda key: 22 if key else 11)
>>> m[False], m[True]
(11, 22)
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

from ..bijection.linearized import Linearized
from ..bijection.resolve import linearization_of
from ..bijection.variants import Variants
from ..errors import LengthMismatchError
from .iters import IntoIter, Iter, IterMut, Values
from .storage import ArrayStorage, ListStorage


class StaticMap:
    """An array-backed map with one slot per value of ``key_type``.

    Build instances with the classmethod constructors. Iterating over a map
    yields its keys in ascending index order, like a ``dict``.
    """

    def __init__(self, key_type, storage):
        lin = linearization_of(key_type)
        if storage.length != lin.length:
            raise LengthMismatchError(lin.length, storage.length)
        self._linearization = lin
        self._storage = storage

    # ------------------------------------------------------------------
    # construction

    @classmethod
    def from_fn(cls, key_type, cb: Callable[[Any], Any]) -> "StaticMap":
        """Call ``cb`` once per key, in index order, to fill the map."""

        lin = linearization_of(key_type)
        storage = ListStorage.from_fn(
            lin.length, lambda index: cb(lin.delinearize_unchecked(index))
        )
        return cls(lin, storage)

    @classmethod
    def from_list(cls, key_type, values: list) -> "StaticMap":
        """Adopt ``values`` as the backing list; later writes are shared."""

        lin = linearization_of(key_type)
        return cls(lin, ListStorage.wrap(values, lin.length))

    @classmethod
    def from_values(cls, key_type, values: Iterable) -> "StaticMap":
        lin = linearization_of(key_type)
        return cls(lin, ListStorage.wrap(list(values), lin.length))

    try_from = from_values

    @classmethod
    def filled(cls, key_type, value: Any) -> "StaticMap":
        lin = linearization_of(key_type)
        return cls(lin, ListStorage.filled(lin.length, value))

    @classmethod
    def default(cls, key_type, value_type: Callable[[], Any]) -> "StaticMap":
        """Fill every slot with a fresh ``value_type()``."""

        return cls.from_fn(key_type, lambda _key: value_type())

    @classmethod
    def from_items(cls, key_type, pairs, default_factory: Callable[[], Any]) -> "StaticMap":
        """Build a map from ``(key, value)`` pairs.

        Later pairs overwrite earlier ones; keys that never appear hold
        ``default_factory()``.
        """

        from .builder import MapBuilder

        builder = MapBuilder(key_type, map_class=cls)
        seen = [False] * builder.length()
        for key, value in pairs:
            index = builder.linearization.linearize(key)
            builder.unchecked_set(index, value)
            seen[index] = True
        for index, present in enumerate(seen):
            if not present:
                builder.unchecked_set(index, default_factory())
        return builder.finish()

    # ------------------------------------------------------------------
    # introspection

    @property
    def linearization(self):
        return self._linearization

    @property
    def storage(self):
        return self._storage

    @property
    def length(self) -> int:
        return self._linearization.length

    def __len__(self) -> int:
        return self._linearization.length

    def linearized(self, key: Any) -> Linearized:
        """Linearize ``key`` once so repeated lookups skip the computation."""

        return self._linearization.linearized(key)

    def _index(self, key: Any) -> int:
        if isinstance(key, Linearized):
            if key.linearization is not self._linearization:
                raise TypeError(
                    f"index of {key.linearization.name} used with a map keyed by "
                    f"{self._linearization.name}"
                )
            return key.index
        return self._linearization.linearize(key)

    # ------------------------------------------------------------------
    # element access

    def __getitem__(self, key: Any) -> Any:
        return self._storage[self._index(key)]

    def __setitem__(self, key: Any, value: Any) -> None:
        self._storage[self._index(key)] = value

    def __delitem__(self, key: Any) -> None:
        raise TypeError(f"{type(self).__name__} is total; keys cannot be removed")

    def __iter__(self):
        return Variants(self._linearization)

    def __reversed__(self):
        return reversed(Variants(self._linearization))

    def keys(self) -> Variants:
        return Variants(self._linearization)

    def values(self) -> Values:
        return Values(self._storage)

    def items(self) -> Iter:
        return Iter(self._linearization, self._storage)

    def iter_mut(self) -> IterMut:
        return IterMut(self._linearization, self._storage)

    def into_iter(self) -> IntoIter:
        """Iterate over a snapshot; writes to the map afterwards are not seen."""

        return IntoIter(self._linearization, self._storage)

    def to_dict(self) -> dict:
        return dict(self.items())

    # ------------------------------------------------------------------
    # bulk operations

    def _derived(self, cb: Callable[[int], Any]) -> "StaticMap":
        return StaticMap(self._linearization, ListStorage.from_fn(self.length, cb))

    def map(self, fn: Callable[[Any, Any], Any]) -> "StaticMap":
        """Return a new map holding ``fn(key, value)`` for every entry."""

        lin = self._linearization
        storage = self._storage
        return self._derived(lambda index: fn(lin.delinearize_unchecked(index), storage[index]))

    def map_values(self, fn: Callable[[Any], Any]) -> "StaticMap":
        storage = self._storage
        return self._derived(lambda index: fn(storage[index]))

    def clear(self, default_factory: Callable[[], Any] | None = None) -> None:
        """Reset every slot to a default value.

        Without ``default_factory`` each slot is reset to ``type(value)()``.
        Every default is built before any slot is written, so a failing
        factory leaves the map untouched.
        """

        storage = self._storage
        defaults = [
            (default_factory or type(storage[index]))() for index in range(len(storage))
        ]
        for index, value in enumerate(defaults):
            storage[index] = value

    def extend(self, pairs) -> None:
        for key, value in pairs:
            self[key] = value

    def copy(self) -> "StaticMap":
        return type(self)(self._linearization, self._storage.copy())

    __copy__ = copy

    def __deepcopy__(self, memo) -> "StaticMap":
        return type(self)(self._linearization, self._storage.deepcopy(memo))

    def to_list(self) -> list:
        return self._storage.to_list()

    def as_list(self) -> list:
        """Return the backing list itself (no copy)."""

        if not isinstance(self._storage, ListStorage):
            raise TypeError(f"{type(self).__name__} is not backed by a list")
        return self._storage.values

    def into_copy(self, dtype=None):
        """Return a :class:`StaticCopyMap` holding the same values.

        A map that is already array-backed shares its array with the result.
        """

        from .copy_map import StaticCopyMap

        if isinstance(self._storage, ArrayStorage) and (
            dtype is None or self._storage.dtype == dtype
        ):
            return StaticCopyMap(self._linearization, self._storage)
        storage = ArrayStorage.from_values(self._storage.to_list(), self.length, dtype)
        return StaticCopyMap(self._linearization, storage)

    def as_copy(self):
        """Return a :class:`StaticCopyMap` view sharing this map's array."""

        from .copy_map import StaticCopyMap

        if not isinstance(self._storage, ArrayStorage):
            raise TypeError(
                "map values are not stored as plain-old-data; use into_copy() instead"
            )
        return StaticCopyMap(self._linearization, self._storage)

    # ------------------------------------------------------------------
    # comparison

    def _comparable(self, other) -> bool:
        return isinstance(other, StaticMap) and other._linearization is self._linearization

    def __eq__(self, other):
        if not isinstance(other, StaticMap):
            return NotImplemented
        return self._comparable(other) and self.to_list() == other.to_list()

    def __lt__(self, other):
        if not self._comparable(other):
            return NotImplemented
        return self.to_list() < other.to_list()

    def __le__(self, other):
        if not self._comparable(other):
            return NotImplemented
        return self.to_list() <= other.to_list()

    def __gt__(self, other):
        if not self._comparable(other):
            return NotImplemented
        return self.to_list() > other.to_list()

    def __ge__(self, other):
        if not self._comparable(other):
            return NotImplemented
        return self.to_list() >= other.to_list()

    def __hash__(self) -> int:
        return hash((self._linearization.name, self._storage.snapshot()))

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        body = ", ".join(f"{key!r}: {value!r}" for key, value in self.items())
        return f"{type(self).__name__}({{{body}}})"


__all__ = ["StaticMap"]

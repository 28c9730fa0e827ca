"""Slot-by-slot construction of a static map."""

from __future__ import annotations

from typing import Any

from ..bijection.resolve import linearization_of
from .static_map import StaticMap
from .storage import check_storage_length

_UNSET = object()


class MapBuilder:
    """Collect one value per index, then :meth:`finish` into a map.

    Slots may be written in any order and more than once. Finishing while a
    slot is still unset is a caller error, caught by an assertion.
    """

    def __init__(self, key_type, map_class=StaticMap):
        self.linearization = linearization_of(key_type)
        self.map_class = map_class
        self._slots = [_UNSET] * check_storage_length(self.linearization.length)

    def length(self) -> int:
        return self.linearization.length

    def key(self, index: int) -> Any:
        """Return the key stored at ``index``; requires ``index < length()``."""

        return self.linearization.delinearize_unchecked(index)

    def unchecked_set(self, index: int, value: Any) -> None:
        assert 0 <= index < len(self._slots), f"slot {index} out of range"
        self._slots[index] = value

    def is_set(self, index: int) -> bool:
        return self._slots[index] is not _UNSET

    def finish(self) -> StaticMap:
        assert all(slot is not _UNSET for slot in self._slots), (
            "every slot must be set before finishing the map"
        )
        return self.map_class.from_values(self.linearization, self._slots)


__all__ = ["MapBuilder"]

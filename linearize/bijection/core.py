"""Core bijection protocol shared by every linearizable type."""

from __future__ import annotations

import json
from typing import Any

from ..errors import UnknownKeyError
from .linearized import Linearized
from .variants import Variants


def canonical_text(data: Any) -> str:
    """Render the structured form of a key as the text used for mapping keys.

    Strings are kept bare unless they would read back as other JSON data
    (``"1"``, ``"null"``), in which case they are quoted. ``parse_text``
    inverts this, so distinct data never share a text.
    """

    if isinstance(data, str) and parse_text(data) == data:
        return data
    return json.dumps(data, sort_keys=True, separators=(",", ":"))


def parse_text(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return text


class Linearization:
    """A bijection between the values of a type and ``range(length)``.

    ``linearize`` maps a value to its index and ``delinearize_unchecked`` maps
    an index back to the value. The latter requires ``0 <= index < length``;
    the requirement is only checked by ``assert`` statements, so callers that
    cannot guarantee it should use :meth:`delinearize` instead.

    A length of zero denotes an uninhabited type. Neither direction can be
    called meaningfully for such a type.
    """

    kind = "abstract"

    def __init__(self, name: str, length: int):
        if length < 0:
            raise ValueError(f"{name}: length must be non-negative, got {length}")
        self.name = name
        self.length = length

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"<{type(self).__name__} {self.name} length={self.length}>"

    @property
    def inhabited(self) -> bool:
        return self.length > 0

    def linearize(self, value: Any) -> int:
        raise NotImplementedError

    def delinearize_unchecked(self, index: int) -> Any:
        raise NotImplementedError

    def delinearize(self, index: int, default: Any = None) -> Any:
        """Checked inverse of :meth:`linearize`.

        Returns ``default`` when ``index`` is outside ``[0, length)``. A
        sentinel can be passed for key types that have ``None`` as a value.
        """

        if self.is_index(index):
            return self.delinearize_unchecked(index)
        return default

    def is_index(self, index: int) -> bool:
        return 0 <= index < self.length

    def variants(self) -> Variants:
        """Return an iterator over every value in ascending index order."""

        return Variants(self)

    def linearized(self, value: Any) -> Linearized:
        return Linearized(self, value)

    def to_data(self, value: Any) -> Any:
        """Return a JSON-compatible structured form of ``value``."""

        raise NotImplementedError

    def from_data(self, data: Any) -> Any:
        """Inverse of :meth:`to_data`; raises ``ValueError`` on bad input."""

        raise NotImplementedError

    def key_to_text(self, value: Any) -> str:
        return canonical_text(self.to_data(value))

    def key_from_text(self, text: str) -> Any:
        try:
            return self.from_data(parse_text(text))
        except UnknownKeyError:
            raise
        except (ValueError, TypeError, KeyError) as exc:
            raise UnknownKeyError(text, self.name, str(exc)) from exc

    def describe(self) -> dict[str, Any]:
        """Return a JSON-safe description of this linearization."""

        return {"kind": self.kind, "name": self.name, "length": self.length}


LINEARIZATION_REGISTRY: dict[Any, Linearization] = {}


def register_linearization(tp, linearization, *, replace=False):
    """Associate a type (or typing construct) with its linearization."""

    if not isinstance(linearization, Linearization):
        raise TypeError(
            f"expected a Linearization for {tp!r}, got {type(linearization).__name__}"
        )
    existing = LINEARIZATION_REGISTRY.get(tp)
    if existing is not None and existing is not linearization and not replace:
        raise ValueError(f"Duplicate linearization for {tp!r}")
    LINEARIZATION_REGISTRY[tp] = linearization
    return linearization


def unregister_linearization(tp):
    """Remove a registered linearization, returning it (or ``None``)."""

    return LINEARIZATION_REGISTRY.pop(tp, None)


def get_registered_linearizations():
    """Return a snapshot of the currently registered linearizations."""

    return dict(LINEARIZATION_REGISTRY)


__all__ = [
    "LINEARIZATION_REGISTRY",
    "Linearization",
    "canonical_text",
    "get_registered_linearizations",
    "parse_text",
    "register_linearization",
    "unregister_linearization",
]

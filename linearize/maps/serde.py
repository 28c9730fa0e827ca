"""Convert static maps to and from string-keyed mappings and JSON.

The wire format is that of an ordinary JSON object: one entry per key,
written in ascending index order, with the key rendered by the key type's
``key_to_text`` (``"false"``/``"true"`` for ``bool``, member names for
enums, compact JSON for composite keys).

Three policies govern absent entries:

``STRICT``
    Every key must be present; a missing key raises
    :class:`~linearize.errors.MissingKeyError`.
``USE_DEFAULT``
    Missing keys receive ``default_factory()``.
``SKIP_NONE``
    ``None`` values are omitted when writing and absent keys read back as
    ``None``.
"""

from __future__ import annotations

import enum
import json
from collections.abc import Mapping
from typing import Any, Callable

from ..errors import MapShapeError, MissingKeyError, UnknownKeyError
from .builder import MapBuilder
from .static_map import StaticMap


class MissingKeyPolicy(enum.Enum):
    STRICT = "strict"
    USE_DEFAULT = "use_default"
    SKIP_NONE = "skip_none"


STRICT = MissingKeyPolicy.STRICT
USE_DEFAULT = MissingKeyPolicy.USE_DEFAULT
SKIP_NONE = MissingKeyPolicy.SKIP_NONE


def _identity(value):
    return value


def to_mapping(
    static_map: StaticMap,
    encode_value: Callable[[Any], Any] | None = None,
    policy: MissingKeyPolicy = STRICT,
) -> dict[str, Any]:
    """Return a plain ``dict`` keyed by the text form of every key."""

    encode = encode_value or _identity
    lin = static_map.linearization
    result = {}
    for key, value in static_map.items():
        if policy is SKIP_NONE and value is None:
            continue
        result[lin.key_to_text(key)] = encode(value)
    return result


def from_mapping(
    key_type,
    data: Any,
    decode_value: Callable[[Any], Any] | None = None,
    policy: MissingKeyPolicy = STRICT,
    default_factory: Callable[[], Any] | None = None,
    map_class=StaticMap,
) -> StaticMap:
    """Rebuild a map from the output of :func:`to_mapping`.

    Entries may appear in any order. When two entries name the same key the
    later one wins.
    """

    if not isinstance(data, Mapping):
        raise MapShapeError(data)
    if policy is USE_DEFAULT and default_factory is None:
        raise ValueError("USE_DEFAULT requires a default_factory")
    decode = decode_value or _identity

    builder = MapBuilder(key_type, map_class=map_class)
    lin = builder.linearization
    for text, raw in data.items():
        if not isinstance(text, str):
            raise UnknownKeyError(repr(text), lin.name, "keys must be strings")
        key = lin.key_from_text(text)
        try:
            index = lin.linearize(key)
        except (ValueError, TypeError) as exc:
            raise UnknownKeyError(text, lin.name, str(exc)) from exc
        builder.unchecked_set(index, decode(raw))

    for index in range(builder.length()):
        if builder.is_set(index):
            continue
        if policy is STRICT:
            raise MissingKeyError(lin.key_to_text(builder.key(index)))
        if policy is USE_DEFAULT:
            builder.unchecked_set(index, default_factory())
        else:
            builder.unchecked_set(index, None)
    return builder.finish()


def dumps(static_map: StaticMap, encode_value=None, policy=STRICT, **kwargs) -> str:
    """Serialize ``static_map`` as a JSON object; ``kwargs`` go to ``json.dumps``."""

    return json.dumps(to_mapping(static_map, encode_value, policy), **kwargs)


def loads(
    key_type,
    text: str,
    decode_value=None,
    policy=STRICT,
    default_factory=None,
    copy: bool = False,
    dtype=None,
) -> StaticMap:
    """Parse JSON produced by :func:`dumps`.

    With ``copy=True`` (or an explicit ``dtype``) the result is a
    :class:`StaticCopyMap`.
    """

    result = from_mapping(key_type, json.loads(text), decode_value, policy, default_factory)
    if copy or dtype is not None:
        return result.into_copy(dtype)
    return result


__all__ = [
    "MissingKeyPolicy",
    "SKIP_NONE",
    "STRICT",
    "USE_DEFAULT",
    "dumps",
    "from_mapping",
    "loads",
    "to_mapping",
]

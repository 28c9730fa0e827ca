"""Resolve Python types and typing constructs to their linearizations."""

from __future__ import annotations

import enum
import types
import typing
from typing import Any

from ..errors import NotLinearizableError
from .compose import OptionalLinearization, TupleLinearization, UnionLinearization
from .core import LINEARIZATION_REGISTRY, Linearization, register_linearization
from .linearized import Linearized
from .primitives import UNIT, EnumLinearization, LiteralLinearization
from .variants import Variants

_NONE_TYPE = type(None)

_UNBOUNDED_HINTS = {
    int: "int is unbounded; use Annotated[int, U8] (or another width) or IntRange",
    str: "str has no finite set of values; use a Literal or an Enum",
    float: "float is not enumerable",
    bytes: "bytes has no finite set of values",
}


def linearization_of(tp) -> Linearization:
    """Return the linearization describing ``tp``.

    ``tp`` may be a :class:`Linearization`, a registered type, a class
    decorated with ``@linearizable``/``@linearizable_union``, an ``Enum``
    subclass, or a typing construct built from those (``Annotated``,
    ``Optional``, ``Union``, ``tuple[...]``, ``Literal``, ``Never``).
    """

    if isinstance(tp, Linearization):
        return tp
    if tp is None:
        return UNIT
    try:
        cached = LINEARIZATION_REGISTRY.get(tp)
    except TypeError:
        cached = None
    if cached is not None:
        return cached

    if isinstance(tp, type):
        own = tp.__dict__.get("__linearization__")
        if own is not None:
            return own
        if issubclass(tp, enum.Enum):
            return register_linearization(tp, EnumLinearization(tp))
        reason = _UNBOUNDED_HINTS.get(tp, "decorate it with @linearizable")
        raise NotLinearizableError(f"{tp.__qualname__} is not linearizable: {reason}", owner=tp)

    lin = _resolve_construct(tp)
    try:
        LINEARIZATION_REGISTRY.setdefault(tp, lin)
    except TypeError:
        # Unhashable metadata; resolve again next time.
        return lin
    return LINEARIZATION_REGISTRY[tp]


def _resolve_construct(tp) -> Linearization:
    origin = typing.get_origin(tp)
    args = typing.get_args(tp)

    if origin is typing.Annotated:
        for meta in args[1:]:
            if isinstance(meta, Linearization):
                return meta
        return linearization_of(args[0])

    if origin is typing.Literal:
        return LiteralLinearization(args)

    if origin is typing.Union or origin is types.UnionType:
        if _NONE_TYPE in args:
            # None goes first however many other members there are.
            rest = tuple(arg for arg in args if arg is not _NONE_TYPE)
            inner = rest[0] if len(rest) == 1 else typing.Union[rest]
            return OptionalLinearization(linearization_of(inner))
        members = []
        seen = set()
        for arg in args:
            cls = _runtime_class(arg)
            if cls in seen:
                raise NotLinearizableError(
                    f"{tp!r} has two members with runtime class {cls.__qualname__}"
                )
            seen.add(cls)
            members.append((cls, linearization_of(arg)))
        return UnionLinearization(members)

    if origin is tuple:
        if args == ((),):
            args = ()
        if Ellipsis in args:
            raise NotLinearizableError(f"{tp!r} has no fixed length")
        return TupleLinearization(linearization_of(arg) for arg in args)

    raise NotLinearizableError(f"{tp!r} is not linearizable")


def _runtime_class(tp):
    if tp is None:
        return _NONE_TYPE
    if isinstance(tp, type):
        return tp
    origin = typing.get_origin(tp)
    if origin is typing.Annotated:
        return _runtime_class(typing.get_args(tp)[0])
    if origin is tuple:
        return tuple
    raise NotLinearizableError(f"cannot dispatch on union member {tp!r}")


def length_of(tp) -> int:
    """Return the number of values of ``tp``."""

    return linearization_of(tp).length


def linearize(tp, value: Any) -> int:
    return linearization_of(tp).linearize(value)


def delinearize(tp, index: int, default: Any = None) -> Any:
    return linearization_of(tp).delinearize(index, default)


def delinearize_unchecked(tp, index: int) -> Any:
    return linearization_of(tp).delinearize_unchecked(index)


def variants(tp) -> Variants:
    """Iterate over every value of ``tp`` in ascending index order."""

    return linearization_of(tp).variants()


def linearized(tp, value: Any) -> Linearized:
    return linearization_of(tp).linearized(value)


__all__ = [
    "delinearize",
    "delinearize_unchecked",
    "length_of",
    "linearization_of",
    "linearize",
    "linearized",
    "variants",
]

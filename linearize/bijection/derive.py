"""Derive linearizations from class declarations.

``@linearizable`` turns a dataclass or ``NamedTuple`` into a product of its
fields and an ``Enum`` into a fixed enumeration. ``@linearizable_union``
turns a class whose nested dataclasses are the variants into a sum type.
Derivation happens when the decorator runs; a field without a
linearization raises :class:`NotLinearizableError` at import time.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import typing

from ..errors import NotLinearizableError
from .compose import ProductLinearization, SumLinearization, Variant
from .primitives import EnumLinearization
from .resolve import linearization_of

log = logging.getLogger(__name__)


def _is_namedtuple(cls) -> bool:
    return issubclass(cls, tuple) and hasattr(cls, "_fields")


def _field_hints(cls, localns=None):
    try:
        return typing.get_type_hints(cls, localns=localns, include_extras=True)
    except NameError as exc:
        raise NotLinearizableError(
            f"{cls.__qualname__}: cannot resolve annotation ({exc})", owner=cls
        ) from exc


def _field_linearization(cls, field_name, annotation):
    try:
        return linearization_of(annotation)
    except NotLinearizableError as exc:
        raise NotLinearizableError(
            f"{cls.__qualname__}.{field_name}: {exc}", owner=cls, field=field_name
        ) from exc


def _derive_dataclass(cls, name, localns):
    hints = _field_hints(cls, localns)
    fields = []
    for field in dataclasses.fields(cls):
        if not field.init:
            raise NotLinearizableError(
                f"{cls.__qualname__}.{field.name}: fields excluded from __init__ "
                "cannot be restored by delinearization",
                owner=cls,
                field=field.name,
            )
        fields.append((field.name, _field_linearization(cls, field.name, hints[field.name])))
    names = [field_name for field_name, _ in fields]

    def construct(parts):
        return cls(**dict(zip(names, parts)))

    def fields_of(value):
        return [getattr(value, field_name) for field_name in names]

    return ProductLinearization(name, fields, construct, fields_of)


def _derive_namedtuple(cls, name, localns):
    hints = _field_hints(cls, localns)
    fields = []
    for field_name in cls._fields:
        if field_name not in hints:
            raise NotLinearizableError(
                f"{cls.__qualname__}.{field_name} has no annotation",
                owner=cls,
                field=field_name,
            )
        fields.append((field_name, _field_linearization(cls, field_name, hints[field_name])))

    def construct(parts):
        return cls(*parts)

    return ProductLinearization(name, fields, construct, tuple)


def derive_linearization(cls, *, name=None, localns=None):
    """Build (without attaching) the linearization of a class declaration."""

    name = name or cls.__qualname__
    if issubclass(cls, enum.Enum):
        return EnumLinearization(cls)
    if dataclasses.is_dataclass(cls):
        return _derive_dataclass(cls, name, localns)
    if _is_namedtuple(cls):
        return _derive_namedtuple(cls, name, localns)
    raise NotLinearizableError(
        f"{cls.__qualname__} must be a dataclass, NamedTuple or Enum to derive a "
        "linearization",
        owner=cls,
    )


def linearizable(cls=None, *, name=None):
    """Class decorator attaching a derived ``__linearization__``."""

    def wrap(cls):
        lin = derive_linearization(cls, name=name)
        cls.__linearization__ = lin
        log.debug("derived %s %s with length %d", lin.kind, lin.name, lin.length)
        return cls

    if cls is None:
        return wrap
    return wrap(cls)


def _nested_variants(cls):
    return [
        value
        for value in vars(cls).values()
        if isinstance(value, type)
        and (dataclasses.is_dataclass(value) or _is_namedtuple(value))
    ]


def linearizable_union(cls=None, *, variants=None, name=None):
    """Class decorator deriving a tagged union.

    Without ``variants``, every dataclass or ``NamedTuple`` nested in the
    class body is a variant, in declaration order. The order fixes the index
    ranges and the enumeration order, so reordering variants changes the
    meaning of stored indices.
    """

    def wrap(cls):
        if variants is None:
            variant_classes = _nested_variants(cls)
        else:
            variant_classes = list(variants)
        localns = dict(vars(cls))
        localns[cls.__name__] = cls

        members = []
        for variant_cls in variant_classes:
            payload = variant_cls.__dict__.get("__linearization__")
            if payload is None:
                payload = derive_linearization(variant_cls, localns=localns)
                variant_cls.__linearization__ = payload
            members.append(Variant(variant_cls.__name__, payload, tag=variant_cls))

        positions = {variant_cls: position for position, variant_cls in enumerate(variant_classes)}
        if len(positions) != len(variant_classes):
            raise NotLinearizableError(f"{cls.__qualname__} lists a variant twice", owner=cls)

        def select(value):
            try:
                return positions[type(value)]
            except KeyError:
                raise TypeError(f"{value!r} is not a variant of {cls.__qualname__}") from None

        lin = SumLinearization(name or cls.__qualname__, members, select)
        cls.__linearization__ = lin
        cls.__variants__ = tuple(variant_classes)
        log.debug(
            "derived union %s with %d variants and length %d",
            lin.name,
            len(members),
            lin.length,
        )
        return cls

    if cls is None:
        return wrap
    return wrap(cls)


__all__ = [
    "derive_linearization",
    "linearizable",
    "linearizable_union",
]

"""Product and sum composition of linearizations.

Products use mixed-radix encoding with the first field as the most
significant digit. Sums partition the index space into contiguous ranges,
one per variant, in declaration order. Declaration order is therefore part
of the public contract of every composite type: it fixes both the numeric
indices and the enumeration order.
"""

from __future__ import annotations

import bisect
from typing import Any, Callable, Iterable, Sequence

from .core import Linearization
from .primitives import UNIT, UnitLinearization


class ProductLinearization(Linearization):
    """A record of independent fields.

    ``construct`` receives the delinearized field values (in field order) and
    builds the composite value; ``fields_of`` returns the field values of a
    composite value in the same order.
    """

    kind = "product"

    def __init__(
        self,
        name: str,
        fields: Iterable[tuple[str, Linearization]],
        construct: Callable[[list], Any],
        fields_of: Callable[[Any], Sequence],
        *,
        positional: bool = False,
    ):
        fields = tuple((field_name, lin) for field_name, lin in fields)
        strides = [1] * len(fields)
        acc = 1
        for position in range(len(fields) - 1, -1, -1):
            strides[position] = acc
            acc *= fields[position][1].length
        super().__init__(name, acc)
        self.fields = fields
        self.strides = tuple(strides)
        self.positional = positional
        self._construct = construct
        self._fields_of = fields_of

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(field_name for field_name, _ in self.fields)

    def linearize(self, value):
        index = 0
        for (_, lin), stride, part in zip(self.fields, self.strides, self._fields_of(value)):
            index += lin.linearize(part) * stride
        assert index < self.length, f"{value!r} linearized outside {self.name}"
        return index

    def delinearize_unchecked(self, index):
        assert 0 <= index < self.length, f"index {index} out of range for {self.name}"
        parts = [
            lin.delinearize_unchecked((index // stride) % lin.length)
            for (_, lin), stride in zip(self.fields, self.strides)
        ]
        return self._construct(parts)

    def to_data(self, value):
        parts = self._fields_of(value)
        if self.positional:
            return [lin.to_data(part) for (_, lin), part in zip(self.fields, parts)]
        return {
            field_name: lin.to_data(part)
            for (field_name, lin), part in zip(self.fields, parts)
        }

    def from_data(self, data):
        if self.positional:
            if not isinstance(data, list) or len(data) != len(self.fields):
                raise ValueError(
                    f"{self.name} expects a list of {len(self.fields)} items, got {data!r}"
                )
            parts = [lin.from_data(item) for (_, lin), item in zip(self.fields, data)]
            return self._construct(parts)
        if not isinstance(data, dict):
            raise ValueError(f"{self.name} expects an object, got {data!r}")
        expected = set(self.field_names)
        if set(data) != expected:
            missing = sorted(expected.difference(data))
            extra = sorted(set(data).difference(expected))
            raise ValueError(f"{self.name}: missing fields {missing}, unknown fields {extra}")
        parts = [lin.from_data(data[field_name]) for field_name, lin in self.fields]
        return self._construct(parts)

    def describe(self):
        info = super().describe()
        info["fields"] = [
            {"name": field_name, "stride": stride, "type": lin.describe()}
            for (field_name, lin), stride in zip(self.fields, self.strides)
        ]
        return info


class TupleLinearization(ProductLinearization):
    """``tuple[A, B, ...]``; the empty tuple is the single value of ``tuple[()]``."""

    kind = "tuple"

    def __init__(self, elements: Iterable[Linearization]):
        elements = tuple(elements)
        if elements:
            name = "tuple[" + ", ".join(lin.name for lin in elements) + "]"
        else:
            name = "tuple[()]"
        super().__init__(
            name,
            [(str(position), lin) for position, lin in enumerate(elements)],
            tuple,
            tuple,
            positional=True,
        )


class Variant:
    """One alternative of a sum type and the linearization of its payload."""

    def __init__(self, name: str, payload: Linearization, tag: Any = None):
        self.name = name
        self.payload = payload
        self.tag = tag

    @property
    def bare(self) -> bool:
        """True when the variant carries no payload fields."""

        if isinstance(self.payload, UnitLinearization):
            return True
        return isinstance(self.payload, ProductLinearization) and not self.payload.fields

    def __repr__(self) -> str:  # pragma: no cover - representation helper
        return f"Variant({self.name}, length={self.payload.length})"


class SumLinearization(Linearization):
    """A tagged union.

    Variant ``i`` owns the indices ``[bases[i], bases[i] + |Vi|)``. A variant
    whose payload is uninhabited owns an empty range and can never be
    produced by :meth:`delinearize_unchecked`. ``select`` maps a value to the
    position of its active variant.
    """

    kind = "sum"

    def __init__(
        self,
        name: str,
        variants: Iterable[Variant],
        select: Callable[[Any], int],
    ):
        variants = tuple(variants)
        bases = []
        acc = 0
        for variant in variants:
            bases.append(acc)
            acc += variant.payload.length
        super().__init__(name, acc)
        self.alternatives = variants
        self.bases = tuple(bases)
        self._select = select
        self._by_name = {variant.name: position for position, variant in enumerate(variants)}

    def variant_position(self, value) -> int:
        return self._select(value)

    def variant_range(self, position: int) -> range:
        base = self.bases[position]
        return range(base, base + self.alternatives[position].payload.length)

    def linearize(self, value):
        position = self._select(value)
        variant = self.alternatives[position]
        return self.bases[position] + variant.payload.linearize(value)

    def delinearize_unchecked(self, index):
        assert 0 <= index < self.length, f"index {index} out of range for {self.name}"
        # Empty ranges share their base with the next variant, so the rightmost
        # base <= index always belongs to an inhabited variant.
        position = bisect.bisect_right(self.bases, index) - 1
        variant = self.alternatives[position]
        return variant.payload.delinearize_unchecked(index - self.bases[position])

    def to_data(self, value):
        variant = self.alternatives[self._select(value)]
        if variant.bare:
            return variant.name
        return {variant.name: variant.payload.to_data(value)}

    def from_data(self, data):
        if isinstance(data, str):
            variant = self._variant_named(data)
            if not variant.bare:
                raise ValueError(f"{self.name}.{data} requires a payload")
            return variant.payload.delinearize_unchecked(0)
        if isinstance(data, dict) and len(data) == 1:
            [(name, payload)] = data.items()
            return self._variant_named(name).payload.from_data(payload)
        raise ValueError(f"{self.name} expects a variant name or a single-entry object")

    def _variant_named(self, name):
        try:
            return self.alternatives[self._by_name[name]]
        except KeyError:
            raise ValueError(f"{self.name} has no variant {name!r}") from None

    def describe(self):
        info = super().describe()
        info["variants"] = [
            {"name": variant.name, "base": base, "type": variant.payload.describe()}
            for variant, base in zip(self.alternatives, self.bases)
        ]
        return info


class OptionalLinearization(SumLinearization):
    """``Optional[T]``: ``None`` at index 0, then every value of ``T``."""

    kind = "optional"

    def __init__(self, inner: Linearization):
        super().__init__(
            f"Optional[{inner.name}]",
            [Variant("None", UNIT), Variant("Some", inner)],
            _select_optional,
        )
        self.inner = inner

    def to_data(self, value):
        if value is None:
            return None
        return self.inner.to_data(value)

    def from_data(self, data):
        if data is None:
            return None
        return self.inner.from_data(data)


def _select_optional(value):
    return 0 if value is None else 1


class UnionLinearization(SumLinearization):
    """``Union[A, B, ...]`` of distinct runtime classes, in declaration order."""

    kind = "union"

    def __init__(self, members: Iterable[tuple[type, Linearization]], name: str | None = None):
        members = tuple(members)
        self.classes = tuple(cls for cls, _ in members)
        self._positions = {}
        for position, cls in enumerate(self.classes):
            self._positions.setdefault(cls, position)
        super().__init__(
            name or "Union[" + ", ".join(lin.name for _, lin in members) + "]",
            [Variant(lin.name, lin, tag=cls) for cls, lin in members],
            self._select_member,
        )

    def _select_member(self, value):
        position = self._positions.get(type(value))
        if position is not None:
            return position
        for position, cls in enumerate(self.classes):
            if isinstance(value, cls):
                return position
        raise TypeError(f"{value!r} is not a member of {self.name}")


__all__ = [
    "OptionalLinearization",
    "ProductLinearization",
    "SumLinearization",
    "TupleLinearization",
    "UnionLinearization",
    "Variant",
]

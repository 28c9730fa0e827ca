"""Base-case linearizations for atomic types."""

from __future__ import annotations

import enum
import typing
from typing import Any, Iterable

from ..constants import INTEGER_WIDTHS
from ..errors import NotLinearizableError, UnknownKeyError
from .core import Linearization, parse_text, register_linearization


def _unreachable(linearization):
    raise AssertionError(f"{linearization.name} is uninhabited; this call is unreachable")


class BoolLinearization(Linearization):
    kind = "bool"

    def __init__(self):
        super().__init__("bool", 2)

    def linearize(self, value):
        return 1 if value else 0

    def delinearize_unchecked(self, index):
        assert 0 <= index < 2, f"index {index} out of range for bool"
        return index != 0

    def to_data(self, value):
        return bool(value)

    def from_data(self, data):
        if not isinstance(data, bool):
            raise ValueError(f"expected a boolean, got {data!r}")
        return data


class UnitLinearization(Linearization):
    """A type with exactly one value (``None`` or the empty tuple)."""

    kind = "unit"

    def __init__(self, name="unit", value=None, data=None):
        super().__init__(name, 1)
        self.value = value
        self.data = data

    def linearize(self, value):
        return 0

    def delinearize_unchecked(self, index):
        assert index == 0, f"index {index} out of range for {self.name}"
        return self.value

    def to_data(self, value):
        return self.data

    def from_data(self, data):
        if data != self.data:
            raise ValueError(f"expected {self.data!r}, got {data!r}")
        return self.value


class NeverLinearization(Linearization):
    """The uninhabited type. Nothing can be linearized or delinearized."""

    kind = "never"

    def __init__(self, name="never"):
        super().__init__(name, 0)

    def linearize(self, value):
        _unreachable(self)

    def delinearize_unchecked(self, index):
        _unreachable(self)

    def to_data(self, value):
        _unreachable(self)

    def from_data(self, data):
        raise ValueError(f"{self.name} has no values")


class IntRange(Linearization):
    """The integers ``start <= n < stop``, with ``start`` at index 0."""

    kind = "int"

    def __init__(self, start: int, stop: int, name: str | None = None):
        if stop < start:
            raise ValueError(f"empty integer range [{start}, {stop}) is reversed")
        super().__init__(name or f"int[{start}, {stop})", stop - start)
        self.start = start
        self.stop = stop

    def linearize(self, value):
        index = int(value) - self.start
        if not 0 <= index < self.length:
            raise ValueError(f"{value!r} is outside [{self.start}, {self.stop})")
        return index

    def delinearize_unchecked(self, index):
        assert 0 <= index < self.length, f"index {index} out of range for {self.name}"
        return index + self.start

    def to_data(self, value):
        return int(value)

    def from_data(self, data):
        if isinstance(data, bool) or not isinstance(data, int):
            raise ValueError(f"expected an integer, got {data!r}")
        if not self.start <= data < self.stop:
            raise ValueError(f"{data} is outside [{self.start}, {self.stop})")
        return data

    def describe(self):
        info = super().describe()
        info.update(start=self.start, stop=self.stop)
        return info


class UnsignedInt(IntRange):
    kind = "unsigned"

    def __init__(self, bits: int):
        super().__init__(0, 1 << bits, name=f"u{bits}")
        self.bits = bits


class SignedInt(IntRange):
    """Two's complement integers, shifted so that the minimum is index 0."""

    kind = "signed"

    def __init__(self, bits: int):
        half = 1 << (bits - 1)
        super().__init__(-half, half, name=f"i{bits}")
        self.bits = bits


class EnumLinearization(Linearization):
    """Members of an ``enum.Enum`` in declaration order (aliases excluded)."""

    kind = "enum"

    def __init__(self, enum_cls):
        members = tuple(enum_cls)
        super().__init__(enum_cls.__qualname__, len(members))
        self.enum = enum_cls
        self.members = members
        self._positions = {member: index for index, member in enumerate(members)}

    def linearize(self, value):
        return self._positions[value]

    def delinearize_unchecked(self, index):
        return self.members[index]

    def to_data(self, value):
        return value.name

    def from_data(self, data):
        if not isinstance(data, str):
            raise ValueError(f"expected a member name of {self.name}, got {data!r}")
        try:
            return self.enum[data]
        except KeyError:
            raise ValueError(f"{self.name} has no member {data!r}") from None

    def key_from_text(self, text):
        try:
            return self.from_data(parse_text(text))
        except ValueError as exc:
            raise UnknownKeyError(text, self.name, str(exc)) from exc

    def describe(self):
        info = super().describe()
        info["members"] = [member.name for member in self.members]
        return info


class LiteralLinearization(Linearization):
    """A fixed choice between the values of a ``typing.Literal``."""

    kind = "literal"

    def __init__(self, values: Iterable[Any], name: str | None = None):
        unique = []
        positions = {}
        for value in values:
            token = (type(value), value)
            if token in positions:
                continue
            positions[token] = len(unique)
            unique.append(value)
        super().__init__(name or f"Literal{tuple(unique)!r}", len(unique))
        self.values = tuple(unique)
        self._positions = positions
        self._by_text = {self.key_to_text(value): value for value in unique}
        if len(self._by_text) != len(unique):
            raise NotLinearizableError(f"{self.name} has values that share a key text")

    def linearize(self, value):
        return self._positions[(type(value), value)]

    def delinearize_unchecked(self, index):
        return self.values[index]

    def to_data(self, value):
        if isinstance(value, enum.Enum):
            return value.name
        return value

    def from_data(self, data):
        for value in self.values:
            candidate = self.to_data(value)
            if type(candidate) is type(data) and candidate == data:
                return value
        raise ValueError(f"{data!r} is not one of {list(self.values)!r}")

    def key_from_text(self, text):
        try:
            return self._by_text[text]
        except KeyError:
            raise UnknownKeyError(text, self.name) from None

    def describe(self):
        info = super().describe()
        info["values"] = [self.to_data(value) for value in self.values]
        return info


class Ordering(enum.Enum):
    """Result of a three-way comparison."""

    LESS = -1
    EQUAL = 0
    GREATER = 1

    @classmethod
    def compare(cls, a, b) -> "Ordering":
        if a < b:
            return cls.LESS
        if a > b:
            return cls.GREATER
        return cls.EQUAL


BOOL = BoolLinearization()
UNIT = UnitLinearization()
NEVER = NeverLinearization()
ORDERING = EnumLinearization(Ordering)

U8, U16, U32, U64 = (UnsignedInt(bits) for bits in INTEGER_WIDTHS)
I8, I16, I32, I64 = (SignedInt(bits) for bits in INTEGER_WIDTHS)

BUILTIN_LINEARIZATIONS = {
    "bool": BOOL,
    "unit": UNIT,
    "never": NEVER,
    "ordering": ORDERING,
    "u8": U8,
    "u16": U16,
    "u32": U32,
    "u64": U64,
    "i8": I8,
    "i16": I16,
    "i32": I32,
    "i64": I64,
}

register_linearization(bool, BOOL)
register_linearization(type(None), UNIT)
register_linearization(Ordering, ORDERING)
register_linearization(typing.NoReturn, NEVER)
if hasattr(typing, "Never"):
    register_linearization(typing.Never, NEVER)


__all__ = [
    "BOOL",
    "BUILTIN_LINEARIZATIONS",
    "BoolLinearization",
    "EnumLinearization",
    "I16",
    "I32",
    "I64",
    "I8",
    "IntRange",
    "LiteralLinearization",
    "NEVER",
    "NeverLinearization",
    "ORDERING",
    "Ordering",
    "SignedInt",
    "U16",
    "U32",
    "U64",
    "U8",
    "UNIT",
    "UnitLinearization",
    "UnsignedInt",
]

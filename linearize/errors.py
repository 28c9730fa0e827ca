"""Exception types raised by the linearize package."""


class LinearizeError(Exception):
    """Base class for all errors raised by this package."""


class NotLinearizableError(LinearizeError, TypeError):
    """A type (or one of its fields) has no known linearization."""

    def __init__(self, message, *, owner=None, field=None):
        super().__init__(message)
        self.owner = owner
        self.field = field


class LengthMismatchError(LinearizeError, ValueError):
    """A buffer handed to a map does not hold exactly ``length`` elements."""

    def __init__(self, expected, actual):
        super().__init__(
            f"expected a buffer of length {expected}, got one of length {actual}"
        )
        self.expected = expected
        self.actual = actual


class StorageTooLargeError(LinearizeError, ValueError):
    """The key type has more values than a map is allowed to hold."""

    def __init__(self, length, limit):
        super().__init__(
            f"cannot allocate storage for {length} slots (limit is {limit})"
        )
        self.length = length
        self.limit = limit


class MapDecodeError(LinearizeError, ValueError):
    """A serialized map could not be turned back into a map."""


class MapShapeError(MapDecodeError):
    """The payload is not shaped as a key/value mapping at all."""

    def __init__(self, actual):
        super().__init__(f"invalid type: expected a map, got {type(actual).__name__}")
        self.actual = actual


class MissingKeyError(MapDecodeError):
    """A structurally valid mapping lacks one of the required keys."""

    def __init__(self, key):
        super().__init__(f"Missing key {key} in static map")
        self.key = key


class UnknownKeyError(MapDecodeError):
    """A mapping key does not name any value of the key type."""

    def __init__(self, text, type_name, reason=None):
        message = f"invalid key {text!r} for {type_name}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.text = text
        self.type_name = type_name


class DocumentError(LinearizeError, ValueError):
    """A map document on disk failed validation."""


__all__ = [
    "DocumentError",
    "LengthMismatchError",
    "LinearizeError",
    "MapDecodeError",
    "MapShapeError",
    "MissingKeyError",
    "NotLinearizableError",
    "StorageTooLargeError",
    "UnknownKeyError",
]

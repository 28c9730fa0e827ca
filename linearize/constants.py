"""Shared constant values for the linearize package."""

# Width of a machine-sized index. Python
# integers never overflow, but size hints saturate at this bound.
USIZE_BITS = 64
USIZE_MAX = (1 << USIZE_BITS) - 1

INTEGER_WIDTHS = (8, 16, 32, 64)

# Refuse to allocate maps with more slots than this.
MAX_STORAGE_LENGTH = 1 << 24

DOCUMENT_VERSION = "1.0"
DOCUMENT_SUFFIX = ".linmap.json"

BUILTIN_TYPE_NAMES = (
    "bool",
    "unit",
    "never",
    "ordering",
    "u8",
    "u16",
    "u32",
    "u64",
    "i8",
    "i16",
    "i32",
    "i64",
)

__all__ = [
    "BUILTIN_TYPE_NAMES",
    "DOCUMENT_SUFFIX",
    "DOCUMENT_VERSION",
    "INTEGER_WIDTHS",
    "MAX_STORAGE_LENGTH",
    "USIZE_BITS",
    "USIZE_MAX",
]

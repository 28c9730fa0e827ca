"""Map documents: static maps persisted as self-describing JSON files."""

from __future__ import annotations

from datetime import datetime, timezone
import hashlib
import json

from . import constants
from .bijection.resolve import linearization_of
from .errors import DocumentError
from .maps.copy_map import StaticCopyMap
from .maps.serde import from_mapping, to_mapping


def _digest(data):
    text = json.dumps(data, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def build_map_document(static_map, encode_value=None):
    """Create an in-memory document describing ``static_map``."""

    entries = to_mapping(static_map, encode_value)
    storage = {"kind": static_map.storage.kind}
    if isinstance(static_map, StaticCopyMap):
        storage["dtype"] = static_map.dtype.str
    return {
        "linearize_version": constants.DOCUMENT_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
        "key_type": static_map.linearization.describe(),
        "length": static_map.length,
        "storage": storage,
        "entries": entries,
        "entries_digest": _digest(entries),
    }


def write_map_document(doc, filename):
    """Persist a map document to disk."""

    with open(filename, "w", encoding="utf-8") as f:
        json.dump(doc, f, indent=2)
    print(f"  ✓ Static map exported → {filename}")
    return doc


def export_map_document(static_map, filename, encode_value=None):
    return write_map_document(build_map_document(static_map, encode_value), filename)


def verify_map_document(doc):
    """Check the recorded length and digest against the stored entries."""

    for field in ("linearize_version", "key_type", "length", "entries", "entries_digest"):
        if field not in doc:
            raise DocumentError(f"Map document missing {field!r}")
    entries = doc["entries"]
    if not isinstance(entries, dict):
        raise DocumentError("Map document entries must be an object")
    if len(entries) != doc["length"]:
        raise DocumentError(
            f"Map document declares {doc['length']} entries but holds {len(entries)}"
        )
    if _digest(entries) != doc["entries_digest"]:
        raise DocumentError("Map document entries digest mismatch")
    return True


def load_map_document(filename):
    """Load and verify a map document."""

    with open(filename, "r", encoding="utf-8") as f:
        try:
            doc = json.load(f)
        except json.JSONDecodeError as exc:
            raise DocumentError(f"{filename} is not valid JSON: {exc}") from exc
    if not isinstance(doc, dict):
        raise DocumentError(f"{filename} does not hold a map document")
    verify_map_document(doc)
    return doc


def map_from_document(key_type, doc, decode_value=None):
    """Rebuild the static map stored in ``doc``.

    Array-backed maps come back as :class:`StaticCopyMap` with their
    recorded dtype.
    """

    lin = linearization_of(key_type)
    if doc["key_type"].get("length") != lin.length:
        raise DocumentError(
            f"Map document is keyed by {doc['key_type'].get('name')} with "
            f"{doc['key_type'].get('length')} values, not {lin.name} ({lin.length})"
        )
    result = from_mapping(lin, doc["entries"], decode_value)
    storage = doc.get("storage", {})
    if storage.get("kind") == "array":
        return result.into_copy(storage.get("dtype"))
    return result


def canonicalize_document(doc):
    """
    Normalize a map document so that equal maps written at different times
    produce identical JSON: keys are sorted and the timestamp is dropped.
    """

    def sort_dict(d):
        if isinstance(d, dict):
            return {k: sort_dict(v) for k, v in sorted(d.items())}
        elif isinstance(d, list):
            return [sort_dict(x) for x in d]
        else:
            return d

    canon = sort_dict(doc)
    canon.pop("timestamp", None)
    return canon


def hash_map_document(doc):
    """Compute the SHA-256 hash of an in-memory map document."""

    return _digest(canonicalize_document(doc))


def hash_map_file(filename):
    doc = load_map_document(filename)
    h = hash_map_document(doc)
    print(f"SHA256({filename}) = {h}")
    return h


def diff_map_documents(file_a, file_b):
    """Compare two map documents and print the keys whose values differ.

    Returns the differing key texts (empty when the documents match).
    """

    a = load_map_document(file_a)
    b = load_map_document(file_b)
    ha, hb = hash_map_document(a), hash_map_document(b)
    if ha == hb:
        print(f"✓ Map documents are identical ({ha})")
        return []

    print(f"✗ Map documents differ\n  {file_a}: {ha}\n  {file_b}: {hb}")
    if a["key_type"] != b["key_type"]:
        print(f"  • Key type differs: {a['key_type'].get('name')} vs {b['key_type'].get('name')}")
    if a.get("storage") != b.get("storage"):
        print(f"  • Storage differs: {a.get('storage')} vs {b.get('storage')}")

    ea, eb = a["entries"], b["entries"]
    differing = []
    for key in list(ea) + [k for k in eb if k not in ea]:
        if key not in eb:
            print(f"    - {key}: {ea[key]!r}")
        elif key not in ea:
            print(f"    + {key}: {eb[key]!r}")
        elif ea[key] != eb[key]:
            print(f"  • {key}: {ea[key]!r} vs {eb[key]!r}")
        else:
            continue
        differing.append(key)
    return differing


__all__ = [
    "build_map_document",
    "canonicalize_document",
    "diff_map_documents",
    "export_map_document",
    "hash_map_document",
    "hash_map_file",
    "load_map_document",
    "map_from_document",
    "verify_map_document",
    "write_map_document",
]

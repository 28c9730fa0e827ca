"""Command-line interface for inspecting linearizations and map documents."""
from __future__ import annotations

import argparse
import importlib
import itertools
import json

from .bijection.primitives import BUILTIN_LINEARIZATIONS
from .bijection.resolve import linearization_of
from .document import diff_map_documents, hash_map_file
from .errors import LinearizeError

_OUT_OF_RANGE = object()


def resolve_type(spec):
    """Resolve ``u8``-style builtin names and ``module:Name`` references."""

    if spec in BUILTIN_LINEARIZATIONS:
        return BUILTIN_LINEARIZATIONS[spec]
    module_name, sep, attr_path = spec.partition(":")
    if not sep or not module_name or not attr_path:
        raise ValueError(
            f"unknown type {spec!r}; use a builtin name "
            f"({', '.join(sorted(BUILTIN_LINEARIZATIONS))}) or MODULE:NAME"
        )
    target = importlib.import_module(module_name)
    for part in attr_path.split("."):
        target = getattr(target, part)
    return linearization_of(target)


def enumerate_values(lin, limit=None, reverse=False):
    """Yield ``(index, value)`` pairs, optionally from the back."""

    values = lin.variants()
    if reverse:
        pairs = zip(range(lin.length - 1, -1, -1), reversed(values))
    else:
        pairs = enumerate(values)
    return itertools.islice(pairs, limit)


def parse_args(args):
    argp = argparse.ArgumentParser(description="Inspect finite-type linearizations")

    argp.add_argument(
        "--type",
        default="bool",
        metavar="TYPE",
        help="Key type: a builtin name (bool, u8, ordering, ...) or MODULE:NAME",
    )
    argp.add_argument(
        "--describe", action="store_true", help="Print the structure of the linearization"
    )
    argp.add_argument(
        "--enumerate",
        nargs="?",
        type=int,
        const=0,
        metavar="N",
        help="List values with their indices (the first N, or all)",
    )
    argp.add_argument(
        "--reverse", action="store_true", help="Enumerate from the highest index down"
    )
    argp.add_argument("--index", metavar="JSON", help="Linearize a value given as JSON")
    argp.add_argument("--value", type=int, metavar="INDEX", help="Delinearize an index")
    argp.add_argument("--hash", metavar="FILE", help="Compute hash of a map document")
    argp.add_argument(
        "--diff",
        nargs=2,
        metavar=("A", "B"),
        help="Compare two map documents",
    )

    return argp.parse_args(args)


def _run(params):
    if params.diff:
        diff_map_documents(params.diff[0], params.diff[1])
        return 0
    if params.hash:
        hash_map_file(params.hash)
        return 0

    lin = resolve_type(params.type)
    print(f"{lin.name}: {lin.length} values")

    if params.describe:
        print(json.dumps(lin.describe(), indent=2))

    if params.enumerate is not None:
        limit = params.enumerate or None
        for index, value in enumerate_values(lin, limit, params.reverse):
            print(f"  {index}: {lin.key_to_text(value)}")

    status = 0
    if params.index is not None:
        value = lin.key_from_text(params.index)
        print(f"  {params.index} → {lin.linearize(value)}")
    if params.value is not None:
        value = lin.delinearize(params.value, _OUT_OF_RANGE)
        if value is _OUT_OF_RANGE:
            print(f"  ✗ {params.value} is not an index of {lin.name}")
            status = 1
        else:
            print(f"  {params.value} → {lin.key_to_text(value)}")
    return status


def main(args):
    params = parse_args(args)
    try:
        return _run(params)
    except (LinearizeError, ValueError, TypeError, ImportError, AttributeError) as exc:
        print(f"  ✗ {exc}")
        return 1


__all__ = [
    "enumerate_values",
    "main",
    "parse_args",
    "resolve_type",
]

"""Make ``linearize`` and the shared test key types importable from a checkout."""
import os
import sys

ROOT = os.path.abspath(os.path.dirname(__file__))
for path in (ROOT, os.path.join(ROOT, "tests")):
    if path not in sys.path:
        sys.path.insert(0, path)

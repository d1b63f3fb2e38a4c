"""
Pytest configuration for the maze game tests.

Puts the project root on sys.path so the flat top-level modules import
without installing the package.
"""

import random
import sys
from pathlib import Path

import pytest

_root = str(Path(__file__).resolve().parent.parent)
if _root not in sys.path:
    sys.path.insert(0, _root)


@pytest.fixture
def rng():
    """Deterministic random source."""
    return random.Random(1234)

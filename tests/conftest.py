"""
Pytest configuration and shared fixtures for binmerkle tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used data fixtures
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Project root for the packages, tests root for `from conftest import ...`
for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)


# =============================================================================
# Factory Functions
# =============================================================================

def example_data(n: int) -> list[bytes]:
    """n single-byte blocks: [0], [1], ..., [n-1]."""
    return [bytes([i]) for i in range(n)]


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def data4():
    return example_data(4)


@pytest.fixture
def data8():
    return example_data(8)


@pytest.fixture(autouse=True)
def _clean_binmerkle_env(monkeypatch):
    """Keep BINMERKLE_* variables from the developer's shell out of tests."""
    import os
    for key in list(os.environ):
        if key.startswith("BINMERKLE_"):
            monkeypatch.delenv(key, raising=False)

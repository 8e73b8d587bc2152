"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Isolates every test from HASHTREE_* environment variables and from
   changes to the default runtime configuration
3. Provides commonly-used tree fixtures
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

for _path in [str(_PROJECT_ROOT), str(_TESTS_ROOT)]:
    if _path not in sys.path:
        sys.path.insert(0, _path)

import importlib

_trees = importlib.import_module("fixtures.trees")

from hashtree.config import set_default_config

make_test_tree = _trees.make_test_tree
make_big_tree = _trees.make_big_tree


# =============================================================================
# Isolation
# =============================================================================

_ENV_VARS = (
    "HASHTREE_HASH_ALGORITHM",
    "HASHTREE_LOG_LEVEL",
    "HASHTREE_LOG_FILE",
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Run each test against env-free default configuration."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def greek_tree():
    """Five-item tree over alpha .. epsilon."""
    return make_test_tree()


@pytest.fixture(scope="module")
def big_tree():
    """Tree over "0" .. "1000". Shared per module; tests must not mutate it."""
    return make_big_tree(algorithm="sha3_256")


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (deselect with '-m \"not slow\"')"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )

"""
Pytest configuration and shared fixtures for hashtree tests.

This conftest.py:
1. Adds project root to sys.path for imports
2. Provides commonly-used tree fixtures
3. Configures pytest markers and settings
"""

import sys
from pathlib import Path

import pytest

# =============================================================================
# Path Setup - Must happen before any local imports
# =============================================================================

_PROJECT_ROOT = Path(__file__).resolve().parent.parent

if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from hashtree.config import set_default_config  # noqa: E402
from hashtree.merkle import MerkleTree  # noqa: E402


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture
def eight_leaf_tree():
    """Tree built from [1..8]: 8 leaves, no padding, 3 levels above leaves."""
    return MerkleTree([1, 2, 3, 4, 5, 6, 7, 8])


@pytest.fixture
def padded_tree():
    """Tree built from five strings: 8 leaves, 3 of them padding."""
    return MerkleTree(["a", "b", "c", "d", "e"])


@pytest.fixture(autouse=True)
def clean_hashtree_env(monkeypatch):
    """Keep HASHTREE_* variables from the host out of every test."""
    for name in [
        "HASHTREE_HASH_ALGORITHM",
        "HASHTREE_PADDING_VALUE",
        "HASHTREE_LOG_LEVEL",
        "HASHTREE_LOG_FILE",
    ]:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


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


# =============================================================================
# Test Helpers
# =============================================================================

@pytest.fixture
def assert_valid_shape():
    """Helper asserting the level-length invariants of a tree."""
    def _assert(tree: MerkleTree):
        levels = tree.tree
        width = len(levels[0])
        assert width >= 1 and width & (width - 1) == 0, f"Level 0 length {width} is not a power of two"
        for lower, upper in zip(levels, levels[1:]):
            assert len(upper) * 2 == len(lower)
        assert len(levels[-1]) == 1
        assert levels[-1][0] == tree.root
        assert tree.leaf_count <= width
    return _assert

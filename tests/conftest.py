"""
Pytest configuration and shared fixtures for txmerkle tests.

This conftest.py:
1. Adds project root and tests root to sys.path for imports
2. Provides commonly-used fixtures via pytest's autodiscovery
3. Isolates tests from TXMERKLE_* environment variables
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

from fixtures import make_leaf_ids  # noqa: E402

from txmerkle.config.runtime import EngineConfig, set_default_config  # noqa: E402
from txmerkle.merkle.engine import MerkleEngine  # noqa: E402


_ENV_VARS = (
    "TXMERKLE_MAX_LEAVES",
    "TXMERKLE_ALLOW_DUPLICATES",
    "TXMERKLE_LOG_LEVEL",
    "TXMERKLE_LOG_FILE",
    "TXMERKLE_OUTPUT_FORMAT",
)


# =============================================================================
# Pytest Fixtures (autodiscovered by pytest)
# =============================================================================

@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Strip TXMERKLE_* variables and reset the process default config."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_default_config(None)
    yield
    set_default_config(None)


@pytest.fixture
def tx_ids():
    """The canonical four-transaction scenario."""
    return ["tx1", "tx2", "tx3", "tx4"]


@pytest.fixture
def engine():
    """An unbuilt engine with default limits."""
    return MerkleEngine(config=EngineConfig())


@pytest.fixture
def built_engine(engine, tx_ids):
    """An engine that has already built the four-transaction tree."""
    engine.build_root(tx_ids)
    return engine


@pytest.fixture
def seven_leaves():
    """Odd leaf count that exercises promotion on two layers."""
    return make_leaf_ids(7)


# =============================================================================
# Pytest Configuration
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )

"""
Pytest configuration for merkledrop tests.

Makes the project root and tests/ importable so test modules can use
`from fixtures.common import ...` without installing the package, and
provides the three-entry campaign fixtures most ledger tests start from.
"""

import sys
from pathlib import Path

import pytest

_PROJECT_ROOT = Path(__file__).resolve().parent.parent
_TESTS_ROOT = Path(__file__).resolve().parent

# Must run before the fixtures import below
for _path in (_PROJECT_ROOT, _TESTS_ROOT):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from fixtures.common import FakeClock, make_entries, make_ledger  # noqa: E402


@pytest.fixture
def entries():
    """The three-entry (A, 0, 10), (B, 1, 20), (C, 2, 30) allow-list."""
    return make_entries(3)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def campaign(entries, clock):
    """(ledger, tree, tokens, gate, clock) for the three-entry allow-list."""
    return make_ledger(entries, clock=clock)


def pytest_configure(config):
    config.addinivalue_line("markers", "slow: long-running tests (deselect with -m 'not slow')")
    config.addinivalue_line("markers", "unit: fast, isolated unit tests")

"""
Test fixtures package for merkledrop tests.

Usage:
    from fixtures.common import make_entries, make_ledger

    def test_something():
        ledger, tree, tokens, gate, clock = make_ledger()
"""

from .common import (
    ADDR_A,
    ADDR_B,
    ADDR_C,
    ADDR_D,
    ADDR_OUTSIDER,
    CAMPAIGN_DURATION,
    CAMPAIGN_START,
    FakeClock,
    make_allowlist_csv,
    make_entries,
    make_ledger,
)

__all__ = [
    "ADDR_A",
    "ADDR_B",
    "ADDR_C",
    "ADDR_D",
    "ADDR_OUTSIDER",
    "CAMPAIGN_DURATION",
    "CAMPAIGN_START",
    "FakeClock",
    "make_allowlist_csv",
    "make_entries",
    "make_ledger",
]

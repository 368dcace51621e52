"""
Common test fixtures shared by all modules.

Provides factory functions for merkledrop data structures:
- Entry lists (allow-lists)
- Allow-list CSV text
- A controllable clock
- ClaimLedger wired to in-memory collaborators
"""

from typing import Optional, Sequence

from merkledrop.ledger import ClaimLedger, InMemoryTokenLedger, StaticCredentialGate
from merkledrop.merkle import MerkleTree
from merkledrop.schemas.entries import Entry


# Well-known development accounts
ADDR_A = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
ADDR_B = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
ADDR_C = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"
ADDR_D = "0xa0Ee7A142d267C1f36714E4a8F75612F20a79720"
ADDR_OUTSIDER = "0xf584F8728B874a6a5c7A8d4d387C9aae9172D621"

CAMPAIGN_START = 1_700_000_000.0
CAMPAIGN_DURATION = 30 * 24 * 60 * 60


# =============================================================================
# Entry Factories
# =============================================================================

def make_entries(count: int = 3) -> list[Entry]:
    """
    Create count entries at indices 0..count-1.

    The first three are the (A, 0, 10), (B, 1, 20), (C, 2, 30) scenario;
    later ones cycle addresses with amount 10 * (index + 1).
    """
    addresses = [ADDR_A, ADDR_B, ADDR_C, ADDR_D]
    return [
        Entry(address=addresses[i % len(addresses)], index=i, amount=10 * (i + 1))
        for i in range(count)
    ]


def make_allowlist_csv(entries: Sequence[Entry], header: str = "address,index,amount") -> str:
    """Render entries as allow-list CSV text."""
    lines = [header]
    lines.extend(f"{e.address},{e.index},{e.amount}" for e in entries)
    return "\n".join(lines) + "\n"


# =============================================================================
# Clock
# =============================================================================

class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: float = CAMPAIGN_START) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =============================================================================
# Ledger Factory
# =============================================================================

def make_ledger(
    entries: Optional[Sequence[Entry]] = None,
    *,
    holders: Optional[Sequence[str]] = None,
    pool: int = 1_000_000,
    clock: Optional[FakeClock] = None,
    bind_leaf_to_claimant: bool = True,
) -> tuple[ClaimLedger, MerkleTree, InMemoryTokenLedger, StaticCredentialGate, FakeClock]:
    """
    Build a tree over entries and a ledger for its root.

    By default every entry's address holds the credential, the pool is
    well funded and the clock sits at the campaign start.
    """
    entries = list(entries) if entries is not None else make_entries()
    tree = MerkleTree.from_entries(entries)
    tokens = InMemoryTokenLedger(pool_balance=pool)
    gate = StaticCredentialGate(holders if holders is not None else [e.address for e in entries])
    clock = clock or FakeClock()
    ledger = ClaimLedger(
        tree.root,
        token_ledger=tokens,
        credential_gate=gate,
        start=CAMPAIGN_START,
        duration_s=CAMPAIGN_DURATION,
        clock=clock,
        bind_leaf_to_claimant=bind_leaf_to_claimant,
    )
    return ledger, tree, tokens, gate, clock

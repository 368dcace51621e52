"""
External collaborators consulted by the claim ledger.

The ledger depends only on the two Protocols below. The in-memory classes
are reference implementations used by the CLI and the test suite.
"""

from __future__ import annotations

import logging
import threading
from typing import Iterable, Protocol

from merkledrop.schemas.entries import normalize_address

logger = logging.getLogger(__name__)


class TokenLedger(Protocol):
    """Fungible-asset ledger: debit the pool, credit the recipient."""

    def transfer(self, recipient: str, amount: int) -> bool:
        """
        Move amount from the airdrop pool to recipient.

        Returns:
            True on success, False if the transfer was refused
        """
        ...


class CredentialGate(Protocol):
    """External eligibility predicate (e.g. holds a required NFT)."""

    def holds(self, identity: str) -> bool:
        ...


class InMemoryTokenLedger:
    """
    Balance book with a single funded pool account.

    Refuses a transfer the pool cannot cover.
    """

    def __init__(self, pool_balance: int = 0) -> None:
        if pool_balance < 0:
            raise ValueError("Pool balance must be non-negative")
        self._pool = pool_balance
        self._balances: dict[str, int] = {}
        self._lock = threading.Lock()

    @property
    def pool_balance(self) -> int:
        return self._pool

    def fund(self, amount: int) -> None:
        if amount < 0:
            raise ValueError("Funding amount must be non-negative")
        with self._lock:
            self._pool += amount

    def balance_of(self, identity: str) -> int:
        return self._balances.get(normalize_address(identity), 0)

    def transfer(self, recipient: str, amount: int) -> bool:
        with self._lock:
            if amount < 0 or amount > self._pool:
                logger.warning(
                    "Transfer of %d to %s refused: pool holds %d",
                    amount, recipient, self._pool,
                )
                return False
            key = normalize_address(recipient)
            self._pool -= amount
            self._balances[key] = self._balances.get(key, 0) + amount
        return True


class AllowAllGate:
    """Gate that admits every identity (no credential requirement)."""

    def holds(self, identity: str) -> bool:
        return True


class StaticCredentialGate:
    """Gate backed by a fixed set of credential holders."""

    def __init__(self, holders: Iterable[str] = ()) -> None:
        self._holders = {normalize_address(h) for h in holders}

    def grant(self, identity: str) -> None:
        self._holders.add(normalize_address(identity))

    def revoke(self, identity: str) -> None:
        self._holders.discard(normalize_address(identity))

    def holds(self, identity: str) -> bool:
        try:
            return normalize_address(identity) in self._holders
        except ValueError:
            return False


__all__ = [
    "TokenLedger",
    "CredentialGate",
    "InMemoryTokenLedger",
    "AllowAllGate",
    "StaticCredentialGate",
]

"""
Claim outcome schemas.

PayoutInstruction is what a successful claim hands to the token ledger;
ClaimEvent is the append-only signal downstream auditors consume.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class PayoutInstruction(BaseModel):
    """Authorization for exactly one transfer from the pool."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    recipient: str = Field(..., description="Claimant identity (0x-hex)")
    amount: int = Field(..., ge=0)
    index: int = Field(..., ge=0, description="Claim slot consumed by this payout")


class ClaimEvent(BaseModel):
    """Emitted once per successful claim. Never replayed, never retracted."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    sequence: int = Field(..., ge=0, description="Position in the ledger's event log")
    claimant: str
    amount: int = Field(..., ge=0)
    index: int = Field(..., ge=0)
    claimed_at: datetime


__all__ = [
    "PayoutInstruction",
    "ClaimEvent",
]

"""
Claim Ledger

Root, deadline and claim bitmap for one campaign, plus the collaborator
interfaces it consults (token ledger, credential gate).
"""
from .bitmap import ClaimBitmap
from .collaborators import (
    AllowAllGate,
    CredentialGate,
    InMemoryTokenLedger,
    StaticCredentialGate,
    TokenLedger,
)
from .claim_ledger import ClaimLedger, ClaimListener

__all__ = [
    "ClaimBitmap",
    "ClaimLedger",
    "ClaimListener",
    "TokenLedger",
    "CredentialGate",
    "InMemoryTokenLedger",
    "AllowAllGate",
    "StaticCredentialGate",
]

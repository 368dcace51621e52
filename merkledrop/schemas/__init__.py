"""
Schemas for allow-list entries, claim outcomes, proof manifests and errors.
"""

from .entries import ADDRESS_SIZE, PACKED_ENTRY_SIZE, Entry, normalize_address
from .claims import ClaimEvent, PayoutInstruction
from .manifest import DropManifest, ProofRecord
from .errors import (
    ErrorCode,
    DropError,
    DropException,
    ClaimRejectedException,
    GateNotSatisfiedException,
    AlreadyClaimedException,
    WindowClosedException,
    InvalidProofException,
    TransferFailedException,
    LeafNotFoundException,
    EmptyTreeException,
    InvalidEntryException,
    ConfigException,
)

__all__ = [
    # Entries
    "ADDRESS_SIZE",
    "PACKED_ENTRY_SIZE",
    "Entry",
    "normalize_address",
    # Claims
    "ClaimEvent",
    "PayoutInstruction",
    # Manifest
    "DropManifest",
    "ProofRecord",
    # Errors
    "ErrorCode",
    "DropError",
    "DropException",
    "ClaimRejectedException",
    "GateNotSatisfiedException",
    "AlreadyClaimedException",
    "WindowClosedException",
    "InvalidProofException",
    "TransferFailedException",
    "LeafNotFoundException",
    "EmptyTreeException",
    "InvalidEntryException",
    "ConfigException",
]

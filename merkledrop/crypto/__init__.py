"""
Core cryptographic utilities.

keccak-256 hashing, sorted-pair node composition and hex codecs shared by
the tree builder and the claim ledger.
"""
from .hashing import (
    DIGEST_SIZE,
    UINT256_MAX,
    keccak256,
    hash_sorted_pair,
    uint256_bytes,
    to_hex,
    from_hex,
    to_bytes32,
)

__all__ = [
    "DIGEST_SIZE",
    "UINT256_MAX",
    "keccak256",
    "hash_sorted_pair",
    "uint256_bytes",
    "to_hex",
    "from_hex",
    "to_bytes32",
]

"""
Hashing Utilities
keccak-256 hashing and sorted-pair composition for Merkle commitments.

This module provides:
- keccak-256 hashing for raw bytes (Ethereum flavour, not SHA3-256)
- Sorted-pair parent hashing for Merkle nodes
- Hex encoding/decoding with 0x prefix
- Fixed-width big-endian integer encoding (uint256)

Commitment Notes:
- Every digest that enters or leaves the system is exactly 32 bytes
- Pair ordering compares raw digest bytes, never tree position
- The builder and the verifier both use hash_sorted_pair(), nothing else
"""
from __future__ import annotations

from eth_utils import keccak

DIGEST_SIZE = 32
UINT256_MAX = 2**256 - 1


def keccak256(data: bytes) -> bytes:
    """
    Compute keccak-256 hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte keccak-256 digest

    Example:
        >>> keccak256(b"").hex()
        'c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470'
    """
    return keccak(primitive=data)


def hash_sorted_pair(a: bytes, b: bytes) -> bytes:
    """
    Hash two sibling digests in byte order.

    parent = keccak256(min(a, b) + max(a, b))

    The verifier can recompute a parent without knowing whether
    its sibling sat on the left or the right.

    Args:
        a: First child digest
        b: Second child digest

    Returns:
        32-byte parent digest
    """
    if a <= b:
        return keccak256(a + b)
    return keccak256(b + a)


def uint256_bytes(value: int) -> bytes:
    """
    Encode an unsigned integer as 32 big-endian bytes.

    Raises:
        ValueError: If value is negative or does not fit in 256 bits
    """
    if value < 0 or value > UINT256_MAX:
        raise ValueError(f"Value out of uint256 range: {value}")
    return value.to_bytes(DIGEST_SIZE, "big")


def to_hex(data: bytes) -> str:
    """
    Convert bytes to hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert hexadecimal string (with 0x prefix) to bytes.

    Args:
        hex_string: Hex string with 0x prefix

    Returns:
        Decoded bytes

    Raises:
        ValueError: If string doesn't start with 0x, has odd length,
                   or contains invalid hex characters
    """
    if not hex_string.startswith("0x"):
        raise ValueError(
            f"Hex string must start with '0x' prefix, got: {hex_string[:10]}..."
        )

    hex_content = hex_string[2:]

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length after 0x prefix, "
            f"got length {len(hex_content)}"
        )

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def to_bytes32(value: bytes | str) -> bytes:
    """
    Coerce a digest given as bytes or 0x-hex into exactly 32 bytes.

    Raises:
        ValueError: If the value does not decode to 32 bytes
    """
    data = from_hex(value) if isinstance(value, str) else bytes(value)
    if len(data) != DIGEST_SIZE:
        raise ValueError(f"Expected {DIGEST_SIZE}-byte digest, got {len(data)} bytes")
    return data


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

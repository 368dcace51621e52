"""
Allow-list entry schema.

One Entry is one (address, index, amount) row of the allow-list. The
packed() encoding is the exact byte string the leaf hash commits to:

    address (20 bytes) || index (uint256, big-endian) || amount (uint256, big-endian)
"""

from __future__ import annotations

from typing import Any

from eth_utils import is_hex_address
from pydantic import BaseModel, ConfigDict, Field, field_validator

from merkledrop.crypto.hashing import UINT256_MAX, from_hex, uint256_bytes

ADDRESS_SIZE = 20
PACKED_ENTRY_SIZE = ADDRESS_SIZE + 32 + 32


def normalize_address(value: Any) -> str:
    """
    Normalize a 20-byte identity to lower-case 0x-hex.

    Accepts 0x-prefixed or bare hex strings of any case, or raw bytes.

    Raises:
        ValueError: If the value is not a 20-byte address
    """
    if isinstance(value, (bytes, bytearray)):
        if len(value) != ADDRESS_SIZE:
            raise ValueError(f"Address must be {ADDRESS_SIZE} bytes, got {len(value)}")
        return "0x" + bytes(value).hex()
    if not isinstance(value, str):
        raise ValueError(f"Address must be a hex string, got {type(value).__name__}")
    addr = value.strip()
    if not addr.startswith(("0x", "0X")):
        addr = "0x" + addr
    addr = "0x" + addr[2:]
    if not is_hex_address(addr):
        raise ValueError(f"Invalid address: {value}")
    return addr.lower()


class Entry(BaseModel):
    """An immutable allow-list row."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    address: str = Field(..., description="20-byte identity as lower-case 0x-hex")
    index: int = Field(..., ge=0, le=UINT256_MAX, description="Claim slot, unique per campaign")
    amount: int = Field(..., ge=0, le=UINT256_MAX, description="Entitlement in token units")

    @field_validator("address", mode="before")
    @classmethod
    def _check_address(cls, v: Any) -> str:
        return normalize_address(v)

    @field_validator("index", "amount", mode="before")
    @classmethod
    def _parse_uint(cls, v: Any) -> Any:
        # Allow-list rows arrive as decimal strings
        if isinstance(v, str):
            text = v.strip()
            if not text.isdigit():
                raise ValueError(f"Expected a non-negative decimal integer, got {v!r}")
            return int(text)
        if isinstance(v, bool):
            raise ValueError("Booleans are not valid integers here")
        return v

    @property
    def address_bytes(self) -> bytes:
        return from_hex(self.address)

    def packed(self) -> bytes:
        """Tight concatenation of address, index and amount (84 bytes)."""
        return self.address_bytes + uint256_bytes(self.index) + uint256_bytes(self.amount)


__all__ = [
    "ADDRESS_SIZE",
    "PACKED_ENTRY_SIZE",
    "Entry",
    "normalize_address",
]

"""
Proof manifest schemas.

A DropManifest is the exportable result of one tree build: the root and,
for every allow-list entry, the leaf and inclusion proof a claimant needs.
Digests are 0x-hex; amounts are decimal strings so they survive JSON
consumers without 256-bit integers.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from merkledrop.crypto.hashing import to_bytes32
from merkledrop.schemas.entries import Entry, normalize_address

HEX32_PATTERN = r"^0x[0-9a-f]{64}$"


class ProofRecord(BaseModel):
    """Everything a single claimant needs to submit a claim."""

    model_config = ConfigDict(extra="forbid")

    address: str
    index: int = Field(..., ge=0)
    amount: str = Field(..., pattern=r"^\d+$")
    leaf: str = Field(..., pattern=HEX32_PATTERN)
    proof: list[str] = Field(default_factory=list)

    @field_validator("address", mode="before")
    @classmethod
    def _check_address(cls, v: object) -> str:
        return normalize_address(v)

    @field_validator("proof")
    @classmethod
    def _check_proof(cls, v: list[str]) -> list[str]:
        for item in v:
            to_bytes32(item)
        return v

    def to_entry(self) -> Entry:
        return Entry(address=self.address, index=self.index, amount=self.amount)

    def proof_bytes(self) -> list[bytes]:
        return [to_bytes32(p) for p in self.proof]

    def leaf_bytes(self) -> bytes:
        return to_bytes32(self.leaf)

    def verify(self, root: bytes | str) -> bool:
        """Check this record's proof against a root."""
        from merkledrop.merkle.merkle_tree import leaf_hash, verify_merkle_proof

        if leaf_hash(self.to_entry()) != self.leaf_bytes():
            return False
        return verify_merkle_proof(self.proof_bytes(), self.leaf_bytes(), to_bytes32(root))


class DropManifest(BaseModel):
    """Root plus one ProofRecord per allow-list entry."""

    model_config = ConfigDict(extra="forbid")

    root: str = Field(..., pattern=HEX32_PATTERN)
    entry_count: int = Field(..., ge=1)
    depth: int = Field(..., ge=1)
    claims: list[ProofRecord] = Field(default_factory=list)

    def find(self, address: str, index: int | None = None) -> list[ProofRecord]:
        """Records for an address, optionally narrowed to one index."""
        addr = normalize_address(address)
        return [
            r for r in self.claims
            if r.address == addr and (index is None or r.index == index)
        ]

    def for_index(self, index: int) -> ProofRecord | None:
        for record in self.claims:
            if record.index == index:
                return record
        return None


__all__ = [
    "HEX32_PATTERN",
    "ProofRecord",
    "DropManifest",
]

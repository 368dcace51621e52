"""
Proof Manifest Export
Turns a built tree into a DropManifest that can be published next to the
root, so each claimant can look up their own leaf and proof.

This module provides:
- build_manifest: Build the tree and one ProofRecord per entry
- write_manifest / load_manifest: JSON persistence
"""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Sequence

from merkledrop.crypto.hashing import to_hex
from merkledrop.merkle.merkle_tree import MerkleTree, hash_leaves
from merkledrop.schemas.entries import Entry
from merkledrop.schemas.manifest import DropManifest, ProofRecord


logger = logging.getLogger(__name__)


def build_manifest(
    entries: Sequence[Entry],
    max_workers: int | None = None,
) -> DropManifest:
    """
    Build the tree for entries and export a proof for each of them.

    Records keep the input order of entries.

    Raises:
        EmptyTreeException: If entries is empty
    """
    leaves = hash_leaves(entries, max_workers=max_workers)
    tree = MerkleTree(leaves)

    records = [
        ProofRecord(
            address=entry.address,
            index=entry.index,
            amount=str(entry.amount),
            leaf=to_hex(leaf),
            proof=[to_hex(p) for p in tree.proof(leaf)],
        )
        for entry, leaf in zip(entries, leaves)
    ]

    return DropManifest(
        root=tree.hex_root,
        entry_count=len(tree),
        depth=tree.depth,
        claims=records,
    )


def write_manifest(manifest: DropManifest, path: str | Path) -> Path:
    """Write a manifest as indented JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(manifest.model_dump(mode="json"), f, indent=2)
    logger.info("Wrote manifest with %d records to %s", len(manifest.claims), path)
    return path


def load_manifest(path: str | Path) -> DropManifest:
    """Load and validate a manifest written by write_manifest()."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Manifest not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return DropManifest.model_validate(json.load(f))


__all__ = [
    "build_manifest",
    "write_manifest",
    "load_manifest",
]

"""
Merkle Tree and Commitments
Deterministic Merkle tree construction + proof generation/verification
for allow-list entries.

This module provides:
- leaf_hash: Canonical leaf digest for an Entry
- build_merkle_root: Compute root from leaf hashes
- MerkleTree: In-memory tree with proof lookup by leaf
- verify_merkle_proof: Pure verification of (proof, leaf, root)
- build_manifest: Export root and every entry's proof

Canonical Commitment Rules:
1. Leaf hashing: keccak256(address || uint256(index) || uint256(amount))
2. Parent hashing: keccak256(min(a, b) || max(a, b))
3. Leaves sorted by byte value; root independent of input order
4. Padding: promote an unpaired node unchanged
5. Empty tree: construction fails
6. Single leaf: root = leaf

Usage:
    from merkledrop.merkle import MerkleTree, leaf_hash, verify_merkle_proof

    tree = MerkleTree.from_entries(entries)
    leaf = leaf_hash(entries[2])
    proof = tree.proof(leaf)
    assert verify_merkle_proof(proof, leaf, tree.root)
"""
from .merkle_tree import (
    MerkleTree,
    leaf_hash,
    hash_leaves,
    build_layers,
    build_merkle_root,
    verify_merkle_proof,
    compute_tree_depth,
)

from .merkle_proofs import (
    build_manifest,
    write_manifest,
    load_manifest,
)


__all__ = [
    # Core types
    "MerkleTree",
    # Core functions
    "leaf_hash",
    "hash_leaves",
    "build_layers",
    "build_merkle_root",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Manifest export
    "build_manifest",
    "write_manifest",
    "load_manifest",
]

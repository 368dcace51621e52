"""
Merkle Tree Implementation
Deterministic Merkle tree construction, proof generation, and verification
over allow-list entries.

This module provides:
- Canonical leaf hashing for (address, index, amount) entries
- Deterministic Merkle root computation
- Inclusion proof generation for any leaf
- Pure proof verification (no tree required)

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = keccak256(address[20] || uint256(index) || uint256(amount))
2. Parent hashing: parent = keccak256(min(a, b) || max(a, b)), bytewise
3. Leaf layer is sorted by byte value before pairing
4. Padding rule: an unpaired last node is promoted to the next level unchanged
5. Empty leaves: construction fails with EmptyTreeException
6. Single leaf: root = leaf, proof = []

Determinism Notes:
- The root depends only on the multiset of leaves, never on input order
- Duplicate leaves are kept; each occupies its own position
- A promoted node contributes no sibling at that level, so proofs for
  some leaves are shorter than the tree depth
"""
from __future__ import annotations

import logging
from bisect import bisect_left
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Sequence

from merkledrop.crypto.hashing import DIGEST_SIZE, hash_sorted_pair, keccak256, to_hex
from merkledrop.schemas.entries import Entry
from merkledrop.schemas.errors import EmptyTreeException, LeafNotFoundException


logger = logging.getLogger(__name__)


def leaf_hash(entry: Entry) -> bytes:
    """
    Compute the canonical leaf digest for one allow-list entry.

    Args:
        entry: The allow-list row

    Returns:
        32-byte leaf digest
    """
    return keccak256(entry.packed())


def hash_leaves(entries: Iterable[Entry], max_workers: int | None = None) -> list[bytes]:
    """
    Hash entries into leaves, preserving input order.

    With max_workers > 1 the hashing runs in a thread pool; the result
    is identical to the sequential pass.
    """
    items = list(entries)
    if not max_workers or max_workers <= 1 or len(items) < 2:
        return [leaf_hash(e) for e in items]
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(leaf_hash, items))


def _next_level(nodes: Sequence[bytes]) -> list[bytes]:
    parents: list[bytes] = []
    for i in range(0, len(nodes) - 1, 2):
        parents.append(hash_sorted_pair(nodes[i], nodes[i + 1]))
    if len(nodes) % 2 == 1:
        # Promote unchanged
        parents.append(nodes[-1])
    return parents


def build_layers(leaves: Sequence[bytes]) -> list[list[bytes]]:
    """
    Build every level of the tree, leaf level first.

    Raises:
        EmptyTreeException: If leaves is empty
    """
    if len(leaves) == 0:
        raise EmptyTreeException()

    layers: list[list[bytes]] = [sorted(leaves)]
    while len(layers[-1]) > 1:
        layers.append(_next_level(layers[-1]))
    return layers


def build_merkle_root(leaves: Sequence[bytes]) -> bytes:
    """
    Build a Merkle root from a collection of leaf hashes.

    Example: [a, b, c] sorted as [a, b, c] -> [pair(a, b), c] -> [pair(pair(a, b), c)]

    Args:
        leaves: Leaf digests in any order

    Returns:
        32-byte Merkle root

    Raises:
        EmptyTreeException: If leaves is empty
    """
    return build_layers(leaves)[-1][0]


def verify_merkle_proof(proof: Sequence[bytes], leaf: bytes, root: bytes) -> bool:
    """
    Verify an inclusion proof.

    Folds the proof into the leaf with the sorted-pair rule and compares
    the result to the root. Needs nothing but its three arguments.

    Args:
        proof: Sibling digests, leaf level first
        leaf: The leaf digest being proven
        root: The published root

    Returns:
        True if the proof is valid, False otherwise
    """
    if len(leaf) != DIGEST_SIZE or len(root) != DIGEST_SIZE:
        return False

    current = bytes(leaf)
    for sibling in proof:
        if len(sibling) != DIGEST_SIZE:
            return False
        current = hash_sorted_pair(current, bytes(sibling))

    return current == bytes(root)


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of levels from leaves to root (inclusive).

    A single leaf has depth 1, two or three leaves depth 2, and so on.
    Returns 0 for an empty tree.
    """
    if num_leaves <= 0:
        return 0
    depth = 1
    n = num_leaves
    while n > 1:
        n = (n + 1) // 2
        depth += 1
    return depth


class MerkleTree:
    """
    In-memory tree built once from a fixed set of leaves.

    Holds the layers only for the duration of a build/export session;
    the claim ledger never sees this object, only its root and proofs.

    Example:
        >>> tree = MerkleTree.from_entries(entries)
        >>> proof = tree.proof(leaf_hash(entries[1]))
        >>> verify_merkle_proof(proof, leaf_hash(entries[1]), tree.root)
        True
    """

    def __init__(self, leaves: Sequence[bytes]) -> None:
        for leaf in leaves:
            if len(leaf) != DIGEST_SIZE:
                raise ValueError(f"Leaf must be {DIGEST_SIZE} bytes, got {len(leaf)}")
        self._layers = build_layers(leaves)
        logger.info(
            "Built Merkle tree: %d leaves, depth %d, root %s",
            len(self._layers[0]), self.depth, self.hex_root,
        )

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[Entry],
        max_workers: int | None = None,
    ) -> "MerkleTree":
        return cls(hash_leaves(entries, max_workers=max_workers))

    @property
    def root(self) -> bytes:
        return self._layers[-1][0]

    @property
    def hex_root(self) -> str:
        return to_hex(self.root)

    @property
    def depth(self) -> int:
        return len(self._layers)

    @property
    def leaves(self) -> list[bytes]:
        """Leaf layer in tree (sorted) order."""
        return list(self._layers[0])

    def __len__(self) -> int:
        return len(self._layers[0])

    def __contains__(self, leaf: object) -> bool:
        return isinstance(leaf, (bytes, bytearray)) and self._position(bytes(leaf)) is not None

    def _position(self, leaf: bytes) -> int | None:
        level = self._layers[0]
        pos = bisect_left(level, leaf)
        if pos < len(level) and level[pos] == leaf:
            return pos
        return None

    def proof(self, leaf: bytes) -> list[bytes]:
        """
        Generate the inclusion proof for a leaf.

        Walks from the leaf's first position in the sorted leaf level up
        to the root, recording the sibling at each level. A promoted
        node has no sibling and adds nothing.

        Raises:
            LeafNotFoundException: If the leaf is not in the tree
        """
        position = self._position(bytes(leaf))
        if position is None:
            raise LeafNotFoundException(
                f"Leaf {to_hex(bytes(leaf))} is not in the tree",
                leaf=to_hex(bytes(leaf)),
            )

        siblings: list[bytes] = []
        index = position
        for level in self._layers[:-1]:
            sibling_index = index ^ 1
            if sibling_index < len(level):
                siblings.append(level[sibling_index])
            index //= 2
        return siblings

    def proof_for_entry(self, entry: Entry) -> list[bytes]:
        return self.proof(leaf_hash(entry))

    def verify(self, proof: Sequence[bytes], leaf: bytes) -> bool:
        return verify_merkle_proof(proof, leaf, self.root)


__all__ = [
    "leaf_hash",
    "hash_leaves",
    "build_layers",
    "build_merkle_root",
    "verify_merkle_proof",
    "compute_tree_depth",
    "MerkleTree",
]

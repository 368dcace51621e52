"""
CLI Proof Command

Produce the leaf and inclusion proof for one (address, index, amount) entry,
either by rebuilding the tree from the allow-list or by looking it up in a
previously written manifest.

Usage:
    merkledrop proof --allowlist addresses.csv --address 0x.. --index 2 --amount 40
    merkledrop proof --manifest manifest.json --address 0x.. --index 2
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from merkledrop.allowlist import load_allowlist
from merkledrop.crypto.hashing import to_hex
from merkledrop.merkle.merkle_proofs import load_manifest
from merkledrop.merkle.merkle_tree import MerkleTree, hash_leaves, leaf_hash
from merkledrop.schemas.entries import Entry
from merkledrop.schemas.errors import DropException, LeafNotFoundException
from merkledrop.schemas.manifest import ProofRecord


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


def _from_manifest(args: Namespace) -> ProofRecord:
    manifest = load_manifest(args.manifest)
    matches = manifest.find(args.address, index=args.index)
    if args.amount is not None:
        matches = [r for r in matches if int(r.amount) == args.amount]
    if not matches:
        raise LeafNotFoundException(
            f"No manifest record for {args.address} at index {args.index}"
        )
    record = matches[0]
    if not record.verify(manifest.root):
        raise DropException(f"Manifest record at index {record.index} does not verify")
    return record


def _from_allowlist(args: Namespace, allowlist_path: str, delimiter: str) -> tuple[ProofRecord, str]:
    if args.amount is None:
        raise ValueError("--amount is required when building from an allow-list")
    parsed = load_allowlist(allowlist_path, delimiter=delimiter)
    tree = MerkleTree(hash_leaves(parsed.entries))
    entry = Entry(address=args.address, index=args.index, amount=args.amount)
    leaf = leaf_hash(entry)
    record = ProofRecord(
        address=entry.address,
        index=entry.index,
        amount=str(entry.amount),
        leaf=to_hex(leaf),
        proof=[to_hex(p) for p in tree.proof(leaf)],
    )
    return record, tree.hex_root


def proof_cmd(args: Namespace) -> int:
    """Execute the proof command."""
    build_config = args.runtime_config.build
    allowlist_path = args.allowlist or build_config.allowlist_path

    try:
        if args.manifest:
            record = _from_manifest(args)
            root = load_manifest(args.manifest).root
        elif allowlist_path:
            record, root = _from_allowlist(
                args, allowlist_path, args.delimiter or build_config.delimiter
            )
        else:
            print("Error: give --manifest or --allowlist", file=sys.stderr)
            return EXIT_RUNTIME_ERROR
    except LeafNotFoundException as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except (OSError, ValueError, DropException) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        payload = record.model_dump(mode="json")
        payload["root"] = root
        print(json.dumps(payload, indent=2))
    else:
        print(f"root: {root}")
        print(f"leaf: {record.leaf}")
        print(f"proof ({len(record.proof)}):")
        for sibling in record.proof:
            print(f"  {sibling}")

    logger.info("Proof for index %d: %d siblings", record.index, len(record.proof))
    return EXIT_SUCCESS

"""
CLI Verify Command

Check an inclusion proof against a root without the tree. Either verify one
(proof, leaf) pair or every record in a manifest.

Usage:
    merkledrop verify --root 0x.. --leaf 0x.. --proof 0x.. --proof 0x..
    merkledrop verify --root 0x.. --address 0x.. --index 2 --amount 40 --proof 0x..
    merkledrop verify --manifest manifest.json
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass, field

from merkledrop.crypto.hashing import to_bytes32, to_hex
from merkledrop.merkle.merkle_proofs import load_manifest
from merkledrop.merkle.merkle_tree import leaf_hash, verify_merkle_proof
from merkledrop.schemas.entries import Entry


logger = logging.getLogger(__name__)


EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


@dataclass
class VerifySummary:
    """Summary of proof verification for CLI output."""
    root: str = ""
    checked: int = 0
    failed_indices: list[int] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def all_ok(self) -> bool:
        return self.checked > 0 and not self.failed_indices and not self.errors

    def to_dict(self) -> dict:
        d = asdict(self)
        d["valid"] = self.all_ok
        return d


def _verify_single(args: Namespace, summary: VerifySummary) -> None:
    root = to_bytes32(args.root or args.runtime_config.campaign.root or "")
    summary.root = to_hex(root)
    if args.leaf:
        leaf = to_bytes32(args.leaf)
    elif args.address and args.index is not None and args.amount is not None:
        leaf = leaf_hash(Entry(address=args.address, index=args.index, amount=args.amount))
    else:
        raise ValueError("give --leaf or all of --address/--index/--amount")

    proof = [to_bytes32(p) for p in (args.proof or [])]
    summary.checked = 1
    if not verify_merkle_proof(proof, leaf, root):
        summary.failed_indices.append(args.index if args.index is not None else -1)


def _verify_manifest(args: Namespace, summary: VerifySummary) -> None:
    manifest = load_manifest(args.manifest)
    root = args.root or manifest.root
    summary.root = root
    for record in manifest.claims:
        summary.checked += 1
        if not record.verify(root):
            summary.failed_indices.append(record.index)


def verify_cmd(args: Namespace) -> int:
    """Execute the verify command."""
    summary = VerifySummary()
    try:
        if args.manifest:
            _verify_manifest(args, summary)
        else:
            _verify_single(args, summary)
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print(f"root: {summary.root}")
        print(f"checked: {summary.checked}")
        print(f"valid: {str(summary.all_ok).lower()}")
        for index in summary.failed_indices[:20]:
            print(f"  ✗ index {index}")

    if summary.all_ok:
        logger.info("Verification passed")
        return EXIT_SUCCESS
    logger.warning("Verification failed")
    return EXIT_VERIFICATION_FAILED

"""
CLI Build Command

Read an allow-list, build the Merkle tree and print the root. Optionally
write a proof manifest for every entry.

Usage:
    merkledrop build --allowlist addresses.csv [--out manifest.json] [--json]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace
from dataclasses import asdict, dataclass

from merkledrop.allowlist import load_allowlist
from merkledrop.merkle.merkle_proofs import build_manifest, write_manifest
from merkledrop.schemas.errors import DropException


logger = logging.getLogger(__name__)


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1


@dataclass
class BuildSummary:
    """Summary of a tree build for CLI output."""
    allowlist: str = ""
    root: str = ""
    entries: int = 0
    skipped_rows: int = 0
    depth: int = 0
    total_amount: str = "0"
    manifest: str | None = None

    def to_dict(self) -> dict:
        d = asdict(self)
        if self.manifest is None:
            del d["manifest"]
        return d


def print_summary_human(summary: BuildSummary) -> None:
    print(f"allowlist: {summary.allowlist}")
    print(f"root: {summary.root}")
    print(f"entries: {summary.entries}")
    print(f"skipped_rows: {summary.skipped_rows}")
    print(f"depth: {summary.depth}")
    print(f"total_amount: {summary.total_amount}")
    if summary.manifest:
        print(f"manifest: {summary.manifest}")


def build_cmd(args: Namespace) -> int:
    """
    Execute the build command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code
    """
    build_config = args.runtime_config.build
    allowlist_path = args.allowlist or build_config.allowlist_path
    if not allowlist_path:
        print("Error: no allow-list given (--allowlist or MERKLEDROP_ALLOWLIST)", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    delimiter = args.delimiter or build_config.delimiter
    workers = args.workers if args.workers is not None else build_config.max_workers
    out_path = args.out or build_config.manifest_path

    try:
        parsed = load_allowlist(allowlist_path, delimiter=delimiter)
        manifest = build_manifest(parsed.entries, max_workers=workers)
    except (OSError, ValueError, DropException) as e:
        print(f"Error building tree: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    summary = BuildSummary(
        allowlist=str(allowlist_path),
        root=manifest.root,
        entries=manifest.entry_count,
        skipped_rows=parsed.skipped_count,
        depth=manifest.depth,
        total_amount=str(parsed.total_amount),
    )

    if out_path:
        summary.manifest = str(write_manifest(manifest, out_path))

    if args.json:
        print(json.dumps(summary.to_dict(), indent=2))
    else:
        print_summary_human(summary)

    logger.info("Build complete: root %s", manifest.root)
    return EXIT_SUCCESS

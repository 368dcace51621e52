"""
CLI Main Entry Point

Parses command-line arguments and dispatches to subcommands.

Usage:
    python -m merkledrop_cli build --allowlist addresses.csv [--out manifest.json] [--json]
    python -m merkledrop_cli proof --allowlist addresses.csv --address 0x.. --index N --amount A
    python -m merkledrop_cli proof --manifest manifest.json --address 0x.. --index N
    python -m merkledrop_cli verify --root 0x.. --leaf 0x.. --proof 0x.. [--proof 0x..]
    python -m merkledrop_cli verify --manifest manifest.json
    python -m merkledrop_cli config --show [--yaml]

Environment Variables:
    MERKLEDROP_ALLOWLIST        Default allow-list path
    MERKLEDROP_MANIFEST         Default manifest output path
    MERKLEDROP_ROOT             Published root used by verify
    MERKLEDROP_LOG_LEVEL        Log level (default: INFO)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import traceback
from pathlib import Path
from typing import Sequence

import yaml

from merkledrop.config.runtime import load_config
from merkledrop.schemas.errors import DropException
from merkledrop_cli.commands import build, proof, verify


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2

LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s | %(message)s"


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Send merkledrop logs to stderr, plus log_file when configured."""
    numeric = logging.getLevelName(level.upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO

    targets: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        targets.append(logging.FileHandler(log_file))

    logging.basicConfig(level=numeric, format=LOG_FORMAT, handlers=targets, force=True)


def _add_entry_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--address", type=str, default=None, help="Recipient address (0x-hex)")
    parser.add_argument("--index", type=int, default=None, help="Claim index")
    parser.add_argument("--amount", type=int, default=None, help="Amount in token units")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog="merkledrop",
        description="Merkle airdrop tooling - build roots, export proofs, verify claims.",
    )
    parser.add_argument(
        "--version", action="version", version="%(prog)s 0.1.0"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Path to a YAML configuration file",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level (overrides config)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Print tracebacks on unexpected errors",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # --- build command ---
    build_parser = subparsers.add_parser(
        "build",
        help="Build the Merkle root from an allow-list",
    )
    build_parser.add_argument("--allowlist", "-a", type=str, default=None, help="Allow-list CSV path")
    build_parser.add_argument("--delimiter", type=str, default=None, help="Field delimiter (default: ,)")
    build_parser.add_argument("--out", "-o", type=str, default=None, help="Write a proof manifest here")
    build_parser.add_argument("--workers", type=int, default=None, help="Threads for leaf hashing")
    build_parser.add_argument("--json", action="store_true", default=False, help="Output as JSON")
    build_parser.set_defaults(func=build.build_cmd)

    # --- proof command ---
    proof_parser = subparsers.add_parser(
        "proof",
        help="Print the leaf and inclusion proof for one entry",
    )
    proof_parser.add_argument("--allowlist", "-a", type=str, default=None, help="Allow-list CSV path")
    proof_parser.add_argument("--manifest", "-m", type=str, default=None, help="Manifest JSON path")
    proof_parser.add_argument("--delimiter", type=str, default=None, help="Field delimiter (default: ,)")
    _add_entry_args(proof_parser)
    proof_parser.add_argument("--json", action="store_true", default=False, help="Output as JSON")
    proof_parser.set_defaults(func=proof.proof_cmd)

    # --- verify command ---
    verify_parser = subparsers.add_parser(
        "verify",
        help="Verify an inclusion proof against a root",
    )
    verify_parser.add_argument("--root", "-r", type=str, default=None, help="Published root (0x-hex)")
    verify_parser.add_argument("--leaf", "-l", type=str, default=None, help="Leaf digest (0x-hex)")
    verify_parser.add_argument(
        "--proof", "-p", action="append", default=None,
        help="Sibling digest (0x-hex); repeat in leaf-to-root order",
    )
    verify_parser.add_argument("--manifest", "-m", type=str, default=None, help="Verify every manifest record")
    _add_entry_args(verify_parser)
    verify_parser.add_argument("--json", action="store_true", default=False, help="Output as JSON")
    verify_parser.set_defaults(func=verify.verify_cmd)

    # --- config command ---
    config_parser = subparsers.add_parser(
        "config",
        help="Show the effective configuration",
    )
    config_parser.add_argument("--show", action="store_true", default=False, help="Show current configuration (default)")
    config_parser.add_argument("--yaml", action="store_true", default=False, help="Print as YAML instead of JSON")
    config_parser.set_defaults(func=config_cmd)

    return parser


def config_cmd(args: argparse.Namespace) -> int:
    """Print the effective configuration (file, then MERKLEDROP_* overrides)."""
    settings = args.runtime_config.to_dict()
    if args.yaml:
        print(yaml.safe_dump(settings, sort_keys=False), end="")
    else:
        print(json.dumps(settings, indent=2))
    return EXIT_SUCCESS


def main(argv: Sequence[str] | None = None) -> int:
    """
    Run the merkledrop CLI.

    Args:
        argv: Arguments without the program name (default: sys.argv[1:])

    Returns:
        0 on success, 1 on a runtime or input error, 2 when a proof fails
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_RUNTIME_ERROR

    try:
        args.runtime_config = load_config(args.config)
    except (OSError, DropException) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    setup_logging(
        level=args.log_level or args.runtime_config.log_level,
        log_file=args.runtime_config.log_file,
    )

    try:
        return args.func(args)
    except DropException as e:
        print(f"Error [{e.code.value}]: {e.message}", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        return EXIT_RUNTIME_ERROR
    except Exception as e:
        if args.debug:
            traceback.print_exc()
        else:
            print(f"Error: {e} (rerun with --debug for a traceback)", file=sys.stderr)
        return EXIT_RUNTIME_ERROR


if __name__ == "__main__":
    sys.exit(main())

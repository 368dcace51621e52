"""
merkledrop CLI

Command-line interface for building and checking Merkle airdrop commitments.

Usage:
    python -m merkledrop_cli build --allowlist addresses.csv --out manifest.json
    python -m merkledrop_cli proof --manifest manifest.json --address 0x.. --index 2
    python -m merkledrop_cli verify --manifest manifest.json
"""

__version__ = "0.1.0"

"""
merkledrop: Merkle-committed token airdrops.

An allow-list of (address, index, amount) entries is committed to a single
32-byte root offline; claimants later prove membership against that root
and the claim ledger pays each index out at most once.
"""

__version__ = "0.1.0"

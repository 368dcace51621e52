"""
Hashing Unit Tests
Tests for merkledrop/crypto/hashing.py

Tests:
- keccak256 known values
- sorted-pair composition is order independent
- uint256 encoding bounds
- to_hex/from_hex/to_bytes32 validation
"""
import pytest

from merkledrop.crypto.hashing import (
    UINT256_MAX,
    from_hex,
    hash_sorted_pair,
    keccak256,
    to_bytes32,
    to_hex,
    uint256_bytes,
)


class TestKeccak256:
    """Tests for keccak256()."""

    def test_keccak256_empty_known_value(self):
        """keccak256 of empty bytes is the Ethereum constant, not SHA3-256."""
        assert keccak256(b"").hex() == (
            "c5d2460186f7233c927e7db2dcc703c0e500b653ca82273b7bfad8045d85a470"
        )

    def test_keccak256_length(self):
        assert len(keccak256(b"hello")) == 32

    def test_keccak256_different_inputs_different_outputs(self):
        assert keccak256(b"input1") != keccak256(b"input2")


class TestHashSortedPair:
    """Tests for hash_sorted_pair()."""

    def test_commutative(self):
        a = keccak256(b"a")
        b = keccak256(b"b")

        assert hash_sorted_pair(a, b) == hash_sorted_pair(b, a)

    def test_orders_by_byte_value(self):
        low = bytes(31) + b"\x01"
        high = b"\x01" + bytes(31)

        assert hash_sorted_pair(high, low) == keccak256(low + high)

    def test_equal_children(self):
        a = keccak256(b"same")

        assert hash_sorted_pair(a, a) == keccak256(a + a)


class TestUint256Bytes:
    """Tests for uint256_bytes()."""

    def test_big_endian_32_bytes(self):
        assert uint256_bytes(1) == bytes(31) + b"\x01"
        assert uint256_bytes(0) == bytes(32)

    def test_max_value(self):
        assert uint256_bytes(UINT256_MAX) == b"\xff" * 32

    def test_out_of_range_rejected(self):
        with pytest.raises(ValueError):
            uint256_bytes(UINT256_MAX + 1)
        with pytest.raises(ValueError):
            uint256_bytes(-1)


class TestHexConversion:
    """Tests for to_hex(), from_hex() and to_bytes32()."""

    def test_to_hex_format(self):
        assert to_hex(bytes.fromhex("deadbeef")) == "0xdeadbeef"

    def test_from_hex_roundtrip(self):
        data = keccak256(b"x")

        assert from_hex(to_hex(data)) == data

    def test_from_hex_requires_prefix(self):
        with pytest.raises(ValueError, match="0x"):
            from_hex("deadbeef")

    def test_from_hex_odd_length(self):
        with pytest.raises(ValueError, match="even length"):
            from_hex("0xabc")

    def test_from_hex_invalid_chars(self):
        with pytest.raises(ValueError, match="Invalid hex"):
            from_hex("0xzz")

    def test_to_bytes32_accepts_bytes_and_hex(self):
        digest = keccak256(b"y")

        assert to_bytes32(digest) == digest
        assert to_bytes32(to_hex(digest)) == digest

    def test_to_bytes32_rejects_wrong_length(self):
        with pytest.raises(ValueError, match="32-byte"):
            to_bytes32(b"\x00" * 31)
        with pytest.raises(ValueError, match="32-byte"):
            to_bytes32("0x" + "00" * 33)

"""
Proof Manifest Unit Tests
Tests for merkledrop/merkle/merkle_proofs.py and merkledrop/schemas/manifest.py
"""
import pytest

from merkledrop.crypto.hashing import to_hex
from merkledrop.merkle import MerkleTree, build_manifest, leaf_hash, load_manifest, write_manifest
from merkledrop.schemas.errors import EmptyTreeException
from merkledrop.schemas.manifest import DropManifest, ProofRecord

from fixtures.common import ADDR_B, make_entries


class TestBuildManifest:
    """Tests for build_manifest()."""

    def test_root_matches_tree(self):
        entries = make_entries(6)
        manifest = build_manifest(entries)

        assert manifest.root == MerkleTree.from_entries(entries).hex_root
        assert manifest.entry_count == 6
        assert manifest.depth == 4

    def test_record_per_entry_in_input_order(self):
        entries = make_entries(5)
        manifest = build_manifest(entries)

        assert [r.index for r in manifest.claims] == [0, 1, 2, 3, 4]
        for record, entry in zip(manifest.claims, entries):
            assert record.leaf == to_hex(leaf_hash(entry))
            assert record.amount == str(entry.amount)

    def test_every_record_verifies(self):
        manifest = build_manifest(make_entries(9))

        assert all(r.verify(manifest.root) for r in manifest.claims)

    def test_record_with_wrong_amount_fails(self):
        manifest = build_manifest(make_entries(4))
        record = manifest.claims[1].model_copy(update={"amount": "21"})

        assert not record.verify(manifest.root)

    def test_empty_fails(self):
        with pytest.raises(EmptyTreeException):
            build_manifest([])

    def test_find(self):
        manifest = build_manifest(make_entries(8))

        found = manifest.find(ADDR_B.lower())
        assert [r.index for r in found] == [1, 5]
        assert [r.index for r in manifest.find(ADDR_B, index=5)] == [5]
        assert manifest.for_index(7).index == 7
        assert manifest.for_index(99) is None


class TestManifestPersistence:
    """Tests for write_manifest()/load_manifest()."""

    def test_write_then_load(self, tmp_path):
        manifest = build_manifest(make_entries(5))
        path = write_manifest(manifest, tmp_path / "out" / "manifest.json")

        loaded = load_manifest(path)

        assert loaded == manifest

    def test_load_missing(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_manifest(tmp_path / "missing.json")


class TestProofRecordValidation:
    """Schema validation of ProofRecord/DropManifest."""

    def test_rejects_bad_proof_element(self):
        with pytest.raises(ValueError):
            ProofRecord(
                address=ADDR_B, index=0, amount="1",
                leaf="0x" + "00" * 32, proof=["0x1234"],
            )

    def test_rejects_non_decimal_amount(self):
        with pytest.raises(ValueError):
            ProofRecord(address=ADDR_B, index=0, amount="0x10", leaf="0x" + "00" * 32)

    def test_rejects_bad_root(self):
        with pytest.raises(ValueError):
            DropManifest(root="0xabc", entry_count=1, depth=1)

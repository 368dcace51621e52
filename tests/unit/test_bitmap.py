"""
Claim Bitmap Unit Tests
Tests for merkledrop/ledger/bitmap.py
"""
import pytest

from merkledrop.ledger.bitmap import WORD_BITS, ClaimBitmap


class TestClaimBitmap:
    """Tests for ClaimBitmap."""

    def test_default_unclaimed(self):
        bitmap = ClaimBitmap()

        assert not bitmap.is_set(0)
        assert not bitmap.is_set(10**30)
        assert bitmap.count == 0

    def test_set_marks_only_that_index(self):
        bitmap = ClaimBitmap()
        bitmap.set(5)

        assert bitmap.is_set(5)
        assert not bitmap.is_set(4)
        assert not bitmap.is_set(6)
        assert 5 in bitmap
        assert len(bitmap) == 1

    def test_set_twice_raises(self):
        bitmap = ClaimBitmap()
        bitmap.set(3)

        with pytest.raises(ValueError, match="already set"):
            bitmap.set(3)
        assert bitmap.count == 1

    def test_word_boundaries(self):
        bitmap = ClaimBitmap()
        for index in (WORD_BITS - 1, WORD_BITS, 2 * WORD_BITS + 7):
            bitmap.set(index)

        assert bitmap.indices() == [WORD_BITS - 1, WORD_BITS, 2 * WORD_BITS + 7]

    def test_sparse_huge_index(self):
        bitmap = ClaimBitmap()
        bitmap.set(2**255)

        assert bitmap.is_set(2**255)
        assert bitmap.indices() == [2**255]

    def test_unset_restores_state(self):
        bitmap = ClaimBitmap()
        bitmap.set(9)
        bitmap.unset(9)

        assert not bitmap.is_set(9)
        assert bitmap.count == 0
        assert bitmap.indices() == []

    def test_unset_unclaimed_is_noop(self):
        bitmap = ClaimBitmap()
        bitmap.set(1)
        bitmap.unset(2)

        assert bitmap.count == 1

    def test_negative_index_rejected(self):
        bitmap = ClaimBitmap()

        with pytest.raises(ValueError):
            bitmap.set(-1)
        assert -1 not in bitmap

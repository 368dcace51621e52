"""
Claim bitmap: one bit per claim slot, packed into 256-bit words.

Word ``index >> 8`` holds bit ``index & 0xff``. Only words with at least
one set bit are stored, so a sparse index space costs nothing.
"""

from __future__ import annotations

WORD_BITS = 256


class ClaimBitmap:
    """Sparse bitset keyed by claim index. Not thread-safe on its own."""

    def __init__(self) -> None:
        self._words: dict[int, int] = {}
        self._count = 0

    @staticmethod
    def _locate(index: int) -> tuple[int, int]:
        if index < 0:
            raise ValueError(f"Claim index must be non-negative, got {index}")
        return index // WORD_BITS, 1 << (index % WORD_BITS)

    def is_set(self, index: int) -> bool:
        word, mask = self._locate(index)
        return bool(self._words.get(word, 0) & mask)

    def set(self, index: int) -> None:
        """Mark an index claimed. Raises ValueError if it already is."""
        word, mask = self._locate(index)
        current = self._words.get(word, 0)
        if current & mask:
            raise ValueError(f"Index {index} is already set")
        self._words[word] = current | mask
        self._count += 1

    def unset(self, index: int) -> None:
        """Clear a bit set by a claim whose payout did not go through."""
        word, mask = self._locate(index)
        current = self._words.get(word, 0)
        if not current & mask:
            return
        current &= ~mask
        if current:
            self._words[word] = current
        else:
            del self._words[word]
        self._count -= 1

    @property
    def count(self) -> int:
        return self._count

    def __contains__(self, index: object) -> bool:
        return isinstance(index, int) and index >= 0 and self.is_set(index)

    def __len__(self) -> int:
        return self._count

    def indices(self) -> list[int]:
        """All set indices in ascending order."""
        out: list[int] = []
        for word in sorted(self._words):
            bits = self._words[word]
            base = word * WORD_BITS
            while bits:
                low = bits & -bits
                out.append(base + low.bit_length() - 1)
                bits ^= low
        return out


__all__ = ["WORD_BITS", "ClaimBitmap"]

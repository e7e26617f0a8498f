"""Fixed-size membership set over dense node indices."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import numpy as np

from frontier.core.exceptions import IndexOutOfRangeError


class BitSet:
    """Set of integers in ``[0, size)`` backed by a boolean numpy mask.

    Reads outside the range return False; writes outside it raise
    IndexOutOfRangeError.
    """

    __slots__ = ("_mask", "_size")

    def __init__(self, size: int, members: Iterable[int] = ()) -> None:
        if size < 0:
            raise ValueError(f"size must be non-negative, got {size}")
        self._size = size
        self._mask = np.zeros(size, dtype=bool)
        self.update(members)

    def _check(self, index: int) -> None:
        if not 0 <= index < self._size:
            raise IndexOutOfRangeError(index, self._size)

    def add(self, index: int) -> None:
        self._check(index)
        self._mask[index] = True

    def update(self, indices: Iterable[int]) -> None:
        """Add every index at once."""
        batch = np.fromiter(indices, dtype=np.int64) if not isinstance(indices, np.ndarray) else indices
        if len(batch) == 0:
            return
        low, high = int(batch.min()), int(batch.max())
        if low < 0:
            raise IndexOutOfRangeError(low, self._size)
        if high >= self._size:
            raise IndexOutOfRangeError(high, self._size)
        self._mask[batch] = True

    def discard(self, index: int) -> None:
        if 0 <= index < self._size:
            self._mask[index] = False

    def test_and_set(self, index: int) -> bool:
        """Set the member and report whether it was already present."""
        self._check(index)
        present = bool(self._mask[index])
        self._mask[index] = True
        return present

    def clear(self) -> None:
        self._mask[:] = False

    @property
    def mask(self) -> np.ndarray:
        """Boolean membership array of length ``size``."""
        return self._mask

    @property
    def size(self) -> int:
        return self._size

    def __contains__(self, index: object) -> bool:
        if not isinstance(index, (int, np.integer)):
            return False
        if not 0 <= index < self._size:
            return False
        return bool(self._mask[index])

    def __len__(self) -> int:
        return int(np.count_nonzero(self._mask))

    def __iter__(self) -> Iterator[int]:
        return iter(np.flatnonzero(self._mask).tolist())

    def __repr__(self) -> str:
        return f"BitSet(size={self._size}, members={len(self)})"

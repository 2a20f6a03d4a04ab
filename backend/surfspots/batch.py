"""
SurfSpots Backend — Batch Coordinator
=======================================

What:  Splits ``length`` items into contiguous, fixed-size index ranges.
How:   Batcher yields closed ranges [0, bs-1], [bs, 2bs-1], ... with the last
       range clamped to length-1. Zero length or a non-positive batch size
       yields no batches at all.
Who:   Used by SqlSpotStore.create_spots() to chunk multi-row INSERTs.

Caller contract:
    Every range must be written inside ONE transaction. Any failure rolls
    back all ranges; commit happens exactly once after the last range.
"""

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True)
class Batch:
    """Closed index range [i, j]."""

    i: int
    j: int

    def as_slice(self) -> slice:
        return slice(self.i, self.j + 1)

    def __len__(self) -> int:
        return self.j - self.i + 1


class Batcher:
    """
    Iterator of Batch ranges.

    Usage:
        batcher = Batcher(len(entries), 100)
        while batcher.has_next():
            batch = batcher.next_batch()
            insert(entries[batch.as_slice()])
    """

    def __init__(self, length: int, batch_size: int):
        self.length = length
        self.batch_size = batch_size
        self._i = 0
        self._j = min(batch_size - 1, length - 1)
        self._has_next = length > 0 and batch_size > 0

    def has_next(self) -> bool:
        return self._has_next

    def next_batch(self) -> Batch:
        """
        Return the next range.

        Raises:
            StopIteration: when every index has been handed out.
        """
        if not self._has_next:
            raise StopIteration

        batch = Batch(self._i, self._j)

        self._i = self._j + 1
        self._j = min(self._j + self.batch_size, self.length - 1)
        if self._i > self.length - 1:
            self._has_next = False

        return batch

    def __iter__(self) -> Iterator[Batch]:
        return self

    def __next__(self) -> Batch:
        return self.next_batch()

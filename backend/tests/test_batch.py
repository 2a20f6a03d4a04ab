"""
SurfSpots Backend — Batch Coordinator & Paging Tests
======================================================

What we test:
    ✅ Batcher splits lengths into contiguous closed ranges
    ✅ Empty input and non-positive batch sizes yield nothing
    ✅ next_batch() raises StopIteration once exhausted
    ✅ limit/offset clamping
"""

import pytest

from surfspots import paging
from surfspots.batch import Batch, Batcher


class TestBatcher:
    @pytest.mark.parametrize(
        "length, batch_size, expected",
        [
            (5, 2, [(0, 1), (2, 3), (4, 4)]),
            (4, 2, [(0, 1), (2, 3)]),
            (3, 10, [(0, 2)]),
            (1, 1, [(0, 0)]),
            (0, 2, []),
            (5, 0, []),
        ],
    )
    def test_ranges(self, length, batch_size, expected):
        batches = [(batch.i, batch.j) for batch in Batcher(length, batch_size)]
        assert batches == expected

    def test_ranges_cover_every_index_exactly_once(self):
        covered = []
        for batch in Batcher(103, 10):
            covered.extend(range(batch.i, batch.j + 1))
        assert covered == list(range(103))

    def test_has_next_and_next_batch(self):
        batcher = Batcher(3, 2)

        assert batcher.has_next()
        assert batcher.next_batch() == Batch(0, 1)
        assert batcher.has_next()
        assert batcher.next_batch() == Batch(2, 2)
        assert not batcher.has_next()

    def test_next_batch_after_exhaustion_raises(self):
        batcher = Batcher(1, 5)
        batcher.next_batch()

        with pytest.raises(StopIteration):
            batcher.next_batch()

    def test_batch_slice_and_length(self):
        items = ["a", "b", "c", "d", "e"]
        batch = Batch(2, 4)

        assert items[batch.as_slice()] == ["c", "d", "e"]
        assert len(batch) == 3


class TestPaging:
    def test_limit_below_minimum_falls_back_to_default(self):
        assert paging.clamp_limit(0) == paging.DEFAULT_LIMIT
        assert paging.clamp_limit(-5) == paging.DEFAULT_LIMIT

    def test_limit_above_maximum_is_capped(self):
        assert paging.clamp_limit(1000) == paging.MAX_LIMIT

    def test_limit_in_range_is_kept(self):
        assert paging.clamp_limit(1) == 1
        assert paging.clamp_limit(100) == 100

    def test_offset_is_never_negative(self):
        assert paging.clamp_offset(-1) == 0
        assert paging.clamp_offset(30) == 30

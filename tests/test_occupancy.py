"""Tests for the OccupancyIndex module."""

import numpy as np

from glide_snake.occupancy import OccupancyIndex


class TestOccupancyIndex:
    def test_membership(self):
        index = OccupancyIndex([(1, 1), (2, 1)])
        assert (1, 1) in index
        assert (0, 0) not in index
        assert len(index) == 2

    def test_add_and_discard(self):
        index = OccupancyIndex()
        index.add((3, 4))
        assert (3, 4) in index
        index.discard((3, 4))
        assert (3, 4) not in index
        index.discard((9, 9))  # absent cells are fine
        assert len(index) == 0

    def test_rebuild_replaces_contents(self):
        index = OccupancyIndex([(0, 0)])
        index.rebuild([(5, 5), (6, 5)])
        assert index == {(5, 5), (6, 5)}

    def test_equality(self):
        assert OccupancyIndex([(1, 2)]) == OccupancyIndex([(1, 2)])
        assert OccupancyIndex([(1, 2)]) != OccupancyIndex([(2, 1)])
        assert OccupancyIndex([(1, 2)]) == {(1, 2)}


class TestOccupancyMask:
    def test_mask_indexed_y_x(self):
        index = OccupancyIndex([(3, 1)])
        mask = index.to_mask(4)
        assert mask.shape == (4, 4)
        assert mask[1, 3]
        assert mask.sum() == 1

    def test_mask_skips_out_of_bounds(self):
        index = OccupancyIndex([(5, 5), (0, 0)])
        mask = index.to_mask(4)
        assert np.count_nonzero(mask) == 1

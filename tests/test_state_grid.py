"""
Tests for StateGrid initialization and seeding.
"""

import unittest

import numpy as np

from OI_Libs.constants import DISTANCE_SENTINEL, FLAG_BAND, FLAG_KNOWN, FLAG_UNKNOWN
from OI_Libs.InpaintingLib.priority_queue import PixelPriorityQueue
from OI_Libs.InpaintingLib.state_grid import StateGrid


class TestFromMask(unittest.TestCase):
    """Test flag and distance initialization."""

    def test_flags_and_distances_follow_mask(self):
        """Test masked pixels start UNKNOWN at the sentinel distance."""
        mask = np.array([[0, 1, 0],
                         [0, 0, 1]], dtype=bool)

        grid = StateGrid.from_mask(mask)

        self.assertEqual((grid.width, grid.height), (3, 2))
        self.assertEqual(grid.flags.tolist(), [FLAG_KNOWN, FLAG_UNKNOWN, FLAG_KNOWN,
                                               FLAG_KNOWN, FLAG_KNOWN, FLAG_UNKNOWN])
        self.assertEqual(grid.distances[1], DISTANCE_SENTINEL)
        self.assertEqual(grid.distances[0], 0.0)

    def test_two_dimensional_views_share_memory(self):
        """Test flags2d / distances2d are views of the flat arrays."""
        grid = StateGrid.from_mask(np.zeros((2, 3), dtype=bool))

        grid.flags2d[1, 2] = FLAG_BAND
        grid.distances2d[0, 1] = 7.0

        self.assertEqual(grid.flags[5], FLAG_BAND)
        self.assertEqual(grid.distances[1], 7.0)


class TestSeedBand(unittest.TestCase):
    """Test initial wavefront detection."""

    def setUp(self):
        self.queue = PixelPriorityQueue()

    def test_ring_around_block_is_seeded(self):
        """Test only masked pixels touching known ones become BAND."""
        mask = np.zeros((5, 5), dtype=bool)
        mask[1:4, 1:4] = True
        grid = StateGrid.from_mask(mask)

        seeds = grid.seed_band(self.queue)

        self.assertEqual(seeds, [6, 7, 8, 11, 13, 16, 17, 18])
        self.assertEqual(grid.flags[12], FLAG_UNKNOWN)
        self.assertEqual(grid.distances[12], DISTANCE_SENTINEL)
        for index in seeds:
            self.assertEqual(grid.flags[index], FLAG_BAND)
            self.assertEqual(grid.distances[index], 0.0)
            self.assertTrue(self.queue.has(index))
        self.assertEqual(self.queue.size, 8)

    def test_diagonal_contact_is_not_enough(self):
        """Test 4-connectivity: a diagonal known neighbor does not seed."""
        mask = np.ones((3, 3), dtype=bool)
        mask[0, 0] = False
        grid = StateGrid.from_mask(mask)

        seeds = grid.seed_band(self.queue)

        self.assertEqual(seeds, [1, 3])

    def test_empty_mask_has_no_seeds(self):
        """Test an empty mask produces an empty wavefront."""
        grid = StateGrid.from_mask(np.zeros((4, 4), dtype=bool))

        self.assertEqual(grid.seed_band(self.queue), [])
        self.assertTrue(grid.is_resolved())

    def test_full_mask_has_no_seeds(self):
        """Test a fully masked grid has no known pixel to start from."""
        grid = StateGrid.from_mask(np.ones((4, 4), dtype=bool))

        self.assertEqual(grid.seed_band(self.queue), [])
        self.assertEqual(self.queue.size, 0)
        self.assertEqual(grid.count(FLAG_UNKNOWN), 16)


class TestNeighbors(unittest.TestCase):
    """Test 4-neighbor enumeration."""

    def setUp(self):
        self.grid = StateGrid.from_mask(np.zeros((3, 4), dtype=bool))

    def test_corner(self):
        """Test the top-left corner has two neighbors."""
        self.assertEqual(sorted(self.grid.neighbors(0)), [1, 4])

    def test_row_end_does_not_wrap(self):
        """Test the last pixel of a row does not see the next row's first pixel."""
        self.assertEqual(sorted(self.grid.neighbors(3)), [2, 7])

    def test_interior(self):
        """Test an interior pixel has four neighbors."""
        self.assertEqual(sorted(self.grid.neighbors(5)), [1, 4, 6, 9])

    def test_bottom_edge(self):
        """Test the bottom row has no neighbor below."""
        self.assertEqual(sorted(self.grid.neighbors(9)), [5, 8, 10])


if __name__ == "__main__":
    unittest.main()

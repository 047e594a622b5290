"""
Tests for the indexed pixel priority queue.

Tests cover:
- Push / extract ordering
- Tie-breaking by pixel index
- Decrease-key semantics
- Membership and size
- Error handling
"""

import unittest

from OI_Libs.InpaintingLib.priority_queue import PixelPriorityQueue


class TestPushExtract(unittest.TestCase):
    """Test basic heap ordering."""

    def setUp(self):
        self.queue = PixelPriorityQueue()

    def test_empty_queue(self):
        """Test a new queue is empty."""
        self.assertEqual(self.queue.size, 0)
        self.assertEqual(len(self.queue), 0)
        self.assertFalse(self.queue)

    def test_extracts_in_distance_order(self):
        """Test entries come out by increasing distance."""
        for index, dist in [(10, 3.0), (11, 0.5), (12, 2.0), (13, 1.0), (14, 4.5)]:
            self.queue.push(index, dist)

        popped = [self.queue.extract_min() for _ in range(5)]

        self.assertEqual(popped, [(11, 0.5), (13, 1.0), (12, 2.0), (10, 3.0), (14, 4.5)])
        self.assertEqual(self.queue.size, 0)

    def test_equal_distances_pop_by_index(self):
        """Test ties are broken by the smaller pixel index."""
        for index in [9, 2, 7, 4, 0]:
            self.queue.push(index, 1.0)

        order = [self.queue.extract_min()[0] for _ in range(5)]

        self.assertEqual(order, [0, 2, 4, 7, 9])

    def test_long_sequence_is_sorted(self):
        """Test a larger mixed sequence pops in (distance, index) order."""
        entries = [(i, float((i * 37) % 11)) for i in range(60)]
        for index, dist in entries:
            self.queue.push(index, dist)

        popped = []
        while self.queue:
            popped.append(self.queue.extract_min())

        self.assertEqual(popped, sorted(entries, key=lambda e: (e[1], e[0])))

    def test_peek_does_not_remove(self):
        """Test peek returns the minimum and leaves it queued."""
        self.queue.push(5, 2.0)
        self.queue.push(6, 1.0)

        self.assertEqual(self.queue.peek(), (6, 1.0))
        self.assertEqual(self.queue.size, 2)


class TestDecreaseKey(unittest.TestCase):
    """Test decrease-key behaviour."""

    def setUp(self):
        self.queue = PixelPriorityQueue()
        self.queue.push(1, 5.0)
        self.queue.push(2, 3.0)
        self.queue.push(3, 4.0)

    def test_decrease_moves_entry_to_front(self):
        """Test lowering a key makes it the new minimum."""
        self.queue.decrease_key(1, 0.5)

        self.assertEqual(self.queue.extract_min(), (1, 0.5))

    def test_larger_key_is_ignored(self):
        """Test decrease_key with a larger distance is a no-op."""
        self.queue.decrease_key(2, 10.0)

        self.assertEqual(self.queue.extract_min(), (2, 3.0))

    def test_equal_key_is_ignored(self):
        """Test decrease_key with the same distance is a no-op."""
        self.queue.decrease_key(3, 4.0)

        self.queue.extract_min()
        self.assertEqual(self.queue.extract_min(), (3, 4.0))

    def test_absent_index_is_ignored(self):
        """Test decrease_key on a missing index does nothing."""
        self.queue.decrease_key(99, 0.0)

        self.assertFalse(self.queue.has(99))
        self.assertEqual(self.queue.size, 3)


class TestMembership(unittest.TestCase):
    """Test has / contains and error handling."""

    def setUp(self):
        self.queue = PixelPriorityQueue()

    def test_has_tracks_push_and_extract(self):
        """Test membership follows the queue contents."""
        self.queue.push(42, 1.0)
        self.assertTrue(self.queue.has(42))
        self.assertIn(42, self.queue)

        self.queue.extract_min()
        self.assertFalse(self.queue.has(42))
        self.assertNotIn(42, self.queue)

    def test_extract_from_empty_raises(self):
        """Test extract_min on an empty queue raises IndexError."""
        with self.assertRaises(IndexError):
            self.queue.extract_min()

    def test_peek_empty_raises(self):
        """Test peek on an empty queue raises IndexError."""
        with self.assertRaises(IndexError):
            self.queue.peek()

    def test_duplicate_push_raises(self):
        """Test pushing a queued index twice raises ValueError."""
        self.queue.push(3, 1.0)

        with self.assertRaises(ValueError):
            self.queue.push(3, 0.5)


if __name__ == "__main__":
    unittest.main()

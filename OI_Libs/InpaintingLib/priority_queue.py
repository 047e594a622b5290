"""
Indexed binary min-heap for the fast marching wavefront.

Entries are (pixel index, distance) pairs ordered by distance, with the pixel
index as the secondary key so equal distances always pop in raster order.
A slot map from pixel index to heap position gives O(1) membership tests and
O(log n) decrease-key.

Example:
    >>> queue = PixelPriorityQueue()
    >>> queue.push(7, 1.0)
    >>> queue.push(3, 0.5)
    >>> queue.decrease_key(7, 0.25)
    >>> queue.extract_min()
    (7, 0.25)
"""

from typing import Dict, List, Tuple


class PixelPriorityQueue:
    """Array-backed min-heap keyed on (distance, pixel index)."""

    def __init__(self):
        """Initialize an empty queue."""
        self._indices: List[int] = []
        self._distances: List[float] = []
        self._slots: Dict[int, int] = {}

    def __len__(self) -> int:
        return len(self._indices)

    def __contains__(self, index: int) -> bool:
        return index in self._slots

    @property
    def size(self) -> int:
        """Number of entries currently queued."""
        return len(self._indices)

    def has(self, index: int) -> bool:
        """Return True if ``index`` is queued."""
        return index in self._slots

    def push(self, index: int, dist: float) -> None:
        """
        Insert a pixel with its tentative distance.

        Args:
            index: Pixel linear index (y * width + x)
            dist: Tentative arrival distance

        Raises:
            ValueError: If the index is already queued
        """
        if index in self._slots:
            raise ValueError(f"Pixel {index} is already queued")

        self._indices.append(index)
        self._distances.append(dist)
        slot = len(self._indices) - 1
        self._slots[index] = slot
        self._sift_up(slot)

    def extract_min(self) -> Tuple[int, float]:
        """
        Remove and return the entry with the smallest (distance, index).

        Returns:
            Tuple of (pixel index, distance)

        Raises:
            IndexError: If the queue is empty
        """
        if not self._indices:
            raise IndexError("extract_min from an empty queue")

        index = self._indices[0]
        dist = self._distances[0]
        del self._slots[index]

        last_index = self._indices.pop()
        last_dist = self._distances.pop()
        if self._indices:
            self._indices[0] = last_index
            self._distances[0] = last_dist
            self._slots[last_index] = 0
            self._sift_down(0)

        return index, dist

    def peek(self) -> Tuple[int, float]:
        """Return the minimum entry without removing it."""
        if not self._indices:
            raise IndexError("peek into an empty queue")
        return self._indices[0], self._distances[0]

    def decrease_key(self, index: int, new_dist: float) -> None:
        """
        Lower the distance of a queued pixel.

        No-op if the pixel is not queued or ``new_dist`` is not smaller than
        its current distance.
        """
        slot = self._slots.get(index)
        if slot is None:
            return
        if new_dist < self._distances[slot]:
            self._distances[slot] = new_dist
            self._sift_up(slot)

    def _less(self, a: int, b: int) -> bool:
        da = self._distances[a]
        db = self._distances[b]
        if da != db:
            return da < db
        return self._indices[a] < self._indices[b]

    def _swap(self, a: int, b: int) -> None:
        indices = self._indices
        distances = self._distances
        indices[a], indices[b] = indices[b], indices[a]
        distances[a], distances[b] = distances[b], distances[a]
        self._slots[indices[a]] = a
        self._slots[indices[b]] = b

    def _sift_up(self, slot: int) -> None:
        while slot > 0:
            parent = (slot - 1) >> 1
            if not self._less(slot, parent):
                break
            self._swap(slot, parent)
            slot = parent

    def _sift_down(self, slot: int) -> None:
        count = len(self._indices)
        while True:
            smallest = slot
            left = 2 * slot + 1
            right = left + 1
            if left < count and self._less(left, smallest):
                smallest = left
            if right < count and self._less(right, smallest):
                smallest = right
            if smallest == slot:
                return
            self._swap(slot, smallest)
            slot = smallest

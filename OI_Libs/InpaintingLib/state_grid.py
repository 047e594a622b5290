"""
Per-pixel fast marching state.

StateGrid owns the flag array (KNOWN / BAND / UNKNOWN) and the distance
array for one inpainting run. Both are flat numpy arrays indexed by
``y * width + x``; ``flags2d`` and ``distances2d`` are reshaped views used
for windowed reads.
"""

from typing import Iterator, List

import numpy as np
from scipy import ndimage

from OI_Libs.constants import (
    DISTANCE_SENTINEL,
    FLAG_BAND,
    FLAG_KNOWN,
    FLAG_UNKNOWN,
)
from OI_Libs.InpaintingLib.priority_queue import PixelPriorityQueue

# 4-connected cross used to find masked pixels touching trusted ones
_FOUR_CONNECTED = ndimage.generate_binary_structure(2, 1)


class StateGrid:
    """
    Flags and distances for every pixel of the working image.

    Attributes:
        width: Grid width
        height: Grid height
        flags: uint8 array of length width * height
        distances: float64 array of length width * height
    """

    def __init__(self, width: int, height: int, flags: np.ndarray, distances: np.ndarray):
        self.width = width
        self.height = height
        self.flags = flags
        self.distances = distances

    @classmethod
    def from_mask(cls, mask: np.ndarray) -> "StateGrid":
        """
        Create the initial grid from a boolean mask.

        Masked pixels start UNKNOWN with the sentinel distance, all others
        KNOWN with distance 0.

        Args:
            mask: Boolean array of shape (height, width); True = reconstruct

        Returns:
            New StateGrid (no BAND pixels yet; see seed_band)
        """
        height, width = mask.shape
        flat_mask = mask.reshape(-1)
        flags = np.where(flat_mask, FLAG_UNKNOWN, FLAG_KNOWN).astype(np.uint8)
        distances = np.where(flat_mask, DISTANCE_SENTINEL, 0.0).astype(np.float64)
        return cls(width, height, flags, distances)

    @property
    def flags2d(self) -> np.ndarray:
        return self.flags.reshape(self.height, self.width)

    @property
    def distances2d(self) -> np.ndarray:
        return self.distances.reshape(self.height, self.width)

    def seed_band(self, queue: PixelPriorityQueue) -> List[int]:
        """
        Turn every UNKNOWN pixel with a 4-connected KNOWN neighbor into BAND.

        Seeds get distance 0 and are pushed onto ``queue`` in raster order.

        Args:
            queue: Queue receiving the initial wavefront

        Returns:
            Linear indices of the seeded pixels, in raster order
        """
        flags2d = self.flags2d
        known = flags2d == FLAG_KNOWN
        touching_known = ndimage.binary_dilation(known, structure=_FOUR_CONNECTED)
        seeds = np.flatnonzero((flags2d == FLAG_UNKNOWN) & touching_known)

        self.flags[seeds] = FLAG_BAND
        self.distances[seeds] = 0.0
        for index in seeds.tolist():
            queue.push(index, 0.0)

        return seeds.tolist()

    def neighbors(self, index: int) -> Iterator[int]:
        """Yield the linear indices of the in-bounds 4-neighbors of ``index``."""
        width = self.width
        x = index % width
        if x > 0:
            yield index - 1
        if x < width - 1:
            yield index + 1
        if index >= width:
            yield index - width
        if index + width < width * self.height:
            yield index + width

    def count(self, flag: int) -> int:
        """Number of pixels currently carrying ``flag``."""
        return int(np.count_nonzero(self.flags == flag))

    def is_resolved(self) -> bool:
        """True when no BAND or UNKNOWN pixel remains."""
        return not np.any(self.flags != FLAG_KNOWN)

"""
Image data models for the inpainting engine.

This module defines the single pixel layout the engine works on: a flat,
interleaved RGBA buffer indexed by ``y * width + x``.

Classes:
    PixelBuffer: Width, height and an (W*H, 4) uint8 pixel array

Type Aliases:
    RgbaColor: A tuple of 4 integers representing RGBA color values (0-255)
"""

from dataclasses import dataclass
from typing import Any, Tuple

import numpy as np
from PIL import Image

from OI_Libs.constants import RGBA_CHANNELS, RGBA_MODE
from OI_Libs.errors import InvalidInputError

RgbaColor = Tuple[int, int, int, int]


@dataclass
class PixelBuffer:
    """Flat interleaved RGBA pixel storage.

    Attributes:
        width: Image width in pixels (> 0)
        height: Image height in pixels (> 0)
        pixels: uint8 array of shape (width * height, 4); row ``y * width + x``
                holds the (R, G, B, A) of pixel (x, y)
    """
    width: int
    height: int
    pixels: np.ndarray

    def __post_init__(self):
        """Validate dimensions and pixel array layout."""
        if self.width <= 0 or self.height <= 0:
            raise InvalidInputError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )

        expected = (self.width * self.height, RGBA_CHANNELS)
        if self.pixels.shape != expected:
            raise InvalidInputError(
                f"Pixel array must have shape {expected}, got {self.pixels.shape}"
            )

        if self.pixels.dtype != np.uint8:
            raise InvalidInputError(f"Pixel array must be uint8, got {self.pixels.dtype}")

    @classmethod
    def from_image(cls, image: Any) -> "PixelBuffer":
        """
        Build a buffer from a PIL Image.

        Args:
            image: PIL Image in any mode convertible to RGBA

        Returns:
            New PixelBuffer holding a copy of the image's RGBA data

        Raises:
            TypeError: If image is not a PIL Image
        """
        if not hasattr(image, "convert"):
            raise TypeError(f"Expected PIL Image, got {type(image)}")

        rgba = image if image.mode == RGBA_MODE else image.convert(RGBA_MODE)
        width, height = rgba.size
        pixels = np.array(rgba, dtype=np.uint8).reshape(width * height, RGBA_CHANNELS)
        return cls(width=width, height=height, pixels=pixels)

    @property
    def size(self) -> Tuple[int, int]:
        return self.width, self.height

    def to_image(self) -> Any:
        """Return the buffer as a new RGBA PIL Image."""
        return Image.fromarray(self.view2d().copy())

    def view2d(self) -> np.ndarray:
        """Return an (height, width, 4) view sharing memory with ``pixels``."""
        return self.pixels.reshape(self.height, self.width, RGBA_CHANNELS)

    def copy(self) -> "PixelBuffer":
        return PixelBuffer(self.width, self.height, self.pixels.copy())

    def get_pixel(self, x: int, y: int) -> RgbaColor:
        """Return the RGBA tuple at (x, y)."""
        r, g, b, a = self.pixels[y * self.width + x]
        return int(r), int(g), int(b), int(a)

    def crop(self, x0: int, y0: int, x1: int, y1: int) -> "PixelBuffer":
        """
        Copy a rectangular region into a new buffer.

        Args:
            x0, y0: Top-left corner (inclusive)
            x1, y1: Bottom-right corner (exclusive)

        Returns:
            New PixelBuffer of size (x1 - x0) x (y1 - y0)
        """
        region = self.view2d()[y0:y1, x0:x1]
        width = x1 - x0
        height = y1 - y0
        return PixelBuffer(width, height, region.reshape(width * height, RGBA_CHANNELS).copy())

    def paste(self, other: "PixelBuffer", x0: int, y0: int) -> None:
        """Write ``other`` into this buffer with its top-left corner at (x0, y0)."""
        self.view2d()[y0:y0 + other.height, x0:x0 + other.width] = other.view2d()

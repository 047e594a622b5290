"""
Pytest configuration and shared fixtures for Open Inpaint tests.

This module provides shared test fixtures and configuration
used across multiple test modules.
"""

import numpy as np
import pytest
from PIL import Image

RED = (255, 0, 0, 255)
BLUE = (0, 0, 255, 255)


@pytest.fixture
def sample_rgba_colors():
    """
    Provide a list of sample RGBA color tuples for testing.

    Returns:
        List of (R, G, B, A) tuples with common test colors
    """
    return [
        (255, 0, 0, 255),    # Red
        (0, 255, 0, 255),    # Green
        (0, 0, 255, 255),    # Blue
        (255, 255, 255, 255),  # White
        (0, 0, 0, 255),      # Black
        (128, 128, 128, 255),  # Gray
    ]


@pytest.fixture
def random_rgba_image():
    """
    Factory producing reproducible noise images.

    Returns:
        Callable (width, height, seed=0) -> RGBA PIL Image
    """
    def make(width, height, seed=0):
        rng = np.random.default_rng(seed)
        data = rng.integers(0, 256, size=(height, width, 4), dtype=np.uint8)
        return Image.fromarray(data)

    return make


@pytest.fixture
def split_image():
    """
    10x10 image, red for x < 5 and blue for x >= 5.
    """
    image = Image.new("RGBA", (10, 10), RED)
    image.paste(BLUE, (5, 0, 10, 10))
    return image


@pytest.fixture
def center_strip_mask():
    """
    10x10 mask covering columns 4 and 5 on every row.
    """
    mask = np.zeros((10, 10), dtype=bool)
    mask[:, 4:6] = True
    return mask


@pytest.fixture
def blob_mask():
    """
    Irregular 24x18 mask: a filled disc plus a thin diagonal scratch.
    """
    yy, xx = np.mgrid[0:18, 0:24]
    mask = (xx - 9) ** 2 + (yy - 8) ** 2 <= 16
    for step in range(10):
        mask[2 + step, 12 + step] = True
    return mask

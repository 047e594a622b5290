"""
Mask preprocessing for inpainting.

A mask marks the pixels to reconstruct (True) versus the pixels trusted as
ground truth (False). Masks reach the engine as PIL images, 2-D arrays or
flat sequences; everything here converts them to a boolean numpy array of
shape (height, width).

Functions:
    normalize_mask: Convert any accepted mask form to a (H, W) bool array
    mask_from_color: Mask pixels matching a color within a tolerance
    dilate_mask: Grow a mask with 4-connected dilation
    mask_bounding_box: Bounding box of the masked pixels
    mask_to_image: Render a mask as an 8-bit grayscale image
"""

from typing import Any, Optional, Sequence, Tuple

import numpy as np
from PIL import Image
from scipy import ndimage

from OI_Libs.constants import COLOR_CHANNELS, MASK_THRESHOLD, MASK_VALUE, RGBA_MODE
from OI_Libs.errors import InvalidInputError

_FOUR_CONNECTED = ndimage.generate_binary_structure(2, 1)


def normalize_mask(
    mask: Any,
    width: int,
    height: int,
    threshold: int = MASK_THRESHOLD,
) -> np.ndarray:
    """
    Convert a mask to a boolean array of shape (height, width).

    Args:
        mask: One of
              - PIL Image of size (width, height); pixels whose grayscale
                value is above ``threshold`` are masked
              - 2-D array of shape (height, width) with 0/1 or bool values
              - flat sequence/array of length width * height with 0/1 values
        width: Expected image width
        height: Expected image height
        threshold: Grayscale cutoff for image masks (0-254)

    Returns:
        Boolean numpy array, True where pixels must be reconstructed

    Raises:
        InvalidInputError: On size mismatch or values outside {0, 1}
    """
    if hasattr(mask, "convert") and hasattr(mask, "size"):
        if tuple(mask.size) != (width, height):
            raise InvalidInputError(
                f"Mask size {mask.size[0]}x{mask.size[1]} does not match "
                f"image size {width}x{height}"
            )
        if not (0 <= threshold < MASK_VALUE):
            raise InvalidInputError(f"threshold must be 0-254, got {threshold}")
        gray = np.asarray(mask.convert("L"))
        return gray > threshold

    array = np.asarray(mask)

    if array.ndim == 2:
        if array.shape != (height, width):
            raise InvalidInputError(
                f"Mask shape {array.shape} does not match image shape {(height, width)}"
            )
    elif array.ndim == 1:
        if array.size != width * height:
            raise InvalidInputError(
                f"Mask length {array.size} does not match image pixel count {width * height}"
            )
        array = array.reshape(height, width)
    else:
        raise InvalidInputError(f"Mask must be 1-D or 2-D, got {array.ndim} dimensions")

    if array.dtype == np.bool_:
        return array.copy()

    if not np.isin(array, (0, 1)).all():
        raise InvalidInputError("Mask values must be 0 or 1")

    return array.astype(bool)


def mask_from_color(
    image: Any,
    color: Sequence[int],
    tolerance: int = 0,
) -> np.ndarray:
    """
    Mask every pixel whose RGB is within ``tolerance`` of ``color``.

    Useful for removing marks drawn in a known color. Alpha is ignored.

    Args:
        image: PIL Image
        color: (R, G, B) or (R, G, B, A) color to match
        tolerance: Maximum per-channel absolute difference (0-255)

    Returns:
        Boolean array of shape (height, width)

    Raises:
        TypeError: If image is not a PIL Image
        ValueError: If tolerance is out of range
    """
    if not hasattr(image, "convert"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    if not (0 <= tolerance <= 255):
        raise ValueError(f"tolerance must be 0-255, got {tolerance}")

    rgb = np.asarray(image.convert(RGBA_MODE), dtype=np.int16)[:, :, :COLOR_CHANNELS]
    target = np.asarray(tuple(color)[:COLOR_CHANNELS], dtype=np.int16)
    return (np.abs(rgb - target) <= tolerance).all(axis=2)


def dilate_mask(mask: np.ndarray, iterations: int = 1) -> np.ndarray:
    """
    Grow a boolean mask by ``iterations`` pixels (4-connected).

    Covers anti-aliased fringes around painted or detected regions.

    Args:
        mask: Boolean array of shape (height, width)
        iterations: Number of dilation steps (>= 0); 0 returns a copy

    Returns:
        New boolean array

    Raises:
        ValueError: If iterations is negative
    """
    if iterations < 0:
        raise ValueError(f"iterations must be >= 0, got {iterations}")

    mask = np.asarray(mask, dtype=bool)
    if iterations == 0 or not mask.any():
        return mask.copy()

    return ndimage.binary_dilation(mask, structure=_FOUR_CONNECTED, iterations=iterations)


def mask_bounding_box(
    mask: np.ndarray,
    margin: int = 0,
) -> Optional[Tuple[int, int, int, int]]:
    """
    Bounding box of the masked pixels.

    Args:
        mask: Boolean array of shape (height, width)
        margin: Pixels to grow the box by on every side (clamped to the mask)

    Returns:
        (x0, y0, x1, y1) with exclusive x1/y1, or None if nothing is masked
    """
    rows = np.flatnonzero(mask.any(axis=1))
    if rows.size == 0:
        return None
    cols = np.flatnonzero(mask.any(axis=0))

    height, width = mask.shape
    x0 = max(0, int(cols[0]) - margin)
    y0 = max(0, int(rows[0]) - margin)
    x1 = min(width, int(cols[-1]) + 1 + margin)
    y1 = min(height, int(rows[-1]) + 1 + margin)
    return x0, y0, x1, y1


def mask_to_image(mask: np.ndarray) -> Any:
    """Render a boolean mask as a mode "L" image (255 = masked)."""
    mask = np.asarray(mask, dtype=bool)
    return Image.fromarray(np.where(mask, MASK_VALUE, 0).astype(np.uint8))

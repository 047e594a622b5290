"""
Color reconstruction for a single masked pixel.

The fill color is a weighted average of the KNOWN pixels within ``radius``
of the target. Each contributor q is weighted by the product of:

- direction: |<normalize(target - q), grad T>| + 1e-6, favoring pixels
  aligned with the propagation direction
- level: 1 / (1 + |T(q) - T(target)|), favoring pixels at a similar
  arrival time
- distance: 1 / |target - q|**2, favoring proximity

Only the RGB channels are written; alpha is never touched.

Functions:
    distance_gradient: Finite-difference gradient of the distance field
    reconstruct_pixel: Compute and store the fill color of one pixel
"""

import math
from typing import Tuple

import numpy as np

from OI_Libs.constants import (
    COLOR_CHANNELS,
    DIRECTION_EPSILON,
    FLAG_KNOWN,
    FLAG_UNKNOWN,
    RGBA_CHANNELS,
)
from OI_Libs.InpaintingLib.state_grid import StateGrid


def distance_gradient(grid: StateGrid, x: int, y: int) -> Tuple[float, float]:
    """
    Gradient of the distance field at (x, y).

    Per axis: central difference when both neighbors are not UNKNOWN,
    one-sided difference when only one is, 0 when neither is.

    Returns:
        Tuple of (gx, gy)
    """
    width = grid.width
    flags = grid.flags
    distances = grid.distances
    index = y * width + x
    here = float(distances[index])

    has_left = x > 0 and flags[index - 1] != FLAG_UNKNOWN
    has_right = x < width - 1 and flags[index + 1] != FLAG_UNKNOWN
    if has_left and has_right:
        gx = (float(distances[index + 1]) - float(distances[index - 1])) / 2.0
    elif has_right:
        gx = float(distances[index + 1]) - here
    elif has_left:
        gx = here - float(distances[index - 1])
    else:
        gx = 0.0

    has_up = y > 0 and flags[index - width] != FLAG_UNKNOWN
    has_down = y < grid.height - 1 and flags[index + width] != FLAG_UNKNOWN
    if has_up and has_down:
        gy = (float(distances[index + width]) - float(distances[index - width])) / 2.0
    elif has_down:
        gy = float(distances[index + width]) - here
    elif has_up:
        gy = here - float(distances[index - width])
    else:
        gy = 0.0

    return gx, gy


def reconstruct_pixel(
    grid: StateGrid,
    pixels: np.ndarray,
    x: int,
    y: int,
    radius: float,
) -> bool:
    """
    Compute the fill color of (x, y) and write it into ``pixels``.

    Args:
        grid: Current state grid (read only)
        pixels: Working uint8 array of shape (width * height, 4), modified in place
        x: Pixel column
        y: Pixel row
        radius: Neighborhood radius in pixels

    Returns:
        True if a color was written, False if no KNOWN pixel lies within
        ``radius`` (the pixel keeps its prior value)
    """
    width = grid.width
    height = grid.height
    index = y * width + x
    reach = int(math.ceil(radius))

    x0 = max(0, x - reach)
    x1 = min(width - 1, x + reach)
    y0 = max(0, y - reach)
    y1 = min(height - 1, y + reach)

    window_flags = grid.flags2d[y0:y1 + 1, x0:x1 + 1]
    known = window_flags == FLAG_KNOWN
    if not known.any():
        return False

    offset_x = (x - np.arange(x0, x1 + 1, dtype=np.float64))[np.newaxis, :]
    offset_y = (y - np.arange(y0, y1 + 1, dtype=np.float64))[:, np.newaxis]
    offset_x, offset_y = np.broadcast_arrays(offset_x, offset_y)
    length = np.sqrt(offset_x * offset_x + offset_y * offset_y)

    valid = known & (length > 0) & (length <= radius)
    if not valid.any():
        return False

    length = length[valid]
    norm_x = offset_x[valid] / length
    norm_y = offset_y[valid] / length
    gx, gy = distance_gradient(grid, x, y)

    w_dir = np.abs(norm_x * gx + norm_y * gy) + DIRECTION_EPSILON
    level_gap = np.abs(grid.distances2d[y0:y1 + 1, x0:x1 + 1][valid] - grid.distances[index])
    w_level = 1.0 / (1.0 + level_gap)
    w_dist = 1.0 / (length * length)
    weight = w_dir * w_level * w_dist

    sum_weight = float(weight.sum())
    if sum_weight <= 0.0:
        return False

    window_colors = pixels.reshape(height, width, RGBA_CHANNELS)[y0:y1 + 1, x0:x1 + 1, :COLOR_CHANNELS]
    color = weight @ window_colors[valid].astype(np.float64) / sum_weight
    # Round half up
    pixels[index, :COLOR_CHANNELS] = np.clip(np.floor(color + 0.5), 0, 255).astype(np.uint8)
    return True

"""
Upwind finite-difference solver for the Eikonal equation |grad T| = 1.

Functions:
    solve_eikonal: Tentative arrival distance of a pixel from its resolved neighbors
"""

import math

from OI_Libs.constants import DISTANCE_SENTINEL, FLAG_UNKNOWN
from OI_Libs.InpaintingLib.state_grid import StateGrid


def solve_eikonal(grid: StateGrid, x: int, y: int) -> float:
    """
    Compute the tentative distance of pixel (x, y).

    Only neighbors that are not UNKNOWN contribute. The smaller horizontal
    neighbor distance gives ``dX`` and the smaller vertical one ``dY``.
    With one axis available the result is that value + 1. With both, the
    quadratic ``(dX + dY + sqrt(2 - diff**2)) / 2`` is used while
    ``|dX - dY| < 1``, otherwise ``min(dX, dY) + 1``.

    Args:
        grid: Current state grid (read only)
        x: Pixel column
        y: Pixel row

    Returns:
        Tentative distance, or DISTANCE_SENTINEL if no neighbor is resolved
    """
    width = grid.width
    flags = grid.flags
    distances = grid.distances
    index = y * width + x

    d_x = DISTANCE_SENTINEL
    if x > 0 and flags[index - 1] != FLAG_UNKNOWN:
        d_x = min(d_x, float(distances[index - 1]))
    if x < width - 1 and flags[index + 1] != FLAG_UNKNOWN:
        d_x = min(d_x, float(distances[index + 1]))

    d_y = DISTANCE_SENTINEL
    if y > 0 and flags[index - width] != FLAG_UNKNOWN:
        d_y = min(d_y, float(distances[index - width]))
    if y < grid.height - 1 and flags[index + width] != FLAG_UNKNOWN:
        d_y = min(d_y, float(distances[index + width]))

    if d_x == DISTANCE_SENTINEL and d_y == DISTANCE_SENTINEL:
        return DISTANCE_SENTINEL
    if d_x == DISTANCE_SENTINEL:
        return d_y + 1.0
    if d_y == DISTANCE_SENTINEL:
        return d_x + 1.0

    diff = abs(d_x - d_y)
    if diff < 1.0:
        return (d_x + d_y + math.sqrt(2.0 - diff * diff)) / 2.0
    return min(d_x, d_y) + 1.0

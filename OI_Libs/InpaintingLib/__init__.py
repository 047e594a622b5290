"""
InpaintingLib - Fast Marching Method inpainting engine

This module provides Telea's FMM inpainting and the components it is
built from: the indexed priority queue, the per-pixel state grid, the
Eikonal solver and the pixel reconstructor.
"""

from OI_Libs.InpaintingLib.image_models import PixelBuffer, RgbaColor
from OI_Libs.InpaintingLib.priority_queue import PixelPriorityQueue
from OI_Libs.InpaintingLib.state_grid import StateGrid
from OI_Libs.InpaintingLib.eikonal_solver import solve_eikonal
from OI_Libs.InpaintingLib.pixel_reconstructor import (
    distance_gradient,
    reconstruct_pixel,
)
from OI_Libs.InpaintingLib.fmm_inpainter import (
    FastMarchingInpainter,
    TeleaInpainter,
    inpaint_telea,
)
from OI_Libs.InpaintingLib.background import InpaintJob

__all__ = [
    "PixelBuffer",
    "RgbaColor",
    "PixelPriorityQueue",
    "StateGrid",
    "solve_eikonal",
    "distance_gradient",
    "reconstruct_pixel",
    "FastMarchingInpainter",
    "TeleaInpainter",
    "inpaint_telea",
    "InpaintJob",
]

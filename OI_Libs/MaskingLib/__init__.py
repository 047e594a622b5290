"""
MaskingLib - Mask normalization and preprocessing

This module converts user-supplied masks into the boolean arrays the
inpainting engine consumes.
"""

from OI_Libs.MaskingLib.mask_ops import (
    normalize_mask,
    mask_from_color,
    dilate_mask,
    mask_bounding_box,
    mask_to_image,
)

__all__ = [
    "normalize_mask",
    "mask_from_color",
    "dilate_mask",
    "mask_bounding_box",
    "mask_to_image",
]

"""
OI_Libs - Open Inpaint Library Modules

This package contains core functionality for the Open Inpaint project,
organized into specialized sub-packages:

- InpaintingLib: Fast Marching Method (Telea) inpainting engine
- MaskingLib: Mask normalization and preprocessing
- NodesLib: Node graph integration and executor registry
"""

__version__ = "0.1.0"

"""
Constants and configuration values for Open Inpaint.

This module centralizes all constant values, magic numbers, and
configuration settings used throughout the library.
"""

# Pixel state flags
FLAG_KNOWN = 0
FLAG_BAND = 1
FLAG_UNKNOWN = 2

# Fast marching constants
DISTANCE_SENTINEL = 1e6
DIRECTION_EPSILON = 1e-6

# Inpaint radius
DEFAULT_INPAINT_RADIUS = 5.0

# Reconstruction policy names
POLICY_ON_FREEZE = "on_freeze"
POLICY_ON_REVISION = "on_revision"
DEFAULT_POLICY = POLICY_ON_FREEZE

# Mask preprocessing
MASK_THRESHOLD = 127
MASK_VALUE = 255

# Pixel layout
RGBA_MODE = "RGBA"
RGBA_CHANNELS = 4
COLOR_CHANNELS = 3

# Node types
NODE_TYPE_INPAINT = "Inpaint"
NODE_TYPE_MASK_DILATE = "Mask Dilate"

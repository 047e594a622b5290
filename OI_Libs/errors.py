"""
Exception types raised by Open Inpaint.

Classes:
    InpaintError: Base class for all inpainting errors
    InvalidInputError: Bad image, mask or radius (raised before any work)
    ResourceExhaustedError: Working arrays could not be allocated
    InpaintCancelledError: Result requested from a cancelled background job
"""


class InpaintError(Exception):
    """Base class for inpainting errors."""


class InvalidInputError(InpaintError, ValueError):
    """Raised when the image, mask or radius violate the input contract."""


class ResourceExhaustedError(InpaintError, MemoryError):
    """Raised when the flag, distance, pixel or heap storage cannot be allocated."""


class InpaintCancelledError(InpaintError):
    """Raised when the result of a cancelled job is requested."""

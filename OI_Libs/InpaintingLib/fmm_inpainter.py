"""
Telea Fast Marching Method inpainting.

Reconstructs masked pixels by advancing a wavefront from the mask boundary
inward in order of increasing arrival distance. Each time the wavefront
resolves a pixel, its color is rebuilt from the already-known pixels around
it (see pixel_reconstructor).

Based on "An Image Inpainting Technique Based on the Fast Marching Method"
by Alexandru Telea (2004).

Classes:
    FastMarchingInpainter: One fast marching run over a working pixel buffer
    TeleaInpainter: Reusable configuration for repeated inpaint calls

Functions:
    inpaint_telea: Inpaint a PIL Image (or PixelBuffer) with a mask
    validate_radius: Check the neighborhood radius
    validate_policy: Check the reconstruction policy name

Example:
    >>> from PIL import Image
    >>> img = Image.open("photo.png")
    >>> mask = Image.open("scratches.png")     # white = remove
    >>> restored = inpaint_telea(img, mask, radius=5)
"""

import logging
import math
from typing import Any, Callable, Optional

import numpy as np

from OI_Libs.constants import (
    DEFAULT_INPAINT_RADIUS,
    DEFAULT_POLICY,
    FLAG_BAND,
    FLAG_KNOWN,
    FLAG_UNKNOWN,
    MASK_THRESHOLD,
    POLICY_ON_FREEZE,
    POLICY_ON_REVISION,
)
from OI_Libs.errors import InvalidInputError, ResourceExhaustedError
from OI_Libs.InpaintingLib.eikonal_solver import solve_eikonal
from OI_Libs.InpaintingLib.image_models import PixelBuffer
from OI_Libs.InpaintingLib.pixel_reconstructor import reconstruct_pixel
from OI_Libs.InpaintingLib.priority_queue import PixelPriorityQueue
from OI_Libs.InpaintingLib.state_grid import StateGrid
from OI_Libs.MaskingLib.mask_ops import mask_bounding_box, normalize_mask

logger = logging.getLogger(__name__)

# Called with (pixel index, distance) each time a pixel is frozen KNOWN
FreezeObserver = Callable[[int, float], None]

VALID_POLICIES = (POLICY_ON_FREEZE, POLICY_ON_REVISION)


def validate_radius(radius: float) -> float:
    """
    Check the neighborhood radius.

    Returns:
        The radius as a float

    Raises:
        InvalidInputError: If radius is not a finite positive number
    """
    # bool is an int subclass; float(True) would pass as 1.0
    if isinstance(radius, bool):
        raise InvalidInputError(f"radius must be a number, got {radius!r}")

    try:
        value = float(radius)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"radius must be a number, got {radius!r}") from e

    if not math.isfinite(value) or value <= 0:
        raise InvalidInputError(f"radius must be a finite number > 0, got {radius}")
    return value


def validate_policy(policy: str) -> str:
    """Normalize and check a reconstruction policy name."""
    name = str(policy).strip().lower()
    if name not in VALID_POLICIES:
        raise InvalidInputError(
            f"Unknown reconstruction policy: {policy}. "
            f"Valid policies: {', '.join(VALID_POLICIES)}"
        )
    return name


class FastMarchingInpainter:
    """
    One fast marching run.

    The run mutates ``buffer`` in place, so callers hand it a scratch copy.
    Inputs are assumed valid; use inpaint_telea for the checked entry point.

    Reconstruction policies:
        on_freeze: every masked pixel is rebuilt exactly once, right before it
                   becomes KNOWN (the initial band included)
        on_revision: a BAND pixel is rebuilt whenever its distance is set or
                     lowered; the initial band is rebuilt once after seeding

    Attributes:
        buffer: Working pixels (modified in place)
        grid: Flag and distance state
        queue: Wavefront priority queue
        frozen_count: Pixels frozen KNOWN by run()
        unfilled_count: Reconstructions that found no KNOWN pixel in range
    """

    def __init__(
        self,
        buffer: PixelBuffer,
        mask: np.ndarray,
        radius: float = DEFAULT_INPAINT_RADIUS,
        policy: str = DEFAULT_POLICY,
        observer: Optional[FreezeObserver] = None,
    ):
        self.buffer = buffer
        self.radius = radius
        self.policy = policy
        self.observer = observer
        self.frozen_count = 0
        self.unfilled_count = 0

        try:
            self.grid = StateGrid.from_mask(mask)
        except MemoryError as e:
            raise ResourceExhaustedError(
                f"Cannot allocate state for {buffer.width}x{buffer.height} image"
            ) from e
        self.queue = PixelPriorityQueue()

    def run(self) -> PixelBuffer:
        """
        Advance the wavefront until the queue is empty.

        Returns:
            The (now reconstructed) working buffer

        Raises:
            ResourceExhaustedError: If the queue or a working array cannot grow
        """
        try:
            return self._march()
        except ResourceExhaustedError:
            raise
        except MemoryError as e:
            raise ResourceExhaustedError(
                f"Out of memory after freezing {self.frozen_count} of "
                f"{self.grid.width}x{self.grid.height} pixels"
            ) from e

    def _march(self) -> PixelBuffer:
        grid = self.grid
        width = grid.width
        flags = grid.flags
        distances = grid.distances
        queue = self.queue
        rebuild_on_revision = self.policy == POLICY_ON_REVISION

        seeds = grid.seed_band(queue)

        if not seeds:
            if grid.count(FLAG_UNKNOWN):
                logger.warning("Mask covers every pixel; nothing to propagate from")
            return self.buffer

        logger.debug(f"Seeded {len(seeds)} band pixels on {width}x{grid.height} grid")

        if rebuild_on_revision:
            for index in seeds:
                self._reconstruct(index)

        while queue:
            index, dist = queue.extract_min()
            if not rebuild_on_revision:
                self._reconstruct(index)
            flags[index] = FLAG_KNOWN
            self.frozen_count += 1
            if self.observer is not None:
                self.observer(index, dist)

            for neighbor in grid.neighbors(index):
                flag = flags[neighbor]
                if flag == FLAG_KNOWN:
                    continue

                new_dist = solve_eikonal(grid, neighbor % width, neighbor // width)

                if flag == FLAG_UNKNOWN:
                    flags[neighbor] = FLAG_BAND
                    distances[neighbor] = new_dist
                    queue.push(neighbor, new_dist)
                elif new_dist < distances[neighbor]:
                    distances[neighbor] = new_dist
                    queue.decrease_key(neighbor, new_dist)
                else:
                    continue

                if rebuild_on_revision:
                    self._reconstruct(neighbor)

        if self.unfilled_count:
            logger.debug(
                f"{self.unfilled_count} reconstructions found no known pixel "
                f"within radius {self.radius:g}"
            )
        logger.debug(f"Froze {self.frozen_count} pixels")
        return self.buffer

    def _reconstruct(self, index: int) -> None:
        width = self.grid.width
        filled = reconstruct_pixel(
            self.grid, self.buffer.pixels, index % width, index // width, self.radius
        )
        if not filled:
            self.unfilled_count += 1


def inpaint_telea(
    image: Any,
    mask: Any,
    radius: float = DEFAULT_INPAINT_RADIUS,
    policy: str = DEFAULT_POLICY,
    crop_to_mask: bool = True,
    mask_threshold: int = MASK_THRESHOLD,
    observer: Optional[FreezeObserver] = None,
) -> Any:
    """
    Inpaint the masked pixels of an image.

    The input is never modified. Pixels outside the mask and the whole alpha
    channel are copied through unchanged.

    Args:
        image: PIL Image (converted to RGBA) or PixelBuffer
        mask: Mask in any form accepted by normalize_mask; True/1/white
              marks pixels to reconstruct
        radius: Neighborhood radius in pixels (r > 0, typical 1-50)
        policy: "on_freeze" (default) or "on_revision"
        crop_to_mask: Only process the mask's bounding box plus a margin of
                      ceil(radius) + 1 pixels; output is identical either way
        mask_threshold: Grayscale cutoff used when mask is an image
        observer: Optional callback receiving (pixel index, distance) each time
                  a pixel is frozen; indices refer to the full image

    Returns:
        New RGBA PIL Image, or a new PixelBuffer if a PixelBuffer was given

    Raises:
        InvalidInputError: Bad radius, policy or mask (checked before any work)
        TypeError: If image is neither a PIL Image nor a PixelBuffer
        ResourceExhaustedError: If working storage cannot be allocated
    """
    radius = validate_radius(radius)
    policy = validate_policy(policy)

    return_image = not isinstance(image, PixelBuffer)
    try:
        source = PixelBuffer.from_image(image) if return_image else image
        width, height = source.size
        mask_array = normalize_mask(mask, width, height, threshold=mask_threshold)
        result = source.copy()
    except MemoryError as e:
        raise ResourceExhaustedError("Cannot allocate input and output buffers") from e

    masked_count = int(np.count_nonzero(mask_array))
    if masked_count == 0:
        logger.debug("Empty mask; returning input unchanged")
        return _finish(result, return_image)

    if crop_to_mask:
        x0, y0, x1, y1 = mask_bounding_box(mask_array, margin=int(math.ceil(radius)) + 1)
    else:
        x0, y0, x1, y1 = 0, 0, width, height

    logger.debug(
        f"Inpainting {masked_count} pixels of {width}x{height} image "
        f"in box ({x0}, {y0})-({x1}, {y1}), radius={radius:g}, policy={policy}"
    )

    region_observer = observer
    if observer is not None and (x0, y0, x1, y1) != (0, 0, width, height):
        region_width = x1 - x0

        def region_observer(index: int, dist: float) -> None:
            observer((y0 + index // region_width) * width + x0 + index % region_width, dist)

    try:
        working = result.crop(x0, y0, x1, y1)
    except MemoryError as e:
        raise ResourceExhaustedError("Cannot allocate working pixel buffer") from e

    inpainter = FastMarchingInpainter(
        working,
        mask_array[y0:y1, x0:x1],
        radius=radius,
        policy=policy,
        observer=region_observer,
    )
    inpainter.run()
    result.paste(working, x0, y0)

    return _finish(result, return_image)


def _finish(result: PixelBuffer, return_image: bool) -> Any:
    if not return_image:
        return result
    try:
        return result.to_image()
    except MemoryError as e:
        raise ResourceExhaustedError("Cannot allocate output image") from e


class TeleaInpainter:
    """
    Reusable inpainting configuration.

    Example:
        >>> inpainter = TeleaInpainter(radius=3)
        >>> fixed = inpainter.inpaint(img, mask)
    """

    def __init__(
        self,
        radius: float = DEFAULT_INPAINT_RADIUS,
        policy: str = DEFAULT_POLICY,
        crop_to_mask: bool = True,
        mask_threshold: int = MASK_THRESHOLD,
    ):
        """
        Args:
            radius: Neighborhood radius in pixels (r > 0)
            policy: "on_freeze" or "on_revision"
            crop_to_mask: Restrict work to the mask's bounding box
            mask_threshold: Grayscale cutoff for image masks

        Raises:
            InvalidInputError: If radius or policy is invalid
        """
        self.radius = validate_radius(radius)
        self.policy = validate_policy(policy)
        self.crop_to_mask = bool(crop_to_mask)
        self.mask_threshold = mask_threshold

    def inpaint(self, image: Any, mask: Any, observer: Optional[FreezeObserver] = None) -> Any:
        """Inpaint ``image`` with this configuration (see inpaint_telea)."""
        return inpaint_telea(
            image,
            mask,
            radius=self.radius,
            policy=self.policy,
            crop_to_mask=self.crop_to_mask,
            mask_threshold=self.mask_threshold,
            observer=observer,
        )

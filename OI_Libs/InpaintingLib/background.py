"""
Run inpainting off the calling thread.

An inpaint call cannot be interrupted midway: a half-advanced wavefront has
no meaningful output. Cancelling a job therefore means discarding its result;
the worker finishes (or is skipped if it had not started yet) and
result() raises InpaintCancelledError instead of returning anything.

Example:
    >>> job = InpaintJob(img, mask, radius=5).start()
    >>> ...
    >>> if user_pressed_cancel:
    ...     job.cancel()
    >>> else:
    ...     restored = job.result()
"""

import concurrent.futures
import logging
import threading
from typing import Any, Optional

from OI_Libs.constants import DEFAULT_INPAINT_RADIUS, DEFAULT_POLICY, MASK_THRESHOLD
from OI_Libs.errors import InpaintCancelledError
from OI_Libs.InpaintingLib.fmm_inpainter import (
    inpaint_telea,
    validate_policy,
    validate_radius,
)

logger = logging.getLogger(__name__)


class InpaintJob:
    """
    A single inpaint call executed on a worker thread.

    Attributes:
        radius: Neighborhood radius
        policy: Reconstruction policy
    """

    def __init__(
        self,
        image: Any,
        mask: Any,
        radius: float = DEFAULT_INPAINT_RADIUS,
        policy: str = DEFAULT_POLICY,
        crop_to_mask: bool = True,
        mask_threshold: int = MASK_THRESHOLD,
        executor: Optional[concurrent.futures.Executor] = None,
    ):
        """
        Args:
            image: PIL Image or PixelBuffer
            mask: Mask accepted by inpaint_telea
            radius: Neighborhood radius (validated immediately)
            policy: Reconstruction policy (validated immediately)
            crop_to_mask: Restrict work to the mask's bounding box
            mask_threshold: Grayscale cutoff for image masks
            executor: Executor to submit to; a private single-worker
                      ThreadPoolExecutor is used when None
        """
        self._image = image
        self._mask = mask
        self.radius = validate_radius(radius)
        self.policy = validate_policy(policy)
        self._crop_to_mask = crop_to_mask
        self._mask_threshold = mask_threshold
        self._executor = executor
        self._owns_executor = executor is None
        self._future: Optional[concurrent.futures.Future] = None
        self._cancelled = threading.Event()

    def start(self) -> "InpaintJob":
        """Submit the job; returns self for chaining."""
        if self._future is not None:
            raise RuntimeError("InpaintJob already started")

        if self._executor is None:
            self._executor = concurrent.futures.ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="inpaint"
            )

        self._future = self._executor.submit(self._run)
        if self._owns_executor:
            # Lets the private worker exit once the job completes
            self._executor.shutdown(wait=False)
        return self

    def _run(self) -> Any:
        if self._cancelled.is_set():
            return None
        return inpaint_telea(
            self._image,
            self._mask,
            radius=self.radius,
            policy=self.policy,
            crop_to_mask=self._crop_to_mask,
            mask_threshold=self._mask_threshold,
        )

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        """Discard the job's result. Safe to call at any time."""
        if not self._cancelled.is_set():
            logger.debug("Inpaint job cancelled; result will be discarded")
        self._cancelled.set()
        if self._future is not None:
            self._future.cancel()

    def done(self) -> bool:
        """True once the job has finished, failed or been cancelled."""
        if self._cancelled.is_set():
            return True
        return self._future is not None and self._future.done()

    def result(self, timeout: Optional[float] = None) -> Any:
        """
        Wait for and return the inpainted image.

        Args:
            timeout: Seconds to wait (None = forever)

        Returns:
            The inpainted PIL Image or PixelBuffer

        Raises:
            InpaintCancelledError: If the job was cancelled
            RuntimeError: If the job was never started
            concurrent.futures.TimeoutError: If timeout expires
            Exception: Any error raised by inpaint_telea
        """
        if self._cancelled.is_set():
            raise InpaintCancelledError("Inpaint job was cancelled")

        if self._future is None:
            raise RuntimeError("InpaintJob has not been started")

        value = self._future.result(timeout=timeout)
        if self._cancelled.is_set():
            raise InpaintCancelledError("Inpaint job was cancelled")
        return value

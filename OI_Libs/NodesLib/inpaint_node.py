"""
Inpaint Node and Mask Dilate Node.

The Inpaint node removes masked regions from an image with Telea's Fast
Marching Method. The Mask Dilate node grows a mask so it also covers the
soft edges of the region to remove.

Example:
    >>> from PIL import Image
    >>> image = Image.open("photo.png")
    >>> mask = Image.open("scratches.png")
    >>>
    >>> node = create_inpaint_node("inpaint-1", radius=7, dilate_iterations=1)
    >>> restored = execute_inpaint_node(node, [image, mask])
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, List

from OI_Libs.constants import (
    DEFAULT_INPAINT_RADIUS,
    DEFAULT_POLICY,
    MASK_THRESHOLD,
    NODE_TYPE_INPAINT,
    NODE_TYPE_MASK_DILATE,
)
from OI_Libs.InpaintingLib.fmm_inpainter import (
    inpaint_telea,
    validate_policy,
    validate_radius,
)
from OI_Libs.MaskingLib.mask_ops import dilate_mask, mask_to_image, normalize_mask


@dataclass
class InpaintNodeConfig:
    """Configuration for inpaint node.

    Attributes:
        radius: Neighborhood radius in pixels (r > 0, typical 1-50)
        policy: Reconstruction policy ('on_freeze' or 'on_revision')
        crop_to_mask: Only process the mask's bounding box
        mask_threshold: Grayscale cutoff when the mask is an image (0-254)
        dilate_iterations: Pixels to grow the mask by before inpainting
    """
    radius: float = DEFAULT_INPAINT_RADIUS
    policy: str = DEFAULT_POLICY
    crop_to_mask: bool = True
    mask_threshold: int = MASK_THRESHOLD
    dilate_iterations: int = 0

    def validate(self) -> None:
        """
        Check all fields.

        Raises:
            ValueError: If any field is out of range
        """
        validate_radius(self.radius)
        validate_policy(self.policy)
        if not (0 <= self.mask_threshold < 255):
            raise ValueError(f"mask_threshold must be 0-254, got {self.mask_threshold}")
        if self.dilate_iterations < 0:
            raise ValueError(f"dilate_iterations must be >= 0, got {self.dilate_iterations}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InpaintNodeConfig":
        """Create from dictionary."""
        filtered = {k: v for k, v in data.items()
                   if k in cls.__dataclass_fields__}
        return cls(**filtered)


def execute_inpaint_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Execute inpaint node in pipeline.

    Node dict may contain any InpaintNodeConfig field; missing fields use
    the defaults.

    Inputs:
        - [0]: Image to repair (PIL Image)
        - [1]: Mask (PIL Image, 2-D array or flat 0/1 sequence)

    Returns:
        Inpainted PIL Image (RGBA mode)

    Raises:
        ValueError: If inputs are missing or parameters invalid
        TypeError: If the image input is not a PIL Image
    """
    if not inputs or len(inputs) < 2:
        raise ValueError("InpaintNode requires 2 inputs: image and mask")

    image = inputs[0]
    mask = inputs[1]

    if not hasattr(image, "mode"):
        raise TypeError(f"Expected PIL Image for image input, got {type(image)}")

    config = InpaintNodeConfig.from_dict(node)

    try:
        config.validate()
        mask_array = normalize_mask(mask, image.width, image.height, threshold=config.mask_threshold)
        mask_array = dilate_mask(mask_array, config.dilate_iterations)
        return inpaint_telea(
            image,
            mask_array,
            radius=config.radius,
            policy=config.policy,
            crop_to_mask=config.crop_to_mask,
        )
    except (ValueError, TypeError) as e:
        raise type(e)(f"Inpaint node error: {str(e)}") from e


def create_inpaint_node(
    node_id: str,
    radius: float = DEFAULT_INPAINT_RADIUS,
    policy: str = DEFAULT_POLICY,
    **options: Any,
) -> Dict[str, Any]:
    """
    Create inpaint node for graph.

    Args:
        node_id: Unique node identifier
        radius: Neighborhood radius in pixels
        policy: Reconstruction policy ('on_freeze' or 'on_revision')
        **options: Other InpaintNodeConfig fields (crop_to_mask,
                   mask_threshold, dilate_iterations)

    Returns:
        Node dict for graph

    Inputs:
        - [0]: Image to repair
        - [1]: Mask (white / 1 = reconstruct)
    """
    node = {
        "id": node_id,
        "type": NODE_TYPE_INPAINT,
        "radius": radius,
        "policy": policy,
    }
    node.update(options)
    return node


def execute_mask_dilate_node(node: Dict[str, Any], inputs: List[Any]) -> Any:
    """
    Execute mask dilate node in pipeline.

    Node dict may contain:
        - 'iterations': Pixels to grow the mask by (default 1)
        - 'mask_threshold': Grayscale cutoff for the input mask (default 127)

    Inputs:
        - [0]: Mask image (PIL Image)

    Returns:
        Dilated mask as a mode "L" PIL Image (255 = masked)

    Raises:
        ValueError: If input is missing or iterations negative
        TypeError: If input is not a PIL Image
    """
    if not inputs:
        raise ValueError("MaskDilateNode requires mask input")

    mask = inputs[0]
    if not hasattr(mask, "mode"):
        raise TypeError(f"Expected PIL Image for mask input, got {type(mask)}")

    iterations = int(node.get("iterations", 1))
    threshold = int(node.get("mask_threshold", MASK_THRESHOLD))

    mask_array = normalize_mask(mask, mask.width, mask.height, threshold=threshold)
    return mask_to_image(dilate_mask(mask_array, iterations))


def create_mask_dilate_node(node_id: str, iterations: int = 1) -> Dict[str, Any]:
    """Create mask dilate node for graph."""
    return {
        "id": node_id,
        "type": NODE_TYPE_MASK_DILATE,
        "iterations": iterations,
    }

"""
Open Inpaint Nodes Library.

Node implementations that expose the inpainting engine to a node graph.

Modules:
    inpaint_node: Inpaint node and mask dilate node
    node_executors: Registry mapping node types to executors
"""

from OI_Libs.NodesLib.inpaint_node import (
    InpaintNodeConfig,
    execute_inpaint_node,
    create_inpaint_node,
    execute_mask_dilate_node,
    create_mask_dilate_node,
)
from OI_Libs.NodesLib.node_executors import (
    NodeExecutorRegistry,
    NodeSpec,
    get_default_registry,
    register_default_executors,
)

__all__ = [
    "InpaintNodeConfig",
    "execute_inpaint_node",
    "create_inpaint_node",
    "execute_mask_dilate_node",
    "create_mask_dilate_node",
    "NodeExecutorRegistry",
    "NodeSpec",
    "get_default_registry",
    "register_default_executors",
]

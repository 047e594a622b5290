"""
Node Executors Registry.

Maps node type names to the callables that run them, together with the
number of upstream results each node consumes. A node graph runs a node
by type name through the registry instead of importing its executor.

Classes:
    NodeSpec: Executor and input count of one node type
    NodeExecutorRegistry: Node type name -> NodeSpec

Functions:
    get_default_registry: Registry holding the built-in nodes (singleton)
    register_default_executors: Add Inpaint and Mask Dilate to a registry
"""

from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional
import logging

from OI_Libs.constants import NODE_TYPE_INPAINT, NODE_TYPE_MASK_DILATE

logger = logging.getLogger(__name__)

# (node dict, upstream results) -> result
ExecutorFunction = Callable[[Dict[str, Any], List[Any]], Any]


@dataclass(frozen=True)
class NodeSpec:
    """How to run one node type.

    Attributes:
        executor: Callable taking (node_dict, inputs)
        input_count: Upstream results the executor needs, in order
                     (Inpaint: image, mask; Mask Dilate: mask)
    """
    executor: ExecutorFunction
    input_count: int


class NodeExecutorRegistry:
    """
    Runs nodes by type name.

    Example:
        >>> registry = NodeExecutorRegistry()
        >>> registry.register("Inpaint", execute_inpaint_node, input_count=2)
        >>> restored = registry.execute("Inpaint", node_dict, [image, mask])
    """

    def __init__(self):
        self._specs: Dict[str, NodeSpec] = {}

    def register(self, node_type: str, executor: ExecutorFunction, input_count: int = 0) -> NodeSpec:
        """
        Add a node type.

        Raises:
            ValueError: Empty name, non-callable executor or negative input_count
            RuntimeError: If node_type is already registered
        """
        name = str(node_type).strip()
        if not name:
            raise ValueError("node_type cannot be empty")
        if not callable(executor):
            raise ValueError(f"executor for '{name}' must be callable, got {type(executor).__name__}")
        if input_count < 0:
            raise ValueError(f"input_count must be >= 0, got {input_count}")
        if name in self._specs:
            raise RuntimeError(f"Node type '{name}' is already registered")

        spec = NodeSpec(executor=executor, input_count=int(input_count))
        self._specs[name] = spec
        logger.debug(f"Registered node type '{name}' ({spec.input_count} inputs)")
        return spec

    def get_spec(self, node_type: str) -> NodeSpec:
        """
        Look up a node type.

        Raises:
            KeyError: If node_type is not registered
        """
        name = str(node_type).strip()
        try:
            return self._specs[name]
        except KeyError:
            raise KeyError(
                f"Unknown node type '{name}'. Known types: {', '.join(self.list_node_types())}"
            ) from None

    def get_executor(self, node_type: str) -> ExecutorFunction:
        return self.get_spec(node_type).executor

    def has_executor(self, node_type: str) -> bool:
        return str(node_type).strip() in self._specs

    def list_node_types(self) -> List[str]:
        return sorted(self._specs)

    def execute(self, node_type: str, node_dict: Dict[str, Any], inputs: List[Any]) -> Any:
        """
        Run a node.

        Args:
            node_type: Registered node type name
            node_dict: Node parameters (see create_inpaint_node)
            inputs: Upstream results, in the order the node expects

        Raises:
            KeyError: If node_type is not registered
            ValueError: If fewer inputs than the node needs are given
        """
        spec = self.get_spec(node_type)
        if len(inputs) < spec.input_count:
            raise ValueError(
                f"Node type '{node_type}' needs {spec.input_count} inputs, got {len(inputs)}"
            )
        return spec.executor(node_dict, inputs)


_default_registry: Optional[NodeExecutorRegistry] = None


def get_default_registry() -> NodeExecutorRegistry:
    """Registry with the built-in nodes, created on first use."""
    global _default_registry

    if _default_registry is None:
        _default_registry = NodeExecutorRegistry()
        register_default_executors(_default_registry)

    return _default_registry


def register_default_executors(registry: NodeExecutorRegistry) -> None:
    """Add the Inpaint (image, mask) and Mask Dilate (mask) nodes."""
    from OI_Libs.NodesLib.inpaint_node import execute_inpaint_node, execute_mask_dilate_node

    registry.register(NODE_TYPE_INPAINT, execute_inpaint_node, input_count=2)
    registry.register(NODE_TYPE_MASK_DILATE, execute_mask_dilate_node, input_count=1)
    logger.info("Registered default node executors")

"""
Tests for Node Executors Registry.

Tests cover:
- Registration and lookup
- Input count checks on execute
- Error handling
- Default registry with the built-in nodes
"""

import unittest

from PIL import Image

from OI_Libs.NodesLib import node_executors
from OI_Libs.NodesLib.inpaint_node import execute_inpaint_node
from OI_Libs.NodesLib.node_executors import (
    NodeExecutorRegistry,
    NodeSpec,
    get_default_registry,
    register_default_executors,
)


def echo_executor(node, inputs):
    return (node.get("id"), list(inputs))


class TestRegistration(unittest.TestCase):
    """Test adding and looking up node types."""

    def setUp(self):
        self.registry = NodeExecutorRegistry()

    def test_new_registry_is_empty(self):
        """Test a new registry knows no node types."""
        self.assertEqual(self.registry.list_node_types(), [])

    def test_register_returns_spec(self):
        """Test registering stores the executor and its input count."""
        spec = self.registry.register("Echo", echo_executor, input_count=2)

        self.assertEqual(spec, NodeSpec(executor=echo_executor, input_count=2))
        self.assertIs(self.registry.get_spec("Echo"), spec)
        self.assertIs(self.registry.get_executor("Echo"), echo_executor)
        self.assertTrue(self.registry.has_executor("Echo"))

    def test_names_are_stripped(self):
        """Test surrounding whitespace is ignored in node type names."""
        self.registry.register("  Echo ", echo_executor)

        self.assertTrue(self.registry.has_executor("Echo"))
        self.assertEqual(self.registry.list_node_types(), ["Echo"])

    def test_list_is_sorted(self):
        """Test node types are listed alphabetically."""
        self.registry.register("Zeta", echo_executor)
        self.registry.register("Alpha", echo_executor)

        self.assertEqual(self.registry.list_node_types(), ["Alpha", "Zeta"])

    def test_duplicate_registration_raises(self):
        """Test a node type cannot be registered twice."""
        self.registry.register("Echo", echo_executor)

        with self.assertRaises(RuntimeError):
            self.registry.register("Echo", echo_executor)

    def test_invalid_registrations_raise(self):
        """Test empty names, non-callables and negative counts are rejected."""
        with self.assertRaises(ValueError):
            self.registry.register("   ", echo_executor)
        with self.assertRaises(ValueError):
            self.registry.register("Echo", "not a function")
        with self.assertRaises(ValueError):
            self.registry.register("Echo", echo_executor, input_count=-1)

        self.assertEqual(self.registry.list_node_types(), [])

    def test_unknown_type_raises(self):
        """Test lookups of unknown types raise KeyError naming known types."""
        self.registry.register("Echo", echo_executor)

        with self.assertRaises(KeyError) as ctx:
            self.registry.get_executor("Missing")
        self.assertIn("Echo", str(ctx.exception))
        with self.assertRaises(KeyError):
            self.registry.execute("Missing", {}, [])


class TestExecution(unittest.TestCase):
    """Test running nodes through the registry."""

    def setUp(self):
        self.registry = NodeExecutorRegistry()
        self.registry.register("Echo", echo_executor, input_count=2)

    def test_execute_passes_node_and_inputs(self):
        """Test the executor receives the node dict and inputs."""
        result = self.registry.execute("Echo", {"id": "e1"}, ["a", "b", "c"])

        self.assertEqual(result, ("e1", ["a", "b", "c"]))

    def test_too_few_inputs_raise(self):
        """Test the registered input count is enforced before calling."""
        calls = []
        self.registry.register("Counted", lambda node, inputs: calls.append(inputs), input_count=1)

        with self.assertRaises(ValueError):
            self.registry.execute("Echo", {"id": "e1"}, ["a"])
        with self.assertRaises(ValueError):
            self.registry.execute("Counted", {}, [])
        self.assertEqual(calls, [])

    def test_executor_errors_propagate(self):
        """Test exceptions from executors reach the caller unchanged."""
        def failing(node, inputs):
            raise TypeError("bad input")

        self.registry.register("Fail", failing)

        with self.assertRaises(TypeError):
            self.registry.execute("Fail", {}, [])


class TestDefaultRegistry(unittest.TestCase):
    """Test the global registry and built-in nodes."""

    def setUp(self):
        self._saved = node_executors._default_registry
        node_executors._default_registry = None

    def tearDown(self):
        node_executors._default_registry = self._saved

    def test_singleton(self):
        """Test the default registry is created once."""
        self.assertIs(get_default_registry(), get_default_registry())

    def test_builtin_nodes(self):
        """Test both built-in nodes are registered with their input counts."""
        registry = get_default_registry()

        self.assertEqual(registry.list_node_types(), ["Inpaint", "Mask Dilate"])
        self.assertIs(registry.get_executor("Inpaint"), execute_inpaint_node)
        self.assertEqual(registry.get_spec("Inpaint").input_count, 2)
        self.assertEqual(registry.get_spec("Mask Dilate").input_count, 1)

    def test_inpaint_needs_a_mask(self):
        """Test the Inpaint node is refused an image without a mask."""
        with self.assertRaises(ValueError):
            get_default_registry().execute(
                "Inpaint", {"type": "Inpaint"}, [Image.new("RGBA", (4, 4))]
            )

    def test_register_defaults_into_custom_registry(self):
        """Test built-ins can be added to a separate registry."""
        registry = NodeExecutorRegistry()

        register_default_executors(registry)

        self.assertTrue(registry.has_executor("Inpaint"))
        self.assertTrue(registry.has_executor("Mask Dilate"))


if __name__ == "__main__":
    unittest.main()

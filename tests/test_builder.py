"""Builder and node registry tests"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

import pytest

from nodeschema import (
    ArrayBuilder,
    ArrayNode,
    HashBuilder,
    HashNode,
    IntegerNode,
    InvalidSchemaError,
    NodeRegistry,
    StringNode,
    register_format,
)
from nodeschema.nodes import Node, NodeOptions


@dataclass(frozen=True)
class PortOptions(NodeOptions):
    privileged: bool = False


class PortNode(Node):
    """Integer port number, optionally restricted to the unprivileged range"""

    kind = "port"
    json_type = "integer"
    allowed_types = (int,)
    options_class = PortOptions

    def _validate(self, data: Any, result) -> Optional[Any]:
        data = super()._validate(data, result)
        if data is None:
            return None
        low = 1 if self.options.privileged else 1024
        if not low <= data <= 65535:
            result.error(f"Port {data} is out of range.")
        return data

    def to_schema_document(self) -> Dict[str, Any]:
        return self._document((), {"minimum": 1 if self.options.privileged else 1024, "maximum": 65535})


class TestRegistry:
    def test_builtin_kinds(self):
        for kind in ("string", "integer", "number", "boolean", "null", "array", "hash", "object"):
            assert NodeRegistry.resolve(kind) is not None
        assert NodeRegistry.resolve("object") is HashNode

    def test_create(self):
        node = NodeRegistry.create("string", min_length=2)
        assert isinstance(node, StringNode)
        assert node.options.min_length == 2

    def test_create_array_with_children(self):
        node = NodeRegistry.create("array", IntegerNode(), StringNode())
        assert isinstance(node, ArrayNode)
        assert len(node.items) == 2

    def test_unknown_kind(self):
        with pytest.raises(InvalidSchemaError, match="Unknown node kind"):
            NodeRegistry.create("uuid")

    def test_children_on_scalar_kind(self):
        with pytest.raises(InvalidSchemaError, match="does not take positional child nodes"):
            NodeRegistry.create("integer", StringNode())

    def test_hash_children_are_given_as_properties(self):
        with pytest.raises(InvalidSchemaError, match="does not take positional child nodes"):
            NodeRegistry.create("hash", StringNode())
        with pytest.raises(InvalidSchemaError, match="must be a mapping"):
            NodeRegistry.create("hash", properties=StringNode())

        node = NodeRegistry.create("hash", properties={"name": StringNode(required=True)})
        assert node.validate({}).errors == {("name",): ["Value must be given."]}

    def test_register_rejects_non_nodes(self):
        with pytest.raises(InvalidSchemaError):
            NodeRegistry.register("thing", dict)
        with pytest.raises(InvalidSchemaError):
            NodeRegistry.register("", PortNode)

    def test_custom_kind(self, custom_registrations):
        _, kinds = custom_registrations
        NodeRegistry.register("port", PortNode)
        kinds.append("port")

        node = NodeRegistry.create("port")
        assert node.validate(8080).valid
        assert node.validate(80).messages_at() == ["Port 80 is out of range."]
        assert NodeRegistry.create("port", privileged=True).validate(80).valid

    def test_custom_kind_backs_string_format(self, custom_registrations):
        formats, kinds = custom_registrations
        NodeRegistry.register("port", PortNode)
        kinds.append("port")
        register_format("port", "[0-9]+")
        formats.append("port")

        # The format has no cast rule, so the delegated node sees the string.
        node = StringNode(format="port", format_options={})
        result = node.validate("80")
        assert result.messages_at() == ['Invalid type, got type "string", expected "integer".']
        assert node.validate("x").messages_at() == ['String does not match format "port".']


class TestArrayBuilder:
    def test_list(self):
        node = ArrayBuilder(max_items=2).item("integer", minimum=0).build()
        assert node.validate([1, 2]).valid
        assert node.validate([-1]).errors == {("[0]",): ["Value must have a minimum of 0."]}

    def test_tuple_with_additional_node(self):
        node = ArrayBuilder().item("string").item(IntegerNode()).additional("boolean").build()
        assert node.validate(["a", 1, True, False]).valid
        assert node.mode().value == "tuple"

    def test_additional_only_once(self):
        builder = ArrayBuilder().item("string").item("string").additional("integer")
        with pytest.raises(InvalidSchemaError, match="only be specified once"):
            builder.additional("integer")

    def test_option(self):
        node = ArrayBuilder().option("unique_items", True).build()
        assert not node.validate([1, 1]).valid

    def test_node_instances_take_no_options(self):
        with pytest.raises(InvalidSchemaError):
            ArrayBuilder().item(IntegerNode(), minimum=1)

    def test_cannot_build_twice(self):
        builder = ArrayBuilder().item("integer")
        builder.build()
        with pytest.raises(InvalidSchemaError, match="already been built"):
            builder.build()
        with pytest.raises(InvalidSchemaError):
            builder.item("string")


class TestHashBuilder:
    def test_builds_hash(self):
        node = (
            HashBuilder(additional_properties=False)
            .property("name", "string", required=True, min_length=1)
            .property("tags", ArrayBuilder(unique_items=True).item("string").build())
            .pattern_property("^x_", "integer")
            .build()
        )
        assert node.validate({"name": "a", "tags": ["t"], "x_n": 1}).valid
        result = node.validate({"tags": ["t", "t"], "x_n": "1", "bad": 1})
        assert result.errors == {
            ("name",): ["Value must be given."],
            ("tags",): ["Array has duplicate items."],
            ("x_n",): ['Invalid type, got type "string", expected "integer".'],
            ("bad",): ['Obsolete property "bad".'],
        }

    def test_duplicate_property(self):
        builder = HashBuilder().property("a", "string")
        with pytest.raises(InvalidSchemaError, match="more than once"):
            builder.property("a", "integer")

    def test_dependencies_are_merged(self):
        node = (
            HashBuilder(dependencies={"a": ["b"]})
            .property("a", "string")
            .property("b", "string")
            .property("c", "string")
            .dependency("c", "a", "b")
            .build()
        )
        assert node.dependencies == {"a": ["b"], "c": ["a", "b"]}
        assert isinstance(node.dependencies, dict)
        assert node.validate({"c": "x"}).messages_at() == [
            'Missing property "a" because "c" is given.',
            'Missing property "b" because "c" is given.',
        ]

    def test_additional(self):
        node = HashBuilder().additional("number", minimum=0).build()
        assert node.validate({"x": 1.5}).valid
        assert not node.validate({"x": -1}).valid

    def test_object_kind_alias(self):
        node = HashBuilder().property("inner", "object", additional_properties=True).build()
        assert isinstance(node.properties["inner"], HashNode)

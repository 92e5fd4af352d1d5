"""Node kinds and their registry.

Importing this package registers every built-in kind with
:class:`NodeRegistry`.
"""

from .base import Node, NodeOptions
from .registry import NodeRegistry
from .scalar_nodes import BooleanNode, IntegerNode, NullNode, NumberNode
from .string_node import StringNode
from .array_node import ArrayMode, ArrayNode
from .hash_node import HashNode, KeyRule
from .builder import ArrayBuilder, HashBuilder

_BUILTIN_KINDS = {
    "string": StringNode,
    "integer": IntegerNode,
    "number": NumberNode,
    "boolean": BooleanNode,
    "null": NullNode,
    "array": ArrayNode,
    "hash": HashNode,
    "object": HashNode,
}

for _kind, _node_class in _BUILTIN_KINDS.items():
    NodeRegistry.register(_kind, _node_class)

__all__ = [
    "ArrayBuilder",
    "ArrayMode",
    "ArrayNode",
    "BooleanNode",
    "HashBuilder",
    "HashNode",
    "IntegerNode",
    "KeyRule",
    "Node",
    "NodeOptions",
    "NodeRegistry",
    "NullNode",
    "NumberNode",
    "StringNode",
]

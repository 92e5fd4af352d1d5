"""Recursive schema validation and casting built from composable nodes."""

from typing import Any

__version__ = "0.3.0"

from .exceptions import CastError, DataFileError, InvalidSchemaError, NodeSchemaError, ValidationError
from .nodes import (
    ArrayBuilder,
    ArrayNode,
    BooleanNode,
    HashBuilder,
    HashNode,
    IntegerNode,
    Node,
    NodeRegistry,
    NullNode,
    NumberNode,
    StringNode,
)
from .result import Result, ValidationMessage
from .schema_document import SCHEMA_DIALECT, check_schema_document, document_issues, to_schema_document
from .utils.formats import register_format


def validate(node: Node, data: Any) -> Result:
    """Validate ``data`` against ``node`` and return the collected result."""
    return node.validate(data)


def cast(node: Node, data: Any) -> Any:
    """Cast ``data`` into canonical values as described by ``node``."""
    return node.cast(data)


__all__ = [
    "ArrayBuilder",
    "ArrayNode",
    "BooleanNode",
    "CastError",
    "DataFileError",
    "HashBuilder",
    "HashNode",
    "IntegerNode",
    "InvalidSchemaError",
    "Node",
    "NodeRegistry",
    "NodeSchemaError",
    "NullNode",
    "NumberNode",
    "Result",
    "SCHEMA_DIALECT",
    "StringNode",
    "ValidationError",
    "ValidationMessage",
    "cast",
    "check_schema_document",
    "document_issues",
    "register_format",
    "to_schema_document",
    "validate",
]

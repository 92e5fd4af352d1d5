# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Builders that assemble composite nodes step by step.

A builder collects children and options and produces an immutable node with
``build()``. Children are given either as node instances or as a kind name
plus options, resolved through :class:`NodeRegistry`::

    user = (
        HashBuilder(additional_properties=False)
        .property("name", "string", required=True, min_length=1)
        .property("tags", ArrayBuilder(unique_items=True).item("string").build())
        .dependency("email", "name")
        .build()
    )
"""

from typing import Any, Dict, List, Pattern, Tuple, Union

from ..exceptions import InvalidSchemaError
from .array_node import ArrayNode
from .base import Node
from .hash_node import HashNode
from .registry import NodeRegistry

NodeOrKind = Union[Node, str]


def _resolve(node_or_kind: NodeOrKind, options: Dict[str, Any]) -> Node:
    if isinstance(node_or_kind, Node):
        if options:
            raise InvalidSchemaError("Options can only be given together with a node kind name.")
        return node_or_kind
    return NodeRegistry.create(node_or_kind, **options)


class _Builder:
    def __init__(self, **options: Any):
        self._options = dict(options)
        self._built = False

    def _check_open(self) -> None:
        if self._built:
            raise InvalidSchemaError(f"{type(self).__name__} has already been built.")

    def option(self, name: str, value: Any):
        self._check_open()
        self._options[name] = value
        return self


class ArrayBuilder(_Builder):
    def __init__(self, **options: Any):
        super().__init__(**options)
        self._items: List[Node] = []

    def item(self, node_or_kind: NodeOrKind, **options: Any) -> "ArrayBuilder":
        self._check_open()
        self._items.append(_resolve(node_or_kind, options))
        return self

    def additional(self, node_or_kind: NodeOrKind, **options: Any) -> "ArrayBuilder":
        """Set the node elements beyond a tuple are checked against (once only)."""
        self._check_open()
        if isinstance(self._options.get("additional_items"), Node):
            raise InvalidSchemaError("Additional items can only be specified once.")
        self._options["additional_items"] = _resolve(node_or_kind, options)
        return self

    def build(self) -> ArrayNode:
        self._check_open()
        node = ArrayNode(*self._items, **self._options)
        self._built = True
        return node


class HashBuilder(_Builder):
    def __init__(self, **options: Any):
        super().__init__(**options)
        self._properties: Dict[str, Node] = {}
        self._pattern_properties: List[Tuple[Union[str, Pattern[str]], Node]] = []
        self._dependencies: Dict[str, List[str]] = {}

    def property(self, name: str, node_or_kind: NodeOrKind, **options: Any) -> "HashBuilder":
        self._check_open()
        if name in self._properties:
            raise InvalidSchemaError(f"Property {name!r} is defined more than once.")
        self._properties[name] = _resolve(node_or_kind, options)
        return self

    def pattern_property(
        self, pattern: Union[str, Pattern[str]], node_or_kind: NodeOrKind, **options: Any
    ) -> "HashBuilder":
        self._check_open()
        self._pattern_properties.append((pattern, _resolve(node_or_kind, options)))
        return self

    def dependency(self, source: str, *targets: str) -> "HashBuilder":
        self._check_open()
        self._dependencies[source] = list(targets)
        return self

    def additional(self, node_or_kind: NodeOrKind, **options: Any) -> "HashBuilder":
        self._check_open()
        self._options["additional_properties"] = _resolve(node_or_kind, options)
        return self

    def build(self) -> HashNode:
        self._check_open()
        options = dict(self._options)
        if self._dependencies:
            dependencies: Dict[str, List[str]] = dict(options.pop("dependencies", None) or {})
            dependencies.update(self._dependencies)
            options["dependencies"] = dependencies
        node = HashNode(self._properties, self._pattern_properties, **options)
        self._built = True
        return node

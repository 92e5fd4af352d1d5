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

"""Hash node: validation of keyed collections.

Keys fall into two groups. Declared keys are checked by their named child
node, whether present or not. Every other key is resolved by
:meth:`HashNode.resolve_key`, in order: a matching pattern child, the
``additional_properties`` node, acceptance when ``additional_properties`` is
True, and rejection otherwise.

Casting folds undeclared keys in by the ``additional_properties`` policy
alone: cast through the node, copied verbatim when True, dropped otherwise.
Pattern children only take part in validation.
"""

from __future__ import annotations

import re
from collections.abc import Collection
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Pattern, Sequence, Tuple, Union

from ..exceptions import InvalidSchemaError
from ..result import Result
from .base import Node, NodeOptions, check_bounds, check_non_negative_int


class KeyRule(Enum):
    PATTERN = "pattern"
    ADDITIONAL = "additional"
    ALLOWED = "allowed"
    OBSOLETE = "obsolete"


@dataclass(frozen=True)
class HashOptions(NodeOptions):
    min_properties: Optional[int] = None
    max_properties: Optional[int] = None
    dependencies: Optional[Mapping[str, Sequence[str]]] = None
    property_names: Optional[str] = None
    additional_properties: Union[bool, Node, None] = False


def is_blank(value: Any) -> bool:
    """True for None, False, whitespace-only strings and empty collections."""
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, Collection):
        return len(value) == 0
    return False


class HashNode(Node):
    ATTRIBUTES = ("min_properties", "max_properties")

    kind = "hash"
    json_type = "object"
    allowed_types = (Mapping,)
    options_class = HashOptions

    def __init__(
        self,
        properties: Optional[Mapping[str, Node]] = None,
        pattern_properties: Optional[Iterable[Tuple[Union[str, Pattern[str]], Node]]] = None,
        **options: Any,
    ):
        if properties is not None and not isinstance(properties, Mapping):
            raise InvalidSchemaError(
                f"Properties of a hash node must be a mapping of names to nodes, got: {properties!r}"
            )
        self._properties: Dict[str, Node] = dict(properties or {})
        self._raw_pattern_properties: List[Tuple[Union[str, Pattern[str]], Node]] = list(pattern_properties or [])
        self._pattern_properties: List[Tuple[Pattern[str], Node]] = []
        self._property_names: Optional[Pattern[str]] = None
        super().__init__(**options)

    def validate_self(self) -> None:
        super().validate_self()
        opts = self.options
        check_non_negative_int(opts, "min_properties", "max_properties")
        check_bounds(opts, "min_properties", "max_properties")

        for name in self._properties:
            if not isinstance(name, str):
                raise InvalidSchemaError(f"Property names must be strings, got: {name!r}")

        for pattern, node in self._raw_pattern_properties:
            if not isinstance(pattern, (str, re.Pattern)):
                raise InvalidSchemaError(f"Pattern property keys must be regular expressions, got: {pattern!r}")
            if isinstance(pattern, str):
                self._check_regex(pattern, "pattern property")
            if isinstance(node, Node) and node.required:
                raise InvalidSchemaError("Pattern properties can't be required.")

        if opts.dependencies is not None:
            if not isinstance(opts.dependencies, Mapping):
                raise InvalidSchemaError("Option 'dependencies' must be a mapping of property names to lists.")
            for source, targets in opts.dependencies.items():
                if not isinstance(source, str) or isinstance(targets, str) or not isinstance(targets, Sequence):
                    raise InvalidSchemaError(f"Invalid dependency for property {source!r}: {targets!r}")
                if not all(isinstance(target, str) for target in targets):
                    raise InvalidSchemaError(f"Dependency targets of {source!r} must be property names.")

        if opts.property_names is not None:
            if not isinstance(opts.property_names, str):
                raise InvalidSchemaError("Option 'property_names' must be a regular expression string.")
            self._check_regex(opts.property_names, "property_names")

        if opts.additional_properties is not None and not isinstance(opts.additional_properties, (bool, Node)):
            raise InvalidSchemaError("Option 'additional_properties' must be a boolean or a node.")

        children = list(self._properties.values()) + [node for _, node in self._raw_pattern_properties]
        if isinstance(opts.additional_properties, Node):
            children.append(opts.additional_properties)
        self._check_children(children)

    @staticmethod
    def _check_regex(pattern: str, label: str) -> None:
        try:
            re.compile(pattern)
        except re.error as exc:
            raise InvalidSchemaError(f"Invalid regular expression for {label} {pattern!r}: {exc}") from exc

    def _prepare(self) -> None:
        for name, node in self._properties.items():
            self._attach(node, name)
        for pattern, node in self._raw_pattern_properties:
            compiled = re.compile(pattern) if isinstance(pattern, str) else pattern
            self._pattern_properties.append((compiled, self._attach(node, compiled.pattern)))
        if self.options.property_names is not None:
            self._property_names = re.compile(self.options.property_names)
        if isinstance(self.options.additional_properties, Node):
            self._attach(self.options.additional_properties)

    # ---- structure ------------------------------------------------------

    @property
    def properties(self) -> Mapping[str, Node]:
        return dict(self._properties)

    @property
    def pattern_properties(self) -> List[Tuple[Pattern[str], Node]]:
        return list(self._pattern_properties)

    @property
    def additional_properties(self) -> Union[bool, Node]:
        value = self.options.additional_properties
        return False if value is None else value

    @property
    def dependencies(self) -> Mapping[str, Sequence[str]]:
        return self.options.dependencies or {}

    @property
    def children(self) -> Tuple[Node, ...]:
        nodes = tuple(self._properties.values()) + tuple(node for _, node in self._pattern_properties)
        if isinstance(self.additional_properties, Node):
            nodes += (self.additional_properties,)
        return nodes

    def resolve_key(self, key: Any) -> Tuple[KeyRule, Optional[Node]]:
        """Decide how a key that is not a declared property is handled."""
        text = str(key)
        for pattern, node in self._pattern_properties:
            if pattern.search(text):
                return KeyRule.PATTERN, node

        additional = self.additional_properties
        if isinstance(additional, Node):
            return KeyRule.ADDITIONAL, additional
        if additional is True:
            return KeyRule.ALLOWED, None
        return KeyRule.OBSOLETE, None

    def _undeclared(self, data: Mapping[Any, Any]) -> Iterable[Tuple[Any, Any]]:
        return ((key, value) for key, value in data.items() if key not in self._properties)

    # ---- validation -----------------------------------------------------

    def _validate(self, data: Any, result: Result) -> Any:
        data = super()._validate(data, result)
        if data is None:
            return None

        opts = self.options
        size = len(data)

        if opts.min_properties is not None and size < opts.min_properties:
            result.error(f"Has {size} properties but needs at least {opts.min_properties}.")

        if opts.max_properties is not None and size > opts.max_properties:
            result.error(f"Has {size} properties but needs at most {opts.max_properties}.")

        for name, node in self._properties.items():
            with result.in_path(name):
                node._validate(data.get(name), result)

        for key, value in self._undeclared(data):
            if self._property_names is not None and self._property_names.search(str(key)) is None:
                result.error(f'Property name "{key}" does not match "{opts.property_names}".')

            rule, node = self.resolve_key(key)
            if node is not None:
                with result.in_path(key):
                    node._validate(value, result)
            elif rule is KeyRule.OBSOLETE:
                with result.in_path(key):
                    result.error(f'Obsolete property "{key}".')

        for source, targets in self.dependencies.items():
            if is_blank(data.get(source)):
                continue
            for target in targets:
                if is_blank(data.get(target)):
                    result.error(f'Missing property "{target}" because "{source}" is given.')

        return data

    # ---- casting --------------------------------------------------------

    def cast(self, value: Any) -> Any:
        if value is None:
            value = self.default
        if value is None or not isinstance(value, Mapping):
            return value

        cast_data: Dict[Any, Any] = {}
        additional = self.additional_properties
        if additional is not False:
            for key, raw in self._undeclared(value):
                cast_data[key] = additional.cast(raw) if isinstance(additional, Node) else raw

        for name, node in self._properties.items():
            cast_value = node.cast(value.get(name))
            if cast_value is None and name not in value:
                continue
            cast_data[name] = cast_value

        return cast_data

    # ---- export ---------------------------------------------------------

    def to_schema_document(self) -> Dict[str, Any]:
        document: Dict[str, Any] = {}

        if self._properties:
            document["properties"] = {name: node.to_schema_document() for name, node in self._properties.items()}
        if self._pattern_properties:
            document["patternProperties"] = {
                pattern.pattern: node.to_schema_document() for pattern, node in self._pattern_properties
            }

        additional = self.additional_properties
        if isinstance(additional, Node):
            document["additionalProperties"] = additional.to_schema_document()
        else:
            document["additionalProperties"] = bool(additional)

        required = [name for name, node in self._properties.items() if node.required]
        if required:
            document["required"] = required

        if self.options.property_names is not None:
            document["propertyNames"] = {"pattern": self.options.property_names}
        if self.options.dependencies:
            document["dependencies"] = {source: list(targets) for source, targets in self.options.dependencies.items()}

        return self._document(self.ATTRIBUTES, document)

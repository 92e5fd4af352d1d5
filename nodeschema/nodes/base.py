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

"""Base node contract shared by every node kind."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import Any, ClassVar, Dict, Iterable, Mapping, Optional, Sequence, Tuple, Type

from ..exceptions import InvalidSchemaError
from ..result import Result


@dataclass(frozen=True)
class NodeOptions:
    """Options recognized by every node kind."""

    required: bool = False
    default: Any = None
    title: Optional[str] = None
    description: Optional[str] = None
    examples: Optional[Sequence[Any]] = None
    enum: Optional[Sequence[Any]] = None

    def __post_init__(self):
        if isinstance(self.enum, (list, set, frozenset)):
            object.__setattr__(self, "enum", tuple(self.enum))

    @classmethod
    def from_mapping(cls, kind: str, options: Mapping[str, Any]) -> "NodeOptions":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(options) - known)
        if unknown:
            raise InvalidSchemaError(
                f"Node '{kind}' does not support option(s) {unknown}. Allowed options: {sorted(known)}"
            )
        return cls(**options)


def check_non_negative_int(options: NodeOptions, *names: str) -> None:
    for name in names:
        value = getattr(options, name)
        if value is None:
            continue
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidSchemaError(f"Option '{name}' must be an integer, got: {value!r}")
        if value < 0:
            raise InvalidSchemaError(f"Option '{name}' must not be negative, got: {value}")


def check_bounds(options: NodeOptions, lower: str, upper: str) -> None:
    low = getattr(options, lower)
    high = getattr(options, upper)
    if low is not None and high is not None and low > high:
        raise InvalidSchemaError(f"Option '{lower}' can't be greater than '{upper}'.")


def _camelize(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def json_type_name(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def json_equal(left: Any, right: Any) -> bool:
    """Compare two values the way JSON does: ``1`` and ``True`` differ."""
    if isinstance(left, bool) or isinstance(right, bool):
        return type(left) is type(right) and left == right
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return left.keys() == right.keys() and all(json_equal(left[k], right[k]) for k in left)
    if isinstance(left, (list, tuple)) and isinstance(right, (list, tuple)):
        return len(left) == len(right) and all(json_equal(a, b) for a, b in zip(left, right))
    return left == right


class Node(ABC):
    """Abstract schema node.

    Subclasses declare their options dataclass, the Python types they accept
    and the JSON type they export as. Options are parsed and checked once in
    the constructor; a constructed node is never modified afterwards, apart
    from being attached to a parent.
    """

    kind: ClassVar[str] = ""
    json_type: ClassVar[Optional[str]] = None
    allowed_types: ClassVar[Tuple[type, ...]] = (object,)
    options_class: ClassVar[Type[NodeOptions]] = NodeOptions
    # Whether the constructor takes child nodes as positional arguments.
    positional_children: ClassVar[bool] = False

    def __init__(self, **options: Any):
        self.name: Optional[str] = None
        self.parent: Optional[Node] = None
        self.options = self.options_class.from_mapping(self.kind, options)
        self.validate_self()
        self._prepare()

    # ---- construction ---------------------------------------------------

    def validate_self(self) -> None:
        """Check the node's options; raise InvalidSchemaError on misconfiguration."""
        if not isinstance(self.options.required, bool):
            raise InvalidSchemaError("Option 'required' must be a boolean.")
        if self.options.enum is not None and not isinstance(self.options.enum, tuple):
            raise InvalidSchemaError("Option 'enum' must be a list of values.")
        if self.options.examples is not None and isinstance(self.options.examples, (str, bytes)):
            raise InvalidSchemaError("Option 'examples' must be a list of values.")

    def _prepare(self) -> None:
        """Compile derived state once the options are known to be valid."""

    def _check_children(self, children: Iterable["Node"]) -> None:
        """Check that every child can be attached, before any of them is."""
        seen = set()
        for child in children:
            if not isinstance(child, Node):
                raise InvalidSchemaError(f"Child of node '{self.kind}' must be a node, got: {child!r}")
            if child.parent is not None:
                raise InvalidSchemaError(f"Node '{child.kind}' is already attached to another parent.")
            if child is self:
                raise InvalidSchemaError("A node cannot be its own child.")
            if id(child) in seen:
                raise InvalidSchemaError(f"Node '{child.kind}' is given more than once.")
            seen.add(id(child))

    def _attach(self, child: "Node", name: Optional[str] = None) -> "Node":
        self._check_children((child,))
        child.parent = self
        child.name = name
        return child

    @property
    def children(self) -> Tuple["Node", ...]:
        return ()

    @property
    def required(self) -> bool:
        return self.options.required

    @property
    def default(self) -> Any:
        return self.options.default

    # ---- validation -----------------------------------------------------

    def type_matches(self, data: Any) -> bool:
        # bool subclasses int but is never a number here.
        if isinstance(data, bool) and bool not in self.allowed_types and int in self.allowed_types:
            return False
        return isinstance(data, self.allowed_types)

    def validate(self, data: Any, result: Optional[Result] = None) -> Result:
        if result is None:
            result = Result()
        self._validate(data, result)
        return result

    def matches(self, data: Any) -> bool:
        return self.validate(data).valid

    def _validate(self, data: Any, result: Result) -> Any:
        """Run the checks common to all kinds.

        Returns the data to continue validating with, or None when the
        kind-specific checks must be skipped.
        """
        if data is None:
            data = self.default

        if data is None:
            if self.required:
                result.error("Value must be given.")
            return None

        if not self.type_matches(data):
            result.error(f'Invalid type, got type "{json_type_name(data)}", expected "{self.json_type}".')
            return None

        if self.options.enum is not None and not any(json_equal(data, v) for v in self.options.enum):
            result.error(f"Value not included in enum {list(self.options.enum)!r}.")

        return data

    # ---- casting and export ---------------------------------------------

    def cast(self, value: Any) -> Any:
        if value is None:
            return self.default
        return value

    @abstractmethod
    def to_schema_document(self) -> Dict[str, Any]:
        raise NotImplementedError

    def _document(self, attributes: Iterable[str], document: Dict[str, Any]) -> Dict[str, Any]:
        """Merge common and kind-specific options into an export document."""
        result: Dict[str, Any] = {}
        if self.json_type is not None:
            result["type"] = self.json_type
        result.update(document)

        for name in ("title", "description"):
            value = getattr(self.options, name)
            if value is not None:
                result[name] = value
        if self.options.examples is not None:
            result["examples"] = list(self.options.examples)
        if self.options.enum is not None:
            result["enum"] = list(self.options.enum)
        if self.default is not None:
            result["default"] = self.default

        for name in attributes:
            value = getattr(self.options, name)
            if value is not None:
                result[_camelize(name)] = value
        return result

    def __repr__(self) -> str:
        label = f" {self.name!r}" if self.name is not None else ""
        return f"<{type(self).__name__}{label}>"

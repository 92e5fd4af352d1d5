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

"""Array node: list, tuple and contains validation of sequences.

The mode is derived from the number of item nodes and the ``contains``
option:

* contains - exactly one item node; at least one element must match it.
* list - one item node; every element must match it.
* tuple - several item nodes; element ``i`` must match item ``i``.
  Elements beyond the tuple are governed by ``additional_items``.
* unconstrained - no item nodes; elements are not checked.

Validation and casting both go through :meth:`ArrayNode.mode` and
:meth:`ArrayNode.node_for_index` so that they always agree.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..exceptions import InvalidSchemaError
from ..result import Result, index_segment
from .base import Node, NodeOptions, check_bounds, check_non_negative_int, json_equal


class ArrayMode(Enum):
    CONTAINS = "contains"
    LIST = "list"
    TUPLE = "tuple"
    UNCONSTRAINED = "unconstrained"


@dataclass(frozen=True)
class ArrayOptions(NodeOptions):
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    unique_items: Optional[bool] = None
    additional_items: Union[bool, Node, None] = False
    contains: bool = False


def has_duplicates(values: Sequence[Any]) -> bool:
    for index, value in enumerate(values):
        if any(json_equal(value, other) for other in values[index + 1:]):
            return True
    return False


class ArrayNode(Node):
    ATTRIBUTES = ("min_items", "max_items", "unique_items")

    kind = "array"
    json_type = "array"
    allowed_types = (list, tuple)
    options_class = ArrayOptions
    positional_children = True

    def __init__(self, *items: Node, **options: Any):
        self._items: Tuple[Node, ...] = tuple(items)
        super().__init__(**options)

    def validate_self(self) -> None:
        super().validate_self()
        opts = self.options
        check_non_negative_int(opts, "min_items", "max_items")
        check_bounds(opts, "min_items", "max_items")

        if opts.unique_items is not None and not isinstance(opts.unique_items, bool):
            raise InvalidSchemaError("Option 'unique_items' must be a boolean.")

        if not isinstance(opts.contains, bool):
            raise InvalidSchemaError("Option 'contains' must be a boolean.")

        if opts.additional_items is not None and not isinstance(opts.additional_items, (bool, Node)):
            raise InvalidSchemaError("Option 'additional_items' must be a boolean or a node.")

        if opts.contains and len(self._items) != 1:
            raise InvalidSchemaError("Array nodes with 'contains' must have exactly one item.")

        additional = opts.additional_items
        self._check_children(self._items + ((additional,) if isinstance(additional, Node) else ()))

    def _prepare(self) -> None:
        for item in self._items:
            self._attach(item)
        if isinstance(self.options.additional_items, Node):
            self._attach(self.options.additional_items)

    # ---- structure ------------------------------------------------------

    @property
    def items(self) -> Tuple[Node, ...]:
        return self._items

    @property
    def additional_items(self) -> Union[bool, Node]:
        value = self.options.additional_items
        return False if value is None else value

    @property
    def children(self) -> Tuple[Node, ...]:
        if isinstance(self.additional_items, Node):
            return self._items + (self.additional_items,)
        return self._items

    def mode(self) -> ArrayMode:
        if self.options.contains:
            return ArrayMode.CONTAINS
        if len(self._items) == 1:
            return ArrayMode.LIST
        if len(self._items) > 1:
            return ArrayMode.TUPLE
        return ArrayMode.UNCONSTRAINED

    def tuple_accepts(self, length: int) -> bool:
        expected = len(self._items)
        return length == expected or (self.additional_items is not False and length > expected)

    def node_for_index(self, index: int) -> Optional[Node]:
        """Return the node element ``index`` is checked against in list/tuple mode.

        None means the element is accepted unchecked.
        """
        mode = self.mode()
        if mode is ArrayMode.LIST:
            return self._items[0]
        if mode is ArrayMode.TUPLE:
            if index < len(self._items):
                return self._items[index]
            if isinstance(self.additional_items, Node):
                return self.additional_items
        return None

    # ---- validation -----------------------------------------------------

    def _validate(self, data: Any, result: Result) -> Any:
        data = super()._validate(data, result)
        if data is None:
            return None

        opts = self.options
        length = len(data)

        if opts.min_items is not None and length < opts.min_items:
            result.error(f"Array has {length} items but needs at least {opts.min_items}.")

        if opts.max_items is not None and length > opts.max_items:
            result.error(f"Array has {length} items but needs at most {opts.max_items}.")

        mode = self.mode()
        if mode is ArrayMode.CONTAINS:
            item = self._items[0]
            if not any(item.matches(value) for value in data):
                document = json.dumps(item.to_schema_document(), sort_keys=True, default=str)
                result.error(f"At least one entry must match schema {document}.")
        elif mode is ArrayMode.TUPLE and not self.tuple_accepts(length):
            result.error(f"Array has {length} items but must have exactly {len(self._items)}.")
        elif mode is not ArrayMode.UNCONSTRAINED:
            for index, value in enumerate(data):
                node = self.node_for_index(index)
                if node is None:
                    continue
                with result.in_path(index_segment(index)):
                    node._validate(value, result)

        if opts.unique_items and has_duplicates(data):
            result.error("Array has duplicate items.")

        return data

    # ---- casting --------------------------------------------------------

    def cast(self, value: Any) -> Any:
        if value is None:
            return self.default
        if not isinstance(value, (list, tuple)):
            return value

        mode = self.mode()
        if mode is ArrayMode.CONTAINS:
            item = self._items[0]
            return [item.cast(element) if item.matches(element) else element for element in value]

        if mode is ArrayMode.UNCONSTRAINED or (mode is ArrayMode.TUPLE and not self.tuple_accepts(len(value))):
            return list(value)

        cast_values: List[Any] = []
        for index, element in enumerate(value):
            node = self.node_for_index(index)
            cast_values.append(element if node is None else node.cast(element))
        return cast_values

    # ---- export ---------------------------------------------------------

    def to_schema_document(self) -> Dict[str, Any]:
        document: Dict[str, Any] = {}

        if self._items:
            if self.options.contains:
                document["contains"] = self._items[0].to_schema_document()
            elif len(self._items) == 1:
                document["items"] = self._items[0].to_schema_document()
            else:
                document["items"] = [item.to_schema_document() for item in self._items]

        additional = self.additional_items
        if additional is True:
            document["additionalItems"] = True
        elif isinstance(additional, Node):
            document["additionalItems"] = additional.to_schema_document()
        elif self._items and not self.options.contains:
            document["additionalItems"] = False

        document = self._document(self.ATTRIBUTES, document)
        if self.mode() is ArrayMode.TUPLE:
            # A tuple array holds at least one element per tuple item.
            document["minItems"] = max(document.get("minItems", 0), len(self._items))
        return document

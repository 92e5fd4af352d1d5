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

"""Numeric, boolean and null nodes."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Union

from ..exceptions import InvalidSchemaError
from ..result import Result
from .base import Node, NodeOptions, check_bounds, json_type_name

Numeric = Union[int, float, Decimal]


@dataclass(frozen=True)
class NumericOptions(NodeOptions):
    minimum: Optional[Numeric] = None
    maximum: Optional[Numeric] = None
    exclusive_minimum: Optional[Numeric] = None
    exclusive_maximum: Optional[Numeric] = None
    multiple_of: Optional[Numeric] = None


def _is_numeric(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _as_decimal(value: Numeric) -> Decimal:
    # str() keeps 0.1 as 0.1 instead of its binary expansion.
    return value if isinstance(value, Decimal) else Decimal(str(value))


class NumericNode(Node):
    """Shared checks for integer and number nodes."""

    ATTRIBUTES = ("minimum", "maximum", "exclusive_minimum", "exclusive_maximum", "multiple_of")

    options_class = NumericOptions

    def validate_self(self) -> None:
        super().validate_self()
        for name in self.ATTRIBUTES:
            value = getattr(self.options, name)
            if value is not None and not _is_numeric(value):
                raise InvalidSchemaError(f"Option '{name}' must be a number, got: {value!r}")

        check_bounds(self.options, "minimum", "maximum")
        check_bounds(self.options, "exclusive_minimum", "exclusive_maximum")

        if self.options.multiple_of is not None and self.options.multiple_of <= 0:
            raise InvalidSchemaError("Option 'multiple_of' must be greater than 0.")

    def _validate(self, data: Any, result: Result) -> Any:
        data = super()._validate(data, result)
        if data is None:
            return None

        opts = self.options
        if opts.minimum is not None and data < opts.minimum:
            result.error(f"Value must have a minimum of {opts.minimum}.")
        if opts.exclusive_minimum is not None and data <= opts.exclusive_minimum:
            result.error(f"Value must have an exclusive minimum of {opts.exclusive_minimum}.")
        if opts.maximum is not None and data > opts.maximum:
            result.error(f"Value must have a maximum of {opts.maximum}.")
        if opts.exclusive_maximum is not None and data >= opts.exclusive_maximum:
            result.error(f"Value must have an exclusive maximum of {opts.exclusive_maximum}.")
        if opts.multiple_of is not None and not self._is_multiple(data, opts.multiple_of):
            result.error(f"Value must be a multiple of {opts.multiple_of}.")
        return data

    @staticmethod
    def _is_multiple(value: Numeric, divisor: Numeric) -> bool:
        try:
            return _as_decimal(value) % _as_decimal(divisor) == 0
        except InvalidOperation:
            return False

    def to_schema_document(self) -> Dict[str, Any]:
        document = self._document(self.ATTRIBUTES, {})
        for key in ("minimum", "maximum", "exclusiveMinimum", "exclusiveMaximum", "multipleOf"):
            if isinstance(document.get(key), Decimal):
                document[key] = float(document[key])
        return document


class IntegerNode(NumericNode):
    kind = "integer"
    json_type = "integer"
    allowed_types = (int,)


class NumberNode(NumericNode):
    kind = "number"
    json_type = "number"
    allowed_types = (int, float, Decimal)


class BooleanNode(Node):
    kind = "boolean"
    json_type = "boolean"
    allowed_types = (bool,)

    def to_schema_document(self) -> Dict[str, Any]:
        return self._document((), {})


class NullNode(Node):
    """Accepts only ``None``; absence is the value itself, never an error."""

    kind = "null"
    json_type = "null"
    allowed_types = (type(None),)

    def validate_self(self) -> None:
        super().validate_self()
        if self.default is not None:
            raise InvalidSchemaError("Option 'default' of a null node must be None.")

    def _validate(self, data: Any, result: Result) -> Any:
        if data is not None:
            result.error(f'Invalid type, got type "{json_type_name(data)}", expected "null".')
        return None

    def to_schema_document(self) -> Dict[str, Any]:
        return self._document((), {})

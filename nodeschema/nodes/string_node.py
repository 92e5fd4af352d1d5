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

"""String node: length, pattern, format and enum checks."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..exceptions import InvalidSchemaError
from ..result import Result
from ..utils.formats import cast_format, is_supported_format, matches_format, normalize_format_name
from .base import Node, NodeOptions, check_bounds, check_non_negative_int
from .registry import NodeRegistry


@dataclass(frozen=True)
class StringOptions(NodeOptions):
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    pattern: Optional[str] = None
    format: Optional[str] = None
    format_options: Optional[Mapping[str, Any]] = None


class StringNode(Node):
    ATTRIBUTES = ("min_length", "max_length", "pattern", "format")

    kind = "string"
    json_type = "string"
    allowed_types = (str,)
    options_class = StringOptions

    def __init__(self, **options: Any):
        if "format" in options:
            options["format"] = normalize_format_name(options["format"])
        self._pattern: Optional[re.Pattern] = None
        self._format_node: Optional[Node] = None
        super().__init__(**options)

    def validate_self(self) -> None:
        super().validate_self()
        opts = self.options
        check_non_negative_int(opts, "min_length", "max_length")
        check_bounds(opts, "min_length", "max_length")

        if opts.pattern is not None:
            if not isinstance(opts.pattern, str):
                raise InvalidSchemaError(f"Option 'pattern' must be a string, got: {opts.pattern!r}")
            try:
                re.compile(opts.pattern)
            except re.error as exc:
                raise InvalidSchemaError(f"Option 'pattern' is not a valid regular expression: {exc}") from exc

        if opts.format is not None and not is_supported_format(opts.format):
            raise InvalidSchemaError(f"Format {opts.format!r} is not supported.")

        if opts.format_options is not None:
            if not isinstance(opts.format_options, Mapping):
                raise InvalidSchemaError("Option 'format_options' must be a mapping.")
            if opts.format is None or NodeRegistry.resolve(opts.format) is None:
                raise InvalidSchemaError(
                    f"Option 'format_options' requires a format backed by a node kind, got format: {opts.format!r}"
                )

    def _prepare(self) -> None:
        if self.options.pattern is not None:
            self._pattern = re.compile(self.options.pattern)
        if self.options.format_options is not None:
            self._format_node = self._attach(NodeRegistry.create(self.options.format, **self.options.format_options))

    @property
    def format_node(self) -> Optional[Node]:
        """Node the cast value is re-validated against, if the format delegates."""
        return self._format_node

    @property
    def children(self):
        return (self._format_node,) if self._format_node is not None else ()

    def _validate(self, data: Any, result: Result) -> Any:
        data = super()._validate(data, result)
        if data is None:
            return None

        opts = self.options
        length = len(data)

        if opts.min_length is not None and length < opts.min_length:
            result.error(f"String is {length} characters long but must be at least {opts.min_length}.")

        if opts.max_length is not None and length > opts.max_length:
            result.error(f"String is {length} characters long but must be at most {opts.max_length}.")

        if self._pattern is not None and self._pattern.search(data) is None:
            result.error(f'String does not match pattern "{opts.pattern}".')

        if opts.format is not None:
            if not matches_format(opts.format, data):
                result.error(f'String does not match format "{opts.format}".')
            elif self._format_node is not None:
                self._format_node._validate(self.cast(data), result)

        return data

    def cast(self, value: Any) -> Any:
        if value is None:
            value = self.default
        if value is None:
            return None
        return cast_format(self.options.format, value)

    def to_schema_document(self) -> Dict[str, Any]:
        return self._document(self.ATTRIBUTES, {})

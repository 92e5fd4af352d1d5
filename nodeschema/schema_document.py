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

"""Export of node trees as JSON Schema (draft-07) documents."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

from jsonschema import Draft7Validator
from jsonschema.exceptions import SchemaError

from .exceptions import InvalidSchemaError
from .nodes.base import Node
from .result import format_path, index_segment

logger = logging.getLogger(__name__)

SCHEMA_DIALECT = "http://json-schema.org/draft-07/schema#"


@dataclass(frozen=True)
class SchemaIssue:
    message: str
    path: Tuple[str, ...] = ()

    @property
    def pointer(self) -> str:
        return format_path(self.path)


def to_schema_document(node: Node, include_dialect: bool = True) -> Dict[str, Any]:
    """Serialize a node tree into a JSON Schema document.

    Args:
        node: Root node of the tree
        include_dialect: Whether to add the ``$schema`` keyword

    Returns:
        Schema dictionary
    """
    document = node.to_schema_document()
    if include_dialect:
        document = {"$schema": SCHEMA_DIALECT, **document}
    return document


def check_schema_document(document: Dict[str, Any]) -> None:
    """Meta-validate a document against the draft-07 metaschema.

    Raises:
        InvalidSchemaError: If the document is not a valid draft-07 schema
    """
    try:
        Draft7Validator.check_schema(document)
    except SchemaError as e:
        path = "/" + "/".join(str(p) for p in e.absolute_path) if e.absolute_path else ""
        raise InvalidSchemaError(f"Exported schema document is invalid at '{path}': {e.message}") from e


def _segment(token: Any) -> str:
    return index_segment(token) if isinstance(token, int) else str(token)


def document_issues(document: Dict[str, Any], data: Any) -> List[SchemaIssue]:
    """Validate data against an exported document with ``jsonschema``.

    Paths use the same segments as :class:`~nodeschema.result.Result`, so the
    issues can be compared with the engine's own messages.
    """
    validator = Draft7Validator(document)
    issues = [
        SchemaIssue(message=error.message, path=tuple(_segment(p) for p in error.absolute_path))
        for error in validator.iter_errors(data)
    ]
    logger.debug(f"jsonschema reported {len(issues)} issue(s)")
    return sorted(issues, key=lambda issue: issue.path)

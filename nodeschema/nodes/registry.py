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

import logging
from typing import Any, Dict, List, Optional, Type

from ..exceptions import InvalidSchemaError
from .base import Node

logger = logging.getLogger(__name__)


class NodeRegistry:
    """Registry mapping kind names to node classes."""

    _kinds: Dict[str, Type[Node]] = {}

    @classmethod
    def register(cls, kind: str, node_class: Type[Node]) -> None:
        if not isinstance(kind, str) or not kind:
            raise InvalidSchemaError(f"Node kind must be a non-empty string, got: {kind!r}")
        if not (isinstance(node_class, type) and issubclass(node_class, Node)):
            raise InvalidSchemaError(f"Node kind '{kind}' must map to a Node subclass, got: {node_class!r}")
        logger.debug(f"Registering node kind '{kind}' -> {node_class.__name__}")
        cls._kinds[kind] = node_class

    @classmethod
    def unregister(cls, kind: str) -> None:
        cls._kinds.pop(kind, None)

    @classmethod
    def resolve(cls, kind: str) -> Optional[Type[Node]]:
        return cls._kinds.get(kind)

    @classmethod
    def kinds(cls) -> List[str]:
        return sorted(cls._kinds)

    @classmethod
    def create(cls, kind: str, *children: Node, **options: Any) -> Node:
        """Create a node of the given kind."""
        node_class = cls.resolve(kind)
        if node_class is None:
            raise InvalidSchemaError(f"Unknown node kind: '{kind}'. Valid kinds: {cls.kinds()}")
        if children and not node_class.positional_children:
            raise InvalidSchemaError(
                f"Node kind '{kind}' does not take positional child nodes; pass children as options instead."
            )
        return node_class(*children, **options)

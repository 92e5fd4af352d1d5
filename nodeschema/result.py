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

"""Error collection for a single validation run."""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple

from .exceptions import ValidationError


DataPath = Tuple[str, ...]


@dataclass(frozen=True)
class ValidationMessage:
    path: DataPath
    message: str

    @property
    def pointer(self) -> str:
        return format_path(self.path)

    def to_dict(self) -> Dict[str, Any]:
        return {"path": list(self.path), "message": self.message}


def index_segment(index: int) -> str:
    """Render an array index as a path segment, e.g. ``[2]``."""
    return f"[{index}]"


def _escape(token: str) -> str:
    return token.replace("~", "~0").replace("/", "~1")


def format_path(path: DataPath) -> str:
    """Render a path tuple as ``/user/[2]/email`` (``/`` for the root)."""
    if not path:
        return "/"
    return "".join(f"/{_escape(segment)}" for segment in path)


class Result:
    """Container for the errors found while validating one piece of data.

    A single instance is shared by every node of the tree during a
    validation call. Nodes descend with :meth:`in_path` and report problems
    with :meth:`error`; each error is filed under the path active at that
    moment.
    """

    def __init__(self):
        self._path: List[str] = []
        self._errors: Dict[DataPath, List[str]] = {}

    @property
    def current_path(self) -> DataPath:
        return tuple(self._path)

    @contextmanager
    def in_path(self, segment: Any) -> Iterator["Result"]:
        """Descend into ``segment`` for the duration of the ``with`` block."""
        self._path.append(str(segment))
        try:
            yield self
        finally:
            self._path.pop()

    def error(self, message: str) -> None:
        self._errors.setdefault(self.current_path, []).append(message)

    @property
    def valid(self) -> bool:
        return not self._errors

    def __bool__(self) -> bool:
        return self.valid

    @property
    def errors(self) -> Dict[DataPath, List[str]]:
        return {path: list(messages) for path, messages in self._errors.items()}

    @property
    def messages(self) -> List[ValidationMessage]:
        return [
            ValidationMessage(path=path, message=message)
            for path, messages in self._errors.items()
            for message in messages
        ]

    def messages_at(self, *path: str) -> List[str]:
        return list(self._errors.get(tuple(path), []))

    def exception_message(self) -> str:
        return "\n".join(
            f"{format_path(path)}: {', '.join(messages)}" for path, messages in self._errors.items()
        )

    def raise_if_invalid(self) -> None:
        if not self.valid:
            raise ValidationError(self.exception_message(), result=self)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "valid": self.valid,
            "errors": [message.to_dict() for message in self.messages],
        }

    def __repr__(self) -> str:
        return f"Result(valid={self.valid}, errors={len(self.messages)})"

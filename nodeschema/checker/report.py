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

"""Per-file reports of the data checker and their output formats."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..result import Result, format_path


class CheckResult:
    """Container for checking results for a single data file."""

    def __init__(self, file_path: Path):
        """Initialize check result.

        Args:
            file_path: Path to the data file being checked
        """
        self.file_path = file_path
        self.errors: List[Dict[str, Any]] = []
        self.warnings: List[Dict[str, Any]] = []

    def add_error(self, message: str, data_path: Optional[str] = None):
        error = {'message': message}
        if data_path is not None:
            error['data_path'] = data_path
        self.errors.append(error)

    def add_warning(self, message: str, data_path: Optional[str] = None):
        warning = {'message': message}
        if data_path is not None:
            warning['data_path'] = data_path
        self.warnings.append(warning)

    def add_validation_result(self, result: Result):
        """Copy every message of a validation result into this report."""
        for message in result.messages:
            self.add_error(message.message, data_path=format_path(message.path))

    def to_dict(self) -> Dict[str, Any]:
        return {
            'file': str(self.file_path),
            'errors': self.errors,
            'warnings': self.warnings,
        }


def render_json(results: List[CheckResult]) -> str:
    output = {
        'files': len(results),
        'errors': sum(len(r.errors) for r in results),
        'warnings': sum(len(r.warnings) for r in results),
        'results': [r.to_dict() for r in results],
    }
    return json.dumps(output, indent=2)


def render_github_actions(results: List[CheckResult]) -> str:
    lines = []
    for result in results:
        for error in result.errors:
            lines.append(f"::error file={result.file_path}::{_located(error)}")
        for warning in result.warnings:
            lines.append(f"::warning file={result.file_path}::{_located(warning)}")
    return "\n".join(lines)


def render_human(results: List[CheckResult]) -> str:
    lines = []
    for result in results:
        if not (result.errors or result.warnings):
            continue
        lines.append(f"\n{result.file_path}:")
        for error in result.errors:
            lines.append(f"  ERROR: {_located(error)}")
        for warning in result.warnings:
            lines.append(f"  WARNING: {_located(warning)}")
    return "\n".join(lines)


def _located(entry: Dict[str, Any]) -> str:
    if 'data_path' in entry:
        return f"{entry['data_path']}: {entry['message']}"
    return entry['message']


RENDERERS = {
    'human': render_human,
    'json': render_json,
    'github-actions': render_github_actions,
}

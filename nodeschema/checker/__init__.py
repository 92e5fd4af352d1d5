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

"""Checker package validating data files against node trees."""

from pathlib import Path
from typing import List

from ..exceptions import CastError, DataFileError
from ..nodes.base import Node
from ..result import format_path
from ..schema_document import document_issues, to_schema_document
from .loader import load_data
from .report import CheckResult

__all__ = ['check_files', 'CheckResult']


def check_files(node: Node, file_paths: List[Path], cross_check: bool = False) -> List[CheckResult]:
    """Validate a list of data files against one node tree.

    Args:
        node: Root node the data must satisfy
        file_paths: List of data file paths
        cross_check: Also validate with jsonschema against the exported
            document and warn where the two disagree

    Returns:
        List of CheckResult objects, one per file
    """
    results = []
    document = to_schema_document(node) if cross_check else None

    for file_path in file_paths:
        result = CheckResult(file_path)

        try:
            data = load_data(file_path)
        except DataFileError as e:
            result.add_error(str(e))
            results.append(result)
            continue

        validation = node.validate(data)
        result.add_validation_result(validation)

        if validation.valid:
            try:
                node.cast(data)
            except CastError as e:
                result.add_error(f"Value cannot be cast: {e}")

        if document is not None:
            issues = document_issues(document, data)
            if validation.valid:
                for issue in issues:
                    result.add_warning(
                        f"jsonschema rejects data the node tree accepts: {issue.message}",
                        data_path=format_path(issue.path),
                    )
            elif not issues:
                result.add_warning("jsonschema accepts data the node tree rejects.")

        results.append(result)

    return results

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

"""Custom exceptions for the nodeschema package."""


class NodeSchemaError(Exception):
    """Base exception for nodeschema related errors."""
    pass


class InvalidSchemaError(NodeSchemaError):
    """Exception raised when a node tree is configured incorrectly."""
    pass


class CastError(NodeSchemaError, ValueError):
    """Exception raised when a scalar value cannot be cast to its format."""
    pass


class ValidationError(NodeSchemaError):
    """Exception raised for data that failed validation."""

    def __init__(self, message: str, result=None):
        super().__init__(message)
        self.result = result


class DataFileError(NodeSchemaError):
    """Exception raised when a data file or schema reference cannot be loaded."""
    pass

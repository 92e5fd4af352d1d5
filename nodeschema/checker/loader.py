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

"""Loading of data files and schema references for the checker."""

import importlib
import json
import logging
import re
from pathlib import Path
from typing import Any, List, Union

import yaml

from ..exceptions import DataFileError
from ..nodes.base import Node

logger = logging.getLogger(__name__)

DATA_EXTENSIONS = ('.yaml', '.yml', '.json')

_TIMESTAMP_TAG = 'tag:yaml.org,2002:timestamp'
_BOOL_TAG = 'tag:yaml.org,2002:bool'


class DataLoader(yaml.SafeLoader):
    """Safe loader that leaves dates and timestamps as strings.

    Only ``true`` and ``false`` resolve to booleans; ``yes``, ``on`` and the
    other YAML 1.1 spellings stay strings. Format checks on string nodes then
    see the text exactly as written.
    """


DataLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (_TIMESTAMP_TAG, _BOOL_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
DataLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r'^(?:true|True|TRUE|false|False|FALSE)$'),
    list('tTfF'),
)


def resolve_schema_reference(reference: str) -> Node:
    """Resolve ``package.module:attribute`` to a node.

    The attribute may be a node or a callable without arguments returning one.

    Raises:
        DataFileError: If the reference cannot be imported or is not a node
    """
    module_name, sep, attribute = reference.partition(':')
    if not sep or not module_name or not attribute:
        raise DataFileError(f"Invalid schema reference '{reference}'. Expected format: 'module:attribute'")

    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise DataFileError(f"Cannot import module '{module_name}': {e}") from e

    target: Any = module
    for part in attribute.split('.'):
        try:
            target = getattr(target, part)
        except AttributeError as e:
            raise DataFileError(f"Schema reference '{reference}' not found: {e}") from e

    if callable(target) and not isinstance(target, Node):
        target = target()
    if not isinstance(target, Node):
        raise DataFileError(f"Schema reference '{reference}' does not resolve to a node, got: {type(target).__name__}")

    logger.debug(f"Resolved schema reference '{reference}' to {target!r}")
    return target


def load_data(file_path: Union[str, Path]) -> Any:
    """Load a YAML or JSON data file.

    Raises:
        DataFileError: If the file is missing or cannot be parsed
    """
    path = Path(file_path)

    if not path.exists():
        raise DataFileError(f"Data file not found: {path}")

    if not path.is_file():
        raise DataFileError(f"Path is not a file: {path}")

    try:
        logger.debug(f"Loading data file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            if path.suffix == '.json':
                return json.load(f)
            return yaml.load(f, Loader=DataLoader)
    except json.JSONDecodeError as e:
        raise DataFileError(f"Invalid JSON in {path}: {e.msg} (line {e.lineno}, column {e.colno})") from e
    except yaml.YAMLError as e:
        raise DataFileError(f"Failed to parse {path}: {e}") from e
    except OSError as e:
        raise DataFileError(f"Failed to read {path}: {e}") from e


def find_data_files(paths: List[str]) -> List[Path]:
    """Find all data files in the given files and directories."""
    data_files = []

    for path_str in paths:
        path = Path(path_str)

        if not path.exists():
            logger.warning(f"Path does not exist: {path}")
            continue

        if path.is_file():
            if path.suffix in DATA_EXTENSIONS:
                data_files.append(path)
            else:
                logger.warning(f"File does not have a data file extension: {path}")
        elif path.is_dir():
            for ext in DATA_EXTENSIONS:
                data_files.extend(path.rglob(f'*{ext}'))
        else:
            logger.warning(f"Path is neither file nor directory: {path}")

    return sorted(set(data_files))

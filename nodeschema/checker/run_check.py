#!/usr/bin/env python3
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

"""CLI entry point for checking data files against a node tree."""

import argparse
import json
import logging
from typing import List

from ..exceptions import DataFileError, InvalidSchemaError
from ..schema_document import check_schema_document, to_schema_document
from ..utils.logging_utils import configure_split_stream_logging
from . import check_files
from .loader import find_data_files, resolve_schema_reference
from .report import RENDERERS

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='nodeschema-check',
        description='Validate YAML/JSON data files against a nodeschema node tree',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')

    subparsers = parser.add_subparsers(dest='command', required=True)

    check = subparsers.add_parser('check', parents=[common], help='Validate data files')
    check.add_argument('schema', help="Schema reference in the form 'module:attribute'")
    check.add_argument(
        'paths',
        nargs='*',
        default=None,
        help='Data files or directories to check (default: current directory)',
    )
    check.add_argument(
        '--format',
        choices=sorted(RENDERERS),
        default='human',
        help='Output format (default: human)',
    )
    check.add_argument(
        '--cross-check',
        action='store_true',
        help='Also validate with jsonschema against the exported document and report disagreements',
    )

    export = subparsers.add_parser('export', parents=[common], help='Print the JSON Schema document of a node tree')
    export.add_argument('schema', help="Schema reference in the form 'module:attribute'")
    export.add_argument('--indent', type=int, default=2, help='JSON indentation (default: 2)')
    export.add_argument('--no-check', action='store_true', help='Skip meta-validation of the document')

    return parser


def _run_check(args: argparse.Namespace) -> int:
    node = resolve_schema_reference(args.schema)

    data_files = find_data_files(args.paths or ['.'])
    if not data_files:
        logger.error("No data files found.")
        return 1

    results = check_files(node, data_files, cross_check=args.cross_check)
    output = RENDERERS[args.format](results)
    if output:
        print(output)

    total_errors = sum(len(r.errors) for r in results)
    if total_errors > 0:
        return 1
    if args.format == 'human':
        print(f"Checked {len(results)} file(s) with no errors.")
    return 0


def _run_export(args: argparse.Namespace) -> int:
    node = resolve_schema_reference(args.schema)
    document = to_schema_document(node)
    if not args.no_check:
        check_schema_document(document)
    print(json.dumps(document, indent=args.indent, default=str))
    return 0


def main(argv: List[str] | None = None) -> int:
    """Main entry point for the checker CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_split_stream_logging(verbose=args.verbose)

    try:
        if args.command == 'check':
            return _run_check(args)
        return _run_export(args)
    except (DataFileError, InvalidSchemaError) as e:
        logger.error(str(e))
        return 2


if __name__ == '__main__':
    raise SystemExit(main())

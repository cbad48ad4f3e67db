# Copyright 2025 Roger Cibrian
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

"""Command-line interface for quickload.

This module provides the ``quickload`` CLI, for checking and inspecting a
configuration directory without writing any code.

Commands:

    validate: Validate a configuration directory against a schema
    show: Print the resolved, validated configuration

Example:
    Validate the production configuration:
        ```bash
        $ quickload validate config --schema config.schema.json --env production
        ```

    Print the resolved configuration as YAML:
        ```bash
        $ quickload show config --schema config.schema.json --format yaml
        ```

    Print a single value:
        ```bash
        $ quickload show config --schema config.schema.json --query '$.server.port'
        ```

Exit Codes:

- 0: Success
- 1: Error (invalid configuration, unreadable files, bad query)

Note:
    The environment is taken from --env, else from APP_ENV, else
    "development". Verbose mode shows full tracebacks on errors.
    Debug mode implies verbose mode and shows every merged file.

"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
import json
from pathlib import Path
import sys
import traceback
from typing import Any

from jsonpath_ng import parse as jsonpath_parse
import yaml

from quickload import __version__
from quickload.config.loader import create_loader
from quickload.config.schema import load_schema_file
from quickload.environment import ProcessContext, StaticContext
from quickload.exceptions import ConfigurationError, ErrorCode, QuickloadError
from quickload.logging import get_logger, set_global_logger
from quickload.validation import validate_config_dir


def _installed_version() -> str:
    try:
        return version("quickload")
    except PackageNotFoundError:
        return __version__


def _format_output(data: Any, output_format: str) -> str:
    if output_format == "yaml":
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False).rstrip()
    return json.dumps(data, indent=2)


def _query(config: dict[str, Any], expression: str) -> Any:
    """Apply a JSONPath expression to the configuration.

    Returns the single matched value, or a list when several values match.

    Raises:
        ValueError: If the expression is invalid or matches nothing.
    """
    try:
        expr = jsonpath_parse(expression)
    except Exception as err:
        raise ValueError(f"Invalid JSONPath {expression!r}: {err}") from err

    matches = [match.value for match in expr.find(config)]
    if not matches:
        raise ValueError(f"Query {expression!r} did not match anything")
    return matches[0] if len(matches) == 1 else matches


def cmd_validate(args: argparse.Namespace) -> int:
    """Handler for 'quickload validate' command.

    Loads both layers of the configuration directory, merges them, and
    validates the result, reporting every problem found.

    Args:
        args: Parsed command-line arguments containing the configuration
            directory, schema path, environment, and verbose flag.

    Returns:
        Exit code (0 for valid configuration, 1 for invalid).

    """
    set_global_logger(get_logger(verbose=args.verbose))

    config_dir = Path(args.config_dir).resolve()

    print(f"Validating configuration: {config_dir}")
    print()

    result = validate_config_dir(
        config_dir, Path(args.schema), environment=args.env, verbose=args.verbose
    )

    print("=" * 70)
    print("VALIDATION RESULTS")
    print("=" * 70)
    print(f"Config Dir:  {result['config_dir']}")
    print(f"Environment: {result['environment']}")
    print(f"Status:      {result['status'].upper()}")
    print()

    if result["errors"]:
        print(f"Errors ({len(result['errors'])}):")
        for error in result["errors"]:
            print(f"  [X] {error}")
        print()

    print("=" * 70)

    if result["status"] == "valid":
        print()
        print("[SUCCESS] Configuration is valid!")
        return 0

    print()
    print(
        f"[FAILED] Configuration validation failed with "
        f"{len(result['errors'])} error(s)."
    )
    return 1


def cmd_show(args: argparse.Namespace) -> int:
    """Handler for 'quickload show' command.

    Resolves the configuration exactly as an application would and prints
    it, or the part of it selected by --query.

    Args:
        args: Parsed command-line arguments containing the configuration
            directory, schema path, environment, query, output format, and
            verbosity flags.

    Returns:
        Exit code (0 for success, 1 for failure).

    """
    logger = get_logger(verbose=args.verbose, debug=args.debug, stream=sys.stderr)
    set_global_logger(logger)

    context = StaticContext(args.env) if args.env else ProcessContext()

    try:
        schema = load_schema_file(Path(args.schema))
        loader = create_loader(schema, config_dir=args.config_dir, context=context)
        result = loader.resolve()
        output = result.config
        if args.query:
            output = _query(output, args.query)
    except ConfigurationError as err:
        print(f"Error [{err.code}]: {err}")
        if err.code is ErrorCode.VALIDATION_ERROR:
            for violation in err.errors:
                print(f"  [X] {violation}")
        if args.verbose or args.debug:
            traceback.print_exc()
        return 1
    except (QuickloadError, ValueError) as err:
        print(f"Error: {err}")
        if args.verbose or args.debug:
            traceback.print_exc()
        return 1

    logger.verbose("CONFIG", f"Resolved environment: {result.environment}")
    print(_format_output(output, args.format))
    return 0


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "config_dir",
        help="Configuration root containing default/ and environment directories",
    )
    parser.add_argument(
        "--schema",
        required=True,
        help="Path to the JSON Schema file",
    )
    parser.add_argument(
        "--env",
        default=None,
        help="Environment to load (default: $APP_ENV, else development)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and full tracebacks on errors",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the quickload CLI."""
    parser = argparse.ArgumentParser(
        prog="quickload",
        description="quickload - layered, schema-validated JSON configuration",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"quickload {_installed_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'validate' command
    parser_validate = subparsers.add_parser(
        "validate",
        help="Validate a configuration directory against a schema",
        description="Merge the default and environment layers and report every schema violation.",
    )
    _add_common_arguments(parser_validate)
    parser_validate.set_defaults(func=cmd_validate)

    # 'show' command
    parser_show = subparsers.add_parser(
        "show",
        help="Print the resolved configuration",
        description="Load, merge, and validate the configuration, then print it.",
    )
    _add_common_arguments(parser_show)
    parser_show.add_argument(
        "--query",
        default=None,
        help="JSONPath expression selecting part of the configuration (e.g. '$.server.port')",
    )
    parser_show.add_argument(
        "--format",
        choices=["json", "yaml"],
        default="json",
        help="Output format (default: json)",
    )
    parser_show.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )
    parser_show.set_defaults(func=cmd_show)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the quickload CLI.

    This function is registered as the 'quickload' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    exit_code = args.func(args)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()

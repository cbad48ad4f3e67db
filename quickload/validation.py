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

"""Configuration directory validation.

This module checks a configuration directory against a schema and reports
the outcome as data instead of raising. It is what ``quickload validate``
runs, and is useful in CI pipelines to catch broken configuration before a
deploy.

Validation Checks:

- The schema file can be read and is a valid JSON Schema
- Every configuration file in the default and environment layers parses
- The layers merge cleanly
- The merged configuration satisfies the schema (every violation listed)

Example:
    Validate the production configuration and print problems:
        ```python
        from pathlib import Path
        from quickload.validation import validate_config_dir

        result = validate_config_dir(
            Path("config"), Path("config.schema.json"), environment="production"
        )
        if result["status"] == "valid":
            print("Configuration is valid")
        else:
            for error in result["errors"]:
                print(f"Error: {error}")
        ```

"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from quickload.config.loader import create_loader
from quickload.config.schema import load_schema_file
from quickload.environment import (
    DEVELOPMENT,
    EnvironmentContext,
    ProcessContext,
    StaticContext,
)
from quickload.exceptions import ConfigurationError, ErrorCode
from quickload.logging import get_logger

__all__ = ["validate_config_dir"]


def validate_config_dir(
    config_dir: Path,
    schema_path: Path,
    environment: str | None = None,
    verbose: bool = False,
) -> dict[str, Any]:
    """Validate a configuration directory without raising.

    Args:
        config_dir: Root directory holding ``default/`` and environment
            directories.
        schema_path: Path to the JSON Schema file.
        environment: Environment to validate. If None, APP_ENV (or the
            "development" default) decides.
        verbose: If True, print validation progress.

    Returns:
        A dict (status, code, errors, environment, config_dir), where status
            is "valid" or "invalid", code is the ErrorCode value of the
            failure (None if valid), errors is a list of messages (empty if
            valid), environment is the environment that was checked, and
            config_dir is the string path that was validated.
    """
    errors: list[str] = []
    code: str | None = None
    logger = get_logger(verbose=verbose)

    context: EnvironmentContext = (
        StaticContext(environment) if environment else ProcessContext()
    )
    resolved_env = context.environment_name(DEVELOPMENT)

    try:
        schema = load_schema_file(schema_path)
        logger.verbose("SCHEMA", f"Loaded schema: {schema_path}")
        loader = create_loader(
            schema, config_dir=config_dir, context=context, logger=logger
        )
        loader.load()
    except ConfigurationError as err:
        code = err.code.value
        if err.code is ErrorCode.VALIDATION_ERROR:
            errors.extend(str(violation) for violation in err.errors)
        else:
            errors.append(str(err))

    status = "valid" if not errors else "invalid"

    if status == "valid":
        logger.verbose("CONFIG", "Configuration is valid!")
    else:
        logger.verbose("CONFIG", f"Configuration has {len(errors)} error(s)")

    return {
        "status": status,
        "code": code,
        "errors": errors,
        "environment": resolved_env,
        "config_dir": str(config_dir),
    }

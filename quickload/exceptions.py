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

"""Exception types for quickload.

Every failure raised by the loading pipeline is a ConfigurationError. The
kind of failure is carried by its ``code`` attribute rather than by a
subclass, so callers branch on a single tag:

- INVALID_SCHEMA: The schema passed to the loader is itself malformed
- FILE_READ_ERROR: A configuration file could not be read or parsed
- DIR_READ_ERROR: A configuration directory could not be listed
- MERGE_ERROR: Two configuration trees could not be merged
- VALIDATION_ERROR: The merged configuration does not satisfy the schema
- LOAD_ERROR: Any other unexpected failure during loading

FILE_NOT_FOUND and PARSE_ERROR are part of the public vocabulary but are not
raised by the loader itself; missing or unparseable files surface as
FILE_READ_ERROR.

All exceptions inherit from QuickloadError, allowing users to catch every
library error with a single except clause if needed.

Example:
    Branching on the error code:
        ```python
        from quickload import create_loader
        from quickload.exceptions import ConfigurationError, ErrorCode

        loader = create_loader(schema, config_dir="config")
        try:
            config = loader.load()
        except ConfigurationError as e:
            if e.code is ErrorCode.VALIDATION_ERROR:
                for violation in e.errors:
                    print(f"{violation.path}: {violation.message}")
            else:
                print(f"Config error [{e.code}]: {e}")
        ```
"""

from __future__ import annotations

from enum import Enum
from typing import Any

__all__ = [
    "QuickloadError",
    "ConfigurationError",
    "ErrorCode",
]


class ErrorCode(str, Enum):
    """Tags identifying the kind of ConfigurationError."""

    INVALID_SCHEMA = "INVALID_SCHEMA"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    PARSE_ERROR = "PARSE_ERROR"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    MERGE_ERROR = "MERGE_ERROR"
    LOAD_ERROR = "LOAD_ERROR"
    FILE_READ_ERROR = "FILE_READ_ERROR"
    DIR_READ_ERROR = "DIR_READ_ERROR"

    def __str__(self) -> str:
        return self.value


class QuickloadError(Exception):
    """Base exception for all quickload errors.

    All quickload-specific exceptions inherit from this class, allowing users
    to catch all library errors with a single except clause if needed.
    """

    pass


class ConfigurationError(QuickloadError):
    """Raised when configuration cannot be loaded, merged, or validated.

    Attributes:
        code: The ErrorCode describing what went wrong.
        errors: Optional payload with details. For VALIDATION_ERROR this is
            the complete list of schema violations; for wrapped failures it
            is the underlying exception.

    Example:
        Inspecting a validation failure:
            ```python
            try:
                loader.load()
            except ConfigurationError as e:
                print(e.code)     # VALIDATION_ERROR
                print(e.errors)   # [Violation(path='$.port', ...), ...]
            ```
    """

    def __init__(self, message: str, code: ErrorCode, errors: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.errors = errors

    def __repr__(self) -> str:
        return f"ConfigurationError({self.message!r}, code={self.code.value})"

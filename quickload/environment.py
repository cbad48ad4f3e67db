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

"""Runtime environment detection for quickload.

This module answers two questions for the loader:

1. Which named environment is active? The answer comes from the ``APP_ENV``
   process environment variable, falling back to a caller-supplied default.
2. Can the current process touch the filesystem at all? In a normal CPython
   process it can. In a browser-hosted interpreter (Pyodide, where
   ``sys.platform`` is ``"emscripten"``) the loader must not attempt any
   directory listing or file read.

The loader never calls these functions directly. It talks to an
EnvironmentContext, whose default implementation (ProcessContext) delegates
here. Tests substitute their own context to simulate other runtimes.

Environments:
    development: Where developers do their daily work
    production: The live environment serving real users
    test: Automated tests and QA activities
    staging: Mirrors production as closely as possible
    uat: Where clients and stakeholders test new features

Example:
    Checking the active environment:
        ```python
        from quickload.environment import current_environment, is_production

        if is_production():
            print("running in production")
        env = current_environment(default="development")
        ```
"""

from __future__ import annotations

import os
import sys
from typing import Protocol

__all__ = [
    "DEVELOPMENT",
    "PRODUCTION",
    "TEST",
    "STAGING",
    "UAT",
    "ENVIRONMENTS",
    "ENV_VAR",
    "EnvironmentContext",
    "ProcessContext",
    "StaticContext",
    "can_access_filesystem",
    "current_environment",
    "is_browser",
    "is_development",
    "is_env_var_defined",
    "is_production",
    "is_server",
    "is_staging",
    "is_test",
    "is_uat",
]

DEVELOPMENT = "development"
PRODUCTION = "production"
TEST = "test"
STAGING = "staging"
UAT = "uat"

ENVIRONMENTS = (DEVELOPMENT, PRODUCTION, TEST, STAGING, UAT)

# Process environment variable holding the active environment name
ENV_VAR = "APP_ENV"

_BROWSER_PLATFORMS = frozenset({"emscripten"})


def is_env_var_defined(key: str) -> bool:
    """Return True if the environment variable is set to a non-empty value."""
    return bool(os.environ.get(key))


def current_environment(default: str | None = None) -> str | None:
    """Return the active environment name.

    Args:
        default: Value returned when ``APP_ENV`` is unset or empty.

    Returns:
        The value of ``APP_ENV``, or ``default``. The value is not restricted
        to the names in ENVIRONMENTS.
    """
    value = os.environ.get(ENV_VAR)
    if value:
        return value
    return default


def is_development() -> bool:
    return current_environment() == DEVELOPMENT


def is_production() -> bool:
    return current_environment() == PRODUCTION


def is_test() -> bool:
    return current_environment() == TEST


def is_staging() -> bool:
    return current_environment() == STAGING


def is_uat() -> bool:
    return current_environment() == UAT


def is_browser() -> bool:
    """Return True when running inside a browser-hosted interpreter."""
    return sys.platform in _BROWSER_PLATFORMS


def is_server() -> bool:
    return not is_browser()


def can_access_filesystem() -> bool:
    """Return True if configuration files may be read in this process."""
    return is_server()


class EnvironmentContext(Protocol):
    """What the loader needs to know about the process it runs in."""

    def environment_name(self, default: str) -> str:
        """Return the active environment name, or ``default`` if none is set."""
        ...

    def can_access_filesystem(self) -> bool:
        """Return True if directory listing and file reads are permitted."""
        ...


class ProcessContext:
    """EnvironmentContext backed by the real process state."""

    def environment_name(self, default: str) -> str:
        return current_environment(default) or default

    def can_access_filesystem(self) -> bool:
        return can_access_filesystem()


class StaticContext:
    """EnvironmentContext with fixed answers.

    Used by the CLI's ``--env`` option and to simulate other runtimes.

    Args:
        environment: Environment name to report, or None to report the
            loader's default.
        filesystem: Value returned by can_access_filesystem().
    """

    def __init__(
        self, environment: str | None = None, filesystem: bool = True
    ) -> None:
        self.environment = environment
        self.filesystem = filesystem

    def environment_name(self, default: str) -> str:
        return self.environment or default

    def can_access_filesystem(self) -> bool:
        return self.filesystem

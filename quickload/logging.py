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

"""Logging interface for quickload.

Library modules report progress through this interface instead of printing
directly, so that the loader stays quiet when embedded in an application and
becomes chatty only when the CLI (or the caller) asks for it.

The logger supports two output levels:
- Verbose: Layer directories, the active environment, cache hits
- Debug: Every file read and merged, cache misses (implies verbose)

Messages carry a prefix naming the stage that produced them: ENV, CONFIG,
CACHE, or SCHEMA.

Example:
    Configure global logger:
        ```python
        from quickload.logging import get_logger, set_global_logger

        set_global_logger(get_logger(verbose=True))
        ```

    Keep stdout clean for machine-readable output:
        ```python
        import sys

        logger = get_logger(debug=True, stream=sys.stderr)
        loader = create_loader(schema, logger=logger)
        ```

Note:
    The default global logger is silent, so library functions won't print
    anything unless explicitly configured.
"""

from __future__ import annotations

import sys
from typing import Protocol, TextIO


class Logger(Protocol):
    """Protocol for logger implementations."""

    def verbose(self, prefix: str, message: str) -> None:
        """Print a verbose log message.

        Args:
            prefix: Stage prefix (e.g., "CONFIG", "CACHE").
            message: Log message.
        """
        ...

    def debug(self, prefix: str, message: str) -> None:
        """Print a debug log message.

        Args:
            prefix: Stage prefix (e.g., "SCHEMA", "ENV").
            message: Log message.
        """
        ...


class DefaultLogger:
    """Logger that writes ``[PREFIX] message`` lines to a text stream.

    Args:
        verbose: If True, print verbose messages.
        debug: If True, print debug messages (implies verbose).
        stream: Destination stream. None means whatever ``sys.stdout`` is at
            the time of each message.
    """

    def __init__(
        self,
        verbose: bool = False,
        debug: bool = False,
        stream: TextIO | None = None,
    ) -> None:
        self._verbose = verbose or debug
        self._debug = debug
        self._stream = stream

    def _emit(self, prefix: str, message: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        print(f"[{prefix}] {message}", file=stream)

    def verbose(self, prefix: str, message: str) -> None:
        if self._verbose:
            self._emit(prefix, message)

    def debug(self, prefix: str, message: str) -> None:
        if self._debug:
            self._emit(prefix, message)


class SilentLogger:
    """Logger that suppresses all output."""

    def verbose(self, prefix: str, message: str) -> None:
        pass

    def debug(self, prefix: str, message: str) -> None:
        pass


# Global logger instance (defaults to silent)
_global_logger: Logger = SilentLogger()


def get_logger(
    verbose: bool = False, debug: bool = False, stream: TextIO | None = None
) -> Logger:
    """Get a logger instance with specified verbosity.

    Args:
        verbose: If True, logger will print verbose messages.
        debug: If True, logger will print debug messages (implies verbose).
        stream: Where to write messages. Default is stdout.

    Returns:
        A SilentLogger when neither flag is set, else a DefaultLogger.
    """
    if not (verbose or debug):
        return SilentLogger()
    return DefaultLogger(verbose=verbose, debug=debug, stream=stream)


def get_global_logger() -> Logger:
    """Return the logger used by loaders that were not given one."""
    return _global_logger


def set_global_logger(logger: Logger) -> None:
    """Set the global logger instance.

    Args:
        logger: Logger instance to use as the global logger.

    Note:
        This affects every loader that was not given a logger explicitly.
        For better isolation, pass logger instances directly instead.
    """
    global _global_logger
    _global_logger = logger

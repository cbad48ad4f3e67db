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

"""Reading individual configuration files.

A configuration file is a UTF-8 encoded JSON document. This layer is purely
syntactic: it knows nothing about schemas or about how files combine.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from quickload.exceptions import ConfigurationError, ErrorCode

__all__ = ["read_config_file"]


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


def read_config_file(path: Path) -> Any:
    """Read and parse one JSON configuration file.

    Args:
        path: Path to the JSON file.

    Returns:
        The parsed document. Normally a dict; other JSON roots are returned
        as-is and rejected later by the merger.

    Raises:
        ConfigurationError: FILE_READ_ERROR if the file is missing,
            unreadable, not valid UTF-8, or not valid JSON (including the
            NaN and Infinity literals, and documents nested too deeply to
            parse). The underlying exception is chained and stored in
            ``errors``.
    """
    try:
        raw = Path(path).read_bytes()
        return json.loads(raw.decode("utf-8"), parse_constant=_reject_constant)
    except (OSError, ValueError, RecursionError) as err:
        raise ConfigurationError(
            f"Failed to load file: {path}: {err}",
            ErrorCode.FILE_READ_ERROR,
            err,
        ) from err

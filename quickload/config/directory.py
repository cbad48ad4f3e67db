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

"""Aggregating a directory of configuration files into one tree.

Each layer of configuration (``default`` and one per environment) is a
directory of JSON files. This module lists such a directory, reads every
configuration file in it, and folds the results together with the deep
merger.

Rules:
    - A directory that does not exist contributes an empty configuration
    - Only regular files with a recognized extension (.json) are read
    - Files are folded in listing order, sorted by file name, so a later
      file overrides an earlier one (``b.json`` wins over ``a.json``)
    - Files are read concurrently; the first read error in listing order
      is raised and the directory contributes nothing
    - Any other listing failure is a DIR_READ_ERROR
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any

from quickload.config.merge import merge
from quickload.config.reader import read_config_file
from quickload.exceptions import ConfigurationError, ErrorCode
from quickload.logging import Logger, get_global_logger

__all__ = ["CONFIG_EXTENSIONS", "list_config_files", "load_directory"]

CONFIG_EXTENSIONS = frozenset({".json"})

_MAX_READERS = 8


def list_config_files(dir_path: Path) -> list[Path] | None:
    """List the configuration files of a directory in fold order.

    Args:
        dir_path: Directory to scan.

    Returns:
        Sorted list of configuration file paths, or None if the directory
        does not exist.

    Raises:
        ConfigurationError: DIR_READ_ERROR if the directory exists but cannot
            be listed (permission denied, path is a regular file, etc.).
    """
    try:
        entries = sorted(Path(dir_path).iterdir(), key=lambda p: p.name)
    except FileNotFoundError:
        return None
    except OSError as err:
        raise ConfigurationError(
            f"Failed to load config files from directory: {dir_path}",
            ErrorCode.DIR_READ_ERROR,
            err,
        ) from err

    return [
        entry
        for entry in entries
        if entry.suffix in CONFIG_EXTENSIONS and entry.is_file()
    ]


def load_directory(dir_path: Path, logger: Logger | None = None) -> dict[str, Any]:
    """Load and merge every configuration file in a directory.

    Args:
        dir_path: Directory holding ``*.json`` configuration files.
        logger: Logger for progress output. Defaults to the global logger.

    Returns:
        The merged configuration of all files, or an empty dict if the
        directory does not exist or holds no configuration files.

    Raises:
        ConfigurationError: DIR_READ_ERROR if listing fails, FILE_READ_ERROR
            if a file cannot be read or parsed, MERGE_ERROR if a file's root
            is not a JSON object.
    """
    if logger is None:
        logger = get_global_logger()

    files = list_config_files(dir_path)
    if files is None:
        logger.verbose("CONFIG", f"Directory not found, skipping: {dir_path}")
        return {}

    logger.verbose("CONFIG", f"Loading {len(files)} file(s) from {dir_path}")
    if not files:
        return {}

    with ThreadPoolExecutor(max_workers=min(len(files), _MAX_READERS)) as pool:
        # map() yields in submission order, so the first failure re-raised
        # here is the first failing file in listing order.
        documents = list(pool.map(read_config_file, files))

    merged: dict[str, Any] = {}
    for path, document in zip(files, documents):
        logger.debug("CONFIG", f"Merging {path.name}")
        try:
            merged = merge(merged, document)
        except ConfigurationError as err:
            raise ConfigurationError(
                f"{err.message} ({path})", err.code, err.errors
            ) from err
    return merged

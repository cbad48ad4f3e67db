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

"""quickload - layered, validated JSON configuration

Loads an application's settings once at startup from a directory of JSON
files, with per-environment overrides and JSON Schema validation.

quickload provides:

- A ``default`` layer plus one override layer per environment
  (development, production, test, staging, uat, or any name in APP_ENV)
- Deep merging (mappings merge, lists and scalars are replaced)
- Full-document JSON Schema validation reporting every violation
- Optional process-wide caching of validated configurations
- A ``quickload`` CLI to validate and inspect configuration directories

Quick Start:
Validate a configuration directory:

    $ quickload validate config --schema config.schema.json --env production

Print the resolved configuration:

    $ quickload show config --schema config.schema.json --format yaml

For more details, see the individual module docstrings.
"""

__version__ = "1.0.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Layered, schema-validated JSON configuration loader"

from quickload.config import (
    ConfigLoader,
    LoaderOptions,
    Violation,
    clear_cache,
    create_loader,
    merge,
)
from quickload.exceptions import ConfigurationError, ErrorCode, QuickloadError
from quickload.results import LoadResult
from quickload.validation import validate_config_dir

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "ConfigLoader",
    "LoaderOptions",
    "LoadResult",
    "Violation",
    "clear_cache",
    "create_loader",
    "merge",
    "validate_config_dir",
    "ConfigurationError",
    "ErrorCode",
    "QuickloadError",
]

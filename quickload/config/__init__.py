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

"""Configuration loading, merging, and validation for quickload.

This package resolves an application's configuration from two layers of JSON
files:

  - Defaults shared by every environment (<config_dir>/default/*.json)
  - Environment overrides (<config_dir>/<environment>/*.json)

The loader performs deep merging where mappings are merged recursively and
lists/scalars are replaced (last wins), then validates the merged document
against a JSON Schema.

Example:
    Basic usage:
        ```python
        from quickload.config import create_loader

        loader = create_loader(schema, config_dir="config")
        config = loader.load()
        ```
"""

from .cache import ConfigCache, MemoryCache, clear_cache
from .loader import ConfigLoader, LoaderOptions, create_loader
from .merge import merge
from .schema import Violation, compile_schema

__all__ = [
    "ConfigCache",
    "ConfigLoader",
    "LoaderOptions",
    "MemoryCache",
    "Violation",
    "clear_cache",
    "compile_schema",
    "create_loader",
    "merge",
]

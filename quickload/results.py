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

"""Public API return types for quickload.

All dataclasses are frozen (immutable) to prevent accidental mutation of
return values.

Note:
    Only public API return types belong in this module. Internal types
    (like Violation or LoaderOptions) stay co-located with their logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class LoadResult:
    """Result from resolving a configuration.

    Attributes:
        config: The validated configuration.
        environment: Name of the environment that was loaded.
        cache_key: Key under which the configuration is (or would be) cached.
        from_cache: True if the configuration was served from the cache.
        directories: Layer directories that were loaded, in merge order.
            Empty for cache hits and when filesystem access is not permitted.
    """

    config: dict[str, Any]
    environment: str
    cache_key: str
    from_cache: bool
    directories: tuple[Path, ...] = field(default_factory=tuple)

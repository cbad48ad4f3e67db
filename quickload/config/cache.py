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

"""Caching of validated configurations.

Loaders created with ``cache=True`` store each validated configuration under
the key ``"<config_dir>-<environment>"``. Entries are never evicted; they
live until clear_cache() (or ConfigCache.clear()) is called.

Loaders depend on the ConfigCache protocol. Unless a cache is injected they
share ``default_cache``, a single process-wide MemoryCache, so a
configuration loaded by one loader is visible to every other loader with the
same key.

Example:
    Isolated cache for tests:
        ```python
        from quickload import create_loader
        from quickload.config.cache import MemoryCache

        loader = create_loader(schema, cache=True, config_cache=MemoryCache())
        ```
"""

from __future__ import annotations

import threading
from typing import Any, Protocol

__all__ = ["ConfigCache", "MemoryCache", "clear_cache", "default_cache"]


class ConfigCache(Protocol):
    """Storage for validated configurations keyed by string."""

    def get(self, key: str) -> dict[str, Any] | None:
        """Return the cached configuration for ``key``, or None."""
        ...

    def set(self, key: str, value: dict[str, Any]) -> None:
        """Store ``value`` under ``key``, replacing any previous entry."""
        ...

    def clear(self) -> None:
        """Remove every entry."""
        ...


class MemoryCache:
    """Thread-safe in-memory ConfigCache.

    Concurrent loads of the same key may both miss and both store; the last
    write wins. Results for one key are deterministic, so this is harmless.
    """

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def get(self, key: str) -> dict[str, Any] | None:
        with self._lock:
            return self._entries.get(key)

    def set(self, key: str, value: dict[str, Any]) -> None:
        with self._lock:
            self._entries[key] = value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries


# Process-wide cache shared by loaders that were not given their own
default_cache = MemoryCache()


def clear_cache() -> None:
    """Clear every cached configuration, regardless of which loader stored it."""
    default_cache.clear()

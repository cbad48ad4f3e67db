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

"""Environment-aware configuration loading for quickload.

This module implements a two-layer configuration system: settings shared by
every environment live in a ``default`` directory, and each environment can
override them from a directory named after it.

Configuration Layers:
    1. **Defaults** (<config_dir>/default/*.json)
       - Base configuration for all environments
       - Optional; a missing directory contributes nothing

    2. **Environment overrides** (<config_dir>/<environment>/*.json)
       - Selected by the APP_ENV environment variable, falling back to
         the loader's ``default_env`` (development)
       - Optional; a missing directory contributes nothing
       - Overrides the defaults, recursively

Within a layer, files are merged in file-name order. The two layers are
loaded concurrently, merged (see quickload.config.merge), and the result is
validated as a whole against the loader's JSON Schema.

Caching:
    With ``cache=True`` the validated configuration is stored under
    ``"<config_dir>-<environment>"`` and later loads with the same key skip
    the filesystem entirely. Use clear_cache() to force a reload.

Error Handling:
    - ConfigurationError raised anywhere in the pipeline reaches the caller
      unchanged (FILE_READ_ERROR, DIR_READ_ERROR, MERGE_ERROR,
      VALIDATION_ERROR)
    - Any other exception is wrapped as LOAD_ERROR, chained with "from err"
    - A malformed schema fails at construction time with INVALID_SCHEMA
    - There is no partial success: load() returns a validated configuration
      or raises

Example:
    Basic usage:
        ```python
        from quickload import create_loader

        schema = {
            "type": "object",
            "properties": {
                "port": {"type": "integer"},
                "debug": {"type": "boolean"},
            },
            "required": ["port", "debug"],
        }
        loader = create_loader(schema, config_dir="config", cache=True)
        config = loader.load()
        print(config["port"])  # Output: 8080
        ```

Note:
    When the process cannot access the filesystem (see
    quickload.environment), no directory is listed and an empty configuration
    is validated instead. With a schema whose fields are all optional this
    succeeds, so loaders can be constructed and used safely anywhere.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from quickload.config.cache import ConfigCache, default_cache
from quickload.config.directory import load_directory
from quickload.config.merge import merge
from quickload.config.schema import compile_schema
from quickload.environment import DEVELOPMENT, EnvironmentContext, ProcessContext
from quickload.exceptions import ConfigurationError, ErrorCode
from quickload.logging import Logger, get_global_logger
from quickload.results import LoadResult

__all__ = ["ConfigLoader", "LoaderOptions", "create_loader"]

DEFAULT_CONFIG_DIR = "config"
DEFAULT_LAYER = "default"


@dataclass(frozen=True)
class LoaderOptions:
    """Settings for a ConfigLoader, fixed at construction.

    Attributes:
        schema: JSON Schema the merged configuration must satisfy.
        config_dir: Root directory holding the layer directories.
        cache: If True, validated configurations are cached.
        default_env: Environment used when APP_ENV is not set.
        include_base_config: Accepted for compatibility; has no effect.
    """

    schema: dict[str, Any]
    config_dir: str = DEFAULT_CONFIG_DIR
    cache: bool = False
    default_env: str = DEVELOPMENT
    include_base_config: bool = False


class ConfigLoader:
    """Loads, merges, and validates layered JSON configuration.

    Attributes:
        options: The loader's LoaderOptions.

    Example:
        Injecting collaborators in tests:
            ```python
            from quickload.config.cache import MemoryCache

            loader = ConfigLoader(
                LoaderOptions(schema=schema, config_dir=str(tmp_path)),
                config_cache=MemoryCache(),
            )
            ```
    """

    def __init__(
        self,
        options: LoaderOptions,
        *,
        config_cache: ConfigCache | None = None,
        context: EnvironmentContext | None = None,
        logger: Logger | None = None,
    ) -> None:
        """Create a loader and compile its schema.

        Args:
            options: Loader settings.
            config_cache: Cache for validated configurations. Defaults to the
                process-wide cache shared by all loaders.
            context: Source of the environment name and of the filesystem
                access check. Defaults to the real process.
            logger: Logger for progress output. Defaults to the global
                logger at load time.

        Raises:
            ConfigurationError: INVALID_SCHEMA if the schema is malformed.
        """
        self.options = options
        self._schema = compile_schema(options.schema)
        self._cache = config_cache if config_cache is not None else default_cache
        self._context = context if context is not None else ProcessContext()
        self._logger = logger

    def _get_logger(self) -> Logger:
        return self._logger if self._logger is not None else get_global_logger()

    def _cache_key(self, environment: str) -> str:
        return f"{self.options.config_dir}-{environment}"

    def _load_layers(
        self, environment: str, logger: Logger
    ) -> tuple[dict[str, Any], tuple[Path, ...]]:
        root = Path(self.options.config_dir)
        default_dir = root / DEFAULT_LAYER
        env_dir = root / environment

        with ThreadPoolExecutor(max_workers=2) as pool:
            default_future = pool.submit(load_directory, default_dir, logger)
            env_future = pool.submit(load_directory, env_dir, logger)
            default_config = default_future.result()
            env_config = env_future.result()

        logger.verbose("CONFIG", f"Merging {default_dir} <- {env_dir}")
        return merge(default_config, env_config), (default_dir, env_dir)

    def resolve(self) -> LoadResult:
        """Load the configuration and report how it was produced.

        Returns:
            A LoadResult whose ``config`` is the validated configuration.

        Raises:
            ConfigurationError: On any failure; see the module docstring.
        """
        logger = self._get_logger()
        environment = self._context.environment_name(self.options.default_env)
        cache_key = self._cache_key(environment)
        logger.verbose("ENV", f"Active environment: {environment}")

        if self.options.cache:
            cached = self._cache.get(cache_key)
            if cached is not None:
                logger.verbose("CACHE", f"Cache hit: {cache_key}")
                return LoadResult(
                    config=copy.deepcopy(cached),
                    environment=environment,
                    cache_key=cache_key,
                    from_cache=True,
                )
            logger.debug("CACHE", f"Cache miss: {cache_key}")

        directories: tuple[Path, ...] = ()
        try:
            if self._context.can_access_filesystem():
                merged, directories = self._load_layers(environment, logger)
            else:
                logger.verbose(
                    "ENV", "Filesystem access not permitted, using empty configuration"
                )
                merged = {}
            config = self._schema.validate(merged)
        except ConfigurationError:
            raise
        except Exception as err:
            raise ConfigurationError(
                "Failed to load configuration", ErrorCode.LOAD_ERROR, err
            ) from err

        logger.debug("SCHEMA", f"Configuration is valid for {environment}")

        if self.options.cache:
            self._cache.set(cache_key, copy.deepcopy(config))
            logger.debug("CACHE", f"Stored: {cache_key}")

        return LoadResult(
            config=config,
            environment=environment,
            cache_key=cache_key,
            from_cache=False,
            directories=directories,
        )

    def load(self) -> dict[str, Any]:
        """Load, merge, and validate the configuration.

        Returns:
            The validated configuration.

        Raises:
            ConfigurationError: On any failure; see the module docstring.
        """
        return self.resolve().config


def create_loader(
    schema: dict[str, Any],
    *,
    config_dir: str | Path = DEFAULT_CONFIG_DIR,
    cache: bool = False,
    default_env: str = DEVELOPMENT,
    include_base_config: bool = False,
    config_cache: ConfigCache | None = None,
    context: EnvironmentContext | None = None,
    logger: Logger | None = None,
) -> ConfigLoader:
    """Create a ConfigLoader with default options.

    Args:
        schema: JSON Schema the merged configuration must satisfy.
        config_dir: Root directory holding ``default/`` and one directory
            per environment. Default is "config".
        cache: If True, cache validated configurations. Default is False.
        default_env: Environment used when APP_ENV is not set.
            Default is "development".
        include_base_config: Accepted for compatibility; has no effect.
        config_cache: Cache to use instead of the process-wide one.
        context: EnvironmentContext to use instead of the real process.
        logger: Logger to use instead of the global logger.

    Returns:
        A ready-to-use ConfigLoader.

    Raises:
        ConfigurationError: INVALID_SCHEMA if the schema is malformed.
    """
    options = LoaderOptions(
        schema=schema,
        config_dir=str(config_dir),
        cache=cache,
        default_env=default_env,
        include_base_config=include_base_config,
    )
    return ConfigLoader(
        options, config_cache=config_cache, context=context, logger=logger
    )

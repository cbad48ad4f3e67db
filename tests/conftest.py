"""
Pytest configuration and shared fixtures for quickload tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from quickload.config.cache import clear_cache
from quickload.environment import ENV_VAR
from quickload.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    """
    Remove APP_ENV, empty the process-wide cache, and silence the global
    logger around every test.
    """
    monkeypatch.delenv(ENV_VAR, raising=False)
    clear_cache()
    yield
    clear_cache()
    set_global_logger(SilentLogger())


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Provide an (initially empty) configuration root directory."""
    path = tmp_path / "config"
    path.mkdir()
    return path


@pytest.fixture
def write_config(config_dir: Path):
    """
    Factory fixture for creating configuration files.

    Usage:
        path = write_config("default", "app.json", {"port": 8080})
        path = write_config("production", "broken.json", "{not json")

    Dicts and lists are written as JSON; strings are written verbatim.
    """

    def _create(layer: str, filename: str, data: Any) -> Path:
        path = config_dir / layer / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _create


@pytest.fixture
def app_schema() -> dict[str, Any]:
    """Provide a schema requiring an integer port and a boolean debug flag."""
    return {
        "type": "object",
        "properties": {
            "port": {"type": "integer", "minimum": 1, "maximum": 65535},
            "debug": {"type": "boolean"},
        },
        "required": ["port", "debug"],
    }


@pytest.fixture
def optional_schema() -> dict[str, Any]:
    """Provide a schema whose fields are all optional."""
    return {
        "type": "object",
        "properties": {
            "port": {"type": "integer"},
            "debug": {"type": "boolean"},
            "database": {
                "type": "object",
                "properties": {
                    "host": {"type": "string"},
                    "port": {"type": "integer"},
                },
            },
            "features": {"type": "array", "items": {"type": "string"}},
        },
    }


@pytest.fixture
def write_schema(tmp_path: Path):
    """
    Factory fixture for writing a schema to a JSON file.

    Usage:
        schema_path = write_schema({"type": "object"})
    """

    def _create(schema: Any, filename: str = "schema.json") -> Path:
        path = tmp_path / filename
        path.write_text(json.dumps(schema), encoding="utf-8")
        return path

    return _create

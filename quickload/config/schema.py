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

"""JSON Schema validation of merged configurations.

The schema is compiled once, when a loader is constructed, into a
CompiledSchema. The loader only ever calls ``compile_schema()`` and
``CompiledSchema.validate()``; nothing else in the package looks inside the
schema document.

Validation Rules:
    - The whole document is validated and every violation is reported,
      not just the first one
    - Types are checked strictly; the string "65536" is never accepted
      where an integer is required
    - ``format`` keywords (uri, email, date-time, ...) are checked
    - Object schemas that declare ``properties`` but say nothing about
      extra keys reject unknown keys. From Draft 2019-09 on they are closed
      with ``"unevaluatedProperties": false``, which also counts keys
      declared through ``$ref``, if/then/else, and allOf/anyOf/oneOf.
      Subschemas applied in place (``$defs``, if/then/else, combinator
      branches) are left open for the same reason. Older drafts use
      ``"additionalProperties": false`` and leave only combinator branches
      open.

The validator class is chosen from the schema's ``$schema`` keyword and
defaults to Draft 2020-12.

Example:
    Compiling and validating:
        ```python
        from quickload.config.schema import compile_schema

        compiled = compile_schema({
            "type": "object",
            "properties": {"port": {"type": "integer"}},
            "required": ["port"],
        })
        compiled.validate({"port": 8080})   # returns the config
        compiled.validate({"port": "8080"}) # raises VALIDATION_ERROR
        ```
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import SchemaError
from jsonschema.validators import validator_for

from quickload.config.reader import read_config_file
from quickload.exceptions import ConfigurationError, ErrorCode

__all__ = ["CompiledSchema", "Violation", "compile_schema", "load_schema_file"]

_OPEN_KEYWORDS = (
    "additionalProperties",
    "unevaluatedProperties",
    "patternProperties",
)

# Subschemas applied to a member of the instance
_CHILD_KEYWORDS = (
    "items",
    "additionalItems",
    "contains",
    "additionalProperties",
    "unevaluatedProperties",
    "unevaluatedItems",
    "propertyNames",
)
_CHILD_MAP_KEYWORDS = ("properties", "patternProperties")

# Subschemas applied to the instance itself, alongside their parent
_IN_PLACE_KEYWORDS = ("not", "if", "then", "else")
_IN_PLACE_MAP_KEYWORDS = ("dependentSchemas", "$defs", "definitions")

_COMBINATOR_KEYWORDS = ("allOf", "anyOf", "oneOf")


@dataclass(frozen=True)
class Violation:
    """One way in which a configuration fails its schema.

    Attributes:
        path: JSONPath of the offending value (e.g., "$.server.port").
        constraint: The schema keyword that failed (e.g., "type", "required").
        value: The offending value as found in the configuration.
        message: Human-readable description of the problem.
    """

    path: str
    constraint: str
    value: Any
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


def _make_strict(node: Any, closing_keyword: str, applies: bool = True) -> None:
    """Reject unknown keys in object schemas, in place.

    Args:
        node: Schema (or subschema) to rewrite.
        closing_keyword: "unevaluatedProperties" for drafts that have it,
            else "additionalProperties".
        applies: False for subschemas that only see part of an object.
    """
    if not isinstance(node, dict):
        return

    if (
        applies
        and "properties" in node
        and not any(k in node for k in _OPEN_KEYWORDS)
    ):
        node[closing_keyword] = False

    # Keys declared by in-place subschemas count as evaluated by the parent
    shared = closing_keyword == "unevaluatedProperties"

    for keyword in _CHILD_KEYWORDS:
        _make_strict(node.get(keyword), closing_keyword)
    for keyword in _CHILD_MAP_KEYWORDS:
        children = node.get(keyword)
        if isinstance(children, dict):
            for child in children.values():
                _make_strict(child, closing_keyword)
    for child in node.get("prefixItems") or ():
        _make_strict(child, closing_keyword)
    # Draft 7 and earlier tuple validation
    if isinstance(node.get("items"), list):
        for child in node["items"]:
            _make_strict(child, closing_keyword)

    for keyword in _IN_PLACE_KEYWORDS:
        _make_strict(node.get(keyword), closing_keyword, applies=not shared)
    for keyword in _IN_PLACE_MAP_KEYWORDS:
        children = node.get(keyword)
        if isinstance(children, dict):
            for child in children.values():
                _make_strict(child, closing_keyword, applies=not shared)
    for keyword in _COMBINATOR_KEYWORDS:
        for child in node.get(keyword) or ():
            _make_strict(child, closing_keyword, applies=False)


class CompiledSchema:
    """A checked schema, ready to validate configurations."""

    def __init__(self, schema: dict[str, Any] | bool) -> None:
        if not isinstance(schema, (dict, bool)):
            raise ConfigurationError(
                f"Invalid schema: expected a JSON object, got {type(schema).__name__}",
                ErrorCode.INVALID_SCHEMA,
            )

        if isinstance(schema, dict) and not isinstance(
            schema.get("$schema", ""), str
        ):
            raise ConfigurationError(
                "Invalid schema: $schema must be a string",
                ErrorCode.INVALID_SCHEMA,
            )

        validator_cls = validator_for(schema, default=Draft202012Validator)
        try:
            validator_cls.check_schema(schema)
        except SchemaError as err:
            raise ConfigurationError(
                f"Invalid schema: {err.message}",
                ErrorCode.INVALID_SCHEMA,
                err,
            ) from err

        if "unevaluatedProperties" in validator_cls.VALIDATORS:
            closing_keyword = "unevaluatedProperties"
        else:
            closing_keyword = "additionalProperties"

        strict_schema = copy.deepcopy(schema)
        _make_strict(strict_schema, closing_keyword)
        self.schema = strict_schema
        self._validator = validator_cls(
            strict_schema, format_checker=validator_cls.FORMAT_CHECKER
        )

    def violations(self, config: Any) -> list[Violation]:
        """Return every violation of the schema, ordered by path."""
        errors = sorted(
            self._validator.iter_errors(config),
            key=lambda e: (e.json_path, str(e.validator)),
        )
        return [
            Violation(
                path=error.json_path,
                constraint=str(error.validator),
                value=error.instance,
                message=error.message,
            )
            for error in errors
        ]

    def validate(self, config: Any) -> dict[str, Any]:
        """Validate a merged configuration.

        Args:
            config: The fully merged configuration.

        Returns:
            The same configuration, now known to satisfy the schema.

        Raises:
            ConfigurationError: VALIDATION_ERROR carrying the complete list
                of Violation objects in ``errors``.
        """
        violations = self.violations(config)
        if violations:
            raise ConfigurationError(
                f"Configuration validation failed with {len(violations)} error(s)",
                ErrorCode.VALIDATION_ERROR,
                violations,
            )
        return config


def compile_schema(schema: dict[str, Any] | bool) -> CompiledSchema:
    """Check a schema document and prepare it for validation.

    Raises:
        ConfigurationError: INVALID_SCHEMA if the schema is malformed.
    """
    return CompiledSchema(schema)


def load_schema_file(path: Path) -> dict[str, Any]:
    """Read a JSON Schema document from disk.

    Raises:
        ConfigurationError: FILE_READ_ERROR if the file cannot be read or
            parsed, INVALID_SCHEMA if its root is not a JSON object.
    """
    schema = read_config_file(path)
    if not isinstance(schema, dict):
        raise ConfigurationError(
            f"Invalid schema file {path}: top level must be a JSON object",
            ErrorCode.INVALID_SCHEMA,
        )
    return schema

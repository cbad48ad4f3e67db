"""
Tests for quickload.config.schema module.

Tests schema compilation and validation including:
- Rejection of malformed schemas
- Complete violation reporting
- Strict typing and unknown-key rejection
- Format checking
"""

from __future__ import annotations

import pytest

from quickload.config.schema import Violation, compile_schema, load_schema_file
from quickload.exceptions import ConfigurationError, ErrorCode


class TestCompileSchema:
    """Tests for schema compilation."""

    def test_valid_schema_compiles(self, app_schema):
        """Test that a well-formed schema compiles."""
        compiled = compile_schema(app_schema)

        assert compiled.validate({"port": 8080, "debug": False}) == {
            "port": 8080,
            "debug": False,
        }

    def test_malformed_schema_raises(self):
        """Test that an invalid keyword value is INVALID_SCHEMA."""
        with pytest.raises(ConfigurationError) as exc_info:
            compile_schema({"type": "not-a-type"})

        assert exc_info.value.code is ErrorCode.INVALID_SCHEMA

    def test_non_object_schema_raises(self):
        """Test that a schema must be a JSON object."""
        with pytest.raises(ConfigurationError) as exc_info:
            compile_schema(["type", "object"])

        assert exc_info.value.code is ErrorCode.INVALID_SCHEMA

    def test_non_string_schema_keyword_raises(self):
        """Test that a $schema value other than a string is INVALID_SCHEMA."""
        with pytest.raises(ConfigurationError) as exc_info:
            compile_schema({"$schema": ["x"], "type": "object"})

        assert exc_info.value.code is ErrorCode.INVALID_SCHEMA

    def test_original_schema_not_mutated(self, app_schema):
        """Test that strictness is applied to a copy of the schema."""
        compile_schema(app_schema)

        assert "additionalProperties" not in app_schema
        assert "unevaluatedProperties" not in app_schema


class TestValidate:
    """Tests for validation of merged configurations."""

    def test_two_violations_reported(self, app_schema):
        """Test that a missing field and a wrong type yield two violations."""
        compiled = compile_schema(app_schema)

        with pytest.raises(ConfigurationError) as exc_info:
            compiled.validate({"port": "8080"})

        err = exc_info.value
        assert err.code is ErrorCode.VALIDATION_ERROR
        assert len(err.errors) == 2
        constraints = sorted(v.constraint for v in err.errors)
        assert constraints == ["required", "type"]

    def test_violation_details(self, app_schema):
        """Test that a violation carries path, constraint, and value."""
        compiled = compile_schema(app_schema)

        violations = compiled.violations({"port": 70000, "debug": True})

        assert violations == [
            Violation(
                path="$.port",
                constraint="maximum",
                value=70000,
                message=violations[0].message,
            )
        ]
        assert "65535" in violations[0].message
        assert str(violations[0]).startswith("$.port: ")

    def test_no_string_to_integer_coercion(self, app_schema):
        """Test that "65536"-style strings are never accepted as integers."""
        compiled = compile_schema(app_schema)

        violations = compiled.violations({"port": "65536", "debug": True})

        assert [v.constraint for v in violations] == ["type"]
        assert violations[0].value == "65536"

    def test_boolean_is_not_integer(self, app_schema):
        """Test that true is not accepted as an integer."""
        compiled = compile_schema(app_schema)

        violations = compiled.violations({"port": True, "debug": True})

        assert [v.constraint for v in violations] == ["type"]

    def test_unknown_property_rejected(self, app_schema):
        """Test that keys not declared in properties are violations."""
        compiled = compile_schema(app_schema)

        violations = compiled.violations({"port": 1, "debug": True, "extra": 1})

        assert [v.constraint for v in violations] == ["unevaluatedProperties"]

    def test_nested_unknown_property_rejected(self, optional_schema):
        """Test that strictness applies to nested object schemas."""
        compiled = compile_schema(optional_schema)

        violations = compiled.violations({"database": {"host": "h", "user": "x"}})

        assert [v.path for v in violations] == ["$.database"]
        assert violations[0].constraint == "unevaluatedProperties"

    def test_explicit_additional_properties_respected(self):
        """Test that a schema allowing extra keys keeps allowing them."""
        compiled = compile_schema(
            {
                "type": "object",
                "properties": {"port": {"type": "integer"}},
                "additionalProperties": True,
            }
        )

        assert compiled.violations({"port": 1, "anything": "goes"}) == []

    def test_combinator_branches_not_made_strict(self):
        """Test that allOf branches only check their own properties."""
        compiled = compile_schema(
            {
                "type": "object",
                "allOf": [
                    {"properties": {"a": {"type": "integer"}}},
                    {"properties": {"b": {"type": "string"}}},
                ],
            }
        )

        assert compiled.violations({"a": 1, "b": "x"}) == []

    def test_ref_sibling_properties_allowed(self):
        """Test that keys declared by a referenced base schema are not unknown."""
        compiled = compile_schema(
            {
                "$defs": {
                    "base": {
                        "type": "object",
                        "properties": {"port": {"type": "integer"}},
                    }
                },
                "$ref": "#/$defs/base",
                "properties": {"debug": {"type": "boolean"}},
            }
        )

        assert compiled.violations({"port": 1, "debug": True}) == []
        violations = compiled.violations({"port": 1, "debug": True, "extra": 1})
        assert [v.constraint for v in violations] == ["unevaluatedProperties"]

    def test_conditional_properties_allowed(self):
        """Test that keys declared under then are not unknown when it applies."""
        compiled = compile_schema(
            {
                "type": "object",
                "properties": {"kind": {"type": "string"}},
                "if": {"properties": {"kind": {"const": "db"}}},
                "then": {"properties": {"host": {"type": "string"}}},
            }
        )

        assert compiled.violations({"kind": "db", "host": "x"}) == []
        violations = compiled.violations({"kind": "db", "host": "x", "extra": 1})
        assert [v.constraint for v in violations] == ["unevaluatedProperties"]

    def test_draft7_unknown_property_rejected(self):
        """Test that older drafts are closed with additionalProperties."""
        compiled = compile_schema(
            {
                "$schema": "http://json-schema.org/draft-07/schema#",
                "type": "object",
                "properties": {"port": {"type": "integer"}},
            }
        )

        violations = compiled.violations({"port": 1, "extra": 1})

        assert [v.constraint for v in violations] == ["additionalProperties"]

    def test_format_checked(self):
        """Test that format keywords are enforced."""
        compiled = compile_schema(
            {
                "type": "object",
                "properties": {"host": {"type": "string", "format": "ipv4"}},
            }
        )

        violations = compiled.violations({"host": "not-an-ip"})

        assert [v.constraint for v in violations] == ["format"]

    def test_empty_config_against_optional_schema(self, optional_schema):
        """Test that an empty configuration satisfies an all-optional schema."""
        assert compile_schema(optional_schema).validate({}) == {}

    def test_draft7_schema_supported(self):
        """Test that the $schema keyword selects the validator draft."""
        compiled = compile_schema(
            {
                "$schema": "http://json-schema.org/draft-07/schema#",
                "type": "object",
                "properties": {"tags": {"type": "array", "items": {"type": "string"}}},
            }
        )

        violations = compiled.violations({"tags": ["a", 1]})

        assert [v.path for v in violations] == ["$.tags[1]"]


class TestLoadSchemaFile:
    """Tests for reading schemas from disk."""

    def test_load_schema_file(self, write_schema, app_schema):
        """Test reading a schema file."""
        path = write_schema(app_schema)

        assert load_schema_file(path) == app_schema

    def test_non_object_schema_file_raises(self, write_schema):
        """Test that a schema file must hold a JSON object."""
        path = write_schema([1, 2])

        with pytest.raises(ConfigurationError) as exc_info:
            load_schema_file(path)

        assert exc_info.value.code is ErrorCode.INVALID_SCHEMA

    def test_missing_schema_file_raises(self, tmp_path):
        """Test that a missing schema file is a FILE_READ_ERROR."""
        with pytest.raises(ConfigurationError) as exc_info:
            load_schema_file(tmp_path / "missing.json")

        assert exc_info.value.code is ErrorCode.FILE_READ_ERROR

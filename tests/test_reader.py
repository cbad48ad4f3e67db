"""
Tests for quickload.config.reader module.
"""

from __future__ import annotations

import json

import pytest

from quickload.config.reader import read_config_file
from quickload.exceptions import ConfigurationError, ErrorCode


class TestReadConfigFile:
    """Tests for reading single configuration files."""

    def test_read_valid_json(self, tmp_path):
        """Test that a JSON object is parsed into a dict."""
        path = tmp_path / "app.json"
        path.write_text(json.dumps({"port": 8080, "tags": ["a"]}), encoding="utf-8")

        assert read_config_file(path) == {"port": 8080, "tags": ["a"]}

    def test_read_utf8_content(self, tmp_path):
        """Test that non-ASCII text survives decoding."""
        path = tmp_path / "app.json"
        path.write_bytes('{"greeting": "héllo"}'.encode("utf-8"))

        assert read_config_file(path) == {"greeting": "héllo"}

    def test_missing_file_raises(self, tmp_path):
        """Test that a missing file is a FILE_READ_ERROR."""
        with pytest.raises(ConfigurationError) as exc_info:
            read_config_file(tmp_path / "missing.json")

        assert exc_info.value.code is ErrorCode.FILE_READ_ERROR
        assert isinstance(exc_info.value.errors, FileNotFoundError)

    def test_invalid_json_raises(self, tmp_path):
        """Test that malformed JSON is a FILE_READ_ERROR wrapping the parse error."""
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            read_config_file(path)

        assert exc_info.value.code is ErrorCode.FILE_READ_ERROR
        assert isinstance(exc_info.value.errors, json.JSONDecodeError)
        assert exc_info.value.__cause__ is exc_info.value.errors

    def test_invalid_utf8_raises(self, tmp_path):
        """Test that undecodable bytes are a FILE_READ_ERROR."""
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"name": "\xe9"}')

        with pytest.raises(ConfigurationError) as exc_info:
            read_config_file(path)

        assert exc_info.value.code is ErrorCode.FILE_READ_ERROR

    def test_non_object_root_returned_as_is(self, tmp_path):
        """Test that the reader does not judge the document's shape."""
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")

        assert read_config_file(path) == [1, 2, 3]

    @pytest.mark.parametrize("literal", ["NaN", "Infinity", "-Infinity"])
    def test_non_finite_literals_raise(self, tmp_path, literal):
        """Test that NaN and Infinity, which JSON does not allow, are rejected."""
        path = tmp_path / "app.json"
        path.write_text(f'{{"port": {literal}}}', encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            read_config_file(path)

        assert exc_info.value.code is ErrorCode.FILE_READ_ERROR
        assert literal in str(exc_info.value)

    def test_deeply_nested_json_raises(self, tmp_path):
        """Test that nesting beyond the parser's limit is a FILE_READ_ERROR."""
        path = tmp_path / "deep.json"
        path.write_text("[" * 100_000 + "]" * 100_000, encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            read_config_file(path)

        assert exc_info.value.code is ErrorCode.FILE_READ_ERROR
        assert isinstance(exc_info.value.errors, RecursionError)

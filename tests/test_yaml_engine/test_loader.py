"""Tests for the YAML settings loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from contractual import ContractualConfigError
from contractual.yaml_engine.loader import MAX_SETTINGS_SIZE, load_settings

FIXTURES = Path(__file__).parent / "fixtures"


class TestLoadSettings:
    """Tests for load_settings()."""

    def test_valid_settings_load(self):
        data = load_settings(FIXTURES / "valid_settings.yaml")
        assert data["apiVersion"] == "contractual/v1"
        assert data["kind"] == "ContractSettings"
        assert data["metadata"]["name"] == "staging"
        assert data["enabled"] is True

    def test_handler_structure(self):
        data = load_settings(FIXTURES / "valid_settings.yaml")
        assert data["handler"] == {"type": "log", "level": "ERROR", "logger": "staging.contracts"}

    def test_minimal_settings_load(self):
        data = load_settings(FIXTURES / "minimal_settings.yaml")
        assert "enabled" not in data
        assert "handler" not in data

    def test_accepts_string_path(self):
        data = load_settings(str(FIXTURES / "disabled_settings.yaml"))
        assert data["enabled"] is False


class TestSchemaValidation:
    """Tests for JSON Schema validation failures."""

    def test_missing_apiversion(self):
        with pytest.raises(ContractualConfigError, match="Schema validation failed"):
            load_settings(FIXTURES / "invalid_missing_apiversion.yaml")

    def test_unknown_handler_type(self):
        with pytest.raises(ContractualConfigError, match="Schema validation failed"):
            load_settings(FIXTURES / "invalid_bad_handler.yaml")

    def test_enabled_must_be_boolean(self):
        with pytest.raises(ContractualConfigError, match="Schema validation failed"):
            load_settings(FIXTURES / "invalid_enabled_type.yaml")

    def test_unknown_top_level_key(self, tmp_path):
        extra = tmp_path / "extra.yaml"
        extra.write_text("apiVersion: contractual/v1\nkind: ContractSettings\nstrict: true\n")
        with pytest.raises(ContractualConfigError, match="Schema validation failed"):
            load_settings(extra)

    def test_jsonl_requires_path(self):
        with pytest.raises(ContractualConfigError, match="requires a 'path'"):
            load_settings(FIXTURES / "invalid_jsonl_without_path.yaml")

    def test_file_not_found(self):
        with pytest.raises(FileNotFoundError):
            load_settings(FIXTURES / "nonexistent.yaml")


class TestYamlParseErrors:
    """Tests for YAML parsing error handling."""

    def test_invalid_yaml_syntax(self, tmp_path):
        bad = tmp_path / "bad.yaml"
        bad.write_text("{\n  invalid: yaml: syntax:\n}")
        with pytest.raises(ContractualConfigError, match="YAML parse error"):
            load_settings(bad)

    def test_non_mapping_yaml(self, tmp_path):
        scalar = tmp_path / "scalar.yaml"
        scalar.write_text("just a string")
        with pytest.raises(ContractualConfigError, match="YAML document must be a mapping"):
            load_settings(scalar)

    def test_oversized_file(self, tmp_path):
        big = tmp_path / "big.yaml"
        big.write_text("#" * (MAX_SETTINGS_SIZE + 1))
        with pytest.raises(ContractualConfigError, match="too large"):
            load_settings(big)

"""YAML Settings Loader — parse and validate against JSON Schema."""

from __future__ import annotations

import importlib.resources as _resources
import json
import logging
from pathlib import Path
from typing import Any

import jsonschema
import yaml

from contractual.types import ContractualConfigError

logger = logging.getLogger(__name__)

MAX_SETTINGS_SIZE = 1_048_576  # 1 MB

# Lazy-loaded schema singleton
_schema_cache: dict | None = None


def _get_schema() -> dict:
    """Load and cache the JSON Schema for validation."""
    global _schema_cache  # noqa: PLW0603
    if _schema_cache is None:
        schema_text = (
            _resources.files("contractual.yaml_engine")
            .joinpath("contractual-v1.schema.json")
            .read_text(encoding="utf-8")
        )
        _schema_cache = json.loads(schema_text)
    return _schema_cache


def _validate_schema(data: dict) -> None:
    """Validate parsed YAML against the settings JSON Schema."""
    try:
        jsonschema.validate(instance=data, schema=_get_schema())
    except jsonschema.ValidationError as e:
        raise ContractualConfigError(f"Schema validation failed: {e.message}") from e


def _validate_handler(data: dict) -> None:
    """Handlers that write to a file need a path."""
    handler = data.get("handler")
    if handler and handler["type"] == "jsonl" and "path" not in handler:
        raise ContractualConfigError("Handler 'jsonl' requires a 'path'")


def load_settings(source: str | Path) -> dict[str, Any]:
    """Load and validate a YAML settings document.

    Args:
        source: Path to a YAML file.

    Returns:
        The parsed settings mapping.

    Raises:
        ContractualConfigError: If the YAML is invalid, too large, not a
            mapping, or fails schema validation.
        FileNotFoundError: If the file does not exist.
    """
    path = Path(source)

    file_size = path.stat().st_size
    if file_size > MAX_SETTINGS_SIZE:
        raise ContractualConfigError(f"Settings file too large ({file_size} bytes, max {MAX_SETTINGS_SIZE})")

    try:
        data = yaml.safe_load(path.read_bytes())
    except yaml.YAMLError as e:
        raise ContractualConfigError(f"YAML parse error: {e}") from e

    if not isinstance(data, dict):
        raise ContractualConfigError("YAML document must be a mapping")

    _validate_schema(data)
    _validate_handler(data)

    logger.debug("Loaded contract settings from %s", path)
    return data

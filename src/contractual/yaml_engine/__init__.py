"""YAML Settings Engine — load contract configuration from a YAML document."""

from __future__ import annotations

from pathlib import Path

from contractual.config import ContractConfig
from contractual.yaml_engine.compiler import build_config
from contractual.yaml_engine.loader import load_settings


def load_config(source: str | Path) -> ContractConfig:
    """Load a settings file and build a :class:`ContractConfig` from it."""
    return build_config(load_settings(source))


__all__ = [
    "build_config",
    "load_config",
    "load_settings",
]

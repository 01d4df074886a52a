"""Turn validated settings into a ContractConfig."""

from __future__ import annotations

import logging
from typing import Any

from contractual.audit import JsonLinesHandler, LoggingHandler, RecordingHandler, StdoutHandler
from contractual.config import ContractConfig, default_violation_handler, is_production
from contractual.types import ViolationHandler


def _build_handler(settings: dict[str, Any] | None) -> ViolationHandler:
    if not settings:
        return default_violation_handler

    handler_type = settings["type"]
    if handler_type == "raise":
        return default_violation_handler
    if handler_type == "log":
        level = logging.getLevelName(settings.get("level", "WARNING"))
        named = logging.getLogger(settings["logger"]) if "logger" in settings else None
        return LoggingHandler(logger=named, level=level)
    if handler_type == "stdout":
        return StdoutHandler()
    if handler_type == "jsonl":
        return JsonLinesHandler(settings["path"])
    return RecordingHandler()


def build_config(data: dict[str, Any]) -> ContractConfig:
    """Build a configuration from a parsed settings mapping.

    ``enabled`` falls back to the production check when omitted.
    """
    enabled = data.get("enabled")
    return ContractConfig(
        enabled=(not is_production()) if enabled is None else enabled,
        violation_handler=_build_handler(data.get("handler")),
    )

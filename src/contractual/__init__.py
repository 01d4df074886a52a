"""contractual — Design-by-Contract decorators for Python classes."""

from __future__ import annotations

from contractual.audit import JsonLinesHandler, LoggingHandler, RecordingHandler, StdoutHandler
from contractual.config import (
    ContractConfig,
    configure,
    default_violation_handler,
    is_production,
    set_config,
    use_config,
)
from contractual.contracts import ensure, invariant, require
from contractual.types import (
    ContractualConfigError,
    ContractViolation,
    Violation,
    ViolationHandler,
    ViolationKind,
)
from contractual.yaml_engine import load_config

__version__ = "0.1.0"

__all__ = [
    "ContractConfig",
    "ContractViolation",
    "ContractualConfigError",
    "JsonLinesHandler",
    "LoggingHandler",
    "RecordingHandler",
    "StdoutHandler",
    "Violation",
    "ViolationHandler",
    "ViolationKind",
    "configure",
    "default_violation_handler",
    "ensure",
    "invariant",
    "is_production",
    "load_config",
    "require",
    "set_config",
    "use_config",
]

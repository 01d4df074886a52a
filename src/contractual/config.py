"""Process-wide contract configuration.

A single :class:`ContractConfig` decides whether contracts are evaluated
and which handler receives violations. Every wrapper reads it on every
call, so changes take effect on the next call.
"""

from __future__ import annotations

import dataclasses
import logging
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from contractual.types import ContractViolation, Violation, ViolationHandler

logger = logging.getLogger(__name__)

ENV_VAR = "CONTRACTUAL_ENV"


def is_production(environ: Mapping[str, str] | None = None) -> bool:
    """Return True if the deployment signal says this is production."""
    env = os.environ if environ is None else environ
    return env.get(ENV_VAR, "").strip().lower() == "production"


def default_violation_handler(kind: str, subject: str, message: str) -> None:
    """Fail the current call with a :class:`ContractViolation`."""
    raise ContractViolation(Violation.from_call(kind, subject, message))


@dataclass
class ContractConfig:
    """Switch and reporting channel shared by all contract wrappers."""

    enabled: bool = field(default_factory=lambda: not is_production())
    violation_handler: ViolationHandler = default_violation_handler

    def report(self, kind: str, subject: str, message: str) -> None:
        """Dispatch a violation to the configured handler."""
        logger.debug("%s failed on %s: %s", kind, subject, message)
        self.violation_handler(kind, subject, message)

    @classmethod
    def from_yaml(cls, path: str | Path) -> ContractConfig:
        """Build a configuration from a YAML settings file."""
        from contractual.yaml_engine import load_config

        return load_config(path)


_config = ContractConfig()


def configure() -> ContractConfig:
    """Return the mutable process-wide configuration."""
    return _config


def set_config(config: ContractConfig) -> ContractConfig:
    """Install *config* as the process-wide configuration.

    Returns the previously installed instance so callers can restore it.
    """
    global _config  # noqa: PLW0603
    previous = _config
    _config = config
    return previous


@contextmanager
def use_config(config: ContractConfig | None = None, **overrides: Any) -> Iterator[ContractConfig]:
    """Temporarily install a configuration.

    With no *config*, a copy of the current configuration with
    *overrides* applied is installed instead. The previous instance is
    restored on exit.
    """
    if config is None:
        config = dataclasses.replace(_config, **overrides)
    elif overrides:
        config = dataclasses.replace(config, **overrides)
    previous = set_config(config)
    try:
        yield config
    finally:
        set_config(previous)

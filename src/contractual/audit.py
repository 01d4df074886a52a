"""Violation handlers: RecordingHandler, LoggingHandler, StdoutHandler, JsonLinesHandler.

The default handler fails the call. These alternatives observe a
violation and let the call continue, which is useful for collecting
contract failures in tests or in a staging deployment.
"""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

from contractual.types import Violation

logger = logging.getLogger(__name__)


class RecordingHandler:
    """Collects violations in memory for later inspection."""

    def __init__(self) -> None:
        self.violations: list[Violation] = []

    def __call__(self, kind: str, subject: str, message: str) -> None:
        self.violations.append(Violation.from_call(kind, subject, message))

    @property
    def calls(self) -> list[tuple[str, str, str]]:
        """Recorded violations as ``(kind, subject, message)`` tuples."""
        return [(v.kind.value, v.subject, v.message) for v in self.violations]

    def clear(self) -> None:
        self.violations.clear()

    def __len__(self) -> int:
        return len(self.violations)


class LoggingHandler:
    """Logs each violation instead of failing the call."""

    def __init__(self, logger: logging.Logger | None = None, level: int = logging.WARNING) -> None:
        self._log = logger if logger is not None else logging.getLogger(__name__)
        self._level = level

    def __call__(self, kind: str, subject: str, message: str) -> None:
        self._log.log(self._level, Violation.from_call(kind, subject, message).render())


class StdoutHandler:
    """Writes violations to stdout as JSON lines."""

    def __call__(self, kind: str, subject: str, message: str) -> None:
        json.dump(Violation.from_call(kind, subject, message).to_dict(), sys.stdout)
        sys.stdout.write("\n")
        sys.stdout.flush()


class JsonLinesHandler:
    """Appends violations to a file as JSON lines."""

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def __call__(self, kind: str, subject: str, message: str) -> None:
        with self._path.open("a") as f:
            json.dump(Violation.from_call(kind, subject, message).to_dict(), f)
            f.write("\n")

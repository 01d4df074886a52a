"""Shared types, enums, and protocols for contractual."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class ViolationKind(Enum):
    """The three kinds of contract a call can violate."""

    PRECONDITION = "Precondition"
    POSTCONDITION = "Postcondition"
    INVARIANT = "Invariant"


@runtime_checkable
class ViolationHandler(Protocol):
    """Protocol for callables that react to a failed contract.

    ``kind`` is the string value of a :class:`ViolationKind`.
    """

    def __call__(self, kind: str, subject: str, message: str) -> None: ...


@dataclass(frozen=True)
class Violation:
    """A structured record of a failed contract check."""

    kind: ViolationKind
    subject: str
    message: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_call(cls, kind: str | ViolationKind, subject: str, message: str) -> Violation:
        """Build a violation from handler arguments."""
        return cls(kind=ViolationKind(kind), subject=subject, message=message)

    def render(self) -> str:
        return f"[{self.kind.value} failed] on {self.subject}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "subject": self.subject,
            "message": self.message,
            "timestamp": self.timestamp.isoformat(),
        }


class ContractViolation(AssertionError):
    """Raised by the default handler when a contract does not hold."""

    def __init__(self, violation: Violation) -> None:
        super().__init__(violation.render())
        self.violation = violation

    @property
    def kind(self) -> ViolationKind:
        return self.violation.kind


class ContractualConfigError(ValueError):
    """Raised for invalid contract declarations or settings files."""

"""Caller-facing diagnostics.

Core operations raise typed errors from :mod:`sifflet_sources.errors`. Callers
that need to aggregate several outcomes (planning, the CLI) collect them here
instead, the same way Terraform diagnostics are reported to users.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum

from sifflet_sources.errors import ContractViolationError


class Severity(str, Enum):
    """Diagnostic severity."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class Diagnostic:
    """A single reportable outcome.

    Attributes:
        severity: Error or warning
        summary: Short, user-facing title
        detail: Longer explanation
        provider_bug: True when the failure is a broken internal contract
            rather than a problem with the user's configuration
    """

    severity: Severity
    summary: str
    detail: str = ""
    provider_bug: bool = False


@dataclass
class Diagnostics:
    """Ordered collection of diagnostics."""

    items: list[Diagnostic] = field(default_factory=list)

    def add_error(self, summary: str, detail: str = "") -> None:
        self.items.append(Diagnostic(Severity.ERROR, summary, detail))

    def add_warning(self, summary: str, detail: str = "") -> None:
        self.items.append(Diagnostic(Severity.WARNING, summary, detail))

    def add_exception(self, summary: str, exc: Exception) -> None:
        """Record an exception as an error diagnostic."""
        self.items.append(
            Diagnostic(
                Severity.ERROR,
                summary,
                str(exc),
                provider_bug=isinstance(exc, ContractViolationError),
            )
        )

    @property
    def has_error(self) -> bool:
        return any(d.severity is Severity.ERROR for d in self.items)

    @property
    def errors(self) -> list[Diagnostic]:
        return [d for d in self.items if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.items if d.severity is Severity.WARNING]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

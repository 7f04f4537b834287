# topmark:header:start
#
#   project      : MQLSpec
#   file         : model.py
#   file_relpath : src/mqlspec/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core diagnostic types and helpers for MQLSpec.

Sections:
    * DiagnosticLevel: severity levels.
    * Diagnostic: immutable structured diagnostic payload (level, message,
      error kind and structural location).
    * DiagnosticLog: mutable per-document collection with helpers for
      recording failures.
    * FrozenDiagnosticLog: immutable snapshot container for finished documents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from mqlspec.config.logging import get_logger
from mqlspec.constants import ROOT_LOCATION

if TYPE_CHECKING:
    from collections.abc import Iterator

    from mqlspec.config.logging import MqlSpecLogger
    from mqlspec.core.errors import DefinitionError


logger: MqlSpecLogger = get_logger(__name__)


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics collected during validation.

    Levels are ordered by importance: ERROR > WARNING > INFO.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level, message and location.

    Attributes:
        level: Severity.
        message: Human-readable message.
        kind: Error family (``structural``, ``schema_reference``,
            ``type_resolution``, ``scalar_decode``) or ``None`` for plain notes.
        location: Structural path inside the document (``<root>`` for the whole document).
    """

    level: DiagnosticLevel
    message: str
    kind: str | None = None
    location: str = ROOT_LOCATION


@dataclass
class DiagnosticLog:
    """Mutable, per-document collection of diagnostics."""

    items: list[Diagnostic] = field(default_factory=lambda: [])

    def freeze(self) -> FrozenDiagnosticLog:
        """Return an immutable snapshot of this log's diagnostics."""
        return FrozenDiagnosticLog(items=tuple(self.items))

    def add_error(
        self,
        message: str,
        *,
        kind: str | None = None,
        location: str = ROOT_LOCATION,
    ) -> None:
        """Add an ``error`` diagnostic to the log.

        Args:
            message: The diagnostic message.
            kind: Error family of the failure.
            location: Structural path of the failure inside the document.
        """
        diagnostic = Diagnostic(DiagnosticLevel.ERROR, message, kind=kind, location=location)
        self.items.append(diagnostic)
        logger.trace("Adding [%s] %s: %r", diagnostic.level.value, location, message)

    def add_failure(self, error: DefinitionError) -> None:
        """Record a definition error as an ``error`` diagnostic."""
        self.add_error(error.message, kind=error.kind, location=error.location)

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True, slots=True)
class FrozenDiagnosticLog:
    """Immutable, per-document diagnostic container."""

    items: tuple[Diagnostic, ...] = ()

    def __iter__(self) -> Iterator[Diagnostic]:
        """Iterate over contained diagnostics in insertion order."""
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def errors(self) -> tuple[Diagnostic, ...]:
        """Return the ``error`` diagnostics only."""
        return tuple(d for d in self.items if d.level == DiagnosticLevel.ERROR)

# topmark:header:start
#
#   project      : MQLSpec
#   file         : report.py
#   file_relpath : src/mqlspec/validation/report.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Per-document results and the aggregated corpus report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

from mqlspec.constants import ROOT_LOCATION
from mqlspec.core.exit_codes import ExitCode
from mqlspec.definitions.model import ClosedSetDefinition, OperatorDefinition
from mqlspec.diagnostic.model import FrozenDiagnosticLog

if TYPE_CHECKING:
    from pathlib import Path

Definition = Union[OperatorDefinition, ClosedSetDefinition]


@dataclass(frozen=True, slots=True)
class Failure:
    """One recorded failure.

    Attributes:
        document: Document (or definitions root, for corpus-level failures).
        location: Structural path inside the document (``<root>`` for the whole document).
        kind: Error family (``structural``, ``schema_reference``, ...).
        message: Human-readable message.
    """

    document: Path
    location: str
    kind: str
    message: str

    def format(self, *, base: Path | None = None) -> str:
        """Render as ``document: location: message``."""
        shown: Path = self.document
        if base is not None:
            try:
                shown = self.document.relative_to(base)
            except ValueError:
                pass
        return f"{shown.as_posix()}: {self.location}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        return {
            "document": str(self.document),
            "location": self.location,
            "kind": self.kind,
            "message": self.message,
        }


@dataclass(frozen=True, slots=True)
class DocumentResult:
    """Outcome of validating one document.

    Attributes:
        path: Document path.
        schema_name: Meta-schema selected by the directive (``None`` if missing).
        diagnostics: Diagnostics recorded for the document.
        definition: Parsed definition when the document is valid.
    """

    path: Path
    schema_name: str | None
    diagnostics: FrozenDiagnosticLog = field(default_factory=FrozenDiagnosticLog)
    definition: Definition | None = None

    @property
    def ok(self) -> bool:
        return not self.diagnostics.errors()

    def failures(self) -> list[Failure]:
        return [
            Failure(self.path, d.location, d.kind or "error", d.message)
            for d in self.diagnostics.errors()
        ]


@dataclass(frozen=True, slots=True)
class ValidationReport:
    """Aggregated outcome of validating a corpus.

    Attributes:
        root: Definitions root.
        results: Per-document results, sorted by path.
        corpus_failures: Failures not attributable to one document (e.g. empty corpus).
    """

    root: Path
    results: tuple[DocumentResult, ...] = ()
    corpus_failures: tuple[Failure, ...] = ()

    @property
    def documents(self) -> int:
        """Number of documents processed."""
        return len(self.results)

    @property
    def failures(self) -> list[Failure]:
        """Every failure, sorted by document path (document order kept within a file)."""
        out: list[Failure] = list(self.corpus_failures)
        for result in sorted(self.results, key=lambda r: r.path):
            out.extend(result.failures())
        return out

    @property
    def ok(self) -> bool:
        return not self.corpus_failures and all(r.ok for r in self.results)

    @property
    def exit_code(self) -> ExitCode:
        return ExitCode.SUCCESS if self.ok else ExitCode.FAILURE

    def operators(self) -> list[OperatorDefinition]:
        """Valid operator definitions, in document order."""
        return [r.definition for r in self.results if isinstance(r.definition, OperatorDefinition)]

    def closed_sets(self) -> list[ClosedSetDefinition]:
        """Valid closed-set definitions, in document order."""
        return [
            r.definition for r in self.results if isinstance(r.definition, ClosedSetDefinition)
        ]

    def format_failures(self, *, relative: bool = False) -> list[str]:
        """Render every failure as one line, optionally relative to the root."""
        base: Path | None = self.root if relative else None
        return [f.format(base=base) for f in self.failures]

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": str(self.root),
            "documents": self.documents,
            "ok": self.ok,
            "failures": [f.to_dict() for f in self.failures],
        }


def corpus_failure(root: Path, message: str, *, kind: str = "discovery") -> Failure:
    """Build a failure that applies to the corpus as a whole."""
    return Failure(document=root, location=ROOT_LOCATION, kind=kind, message=message)

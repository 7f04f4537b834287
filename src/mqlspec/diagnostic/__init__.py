# topmark:header:start
#
#   project      : MQLSpec
#   file         : __init__.py
#   file_relpath : src/mqlspec/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostic primitives and helpers.

Design:
    - Diagnostics are represented by immutable `Diagnostic` instances.
    - During validation of one document, diagnostics are accumulated in a
      mutable `DiagnosticLog`.
    - Finished documents store diagnostics as an immutable `FrozenDiagnosticLog`.
"""

from __future__ import annotations

from mqlspec.diagnostic.model import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticLog,
    FrozenDiagnosticLog,
)

__all__ = [
    "Diagnostic",
    "DiagnosticLevel",
    "DiagnosticLog",
    "FrozenDiagnosticLog",
]

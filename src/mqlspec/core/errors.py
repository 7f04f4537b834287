# topmark:header:start
#
#   project      : MQLSpec
#   file         : errors.py
#   file_relpath : src/mqlspec/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exception hierarchy for MQLSpec.

All exceptions inherit from ``MqlSpecError`` and provide ``to_dict()`` for
machine-friendly reporting.

Definition-time errors (``DefinitionError`` and its subclasses) carry the
originating document and a structural location (a JSON-pointer-like path such
as ``/arguments/1/type``). The validator never lets them escape: each one is
recorded as a failure against its document and processing continues with the
rest of the corpus.

Hierarchy:
    - ``MqlSpecError``
        - ``DefinitionError``
            - ``StructuralError``: meta-schema violation (missing field, wrong
              shape, enum mismatch).
            - ``SchemaReferenceError``: missing or unrecognized ``$schema`` directive.
            - ``TypeResolutionError``: unknown type token, or an invalid
              combination such as ``mergeObject`` on a non-object-variadic argument.
            - ``ScalarDecodeError``: tagged literal that cannot be decoded into
              its declared native form.
        - ``EncodingError``: supplied argument values do not fit an operator's
          encoding rules (raised to the consumer, never recorded).
"""

from __future__ import annotations

from difflib import get_close_matches
from typing import TYPE_CHECKING, Any

from mqlspec.constants import ROOT_LOCATION

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path


class MqlSpecError(Exception):
    """Base exception for all MQLSpec errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class DefinitionError(MqlSpecError):
    """Base class for errors attributable to one definition document."""

    kind: str = "definition"

    def __init__(
        self,
        message: str,
        *,
        document: Path | str | None = None,
        location: str = ROOT_LOCATION,
    ) -> None:
        self.message = message
        self.document = document
        self.location = location or ROOT_LOCATION
        super().__init__(message)

    def at(self, document: Path | str) -> DefinitionError:
        """Attach the originating document (in place) and return ``self``."""
        self.document = document
        return self

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.kind,
            "message": self.message,
            "document": str(self.document) if self.document is not None else None,
            "location": self.location,
        }


class StructuralError(DefinitionError):
    """A document does not conform to its meta-schema."""

    kind = "structural"


class SchemaReferenceError(DefinitionError):
    """A document lacks, or misnames, its ``# $schema:`` directive."""

    kind = "schema_reference"


class TypeResolutionError(DefinitionError):
    """Unknown type token, or an invalid combination of type-related flags.

    Provides fuzzy-matched suggestions when a token is simply misspelled.
    """

    kind = "type_resolution"

    def __init__(
        self,
        message: str,
        *,
        token: str | None = None,
        suggestions: Iterable[str] = (),
        document: Path | str | None = None,
        location: str = ROOT_LOCATION,
    ) -> None:
        self.token = token
        self.suggestions: tuple[str, ...] = tuple(suggestions)
        super().__init__(message, document=document, location=location)

    @classmethod
    def unknown_token(
        cls,
        token: str,
        known: Iterable[str],
        *,
        location: str = ROOT_LOCATION,
    ) -> TypeResolutionError:
        """Build the error raised when ``token`` is not in the type table."""
        suggestions: list[str] = get_close_matches(token, list(known), n=3, cutoff=0.6)
        message = f"Unknown type token: '{token}'."
        if suggestions:
            message += f" Did you mean: {', '.join(suggestions)}?"
        return cls(message, token=token, suggestions=suggestions, location=location)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = super().to_dict()
        payload["token"] = self.token
        payload["suggestions"] = list(self.suggestions)
        return payload


class ScalarDecodeError(DefinitionError):
    """A tagged literal does not match the native form its tag declares."""

    kind = "scalar_decode"

    def __init__(
        self,
        message: str,
        *,
        tag: str,
        line: int | None = None,
        column: int | None = None,
        document: Path | str | None = None,
    ) -> None:
        self.tag = tag
        self.line = line
        self.column = column
        location: str = f"line {line}, column {column}" if line is not None else ROOT_LOCATION
        super().__init__(message, document=document, location=location)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = super().to_dict()
        payload["tag"] = self.tag
        return payload


class EncodingError(MqlSpecError, ValueError):
    """Supplied argument values cannot be encoded for an operator."""

    def __init__(self, operator: str, message: str, *, argument: str | None = None) -> None:
        self.operator = operator
        self.argument = argument
        prefix: str = f"{operator}: " if argument is None else f"{operator}({argument}): "
        super().__init__(prefix + message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "encoding",
            "message": str(self),
            "operator": self.operator,
            "argument": self.argument,
        }

# topmark:header:start
#
#   project      : MQLSpec
#   file         : __init__.py
#   file_relpath : src/mqlspec/validation/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Definition validator: directive, meta-schema and semantic checks over a corpus."""

from __future__ import annotations

from mqlspec.validation.directive import find_schema_name, find_schema_reference
from mqlspec.validation.discovery import find_definition_files
from mqlspec.validation.report import DocumentResult, Failure, ValidationReport
from mqlspec.validation.schemas import SCHEMA_NAMES, get_validator, load_schema
from mqlspec.validation.validator import validate_corpus, validate_document

__all__ = [
    "SCHEMA_NAMES",
    "DocumentResult",
    "Failure",
    "ValidationReport",
    "find_definition_files",
    "find_schema_name",
    "find_schema_reference",
    "get_validator",
    "load_schema",
    "validate_corpus",
    "validate_document",
]

# topmark:header:start
#
#   project      : MQLSpec
#   file         : __init__.py
#   file_relpath : src/mqlspec/definitions/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Operator/argument model: immutable definition records and their parser."""

from __future__ import annotations

from mqlspec.definitions.model import (
    ArgumentDefinition,
    ClosedSetDefinition,
    ClosedSetValue,
    EncodeMode,
    OperatorDefinition,
    TestCase,
    VariadicMode,
)
from mqlspec.definitions.parser import (
    check_closed_set,
    check_operator,
    load_operator,
    parse_closed_set,
    parse_operator,
)

__all__ = [
    "ArgumentDefinition",
    "ClosedSetDefinition",
    "ClosedSetValue",
    "EncodeMode",
    "OperatorDefinition",
    "TestCase",
    "VariadicMode",
    "check_closed_set",
    "check_operator",
    "load_operator",
    "parse_closed_set",
    "parse_operator",
]

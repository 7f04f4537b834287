# topmark:header:start
#
#   project      : MQLSpec
#   file         : __init__.py
#   file_relpath : src/mqlspec/encoding/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Encoding resolver for operator definitions."""

from __future__ import annotations

from mqlspec.encoding.resolver import encode, resolve_values

__all__ = ["encode", "resolve_values"]

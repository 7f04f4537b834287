# topmark:header:start
#
#   project      : MQLSpec
#   file         : __init__.py
#   file_relpath : src/mqlspec/taxonomy/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""BSON type taxonomy: the fixed catalog of BSON types and their native forms."""

from __future__ import annotations

from mqlspec.taxonomy.catalog import (
    ANY,
    BSON_TYPES,
    NUMBER,
    BsonType,
    bson_type_names,
    get_bson_type,
)
from mqlspec.taxonomy.native import NativeForm

__all__ = [
    "ANY",
    "BSON_TYPES",
    "NUMBER",
    "BsonType",
    "NativeForm",
    "bson_type_names",
    "get_bson_type",
]

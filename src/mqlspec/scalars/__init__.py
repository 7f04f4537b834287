# topmark:header:start
#
#   project      : MQLSpec
#   file         : __init__.py
#   file_relpath : src/mqlspec/scalars/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Custom scalar decoder: explicit ``!bson_*`` YAML tags for native BSON values."""

from __future__ import annotations

from mqlspec.scalars.codecs import SCALAR_CODECS, ScalarCodec, get_codec
from mqlspec.scalars.loader import DefinitionDumper, DefinitionLoader, dump, load

__all__ = [
    "SCALAR_CODECS",
    "DefinitionDumper",
    "DefinitionLoader",
    "ScalarCodec",
    "dump",
    "get_codec",
    "load",
]

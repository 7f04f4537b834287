# topmark:header:start
#
#   project      : MQLSpec
#   file         : __init__.py
#   file_relpath : src/mqlspec/tokens/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type tokens and the type resolver.

Most callers only need `get_type_table()`:

```python
from mqlspec.tokens import get_type_table

table = get_type_table()
table.resolve("resolvesToLong")           # native forms
table.conforms("resolvesToLong", "resolvesToNumber")  # True
```
"""

from __future__ import annotations

from mqlspec.tokens.model import TokenKind, TypeToken
from mqlspec.tokens.table import (
    CONFORMANCE_LINKS,
    EXPRESSION_CAPABILITY,
    FIELD_PATH_CAPABILITY,
    TypeTable,
    build_type_table,
    field_path_name,
    get_type_table,
    resolves_to_name,
)

__all__ = [
    "CONFORMANCE_LINKS",
    "EXPRESSION_CAPABILITY",
    "FIELD_PATH_CAPABILITY",
    "TokenKind",
    "TypeTable",
    "TypeToken",
    "build_type_table",
    "field_path_name",
    "get_type_table",
    "resolves_to_name",
]

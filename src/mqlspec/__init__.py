# topmark:header:start
#
#   project      : MQLSpec
#   file         : __init__.py
#   file_relpath : src/mqlspec/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MQLSpec package.

MQLSpec holds the machinery behind a declarative specification of MongoDB Query
Language operators. It validates YAML operator definitions against two bundled
meta-schemas, resolves the type tokens those definitions reference into a
normalized type-acceptance table, and derives how operator arguments serialize
into nested documents. It exposes both a CLI and a small typed API for
code generators.
"""

from __future__ import annotations

# topmark:header:start
#
#   project      : MQLSpec
#   file         : directive.py
#   file_relpath : src/mqlspec/validation/directive.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parse the ``# $schema: <path>`` directive on the first line of a document."""

from __future__ import annotations

import re
from pathlib import PurePosixPath
from typing import Final

from mqlspec.constants import SCHEMA_DIRECTIVE_PATTERN
from mqlspec.core.errors import SchemaReferenceError

_DIRECTIVE_RE: Final[re.Pattern[str]] = re.compile(SCHEMA_DIRECTIVE_PATTERN)

MISSING_DIRECTIVE_HINT: Final[str] = (
    'The first line must be a comment like "# $schema: <path-to-schema>"'
)


def find_schema_reference(text: str) -> str | None:
    """Return the schema path named on the first line of ``text``, or ``None``."""
    first_line: str = text.split("\n", 1)[0].rstrip("\r")
    match: re.Match[str] | None = _DIRECTIVE_RE.match(first_line.strip())
    if match is None:
        return None
    return match.group(1).strip()


def find_schema_name(text: str, *, document: str = "document") -> str:
    """Return the basename of the schema the document's directive refers to.

    ``# $schema: ../../operator.json`` selects ``operator.json``.

    Raises:
        SchemaReferenceError: If the first line is not a schema directive.
    """
    reference: str | None = find_schema_reference(text)
    if not reference:
        raise SchemaReferenceError(
            f"Missing schema comment in {document}. {MISSING_DIRECTIVE_HINT}"
        )
    # Directives are written with forward slashes on every platform.
    return PurePosixPath(reference.replace("\\", "/")).name

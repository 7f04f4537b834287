# topmark:header:start
#
#   project      : MQLSpec
#   file         : keys.py
#   file_relpath : src/mqlspec/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for MQLSpec configuration.

This module defines the authoritative string constants used when reading
MQLSpec configuration from TOML sources (``mqlspec.toml`` and
``[tool.mqlspec]`` in ``pyproject.toml``).

Design notes:
    - Keys defined here represent *external configuration API*.
    - Renaming or removing keys is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by MQLSpec configuration.

    Example ``mqlspec.toml``::

        [definitions]
        root = "definitions"
        suffix = ".yaml"
        exclude = ["drafts/"]

        [validation]
        max_workers = 4
    """

    # [tool.mqlspec] in pyproject.toml
    SECTION_TOOL: Final[str] = "tool"
    SECTION_TOOL_NAME: Final[str] = "mqlspec"

    # [definitions]
    SECTION_DEFINITIONS: Final[str] = "definitions"

    KEY_ROOT: Final[str] = "root"
    KEY_SUFFIX: Final[str] = "suffix"
    KEY_EXCLUDE: Final[str] = "exclude"

    # [validation]
    SECTION_VALIDATION: Final[str] = "validation"

    KEY_MAX_WORKERS: Final[str] = "max_workers"

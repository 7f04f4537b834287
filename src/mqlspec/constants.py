# topmark:header:start
#
#   project      : MQLSpec
#   file         : constants.py
#   file_relpath : src/mqlspec/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MQLSpec Constants."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as get_version
from typing import Final

try:
    MQLSPEC_VERSION: str = get_version("mqlspec")
except PackageNotFoundError:  # running from a source checkout
    MQLSPEC_VERSION = "0.0.0"

# Package holding the bundled meta-schemas:
SCHEMAS_PACKAGE: Final[str] = "mqlspec.schemas"
OPERATOR_SCHEMA_NAME: Final[str] = "operator.json"
TYPE_SCHEMA_NAME: Final[str] = "type.json"

# Project-level configuration files:
MQLSPEC_TOML_NAME: Final[str] = "mqlspec.toml"
PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"

DEFAULT_DEFINITIONS_ROOT: Final[str] = "definitions"
DEFAULT_DEFINITION_SUFFIX: Final[str] = ".yaml"

# First line of every definition document, e.g. ``# $schema: ../operator.json``
SCHEMA_DIRECTIVE_PATTERN: Final[str] = r"^#\s*\$schema:\s*(.+)$"

ROOT_LOCATION: Final[str] = "<root>"

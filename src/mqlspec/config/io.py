# topmark:header:start
#
#   project      : MQLSpec
#   file         : io.py
#   file_relpath : src/mqlspec/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module provides I/O helpers for reading MQLSpec configuration from
on-disk TOML files (`mqlspec.toml` / `pyproject.toml`) and small typed getters
over the resulting tables. Parsing is done with `tomlkit` and returned as
plain `dict` structures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from mqlspec.config.keys import Toml
from mqlspec.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from mqlspec.config.logging import MqlSpecLogger

TomlTable = dict[str, Any]

logger: MqlSpecLogger = get_logger(__name__)


def load_defaults_dict() -> TomlTable:
    """Return MQLSpec's **runtime defaults** as a Python dict.

    This function intentionally performs **no I/O**. The returned value is a new
    dict so callers can mutate it safely.
    """
    return {
        Toml.SECTION_DEFINITIONS: {
            Toml.KEY_ROOT: "definitions",
            Toml.KEY_SUFFIX: ".yaml",
            Toml.KEY_EXCLUDE: [],
        },
        Toml.SECTION_VALIDATION: {
            Toml.KEY_MAX_WORKERS: 1,
        },
    }


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path: Path to a TOML document (e.g., ``mqlspec.toml`` or ``pyproject.toml``).

    Returns:
        The parsed TOML content.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def extract_tool_table(pyproject: TomlTable) -> TomlTable:
    """Return the ``[tool.mqlspec]`` table of a parsed ``pyproject.toml`` (or ``{}``)."""
    tool: Any = pyproject.get(Toml.SECTION_TOOL, {})
    if not isinstance(tool, dict):
        return {}
    table: Any = cast("dict[str, Any]", tool).get(Toml.SECTION_TOOL_NAME, {})
    return cast("TomlTable", table) if isinstance(table, dict) else {}


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return a sub-table, or ``{}`` if missing or not a table."""
    value: Any = table.get(key)
    if isinstance(value, dict):
        return cast("TomlTable", value)
    if value is not None:
        logger.warning("Ignoring non-table value for [%s]: %r", key, value)
    return {}


def get_string_value_or_none(table: TomlTable, key: str) -> str | None:
    """Return a string value, or ``None`` if missing or of the wrong type."""
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, str):
        return value
    logger.warning("Ignoring non-string value for '%s': %r", key, value)
    return None


def get_int_value_or_none(table: TomlTable, key: str) -> int | None:
    """Return an integer value, or ``None`` if missing or of the wrong type."""
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    logger.warning("Ignoring non-integer value for '%s': %r", key, value)
    return None


def get_list_value(table: TomlTable, key: str) -> list[str]:
    """Return a list of strings; non-string items are dropped with a warning."""
    value: Any = table.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        logger.warning("Ignoring non-list value for '%s': %r", key, value)
        return []
    out: list[str] = []
    for item in cast("list[Any]", value):
        if isinstance(item, str):
            out.append(item)
        else:
            logger.warning("Ignoring non-string item in '%s': %r", key, item)
    return out

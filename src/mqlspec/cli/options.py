# topmark:header:start
#
#   project      : MQLSpec
#   file         : options.py
#   file_relpath : src/mqlspec/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color, output format)
and their resolution logic, so the group and commands can stay thin.
"""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from typing import Callable, TypeVar

import click

from mqlspec.cli.errors import MqlSpecUsageError
from mqlspec.config.logging import TRACE_LEVEL

F = TypeVar("F", bound=Callable[..., object])


def resolve_log_level(verbose_count: int, quiet_count: int) -> int | None:
    """Map ``-v``/``-q`` counts to a logging level.

    Returns:
        TRACE for ``-vvv``, DEBUG for ``-vv``, INFO for ``-v``, ERROR for ``-q``;
        ``None`` when neither flag is given (logging stays at its default).

    Raises:
        MqlSpecUsageError: If both ``--verbose`` and ``--quiet`` are given.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise MqlSpecUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count >= 3:
        return TRACE_LEVEL
    if verbose_count == 2:
        return logging.DEBUG
    if verbose_count == 1:
        return logging.INFO
    if quiet_count >= 1:
        return logging.ERROR
    return None


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Program-output verbosity: ``-1`` quiet, ``0`` terse, ``1+`` verbose."""
    if quiet_count > 0:
        return -1
    return verbose_count


def common_verbose_options(f: F) -> F:
    """Add ``-v/--verbose`` and ``-q/--quiet`` (counting, mutually exclusive)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Repeat for more detail (-vvv enables trace logging).",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only print failures.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    output_format: str | None = None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Disables color for JSON output, honors ``--color``/``--no-color`` and the
    ``FORCE_COLOR``/``NO_COLOR`` environment variables, and otherwise enables
    color when stdout is a TTY.
    """
    if output_format and output_format.lower() == OutputFormat.JSON.value:
        return False
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: F) -> F:
    """Add ``--color=auto|always|never`` and ``--no-color``."""
    f = click.option(
        "--color",
        "color_mode",
        type=click.Choice([m.value for m in ColorMode]),
        default=None,
        callback=lambda _ctx, _param, value: ColorMode(value) if value else None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


class OutputFormat(str, Enum):
    """Output format for command results.

    Members:
      TEXT: Human-friendly text output; may include ANSI color if enabled.
      JSON: A single JSON document (machine-readable, never colored).
    """

    TEXT = "text"
    JSON = "json"


def output_format_option(f: F) -> F:
    """Add ``--format=text|json``."""
    return click.option(
        "--format",
        "output_format",
        type=click.Choice([m.value for m in OutputFormat]),
        default=OutputFormat.TEXT.value,
        show_default=True,
        callback=lambda _ctx, _param, value: OutputFormat(value),
        help="Output format.",
    )(f)

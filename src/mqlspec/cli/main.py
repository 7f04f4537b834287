# topmark:header:start
#
#   project      : MQLSpec
#   file         : main.py
#   file_relpath : src/mqlspec/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MQLSpec command line entry point.

Group-level options (verbosity, color) are initialized once and placed into
``ctx.obj``; subcommands read the shared console from there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from mqlspec.cli.commands.types import types_command
from mqlspec.cli.commands.validate import validate_command
from mqlspec.cli.commands.version import version_command
from mqlspec.cli.console import ClickConsole
from mqlspec.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_log_level,
    resolve_verbosity,
)
from mqlspec.config.logging import get_logger, resolve_env_log_level, setup_logging

if TYPE_CHECKING:
    from mqlspec.cli_shared.console_api import ConsoleLike

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging and color) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # MQLSPEC_LOG_LEVEL wins over -v/-q for internal logging.
    level_env: int | None = resolve_env_log_level()
    level: int | None = level_env if level_env is not None else resolve_log_level(verbose, quiet)
    ctx.obj["log_level"] = level
    setup_logging(level=level)

    effective_color_mode: ColorMode = (
        ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    )
    enable_color: bool = resolve_color_mode(cli_mode=effective_color_mode)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Validate MongoDB Query Language operator definitions and inspect their types.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the MQLSpec CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'mqlspec validate [ROOT]' to validate a definitions corpus.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(validate_command)

cli.add_command(types_command)

if __name__ == "__main__":
    cli()

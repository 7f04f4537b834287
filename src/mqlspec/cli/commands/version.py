# topmark:header:start
#
#   project      : MQLSpec
#   file         : version.py
#   file_relpath : src/mqlspec/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MQLSpec `version` command.

Prints the current MQLSpec version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from mqlspec.cli.options import OutputFormat, output_format_option
from mqlspec.constants import MQLSPEC_VERSION

if TYPE_CHECKING:
    from mqlspec.cli_shared.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of MQLSpec.",
)
@output_format_option
def version_command(*, output_format: OutputFormat = OutputFormat.TEXT) -> None:
    """Show the current version of MQLSpec."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]

    if output_format is OutputFormat.JSON:
        console.print(json.dumps({"version": MQLSPEC_VERSION}))
    elif ctx.obj.get("verbosity_level", 0) > 0:
        console.print(console.styled("MQLSpec version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(MQLSPEC_VERSION, bold=True)}")
    else:
        console.print(console.styled(MQLSPEC_VERSION, bold=True))

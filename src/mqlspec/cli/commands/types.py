# topmark:header:start
#
#   project      : MQLSpec
#   file         : types.py
#   file_relpath : src/mqlspec/cli/commands/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MQLSpec `types` command.

Without an argument, prints the type-acceptance table: every type token with
its kind and the native forms a literal may take. With a TOKEN, prints that
token's accepted forms, the capabilities it accepts and the capabilities its
values conform to.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from mqlspec.cli.errors import MqlSpecUsageError
from mqlspec.cli.options import OutputFormat, output_format_option
from mqlspec.core.errors import TypeResolutionError
from mqlspec.tokens.model import TokenKind
from mqlspec.tokens.table import get_type_table

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mqlspec.cli_shared.console_api import ConsoleLike
    from mqlspec.tokens.model import TypeToken
    from mqlspec.tokens.table import TypeTable


def _token_dict(token: TypeToken) -> dict[str, Any]:
    return {
        "name": token.name,
        "kind": token.kind.key,
        "bson_type": token.bson_type,
        "accepted": [f.key for f in token.accepted],
        "accepts_capabilities": sorted(token.accepts_capabilities),
        "conforms_to": sorted(token.conforms_to),
    }


def _print_token(console: ConsoleLike, token: TypeToken) -> None:
    console.print(console.styled(token.name, bold=True) + f"  ({token.kind.label})")
    if token.bson_type is not None:
        console.print(f"  BSON type:    {token.bson_type}")
    console.print(f"  Accepts:      {', '.join(f.key for f in token.accepted) or '-'}")
    console.print(
        f"  Substitutes:  {', '.join(sorted(token.accepts_capabilities)) or '-'}"
    )
    console.print(f"  Conforms to:  {', '.join(sorted(token.conforms_to)) or '-'}")


@click.command(
    name="types",
    help="Show the type-acceptance table, or the details of one TOKEN.",
)
@click.argument("token", required=False)
@click.option(
    "--kind",
    type=click.Choice(list(TokenKind.keys())),
    default=None,
    help="Only list tokens of this kind.",
)
@output_format_option
def types_command(
    *,
    token: str | None,
    kind: str | None,
    output_format: OutputFormat,
) -> None:
    """Show the resolved type tokens."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    table: TypeTable = get_type_table()

    if token is not None:
        try:
            resolved: TypeToken = table.require(token)
        except TypeResolutionError as exc:
            raise MqlSpecUsageError(exc.message) from exc
        if output_format is OutputFormat.JSON:
            console.print(json.dumps(_token_dict(resolved), indent=2))
        else:
            _print_token(console, resolved)
        return

    tokens: list[TypeToken] = sorted(table, key=lambda t: t.name)
    if kind is not None:
        wanted: TokenKind | None = TokenKind.parse(kind)
        tokens = [t for t in tokens if t.kind is wanted]

    if output_format is OutputFormat.JSON:
        console.print(json.dumps([_token_dict(t) for t in tokens], indent=2))
        return

    acceptance: Mapping[str, tuple[str, ...]] = table.acceptance_table()
    width: int = max((len(t.name) for t in tokens), default=0)
    for t in tokens:
        forms: str = ", ".join(acceptance[t.name]) or "-"
        console.print(f"{t.name.ljust(width)}  {t.kind.key:<11}  {forms}")

# topmark:header:start
#
#   project      : MQLSpec
#   file         : validate.py
#   file_relpath : src/mqlspec/cli/commands/validate.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MQLSpec `validate` command.

Validates every definition document under the definitions root and prints one
aggregated, file-sorted report.

Exit codes:
    0: every document is valid.
    1: at least one failure was recorded (the full list goes to stderr).
    66: the definitions root does not exist.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

import click

from mqlspec.cli.errors import MqlSpecFileNotFoundError, MqlSpecSoftwareError, MqlSpecUsageError
from mqlspec.cli.options import OutputFormat, output_format_option
from mqlspec.config.logging import get_logger
from mqlspec.config.model import MutableConfig
from mqlspec.validation.schemas import SCHEMA_NAMES, get_validators
from mqlspec.validation.validator import validate_corpus

if TYPE_CHECKING:
    from mqlspec.cli_shared.console_api import ConsoleLike
    from mqlspec.config.model import Config
    from mqlspec.validation.report import ValidationReport

logger = get_logger(__name__)


def _render_text(console: ConsoleLike, report: ValidationReport, verbosity: int) -> None:
    if verbosity > 0:
        for result in report.results:
            mark: str = (
                console.styled("ok", fg="green") if result.ok else console.styled("FAIL", fg="red")
            )
            console.print(f"{mark}  {result.path.relative_to(report.root).as_posix()}")

    if report.ok:
        if verbosity >= 0:
            console.print(
                f"Validated {report.documents} YAML file(s) under {report.root} "
                f"against {' and '.join(SCHEMA_NAMES)}."
            )
        return

    console.error("YAML/Schema validation failed:")
    for line in report.format_failures():
        console.error(f"- {line}")
    console.error(
        f"{len(report.failures)} failure(s) in {report.documents} document(s).",
    )


@click.command(
    name="validate",
    help="Validate the definition documents under ROOT (default: the configured root).",
)
@click.argument(
    "root",
    required=False,
    type=click.Path(path_type=Path, file_okay=False),
)
@click.option(
    "--exclude",
    "-e",
    "exclude_patterns",
    multiple=True,
    help="Skip documents matching these gitignore-style patterns (relative to ROOT).",
)
@click.option(
    "--jobs",
    "-j",
    type=int,
    default=None,
    help="Validate documents on this many threads (default: from configuration, else 1).",
)
@output_format_option
def validate_command(
    *,
    root: Path | None,
    exclude_patterns: tuple[str, ...],
    jobs: int | None,
    output_format: OutputFormat,
) -> None:
    """Validate a corpus of definition documents."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    verbosity: int = ctx.obj.get("verbosity_level", 0)

    if jobs is not None and jobs < 1:
        raise MqlSpecUsageError("--jobs must be at least 1.")

    builder: MutableConfig = MutableConfig.load_merged(definitions_root=root)
    builder.exclude_patterns.extend(exclude_patterns)
    config: Config = builder.freeze()
    logger.debug("Effective configuration: %s", config)

    if not config.definitions_root.is_dir():
        raise MqlSpecFileNotFoundError(
            f"Definitions root not found: {config.definitions_root}"
        )

    try:
        get_validators()
    except (OSError, ValueError) as exc:
        raise MqlSpecSoftwareError(f"Cannot load bundled meta-schemas: {exc}") from exc

    report: ValidationReport = validate_corpus(config=config, max_workers=jobs)

    if output_format is OutputFormat.JSON:
        console.print(json.dumps(report.to_dict(), indent=2))
    else:
        _render_text(console, report, verbosity)

    ctx.exit(int(report.exit_code))

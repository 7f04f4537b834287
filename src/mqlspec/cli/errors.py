# topmark:header:start
#
#   project      : MQLSpec
#   file         : errors.py
#   file_relpath : src/mqlspec/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the MQLSpec CLI.

Raise these in CLI commands to stop with a standardized message and exit code.
Errors are printed through the project console when one is present on the
Click context, and through Click's default error display otherwise.
"""

from __future__ import annotations

from typing import IO, Any

import click

from mqlspec.core.exit_codes import ExitCode


class MqlSpecCliError(click.ClickException):
    """Base class for all MQLSpec CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (colorization happens in `show()`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(f"Error: {self.format_message()}")
                return
        super().show(file)


class MqlSpecUsageError(MqlSpecCliError):
    """Command-line invocation error (invalid flags or arguments)."""

    exit_code = ExitCode.USAGE_ERROR


class MqlSpecFileNotFoundError(MqlSpecCliError):
    """The definitions root does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class MqlSpecSoftwareError(MqlSpecCliError):
    """Internal failure, e.g. a bundled meta-schema that cannot be loaded."""

    exit_code = ExitCode.SOFTWARE_ERROR

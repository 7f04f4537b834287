# topmark:header:start
#
#   project      : MQLSpec
#   file         : __main__.py
#   file_relpath : src/mqlspec/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Module entry point for running MQLSpec via ``python -m mqlspec``.

Delegates directly to :func:`mqlspec.cli.main.cli`, so there is a single
authoritative CLI entry point regardless of how MQLSpec is launched.

Examples:
    Validate the definitions corpus of the current project::

        python -m mqlspec validate definitions
"""

from __future__ import annotations

from mqlspec.cli.main import cli

if __name__ == "__main__":
    # We call the Click group directly
    cli()

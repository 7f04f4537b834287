# topmark:header:start
#
#   project      : MQLSpec
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""CLI test helpers for running MQLSpec in a controlled working directory.

The `run_cli` fixture changes the working directory to the test's `tmp_path`
before invoking the Click CLI, so the default definitions root and any
``pyproject.toml``/``mqlspec.toml`` are resolved against the temporary
directory and never against the developer's checkout.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner, Result

from mqlspec.cli.main import cli

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence
    from pathlib import Path


@pytest.fixture
def run_cli(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[..., Result]:
    """Return a function that invokes the CLI with `tmp_path` as the working directory.

    Example:
        ```python
        result = run_cli(["--no-color", "validate", "definitions"])
        assert result.exit_code == ExitCode.SUCCESS
        ```
    """
    monkeypatch.chdir(tmp_path)

    def _run(argv: Sequence[str]) -> Result:
        runner = CliRunner()
        return runner.invoke(cli, list(argv))

    return _run

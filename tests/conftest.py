# topmark:header:start
#
#   project      : MQLSpec
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the MQLSpec test suite.

Provides global logging setup and small factories for definition documents:

- `write_document` writes a YAML document (with its ``# $schema:`` directive)
  under a temporary definitions root.
- `operator_doc` returns a minimal valid operator mapping that tests tweak.
- `make_operator` parses such a mapping into an `OperatorDefinition`.

Notes:
    Build configs with `mqlspec.config.MutableConfig` and `freeze()` them;
    never mutate a frozen `Config` (use `Config.thaw()`).
"""

from __future__ import annotations

import copy
from collections.abc import Callable
from pathlib import Path
from typing import Any, cast

import pytest

from mqlspec.config import logging
from mqlspec.definitions.model import OperatorDefinition
from mqlspec.definitions.parser import parse_operator
from mqlspec.scalars.loader import dump

OPERATOR_DIRECTIVE = "# $schema: ../operator.json"

_MINIMAL_OPERATOR: dict[str, Any] = {
    "name": "$op",
    "link": "https://www.mongodb.com/docs/manual/reference/operator/aggregation/op/",
    "type": ["resolvesToAny"],
    "encode": "object",
    "description": "Test operator.",
    "minVersion": "5.0",
}


@pytest.fixture(autouse=True)
def silence_mqlspec_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure MQLSPEC_LOG_LEVEL exported in the developer's shell does not leak into tests."""
    monkeypatch.delenv("MQLSPEC_LOG_LEVEL", raising=False)


@pytest.hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE level for all tests so failures come with full context."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def definitions_root(tmp_path: Path) -> Path:
    """An empty definitions root under the test's temporary directory."""
    root: Path = tmp_path / "definitions"
    root.mkdir()
    return root


@pytest.fixture
def write_document(definitions_root: Path) -> Callable[..., Path]:
    """Return a factory that writes a definition document under `definitions_root`.

    The factory takes a relative path and either raw YAML ``text`` (written
    verbatim) or a ``data`` mapping (dumped with the BSON-aware dumper and
    prefixed with ``directive``).
    """

    def _write(
        relpath: str,
        data: Any = None,
        *,
        text: str | None = None,
        directive: str | None = OPERATOR_DIRECTIVE,
    ) -> Path:
        path: Path = definitions_root / relpath
        path.parent.mkdir(parents=True, exist_ok=True)
        if text is None:
            body: str = cast("str", dump(data))
            text = f"{directive}\n{body}" if directive is not None else body
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def operator_doc() -> Callable[..., dict[str, Any]]:
    """Return a factory for a minimal valid operator document with overrides applied."""

    def _make(**overrides: Any) -> dict[str, Any]:
        doc: dict[str, Any] = copy.deepcopy(_MINIMAL_OPERATOR)
        doc.update(overrides)
        return doc

    return _make


@pytest.fixture
def make_operator(
    operator_doc: Callable[..., dict[str, Any]],
) -> Callable[..., OperatorDefinition]:
    """Return a factory that parses an operator document built from overrides."""

    def _make(**overrides: Any) -> OperatorDefinition:
        return parse_operator(operator_doc(**overrides))

    return _make

# topmark:header:start
#
#   project      : MQLSpec
#   file         : noxfile.py
#   file_relpath : noxfile.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""MQLSpec project automation via Nox (using uv-backed virtualenvs).

Sessions:
  - `lint`: Ruff lint on the whole tree.
  - `lint_fixall`: Ruff lint autofix.
  - `format_check`: Verify formatting (ruff, mdformat).
  - `format`: Apply formatting (ruff, mdformat).
  - `qa`: Per-Python session that runs pytest and pyright.
  - `definitions`: Validate the sample definitions corpus with the CLI.
  - `package_check`: Build sdist/wheel and validate metadata (twine).
  - `release_check`: Pre-release gate (single Python).

Notes:
  - The default venv backend is `uv` (via `nox-uv`) for faster environment sync.
  - File lists are resolved from git via `git ls-files` to avoid scanning ignored files.

Common invocations:
  - `nox -s lint`
  - `nox -s qa` (runs for all configured Python versions)
  - `nox -s qa -- -m "not integration"`
"""

from __future__ import annotations

import pathlib
import sys
import warnings
from typing import TYPE_CHECKING, Any, cast

import nox

if TYPE_CHECKING:
    from collections.abc import Callable

# Handle TOML parsing based on Python version or available libraries

if sys.version_info >= (3, 11):
    # tomllib is available since Python version 3.11
    import tomllib

    _toml_loads = cast("Callable[[str], dict[str, Any]]", tomllib.loads)  # type: ignore[assignment]
else:
    import toml

    _toml_loads = cast("Callable[[str], dict[str, Any]]", toml.loads)  # type: ignore[assignment]

CURRENT_PYTHON_VERSION: str = f"{sys.version_info[0]}.{sys.version_info[1]}"

# --- Dynamic Python Version Resolution ---


def _parse_pyproject_toml() -> dict[str, Any]:
    """Parse `pyproject.toml` using stdlib TOML parsing.

    This runs at **noxfile import time**, so it must not depend on project
    runtime dependencies.

    Returns:
        dict[str, Any]: Parsed TOML document (top-level table).
    """
    path: pathlib.Path = pathlib.Path(__file__).parent / "pyproject.toml"
    if not path.exists():
        return {}
    try:
        return _toml_loads(path.read_text(encoding="utf-8"))
    except Exception:
        return {}


def get_supported_pythons() -> list[str]:
    """Resolve supported Python versions from `pyproject.toml` classifiers.

    Returns:
        list[str]: Supported versions like ["3.10", "3.11", ...], sorted.
    """
    project_any: Any = _parse_pyproject_toml().get("project")
    classifiers_any: Any = (
        cast("dict[str, Any]", project_any).get("classifiers")
        if isinstance(project_any, dict)
        else None
    )
    if not isinstance(classifiers_any, list):
        warnings.warn(
            "Could not find 'classifiers' in pyproject.toml. "
            f"Falling back to Python {CURRENT_PYTHON_VERSION}.",
            RuntimeWarning,
            stacklevel=2,
        )
        return [CURRENT_PYTHON_VERSION]

    prefix = "Programming Language :: Python :: "
    versions: list[str] = []
    for c in cast("list[str]", classifiers_any):
        if not c.startswith(prefix):
            continue
        parts: list[str] = c.removeprefix(prefix).strip().split(".")
        # Accept only X.Y numeric versions.
        if len(parts) != 2 or not all(p.isdigit() for p in parts):
            continue
        versions.append(f"{int(parts[0])}.{int(parts[1])}")

    def _key(s: str) -> tuple[int, int]:
        major_s, minor_s = s.split(".")
        return int(major_s), int(minor_s)

    return sorted(set(versions), key=_key) or [CURRENT_PYTHON_VERSION]


# Resolve versions once at startup
PYTHONS: list[str] = get_supported_pythons()

# Keep defaults fast; run QA (multi-Python) explicitly or in CI.
nox.options.sessions = ["lint", "format_check"]
nox.options.default_venv_backend = "uv"

MARKDOWN_PATTERNS = (":(glob)*.md",)

SAMPLE_DEFINITIONS = "definitions"


def get_git_files(session: nox.Session, *specs: str) -> list[str]:
    """Return tracked files matching the given git pathspecs.

    Args:
        session (nox.Session): Current nox session.
        *specs (str): One or more git pathspecs (e.g. `:(glob)*.md`).

    Returns:
        list[str]: Tracked file paths, one per line.
    """
    out = session.run("git", "ls-files", "--", *specs, silent=True, external=True)
    out_s: str = str(out).strip()
    return out_s.splitlines() if out_s else []


def _install_dev(session: nox.Session) -> None:
    session.install("-e", ".[test,dev]")


def _run_pyright(session: nox.Session) -> None:
    # Within a running session `session.python` is a concrete version string.
    py_ver = session.python
    if not isinstance(py_ver, str) or not py_ver:
        raise RuntimeError(f"Unexpected session.python value: {py_ver!r}")
    session.run("pyright", "--pythonversion", py_ver)


@nox.session
def lint(session: nox.Session) -> None:
    """Static analysis."""
    session.install("ruff")
    session.run("ruff", "check", ".")


@nox.session
def lint_fixall(session: nox.Session) -> None:
    """Apply Ruff lint autofixes."""
    session.install("ruff")
    session.run("ruff", "check", "--fix", ".")


@nox.session
def format_check(session: nox.Session) -> None:
    """Verify formatting without modifying files."""
    session.install("ruff", "mdformat")
    session.run("ruff", "format", "--check", ".")
    md_files: list[str] = get_git_files(session, *MARKDOWN_PATTERNS)
    if md_files:
        session.run("mdformat", "--check", *md_files)


@nox.session
def format(session: nox.Session) -> None:
    """Apply formatting."""
    session.install("ruff", "mdformat")
    session.run("ruff", "format", ".")
    md_files: list[str] = get_git_files(session, *MARKDOWN_PATTERNS)
    if md_files:
        session.run("mdformat", *md_files)


@nox.session(python=PYTHONS)
def qa(session: nox.Session) -> None:
    """Run tests + pyright (per Python version)."""
    session.log("Supported Python versions: " + ", ".join(PYTHONS))
    _install_dev(session)

    # Forward anything after `--` to pytest (e.g. `-m "not integration"`).
    session.run("pytest", "-q", "tests", *session.posargs)
    _run_pyright(session)


@nox.session(python=CURRENT_PYTHON_VERSION)
def definitions(session: nox.Session) -> None:
    """Validate the sample definitions corpus through the installed CLI."""
    session.install("-e", ".")
    session.run("mqlspec", "--no-color", "-v", "validate", SAMPLE_DEFINITIONS, *session.posargs)


@nox.session(python=CURRENT_PYTHON_VERSION)
def package_check(session: nox.Session) -> None:
    """Build sdist/wheel and validate distribution metadata (twine)."""
    session.install("build", "twine")

    # Ensure a clean dist/ to avoid stale artifacts influencing checks.
    session.run("python", "-c", "import shutil; shutil.rmtree('dist', ignore_errors=True)")

    session.run("python", "-m", "build", "--sdist", "--wheel")
    session.run("twine", "check", "dist/*")


@nox.session(python=CURRENT_PYTHON_VERSION)
def release_check(session: nox.Session) -> None:
    """Pre-release gate: lint, formatting, tests, type checks, sample corpus and packaging."""
    _install_dev(session)
    session.install("build", "twine", "mdformat")

    session.run("ruff", "format", "--check", ".")
    session.run("ruff", "check", ".")
    md_files: list[str] = get_git_files(session, *MARKDOWN_PATTERNS)
    if md_files:
        session.run("mdformat", "--check", *md_files)

    session.run("pytest", "-q", "tests", *session.posargs)
    _run_pyright(session)

    session.run("mqlspec", "--no-color", "validate", SAMPLE_DEFINITIONS)

    session.run("python", "-c", "import shutil; shutil.rmtree('dist', ignore_errors=True)")
    session.run("python", "-m", "build", "--sdist", "--wheel")
    session.run("twine", "check", "dist/*")

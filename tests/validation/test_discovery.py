# topmark:header:start
#
#   project      : MQLSpec
#   file         : test_discovery.py
#   file_relpath : tests/validation/test_discovery.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for definition document discovery."""

from __future__ import annotations

from typing import TYPE_CHECKING

from mqlspec.validation import find_definition_files

if TYPE_CHECKING:
    from pathlib import Path


def _touch(root: Path, *relpaths: str) -> None:
    for rel in relpaths:
        path: Path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")


def test_recursive_and_sorted(definitions_root: Path) -> None:
    _touch(definitions_root, "stage/match.yaml", "expression/abs.yaml", "README.md", "a.yml")
    found = find_definition_files(definitions_root)
    assert [p.relative_to(definitions_root).as_posix() for p in found] == [
        "expression/abs.yaml",
        "stage/match.yaml",
    ]


def test_custom_suffix(definitions_root: Path) -> None:
    _touch(definitions_root, "a.yml", "b.yaml")
    found = find_definition_files(definitions_root, suffix=".yml")
    assert [p.name for p in found] == ["a.yml"]


def test_exclude_patterns(definitions_root: Path) -> None:
    _touch(
        definitions_root,
        "drafts/new.yaml",
        "stage/match.yaml",
        "stage/_skip.yaml",
    )
    found = find_definition_files(definitions_root, exclude_patterns=["drafts/", "_*.yaml", " "])
    assert [p.relative_to(definitions_root).as_posix() for p in found] == ["stage/match.yaml"]


def test_empty_root(definitions_root: Path) -> None:
    assert find_definition_files(definitions_root) == []

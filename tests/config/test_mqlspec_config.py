# topmark:header:start
#
#   project      : MQLSpec
#   file         : test_mqlspec_config.py
#   file_relpath : tests/config/test_mqlspec_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for configuration layering (defaults, pyproject.toml, mqlspec.toml, CLI root)."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from typing import TYPE_CHECKING

import pytest

from mqlspec.config import MutableConfig
from mqlspec.config.io import get_list_value, load_toml_dict

if TYPE_CHECKING:
    from pathlib import Path


def test_defaults(tmp_path: Path) -> None:
    config = MutableConfig.from_defaults(tmp_path).freeze()
    assert config.definitions_root == (tmp_path / "definitions").resolve()
    assert config.suffix == ".yaml"
    assert config.exclude_patterns == ()
    assert config.max_workers == 1
    assert config.config_files == ()


def test_pyproject_then_mqlspec_toml(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "x"\n\n'
        "[tool.mqlspec.definitions]\n"
        'root = "defs"\n'
        'exclude = ["drafts/"]\n\n'
        "[tool.mqlspec.validation]\n"
        "max_workers = 2\n",
        encoding="utf-8",
    )
    (tmp_path / "mqlspec.toml").write_text(
        "[validation]\nmax_workers = 8\n",
        encoding="utf-8",
    )
    config = MutableConfig.load_merged(cwd=tmp_path).freeze()
    assert config.definitions_root == (tmp_path / "defs").resolve()
    assert config.exclude_patterns == ("drafts/",)
    assert config.max_workers == 8
    assert [p.name for p in config.config_files] == ["pyproject.toml", "mqlspec.toml"]


def test_cli_root_wins(tmp_path: Path) -> None:
    (tmp_path / "mqlspec.toml").write_text('[definitions]\nroot = "defs"\n', encoding="utf-8")
    config = MutableConfig.load_merged(cwd=tmp_path, definitions_root="other").freeze()
    assert config.definitions_root == (tmp_path / "other").resolve()


def test_invalid_values_are_ignored(tmp_path: Path) -> None:
    (tmp_path / "mqlspec.toml").write_text(
        '[definitions]\nsuffix = 3\n\n[validation]\nmax_workers = 0\n',
        encoding="utf-8",
    )
    config = MutableConfig.load_merged(cwd=tmp_path).freeze()
    assert config.suffix == ".yaml"
    assert config.max_workers == 1


def test_broken_toml_yields_empty_table(tmp_path: Path) -> None:
    path = tmp_path / "mqlspec.toml"
    path.write_text("[definitions\n", encoding="utf-8")
    assert load_toml_dict(path) == {}


def test_list_values_drop_non_strings() -> None:
    assert get_list_value({"exclude": ["a/", 3, "b/"]}, "exclude") == ["a/", "b/"]
    assert get_list_value({"exclude": "a/"}, "exclude") == []


def test_frozen_config_thaws(tmp_path: Path) -> None:
    config = MutableConfig.from_defaults(tmp_path).freeze()
    with pytest.raises(FrozenInstanceError):
        config.max_workers = 4  # type: ignore[misc]
    builder = config.thaw()
    builder.exclude_patterns.append("x/")
    assert config.exclude_patterns == ()
    assert builder.freeze().exclude_patterns == ("x/",)

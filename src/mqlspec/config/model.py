# topmark:header:start
#
#   project      : MQLSpec
#   file         : model.py
#   file_relpath : src/mqlspec/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model and merge policy.

This module defines:
    - `Config`: an immutable, runtime snapshot used by the validator.
    - `MutableConfig`: a mutable builder used during discovery/merge; it
      can be frozen into `Config`.

Layering (later wins):
    1. runtime defaults (`load_defaults_dict`)
    2. ``[tool.mqlspec]`` in ``pyproject.toml`` (current directory)
    3. ``mqlspec.toml`` (current directory)
    4. an explicit definitions root passed on the command line

Path semantics:
    - ``root`` declared in a config file is normalized against that file's directory.
    - A CLI root is normalized against the invocation CWD.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from mqlspec.config.io import (
    extract_tool_table,
    get_int_value_or_none,
    get_list_value,
    get_string_value_or_none,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
)
from mqlspec.config.keys import Toml
from mqlspec.config.logging import get_logger
from mqlspec.constants import MQLSPEC_TOML_NAME, PYPROJECT_TOML_NAME

if TYPE_CHECKING:
    from mqlspec.config.io import TomlTable
    from mqlspec.config.logging import MqlSpecLogger

logger: MqlSpecLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for MQLSpec.

    Attributes:
        definitions_root (Path): Directory scanned recursively for definition documents.
        suffix (str): File suffix of definition documents (``.yaml``).
        exclude_patterns (tuple[str, ...]): Gitignore-style patterns, relative to
            ``definitions_root``, of documents to skip.
        max_workers (int): Number of worker threads used for per-document validation.
        config_files (tuple[Path, ...]): Config files that contributed to this snapshot.
    """

    definitions_root: Path
    suffix: str
    exclude_patterns: tuple[str, ...]
    max_workers: int
    config_files: tuple[Path, ...] = ()

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this configuration."""
        return MutableConfig(
            definitions_root=self.definitions_root,
            suffix=self.suffix,
            exclude_patterns=list(self.exclude_patterns),
            max_workers=self.max_workers,
            config_files=list(self.config_files),
        )


@dataclass
class MutableConfig:
    """Mutable configuration builder used while merging configuration layers."""

    definitions_root: Path
    suffix: str
    exclude_patterns: list[str] = field(default_factory=lambda: [])
    max_workers: int = 1
    config_files: list[Path] = field(default_factory=lambda: [])

    @classmethod
    def from_defaults(cls, base_dir: Path | None = None) -> MutableConfig:
        """Build a configuration from the runtime defaults.

        Args:
            base_dir: Directory the default definitions root is relative to
                (defaults to the current working directory).

        Returns:
            A fresh builder holding the runtime defaults.
        """
        builder = cls(definitions_root=Path(), suffix="")
        builder.apply_toml(load_defaults_dict(), base_dir=base_dir or Path.cwd())
        return builder

    def apply_toml(self, table: TomlTable, *, base_dir: Path) -> MutableConfig:
        """Overlay the values of a parsed configuration table.

        Args:
            table: Parsed configuration (the ``[tool.mqlspec]`` table or ``mqlspec.toml``).
            base_dir: Directory relative paths in ``table`` are resolved against.

        Returns:
            ``self``, to allow chaining.
        """
        definitions: TomlTable = get_table_value(table, Toml.SECTION_DEFINITIONS)
        root: str | None = get_string_value_or_none(definitions, Toml.KEY_ROOT)
        if root is not None:
            self.definitions_root = (base_dir / root).resolve()
        suffix: str | None = get_string_value_or_none(definitions, Toml.KEY_SUFFIX)
        if suffix is not None:
            self.suffix = suffix
        if Toml.KEY_EXCLUDE in definitions:
            self.exclude_patterns = get_list_value(definitions, Toml.KEY_EXCLUDE)

        validation: TomlTable = get_table_value(table, Toml.SECTION_VALIDATION)
        max_workers: int | None = get_int_value_or_none(validation, Toml.KEY_MAX_WORKERS)
        if max_workers is not None:
            if max_workers < 1:
                logger.warning("Ignoring max_workers < 1: %d", max_workers)
            else:
                self.max_workers = max_workers
        return self

    def freeze(self) -> Config:
        """Return an immutable snapshot of this builder."""
        return Config(
            definitions_root=self.definitions_root,
            suffix=self.suffix,
            exclude_patterns=tuple(self.exclude_patterns),
            max_workers=self.max_workers,
            config_files=tuple(self.config_files),
        )

    @classmethod
    def load_merged(
        cls,
        *,
        cwd: Path | None = None,
        definitions_root: str | Path | None = None,
    ) -> MutableConfig:
        """Merge defaults, project configuration files and the CLI root.

        Args:
            cwd: Directory searched for ``pyproject.toml`` and ``mqlspec.toml``
                (defaults to the current working directory).
            definitions_root: Explicit definitions root; overrides every file layer.

        Returns:
            The merged builder.
        """
        base: Path = (cwd or Path.cwd()).resolve()
        builder: MutableConfig = cls.from_defaults(base)

        pyproject: Path = base / PYPROJECT_TOML_NAME
        if pyproject.is_file():
            tool_table: TomlTable = extract_tool_table(load_toml_dict(pyproject))
            if tool_table:
                logger.debug("Applying [tool.mqlspec] from %s", pyproject)
                builder.apply_toml(tool_table, base_dir=base)
                builder.config_files.append(pyproject)

        own: Path = base / MQLSPEC_TOML_NAME
        if own.is_file():
            logger.debug("Applying %s", own)
            builder.apply_toml(load_toml_dict(own), base_dir=base)
            builder.config_files.append(own)

        if definitions_root is not None:
            builder.definitions_root = (base / Path(definitions_root)).resolve()

        logger.debug("Effective definitions root: %s", builder.definitions_root)
        return builder

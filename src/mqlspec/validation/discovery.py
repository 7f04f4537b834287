# topmark:header:start
#
#   project      : MQLSpec
#   file         : discovery.py
#   file_relpath : src/mqlspec/validation/discovery.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Discover definition documents under a definitions root.

Documents are found recursively by suffix, filtered through gitignore-style
exclude patterns (relative to the root) and returned sorted, so reports are
stable across platforms and runs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from pathspec import PathSpec
from pathspec.patterns.gitwildmatch import GitWildMatchPattern

from mqlspec.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from mqlspec.config.logging import MqlSpecLogger

logger: MqlSpecLogger = get_logger(__name__)


def _rel_for_match(path: Path, base: Path) -> str:
    """Return a POSIX-style relative path (or absolute as fallback) for PathSpec matching."""
    try:
        return path.relative_to(base).as_posix()
    except ValueError:
        return path.as_posix()


def find_definition_files(
    root: Path,
    *,
    suffix: str = ".yaml",
    exclude_patterns: Iterable[str] = (),
) -> list[Path]:
    """Return every definition document under ``root``, sorted.

    Args:
        root: Definitions root directory.
        suffix: File suffix of definition documents.
        exclude_patterns: Gitignore-style patterns of documents to skip.

    Returns:
        Sorted list of document paths. Empty if ``root`` holds no documents.
    """
    candidates: list[Path] = [p for p in root.rglob(f"*{suffix}") if p.is_file()]

    patterns: list[str] = [p for p in exclude_patterns if p.strip()]
    if patterns:
        spec: PathSpec = PathSpec.from_lines(GitWildMatchPattern, patterns)
        kept: list[Path] = [p for p in candidates if not spec.match_file(_rel_for_match(p, root))]
        logger.debug("Excluded %d document(s) by pattern", len(candidates) - len(kept))
        candidates = kept

    files: list[Path] = sorted(candidates)
    logger.debug("Found %d definition document(s) under %s", len(files), root)
    return files

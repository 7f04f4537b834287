# topmark:header:start
#
#   project      : MQLSpec
#   file         : enum_mixins.py
#   file_relpath : src/mqlspec/core/enum_mixins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generic Enum utilities for MQLSpec (typing-friendly, UI-agnostic).

Provided:
    - ``KeyedStrEnum``: an Enum whose ``.value`` is the stable key used in
      definition documents, with a human label and optional parsing aliases.

Example:
    ```python
    class EncodeMode(KeyedStrEnum):
        SINGLE = ("single", "Unwrapped single value")

    assert EncodeMode.parse("Single") is EncodeMode.SINGLE
    assert EncodeMode.from_key("Single") is None
    assert EncodeMode.SINGLE.label == "Unwrapped single value"
    ```
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable

_KS = TypeVar("_KS", bound="KeyedStrEnum")


def _norm_token(s: str) -> str:
    """Normalize an identifier-like string to match document keys and aliases."""
    return s.strip().lower().replace("-", "_").replace(" ", "_")


class KeyedStrEnum(str, Enum):
    """Enum where `.value` is a stable machine key; metadata lives on attributes.

    Attributes:
        label (str): Human-readable label for the member.
        aliases (tuple[str, ...]): Alternative tokens accepted by `parse()`.
    """

    label: str
    aliases: tuple[str, ...]

    def __new__(
        cls: type[_KS],
        key: str,
        label: str,
        aliases: Iterable[str] = (),
    ) -> _KS:
        """Create a new KeyedStrEnum member with key, label, and optional aliases.

        Args:
            key (str): The stable machine key (stored as `.value`).
            label (str): The human-readable label for the enum member.
            aliases (Iterable[str]): Optional aliases for parsing. Defaults to empty.

        Returns:
            _KS: The newly created enum member.
        """
        obj: _KS = str.__new__(cls, key)
        obj._value_ = key
        obj.label = label
        obj.aliases = tuple(aliases)
        return obj

    @property
    def key(self) -> str:
        """Stable machine key (same as `.value`)."""
        return str(self.value)

    @classmethod
    def parse(cls: type[_KS], raw: str | None) -> _KS | None:
        """Parse a token into an enum member.

        Matches against the stable key (`.value`), the member name (`.name`) and
        any configured aliases. Matching is case-insensitive and normalizes
        '-', ' ' to '_'.
        """
        if raw is None:
            return None
        token: str = _norm_token(raw)

        for m in cls:
            if token == _norm_token(m.value):
                return m
            if token == _norm_token(m.name):
                return m
            for a in m.aliases:
                if token == _norm_token(a):
                    return m
        return None

    @classmethod
    def from_key(cls: type[_KS], raw: object) -> _KS | None:
        """Return the member whose key is exactly ``raw``, or ``None``.

        Unlike `parse()`, no case folding, name or alias matching is applied;
        definition documents must spell keys exactly.
        """
        for m in cls:
            if raw == m.value:
                return m
        return None

    @classmethod
    def keys(cls) -> tuple[str, ...]:
        """Return the stable keys of all members, in declaration order."""
        return tuple(m.key for m in cls)

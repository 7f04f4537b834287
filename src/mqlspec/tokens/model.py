# topmark:header:start
#
#   project      : MQLSpec
#   file         : model.py
#   file_relpath : src/mqlspec/tokens/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type tokens: the names operator definitions use in their ``type`` lists.

A token resolves to two things:

- the **native forms** a literal value may take (``accepted``), and
- the **capabilities** involved in substitution: the capability a token's own
  values provide (``conforms_to``) and the capabilities a slot of this token
  accepts in place of a literal (``accepts_capabilities``).

Capabilities are plain string tags (``"resolvesToInt"``, ``"fieldPath"``,
``"stage"``, ...). Conformance is stored as an explicit, already-closed tag set,
so consumers test set membership rather than walking a hierarchy.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from mqlspec.core.enum_mixins import KeyedStrEnum

if TYPE_CHECKING:
    from mqlspec.taxonomy.native import NativeForm


class TokenKind(KeyedStrEnum):
    """Kinds of type tokens."""

    BSON = ("bson", "BSON type")
    RESOLVES_TO = ("resolves_to", "Expression resolving to a BSON type")
    FIELD_PATH = ("field_path", "Field path resolving to a BSON type")
    CATEGORY = ("category", "Operator category or structured value")
    CLOSED_SET = ("closed_set", "Closed set of string values")


@dataclass(frozen=True, slots=True)
class TypeToken:
    """A resolved type token.

    Attributes:
        name: Token name as written in definitions (``"resolvesToInt"``).
        kind: Token kind.
        accepted: Native forms accepted as a literal, in preference order.
        bson_type: Referenced BSON type for BSON, resolvesTo and field-path tokens.
        capability: Capability provided by values built for this token, if any.
        accepts_capabilities: Capabilities accepted in place of a literal.
        conforms_to: Closed set of capabilities values of this token satisfy.
    """

    name: str
    kind: TokenKind
    accepted: tuple[NativeForm, ...]
    bson_type: str | None = None
    capability: str | None = None
    accepts_capabilities: frozenset[str] = frozenset()
    conforms_to: frozenset[str] = frozenset()

    def conforms(self, capability: str) -> bool:
        """Return True if values of this token satisfy ``capability``."""
        return capability in self.conforms_to

# topmark:header:start
#
#   project      : MQLSpec
#   file         : table.py
#   file_relpath : src/mqlspec/tokens/table.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type resolver: the table of every known type token.

The table is derived once from the BSON catalog and the built-in category
tokens:

- every catalog type ``T`` yields the BSON token ``T``, the expression token
  ``resolvesTo<T>`` (same native forms) and the field-path token
  ``<T>FieldPath`` (string only; ``fieldPath`` for ``any``);
- fixed numeric-promotion links connect the ``resolvesTo`` capabilities
  (long → int → number, decimal → double → number), and ``resolvesToAny``
  conforms to every other ``resolvesTo`` capability;
- category and closed-set tokens come from
  [`mqlspec.tokens.builtins`][mqlspec.tokens.builtins].

Notes:
    * `get_type_table()` builds the table lazily on first access and caches it.
      The table exposes `MappingProxyType` views only and is safe to share
      across threads.
    * Resolving an unknown token raises `TypeResolutionError`.
"""

from __future__ import annotations

from functools import lru_cache
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Final

from mqlspec.config.logging import get_logger
from mqlspec.constants import ROOT_LOCATION
from mqlspec.core.errors import TypeResolutionError
from mqlspec.taxonomy.catalog import ANY, BSON_TYPES
from mqlspec.taxonomy.native import NativeForm
from mqlspec.tokens.builtins import CATEGORY_TOKENS, CLOSED_SET_TOKENS
from mqlspec.tokens.model import TokenKind, TypeToken

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Mapping

    from mqlspec.config.logging import MqlSpecLogger

logger: MqlSpecLogger = get_logger(__name__)

EXPRESSION_CAPABILITY: Final[str] = "expression"
FIELD_PATH_CAPABILITY: Final[str] = "fieldPath"

# Numeric promotion: a narrower expression is usable wherever a wider one is expected.
CONFORMANCE_LINKS: Final[tuple[tuple[str, str], ...]] = (
    ("resolvesToLong", "resolvesToInt"),
    ("resolvesToInt", "resolvesToNumber"),
    ("resolvesToDecimal", "resolvesToDouble"),
    ("resolvesToDouble", "resolvesToNumber"),
)


def resolves_to_name(bson_type: str) -> str:
    """Return the ``resolvesTo`` token name for a BSON type (``int`` → ``resolvesToInt``)."""
    return "resolvesTo" + bson_type[:1].upper() + bson_type[1:]


def field_path_name(bson_type: str) -> str:
    """Return the field-path token name for a BSON type (``int`` → ``intFieldPath``).

    ``any`` is the only exception: its field-path token is plain ``fieldPath``.
    """
    if bson_type == ANY:
        return FIELD_PATH_CAPABILITY
    return bson_type + "FieldPath"


class TypeTable:
    """Read-only table of type tokens.

    Instances are immutable once built; use `get_type_table()` to obtain the
    shared instance.
    """

    __slots__ = ("_tokens",)

    def __init__(self, tokens: Iterable[TypeToken]) -> None:
        table: dict[str, TypeToken] = {}
        for token in tokens:
            if token.name in table:
                raise ValueError(f"Duplicate type token: {token.name}")
            table[token.name] = token
        self._tokens: Mapping[str, TypeToken] = MappingProxyType(table)

    def __contains__(self, name: object) -> bool:
        return name in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[TypeToken]:
        return iter(self._tokens.values())

    def names(self) -> tuple[str, ...]:
        """Return all token names (sorted)."""
        return tuple(sorted(self._tokens))

    def tokens(self) -> Mapping[str, TypeToken]:
        """Return a read-only mapping of token name → token."""
        return self._tokens

    def get(self, name: str) -> TypeToken | None:
        """Return a token by name, or ``None`` if unknown."""
        return self._tokens.get(name)

    def require(self, name: str, *, location: str = ROOT_LOCATION) -> TypeToken:
        """Return a token by name.

        Args:
            name: Token name.
            location: Structural location reported if the token is unknown.

        Returns:
            The token.

        Raises:
            TypeResolutionError: If ``name`` is not a known token.
        """
        token: TypeToken | None = self._tokens.get(name)
        if token is None:
            raise TypeResolutionError.unknown_token(name, self._tokens.keys(), location=location)
        return token

    def resolve(self, name: str) -> tuple[NativeForm, ...]:
        """Return the native forms accepted for ``name``.

        Raises:
            TypeResolutionError: If ``name`` is not a known token.
        """
        return self.require(name).accepted

    def conformances(self, name: str) -> frozenset[str]:
        """Return the capabilities values of ``name`` satisfy."""
        return self.require(name).conforms_to

    def conforms(self, name: str, capability: str) -> bool:
        """Return True if values of ``name`` satisfy ``capability``."""
        return self.require(name).conforms(capability)

    def accepts(self, name: str, value: Any) -> bool:
        """Return True if ``value`` is acceptable as a literal for ``name``."""
        return any(form.matches(value) for form in self.require(name).accepted)

    def is_assignable(self, source: str, target: str) -> bool:
        """Return True if a value built for ``source`` may be used where ``target`` is expected.

        A value is assignable when it provides a capability the target accepts
        (e.g. ``resolvesToLong`` into ``resolvesToNumber``), or when all of its
        literal forms are literal forms of the target (e.g. ``int`` into
        ``resolvesToNumber``).
        """
        src: TypeToken = self.require(source)
        dst: TypeToken = self.require(target)
        if src.conforms_to & dst.accepts_capabilities:
            return True
        return bool(src.accepted) and set(src.accepted) <= set(dst.accepted)

    def iter_kind(self, kind: TokenKind) -> Iterator[TypeToken]:
        """Iterate over the tokens of one kind, in table order."""
        return (t for t in self._tokens.values() if t.kind is kind)

    def acceptance_table(self) -> Mapping[str, tuple[str, ...]]:
        """Return token name → accepted native form keys, for consumers and reporting."""
        return MappingProxyType(
            {name: tuple(f.key for f in tok.accepted) for name, tok in sorted(self._tokens.items())}
        )


def _close(start: Iterable[str], edges: Mapping[str, frozenset[str]]) -> frozenset[str]:
    """Return ``start`` plus everything reachable from it through ``edges``."""
    seen: set[str] = set()
    stack: list[str] = list(start)
    while stack:
        cap: str = stack.pop()
        if cap in seen:
            continue
        seen.add(cap)
        stack.extend(edges.get(cap, frozenset()))
    return frozenset(seen)


def _resolves_to_edges() -> dict[str, frozenset[str]]:
    """Direct conformance edges between ``resolvesTo`` capabilities."""
    edges: dict[str, set[str]] = {
        resolves_to_name(t.name): {EXPRESSION_CAPABILITY} for t in BSON_TYPES
    }
    for narrow, wide in CONFORMANCE_LINKS:
        edges[narrow].add(wide)
    any_name: str = resolves_to_name(ANY)
    edges[any_name].update(name for name in edges if name != any_name)
    return {name: frozenset(targets) for name, targets in edges.items()}


def build_type_table() -> TypeTable:
    """Build a fresh `TypeTable` from the BSON catalog and the built-in tokens."""
    edges: dict[str, frozenset[str]] = _resolves_to_edges()
    tokens: list[TypeToken] = []

    for bson in BSON_TYPES:
        tokens.append(
            TypeToken(
                name=bson.name,
                kind=TokenKind.BSON,
                accepted=bson.forms,
                bson_type=bson.name,
            )
        )

        resolves_to: str = resolves_to_name(bson.name)
        tokens.append(
            TypeToken(
                name=resolves_to,
                kind=TokenKind.RESOLVES_TO,
                accepted=bson.forms,
                bson_type=bson.name,
                capability=resolves_to,
                accepts_capabilities=frozenset({resolves_to}),
                conforms_to=_close([resolves_to], edges),
            )
        )

        field_path: str = field_path_name(bson.name)
        tokens.append(
            TypeToken(
                name=field_path,
                kind=TokenKind.FIELD_PATH,
                accepted=(NativeForm.STRING,),
                bson_type=bson.name,
                capability=field_path,
                accepts_capabilities=frozenset({field_path}),
                conforms_to=frozenset({field_path, FIELD_PATH_CAPABILITY})
                | _close([resolves_to], edges),
            )
        )

    for spec in CATEGORY_TOKENS:
        accepts: set[str] = set(spec.extra_accepts)
        conforms: set[str] = set()
        if spec.capability is not None:
            accepts.add(spec.capability)
            conforms.add(spec.capability)
        tokens.append(
            TypeToken(
                name=spec.name,
                kind=TokenKind.CATEGORY,
                accepted=spec.forms,
                capability=spec.capability,
                accepts_capabilities=frozenset(accepts),
                conforms_to=frozenset(conforms) | _close(spec.implements, edges),
            )
        )

    for name in CLOSED_SET_TOKENS:
        tokens.append(
            TypeToken(name=name, kind=TokenKind.CLOSED_SET, accepted=(NativeForm.STRING,))
        )

    table = TypeTable(tokens)
    logger.debug("Built type table with %d tokens", len(table))
    return table


@lru_cache(maxsize=1)
def get_type_table() -> TypeTable:
    """Return the shared, lazily built type table."""
    return build_type_table()

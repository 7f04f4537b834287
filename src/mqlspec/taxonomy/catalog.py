# topmark:header:start
#
#   project      : MQLSpec
#   file         : catalog.py
#   file_relpath : src/mqlspec/taxonomy/catalog.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""The fixed catalog of BSON types.

See https://www.mongodb.com/docs/manual/reference/bson-types/ for the types
themselves. Deprecated types and min/max keys (which are not actual types) are
left out. Two synthetic unions complete the catalog:

- ``any`` accepts every BSON type. It deliberately lists concrete forms
  instead of a catch-all ``object`` marker so that downstream signatures stay
  precise.
- ``number`` accepts every numeric type.

The catalog is a module-level tuple of frozen dataclasses and is never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from mqlspec.taxonomy.native import NativeForm

if TYPE_CHECKING:
    from collections.abc import Mapping

ANY: Final[str] = "any"
NUMBER: Final[str] = "number"


@dataclass(frozen=True, slots=True)
class BsonType:
    """One entry of the BSON type catalog.

    Attributes:
        name: BSON type alias as used by ``$type`` (e.g. ``"objectId"``).
        forms: Accepted native representations, in preference order.
        families: Synthetic unions this type belongs to (e.g. ``{"number"}``).
        synthetic: True for the ``any`` and ``number`` unions.
    """

    name: str
    forms: tuple[NativeForm, ...]
    families: frozenset[str] = frozenset()
    synthetic: bool = False


_F = NativeForm

_OBJECT_FORMS: Final[tuple[NativeForm, ...]] = (_F.MAPPING, _F.RAW_DOCUMENT)
_ARRAY_FORMS: Final[tuple[NativeForm, ...]] = (_F.LIST,)
_ANY_FORMS: Final[tuple[NativeForm, ...]] = (
    _F.BOOL,
    _F.INT,
    _F.FLOAT,
    _F.STRING,
    _F.LIST,
    _F.NULL,
    _F.MAPPING,
    _F.BSON_VALUE,
    _F.DATE_LIKE,
)
_NUMBER_FAMILY: Final[frozenset[str]] = frozenset({NUMBER})

BSON_TYPES: Final[tuple[BsonType, ...]] = (
    BsonType("double", (_F.INT, _F.INT64, _F.FLOAT), _NUMBER_FAMILY),
    BsonType("string", (_F.STRING,)),
    BsonType("object", _OBJECT_FORMS),
    BsonType("array", _ARRAY_FORMS),
    BsonType("binData", (_F.BYTES, _F.BINARY)),
    BsonType("objectId", (_F.OBJECT_ID,)),
    BsonType("bool", (_F.BOOL,)),
    BsonType("date", (_F.UTC_DATETIME, _F.DATE_LIKE)),
    BsonType("null", (_F.NULL,)),
    BsonType("regex", (_F.REGEX,)),
    BsonType("javascript", (_F.STRING, _F.CODE)),
    BsonType("int", (_F.INT,), _NUMBER_FAMILY),
    BsonType("timestamp", (_F.INT, _F.TIMESTAMP)),
    BsonType("long", (_F.INT, _F.INT64), _NUMBER_FAMILY),
    BsonType("decimal", (_F.INT, _F.INT64, _F.FLOAT, _F.DECIMAL128), _NUMBER_FAMILY),
    BsonType(ANY, _ANY_FORMS, synthetic=True),
    BsonType(NUMBER, (_F.INT, _F.FLOAT, _F.INT64, _F.DECIMAL128), synthetic=True),
)

_BY_NAME: Final[Mapping[str, BsonType]] = MappingProxyType({t.name: t for t in BSON_TYPES})


def get_bson_type(name: str) -> BsonType | None:
    """Return the catalog entry for ``name``, or ``None`` if it is not a BSON type."""
    return _BY_NAME.get(name)


def bson_type_names(*, include_synthetic: bool = True) -> tuple[str, ...]:
    """Return catalog names in catalog order."""
    return tuple(t.name for t in BSON_TYPES if include_synthetic or not t.synthetic)


def object_forms() -> tuple[NativeForm, ...]:
    """Native forms of the ``object`` type (reused by document-shaped tokens)."""
    return _OBJECT_FORMS


def array_forms() -> tuple[NativeForm, ...]:
    """Native forms of the ``array`` type."""
    return _ARRAY_FORMS


def any_forms() -> tuple[NativeForm, ...]:
    """Native forms of the synthetic ``any`` type (reused by expression-like tokens)."""
    return _ANY_FORMS

# topmark:header:start
#
#   project      : MQLSpec
#   file         : builtins.py
#   file_relpath : src/mqlspec/tokens/builtins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in operator-category and closed-set tokens.

BSON, ``resolvesTo<T>`` and ``<T>FieldPath`` tokens are derived from the BSON
catalog by [`mqlspec.tokens.table`][mqlspec.tokens.table]. The tokens below
cannot be derived and are declared here. Most category tokens accept their own
capability (a builder object) plus the raw BSON forms that are also acceptable
as a literal, e.g. an accumulator may be written as a plain document.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

from mqlspec.taxonomy.catalog import any_forms, array_forms, object_forms
from mqlspec.taxonomy.native import NativeForm


@dataclass(frozen=True, slots=True)
class CategorySpec:
    """Declaration of a token that is not derived from the BSON catalog.

    Attributes:
        name: Token name.
        forms: Native forms accepted as a literal.
        capability: Capability provided (and accepted) by this token, if any.
        extra_accepts: Further capabilities accepted in place of a literal.
        implements: Capabilities that values of this token also satisfy.
    """

    name: str
    forms: tuple[NativeForm, ...]
    capability: str | None = None
    extra_accepts: tuple[str, ...] = ()
    implements: tuple[str, ...] = ()


_OBJ: Final[tuple[NativeForm, ...]] = object_forms()
_STR: Final[tuple[NativeForm, ...]] = (NativeForm.STRING,)

CATEGORY_TOKENS: Final[tuple[CategorySpec, ...]] = (
    CategorySpec("expression", any_forms(), capability="expression"),
    CategorySpec("fieldQuery", any_forms(), capability="fieldQuery"),
    CategorySpec("query", (NativeForm.MAPPING,), capability="query"),
    CategorySpec("accumulator", _OBJ, capability="accumulator"),
    CategorySpec("window", _OBJ, capability="window"),
    CategorySpec("stage", _OBJ, capability="stage"),
    CategorySpec("pipeline", array_forms(), capability="pipeline"),
    CategorySpec("variable", _STR, capability="variable", implements=("resolvesToAny",)),
    CategorySpec("searchOperator", _OBJ, capability="searchOperator"),
    CategorySpec("geometry", _OBJ, capability="geometry"),
    CategorySpec("switchBranch", _OBJ, capability="switchBranch"),
    CategorySpec("timeUnit", _STR, capability="timeUnit", extra_accepts=("resolvesToString",)),
    CategorySpec("sortSpec", (), capability="sortSpec"),
    # Structured values without a dedicated builder yet
    CategorySpec("outCollection", _OBJ),
    CategorySpec("range", _OBJ),
    CategorySpec("sortBy", _OBJ),
    CategorySpec("geoPoint", _OBJ),
    CategorySpec("searchPath", (NativeForm.STRING, NativeForm.LIST)),
    CategorySpec("searchScore", _OBJ),
)

CLOSED_SET_TOKENS: Final[tuple[str, ...]] = (
    "granularity",
    "fullDocument",
    "fullDocumentBeforeChange",
    "accumulatorPercentile",
    "whenMatched",
    "whenNotMatched",
)

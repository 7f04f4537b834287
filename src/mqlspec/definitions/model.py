# topmark:header:start
#
#   project      : MQLSpec
#   file         : model.py
#   file_relpath : src/mqlspec/definitions/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Immutable operator, argument and closed-set definitions.

These records are the consumer contract: they are produced once by
[`mqlspec.definitions.parser`][mqlspec.definitions.parser], checked once, and
then only read by the type resolver and the encoding resolver.

Document keys are camelCase (``variadicMin``, ``mergeObject``, ...); the
Python attributes are their snake_case counterparts.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from mqlspec.core.enum_mixins import KeyedStrEnum

if TYPE_CHECKING:
    from pathlib import Path


class EncodeMode(KeyedStrEnum):
    """How an operator's arguments are laid out in its body."""

    SINGLE = ("single", "Unwrapped value of the single argument")
    ARRAY = ("array", "Positional sequence in declaration order")
    OBJECT = ("object", "Mapping of argument name to value")


class VariadicMode(KeyedStrEnum):
    """How many values an argument takes, and in which container."""

    NONE = ("none", "Exactly one value")
    ARRAY = ("array", "Ordered sequence of values")
    OBJECT = ("object", "Named values (mapping)")


@dataclass(frozen=True, slots=True)
class ArgumentDefinition:
    """One declared operator argument.

    Attributes:
        name: Argument name (key in object encoding).
        type: Accepted type tokens, in preference order (never empty).
        description: Human description.
        optional: Whether the argument may be omitted.
        variadic: Variadic mode (``NONE`` for a plain argument).
        variadic_min: Minimum number of values for variadic arguments
            (``None`` for plain arguments).
        value_min: Inclusive lower bound for numeric literals.
        value_max: Inclusive upper bound for numeric literals.
        default: Value substituted when the argument is not supplied.
        has_default: Whether ``default`` is meaningful (a default may be ``None``).
        merge_object: Whether the argument's mapping is hoisted into the parent body.
    """

    name: str
    type: tuple[str, ...]
    description: str = ""
    optional: bool = False
    variadic: VariadicMode = VariadicMode.NONE
    variadic_min: int | None = None
    value_min: int | float | None = None
    value_max: int | float | None = None
    default: Any = None
    has_default: bool = False
    merge_object: bool = False

    @property
    def is_variadic(self) -> bool:
        """True for variadic=array and variadic=object arguments."""
        return self.variadic is not VariadicMode.NONE


@dataclass(frozen=True, slots=True)
class TestCase:
    """An example pipeline attached to an operator definition."""

    __test__ = False  # not a pytest class

    name: str
    link: str | None = None
    pipeline: tuple[Any, ...] = ()
    description: str | None = None


@dataclass(frozen=True, slots=True)
class OperatorDefinition:
    """A validated operator definition.

    Attributes:
        name: Operator name as written in a pipeline (``"$group"``).
        link: Reference documentation URL.
        types: Category and return-type tokens.
        encode: Encode mode.
        description: Human description.
        min_version: Minimum server version, recorded as a marker only.
        wrap_object: Whether the body is wrapped as ``{name: body}``.
        arguments: Declared arguments, in declaration order.
        tests: Example test cases.
        source: Document the definition was loaded from, if any.
    """

    name: str
    link: str
    types: tuple[str, ...]
    encode: EncodeMode
    description: str
    min_version: str
    wrap_object: bool = True
    arguments: tuple[ArgumentDefinition, ...] = ()
    tests: tuple[TestCase, ...] = ()
    source: Path | None = field(default=None, compare=False)

    def argument_names(self) -> tuple[str, ...]:
        """Return the argument names in declaration order (duplicates kept)."""
        return tuple(a.name for a in self.arguments)


@dataclass(frozen=True, slots=True)
class ClosedSetValue:
    """One legal value of a closed set."""

    name: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class ClosedSetDefinition:
    """A closed enumeration of string values (``granularity``, ``whenMatched``, ...)."""

    name: str
    description: str
    values: tuple[ClosedSetValue, ...]
    link: str | None = None
    source: Path | None = field(default=None, compare=False)

    def value_names(self) -> tuple[str, ...]:
        return tuple(v.name for v in self.values)

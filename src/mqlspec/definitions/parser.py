# topmark:header:start
#
#   project      : MQLSpec
#   file         : parser.py
#   file_relpath : src/mqlspec/definitions/parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Build definition records from decoded YAML documents, and check them.

Parsing is split in two steps:

1. ``parse_operator()`` / ``parse_closed_set()`` turn a decoded mapping into an
   immutable record, applying defaults (``wrapObject``, ``optional``,
   ``mergeObject``, ``variadicMin``). Malformed shapes raise ``StructuralError``.
2. ``check_operator()`` / ``check_closed_set()`` run the semantic checks the
   meta-schemas cannot express and *return* every problem found, so the
   validator can record all of them against the document.

``load_operator()`` chains both steps for consumers that want an exception
instead of a list.

Locations are JSON-pointer-like (``/arguments/1/type/0``).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from mqlspec.config.logging import get_logger
from mqlspec.core.errors import DefinitionError, StructuralError, TypeResolutionError
from mqlspec.definitions.model import (
    ArgumentDefinition,
    ClosedSetDefinition,
    ClosedSetValue,
    EncodeMode,
    OperatorDefinition,
    TestCase,
    VariadicMode,
)
from mqlspec.tokens.model import TokenKind
from mqlspec.tokens.table import get_type_table

if TYPE_CHECKING:
    from pathlib import Path

    from mqlspec.config.logging import MqlSpecLogger
    from mqlspec.tokens.table import TypeTable

logger: MqlSpecLogger = get_logger(__name__)

DEFAULT_VARIADIC_MIN: int = 1


def _require(data: Mapping[str, Any], key: str, location: str) -> Any:
    if key not in data:
        raise StructuralError(f"Missing required property '{key}'", location=location)
    return data[key]


def _string(value: Any, location: str) -> str:
    if not isinstance(value, str):
        raise StructuralError(f"Expected a string, got {type(value).__name__}", location=location)
    return value


def _string_list(value: Any, location: str) -> tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise StructuralError("Expected a list of strings", location=location)
    return tuple(_string(item, f"{location}/{i}") for i, item in enumerate(value))


def _bool(data: Mapping[str, Any], key: str, default: bool, location: str) -> bool:
    value: Any = data.get(key, default)
    if not isinstance(value, bool):
        raise StructuralError(f"Expected a boolean for '{key}'", location=f"{location}/{key}")
    return value


def _number_or_none(data: Mapping[str, Any], key: str, location: str) -> int | float | None:
    value: Any = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise StructuralError(f"Expected a number for '{key}'", location=f"{location}/{key}")
    return value


def _mapping_list(value: Any, location: str) -> list[Mapping[str, Any]]:
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise StructuralError("Expected a list", location=location)
    for i, item in enumerate(value):
        if not isinstance(item, Mapping):
            raise StructuralError("Expected a mapping", location=f"{location}/{i}")
    return list(value)


def parse_argument(data: Mapping[str, Any], *, location: str = "") -> ArgumentDefinition:
    """Build an `ArgumentDefinition` from its decoded mapping."""
    raw_variadic: Any = data.get("variadic")
    variadic: VariadicMode = VariadicMode.NONE
    if raw_variadic is not None:
        parsed: VariadicMode | None = VariadicMode.from_key(raw_variadic)
        if parsed is None or parsed is VariadicMode.NONE:
            raise StructuralError(
                f"Invalid variadic mode: {raw_variadic!r} (expected 'array' or 'object')",
                location=f"{location}/variadic",
            )
        variadic = parsed

    variadic_min: int | None = None
    if "variadicMin" in data:
        raw_min: Any = data["variadicMin"]
        if isinstance(raw_min, bool) or not isinstance(raw_min, int):
            raise StructuralError(
                "Expected an integer for 'variadicMin'", location=f"{location}/variadicMin"
            )
        variadic_min = raw_min
    elif variadic is not VariadicMode.NONE:
        variadic_min = DEFAULT_VARIADIC_MIN

    return ArgumentDefinition(
        name=_string(_require(data, "name", location), f"{location}/name"),
        type=_string_list(_require(data, "type", location), f"{location}/type"),
        description=str(data.get("description") or ""),
        optional=_bool(data, "optional", False, location),
        variadic=variadic,
        variadic_min=variadic_min,
        value_min=_number_or_none(data, "valueMin", location),
        value_max=_number_or_none(data, "valueMax", location),
        default=data.get("default"),
        has_default="default" in data,
        merge_object=_bool(data, "mergeObject", False, location),
    )


def parse_test_case(data: Mapping[str, Any], *, location: str = "") -> TestCase:
    """Build a `TestCase` from its decoded mapping."""
    pipeline: Any = data.get("pipeline") or ()
    if isinstance(pipeline, str) or not isinstance(pipeline, Sequence):
        raise StructuralError("Expected a list of stages", location=f"{location}/pipeline")
    return TestCase(
        name=_string(_require(data, "name", location), f"{location}/name"),
        link=data.get("link"),
        pipeline=tuple(pipeline),
        description=data.get("description"),
    )


def parse_operator(data: Any, *, source: Path | None = None) -> OperatorDefinition:
    """Build an `OperatorDefinition` from a decoded operator document.

    Args:
        data: Decoded YAML document.
        source: Originating file, kept on the record for reporting.

    Returns:
        The immutable definition, with defaults applied.

    Raises:
        StructuralError: If the document does not have the expected shape.
    """
    if not isinstance(data, Mapping):
        raise StructuralError("Operator definition must be a mapping")

    raw_encode: Any = _require(data, "encode", "")
    encode: EncodeMode | None = EncodeMode.from_key(raw_encode)
    if encode is None:
        raise StructuralError(
            f"Invalid encode mode: {raw_encode!r} (expected one of {', '.join(EncodeMode.keys())})",
            location="/encode",
        )

    min_version: Any = _require(data, "minVersion", "")
    arguments: list[ArgumentDefinition] = [
        parse_argument(item, location=f"/arguments/{i}")
        for i, item in enumerate(_mapping_list(data.get("arguments") or [], "/arguments"))
    ]
    tests: list[TestCase] = [
        parse_test_case(item, location=f"/tests/{i}")
        for i, item in enumerate(_mapping_list(data.get("tests") or [], "/tests"))
    ]

    definition = OperatorDefinition(
        name=_string(_require(data, "name", ""), "/name"),
        link=_string(_require(data, "link", ""), "/link"),
        types=_string_list(_require(data, "type", ""), "/type"),
        encode=encode,
        description=_string(_require(data, "description", ""), "/description"),
        min_version=str(min_version),
        wrap_object=_bool(data, "wrapObject", True, ""),
        arguments=tuple(arguments),
        tests=tuple(tests),
        source=source,
    )
    logger.trace("Parsed operator %s (%d arguments)", definition.name, len(arguments))
    return definition


def parse_closed_set(data: Any, *, source: Path | None = None) -> ClosedSetDefinition:
    """Build a `ClosedSetDefinition` from a decoded closed-set document.

    Raises:
        StructuralError: If the document does not have the expected shape.
    """
    if not isinstance(data, Mapping):
        raise StructuralError("Closed-set definition must be a mapping")
    values: list[ClosedSetValue] = []
    for i, item in enumerate(_mapping_list(_require(data, "values", ""), "/values")):
        values.append(
            ClosedSetValue(
                name=_string(_require(item, "name", f"/values/{i}"), f"/values/{i}/name"),
                description=str(item.get("description") or ""),
            )
        )
    return ClosedSetDefinition(
        name=_string(_require(data, "name", ""), "/name"),
        description=_string(_require(data, "description", ""), "/description"),
        values=tuple(values),
        link=data.get("link"),
        source=source,
    )


def _check_argument(
    definition: OperatorDefinition,
    arg: ArgumentDefinition,
    location: str,
    table: TypeTable,
) -> list[DefinitionError]:
    errors: list[DefinitionError] = []

    if not arg.type:
        errors.append(StructuralError("Argument type list is empty", location=f"{location}/type"))
    for j, token in enumerate(arg.type):
        if token not in table:
            errors.append(
                TypeResolutionError.unknown_token(
                    token, table.names(), location=f"{location}/type/{j}"
                )
            )

    if arg.merge_object and (
        arg.variadic is not VariadicMode.OBJECT or definition.encode is not EncodeMode.OBJECT
    ):
        errors.append(
            TypeResolutionError(
                f"Argument '{arg.name}': mergeObject requires variadic 'object' "
                f"and encode 'object' (got variadic '{arg.variadic.key}', "
                f"encode '{definition.encode.key}')",
                location=f"{location}/mergeObject",
            )
        )

    if arg.variadic_min is not None:
        if not arg.is_variadic:
            errors.append(
                StructuralError(
                    f"Argument '{arg.name}': variadicMin is only allowed on variadic arguments",
                    location=f"{location}/variadicMin",
                )
            )
        elif arg.variadic_min < 0:
            errors.append(
                StructuralError(
                    f"Argument '{arg.name}': variadicMin must not be negative",
                    location=f"{location}/variadicMin",
                )
            )

    if arg.value_min is not None and arg.value_max is not None and arg.value_min > arg.value_max:
        errors.append(
            StructuralError(
                f"Argument '{arg.name}': valueMin ({arg.value_min}) is greater "
                f"than valueMax ({arg.value_max})",
                location=f"{location}/valueMin",
            )
        )
    return errors


def check_operator(
    definition: OperatorDefinition,
    table: TypeTable | None = None,
) -> list[DefinitionError]:
    """Run the semantic checks on an operator definition.

    Args:
        definition: Parsed definition.
        table: Type table to resolve tokens against (the shared table by default).

    Returns:
        Every problem found, in document order. Empty when the definition is valid.
    """
    table = table or get_type_table()
    errors: list[DefinitionError] = []

    for i, token in enumerate(definition.types):
        if token not in table:
            errors.append(
                TypeResolutionError.unknown_token(token, table.names(), location=f"/type/{i}")
            )

    if definition.encode is EncodeMode.SINGLE and len(definition.arguments) != 1:
        errors.append(
            StructuralError(
                f"Encode 'single' requires exactly one argument, "
                f"found {len(definition.arguments)}",
                location="/arguments",
            )
        )

    seen: dict[str, ArgumentDefinition] = {}
    for i, arg in enumerate(definition.arguments):
        location: str = f"/arguments/{i}"
        errors.extend(_check_argument(definition, arg, location, table))
        previous: ArgumentDefinition | None = seen.get(arg.name)
        if previous is not None and not (previous.merge_object and arg.merge_object):
            errors.append(
                StructuralError(
                    f"Duplicate argument name '{arg.name}'", location=f"{location}/name"
                )
            )
        seen.setdefault(arg.name, arg)

    if errors:
        logger.debug("Operator %s: %d semantic error(s)", definition.name, len(errors))
    return errors


def check_closed_set(
    definition: ClosedSetDefinition,
    table: TypeTable | None = None,
) -> list[DefinitionError]:
    """Run the semantic checks on a closed-set definition."""
    table = table or get_type_table()
    errors: list[DefinitionError] = []

    token = table.get(definition.name)
    if token is None or token.kind is not TokenKind.CLOSED_SET:
        known: list[str] = [t.name for t in table.iter_kind(TokenKind.CLOSED_SET)]
        errors.append(
            TypeResolutionError.unknown_token(definition.name, known, location="/name")
        )

    seen: set[str] = set()
    for i, value in enumerate(definition.values):
        if value.name in seen:
            errors.append(
                StructuralError(
                    f"Duplicate closed-set value '{value.name}'", location=f"/values/{i}/name"
                )
            )
        seen.add(value.name)
    return errors


def load_operator(data: Any, *, source: Path | None = None) -> OperatorDefinition:
    """Parse and check an operator document, raising on the first problem.

    Raises:
        DefinitionError: If the document is malformed or fails a semantic check.
    """
    definition: OperatorDefinition = parse_operator(data, source=source)
    errors: list[DefinitionError] = check_operator(definition)
    if errors:
        error: DefinitionError = errors[0]
        raise error.at(source) if source is not None else error
    return definition

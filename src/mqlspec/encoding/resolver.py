# topmark:header:start
#
#   project      : MQLSpec
#   file         : resolver.py
#   file_relpath : src/mqlspec/encoding/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Encoding resolver: lay out supplied argument values as an operator body.

``encode()`` is a pure function of a definition and the supplied values. It
runs three passes:

1. **Substitution and checks.** Defaults fill unsupplied arguments; absent
   optional arguments are dropped. Each supplied value is checked against its
   argument's variadic mode, ``variadicMin`` and ``valueMin``/``valueMax``.
2. **Body layout** per encode mode (``single``, ``array`` or ``object``).
   For ``object`` encoding, ``mergeObject`` arguments are splatted into the
   body at their position; on key collision the later key wins.
3. **Wrapping.** With ``wrapObject`` (the default) the result is
   ``{operator_name: body}``; otherwise the bare body.

Example:
    ```python
    encode(group_definition, {"_id": "$cat", "field": {"total": {"$sum": 1}}})
    # {"$group": {"_id": "$cat", "total": {"$sum": 1}}}
    ```
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any

from mqlspec.config.logging import get_logger
from mqlspec.core.errors import EncodingError
from mqlspec.definitions.model import EncodeMode, VariadicMode

if TYPE_CHECKING:
    from mqlspec.config.logging import MqlSpecLogger
    from mqlspec.definitions.model import ArgumentDefinition, OperatorDefinition

logger: MqlSpecLogger = get_logger(__name__)


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _check_range(definition: OperatorDefinition, arg: ArgumentDefinition, value: Any) -> None:
    """Reject numeric literals outside ``[valueMin, valueMax]``.

    Non-numeric values (expressions, field paths, BSON wrappers) are not checked.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return
    if arg.value_min is not None and value < arg.value_min:
        raise EncodingError(
            definition.name,
            f"value {value!r} is below the minimum {arg.value_min!r}",
            argument=arg.name,
        )
    if arg.value_max is not None and value > arg.value_max:
        raise EncodingError(
            definition.name,
            f"value {value!r} is above the maximum {arg.value_max!r}",
            argument=arg.name,
        )


def _normalize(definition: OperatorDefinition, arg: ArgumentDefinition, value: Any) -> Any:
    """Check one supplied value and return it in its encoded container."""
    minimum: int = arg.variadic_min if arg.variadic_min is not None else 0

    if arg.variadic is VariadicMode.ARRAY:
        if not _is_sequence(value):
            raise EncodingError(
                definition.name,
                f"expects a sequence of values, got {type(value).__name__}",
                argument=arg.name,
            )
        items: list[Any] = list(value)
        if len(items) < minimum:
            raise EncodingError(
                definition.name,
                f"expects at least {minimum} value(s), got {len(items)}",
                argument=arg.name,
            )
        for item in items:
            _check_range(definition, arg, item)
        return items

    if arg.variadic is VariadicMode.OBJECT:
        if not isinstance(value, Mapping):
            raise EncodingError(
                definition.name,
                f"expects a mapping of named values, got {type(value).__name__}",
                argument=arg.name,
            )
        named: dict[str, Any] = dict(value)
        if len(named) < minimum:
            raise EncodingError(
                definition.name,
                f"expects at least {minimum} named value(s), got {len(named)}",
                argument=arg.name,
            )
        for item in named.values():
            _check_range(definition, arg, item)
        return named

    _check_range(definition, arg, value)
    return value


def resolve_values(
    definition: OperatorDefinition,
    values: Mapping[str, Any],
) -> list[tuple[ArgumentDefinition, Any] | None]:
    """Apply defaults and checks; return one slot per declared argument.

    A slot is ``None`` when the argument is optional, unsupplied and has no
    default.

    Raises:
        EncodingError: On an unknown or missing argument, or a value that does
            not fit its argument.
    """
    declared: set[str] = set(definition.argument_names())
    unknown: list[str] = [name for name in values if name not in declared]
    if unknown:
        raise EncodingError(
            definition.name,
            f"unknown argument(s): {', '.join(sorted(unknown))}",
            argument=unknown[0] if len(unknown) == 1 else None,
        )

    slots: list[tuple[ArgumentDefinition, Any] | None] = []
    for arg in definition.arguments:
        if arg.name in values:
            value: Any = values[arg.name]
        elif arg.has_default:
            value = arg.default
        elif arg.optional:
            slots.append(None)
            continue
        else:
            raise EncodingError(definition.name, "missing required argument", argument=arg.name)
        slots.append((arg, _normalize(definition, arg, value)))
    return slots


def _encode_single(
    definition: OperatorDefinition,
    slots: list[tuple[ArgumentDefinition, Any] | None],
) -> Any:
    if len(slots) != 1:
        raise EncodingError(
            definition.name,
            f"encode 'single' needs exactly one declared argument, found {len(slots)}",
        )
    slot = slots[0]
    if slot is None:
        raise EncodingError(
            definition.name,
            "encode 'single' needs a value",
            argument=definition.arguments[0].name,
        )
    return slot[1]


def _encode_array(
    definition: OperatorDefinition,
    slots: list[tuple[ArgumentDefinition, Any] | None],
) -> list[Any]:
    body: list[Any] = []
    hole: str | None = None
    for arg, slot in zip(definition.arguments, slots):
        if slot is None:
            hole = hole or arg.name
            continue
        if hole is not None:
            raise EncodingError(
                definition.name,
                f"optional argument '{hole}' must be supplied when a later argument is",
                argument=arg.name,
            )
        body.append(slot[1])
    return body


def _encode_object(slots: list[tuple[ArgumentDefinition, Any] | None]) -> dict[str, Any]:
    body: dict[str, Any] = {}
    for slot in slots:
        if slot is None:
            continue
        arg, value = slot
        if arg.merge_object:
            body.update(value)
        else:
            body[arg.name] = value
    return body


def encode(definition: OperatorDefinition, values: Mapping[str, Any]) -> Any:
    """Encode supplied argument values for an operator.

    Args:
        definition: Operator definition.
        values: Supplied argument name → value. Variadic=array values are
            sequences; variadic=object values are mappings.

    Returns:
        The encoded operator: ``{name: body}`` when ``wrapObject`` is set,
        otherwise the bare body.

    Raises:
        EncodingError: If the values cannot be encoded for this operator.
    """
    slots: list[tuple[ArgumentDefinition, Any] | None] = resolve_values(definition, values)

    body: Any
    if definition.encode is EncodeMode.SINGLE:
        body = _encode_single(definition, slots)
    elif definition.encode is EncodeMode.ARRAY:
        body = _encode_array(definition, slots)
    else:
        body = _encode_object(slots)

    logger.trace("Encoded %s (%s)", definition.name, definition.encode.key)
    if definition.wrap_object:
        return {definition.name: body}
    return body

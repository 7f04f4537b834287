# topmark:header:start
#
#   project      : MQLSpec
#   file         : test_definition_parser.py
#   file_relpath : tests/definitions/test_definition_parser.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for definition parsing and the semantic operator checks."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from mqlspec.core.errors import DefinitionError, StructuralError, TypeResolutionError
from mqlspec.definitions import (
    EncodeMode,
    VariadicMode,
    check_closed_set,
    check_operator,
    load_operator,
    parse_closed_set,
    parse_operator,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from mqlspec.definitions import OperatorDefinition


def _locations(errors: list[DefinitionError]) -> list[str]:
    return [e.location for e in errors]


def test_defaults_are_applied(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(arguments=[{"name": "input", "type": ["resolvesToArray"]}])
    assert op.encode is EncodeMode.OBJECT
    assert op.wrap_object is True
    arg = op.arguments[0]
    assert arg.optional is False
    assert arg.merge_object is False
    assert arg.variadic is VariadicMode.NONE
    assert arg.variadic_min is None
    assert arg.has_default is False


def test_variadic_min_defaults_to_one(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(
        arguments=[{"name": "expression", "type": ["expression"], "variadic": "array"}]
    )
    assert op.arguments[0].is_variadic
    assert op.arguments[0].variadic_min == 1


def test_min_version_is_kept_as_text(make_operator: Callable[..., OperatorDefinition]) -> None:
    assert make_operator(minVersion="7.0").min_version == "7.0"


def test_records_are_immutable(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator()
    with pytest.raises(FrozenInstanceError):
        op.name = "$other"  # type: ignore[misc]


def test_source_does_not_affect_equality(operator_doc: Callable[..., dict[str, Any]]) -> None:
    doc = operator_doc()
    assert parse_operator(doc, source=Path("a.yaml")) == parse_operator(doc)


def test_tests_are_parsed(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(tests=[{"name": "Example", "pipeline": [{"$match": {"a": 1}}]}])
    assert op.tests[0].name == "Example"
    assert op.tests[0].pipeline == ({"$match": {"a": 1}},)


@pytest.mark.parametrize(
    ("overrides", "location"),
    [
        ({"encode": "nested"}, "/encode"),
        ({"encode": "Single"}, "/encode"),
        ({"encode": "SINGLE"}, "/encode"),
        ({"type": "resolvesToAny"}, "/type"),
        (
            {"arguments": [{"name": "a", "type": ["int"], "variadic": "set"}]},
            "/arguments/0/variadic",
        ),
        (
            {"arguments": [{"name": "a", "type": ["int"], "variadic": "Array"}]},
            "/arguments/0/variadic",
        ),
        (
            {"arguments": [{"name": "a", "type": ["int"], "optional": "yes"}]},
            "/arguments/0/optional",
        ),
        ({"arguments": ["a"]}, "/arguments/0"),
    ],
)
def test_malformed_shapes_raise_structural_errors(
    operator_doc: Callable[..., dict[str, Any]],
    overrides: dict[str, Any],
    location: str,
) -> None:
    with pytest.raises(StructuralError) as excinfo:
        parse_operator(operator_doc(**overrides))
    assert excinfo.value.location == location


def test_missing_property_is_reported_at_root(operator_doc: Callable[..., dict[str, Any]]) -> None:
    doc = operator_doc()
    del doc["minVersion"]
    with pytest.raises(StructuralError, match="minVersion") as excinfo:
        parse_operator(doc)
    assert excinfo.value.location == "<root>"


def test_valid_operator_has_no_errors(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(
        arguments=[
            {"name": "date", "type": ["resolvesToDate"]},
            {"name": "unit", "type": ["timeUnit"], "optional": True},
        ]
    )
    assert check_operator(op) == []


def test_unknown_tokens_are_located(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(
        type=["resolvesToAny", "resolvesToNothing"],
        arguments=[{"name": "a", "type": ["int", "integr"]}],
    )
    errors = check_operator(op)
    assert _locations(errors) == ["/type/1", "/arguments/0/type/1"]
    assert all(isinstance(e, TypeResolutionError) for e in errors)


def test_merge_object_requires_object_variadic_and_encoding(
    make_operator: Callable[..., OperatorDefinition],
) -> None:
    op = make_operator(
        encode="array",
        arguments=[{"name": "field", "type": ["expression"], "mergeObject": True}],
    )
    errors = check_operator(op)
    assert _locations(errors) == ["/arguments/0/mergeObject"]
    assert isinstance(errors[0], TypeResolutionError)


def test_single_encoding_requires_one_argument(
    make_operator: Callable[..., OperatorDefinition],
) -> None:
    op = make_operator(
        encode="single",
        arguments=[{"name": "a", "type": ["int"]}, {"name": "b", "type": ["int"]}],
    )
    assert _locations(check_operator(op)) == ["/arguments"]


def test_argument_constraints(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(
        arguments=[
            {"name": "a", "type": ["int"], "variadicMin": 2},
            {"name": "b", "type": ["int"], "valueMin": 5, "valueMax": 1},
            {"name": "c", "type": []},
        ]
    )
    assert _locations(check_operator(op)) == [
        "/arguments/0/variadicMin",
        "/arguments/1/valueMin",
        "/arguments/2/type",
    ]


def test_duplicate_names(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(arguments=[{"name": "a", "type": ["int"]}, {"name": "a", "type": ["int"]}])
    assert _locations(check_operator(op)) == ["/arguments/1/name"]


def test_duplicate_merge_object_names_are_allowed(
    make_operator: Callable[..., OperatorDefinition],
) -> None:
    merged = {"name": "field", "type": ["expression"], "variadic": "object", "mergeObject": True}
    op = make_operator(arguments=[merged, dict(merged)])
    assert check_operator(op) == []


def test_load_operator_raises_first_error(operator_doc: Callable[..., dict[str, Any]]) -> None:
    doc = operator_doc(type=["bogus"])
    with pytest.raises(TypeResolutionError) as excinfo:
        load_operator(doc, source=Path("op.yaml"))
    assert excinfo.value.document == Path("op.yaml")
    assert excinfo.value.location == "/type/0"


def test_closed_set() -> None:
    definition = parse_closed_set(
        {
            "name": "granularity",
            "description": "Preferred number series.",
            "values": [{"name": "R5"}, {"name": "R10"}, {"name": "R5"}],
        }
    )
    assert definition.value_names() == ("R5", "R10", "R5")
    assert _locations(check_closed_set(definition)) == ["/values/2/name"]


def test_closed_set_name_must_be_known() -> None:
    definition = parse_closed_set({"name": "colour", "description": "x", "values": []})
    errors = check_closed_set(definition)
    assert _locations(errors) == ["/name"]

# topmark:header:start
#
#   project      : MQLSpec
#   file         : test_encode.py
#   file_relpath : tests/encoding/test_encode.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the encoding resolver."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from bson.int64 import Int64

from mqlspec.core.errors import EncodingError
from mqlspec.encoding import encode, resolve_values

if TYPE_CHECKING:
    from collections.abc import Callable

    from mqlspec.definitions import OperatorDefinition


def test_object_encoding(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(
        name="$opName",
        arguments=[{"name": "a", "type": ["int"]}, {"name": "b", "type": ["int"]}],
    )
    assert encode(op, {"a": 1, "b": 2}) == {"$opName": {"a": 1, "b": 2}}


def test_object_encoding_follows_declaration_order(
    make_operator: Callable[..., OperatorDefinition],
) -> None:
    op = make_operator(arguments=[{"name": "a", "type": ["int"]}, {"name": "b", "type": ["int"]}])
    assert list(encode(op, {"b": 2, "a": 1})["$op"]) == ["a", "b"]


def test_merge_object_splats_fields(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(
        name="$group",
        arguments=[
            {"name": "_id", "type": ["expression"]},
            {
                "name": "field",
                "type": ["accumulator"],
                "variadic": "object",
                "mergeObject": True,
            },
        ],
    )
    assert encode(op, {"_id": "$cat", "field": {"total": {"$sum": 1}}}) == {
        "$group": {"_id": "$cat", "total": {"$sum": 1}}
    }


def test_merge_object_collision_last_key_wins(
    make_operator: Callable[..., OperatorDefinition],
) -> None:
    op = make_operator(
        arguments=[
            {"name": "a", "type": ["int"]},
            {"name": "field", "type": ["expression"], "variadic": "object", "mergeObject": True},
        ]
    )
    assert encode(op, {"a": 1, "field": {"a": 2}}) == {"$op": {"a": 2}}


def test_without_wrap_object(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(
        name="$geometry",
        wrapObject=False,
        arguments=[
            {"name": "type", "type": ["string"]},
            {"name": "coordinates", "type": ["array"]},
        ],
    )
    assert encode(op, {"type": "Point", "coordinates": [0, 0]}) == {
        "type": "Point",
        "coordinates": [0, 0],
    }


def test_single_variadic_array(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(
        name="$and",
        encode="single",
        arguments=[{"name": "expression", "type": ["expression"], "variadic": "array"}],
    )
    assert encode(op, {"expression": ("v1", "v2", "v3")}) == {"$and": ["v1", "v2", "v3"]}


def test_single_plain_value(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(
        name="$abs", encode="single", arguments=[{"name": "value", "type": ["resolvesToNumber"]}]
    )
    assert encode(op, {"value": Int64(-1)}) == {"$abs": Int64(-1)}


def test_array_encoding_drops_trailing_optional(
    make_operator: Callable[..., OperatorDefinition],
) -> None:
    op = make_operator(
        name="$round",
        encode="array",
        arguments=[
            {"name": "number", "type": ["resolvesToNumber"]},
            {"name": "place", "type": ["resolvesToInt"], "optional": True},
        ],
    )
    assert encode(op, {"number": 1.25}) == {"$round": [1.25]}
    assert encode(op, {"number": 1.25, "place": 1}) == {"$round": [1.25, 1]}


def test_array_encoding_rejects_holes(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(
        encode="array",
        arguments=[
            {"name": "a", "type": ["int"]},
            {"name": "b", "type": ["int"], "optional": True},
            {"name": "c", "type": ["int"], "optional": True},
        ],
    )
    with pytest.raises(EncodingError, match="'b' must be supplied") as excinfo:
        encode(op, {"a": 1, "c": 3})
    assert excinfo.value.argument == "c"


def test_defaults_fill_absent_arguments(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(
        arguments=[
            {"name": "input", "type": ["string"]},
            {"name": "chars", "type": ["string"], "optional": True, "default": " "},
        ]
    )
    assert encode(op, {"input": "x"}) == {"$op": {"input": "x", "chars": " "}}


def test_absent_optional_is_omitted(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(
        arguments=[
            {"name": "input", "type": ["string"]},
            {"name": "chars", "type": ["string"], "optional": True},
        ]
    )
    assert encode(op, {"input": "x"}) == {"$op": {"input": "x"}}
    assert resolve_values(op, {"input": "x"})[1] is None


def test_missing_required_argument(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(arguments=[{"name": "input", "type": ["string"]}])
    with pytest.raises(EncodingError, match="missing required argument") as excinfo:
        encode(op, {})
    assert excinfo.value.operator == "$op"
    assert excinfo.value.argument == "input"


def test_unknown_argument(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(arguments=[{"name": "input", "type": ["string"]}])
    with pytest.raises(EncodingError, match="unknown argument"):
        encode(op, {"input": "x", "extra": 1})


def test_variadic_min_is_enforced(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(
        arguments=[{"name": "expr", "type": ["expression"], "variadic": "array", "variadicMin": 2}]
    )
    with pytest.raises(EncodingError, match="at least 2"):
        encode(op, {"expr": [1]})
    assert encode(op, {"expr": [1, 2]}) == {"$op": {"expr": [1, 2]}}


@pytest.mark.parametrize(
    ("variadic", "value", "message"),
    [
        ("array", {"a": 1}, "sequence"),
        ("array", "abc", "sequence"),
        ("object", [1, 2], "mapping"),
    ],
)
def test_variadic_container_shapes(
    make_operator: Callable[..., OperatorDefinition],
    variadic: str,
    value: object,
    message: str,
) -> None:
    op = make_operator(arguments=[{"name": "v", "type": ["expression"], "variadic": variadic}])
    with pytest.raises(EncodingError, match=message):
        encode(op, {"v": value})


def test_value_range(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(
        arguments=[{"name": "p", "type": ["resolvesToDouble"], "valueMin": 0, "valueMax": 1}]
    )
    assert encode(op, {"p": 0.5}) == {"$op": {"p": 0.5}}
    assert encode(op, {"p": "$field"}) == {"$op": {"p": "$field"}}
    with pytest.raises(EncodingError, match="below the minimum"):
        encode(op, {"p": -0.1})
    with pytest.raises(EncodingError, match="above the maximum"):
        encode(op, {"p": 2})


def test_encoding_error_is_a_value_error(make_operator: Callable[..., OperatorDefinition]) -> None:
    op = make_operator(arguments=[{"name": "input", "type": ["string"]}])
    with pytest.raises(ValueError):
        encode(op, {})

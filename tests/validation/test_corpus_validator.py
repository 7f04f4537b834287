# topmark:header:start
#
#   project      : MQLSpec
#   file         : test_corpus_validator.py
#   file_relpath : tests/validation/test_corpus_validator.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for document and corpus validation.

Each invalid document below is built to produce exactly one failure, so the
tests can assert on the exact failure list.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

import pytest

from mqlspec.config import MutableConfig
from mqlspec.core.exit_codes import ExitCode
from mqlspec.definitions import ClosedSetDefinition, OperatorDefinition
from mqlspec.validation import validate_corpus, validate_document
from mqlspec.validation.validator import json_pointer

if TYPE_CHECKING:
    from collections.abc import Callable


def test_json_pointer() -> None:
    assert json_pointer([]) == "<root>"
    assert json_pointer(["arguments", 0, "type"]) == "/arguments/0/type"
    assert json_pointer(["a/b", "c~d"]) == "/a~1b/c~0d"


def test_valid_operator(
    write_document: Callable[..., Path],
    operator_doc: Callable[..., dict[str, Any]],
) -> None:
    path = write_document(
        "expression/op.yaml",
        operator_doc(arguments=[{"name": "input", "type": ["resolvesToString"]}]),
    )
    result = validate_document(path)
    assert result.ok
    assert result.schema_name == "operator.json"
    assert isinstance(result.definition, OperatorDefinition)
    assert result.definition.source == path


def test_valid_closed_set(write_document: Callable[..., Path]) -> None:
    path = write_document(
        "type/granularity.yaml",
        {"name": "granularity", "description": "Number series.", "values": [{"name": "R5"}]},
        directive="# $schema: ../../type.json",
    )
    result = validate_document(path)
    assert result.ok
    assert isinstance(result.definition, ClosedSetDefinition)


def test_missing_directive(
    write_document: Callable[..., Path],
    operator_doc: Callable[..., dict[str, Any]],
) -> None:
    path = write_document("op.yaml", operator_doc(), directive=None)
    failures = validate_document(path).failures()
    assert len(failures) == 1
    assert failures[0].kind == "schema_reference"
    assert failures[0].location == "<root>"
    assert failures[0].message.startswith(f"Missing schema comment in {path}.")


def test_unknown_schema(
    write_document: Callable[..., Path],
    operator_doc: Callable[..., dict[str, Any]],
) -> None:
    path = write_document("op.yaml", operator_doc(), directive="# $schema: ../query.json")
    failures = validate_document(path).failures()
    assert [f.message for f in failures] == [f'Schema "query.json" not found for {path}']


def test_structural_errors_are_all_collected(
    write_document: Callable[..., Path],
    operator_doc: Callable[..., dict[str, Any]],
) -> None:
    doc = operator_doc(encode="nested", arguments=[{"name": "input"}])
    del doc["minVersion"]
    failures = validate_document(write_document("op.yaml", doc)).failures()
    assert sorted(f.location for f in failures) == ["/arguments/0", "/encode", "<root>"]
    assert {f.kind for f in failures} == {"structural"}


def test_malformed_link_is_a_structural_error(
    write_document: Callable[..., Path],
    operator_doc: Callable[..., dict[str, Any]],
) -> None:
    path = write_document("op.yaml", operator_doc(link="not a uri at all"))
    failures = validate_document(path).failures()
    assert [(f.kind, f.location) for f in failures] == [("structural", "/link")]
    assert "uri" in failures[0].message


def test_semantic_errors_are_located(
    write_document: Callable[..., Path],
    operator_doc: Callable[..., dict[str, Any]],
) -> None:
    doc = operator_doc(arguments=[{"name": "input", "type": ["resolvesToStrin"]}])
    result = validate_document(write_document("op.yaml", doc))
    failures = result.failures()
    assert [(f.kind, f.location) for f in failures] == [
        ("type_resolution", "/arguments/0/type/0")
    ]
    assert "resolvesToString" in failures[0].message
    assert result.definition is None


def test_scalar_decode_error(write_document: Callable[..., Path]) -> None:
    text = (
        "# $schema: ../operator.json\n"
        "name: $op\n"
        "link: https://www.mongodb.com/docs/manual/\n"
        "type: [resolvesToAny]\n"
        "encode: object\n"
        "description: x\n"
        "minVersion: '5.0'\n"
        "tests:\n"
        "  - name: bad\n"
        "    pipeline:\n"
        "      - $limit: !bson_int64 ten\n"
    )
    failures = validate_document(write_document("op.yaml", text=text)).failures()
    assert [(f.kind, f.location) for f in failures] == [("scalar_decode", "line 11, column 17")]


def test_yaml_syntax_error(write_document: Callable[..., Path]) -> None:
    path = write_document("op.yaml", text="# $schema: ../operator.json\nname: [unclosed\n")
    failures = validate_document(path).failures()
    assert [f.kind for f in failures] == ["yaml"]


def test_bson_values_in_tests_pass_the_schema(
    write_document: Callable[..., Path],
    operator_doc: Callable[..., dict[str, Any]],
) -> None:
    text = (
        "# $schema: ../operator.json\n"
        "name: $op\n"
        "link: https://www.mongodb.com/docs/manual/\n"
        "type: [resolvesToAny]\n"
        "encode: object\n"
        "description: x\n"
        "minVersion: '5.0'\n"
        "tests:\n"
        "  - name: typed\n"
        "    pipeline:\n"
        "      - $match:\n"
        "          at: !bson_utcdatetime 2024-01-01T00:00:00Z\n"
        "          qty: !bson_int64 10\n"
        "          price: !bson_decimal128 '1.99'\n"
    )
    assert validate_document(write_document("op.yaml", text=text)).ok


@pytest.mark.integration
def test_corpus_report(
    definitions_root: Path,
    write_document: Callable[..., Path],
    operator_doc: Callable[..., dict[str, Any]],
) -> None:
    write_document("a/valid.yaml", operator_doc())
    write_document("b/no_directive.yaml", operator_doc(), directive=None)
    missing = operator_doc()
    del missing["minVersion"]
    write_document("c/no_min_version.yaml", missing)

    report = validate_corpus(definitions_root)

    assert report.documents == 3
    assert not report.ok
    assert report.exit_code is ExitCode.FAILURE
    assert [f.document.name for f in report.failures] == [
        "no_directive.yaml",
        "no_min_version.yaml",
    ]
    assert len(report.operators()) == 1
    lines = report.format_failures(relative=True)
    assert lines[1] == "c/no_min_version.yaml: <root>: 'minVersion' is a required property"


@pytest.mark.integration
def test_corpus_threads_match_sequential(
    definitions_root: Path,
    write_document: Callable[..., Path],
    operator_doc: Callable[..., dict[str, Any]],
) -> None:
    for i in range(6):
        types = [f"bogus{i}"] if i % 2 else ["expression"]
        write_document(f"op{i}.yaml", operator_doc(type=types))
    sequential = validate_corpus(definitions_root, max_workers=1)
    threaded = validate_corpus(definitions_root, max_workers=4)
    assert sequential.failures == threaded.failures
    assert len(threaded.failures) == 3


def test_empty_corpus_fails(definitions_root: Path) -> None:
    report = validate_corpus(definitions_root)
    assert report.documents == 0
    assert report.exit_code is ExitCode.FAILURE
    assert report.failures[0].message == f"No YAML files found under {definitions_root.resolve()}/"


def test_missing_root_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        validate_corpus(tmp_path / "nope")


def test_config_excludes_documents(
    definitions_root: Path,
    write_document: Callable[..., Path],
    operator_doc: Callable[..., dict[str, Any]],
) -> None:
    write_document("ok.yaml", operator_doc())
    write_document("drafts/broken.yaml", text="not a directive\n")
    builder = MutableConfig.from_defaults(definitions_root.parent)
    builder.definitions_root = definitions_root
    builder.exclude_patterns.append("drafts/")
    report = validate_corpus(config=builder.freeze())
    assert report.ok
    assert report.documents == 1


@pytest.mark.integration
def test_bundled_sample_corpus_is_valid() -> None:
    root: Path = Path(__file__).resolve().parents[2] / "definitions"
    report = validate_corpus(root)
    assert report.failures == []
    assert {op.name for op in report.operators()} >= {"$abs", "$add", "$group", "$regex"}
    assert [cs.name for cs in report.closed_sets()] == ["granularity"]

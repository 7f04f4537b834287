# topmark:header:start
#
#   project      : MQLSpec
#   file         : test_bson_scalars.py
#   file_relpath : tests/scalars/test_bson_scalars.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the ``!bson_*`` YAML scalar tags."""

from __future__ import annotations

import datetime
import re
import uuid

import pytest
from bson.binary import Binary
from bson.datetime_ms import DatetimeMS
from bson.decimal128 import Decimal128
from bson.int64 import Int64
from bson.objectid import ObjectId
from bson.regex import Regex
from hypothesis import given
from hypothesis import strategies as st

from mqlspec.core.errors import ScalarDecodeError
from mqlspec.scalars import dump, get_codec, load
from mqlspec.scalars.codecs import decode_datetime, encode_datetime, regex_flags_to_str

NUMERIC_DOC = """\
plain: 5
long: !bson_int64 5
decimal: !bson_decimal128 5
precise: !bson_decimal128 0.1
"""


def test_int64_and_decimal128_stay_distinct() -> None:
    doc = load(NUMERIC_DOC)
    assert type(doc["plain"]) is int
    assert type(doc["long"]) is Int64
    assert type(doc["decimal"]) is Decimal128
    assert doc["precise"] == Decimal128("0.1")

    again = load(dump(doc))
    assert again == doc
    assert type(again["long"]) is Int64
    assert type(again["decimal"]) is Decimal128


def test_int64_and_decimal128_dump_their_literals() -> None:
    source = (
        "long: !bson_int64 '9007199254740993'\n"
        "decimal: !bson_decimal128 '0.10'\n"
        "small: !bson_decimal128 '1E-7'\n"
    )
    doc = load(source)
    assert int(doc["long"]) == 2**53 + 1
    assert dump(doc) == source


def test_non_canonical_int64_literal_is_normalized() -> None:
    assert dump(load("long: !bson_int64 '0042'\n")) == "long: !bson_int64 '42'\n"


def test_tagged_datetime_is_not_an_implicit_timestamp() -> None:
    doc = load("tagged: !bson_utcdatetime 2024-01-01T00:00:00Z\nimplicit: 2024-01-01 00:00:00\n")
    assert doc["tagged"] == DatetimeMS(1704067200000)
    assert isinstance(doc["implicit"], datetime.datetime)

    again = load(dump(doc))
    assert type(again["tagged"]) is DatetimeMS
    assert isinstance(again["implicit"], datetime.datetime)


@pytest.mark.parametrize(
    ("literal", "millis"),
    [
        ("0", 0),
        ("1704067200123", 1704067200123),
        ("2024-01-01T00:00:00.123Z", 1704067200123),
        ("2024-01-01T01:00:00+01:00", 1704067200000),
        ("2024-01-01T00:00:00", 1704067200000),
    ],
)
def test_datetime_literals(literal: str, millis: int) -> None:
    assert int(decode_datetime(literal)) == millis


def test_datetime_encoding() -> None:
    assert encode_datetime(DatetimeMS(0)) == "0"
    assert encode_datetime(DatetimeMS(1704067200123)) == "2024-01-01T00:00:00.123Z"


@given(st.integers(min_value=1, max_value=4102444800000))
def test_datetime_text_is_stable(millis: int) -> None:
    assert int(decode_datetime(encode_datetime(DatetimeMS(millis)))) == millis


def test_regex_with_and_without_flags() -> None:
    doc = load("bare: !bson_regex ^abc\nflagged: !bson_regex ['^abc', 'im']\n")
    assert doc["bare"] == Regex("^abc")
    assert doc["flagged"] == Regex("^abc", "im")
    assert regex_flags_to_str(doc["flagged"].flags) == "im"

    text = dump(doc)
    assert text is not None
    assert "!bson_regex" in text
    assert load(text) == doc


def test_regex_flag_order_is_normalized() -> None:
    assert regex_flags_to_str(re.MULTILINE | re.IGNORECASE | re.VERBOSE) == "imx"


def test_binary_object_id_and_uuid() -> None:
    doc = load(
        "data: !bson_binary aGVsbG8=\n"
        "id: !bson_objectId 5a934e000102030405000000\n"
        "key: !bson_uuid 12345678-1234-5678-1234-567812345678\n"
    )
    assert doc["data"] == Binary(b"hello")
    assert doc["id"] == ObjectId("5a934e000102030405000000")
    assert doc["key"] == uuid.UUID("12345678-1234-5678-1234-567812345678")
    assert load(dump(doc)) == doc


@pytest.mark.parametrize(
    ("text", "tag"),
    [
        ("name: x\nvalue: !bson_int64 abc\n", "!bson_int64"),
        ("name: x\nvalue: !bson_decimal128 abc\n", "!bson_decimal128"),
        ("name: x\nvalue: !bson_objectId zz\n", "!bson_objectId"),
        ("name: x\nvalue: !bson_binary '!!!'\n", "!bson_binary"),
        ("name: x\nvalue: !bson_regex ['a', 'q']\n", "!bson_regex"),
        ("name: x\nvalue: !bson_utcdatetime yesterday\n", "!bson_utcdatetime"),
        ("name: x\nvalue: !bson_uuid 1234\n", "!bson_uuid"),
    ],
)
def test_malformed_literals_report_position(text: str, tag: str) -> None:
    with pytest.raises(ScalarDecodeError) as excinfo:
        load(text)
    error = excinfo.value
    assert error.tag == tag
    assert (error.line, error.column) == (2, 8)
    assert error.location == "line 2, column 8"


def test_tag_on_wrong_node_kind() -> None:
    with pytest.raises(ScalarDecodeError, match="mapping node"):
        load("value: !bson_int64 {a: 1}\n")


def test_get_codec_accepts_bare_tag_names() -> None:
    codec = get_codec("bson_int64")
    assert codec is not None and codec.python_type is Int64
    assert get_codec("!bson_float") is None

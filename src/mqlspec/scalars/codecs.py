# topmark:header:start
#
#   project      : MQLSpec
#   file         : codecs.py
#   file_relpath : src/mqlspec/scalars/codecs.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Codec table for the explicit BSON scalar tags.

Each codec converts between the literal text written in a definition document
and the PyMongo ``bson`` value it denotes. ``decode`` functions raise
``ValueError`` (or a ``bson`` error) on malformed input; the YAML layer turns
that into a ``ScalarDecodeError`` carrying the source position.

| Tag                 | Python value                    |
| ------------------- | ------------------------------- |
| ``!bson_utcdatetime`` | ``bson.datetime_ms.DatetimeMS`` |
| ``!bson_objectId``  | ``bson.objectid.ObjectId``      |
| ``!bson_uuid``      | ``uuid.UUID``                   |
| ``!bson_regex``     | ``bson.regex.Regex``            |
| ``!bson_binary``    | ``bson.binary.Binary``          |
| ``!bson_decimal128`` | ``bson.decimal128.Decimal128`` |
| ``!bson_int64``     | ``bson.int64.Int64``            |
"""

from __future__ import annotations

import base64
import binascii
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Final

from bson.binary import Binary
from bson.datetime_ms import DatetimeMS
from bson.decimal128 import Decimal128
from bson.int64 import Int64
from bson.objectid import ObjectId
from bson.regex import Regex

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

_EPOCH: Final[datetime] = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Regex flag letters, in the order MongoDB prints them.
REGEX_FLAGS: Final[tuple[tuple[str, int], ...]] = (
    ("i", re.IGNORECASE),
    ("l", re.LOCALE),
    ("m", re.MULTILINE),
    ("s", re.DOTALL),
    ("u", re.UNICODE),
    ("x", re.VERBOSE),
)


@dataclass(frozen=True, slots=True)
class ScalarCodec:
    """Conversion rules for one tag.

    Attributes:
        tag: YAML tag, including the leading ``!``.
        python_type: Exact class produced by ``decode``.
        decode: Literal text → value.
        encode: Value → literal text, or a ``[pattern, flags]`` pair for regexes
            with flags.
        decode_sequence: Sequence-node form (``!bson_regex [pattern, flags]``).
    """

    tag: str
    python_type: type
    decode: Callable[[str], Any]
    encode: Callable[[Any], str | list[str]]
    decode_sequence: Callable[[Sequence[str]], Any] | None = None


# Dates


def decode_datetime(text: str) -> DatetimeMS:
    """Decode milliseconds since the epoch, or an ISO-8601 timestamp."""
    text = text.strip()
    try:
        return DatetimeMS(int(text))
    except ValueError:
        pass
    iso: str = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
    parsed: datetime = datetime.fromisoformat(iso)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return DatetimeMS(parsed)


def encode_datetime(value: DatetimeMS) -> str:
    """Encode as ``"0"`` for the epoch, otherwise as ``YYYY-MM-DDTHH:MM:SS.mmmZ``."""
    millis: int = int(value)
    if millis == 0:
        return "0"
    moment: datetime = _EPOCH + timedelta(milliseconds=millis)
    return moment.strftime("%Y-%m-%dT%H:%M:%S") + f".{moment.microsecond // 1000:03d}Z"


# Regular expressions


def regex_flags_to_str(flags: int | str) -> str:
    """Return the flag letters for a ``Regex.flags`` value."""
    if isinstance(flags, str):
        return flags
    return "".join(letter for letter, bit in REGEX_FLAGS if flags & bit)


def _regex(pattern: str, flags: str = "") -> Regex:
    allowed: str = "".join(letter for letter, _ in REGEX_FLAGS)
    bad: list[str] = [c for c in flags if c not in allowed]
    if bad:
        raise ValueError(f"Unsupported regex flag(s): {''.join(bad)} (allowed: {allowed})")
    return Regex(pattern, flags)


def decode_regex_sequence(items: Sequence[str]) -> Regex:
    if not 1 <= len(items) <= 2:
        raise ValueError(f"Expected [pattern, flags], got {len(items)} item(s)")
    if not all(isinstance(item, str) for item in items):
        raise ValueError("Regex pattern and flags must be strings")
    return _regex(items[0], items[1] if len(items) == 2 else "")


def encode_regex(value: Regex) -> str | list[str]:
    """A regex without flags is a plain scalar; with flags, a ``[pattern, flags]`` pair."""
    flags: str = regex_flags_to_str(value.flags)
    if not flags:
        return value.pattern
    return [value.pattern, flags]


# Binary


def decode_binary(text: str) -> Binary:
    try:
        return Binary(base64.b64decode("".join(text.split()), validate=True))
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64 data: {exc}") from exc


def encode_binary(value: Binary) -> str:
    return base64.b64encode(bytes(value)).decode("ascii")


def decode_decimal128(text: str) -> Decimal128:
    """Decode a decimal literal; inexact or malformed input raises ``decimal.InvalidOperation``."""
    return Decimal128(text.strip())


SCALAR_CODECS: Final[Mapping[str, ScalarCodec]] = MappingProxyType(
    {
        codec.tag: codec
        for codec in (
            ScalarCodec("!bson_utcdatetime", DatetimeMS, decode_datetime, encode_datetime),
            ScalarCodec("!bson_objectId", ObjectId, lambda s: ObjectId(s.strip()), str),
            ScalarCodec("!bson_uuid", uuid.UUID, lambda s: uuid.UUID(s.strip()), str),
            ScalarCodec(
                "!bson_regex",
                Regex,
                _regex,
                encode_regex,
                decode_sequence=decode_regex_sequence,
            ),
            ScalarCodec("!bson_binary", Binary, decode_binary, encode_binary),
            ScalarCodec("!bson_decimal128", Decimal128, decode_decimal128, str),
            ScalarCodec(
                "!bson_int64", Int64, lambda s: Int64(int(s.strip())), lambda v: str(int(v))
            ),
        )
    }
)


def get_codec(tag: str) -> ScalarCodec | None:
    """Return the codec for ``tag`` (with or without the leading ``!``)."""
    if not tag.startswith("!"):
        tag = "!" + tag
    return SCALAR_CODECS.get(tag)

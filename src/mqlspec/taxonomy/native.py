# topmark:header:start
#
#   project      : MQLSpec
#   file         : native.py
#   file_relpath : src/mqlspec/taxonomy/native.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Native (Python-side) representations of BSON values.

A `NativeForm` names one way a value may be written in Python: a builtin
(``int``, ``str``, ``dict`` ...), a ``datetime``, or one of PyMongo's ``bson``
wrapper classes. The type resolver expresses every type token as an ordered
tuple of native forms; `NativeForm.matches` tests whether a concrete value has
that form.
"""

from __future__ import annotations

import datetime
import re
from collections.abc import Mapping
from functools import cache
from typing import Any

from bson.binary import Binary
from bson.code import Code
from bson.datetime_ms import DatetimeMS
from bson.dbref import DBRef
from bson.decimal128 import Decimal128
from bson.int64 import Int64
from bson.max_key import MaxKey
from bson.min_key import MinKey
from bson.objectid import ObjectId
from bson.raw_bson import RawBSONDocument
from bson.regex import Regex
from bson.timestamp import Timestamp

from mqlspec.core.enum_mixins import KeyedStrEnum


class NativeForm(KeyedStrEnum):
    """Closed set of Python representations accepted for BSON values."""

    BOOL = ("bool", "Python bool")
    INT = ("int", "Python int")
    FLOAT = ("float", "Python float")
    STRING = ("string", "Python str")
    BYTES = ("bytes", "Python bytes")
    LIST = ("list", "Python list or tuple (BSON array)")
    MAPPING = ("mapping", "Any Mapping, e.g. dict or bson.son.SON (BSON document)")
    RAW_DOCUMENT = ("raw_document", "bson.raw_bson.RawBSONDocument")
    NULL = ("null", "None")
    BSON_VALUE = ("bson_value", "Any bson wrapper value")
    DATE_LIKE = ("date_like", "datetime.datetime")
    INT64 = ("int64", "bson.int64.Int64")
    DECIMAL128 = ("decimal128", "bson.decimal128.Decimal128")
    OBJECT_ID = ("object_id", "bson.objectid.ObjectId")
    BINARY = ("binary", "bson.binary.Binary")
    REGEX = ("regex", "bson.regex.Regex or a compiled re.Pattern")
    CODE = ("code", "bson.code.Code")
    TIMESTAMP = ("timestamp", "bson.timestamp.Timestamp")
    UTC_DATETIME = ("utc_datetime", "bson.datetime_ms.DatetimeMS")

    @property
    def python_types(self) -> tuple[type, ...]:
        """Return the Python classes whose instances have this form."""
        return _python_types()[self]

    def matches(self, value: Any) -> bool:
        """Return True if ``value`` has this native form.

        ``bool`` is a subclass of ``int`` in Python, but a BSON boolean is not a
        number: booleans only match `NativeForm.BOOL`. Likewise the ``bson``
        wrappers that subclass a builtin (``Int64``, ``Code``, ``Binary``) only
        match their own form, never the builtin one.
        """
        if isinstance(value, bool):
            return self is NativeForm.BOOL
        bson_values: tuple[type, ...] = NativeForm.BSON_VALUE.python_types
        if self in _BUILTIN_SCALAR_FORMS and isinstance(value, bson_values):
            return False
        return isinstance(value, self.python_types)


_BUILTIN_SCALAR_FORMS: frozenset[NativeForm] = frozenset(
    {NativeForm.INT, NativeForm.FLOAT, NativeForm.STRING, NativeForm.BYTES}
)


@cache
def _python_types() -> dict[NativeForm, tuple[type, ...]]:
    bson_values: tuple[type, ...] = (
        ObjectId,
        Int64,
        Decimal128,
        Binary,
        Regex,
        Code,
        Timestamp,
        DatetimeMS,
        MinKey,
        MaxKey,
        DBRef,
    )
    return {
        NativeForm.BOOL: (bool,),
        NativeForm.INT: (int,),
        NativeForm.FLOAT: (float,),
        NativeForm.STRING: (str,),
        NativeForm.BYTES: (bytes,),
        NativeForm.LIST: (list, tuple),
        NativeForm.MAPPING: (Mapping,),
        NativeForm.RAW_DOCUMENT: (RawBSONDocument,),
        NativeForm.NULL: (type(None),),
        NativeForm.BSON_VALUE: bson_values,
        NativeForm.DATE_LIKE: (datetime.datetime,),
        NativeForm.INT64: (Int64,),
        NativeForm.DECIMAL128: (Decimal128,),
        NativeForm.OBJECT_ID: (ObjectId,),
        NativeForm.BINARY: (Binary,),
        NativeForm.REGEX: (Regex, re.Pattern),
        NativeForm.CODE: (Code,),
        NativeForm.TIMESTAMP: (Timestamp,),
        NativeForm.UTC_DATETIME: (DatetimeMS,),
    }

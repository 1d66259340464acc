from __future__ import annotations

import re
from enum import Enum
from typing import Any, Callable, Dict

import numpy as np

from pg_bulk_import.errors import UnknownType


class ScalarType(Enum):
    """
    Closed set of property value types.

    Integer and float members decode with the width of the numpy dtype of
    the same name.
    """

    STRING = "string"
    INT64 = "int64"
    INT32 = "int32"
    INT16 = "int16"
    INT8 = "int8"
    CHAR = "char"
    BOOL = "bool"
    FLOAT32 = "float32"
    FLOAT64 = "float64"


# ============================================================
# Conversion functions (one per scalar type)
# ============================================================

_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


def parse_integer(raw: Any, dtype: type = np.int64) -> int:
    """
    Parse an integer and check it fits the given numpy integer width.

    Text must be an optional sign followed by ASCII digits; surrounding
    whitespace, underscores and decimal points are rejected.

    Args:
        raw (Any): Text or native integer value.
        dtype (type): Numpy integer type bounding the accepted range.

    Returns:
        int: Parsed value.

    Raises:
        ValueError: If the value is not an integer or is out of range.
    """
    if isinstance(raw, str):
        if not _INTEGER_RE.fullmatch(raw):
            raise ValueError(f"Not an integer: {raw!r}")
        value = int(raw)
    elif isinstance(raw, (bool, np.bool_)):
        value = int(raw)
    elif isinstance(raw, (int, np.integer)):
        value = int(raw)
    else:
        raise ValueError(f"Not an integer: {raw!r}")

    bounds = np.iinfo(dtype)
    if value < bounds.min or value > bounds.max:
        raise ValueError(f"Value {value} out of range for {np.dtype(dtype).name}")
    return value


def try_parse_long(raw: str):
    """Return the 64-bit integer in `raw`, or None if it does not parse."""
    try:
        return parse_integer(raw, np.int64)
    except ValueError:
        return None


def _to_string(raw: Any) -> str:
    return raw if isinstance(raw, str) else str(raw)


def _to_char(raw: Any) -> str:
    text = _to_string(raw)
    if not text:
        raise ValueError("Cannot read a character from an empty value")
    return text[0]


def _to_bool(raw: Any) -> bool:
    if isinstance(raw, str):
        return raw.lower() == "true"
    return bool(raw)


def _to_float32(raw: Any) -> float:
    return float(np.float32(raw))


def _to_float64(raw: Any) -> float:
    return float(np.float64(raw))


def _integer_converter(dtype: type) -> Callable[[Any], int]:
    def convert(raw: Any) -> int:
        return parse_integer(raw, dtype)
    return convert


_CONVERTERS: Dict[ScalarType, Callable[[Any], Any]] = {
    ScalarType.STRING: _to_string,
    ScalarType.INT64: _integer_converter(np.int64),
    ScalarType.INT32: _integer_converter(np.int32),
    ScalarType.INT16: _integer_converter(np.int16),
    ScalarType.INT8: _integer_converter(np.int8),
    ScalarType.CHAR: _to_char,
    ScalarType.BOOL: _to_bool,
    ScalarType.FLOAT32: _to_float32,
    ScalarType.FLOAT64: _to_float64,
}


def converter_for(scalar_type: ScalarType) -> Callable[[Any], Any]:
    """
    Return the conversion function bound to a scalar type.

    Callers resolve this once per declared property and reuse it for
    every row.

    Raises:
        UnknownType: If `scalar_type` is not a ScalarType member.
    """
    try:
        return _CONVERTERS[scalar_type]
    except (KeyError, TypeError):
        raise UnknownType(str(scalar_type)) from None


def convert(raw: Any, scalar_type: ScalarType) -> Any:
    """
    Decode a raw text or cursor-native value as `scalar_type`.

    Args:
        raw (Any): Value read from a text field or a cursor column.
        scalar_type (ScalarType): Declared type of the property.

    Returns:
        Any: Plain Python scalar (str, int, bool or float).
    """
    return converter_for(scalar_type)(raw)


# ============================================================
# Tag lookup (header annotations and SQL native types)
# ============================================================

# Header annotations, matched case-insensitively: `since@long`
HEADER_TAGS: Dict[str, ScalarType] = {
    "string": ScalarType.STRING,
    "long": ScalarType.INT64,
    "int": ScalarType.INT32,
    "short": ScalarType.INT16,
    "byte": ScalarType.INT8,
    "char": ScalarType.CHAR,
    "boolean": ScalarType.BOOL,
    "float": ScalarType.FLOAT32,
    "double": ScalarType.FLOAT64,
}

NATIVE_TYPES: Dict[str, ScalarType] = {
    "VARCHAR": ScalarType.STRING,
    "TEXT": ScalarType.STRING,
    "CHAR": ScalarType.STRING,
    "BIGINT": ScalarType.INT64,
    "INTEGER": ScalarType.INT32,
    "INT": ScalarType.INT32,
    "SMALLINT": ScalarType.INT16,
    "TINYINT": ScalarType.INT8,
    "BOOLEAN": ScalarType.BOOL,
    "FLOAT": ScalarType.FLOAT32,
    "REAL": ScalarType.FLOAT32,
    "DOUBLE": ScalarType.FLOAT64,
    "DOUBLE PRECISION": ScalarType.FLOAT64,
}


def parse_type_tag(tag: str) -> ScalarType:
    """
    Resolve a header type annotation such as `long` or `String`.

    Raises:
        UnknownType: If the tag is not recognized.
    """
    try:
        return HEADER_TAGS[tag.strip().lower()]
    except KeyError:
        raise UnknownType(tag) from None


def parse_native_type(type_name: str) -> ScalarType:
    """
    Resolve a column type name reported by a cursor source.

    Length/precision suffixes are ignored: `VARCHAR(40)` reads as VARCHAR.

    Raises:
        UnknownType: If the native type has no scalar mapping.
    """
    base = re.sub(r"\(.*\)", "", type_name or "").strip().upper()
    base = " ".join(base.split())
    try:
        return NATIVE_TYPES[base]
    except KeyError:
        raise UnknownType(type_name) from None

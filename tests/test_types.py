import numpy as np
import pytest

from pg_bulk_import.errors import UnknownType
from pg_bulk_import.schema.types import (
    ScalarType,
    convert,
    converter_for,
    parse_integer,
    parse_native_type,
    parse_type_tag,
    try_parse_long,
)


def test_int64_round_trips_exactly():
    assert convert("9999999999999999", ScalarType.INT64) == 9999999999999999
    assert convert(str(2**63 - 1), ScalarType.INT64) == 2**63 - 1


def test_integer_widths():
    assert convert("888888888", ScalarType.INT32) == 888888888
    assert convert("777", ScalarType.INT16) == 777
    assert convert("66", ScalarType.INT8) == 66
    assert convert("-128", ScalarType.INT8) == -128


@pytest.mark.parametrize(
    "raw, scalar_type",
    [
        ("128", ScalarType.INT8),
        ("32768", ScalarType.INT16),
        ("2147483648", ScalarType.INT32),
        (str(2**63), ScalarType.INT64),
    ],
)
def test_integer_out_of_range_fails(raw, scalar_type):
    with pytest.raises(ValueError):
        convert(raw, scalar_type)


@pytest.mark.parametrize("raw", ["1.5", " 12", "1_000", "", "abc"])
def test_integer_rejects_non_digits(raw):
    with pytest.raises(ValueError):
        convert(raw, ScalarType.INT64)


def test_float32_keeps_single_precision():
    value = convert("0.2345", ScalarType.FLOAT32)
    assert value == float(np.float32(0.2345))
    assert value != 0.2345
    assert isinstance(value, float)


def test_float64_keeps_double_precision():
    assert convert("0.1234", ScalarType.FLOAT64) == 0.1234


def test_char_and_string():
    assert convert("g", ScalarType.CHAR) == "g"
    assert convert("hello", ScalarType.CHAR) == "h"
    assert convert("hello", ScalarType.STRING) == "hello"
    assert convert(42, ScalarType.STRING) == "42"


def test_bool_text_semantics():
    assert convert("true", ScalarType.BOOL) is True
    assert convert("TRUE", ScalarType.BOOL) is True
    assert convert("yes", ScalarType.BOOL) is False
    assert convert("false", ScalarType.BOOL) is False


def test_native_values():
    assert convert(1, ScalarType.BOOL) is True
    assert convert(0, ScalarType.BOOL) is False
    assert convert(np.int64(25), ScalarType.INT64) == 25
    assert convert(0.2345, ScalarType.FLOAT32) == float(np.float32(0.2345))


def test_converter_for_unknown_type():
    with pytest.raises(UnknownType):
        converter_for("long")


@pytest.mark.parametrize(
    "tag, expected",
    [
        ("String", ScalarType.STRING),
        ("long", ScalarType.INT64),
        ("int", ScalarType.INT32),
        ("short", ScalarType.INT16),
        ("byte", ScalarType.INT8),
        ("char", ScalarType.CHAR),
        ("boolean", ScalarType.BOOL),
        ("float", ScalarType.FLOAT32),
        ("double", ScalarType.FLOAT64),
        ("LONG", ScalarType.INT64),
    ],
)
def test_header_tags(tag, expected):
    assert parse_type_tag(tag) is expected


def test_unknown_header_tag():
    with pytest.raises(UnknownType) as exc:
        parse_type_tag("date")
    assert exc.value.tag == "date"


@pytest.mark.parametrize(
    "native, expected",
    [
        ("VARCHAR", ScalarType.STRING),
        ("varchar(40)", ScalarType.STRING),
        ("BIGINT", ScalarType.INT64),
        ("INTEGER", ScalarType.INT32),
        ("INT", ScalarType.INT32),
        ("SMALLINT", ScalarType.INT16),
        ("TINYINT", ScalarType.INT8),
        ("BOOLEAN", ScalarType.BOOL),
        ("FLOAT", ScalarType.FLOAT32),
        ("DOUBLE", ScalarType.FLOAT64),
        ("double  precision", ScalarType.FLOAT64),
    ],
)
def test_native_types(native, expected):
    assert parse_native_type(native) is expected


def test_unknown_native_type():
    with pytest.raises(UnknownType):
        parse_native_type("BLOB")


def test_try_parse_long():
    assert try_parse_long("1") == 1
    assert try_parse_long("-7") == -7
    assert try_parse_long("id") is None
    assert try_parse_long("") is None
    assert try_parse_long(str(2**63)) is None


def test_parse_integer_accepts_native_ints():
    assert parse_integer(5) == 5
    assert parse_integer(np.int32(5)) == 5
    with pytest.raises(ValueError):
        parse_integer(5.0)

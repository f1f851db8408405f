"""Type conversion tests."""

import math
from datetime import datetime, timezone

import pytest

from pyquery2sql._coercion import (
    convert_value,
    parse_leading_float,
    parse_leading_int,
    to_boolean,
    to_datetime,
    to_integer,
    to_number,
)
from pyquery2sql._errors import ValidationErrors
from pyquery2sql.registry import DataType


@pytest.fixture
def errors():
    return ValidationErrors()


class TestLeadingNumbers:
    @pytest.mark.parametrize("value,expected", [
        ("42", 42),
        ("  -7", -7),
        ("+3", 3),
        ("3.9", 3),
        ("12px", 12),
        ("px", None),
        ("\u0663", None),
        ("\u0665\u0660", None),
        ("", None),
    ])
    def test_int(self, value, expected):
        assert parse_leading_int(value) == expected

    @pytest.mark.parametrize("value,expected", [
        ("4.5", 4.5),
        ("1e3", 1000.0),
        (".5", 0.5),
        ("5.", 5.0),
        ("-2.5kg", -2.5),
        ("abc", None),
        ("\u0663.5", None),
        ("", None),
    ])
    def test_float(self, value, expected):
        assert parse_leading_float(value) == expected

    def test_infinity(self):
        assert parse_leading_float("-Infinity") == -math.inf

    def test_int_beyond_conversion_limit(self):
        assert parse_leading_int("9" * 5000) is None
        assert parse_leading_int("-" + "9" * 5000 + "x") is None


class TestInteger:
    def test_valid(self, errors):
        assert to_integer("age", "21", errors) == 21
        assert not errors

    def test_invalid(self, errors):
        assert to_integer("age", "old", errors) is None
        issue, = list(errors)
        assert issue.message == "Failed to convert the value 'old' of field 'age' to an integer"
        assert issue.data == {"field": "age", "value": "old"}

    def test_too_many_digits(self, errors):
        value = "9" * 5000 + "x"
        assert to_integer("age", value, errors) is None
        issue, = list(errors)
        assert issue.data == {"field": "age", "value": value}

    def test_non_ascii_digits(self, errors):
        assert to_integer("age", "٣", errors) is None
        assert len(errors) == 1


class TestNumber:
    def test_valid(self, errors):
        assert to_number("score", "9.75", errors) == 9.75
        assert not errors

    def test_invalid(self, errors):
        assert to_number("score", "high", errors) is None
        issue, = list(errors)
        assert issue.message == "Failed to convert the value 'high' of field 'score' to a number"


class TestBoolean:
    @pytest.mark.parametrize("value", ["true", "TRUE", "Yes", "on", "1"])
    def test_truthy(self, errors, value):
        assert to_boolean("active", value, errors) is True

    @pytest.mark.parametrize("value", ["false", "no", "off", "0", "", "maybe"])
    def test_falsy(self, errors, value):
        assert to_boolean("active", value, errors) is False

    def test_never_errors(self, errors):
        to_boolean("active", "garbage", errors)
        assert not errors


class TestDatetime:
    def test_epoch_millis(self, errors):
        assert to_datetime("created", "1500", errors) == datetime(
            1970, 1, 1, 0, 0, 1, 500000, tzinfo=timezone.utc
        )
        assert not errors

    def test_date_time_string(self, errors):
        assert to_datetime("created", "2020-01-02T03:04:05", errors) == datetime(
            2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc
        )

    def test_string_and_millis_both_aware(self, errors):
        from_string = to_datetime("created", "2020-01-01T00:00:00", errors)
        from_millis = to_datetime("created", "1000", errors)
        assert from_string.tzinfo is not None
        assert from_millis.tzinfo is not None
        assert from_string > from_millis

    def test_date_time_string_with_zone(self, errors):
        result = to_datetime("created", "2020-01-02 03:04:05+00:00", errors)
        assert result == datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    def test_date_without_colon_is_millis(self, errors):
        # no colon, so only the leading number is read
        result = to_datetime("created", "2020-01-02", errors)
        assert result == datetime(1970, 1, 1, 0, 0, 2, 20000, tzinfo=timezone.utc)

    def test_unparseable_string(self, errors):
        assert to_datetime("created", "nope:nope", errors) is None
        issue, = list(errors)
        assert issue.message == (
            "Failed to convert the value 'nope:nope' of field 'created' to a datetime"
        )

    def test_non_numeric(self, errors):
        assert to_datetime("created", "yesterday", errors) is None
        assert len(errors) == 1

    def test_out_of_range(self, errors):
        assert to_datetime("created", "1e20", errors) is None
        assert len(errors) == 1


class TestConvertValue:
    def test_dispatch(self, errors):
        assert convert_value(DataType.INTEGER, "a", "7", errors) == 7
        assert convert_value(DataType.NUMBER, "a", "7.5", errors) == 7.5
        assert convert_value(DataType.BOOLEAN, "a", "on", errors) is True

    def test_string_passthrough(self, errors):
        assert convert_value(DataType.STRING, "a", "7", errors) == "7"

    def test_errors_accumulate(self, errors):
        convert_value(DataType.INTEGER, "a", "x", errors)
        convert_value(DataType.NUMBER, "b", "y", errors)
        assert [issue.data["field"] for issue in errors] == ["a", "b"]

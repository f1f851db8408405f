"""Conversion of raw WHERE values to the declared field data type.

Conversion failures are recorded on the per-call ``ValidationErrors``
collector instead of being raised, so every bad value in a request is
reported at once.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime, timezone
from typing import Any

from dateutil import parser as date_parser
from dateutil.parser import ParserError

from pyquery2sql._errors import ValidationErrors
from pyquery2sql.registry import DataType

_LEADING_INT_RE = re.compile(r"\s*([+-]?\d+)", re.ASCII)
_LEADING_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?))", re.ASCII
)

_TRUTHY = frozenset({"true", "yes", "on", "1"})


def parse_leading_int(value: str) -> int | None:
    """Parse the leading base-10 integer of a string (``"12px"`` -> 12).

    Returns None when there is no ASCII digit prefix, or when the prefix is
    longer than the interpreter's integer string conversion limit.
    """
    m = _LEADING_INT_RE.match(value)
    if m is None:
        return None
    try:
        return int(m.group(1))
    except ValueError:
        return None


def parse_leading_float(value: str) -> float | None:
    """Parse the leading floating-point number of a string."""
    m = _LEADING_FLOAT_RE.match(value)
    if m is None:
        return None
    return float(m.group(1).replace("Infinity", "inf"))


def _conversion_failed(
    errors: ValidationErrors, field: str, value: str, target: str
) -> None:
    errors.add(
        f"Failed to convert the value '{value}' of field '{field}' to {target}",
        {"field": field, "value": value},
    )


def to_integer(field: str, value: str, errors: ValidationErrors) -> int | None:
    result = parse_leading_int(value)
    if result is None:
        _conversion_failed(errors, field, value, "an integer")
    return result


def to_number(field: str, value: str, errors: ValidationErrors) -> float | None:
    result = parse_leading_float(value)
    if result is None:
        _conversion_failed(errors, field, value, "a number")
    return result


def to_boolean(field: str, value: str, errors: ValidationErrors) -> bool:
    return value.lower() in _TRUTHY


def to_datetime(field: str, value: str, errors: ValidationErrors) -> datetime | None:
    """Parse a date/time string, or epoch milliseconds when there is no colon.

    Always returns an aware datetime; strings without an offset are read as UTC.
    """
    try:
        if ":" in value:
            parsed = date_parser.parse(value)
            if parsed.tzinfo is None:
                parsed = parsed.replace(tzinfo=timezone.utc)
            return parsed
        millis = parse_leading_float(value)
        if millis is not None:
            return datetime.fromtimestamp(millis / 1000, tz=timezone.utc)
    except (ParserError, OverflowError, OSError, ValueError):
        pass
    _conversion_failed(errors, field, value, "a datetime")
    return None


Converter = Callable[[str, str, ValidationErrors], Any]

CONVERTERS: dict[DataType, Converter] = {
    DataType.INTEGER: to_integer,
    DataType.NUMBER: to_number,
    DataType.BOOLEAN: to_boolean,
    DataType.DATETIME: to_datetime,
}


def convert_value(
    data_type: DataType, field: str, value: str, errors: ValidationErrors
) -> Any:
    """Convert ``value`` of ``field`` to ``data_type``; STRING is returned as-is."""
    converter = CONVERTERS.get(data_type)
    if converter is None:
        return value
    return converter(field, value, errors)

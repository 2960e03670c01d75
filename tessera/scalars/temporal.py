"""
Dates, times and time zones.

Domain values are the standard library types: `datetime.datetime` for
`datetime_` and `timestamp`, `datetime.date`, a UTC `datetime.time`, and
the IANA key string for `timezone`. All of them keep millisecond precision,
which is what their wire formats carry.
"""

from __future__ import annotations

import re
from datetime import date as Date
from datetime import datetime as DateTime
from datetime import time as Time
from datetime import timedelta
from datetime import timezone as TimeZone
from typing import Any, Mapping
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from hypothesis import strategies as st

from ..custom import custom
from ..errors import TypeDefinitionError
from ..decoder import decode_without_validation, number_from_string
from ..lib.values import is_integral, is_number
from ..model import CustomType, string
from ..result import Result, fail, succeed

EPOCH = DateTime(1970, 1, 1, tzinfo=TimeZone.utc)
ONE_MILLISECOND = timedelta(milliseconds=1)

DATE_PATTERN = re.compile(r"[0-9]{4}-(0[1-9]|1[012])-(0[1-9]|[12][0-9]|3[01])")
TIME_PATTERN = re.compile(
    r"([01][0-9]|2[0-3]):([0-5][0-9]):([0-5][0-9])(?:\.([0-9]+))?"
    r"(?:(Z)|([+-])([01][0-9]|2[0-3]):([0-5][0-9]))"
)

# Timestamps generated for examples stay within 1900-01-01 and 2200-01-01
MIN_EXAMPLE_MILLIS = -2208988800000
MAX_EXAMPLE_MILLIS = 7258118400000


def _truncate_to_millis(value: DateTime) -> DateTime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def _from_millis(millis: int) -> DateTime:
    return EPOCH + millis * ONE_MILLISECOND


def _to_millis(value: DateTime) -> int:
    return (value - EPOCH) // ONE_MILLISECOND


def _check_bounds(what: str, value: Any, options: Mapping[str, Any]) -> Result[bool]:
    minimum, maximum = options.get("minimum"), options.get("maximum")
    if maximum is not None and value > maximum:
        return fail(f"{what} must be less than or equal to {maximum.isoformat()}", value)
    if minimum is not None and value < minimum:
        return fail(f"{what} must be greater than or equal to {minimum.isoformat()}", value)
    return succeed(True)


def _decode_iso_datetime(value: Any, decode_options: Any) -> Result[DateTime]:
    if decode_options.try_casting and is_number(value) and is_integral(value):
        return _decode_timestamp(value, decode_options, {})

    def parse(text: str) -> Result[DateTime]:
        # fromisoformat only understands a trailing Z from 3.11 on
        normalized = text[:-1] + "+00:00" if text.endswith(("Z", "z")) else text
        try:
            parsed = DateTime.fromisoformat(normalized)
        except ValueError:
            return fail("Invalid datetime (ISO 8601)", value)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=TimeZone.utc)
        try:
            return succeed(_truncate_to_millis(parsed.astimezone(TimeZone.utc)))
        except OverflowError:
            return fail("Invalid datetime (out of range)", value)

    if not isinstance(value, str):
        return fail("Invalid datetime (ISO 8601)", value)
    return parse(value)


def _validate_datetime(what: str):
    def validator(value: Any, _validation_options: Any, options: Mapping[str, Any]) -> Result[bool]:
        if not isinstance(value, DateTime) or value.tzinfo is None:
            return fail(f"expected a timezone-aware {what}", value)
        return _check_bounds(what, value, options)

    return validator


def _datetime_examples(_max_depth: int, options: Mapping[str, Any]) -> st.SearchStrategy[DateTime]:
    lower = options.get("minimum") or _from_millis(MIN_EXAMPLE_MILLIS)
    upper = options.get("maximum") or _from_millis(MAX_EXAMPLE_MILLIS)
    first = _to_millis(lower)
    if _from_millis(first) < lower:
        first += 1
    return st.integers(min_value=first, max_value=_to_millis(upper)).map(_from_millis)


def _bound_options(minimum: Any, maximum: Any) -> dict[str, Any]:
    if minimum is not None and maximum is not None and minimum > maximum:
        raise TypeDefinitionError(f"minimum ({minimum}) must not be after maximum ({maximum})")
    return {"minimum": minimum, "maximum": maximum}


def datetime_(
    minimum: DateTime | None = None, maximum: DateTime | None = None, **options: Any
) -> CustomType:
    """
    An instant, encoded as ISO 8601 in UTC with milliseconds.

    Naive inputs are read as UTC. With `tryCasting`, epoch milliseconds are
    accepted too.

    Usage:
        encode(datetime_(), DateTime(2023, 1, 1, tzinfo=TimeZone.utc))
        # "2023-01-01T00:00:00.000Z"
    """
    return custom(
        "datetime",
        lambda value, _encode_options, _options: value.astimezone(TimeZone.utc)
        .isoformat(timespec="milliseconds")
        .replace("+00:00", "Z"),
        lambda value, decode_options, _options: _decode_iso_datetime(value, decode_options),
        _validate_datetime("datetime"),
        _datetime_examples,
        _bound_options(minimum, maximum),
        **options,
    )


def _decode_timestamp(value: Any, decode_options: Any, _options: Mapping[str, Any]) -> Result[DateTime]:
    millis: Any = value
    if decode_options.try_casting and isinstance(value, str):
        cast = number_from_string(value.strip())
        if cast.is_err():
            return fail("Invalid timestamp (expected epoch milliseconds)", value)
        millis = cast.unwrap()
    if not is_number(millis) or not is_integral(millis):
        return fail("Invalid timestamp (expected epoch milliseconds)", value)
    try:
        return succeed(_from_millis(int(millis)))
    except OverflowError:
        return fail("Invalid timestamp (out of range)", value)


def timestamp(
    minimum: DateTime | None = None, maximum: DateTime | None = None, **options: Any
) -> CustomType:
    """An instant, encoded as milliseconds since the Unix epoch."""
    return custom(
        "timestamp",
        lambda value, _encode_options, _options: _to_millis(value),
        _decode_timestamp,
        _validate_datetime("timestamp"),
        _datetime_examples,
        _bound_options(minimum, maximum),
        **options,
    )


def _decode_date(value: Any, decode_options: Any, _options: Mapping[str, Any]) -> Result[Date]:
    if not isinstance(value, str) or not DATE_PATTERN.fullmatch(value):
        return fail("Invalid date format (expected: yyyy-mm-dd)", value)
    try:
        return succeed(Date.fromisoformat(value))
    except ValueError:
        return fail("Invalid date", value)


def _validate_date(value: Any, _validation_options: Any, options: Mapping[str, Any]) -> Result[bool]:
    if not isinstance(value, Date) or isinstance(value, DateTime):
        return fail("expected a date", value)
    return _check_bounds("date", value, options)


def date(minimum: Date | None = None, maximum: Date | None = None, **options: Any) -> CustomType:
    """A calendar date, encoded as YYYY-MM-DD."""
    return custom(
        "date",
        lambda value, _encode_options, _options: value.isoformat(),
        _decode_date,
        _validate_date,
        lambda _max_depth, opts: st.dates(
            min_value=opts.get("minimum") or Date(1000, 1, 1),
            max_value=opts.get("maximum") or Date(9999, 12, 31),
        ),
        _bound_options(minimum, maximum),
        **options,
    )


def _decode_time(value: Any, _decode_options: Any, _options: Mapping[str, Any]) -> Result[Time]:
    match = TIME_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if match is None:
        return fail("Invalid time format (RFC 3339)", value)
    hours, minutes, seconds, fraction, zulu, sign, offset_hours, offset_minutes = match.groups()
    millis = int((fraction or "0")[:3].ljust(3, "0"))
    offset = timedelta(0)
    if not zulu:
        offset = timedelta(hours=int(offset_hours), minutes=int(offset_minutes))
        if sign == "-":
            offset = -offset
    local = DateTime(
        2000, 1, 1, int(hours), int(minutes), int(seconds), millis * 1000, tzinfo=TimeZone(offset)
    )
    return succeed(local.astimezone(TimeZone.utc).timetz())


def _encode_time(value: Time, _encode_options: Any, _options: Mapping[str, Any]) -> str:
    if value.tzinfo is not None:
        value = DateTime.combine(Date(2000, 1, 1), value).astimezone(TimeZone.utc).time()
    return f"{value:%H:%M:%S}.{value.microsecond // 1000:03d}Z"


def _validate_time(value: Any, _validation_options: Any, _options: Mapping[str, Any]) -> Result[bool]:
    if not isinstance(value, Time):
        return fail("expected a time", value)
    return succeed(True)


def time(**options: Any) -> CustomType:
    """
    A time of day (RFC 3339 `partial-time` with an offset).

    Decoded values are converted to UTC, so "00:00:00+01:30" becomes 22:30
    UTC. Encoding always produces HH:MM:SS.mmmZ.
    """
    return custom(
        "time",
        _encode_time,
        _decode_time,
        _validate_time,
        lambda _max_depth, _options: st.times().map(
            lambda t: t.replace(microsecond=t.microsecond // 1000 * 1000, tzinfo=TimeZone.utc)
        ),
        **options,
    )


def _decode_timezone(value: Any, decode_options: Any, _options: Mapping[str, Any]) -> Result[str]:
    return decode_without_validation(string(), value, decode_options)


def _validate_timezone(value: Any, _validation_options: Any, _options: Mapping[str, Any]) -> Result[bool]:
    if not isinstance(value, str):
        return fail("expected a string", value)
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return fail("Invalid IANA time zone", value)
    return succeed(True)


def timezone(**options: Any) -> CustomType:
    """An IANA time zone identifier, e.g. Europe/Rome."""
    return custom(
        "timezone",
        lambda value, _encode_options, _options: value,
        _decode_timezone,
        _validate_timezone,
        lambda _max_depth, _options: st.timezone_keys(),
        **options,
    )

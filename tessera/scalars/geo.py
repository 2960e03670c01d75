"""
Geographic coordinates in decimal degrees.

Both types keep at most 8 fractional digits (about a millimetre), so
`12.12345678` is accepted and `12.123456789` is not.
"""

from __future__ import annotations

from typing import Any, Mapping

from hypothesis import strategies as st

from ..custom import custom
from ..decoder import decode_without_validation
from ..lib.values import is_number
from ..model import CustomType, number
from ..result import Result, fail, succeed

MAX_PRECISION = 8

MIN_LATITUDE, MAX_LATITUDE = -90.0, 90.0
MIN_LONGITUDE, MAX_LONGITUDE = -180.0, 180.0


def _coordinate(name: str, lower: float, upper: float, options: Mapping[str, Any]) -> CustomType:
    def decoder(value: Any, decode_options: Any, _options: Mapping[str, Any]) -> Result[float]:
        return decode_without_validation(number(), value, decode_options)

    def validator(value: Any, _validation_options: Any, _options: Mapping[str, Any]) -> Result[bool]:
        if not is_number(value):
            return fail(f"Invalid {name} (expected a number)", value)
        if value < lower or value > upper:
            return fail(f"Invalid {name} number (must be between {lower} and {upper})", value)
        if value != float(f"{value:.{MAX_PRECISION}f}"):
            return fail(f"Invalid {name} number (max precision must be {MAX_PRECISION})", value)
        return succeed(True)

    scale = 10**MAX_PRECISION
    examples = st.integers(
        min_value=int(lower * scale), max_value=int(upper * scale)
    ).map(lambda n: n / scale)

    return custom(
        name,
        lambda value, _encode_options, _options: value,
        decoder,
        validator,
        lambda _max_depth, _options: examples,
        **options,
    )


def latitude(**options: Any) -> CustomType:
    return _coordinate("latitude", MIN_LATITUDE, MAX_LATITUDE, options)


def longitude(**options: Any) -> CustomType:
    return _coordinate("longitude", MIN_LONGITUDE, MAX_LONGITUDE, options)

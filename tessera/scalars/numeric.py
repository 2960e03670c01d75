"""
Arbitrary precision decimals backed by `decimal.Decimal`.

Decimals are read and written in base 10 unless a `base` between 2 and 16
is given. Digits in other bases are converted exactly and rounded half up to
20 decimal places, since a base 3 fraction rarely has a finite decimal form.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Context, Decimal, InvalidOperation
from typing import Any, Mapping

from hypothesis import strategies as st

from ..custom import custom
from ..errors import TypeDefinitionError
from ..lib.values import is_multiple_of, is_number
from ..model import CustomType
from ..result import Result, fail, succeed

MAX_DECIMALS = 100
MIN_BASE, MAX_BASE = 2, 16

# Decimal places kept when converting from or to a base other than 10
BASE_DECIMAL_PLACES = 20
DIGITS = "0123456789abcdef"
BASE_NUMBER_PATTERN = re.compile(r"([+-]?)([0-9a-f]*)(?:\.([0-9a-f]*))?")

# Wide enough for any allowed number of decimals on realistic magnitudes
QUANTIZE_CONTEXT = Context(prec=4 * MAX_DECIMALS)
EXAMPLE_MAGNITUDE = Decimal(10) ** 12


def _round(value: Decimal, decimals: int) -> Decimal:
    return value.quantize(
        Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP, context=QUANTIZE_CONTEXT
    )


def _as_decimal(value: Any) -> Decimal | None:
    try:
        decoded = Decimal(str(value).strip())
    except InvalidOperation:
        return None
    return decoded if decoded.is_finite() else None


def _parse_in_base(value: Any, base: int) -> Decimal | None:
    """Read "ff.8" in base 16 as 255.5; None if the text is not a number in `base`."""
    match = BASE_NUMBER_PATTERN.fullmatch(str(value).strip().lower())
    if match is None:
        return None
    sign, whole, fraction = match.groups()
    digits = whole + (fraction or "")
    if not digits or any(DIGITS.index(digit) >= base for digit in digits):
        return None
    try:
        numerator = int(digits, base)
    except ValueError:
        return None
    quotient = QUANTIZE_CONTEXT.divide(Decimal(numerator), Decimal(base ** len(fraction or "")))
    if quotient.as_tuple().exponent < -BASE_DECIMAL_PLACES:
        quotient = _round(quotient, BASE_DECIMAL_PLACES)
    return -quotient if sign == "-" else quotient


def _digits_in_base(number: int, base: int) -> str:
    if number == 0:
        return "0"
    digits = []
    while number:
        number, digit = divmod(number, base)
        digits.append(DIGITS[digit])
    return "".join(reversed(digits))


def _format_in_base(value: Decimal, base: int) -> str:
    scale = base**BASE_DECIMAL_PLACES
    scaled = QUANTIZE_CONTEXT.multiply(abs(value), Decimal(scale)).quantize(
        Decimal(1), rounding=ROUND_HALF_UP, context=QUANTIZE_CONTEXT
    )
    whole, fraction = divmod(int(scaled), scale)
    if whole == 0 and fraction == 0:
        return "0"
    text = _digits_in_base(whole, base)
    if fraction:
        text += "." + _digits_in_base(fraction, base).rjust(BASE_DECIMAL_PLACES, "0").rstrip("0")
    return "-" + text if value < 0 else text


def _decode_decimal(value: Any, decode_options: Any, options: Mapping[str, Any]) -> Result[Decimal]:
    if not isinstance(value, (str, Decimal)) and not is_number(value):
        return fail("Number or string representing a number expected", value)
    base = options.get("base") or 10
    decoded = _as_decimal(value) if base == 10 else _parse_in_base(value, base)
    if decoded is None:
        return fail("Invalid decimal" if base == 10 else f"Invalid decimal (base {base})", value)
    decimals = options.get("decimals")
    if decimals is None:
        return succeed(decoded)
    try:
        rounded = _round(decoded, decimals)
    except InvalidOperation:
        return fail("Invalid decimal (too many digits)", value)
    if not decode_options.try_casting and rounded != decoded:
        return fail(f"Invalid decimal places (need at most {decimals})", value)
    return succeed(rounded)


def _validate_decimal(value: Any, _validation_options: Any, options: Mapping[str, Any]) -> Result[bool]:
    if not isinstance(value, Decimal) or not value.is_finite():
        return fail("expected a decimal", value)
    if options["maximum"] is not None and value > options["maximum"]:
        return fail(f"decimal must be less than or equal to {options['maximum']}", value)
    if options["minimum"] is not None and value < options["minimum"]:
        return fail(f"decimal must be greater than or equal to {options['minimum']}", value)
    if options["exclusive_maximum"] is not None and value >= options["exclusive_maximum"]:
        return fail(f"decimal must be less than {options['exclusive_maximum']}", value)
    if options["exclusive_minimum"] is not None and value <= options["exclusive_minimum"]:
        return fail(f"decimal must be greater than {options['exclusive_minimum']}", value)
    if options["multiple_of"] is not None and not is_multiple_of(value, options["multiple_of"]):
        return fail(f"decimal must be multiple of {options['multiple_of']}", value)
    return succeed(True)


def _encode_decimal(value: Decimal, _encode_options: Any, options: Mapping[str, Any]) -> str:
    if options.get("decimals") is not None:
        value = _round(value, options["decimals"])
    base = options.get("base") or 10
    return format(value, "f") if base == 10 else _format_in_base(value, base)


def _decimal_examples(_max_depth: int, options: Mapping[str, Any]) -> st.SearchStrategy[Decimal]:
    lower = options["minimum"] if options["minimum"] is not None else options["exclusive_minimum"]
    upper = options["maximum"] if options["maximum"] is not None else options["exclusive_maximum"]
    lower = -EXAMPLE_MAGNITUDE if lower is None else lower
    upper = EXAMPLE_MAGNITUDE if upper is None else upper
    strategy = st.decimals(
        min_value=lower,
        max_value=upper,
        allow_nan=False,
        allow_infinity=False,
        places=options["decimals"],
    )
    if options["multiple_of"] is not None:
        step = options["multiple_of"]
        strategy = st.integers(min_value=-(10**6), max_value=10**6).map(lambda n: n * step)
    # Exclusive bounds and steps are enforced by the filter
    return strategy.filter(lambda d: _validate_decimal(d, None, options).is_ok())


def _to_bound(name: str, bound: Any) -> Decimal | None:
    if bound is None:
        return None
    converted = _as_decimal(bound)
    if converted is None:
        raise TypeDefinitionError(f"The {name} of a decimal must be a finite number, got {bound!r}")
    return converted


def decimal(
    decimals: int | None = None,
    minimum: Decimal | int | str | None = None,
    maximum: Decimal | int | str | None = None,
    exclusive_minimum: Decimal | int | str | None = None,
    exclusive_maximum: Decimal | int | str | None = None,
    multiple_of: Decimal | int | str | None = None,
    base: int | None = None,
    **options: Any,
) -> CustomType:
    """
    An exact decimal number, encoded as a string.

    Args:
        decimals: Number of fractional digits kept. Under `expectExactTypes`
            inputs with more digits are rejected; under `tryCasting` they are
            rounded half up.
        minimum, maximum, exclusive_minimum, exclusive_maximum, multiple_of:
            Bounds checked at validation.
        base: Radix of the wire representation, 2 to 16; 10 by default.

    Usage:
        price = decimal(decimals=2, minimum=0)
        decode(price, "12.50")  # Ok(Decimal("12.50"))
        encode(price, Decimal("3"))  # "3.00"
        encode(decimal(base=16), Decimal("255.5"))  # "ff.8"
    """
    if decimals is not None and (
        not isinstance(decimals, int) or isinstance(decimals, bool) or not 0 <= decimals <= MAX_DECIMALS
    ):
        raise TypeDefinitionError(
            f"Invalid decimals, must be an integer between 0 and {MAX_DECIMALS}"
        )
    if base is not None and (
        not isinstance(base, int) or isinstance(base, bool) or not MIN_BASE <= base <= MAX_BASE
    ):
        raise TypeDefinitionError(f"Invalid base, must be an integer between {MIN_BASE} and {MAX_BASE}")
    step = _to_bound("multiple_of", multiple_of)
    if step is not None and step <= 0:
        raise TypeDefinitionError(f"multiple_of ({multiple_of}) must be positive")
    return custom(
        "decimal",
        _encode_decimal,
        _decode_decimal,
        _validate_decimal,
        _decimal_examples,
        {
            "decimals": decimals,
            "base": base,
            "minimum": _to_bound("minimum", minimum),
            "maximum": _to_bound("maximum", maximum),
            "exclusive_minimum": _to_bound("exclusive_minimum", exclusive_minimum),
            "exclusive_maximum": _to_bound("exclusive_maximum", exclusive_maximum),
            "multiple_of": step,
        },
        **options,
    )

"""
Value predicates shared by the dispatchers.
"""

from decimal import Decimal, InvalidOperation, localcontext
from typing import Any

# Precision used when the exact quotient of a remainder would not fit
MIN_REMAINDER_PRECISION = 28


def is_number(value: Any) -> bool:
    """int or float, but never bool."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def is_integral(value: Any) -> bool:
    """True for ints of any size and for floats without a fractional part."""
    if isinstance(value, int):
        return True
    if isinstance(value, Decimal):
        return value.is_finite() and value == value.to_integral_value()
    return isinstance(value, float) and value.is_integer()


def same_literal(value: Any, literal: Any) -> bool:
    """Literal equality that never confuses booleans with numbers."""
    if is_number(value) and is_number(literal):
        return value == literal
    return type(value) is type(literal) and value == literal


def _as_decimal(value: Any) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


def is_multiple_of(value: Any, step: Any) -> bool:
    """
    Exact check on the decimal representations, so 0.3 is a multiple of 0.1.

    The remainder is computed with enough precision for the whole integer
    quotient, so huge values never overflow the decimal context.
    """
    try:
        dividend, divisor = _as_decimal(value), _as_decimal(step)
        if not dividend.is_finite() or not divisor.is_finite() or divisor == 0:
            return False
        with localcontext() as context:
            dividend_digits, divisor_digits = dividend.as_tuple(), divisor.as_tuple()
            context.prec = max(
                MIN_REMAINDER_PRECISION,
                len(dividend_digits.digits)
                + len(divisor_digits.digits)
                + abs(dividend_digits.exponent - divisor_digits.exponent)
                + 2,
            )
            return dividend % divisor == 0
    except InvalidOperation:
        return False

"""Fixed-scale decimal arithmetic.

Every operation takes Decimal operands and returns a Decimal truncated toward
zero to `scale` fractional digits. Operands are converted to exact integer
ratios first, so no decimal context precision can round an intermediate
result: the only inexact step is the float approximation of a fractional
exponent in power(), which is re-quantized immediately.

Example (scale 15):
    div(Decimal(1), Decimal(3), 15)  ->  Decimal("0.333333333333333")
    mod(Decimal(-7), Decimal(3), 15) ->  Decimal("-1.000000000000000")
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

import structlog

from deccalc.constants import FLOAT_SIGNIFICANT_DIGITS, SCIENTIFIC_PATTERN
from deccalc.errors import DivisionByZero, UnsupportedExpression

__all__ = [
    # Constants
    "ZERO",
    "TEN",
    # Conversion
    "from_ratio",
    "truncate",
    "to_plain",
    "expand_scientific",
    "parse_float_text",
    # Operations
    "add",
    "sub",
    "mul",
    "div",
    "mod",
    "compare",
    "int_power",
    "power",
]

logger = structlog.get_logger()

ZERO = Decimal(0)
TEN = Decimal(10)

_SCIENTIFIC_RE = re.compile(rf"^{SCIENTIFIC_PATTERN}$")


# =============================================================================
# Conversion helpers
# =============================================================================


def _div_trunc(a: int, b: int) -> int:
    """Integer division truncating toward zero, so -7 // 3 gives -2 rather than -3.

    Raises:
        ZeroDivisionError: If b is zero
    """
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def from_ratio(numerator: int, denominator: int, scale: int) -> Decimal:
    """Build numerator / denominator truncated to `scale` fractional digits.

    The string constructor is exact, unlike Decimal arithmetic which is
    bounded by the context precision.
    """
    scaled = _div_trunc(numerator * 10**scale, denominator)
    return Decimal(f"{scaled}E-{scale}")


def truncate(value: Decimal, scale: int) -> Decimal:
    """Truncate value toward zero to `scale` fractional digits."""
    return from_ratio(*value.as_integer_ratio(), scale)


def to_plain(value: Decimal) -> str:
    """Render value in plain notation (never exponent form)."""
    return format(value, "f")


def expand_scientific(mantissa: str, exponent: str, scale: int) -> Decimal:
    """Expand mantissa * 10^exponent.

    A zero exponent keeps the mantissa as written; any other exponent is
    applied with exact multiplication at `scale`.

    Args:
        mantissa: Unsigned decimal digits, e.g. "1.2"
        exponent: Signed integer digits, e.g. "-3"
        scale: Fractional digits to keep
    """
    power_of_ten = int(exponent)
    if power_of_ten == 0:
        return Decimal(mantissa)
    return mul(Decimal(mantissa), int_power(TEN, power_of_ten, scale), scale)


def parse_float_text(text: str, scale: int) -> Decimal:
    """Convert a float rendering ("1.3", "1e-05") into a Decimal."""
    match = _SCIENTIFIC_RE.match(text)
    if match:
        return expand_scientific(match.group(1), match.group(2), scale)
    return Decimal(text)


# =============================================================================
# Binary operations
# =============================================================================


def add(a: Decimal, b: Decimal, scale: int) -> Decimal:
    """Compute a + b at scale."""
    n1, d1 = a.as_integer_ratio()
    n2, d2 = b.as_integer_ratio()
    return from_ratio(n1 * d2 + n2 * d1, d1 * d2, scale)


def sub(a: Decimal, b: Decimal, scale: int) -> Decimal:
    """Compute a - b at scale."""
    n1, d1 = a.as_integer_ratio()
    n2, d2 = b.as_integer_ratio()
    return from_ratio(n1 * d2 - n2 * d1, d1 * d2, scale)


def mul(a: Decimal, b: Decimal, scale: int) -> Decimal:
    """Compute a * b at scale."""
    n1, d1 = a.as_integer_ratio()
    n2, d2 = b.as_integer_ratio()
    return from_ratio(n1 * n2, d1 * d2, scale)


def div(a: Decimal, b: Decimal, scale: int) -> Decimal:
    """Compute a / b at scale.

    Raises:
        DivisionByZero: If b is zero
    """
    if b == 0:
        logger.warning("division_by_zero", dividend=to_plain(a))
        raise DivisionByZero(f"Division by zero: {to_plain(a)} / 0")
    n1, d1 = a.as_integer_ratio()
    n2, d2 = b.as_integer_ratio()
    return from_ratio(n1 * d2, d1 * n2, scale)


def mod(a: Decimal, b: Decimal, scale: int) -> Decimal:
    """Compute a - b * trunc(a / b) at scale.

    The remainder takes the sign of the dividend: mod(-7, 3) == -1.

    Raises:
        DivisionByZero: If b is zero
    """
    if b == 0:
        logger.warning("modulo_by_zero", dividend=to_plain(a))
        raise DivisionByZero(f"Modulo by zero: {to_plain(a)} % 0")
    n1, d1 = a.as_integer_ratio()
    n2, d2 = b.as_integer_ratio()
    quotient = _div_trunc(n1 * d2, d1 * n2)
    return from_ratio(n1 * d2 - quotient * n2 * d1, d1 * d2, scale)


def compare(a: Decimal, b: Decimal, scale: int) -> int:
    """Three-way comparison of a and b truncated to scale.

    Returns:
        -1 if a < b, 0 if equal at scale, 1 if a > b
    """
    left = truncate(a, scale)
    right = truncate(b, scale)
    return (left > right) - (left < right)


# =============================================================================
# Exponentiation
# =============================================================================


def int_power(base: Decimal, exponent: int, scale: int) -> Decimal:
    """Compute base ^ exponent exactly for an integer exponent.

    Negative exponents give the reciprocal, truncated to scale.

    Raises:
        DivisionByZero: If base is zero and exponent is negative
    """
    numerator, denominator = base.as_integer_ratio()
    if exponent >= 0:
        return from_ratio(numerator**exponent, denominator**exponent, scale)

    if numerator == 0:
        raise DivisionByZero(f"Zero raised to negative power {exponent}")
    return from_ratio(denominator**-exponent, numerator**-exponent, scale)


def _float_power(base: Decimal, fraction: float, scale: int) -> Decimal:
    """Approximate base ^ fraction through a bounded-precision float pow."""
    try:
        approximation = float(base) ** fraction
    except OverflowError as err:
        raise UnsupportedExpression(f"Power {to_plain(base)}^{fraction} overflows") from err

    if isinstance(approximation, complex) or not math.isfinite(approximation):
        logger.warning(
            "fractional_power_unrepresentable",
            base=to_plain(base),
            fraction=fraction,
        )
        raise UnsupportedExpression(
            f"Power {to_plain(base)}^{fraction} is not a real decimal number"
        )

    text = f"{approximation:.{FLOAT_SIGNIFICANT_DIGITS}g}"
    logger.debug(
        "fractional_power_approximated",
        base=to_plain(base),
        fraction=fraction,
        approximation=text,
    )
    return parse_float_text(text, scale)


def power(base: Decimal, exponent: Decimal, scale: int) -> Decimal:
    """Compute base ^ exponent at scale, allowing fractional exponents.

    The exponent is split into an integer part (truncated toward zero) and a
    fractional remainder with the same sign. The integer part is applied
    exactly; the remainder is approximated with a float pow rendered to 14
    significant digits and multiplied in.

    A zero base (at scale) yields an unscaled zero for every exponent.

    Raises:
        UnsupportedExpression: If the fractional step has no real, finite result
    """
    if compare(base, ZERO, scale) == 0:
        return ZERO

    numerator, denominator = exponent.as_integer_ratio()
    integer_part = _div_trunc(numerator, denominator)
    fraction_numerator = numerator - integer_part * denominator

    result = int_power(base, integer_part, scale)

    if fraction_numerator != 0:
        minor = _float_power(base, fraction_numerator / denominator, scale)
        result = mul(result, minor, scale)

    return result

"""Rendering of reduced values as result strings."""

from __future__ import annotations

import re
from decimal import Decimal

from deccalc.constants import NUMBER_PATTERN
from deccalc.errors import UnsupportedExpression
from deccalc.math.fixed_decimal import to_plain

_NUMBER_RE = re.compile(NUMBER_PATTERN)


def trim_trailing_zeroes(number: str) -> str:
    """Drop trailing fractional zeroes, and the point if nothing remains.

    "1.2300" -> "1.23", "10.0" -> "10", "10" -> "10"
    """
    if "." in number:
        return number.rstrip("0").rstrip(".")
    return number


def strip_leading_zeroes(number: str) -> str:
    """Drop superfluous integer zeroes: "010" -> "10", "-00.5" -> "-0.5"."""
    sign = "-" if number.startswith("-") else ""
    integer, point, fraction = number.lstrip("-").partition(".")
    return f"{sign}{integer.lstrip('0') or '0'}{point}{fraction}"


def normalize_zero(number: str) -> str:
    """Turn negative zero ("-0", "-0.000") into its unsigned form."""
    if number.startswith("-") and not number.strip("-0."):
        return number[1:]
    return number


def format_result(value: Decimal, cut_trailing_zeroes: bool = True) -> str:
    """Render a reduced value as a plain signed decimal string.

    Raises:
        UnsupportedExpression: If the value has no plain decimal rendering
    """
    number = to_plain(value)
    if not _NUMBER_RE.fullmatch(number):
        raise UnsupportedExpression(f"Unsupported expression result: {number}")

    if cut_trailing_zeroes:
        number = trim_trailing_zeroes(number)

    return normalize_zero(strip_leading_zeroes(number))

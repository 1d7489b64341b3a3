"""Decimal arithmetic primitives for deccalc.

This package provides fixed-scale decimal operations:
- add/sub/mul/div/mod truncated toward zero at a given scale
- compare: three-way comparison at scale
- power: integer powers exactly, fractional powers via a bounded float step
"""

from deccalc.math.fixed_decimal import (
    add,
    compare,
    div,
    expand_scientific,
    int_power,
    mod,
    mul,
    power,
    sub,
    to_plain,
    truncate,
)

__all__ = [
    "add",
    "sub",
    "mul",
    "div",
    "mod",
    "compare",
    "int_power",
    "power",
    "truncate",
    "to_plain",
    "expand_scientific",
]

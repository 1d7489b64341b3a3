"""One-shot helpers that build a default-configured Calculator per call."""

from __future__ import annotations

from deccalc.engine import Calculator


def calc(expression: str) -> str:
    """Evaluate an expression with the default scale, e.g. calc("1 + 1.2 * 3") == "4.6"."""
    return Calculator().evaluate(expression)


def is_true(expression: str) -> bool:
    """Check a comparison with the default scale, e.g. is_true("1.0 == 1") is True."""
    return Calculator().is_true(expression)

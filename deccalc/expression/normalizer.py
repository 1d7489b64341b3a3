"""Expression text normalization.

Turns raw user input into the compact form the validator and tokenizer expect:
no whitespace, no scientific literals, and explicit `*` for implicit
multiplication before an opening bracket.
"""

from __future__ import annotations

import re

from deccalc.constants import SCIENTIFIC_PATTERN
from deccalc.math.fixed_decimal import expand_scientific, to_plain

_WHITESPACE_RE = re.compile(r"\s+")
_SCIENTIFIC_RE = re.compile(SCIENTIFIC_PATTERN)
# "2(" and ")(" -> "2*(" and ")*("
_IMPLICIT_MUL_RE = re.compile(r"(?<=[\d)])\(")


def strip_whitespace(expression: str) -> str:
    """Remove every whitespace character."""
    return _WHITESPACE_RE.sub("", expression)


def replace_scientific(expression: str, scale: int) -> str:
    """Replace literals like 2.1E-1 with their plain decimal form (0.21)."""

    def _expand(match: re.Match[str]) -> str:
        return to_plain(expand_scientific(match.group(1), match.group(2), scale))

    return _SCIENTIFIC_RE.sub(_expand, expression)


def insert_implicit_multiplication(expression: str) -> str:
    """Make multiplication before an opening bracket explicit."""
    return _IMPLICIT_MUL_RE.sub("*(", expression)


def normalize(expression: str, scale: int) -> str:
    """Apply every normalization step in order.

    Example:
        normalize(" 2 (1E2 + 1) ", 15) == "2*(100.000000000000000+1)"
    """
    expression = strip_whitespace(expression)
    expression = replace_scientific(expression, scale)
    return insert_implicit_multiplication(expression)

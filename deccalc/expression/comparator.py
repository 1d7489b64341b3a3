"""Chained comparison evaluation.

A comparison chain such as `1 < 2 <= 2 == 4/2` is split on its operators and
each adjacent pair is compared independently, left to right. The chain holds
when every pair holds; it is not a transitive relation, so `1 < 2 > 0` is
true because both `1 < 2` and `2 > 0` are.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from decimal import Decimal

import structlog

from deccalc.constants import COMPARISON_PATTERN
from deccalc.errors import MalformedExpression
from deccalc.math.fixed_decimal import compare, to_plain

logger = structlog.get_logger()

_COMPARISON_RE = re.compile(COMPARISON_PATTERN)
# A two-character operator broken by whitespace, e.g. "1 < = 2"
_SPLIT_OPERATOR_RE = re.compile(r"[<>=]\s+=")

# Predicates over the three-way comparison result (-1, 0, 1)
CHECKS: dict[str, Callable[[int], bool]] = {
    ">=": lambda ordering: ordering >= 0,
    "<=": lambda ordering: ordering <= 0,
    ">": lambda ordering: ordering == 1,
    "<": lambda ordering: ordering == -1,
    "=": lambda ordering: ordering == 0,
    "==": lambda ordering: ordering == 0,
    "===": lambda ordering: ordering == 0,
}


def check_operator_spacing(expression: str) -> None:
    """Reject comparison operators split by whitespace in the raw input.

    Must run before normalization strips the whitespace.

    Raises:
        MalformedExpression: If an operator like "<=" is written "< ="
    """
    match = _SPLIT_OPERATOR_RE.search(expression)
    if match:
        raise MalformedExpression(
            f"Whitespace inside comparison operator {match.group()!r} "
            f"in expression: {expression}",
            expression,
        )


def split_chain(expression: str) -> tuple[list[str], list[str]]:
    """Split a normalized comparison into operands and operators.

    Returns:
        (operands, operators) with len(operands) == len(operators) + 1

    Raises:
        MalformedExpression: If there is no operator or an operand is empty
    """
    parts = _COMPARISON_RE.split(expression)
    operands, operators = parts[0::2], parts[1::2]

    if not operators:
        raise MalformedExpression(
            f"No comparison operator in expression: {expression}", expression
        )
    if not all(operands):
        raise MalformedExpression(
            f"Missing operand around comparison operator in expression: {expression}",
            expression,
        )

    return operands, operators


class Comparator:
    """Evaluates chained comparisons.

    Attributes:
        scale: Fractional digits compared
    """

    def __init__(self, evaluate: Callable[[str], Decimal], scale: int) -> None:
        """Initialize with an operand evaluator.

        Args:
            evaluate: Reduces one operand expression to a decimal value
            scale: Fractional digits compared
        """
        self._evaluate = evaluate
        self.scale = scale

    def is_true(self, expression: str) -> bool:
        """Return whether every adjacent pair in the chain holds.

        Operands after the first failing pair are not evaluated.
        """
        operands, operators = split_chain(expression)

        left = self._evaluate(operands[0])
        for operator, operand in zip(operators, operands[1:], strict=True):
            right = self._evaluate(operand)
            ordering = compare(left, right, self.scale)
            if not CHECKS[operator](ordering):
                logger.debug(
                    "comparison_failed",
                    left=to_plain(left),
                    operator=operator,
                    right=to_plain(right),
                )
                return False
            left = right

        logger.debug("comparison_evaluated", expression=expression, pairs=len(operators))
        return True

"""Error classes raised by the expression engine.

Every failure derives from ExpressionError, which is a ValueError, so callers
can catch a single type:

    from deccalc import Calculator, ExpressionError

    try:
        Calculator().evaluate(text)
    except ExpressionError as err:
        report(err.expression, str(err))
"""

from __future__ import annotations


class ExpressionError(ValueError):
    """Base class for expression evaluation errors.

    Attributes:
        expression: The (normalized) expression being evaluated, if known
    """

    def __init__(self, message: str, expression: str | None = None) -> None:
        super().__init__(message)
        self.expression = expression


class MalformedExpression(ExpressionError):
    """Expression structure is invalid.

    Unbalanced brackets, missing operands, stray commas, wrong function arity,
    or a missing comparison operator in a comparison.
    """

    pass


class DivisionByZero(ExpressionError, ArithmeticError):
    """Division or modulo by zero."""

    pass


class UnsupportedExpression(ExpressionError):
    """Expression uses something the engine cannot represent.

    Unknown characters or identifiers, and results that are not a signed
    decimal (complex or infinite fractional powers).
    """

    pass


__all__ = [
    "ExpressionError",
    "MalformedExpression",
    "DivisionByZero",
    "UnsupportedExpression",
]

"""deccalc - arbitrary-precision decimal expression evaluator."""

from deccalc.config import CalculatorConfig
from deccalc.constants import DEFAULT_SCALE
from deccalc.engine import Calculator
from deccalc.errors import (
    DivisionByZero,
    ExpressionError,
    MalformedExpression,
    UnsupportedExpression,
)
from deccalc.helpers import calc, is_true

__version__ = "0.1.0"
__all__ = [
    "Calculator",
    "CalculatorConfig",
    "DEFAULT_SCALE",
    "calc",
    "is_true",
    "ExpressionError",
    "MalformedExpression",
    "DivisionByZero",
    "UnsupportedExpression",
    "__version__",
]

"""Calculator engine: the public entry point of deccalc.

Wires the pipeline stages together:

    evaluate: normalize -> validate brackets -> parse -> reduce -> format
    is_true:  normalize -> split on comparisons -> reduce each operand -> compare
"""

from __future__ import annotations

from decimal import Decimal

import structlog

from deccalc.config import CalculatorConfig
from deccalc.expression.comparator import Comparator, check_operator_spacing
from deccalc.expression.formatting import format_result
from deccalc.expression.normalizer import normalize
from deccalc.expression.parser import parse
from deccalc.expression.reducer import Reducer
from deccalc.expression.validator import validate_brackets
from deccalc.math import fixed_decimal as fd

logger = structlog.get_logger()


class Calculator:
    """Arbitrary-precision decimal expression evaluator.

    Every arithmetic result is truncated to `scale` fractional digits.
    Instances hold no state beyond their frozen configuration, so they are
    safe to share between threads.

    Usage:
        calculator = Calculator(scale=20)
        calculator.evaluate("(1.0000000001 + 2.1) * 3 - 2^(1+4/2)")  # "1.3000000003"
        calculator.is_true("1 < 2 < 3")  # True
    """

    def __init__(
        self,
        scale: int | None = None,
        *,
        config: CalculatorConfig | None = None,
    ) -> None:
        """Initialize with an explicit scale, a config, or the environment.

        Args:
            scale: Fractional digits to keep. Takes precedence over config.
            config: Full configuration. When neither argument is given,
                CalculatorConfig.from_env() is used (DECCALC_SCALE, else 15).

        Raises:
            pydantic.ValidationError: If scale is negative
        """
        if scale is not None:
            config = CalculatorConfig(scale=scale)
        self._config = config or CalculatorConfig.from_env()
        self._reducer = Reducer(self._config.scale)
        self._comparator = Comparator(self._reduce, self._config.scale)

    @property
    def config(self) -> CalculatorConfig:
        """The engine configuration."""
        return self._config

    @property
    def scale(self) -> int:
        """Fractional digits kept in arithmetic results."""
        return self._config.scale

    def __repr__(self) -> str:
        return f"Calculator(scale={self.scale})"

    def _reduce(self, expression: str) -> Decimal:
        """Reduce an expression to a decimal value without formatting it."""
        normalized = normalize(expression, self.scale)
        validate_brackets(normalized)
        return self._reducer.reduce(parse(normalized))

    def evaluate(self, expression: str, cut_trailing_zeroes: bool = True) -> str:
        """Evaluate an arithmetic expression.

        Example: "1 + 1.2 * 3" returns "4.6".

        Args:
            expression: Numbers, + - * / % ^, brackets, abs/min/max calls
            cut_trailing_zeroes: Drop trailing fractional zeroes (default True)

        Returns:
            The result as a plain decimal string

        Raises:
            MalformedExpression: On structural errors (brackets, operands, arity)
            DivisionByZero: On division or modulo by zero
            UnsupportedExpression: On unknown characters or names
        """
        result = format_result(self._reduce(expression), cut_trailing_zeroes)
        logger.debug("expression_evaluated", expression=expression, result=result)
        return result

    # Alias matching the calc() helper
    calc = evaluate

    def is_true(self, expression: str) -> bool:
        """Check a (possibly chained) comparison.

        Example: "1.2 * 3 == 3.6" and "1 < 2 < (1 - 3 + 5)" are both true.
        Operators: < > <= >= and = == === (all equality).

        Raises:
            MalformedExpression: If there is no comparison operator, an operand
                is missing, or an operand is malformed
            DivisionByZero: On division or modulo by zero in an evaluated operand
            UnsupportedExpression: On unknown characters or names
        """
        check_operator_spacing(expression)
        return self._comparator.is_true(normalize(expression, self.scale))

    def power(self, base: str, exponent: str) -> str:
        """Raise base to a possibly fractional exponent.

        Integer exponents are exact; fractional ones go through a float step
        rendered to 14 significant digits.

        Args:
            base: Decimal string (any expression is accepted)
            exponent: Decimal string (any expression is accepted)

        Returns:
            The result at scale, trailing zeroes kept. A zero base gives "0".
        """
        result = fd.power(self._reduce(base), self._reduce(exponent), self.scale)
        return format_result(result, cut_trailing_zeroes=False)

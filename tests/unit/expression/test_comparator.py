"""Tests for chained comparison evaluation."""

from decimal import Decimal

import pytest

from deccalc.errors import MalformedExpression
from deccalc.expression.comparator import (
    CHECKS,
    Comparator,
    check_operator_spacing,
    split_chain,
)


class RecordingEvaluator:
    """Operand evaluator that parses plain numbers and records calls."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def __call__(self, operand: str) -> Decimal:
        self.calls.append(operand)
        return Decimal(operand)


@pytest.fixture
def evaluator() -> RecordingEvaluator:
    return RecordingEvaluator()


@pytest.fixture
def comparator(evaluator: RecordingEvaluator) -> Comparator:
    return Comparator(evaluator, scale=15)


class TestSplitChain:
    """Tests for split_chain."""

    def test_single_comparison(self):
        """One operator gives two operands."""
        assert split_chain("1<2") == (["1", "2"], ["<"])

    def test_two_character_operators(self):
        """<= and >= are not split in two."""
        assert split_chain("1<=2>=0") == (["1", "2", "0"], ["<=", ">="])

    def test_equality_spellings(self):
        """=, == and === are captured whole."""
        assert split_chain("1=1==1===1") == (["1", "1", "1", "1"], ["=", "==", "==="])

    def test_operands_keep_arithmetic(self):
        """Operands may contain arithmetic, brackets and calls."""
        assert split_chain("min(1,2)*3<(4-1)") == (["min(1,2)*3", "(4-1)"], ["<"])

    @pytest.mark.parametrize("expression", ["1", "1+2", "", "abs(-1)"])
    def test_no_operator_raises(self, expression):
        """Expressions without comparison operators are malformed."""
        with pytest.raises(MalformedExpression) as exc_info:
            split_chain(expression)
        assert "No comparison operator" in str(exc_info.value)

    @pytest.mark.parametrize("expression", ["1<", "<1", "1==", "1<2<", "1<>2", "1====2", "1=<2"])
    def test_missing_operand_raises(self, expression):
        """Every operator needs an operand on both sides."""
        with pytest.raises(MalformedExpression) as exc_info:
            split_chain(expression)
        assert "Missing operand" in str(exc_info.value)


class TestOperatorSpacing:
    """Tests for check_operator_spacing."""

    @pytest.mark.parametrize("expression", ["1 < = 2", "1 >  = 2", "1 = = 2"])
    def test_split_operator_raises(self, expression):
        """Whitespace inside an operator is rejected."""
        with pytest.raises(MalformedExpression):
            check_operator_spacing(expression)

    @pytest.mark.parametrize("expression", ["1 <= 2", "1 < 2", "1 == -2", "1 < -(2)"])
    def test_spaced_operands_pass(self, expression):
        """Whitespace around operators is fine."""
        check_operator_spacing(expression)


class TestChecks:
    """Tests for the comparison predicates."""

    @pytest.mark.parametrize(
        ("operator", "ordering", "expected"),
        [
            (">=", 1, True),
            (">=", 0, True),
            (">=", -1, False),
            ("<=", -1, True),
            ("<=", 0, True),
            ("<=", 1, False),
            (">", 1, True),
            (">", 0, False),
            ("<", -1, True),
            ("<", 0, False),
            ("=", 0, True),
            ("==", 1, False),
            ("===", 0, True),
        ],
    )
    def test_predicate(self, operator, ordering, expected):
        """Each operator maps the three-way result correctly."""
        assert CHECKS[operator](ordering) is expected


class TestComparator:
    """Tests for Comparator.is_true."""

    def test_true_chain(self, comparator):
        """1<2<3 holds."""
        assert comparator.is_true("1<2<3") is True

    def test_pairwise_not_transitive(self, comparator):
        """1<2>0 holds because each adjacent pair holds."""
        assert comparator.is_true("1<2>0") is True

    def test_false_chain(self, comparator):
        """1<2>3 fails on the second pair."""
        assert comparator.is_true("1<2>3") is False

    def test_equality_formats(self, comparator):
        """1.0 == 1 === 1.000000000."""
        assert comparator.is_true("1.0==1===1.000000000") is True

    def test_short_circuit(self, comparator, evaluator):
        """Operands after the first failing pair are not evaluated."""
        assert comparator.is_true("2<1<5<6") is False
        assert evaluator.calls == ["2", "1"]

    def test_each_operand_evaluated_once(self, comparator, evaluator):
        """Shared operands are evaluated a single time."""
        assert comparator.is_true("1<2<3") is True
        assert evaluator.calls == ["1", "2", "3"]

    def test_scale_limits_comparison(self, evaluator):
        """Digits beyond the scale are ignored."""
        assert Comparator(evaluator, scale=2).is_true("1.001=1.009") is True

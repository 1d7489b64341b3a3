"""Arithmetic reduction of expression trees.

Walks a parsed tree bottom-up and applies fixed-scale decimal operations.
Brackets and function calls are already nested nodes, so each BinaryOp sees
fully reduced operands.
"""

from __future__ import annotations

from collections.abc import Callable
from decimal import Decimal

from deccalc.expression.nodes import BinaryOp, FunctionCall, Negate, Node, Number
from deccalc.math import fixed_decimal as fd

BinaryOperation = Callable[[Decimal, Decimal, int], Decimal]

OPERATIONS: dict[str, BinaryOperation] = {
    "+": fd.add,
    "-": fd.sub,
    "*": fd.mul,
    "/": fd.div,
    "%": fd.mod,
    "^": fd.power,
}


class Reducer:
    """Evaluates expression trees at a fixed scale.

    Attributes:
        scale: Fractional digits kept in every operation result
    """

    def __init__(self, scale: int) -> None:
        self.scale = scale

    def reduce(self, node: Node) -> Decimal:
        """Reduce a tree to a single decimal value.

        Walks the tree with an explicit stack, so evaluation depth is not
        bounded by the Python call stack.

        Raises:
            DivisionByZero: On `/` or `%` by zero
            UnsupportedExpression: On powers with no real decimal result
        """
        values: list[Decimal] = []
        # (node, children already reduced)
        stack: list[tuple[Node, bool]] = [(node, False)]

        while stack:
            current, expanded = stack.pop()
            if isinstance(current, Number):
                values.append(current.value)
            elif not expanded:
                stack.append((current, True))
                stack.extend((child, False) for child in reversed(_children(current)))
            elif isinstance(current, Negate):
                values.append(values.pop().copy_negate())
            elif isinstance(current, BinaryOp):
                right = values.pop()
                left = values.pop()
                values.append(OPERATIONS[current.operator](left, right, self.scale))
            else:
                count = len(current.arguments)
                arguments = values[-count:]
                del values[-count:]
                values.append(self._call(current.name, arguments))

        return values.pop()

    def _call(self, name: str, values: list[Decimal]) -> Decimal:
        if name == "abs":
            return values[0].copy_abs()

        # min/max compare at scale; the first of equal values wins
        best = values[0]
        for value in values[1:]:
            ordering = fd.compare(value, best, self.scale)
            if (name == "min" and ordering < 0) or (name == "max" and ordering > 0):
                best = value
        return best


def _children(node: Node) -> tuple[Node, ...]:
    if isinstance(node, Negate):
        return (node.operand,)
    if isinstance(node, BinaryOp):
        return (node.left, node.right)
    if isinstance(node, FunctionCall):
        return node.arguments
    raise TypeError(f"Unknown expression node: {type(node).__name__}")

"""Expression tree node types.

The parser resolves brackets and function calls into nested nodes, so the
reducer never sees raw text.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Number:
    """Numeric literal, kept exactly as written."""

    value: Decimal


@dataclass(frozen=True)
class Negate:
    """Unary minus applied to an operand."""

    operand: Node


@dataclass(frozen=True)
class BinaryOp:
    """Binary arithmetic operation: left <operator> right.

    Attributes:
        operator: One of + - * / % ^
        left: Left operand
        right: Right operand
    """

    operator: str
    left: Node
    right: Node


@dataclass(frozen=True)
class FunctionCall:
    """Call to a built-in function (abs, min, max)."""

    name: str
    arguments: tuple[Node, ...]


Node = Number | Negate | BinaryOp | FunctionCall

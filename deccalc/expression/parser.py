"""Tokenizer and operator-precedence parser for arithmetic expressions.

Grammar (every binary tier is left-associative, `^` included):

    expression := term (("+" | "-") term)*
    term       := power (("*" | "/" | "%") power)*
    power      := unary ("^" unary)*
    unary      := ("-" | "+") unary | primary
    primary    := NUMBER | "(" expression ")" | NAME "(" arguments ")"
    arguments  := expression ("," expression)*

A unary sign binds to its operand before any binary operator, the way a signed
literal would: -2^2 is (-2)^2 and 2^-2 is 2^(-2). A run of signs collapses to
one negation or none.

Input must already be normalized (no whitespace, no scientific literals).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum

from deccalc.constants import FUNCTIONS
from deccalc.errors import MalformedExpression, UnsupportedExpression
from deccalc.expression.nodes import BinaryOp, FunctionCall, Negate, Node, Number


class TokenKind(Enum):
    """Kinds of lexical tokens."""

    NUMBER = "number"
    NAME = "name"
    OPERATOR = "operator"
    LPAREN = "lparen"
    RPAREN = "rparen"
    COMMA = "comma"
    END = "end"


@dataclass(frozen=True)
class Token:
    """A lexical token and its offset in the normalized expression."""

    kind: TokenKind
    text: str
    position: int


_TOKEN_RE = re.compile(
    r"""
    (?P<number>\d+(?:\.\d+)?)
  | (?P<name>[A-Za-z_]+)
  | (?P<operator>[-+*/%^])
  | (?P<lparen>\()
  | (?P<rparen>\))
  | (?P<comma>,)
  | (?P<comparison>[<>=]+)
    """,
    re.VERBOSE,
)

# (min, max) argument counts; None means unbounded
_ARITY: dict[str, tuple[int, int | None]] = {
    "abs": (1, 1),
    "min": (2, None),
    "max": (2, None),
}

_ADDITIVE = frozenset("+-")


def tokenize(expression: str) -> list[Token]:
    """Split a normalized expression into tokens, ending with an END token.

    Raises:
        UnsupportedExpression: On characters or names outside the grammar ($, !, x)
        MalformedExpression: On comparison operators, which only is_true() accepts
    """
    tokens: list[Token] = []
    position = 0
    while position < len(expression):
        match = _TOKEN_RE.match(expression, position)
        if match is None:
            raise UnsupportedExpression(
                f"Unsupported character {expression[position]!r} at position {position} "
                f"in expression: {expression}",
                expression,
            )

        kind = match.lastgroup
        if kind == "comparison":
            raise MalformedExpression(
                f"Comparison operator {match.group()!r} in arithmetic expression "
                f"(use is_true for comparisons): {expression}",
                expression,
            )

        if kind == "name" and match.group() not in FUNCTIONS:
            raise UnsupportedExpression(
                f"Unknown name {match.group()!r} at position {position} "
                f"in expression: {expression}",
                expression,
            )

        tokens.append(Token(TokenKind(kind), match.group(), position))
        position = match.end()

    tokens.append(Token(TokenKind.END, "", position))
    return tokens


@dataclass
class _Frame:
    """An open bracket or function call waiting for its ')'."""

    token: Token
    name: str | None = None
    arguments: int = 1


# Marker for a pending unary minus; binds tighter than every binary operator
_NEGATE = "neg"

_PRECEDENCE: dict[str, int] = {
    "+": 1,
    "-": 1,
    "*": 2,
    "/": 2,
    "%": 2,
    "^": 3,
    _NEGATE: 4,
}


class Parser:
    """Builds an expression tree from tokens.

    Operator precedence parsing with an operand stack and a pending-operator
    stack, so neither long operator chains nor deep bracket nesting grow the
    Python call stack.

    Usage:
        tree = Parser(tokenize("2*(1+1)"), "2*(1+1)").parse()
    """

    def __init__(self, tokens: list[Token], expression: str) -> None:
        self._tokens = tokens
        self._expression = expression
        self._index = 0
        self._operands: list[Node] = []
        self._pending: list[str | _Frame] = []

    # --- Token helpers ---

    def _peek(self) -> Token:
        return self._tokens[self._index]

    def _advance(self) -> Token:
        token = self._tokens[self._index]
        if token.kind is not TokenKind.END:
            self._index += 1
        return token

    def _at_operator(self, operators: frozenset[str] | str) -> bool:
        token = self._peek()
        return token.kind is TokenKind.OPERATOR and token.text in operators

    def _error(self, message: str) -> MalformedExpression:
        token = self._peek()
        found = repr(token.text) if token.kind is not TokenKind.END else "end of expression"
        return MalformedExpression(
            f"{message}, found {found} at position {token.position} "
            f"in expression: {self._expression}",
            self._expression,
        )

    def _expect(self, kind: TokenKind, description: str) -> Token:
        if self._peek().kind is not kind:
            raise self._error(f"Expected {description}")
        return self._advance()

    # --- Parsing ---

    def parse(self) -> Node:
        """Parse the whole token stream.

        Raises:
            MalformedExpression: On missing operands, stray tokens or bad arity
        """
        expect_operand = True
        while True:
            token = self._peek()
            if expect_operand:
                expect_operand = self._read_operand(token)
            elif token.kind is TokenKind.OPERATOR:
                self._push_operator(self._advance().text)
                expect_operand = True
            elif token.kind is TokenKind.RPAREN:
                self._close_frame()
            elif token.kind is TokenKind.COMMA:
                self._next_argument()
                expect_operand = True
            elif token.kind is TokenKind.END:
                return self._finish()
            else:
                raise self._error("Expected an operator")

    def _read_operand(self, token: Token) -> bool:
        """Consume a token in operand position.

        Returns:
            True while an operand is still expected (after a sign or '(')
        """
        if token.kind is TokenKind.OPERATOR and token.text in _ADDITIVE:
            # A run of signs collapses to a single negation or none
            negative = False
            while self._at_operator(_ADDITIVE):
                negative ^= self._advance().text == "-"
            if negative:
                self._pending.append(_NEGATE)
            return True

        if token.kind is TokenKind.NUMBER:
            self._advance()
            self._operands.append(Number(Decimal(token.text)))
            return False

        if token.kind is TokenKind.LPAREN:
            self._pending.append(_Frame(self._advance()))
            return True

        if token.kind is TokenKind.NAME:
            self._advance()
            self._expect(TokenKind.LPAREN, f"'(' after {token.text}")
            self._pending.append(_Frame(token, name=token.text))
            return True

        raise self._error("Expected a number, '(' or a function call")

    def _push_operator(self, operator: str) -> None:
        # Every tier is left-associative, so equal precedence reduces first
        precedence = _PRECEDENCE[operator]
        while self._pending:
            top = self._pending[-1]
            if isinstance(top, _Frame) or _PRECEDENCE[top] < precedence:
                break
            self._apply(self._pending.pop())
        self._pending.append(operator)

    def _apply(self, operator: str) -> None:
        if operator == _NEGATE:
            self._operands.append(Negate(self._operands.pop()))
            return
        right = self._operands.pop()
        left = self._operands.pop()
        self._operands.append(BinaryOp(operator, left, right))

    def _unwind(self) -> _Frame | None:
        """Apply pending operators down to the innermost open frame."""
        while self._pending:
            top = self._pending[-1]
            if isinstance(top, _Frame):
                return top
            self._apply(self._pending.pop())
        return None

    def _close_frame(self) -> None:
        frame = self._unwind()
        if frame is None:
            raise self._error("Unexpected ')'")
        self._advance()
        self._pending.pop()

        if frame.name is None:
            return

        arguments = tuple(self._operands[-frame.arguments :])
        del self._operands[-frame.arguments :]
        self._check_arity(frame.name, len(arguments))
        self._operands.append(FunctionCall(frame.name, arguments))

    def _next_argument(self) -> None:
        frame = self._unwind()
        if frame is None or frame.name is None:
            raise self._error("Unexpected ','")
        self._advance()
        frame.arguments += 1

    def _finish(self) -> Node:
        frame = self._unwind()
        if frame is not None:
            closing = f"')' closing {frame.name}(" if frame.name else "')'"
            raise self._error(f"Expected {closing}")
        return self._operands.pop()

    def _check_arity(self, name: str, count: int) -> None:
        minimum, maximum = _ARITY[name]
        if count < minimum or (maximum is not None and count > maximum):
            expected = str(minimum) if minimum == maximum else f"at least {minimum}"
            raise MalformedExpression(
                f"{name}() takes {expected} argument(s), got {count} "
                f"in expression: {self._expression}",
                self._expression,
            )


def parse(expression: str) -> Node:
    """Tokenize and parse a normalized expression into a tree."""
    return Parser(tokenize(expression), expression).parse()

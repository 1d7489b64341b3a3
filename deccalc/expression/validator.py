"""Structural checks run before any arithmetic."""

from __future__ import annotations

from deccalc.errors import MalformedExpression


def validate_brackets(expression: str) -> None:
    """Ensure every `(` has a matching `)` that follows it.

    Raises:
        MalformedExpression: If brackets are unbalanced or closed before opened
    """
    depth = 0
    for char in expression:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise MalformedExpression(
                    f"Unexpected ')' in expression: {expression}", expression
                )

    if depth != 0:
        raise MalformedExpression(
            f"Unbalanced brackets ({depth} unclosed) in expression: {expression}",
            expression,
        )

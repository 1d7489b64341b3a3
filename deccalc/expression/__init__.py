"""Expression pipeline stages.

- normalizer: whitespace, scientific literals, implicit multiplication
- validator: bracket balance
- parser: tokens and expression tree (brackets and function calls)
- reducer: fixed-scale arithmetic over the tree
- comparator: chained comparisons
- formatting: result rendering
"""

from deccalc.expression.comparator import Comparator, check_operator_spacing, split_chain
from deccalc.expression.formatting import format_result, trim_trailing_zeroes
from deccalc.expression.nodes import BinaryOp, FunctionCall, Negate, Node, Number
from deccalc.expression.normalizer import normalize
from deccalc.expression.parser import Parser, Token, TokenKind, parse, tokenize
from deccalc.expression.reducer import Reducer
from deccalc.expression.validator import validate_brackets

__all__ = [
    # Stages
    "normalize",
    "validate_brackets",
    "tokenize",
    "parse",
    "Parser",
    "Reducer",
    "Comparator",
    "check_operator_spacing",
    "split_chain",
    "format_result",
    "trim_trailing_zeroes",
    # Tree
    "Node",
    "Number",
    "Negate",
    "BinaryOp",
    "FunctionCall",
    # Tokens
    "Token",
    "TokenKind",
]

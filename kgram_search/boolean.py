"""
Boolean query parsing and evaluation.

Expressions are flat sequences of single-word terms joined by the binary
operators '&&' (AND) and '||' (OR). There are no parentheses; '&&' binds
tighter than '||' and both are left associative.
"""

import logging
from typing import List, Sequence

from .indexer import intersect_posting, union_posting

logger = logging.getLogger(__name__)

AND = "&&"
OR = "||"

# Larger value binds tighter
PRECEDENCE = {OR: 1, AND: 2}


def split_trim_to_lower(text: str, separator: str) -> List[str]:
    """Split text on separator, then strip and lowercase every piece."""
    return [piece.strip().lower() for piece in text.split(separator)]


def parse_infix(expr: str) -> List[str]:
    """
    Split an expression into an infix token list.

    The expression is split on '&&' first, then every chunk on '||', and the
    operators are re-inserted between the pieces. Empty pieces are kept.

    Example:
        "A&& B &&C||D" -> ["a", "&&", "b", "&&", "c", "||", "d"]

    Args:
        expr: Boolean expression.

    Returns:
        Alternating list of terms and operators.
    """
    output = []
    for chunk in split_trim_to_lower(expr, AND):
        for term in split_trim_to_lower(chunk, OR):
            output.extend((term, OR))
        output[-1] = AND
    return output[:-1]


def shunting_yard(tokens: Sequence[str]) -> List[str]:
    """
    Reorder infix tokens into postfix (reverse Polish) order.

    Only binary, left-associative operators from PRECEDENCE are handled.

    Args:
        tokens: Infix tokens.

    Returns:
        Postfix tokens.
    """
    output = []
    operators = []
    for token in tokens:
        if token not in PRECEDENCE:
            output.append(token)
            continue
        # Equal precedence pops too: left associativity
        while operators and PRECEDENCE[operators[-1]] >= PRECEDENCE[token]:
            output.append(operators.pop())
        operators.append(token)
    output.extend(reversed(operators))
    return output


def evaluate_postfix(postfix: Sequence[str], index) -> List[int]:
    """
    Evaluate a postfix expression against an inverted index.

    A malformed expression yields an empty result instead of an error.

    Args:
        postfix: Postfix tokens from shunting_yard().
        index: InvertedIndex to look terms up in.

    Returns:
        Ascending list of matching document IDs.
    """
    stack = []
    for token in postfix:
        if token in PRECEDENCE:
            if len(stack) < 2:
                logger.warning("Malformed boolean expression: operator %r lacks operands", token)
                return []
            right = stack.pop()
            left = stack.pop()
            if token == AND:
                stack.append(intersect_posting(left, right))
            else:
                stack.append(union_posting(left, right))
        else:
            stack.append(index.intersect([token]))

    if len(stack) != 1:
        logger.warning("Malformed boolean expression: %d values left on the stack", len(stack))
        return []
    return stack[0]


def evaluate(expr: str, index) -> List[int]:
    """
    Answer a boolean query.

    Expressions using a single kind of operator (or none) are answered with a
    plain intersect or union; mixed expressions go through shunting-yard.

    Args:
        expr: Boolean expression, e.g. "statistic && coefficient || kappa".
        index: InvertedIndex to search.

    Returns:
        Ascending list of matching document IDs.
    """
    has_and = AND in expr
    has_or = OR in expr
    if has_and and has_or:
        return evaluate_postfix(shunting_yard(parse_infix(expr)), index)
    if has_or:
        return index.union(split_trim_to_lower(expr, OR))
    return index.intersect(split_trim_to_lower(expr, AND))

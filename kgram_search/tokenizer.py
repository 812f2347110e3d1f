"""
Tokenization helpers.

This module splits raw text into the lowercase terms stored in the indexes,
and counts words for document length normalization.
"""

import re
from typing import List

TOKEN_SPLIT = re.compile(r"[^a-zA-Z0-9]+")
WILDCARD_TOKEN_SPLIT = re.compile(r"[^a-zA-Z0-9*?]+")


def _split(regex, text: str) -> List[str]:
    return [piece.lower() for piece in regex.split(text) if piece]


def tokenize(text: str) -> List[str]:
    """
    Split text into lowercase alphanumeric tokens.

    Any run of characters outside [a-zA-Z0-9] acts as a separator. Order and
    duplicates are preserved.

    Args:
        text: Raw text.

    Returns:
        List of tokens.
    """
    return _split(TOKEN_SPLIT, text)


def tokenize_wildcard(text: str) -> List[str]:
    """
    Same as tokenize(), but keeps the wildcard characters '*' and '?'.

    Args:
        text: Raw query text.

    Returns:
        List of tokens, possibly containing wildcards.
    """
    return _split(WILDCARD_TOKEN_SPLIT, text)


def word_count(text: str) -> int:
    """Number of whitespace-separated words in text."""
    return len(text.split())

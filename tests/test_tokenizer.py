"""Unit tests for tokenization and word counting."""

import pytest

from kgram_search.tokenizer import tokenize, tokenize_wildcard, word_count


@pytest.mark.unit
class TestTokenize:
    """Tests for tokenize."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Test string.", ["test", "string"]),
            ("I'm 23 years old.", ["i", "m", "23", "years", "old"]),
            ("3d!e-fg.", ["3d", "e", "fg"]),
            ("Code-division multiple access", ["code", "division", "multiple", "access"]),
        ],
    )
    def test_splits_on_non_alphanumeric(self, text, expected):
        assert tokenize(text) == expected

    def test_empty_and_punctuation_only(self):
        assert tokenize("") == []
        assert tokenize("?!... --") == []

    def test_preserves_duplicates_and_order(self):
        assert tokenize("to be or not to be") == ["to", "be", "or", "not", "to", "be"]

    def test_drops_wildcards(self):
        assert tokenize("w?ld*rd") == ["w", "ld", "rd"]


@pytest.mark.unit
class TestTokenizeWildcard:
    """Tests for tokenize_wildcard."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Test string.", ["test", "string"]),
            ("W?ld*rd.", ["w?ld*rd"]),
            ("*me ?? *.", ["*me", "??", "*"]),
        ],
    )
    def test_keeps_wildcards(self, text, expected):
        assert tokenize_wildcard(text) == expected


@pytest.mark.unit
class TestWordCount:
    """Tests for word_count."""

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("My name is John.", 4),
            ("  to be  or not    to be", 6),
            ("Document A: This is a hat. This is a cat.", 10),
            ("", 0),
        ],
    )
    def test_counts_whitespace_fields(self, text, expected):
        assert word_count(text) == expected

"""
String matching primitives and result formatting.

This module contains the pure helper functions shared by the indexes and the
searcher (edit distance, wildcard matching, k-gram generation), and the
console formatter used to display search results.
"""

import re
from typing import List, Optional, Sequence

from rapidfuzz.distance import Levenshtein

KGRAM_PAD = "$"
WILDCARD_CHARS = ("*", "?")


def edit_distance(s1: str, s2: str, max_distance: Optional[int] = None) -> int:
    """
    Levenshtein distance between two strings.

    Insertions, deletions and substitutions all cost 1.

    Args:
        s1: First string.
        s2: Second string.
        max_distance: If given, the computation may stop once the distance is
            known to exceed it, in which case max_distance + 1 is returned.

    Returns:
        Minimum number of single-character edits turning s1 into s2.
    """
    return Levenshtein.distance(s1, s2, score_cutoff=max_distance)


def wildcard_match(pattern: str, text: str) -> bool:
    """
    Test whether text matches pattern in full.

    '?' matches exactly one character and '*' matches any run of characters,
    including the empty one.

    Args:
        pattern: Pattern possibly containing '*' and '?'.
        text: Candidate string.

    Returns:
        True if the whole of text matches the whole of pattern.
    """
    rows, cols = len(pattern) + 1, len(text) + 1
    m = [[False] * cols for _ in range(rows)]
    m[0][0] = True
    for i in range(1, rows):
        m[i][0] = pattern[i - 1] == "*" and m[i - 1][0]

    for i in range(1, rows):
        p = pattern[i - 1]
        for j in range(1, cols):
            if p == "*":
                m[i][j] = m[i][j - 1] or m[i - 1][j]
            elif p == "?" or p == text[j - 1]:
                m[i][j] = m[i - 1][j - 1]
    return m[-1][-1]


def build_kgrams(term: str, k: int) -> List[str]:
    """
    Generate the k-grams of a term, padded with '$' at both ends.

    A term of length n >= k - 1 yields n + k - 1 grams, e.g. "hello" with
    k=3 gives $$h, $he, hel, ell, llo, lo$, o$$. Shorter terms yield the term
    itself as the only gram.

    Args:
        term: Term to split.
        k: Gram length.

    Returns:
        List of grams in left-to-right order.
    """
    term = term.lower()
    if len(term) < k - 1:
        return [term]
    padding = KGRAM_PAD * (k - 1)
    padded = padding + term + padding
    return [padded[i:i + k] for i in range(len(term) + k - 1)]


def has_wildcard(text: str) -> bool:
    return any(c in text for c in WILDCARD_CHARS)


def get_fuzziness(term: str) -> int:
    """Maximum edit distance tolerated for a fuzzy query term of this length."""
    if len(term) <= 2:
        return 0
    if len(term) <= 5:
        return 1
    return 2


class ResultFormatter:
    """Handles result formatting and display."""

    def __init__(self, config):
        """Initialize with configuration."""
        self.config = config

    def _format_tokens(self, tokens: List[str], maxn: int = 12) -> str:
        """Return tokens as a compact string; truncate long lists with an ellipsis."""
        if len(tokens) <= maxn:
            return "[" + ", ".join(tokens) + "]"
        head = ", ".join(tokens[:maxn // 2])
        tail = ", ".join(tokens[-maxn // 2:])
        return "[" + head + ", …, " + tail + "]"

    def highlight_words(self, text: str, words: Sequence[str]) -> str:
        """
        Wrap whole-word matches of the given words with the highlight markers.

        Args:
            text: Text to highlight.
            words: Words to highlight.

        Returns:
            Highlighted text.
        """
        # Longer words first so they are not shadowed by their prefixes
        uniq = sorted({w for w in words if w}, key=len, reverse=True)
        if not uniq:
            return text

        def repl(match):
            return f"{self.config.HIGHLIGHT_START}{match.group(0)}{self.config.HIGHLIGHT_END}"

        patterns = [r"\b" + re.escape(w) + r"\b" for w in uniq]
        flags = re.IGNORECASE if not self.config.HIGHLIGHT_CASE_SENSITIVE else 0
        regex = re.compile("|".join(patterns), flags=flags)
        return regex.sub(repl, text)

    def make_snippet(self, text: str, query_words: Sequence[str], max_chars: int = None) -> str:
        """
        Produce a snippet with highlighted query words, trimmed to max_chars.

        Args:
            text: Text to create snippet from.
            query_words: Words to highlight in snippet.
            max_chars: Maximum characters in snippet.

        Returns:
            Highlighted snippet string.
        """
        if max_chars is None:
            max_chars = self.config.SNIPPET_CHARS

        # Highlight first, then trim so markers are visible
        highlighted = self.highlight_words(text, query_words)
        if len(highlighted) <= max_chars:
            return highlighted.replace("\n", " ")

        marker = highlighted.find(self.config.HIGHLIGHT_START)
        if marker == -1:
            return highlighted[:max_chars].replace("\n", " ")

        # Center window around the first marker
        start = max(0, marker - max_chars // 3)
        end = min(len(highlighted), start + max_chars)
        snippet = highlighted[start:end]

        if start > 0:
            snippet = "…" + snippet
        if end < len(highlighted):
            snippet = snippet + "…"

        return snippet.replace("\n", " ")

    def print_results_table(self, documents, query_words: List[str], max_chars: int = None) -> None:
        """
        Render ranked documents as an ASCII table.

        Args:
            documents: Documents in rank order.
            query_words: Query words to highlight in snippets.
            max_chars: Maximum characters in snippet.
        """
        if max_chars is None:
            max_chars = self.config.SNIPPET_CHARS

        if not documents:
            print("No matching documents found.")
            return

        rows = []
        for rank, doc in enumerate(documents, start=1):
            snippet = self.make_snippet(doc.body, query_words, max_chars=max_chars)
            rows.append([str(rank), str(doc.id), doc.title, doc.url, snippet])

        headers = ["#", "ID", "Title", "URL", "Snippet"]

        # Compute column widths with caps for Title, URL and Snippet
        max_widths = [3, 8, 40, 50, max_chars]
        col_widths = []
        for j, h in enumerate(headers):
            width = len(h)
            for row in rows:
                width = max(width, len(row[j]))
            col_widths.append(min(width, max_widths[j]))

        def clip_pad(s, w):
            if len(s) > w:
                return s[: max(0, w - 1)] + "…" if w >= 2 else s[:w]
            return s.ljust(w)

        line = " | ".join(clip_pad(h, col_widths[i]) for i, h in enumerate(headers))
        sep = "-+-".join("-" * col_widths[i] for i in range(len(headers)))
        print("\n=== Top Results ===")
        print(line)
        print(sep)
        for row in rows:
            print(" | ".join(clip_pad(row[i], col_widths[i]) for i in range(len(headers))))

        q_preview = self._format_tokens(list(query_words), maxn=12)
        print(f"\n(query terms used: {q_preview})\n")

    def print_results_simple(self, documents, query_words: List[str], max_chars: int = None) -> None:
        """Print a simple list view of ranked documents."""
        if max_chars is None:
            max_chars = self.config.SNIPPET_CHARS

        if not documents:
            print("No matching documents found.")
            return

        print("\n=== Top Results ===")
        for rank, doc in enumerate(documents, start=1):
            snippet = self.make_snippet(doc.body, query_words, max_chars=max_chars)
            print(f"#{rank}  id={doc.id}  title={doc.title}  url={doc.url}")
            print(f"     {snippet}")

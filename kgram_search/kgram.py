"""
K-gram index for fuzzy and wildcard term lookup.

Every indexed term is registered under each of its padded k-grams. Candidate
terms are found by counting shared grams, then verified with edit distance
(fuzzy) or a full wildcard match done by the caller.
"""

import logging
from collections import Counter, defaultdict
from typing import Dict, List, Set

from .utils import build_kgrams, edit_distance, has_wildcard

logger = logging.getLogger(__name__)


def lower_bound_overlap(s1: str, s2: str, max_edit_distance: int, k: int) -> int:
    """Minimum number of shared k-grams for two strings within max_edit_distance."""
    return max(len(s1), len(s2)) - 1 - (max_edit_distance - 1) * k


class KGramIndex:
    """Maps each k-gram to the set of terms containing it."""

    def __init__(self, k: int = 3):
        if k < 1:
            raise ValueError(f"k must be positive, got {k}")
        self.k = k
        self.grams: Dict[str, Set[str]] = defaultdict(set)
        self._frozen = False

    def __len__(self) -> int:
        return len(self.grams)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add_term(self, term: str) -> None:
        """Register term under each of its k-grams."""
        if self._frozen:
            raise RuntimeError("Cannot add terms to a frozen k-gram index")
        for gram in build_kgrams(term, self.k):
            self.grams[gram].add(term)

    def freeze(self) -> None:
        """Make the gram -> terms mapping read-only."""
        if self._frozen:
            return
        self.grams = {gram: frozenset(terms) for gram, terms in self.grams.items()}
        self._frozen = True
        logger.debug("Froze k-gram index with %d grams", len(self.grams))

    def terms_for(self, gram: str) -> Set[str]:
        return self.grams.get(gram, frozenset())

    def kgram_overlap(self, query: str) -> Dict[str, int]:
        """
        Count the k-grams each indexed term shares with the query.

        Args:
            query: Query term.

        Returns:
            Mapping from candidate term to number of shared grams.
        """
        count = Counter()
        for gram in build_kgrams(query, self.k):
            count.update(self.terms_for(gram))
        return dict(count)

    def kgram_match(self, query: str) -> List[str]:
        """
        Terms containing every literal k-gram of a wildcard query.

        Grams containing '*' or '?' are skipped. The result is a superset of
        the terms matching the pattern and must be filtered with
        wildcard_match().

        Args:
            query: Query term, possibly containing wildcards.

        Returns:
            Sorted list of candidate terms.
        """
        count = Counter()
        literal_grams = 0
        for gram in build_kgrams(query, self.k):
            if has_wildcard(gram):
                continue
            literal_grams += 1
            count.update(self.terms_for(gram))
        return sorted(term for term, c in count.items() if c == literal_grams)

    def get_close_terms(self, query: str, max_edit_distance: int) -> List[str]:
        """
        Indexed terms within max_edit_distance of the query.

        Edit distance is only computed for candidates whose k-gram overlap
        reaches the lower bound for that distance.

        Args:
            query: Query term.
            max_edit_distance: Largest accepted Levenshtein distance.

        Returns:
            Sorted list of close terms.
        """
        terms = []
        for term, overlap in self.kgram_overlap(query).items():
            if overlap < lower_bound_overlap(query, term, max_edit_distance, self.k):
                continue
            if edit_distance(query, term, max_distance=max_edit_distance) <= max_edit_distance:
                terms.append(term)
        return sorted(terms)

    def stats(self) -> Dict[str, float]:
        sizes = [len(terms) for terms in self.grams.values()]
        return {
            "k": self.k,
            "grams": len(sizes),
            "avg_terms_per_gram": sum(sizes) / len(sizes) if sizes else 0.0,
        }

"""
Inverted index construction and management.

This module maps every term to the ascending list of document IDs that contain
it, together with the per-document term frequencies, and provides the merge
operations used by the query algorithms.
"""

import logging
import math
from bisect import bisect_left
from typing import Dict, Iterable, List, Sequence

logger = logging.getLogger(__name__)


def intersect_posting(plist1: Sequence[int], plist2: Sequence[int]) -> List[int]:
    """
    Intersect two sorted postings lists with a two-pointer walk.

    Args:
        plist1: Ascending, duplicate-free document IDs.
        plist2: Ascending, duplicate-free document IDs.

    Returns:
        Ascending list of IDs present in both.
    """
    result = []
    i, j = 0, 0
    while i < len(plist1) and j < len(plist2):
        doc1, doc2 = plist1[i], plist2[j]
        if doc1 == doc2:
            result.append(doc1)
            i += 1
            j += 1
        elif doc1 < doc2:
            i += 1
        else:
            j += 1
    return result


def union_posting(plist1: Sequence[int], plist2: Sequence[int]) -> List[int]:
    """
    Union of two sorted postings lists.

    Args:
        plist1: Ascending, duplicate-free document IDs.
        plist2: Ascending, duplicate-free document IDs.

    Returns:
        Ascending, duplicate-free list of IDs present in either.
    """
    return sorted(set(plist1).union(plist2))


class InvertedIndex:
    """Term -> postings list index with aligned term frequencies."""

    def __init__(self):
        self.postings: Dict[str, List[int]] = {}
        # frequencies[term][i] is the count of term in document postings[term][i]
        self.frequencies: Dict[str, List[int]] = {}
        self._frozen = False

    def __len__(self) -> int:
        return len(self.postings)

    def __contains__(self, term: str) -> bool:
        return term in self.postings

    @property
    def frozen(self) -> bool:
        return self._frozen

    def add_posting(self, term: str, doc_id: int) -> None:
        """
        Record one occurrence of term in document doc_id.

        Documents must be fed in non-decreasing ID order: a repeated call for
        the current document only bumps the term frequency.

        Args:
            term: Lowercased token.
            doc_id: ID of the document being indexed.
        """
        if self._frozen:
            raise RuntimeError("Cannot add postings to a frozen index")
        if not term:
            return

        plist = self.postings.get(term)
        if plist is None:
            self.postings[term] = [doc_id]
            self.frequencies[term] = [1]
            return

        last = plist[-1]
        if last == doc_id:
            self.frequencies[term][-1] += 1
        elif last < doc_id:
            plist.append(doc_id)
            self.frequencies[term].append(1)
        else:
            raise ValueError(
                f"Document {doc_id} added out of order for term {term!r} (last posting is {last})"
            )

    def freeze(self) -> None:
        """Turn every postings and frequency list into a tuple; no more writes are allowed."""
        if self._frozen:
            return
        self.postings = {t: tuple(p) for t, p in self.postings.items()}
        self.frequencies = {t: tuple(f) for t, f in self.frequencies.items()}
        self._frozen = True
        logger.debug("Froze inverted index with %d terms", len(self.postings))

    def postings_list(self, term: str) -> Sequence[int]:
        """Postings of term, or an empty sequence for unknown terms."""
        return self.postings.get(term, ())

    def document_frequency(self, term: str) -> int:
        return len(self.postings_list(term))

    def vocabulary(self) -> List[str]:
        return sorted(self.postings)

    def intersect(self, terms: Iterable[str]) -> List[int]:
        """
        Documents containing every one of the terms.

        The shortest postings lists are merged first, and the merge stops as
        soon as the partial result is empty.

        Args:
            terms: Query terms.

        Returns:
            Ascending list of document IDs.
        """
        terms = sorted(terms, key=self.document_frequency)
        if not terms:
            return []

        result = list(self.postings_list(terms[0]))
        for term in terms[1:]:
            if not result:
                break
            result = intersect_posting(result, self.postings_list(term))
        return result

    def union(self, terms: Iterable[str]) -> List[int]:
        """Documents containing at least one of the terms, ascending."""
        ids = set()
        for term in terms:
            ids.update(self.postings_list(term))
        return sorted(ids)

    def term_frequency(self, term: str, doc_id: int) -> int:
        """
        Number of occurrences of term in document doc_id.

        Args:
            term: Indexed term.
            doc_id: Document ID.

        Returns:
            Term frequency, 0 if the term does not occur in the document.
        """
        plist = self.postings_list(term)
        idx = bisect_left(plist, doc_id)
        if idx < len(plist) and plist[idx] == doc_id:
            return self.frequencies[term][idx]
        return 0

    def inverse_document_frequency(self, term: str) -> float:
        """
        log10(N / df) for term, where N is the number of distinct terms in the index.

        Returns 0 for an empty index or an unknown term.
        """
        doc_freq = self.document_frequency(term)
        n = len(self.postings)
        if n == 0 or doc_freq == 0:
            return 0.0
        return math.log10(n / doc_freq)

    def stats(self) -> Dict[str, float]:
        """
        Summary statistics of the index.

        Returns:
            Dictionary with the number of terms, total postings and the
            average, minimum and maximum postings list length.
        """
        lengths = [len(p) for p in self.postings.values()]
        if not lengths:
            return {"terms": 0, "postings": 0, "avg_postings": 0.0, "min_postings": 0, "max_postings": 0}
        total = sum(lengths)
        return {
            "terms": len(lengths),
            "postings": total,
            "avg_postings": total / len(lengths),
            "min_postings": min(lengths),
            "max_postings": max(lengths),
        }

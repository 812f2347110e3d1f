"""
Document ranking and scoring module.

This module handles TF-IDF vector-space scoring and Okapi BM25 ranking for
document retrieval.
"""

from typing import Dict, List, Sequence, Tuple


class ScoringList:
    """
    Accumulates per-document scores for a single query.

    The first score added for a document inserts it; later ones add to it.
    """

    def __init__(self):
        self.scores: Dict[int, float] = {}

    def __len__(self) -> int:
        return len(self.scores)

    def __contains__(self, doc_id: int) -> bool:
        return doc_id in self.scores

    def add(self, doc_id: int, score: float) -> None:
        if doc_id in self.scores:
            self.scores[doc_id] += score
        else:
            self.scores[doc_id] = score

    def scale(self, doc_id: int, divisor: float) -> None:
        self.scores[doc_id] /= divisor

    def ranked(self) -> List[Tuple[int, float]]:
        """(doc_id, score) pairs by descending score, ties broken by ascending doc_id."""
        return sorted(self.scores.items(), key=lambda x: (-x[1], x[0]))

    def ranked_ids(self) -> List[int]:
        return [doc_id for doc_id, _ in self.ranked()]


class Ranker:
    """Handles document ranking using TF-IDF and BM25."""

    def __init__(self, config):
        """Initialize with configuration."""
        self.config = config

    def vector_space_rank(self, query_terms: Sequence[str], index, lengths) -> List[Tuple[int, float]]:
        """
        Rank documents by length-normalized TF-IDF.

        Each (term, document) pair adds tf * idf to the document's score;
        the total is then divided by the document's body length.

        Args:
            query_terms: Tokenized query, duplicates included.
            index: InvertedIndex.
            lengths: DocumentLengths.

        Returns:
            List of (doc_id, score) tuples sorted by score descending.
        """
        scores = ScoringList()
        for term in query_terms:
            idf = index.inverse_document_frequency(term)
            for doc_id, tf in zip(index.postings_list(term), index.frequencies.get(term, ())):
                scores.add(doc_id, tf * idf)

        for doc_id in scores.scores:
            doc_len = lengths.doc_length(doc_id)
            # Documents with an empty body keep their raw score
            if doc_len > 0:
                scores.scale(doc_id, doc_len)
        return scores.ranked()

    def bm25_rank(self, query_terms: Sequence[str], index, lengths,
                  k1: float = None, b: float = None) -> List[Tuple[int, float]]:
        """
        Rank documents with Okapi BM25.

        score += idf * (k1 + 1) * tf / (k1 * ((1 - b) + b * dl / avgdl) + tf)

        Args:
            query_terms: Tokenized query, duplicates included.
            index: InvertedIndex.
            lengths: DocumentLengths.
            k1: Term frequency saturation. Defaults to config.BM25_K1.
            b: Length normalization strength. Defaults to config.BM25_B.

        Returns:
            List of (doc_id, score) tuples sorted by score descending.
        """
        if k1 is None:
            k1 = self.config.BM25_K1
        if b is None:
            b = self.config.BM25_B

        avg_len = lengths.average_length()
        scores = ScoringList()
        for term in query_terms:
            idf = index.inverse_document_frequency(term)
            for doc_id, tf in zip(index.postings_list(term), index.frequencies.get(term, ())):
                ratio = lengths.doc_length(doc_id) / avg_len if avg_len > 0 else 1.0
                norm = k1 * ((1 - b) + b * ratio)
                scores.add(doc_id, idf * (k1 + 1) * tf / (norm + tf))
        return scores.ranked()

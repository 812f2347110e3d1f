"""
Index building and query evaluation.

IndexBuilder owns the mutable indexes while documents are added. build()
freezes them and hands them to a Searcher, which only reads them and can
therefore serve any number of queries concurrently.
"""

import enum
import logging
from typing import Dict, List, Optional

from . import boolean
from . import config as default_config
from .indexer import InvertedIndex, intersect_posting
from .kgram import KGramIndex
from .lengths import DocumentLengths
from .ranker import Ranker
from .storage import Document
from .tokenizer import tokenize, tokenize_wildcard
from .utils import get_fuzziness, wildcard_match

logger = logging.getLogger(__name__)


class Algorithm(enum.Enum):
    """Query algorithms, valued by their public identifiers."""

    BM25 = "BM25"
    TFIDF = "Classic TF-IDF"
    BOOLEAN = "Boolean"
    TERMS = "Terms"
    FUZZY = "Fuzzy"
    WILDCARD = "Wildcard"

    @classmethod
    def from_name(cls, name: Optional[str]) -> "Algorithm":
        """Case-insensitive lookup by identifier; unknown names fall back to BM25."""
        if isinstance(name, cls):
            return name
        algorithm = ALGORITHMS.get((name or "").strip().lower())
        if algorithm is None:
            logger.info("Unknown algorithm %r, using %s", name, cls.BM25.value)
            return cls.BM25
        return algorithm


ALGORITHMS: Dict[str, Algorithm] = {a.value.lower(): a for a in Algorithm}


class IndexBuilder:
    """Builds the inverted index, k-gram index and length table in one pass."""

    def __init__(self, config=None):
        self.config = config or default_config
        self.inverted_index = InvertedIndex()
        self.kgram_index = KGramIndex(self.config.KGRAM_K)
        self.lengths = DocumentLengths()
        self.num_documents = 0
        self._last_id = 0
        self._consumed = False

    def _check_open(self) -> None:
        if self._consumed:
            raise RuntimeError("IndexBuilder has already been built into a Searcher")

    def add_document(self, document: Document) -> None:
        """
        Index one document.

        Title and body terms go to both indexes; only the body counts towards
        the document length.

        Args:
            document: Document with a positive ID higher than any added before.
        """
        self._check_open()
        if document.id < 1:
            raise ValueError(f"Document IDs must be positive, got {document.id}")
        if document.id <= self._last_id:
            raise ValueError(
                f"Documents must be added in increasing ID order: {document.id} after {self._last_id}"
            )
        self._last_id = document.id

        self.lengths.add_document(document.id, document.body)
        for term in tokenize(document.title) + tokenize(document.body):
            self.inverted_index.add_posting(term, document.id)
            self.kgram_index.add_term(term)
        self.num_documents += 1

    def build_indices(self, storage) -> "Searcher":
        """
        Index every document of a storage and return the resulting Searcher.

        Documents are ordered by ID before indexing, whatever order the
        storage visits them in.

        Args:
            storage: DocumentStorage providing apply() and get().

        Returns:
            Searcher over the indexed documents.
        """
        self._check_open()
        documents = []
        storage.apply(documents.append)
        documents.sort(key=lambda d: d.id)
        for document in documents:
            self.add_document(document)
        return self.build(storage)

    def build(self, storage=None) -> "Searcher":
        """Freeze the indexes and hand them over to a Searcher."""
        self._check_open()
        self._consumed = True
        self.inverted_index.freeze()
        self.kgram_index.freeze()
        logger.info(
            "Indexed %d documents: %d terms, %d k-grams",
            self.num_documents, len(self.inverted_index), len(self.kgram_index),
        )
        return Searcher(self.inverted_index, self.kgram_index, self.lengths, storage, self.config)


class Searcher:
    """Read-only query evaluator over frozen indexes."""

    def __init__(self, inverted_index: InvertedIndex, kgram_index: KGramIndex,
                 lengths: DocumentLengths, storage=None, config=None):
        self.config = config or default_config
        self.inverted_index = inverted_index
        self.kgram_index = kgram_index
        self.lengths = lengths
        self.storage = storage
        self.ranker = Ranker(self.config)

    # Query algorithms

    def terms_query(self, query: str) -> List[int]:
        """Documents containing all of the query terms."""
        return self.inverted_index.intersect(tokenize(query))

    def boolean_query(self, query: str) -> List[int]:
        """Documents satisfying a '&&' / '||' expression."""
        return boolean.evaluate(query, self.inverted_index)

    def fuzzy_query(self, query: str) -> List[int]:
        """
        Documents containing every query term, allowing spelling mistakes.

        Each term matches the indexed terms within get_fuzziness(term) edits.

        Args:
            query: Free-text query.

        Returns:
            Ascending list of document IDs.
        """
        results = None
        for term in tokenize(query):
            close_terms = self.kgram_index.get_close_terms(term, get_fuzziness(term))
            logger.debug("Fuzzy term %r expanded to %s", term, close_terms)
            matches = self.inverted_index.union(close_terms)
            results = matches if results is None else intersect_posting(results, matches)
            if not results:
                return []
        return results or []

    def wildcard_query(self, query: str) -> List[int]:
        """
        Documents matching every wildcard term of the query.

        Args:
            query: Space-separated terms using '*' and '?'.

        Returns:
            Ascending list of document IDs.
        """
        results = None
        for pattern in tokenize_wildcard(query):
            candidates = self.kgram_index.kgram_match(pattern)
            terms = [t for t in candidates if wildcard_match(pattern, t)]
            logger.debug("Wildcard %r expanded to %s", pattern, terms)
            matches = self.inverted_index.union(terms)
            results = matches if results is None else intersect_posting(results, matches)
            if not results:
                return []
        return results or []

    def vector_space_query(self, query: str) -> List[int]:
        """Documents ranked by length-normalized TF-IDF."""
        ranked = self.ranker.vector_space_rank(tokenize(query), self.inverted_index, self.lengths)
        return [doc_id for doc_id, _ in ranked]

    def bm25_query(self, query: str, k1: float = None, b: float = None) -> List[int]:
        """Documents ranked by BM25."""
        ranked = self.ranker.bm25_rank(tokenize(query), self.inverted_index, self.lengths, k1=k1, b=b)
        return [doc_id for doc_id, _ in ranked]

    # Dispatch

    def search(self, query: str, algorithm=None) -> List[int]:
        """
        Run a query with the named algorithm.

        Args:
            query: Query text.
            algorithm: Algorithm member or identifier such as "BM25" or
                "wildcard". Defaults to config.DEFAULT_ALGORITHM; unknown
                identifiers fall back to BM25.

        Returns:
            Ordered list of document IDs.
        """
        if algorithm is None:
            algorithm = self.config.DEFAULT_ALGORITHM
        algorithm = Algorithm.from_name(algorithm)
        logger.debug("Query %r with %s", query, algorithm.value)

        if algorithm is Algorithm.BM25:
            return self.bm25_query(query)
        if algorithm is Algorithm.TFIDF:
            return self.vector_space_query(query)
        if algorithm is Algorithm.BOOLEAN:
            return self.boolean_query(query)
        if algorithm is Algorithm.TERMS:
            return self.terms_query(query)
        if algorithm is Algorithm.FUZZY:
            return self.fuzzy_query(query)
        if algorithm is Algorithm.WILDCARD:
            return self.wildcard_query(query)
        raise AssertionError(f"Unhandled algorithm {algorithm}")

    def query(self, query: str, algorithm=None) -> List[Document]:
        """
        Run a query and resolve the ranked IDs to documents.

        Missing documents come back as empty placeholder Documents.
        """
        if self.storage is None:
            raise RuntimeError("Searcher has no storage to resolve documents from")
        return self.storage.get(self.search(query, algorithm))

    def stats(self) -> Dict[str, object]:
        return {
            "num_documents": len(self.lengths),
            "avg_document_length": self.lengths.average_length(),
            "inverted_index": self.inverted_index.stats(),
            "kgram_index": self.kgram_index.stats(),
        }


def build_indices(storage, config=None) -> Searcher:
    """Index every document of storage and return a Searcher."""
    return IndexBuilder(config).build_indices(storage)

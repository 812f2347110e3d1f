"""
Main TextSearchEngine class that orchestrates the entire search pipeline.

This module contains the TextSearchEngine class that coordinates document
loading, index building and query processing.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config
from .searcher import Algorithm, IndexBuilder, Searcher
from .storage import CSVStorage, Document, DocumentStorage
from .tokenizer import tokenize_wildcard
from .utils import ResultFormatter, has_wildcard

logger = logging.getLogger(__name__)


def _query_words(query: str) -> List[str]:
    """Literal query words, for highlighting."""
    return [w for w in tokenize_wildcard(query) if not has_wildcard(w)]


class TextSearchEngine:
    """
    Main search engine class that provides a unified interface for text search.

    The engine owns a document storage, builds the indexes from it and
    answers queries with any of the supported algorithms.
    """

    def __init__(self, storage: Optional[DocumentStorage] = None, config_dict: Optional[Dict] = None):
        """
        Initialize the TextSearchEngine.

        Args:
            storage: Document storage. If None, a CSVStorage over config.CORPUS_PATH is used.
            config_dict: Optional configuration dictionary to override defaults.
        """
        self.config = self._load_config(config_dict)
        self.storage = storage
        self.result_formatter = ResultFormatter(self.config)
        self.searcher: Optional[Searcher] = None

    def _load_config(self, config_dict: Optional[Dict]) -> Any:
        """Load configuration from config module, overridden by the provided dictionary."""
        if not config_dict:
            return config

        class Config:
            def __init__(self, overrides):
                for key in dir(config):
                    if key.isupper():
                        setattr(self, key, getattr(config, key))
                for key, value in overrides.items():
                    setattr(self, key, value)

        return Config(config_dict)

    @property
    def is_built(self) -> bool:
        return self.searcher is not None

    def load_documents(self, corpus_path: Optional[str] = None) -> DocumentStorage:
        """
        Open the document storage, reading a CSV corpus if none was given.

        Args:
            corpus_path: CSV file to read. If None, uses config.CORPUS_PATH.

        Returns:
            The storage in use.
        """
        if self.storage is None or corpus_path is not None:
            path = Path(corpus_path) if corpus_path else Path(self.config.CORPUS_PATH)
            self.storage = CSVStorage(path)
        return self.storage

    def build_index(self, force_rebuild: bool = False) -> None:
        """
        Build the search indexes from the storage.

        Args:
            force_rebuild: If True, rebuild the indexes even if already built.
        """
        if self.is_built and not force_rebuild:
            logger.info("Index already built. Use force_rebuild=True to rebuild.")
            return

        storage = self.load_documents()
        if self.config.VERBOSE:
            print("Building search index...")
        self.searcher = IndexBuilder(self.config).build_indices(storage)
        if self.config.VERBOSE:
            stats = self.searcher.stats()
            print(
                f"Indexed {stats['num_documents']} documents: "
                f"{stats['inverted_index']['terms']} terms, {stats['kgram_index']['grams']} k-grams"
            )

    def search(self, query: str, algorithm: Optional[str] = None, top_k: Optional[int] = None) -> List[Document]:
        """
        Search for documents matching the given query.

        Args:
            query: Search query string.
            algorithm: Algorithm identifier. If None, uses config default.
            top_k: Number of results to return. If None, all results are returned.

        Returns:
            Documents in result order.
        """
        if not self.is_built:
            raise RuntimeError("Index not built. Call build_index() first.")

        results = self.searcher.query(query, algorithm or self.config.DEFAULT_ALGORITHM)
        if top_k is not None:
            results = results[:top_k]
        return results

    def get_result_snippet(self, document: Document, query: str, max_chars: Optional[int] = None) -> str:
        """
        Get a highlighted snippet of a document body.

        Args:
            document: Result document.
            query: Query whose words are highlighted.
            max_chars: Maximum snippet length. If None, uses config default.

        Returns:
            Highlighted snippet string.
        """
        return self.result_formatter.make_snippet(document.body, _query_words(query), max_chars)

    def interactive_search(self) -> None:
        """
        Start an interactive search session.

        Prefix a query with ':<algorithm>' to change the algorithm, e.g.
        ':fuzzy'. Type 'exit' or 'quit' to end the session.
        """
        if not self.is_built:
            print("Building index first...")
            self.build_index()

        algorithm = Algorithm.from_name(self.config.DEFAULT_ALGORITHM)
        print("\n=== Interactive Search ===")
        print(f"Algorithms: {', '.join(a.value for a in Algorithm)}")
        print("Type ':<algorithm>' to switch, 'exit' or 'quit' to quit.")

        while True:
            try:
                query = input(f"[{algorithm.value}] Enter search query: ").strip()
            except (EOFError, KeyboardInterrupt):
                print("\nExiting.")
                break

            if not query:
                continue
            if query.lower() in ("exit", "quit"):
                print("Goodbye!")
                break
            if query.startswith(":"):
                algorithm = Algorithm.from_name(query[1:])
                print(f"Using {algorithm.value}")
                continue

            results = self.search(query, algorithm.value, top_k=self.config.TOP_K_RESULTS)
            self.print_results(results, query)

    def print_results(self, results: List[Document], query: str) -> None:
        """
        Print results, highlighting the literal query words.

        config.RESULT_LAYOUT selects an ASCII table ("table") or a plain
        list ("simple").
        """
        if self.config.RESULT_LAYOUT == "simple":
            print_fn = self.result_formatter.print_results_simple
        else:
            print_fn = self.result_formatter.print_results_table
        print_fn(results, _query_words(query), max_chars=self.config.SNIPPET_CHARS)

    def get_stats(self) -> Dict[str, Any]:
        """
        Get statistics about the built index.

        Returns:
            Dictionary containing various statistics.
        """
        if not self.is_built:
            return {"error": "Index not built"}
        return self.searcher.stats()

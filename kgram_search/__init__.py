"""
K-gram Search Engine

A small full-text search engine with boolean, fuzzy and wildcard matching
and TF-IDF / BM25 ranking.

Main components:
- TextSearchEngine: Main search engine class
- IndexBuilder / Searcher: Index construction and query evaluation
- InvertedIndex: Term postings lists and frequencies
- KGramIndex: K-gram lookup for fuzzy and wildcard terms
- Ranker: Document ranking using TF-IDF and BM25
- CSVStorage, SQLiteStorage, MemoryStorage: Document storages
"""

from .search_engine import TextSearchEngine
from .searcher import Algorithm, IndexBuilder, Searcher, build_indices
from .indexer import InvertedIndex, intersect_posting, union_posting
from .kgram import KGramIndex
from .lengths import DocumentLengths
from .ranker import Ranker, ScoringList
from .storage import CSVStorage, Document, DocumentStorage, MemoryStorage, SQLiteStorage
from .tokenizer import tokenize, tokenize_wildcard
from .utils import ResultFormatter, build_kgrams, edit_distance, wildcard_match

__version__ = "1.0.0"

__all__ = [
    "TextSearchEngine",
    "Algorithm",
    "IndexBuilder",
    "Searcher",
    "build_indices",
    "InvertedIndex",
    "intersect_posting",
    "union_posting",
    "KGramIndex",
    "DocumentLengths",
    "Ranker",
    "ScoringList",
    "Document",
    "DocumentStorage",
    "MemoryStorage",
    "CSVStorage",
    "SQLiteStorage",
    "tokenize",
    "tokenize_wildcard",
    "build_kgrams",
    "edit_distance",
    "wildcard_match",
    "ResultFormatter",
]

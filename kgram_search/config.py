"""
Configuration settings for the k-gram search engine.

This module contains all configurable parameters for the search engine.
Modify these values, or pass overrides to TextSearchEngine, to customize the
behavior of the system.
"""

from pathlib import Path

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
CORPUS_PATH = PROJECT_ROOT / "examples" / "sample_corpus.csv"  # CSV corpus used when no storage is given

# Index settings
KGRAM_K = 3  # Gram length of the k-gram index

# Ranking settings
BM25_K1 = 1.2  # Term frequency saturation
BM25_B = 0.75  # Length normalization strength

# Search settings
DEFAULT_ALGORITHM = "BM25"  # One of: BM25, Classic TF-IDF, Boolean, Terms, Fuzzy, Wildcard
TOP_K_RESULTS = 10  # Number of results to display
SNIPPET_CHARS = 200  # Maximum characters in result snippets
RESULT_LAYOUT = "table"  # Result display: "table" or "simple"

# Highlighting settings
HIGHLIGHT_START = "[["  # Start marker for highlighting
HIGHLIGHT_END = "]]"  # End marker for highlighting
HIGHLIGHT_CASE_SENSITIVE = False  # Case sensitivity for highlighting

# Output settings
VERBOSE = True  # Print progress while building

# Debug settings
LOG_LEVEL = "INFO"  # Logging level: DEBUG, INFO, WARNING, ERROR

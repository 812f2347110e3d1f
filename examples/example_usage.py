#!/usr/bin/env python3
"""
Example usage of the k-gram search engine.

This script demonstrates how to use the search engine programmatically
with each of the query algorithms.
"""

import sys
from pathlib import Path

# Add parent directory to path to import kgram_search
sys.path.append(str(Path(__file__).parent.parent))

from kgram_search import Algorithm, TextSearchEngine
from kgram_search.utils import edit_distance, wildcard_match

CORPUS = Path(__file__).parent / "sample_corpus.csv"


def ranked_search_example(engine):
    """Demonstrate BM25 and TF-IDF ranking."""
    print("=== Ranked Search Example ===")

    for algorithm in ("BM25", "Classic TF-IDF"):
        for query in ["levenshtein distance", "information retrieval", "communication channel"]:
            print(f"\n[{algorithm}] '{query}'")
            for rank, doc in enumerate(engine.search(query, algorithm, top_k=3), 1):
                print(f"  {rank}. {doc.title} ({doc.url})")


def boolean_search_example(engine):
    """Demonstrate boolean expressions."""
    print("\n=== Boolean Search Example ===")

    queries = [
        "statistic && coefficient",
        "reliability || technologies",
        "qualitative || semantic && matrix",
        "distance && retrieval",
    ]
    for query in queries:
        titles = [doc.title for doc in engine.search(query, "Boolean")]
        print(f"  {query!r:45} -> {titles}")


def fuzzy_search_example(engine):
    """Demonstrate typo-tolerant search."""
    print("\n=== Fuzzy Search Example ===")

    for query in ["cohdn kapa", "levenstein", "comunication technolgies"]:
        titles = [doc.title for doc in engine.search(query, "Fuzzy")]
        print(f"  {query!r:30} -> {titles}")

    print("\nEdit distances:")
    for a, b in [("kitten", "sitting"), ("levenstein", "levenshtein"), ("hello", "")]:
        print(f"  edit_distance({a!r}, {b!r}) = {edit_distance(a, b)}")


def wildcard_search_example(engine):
    """Demonstrate wildcard patterns."""
    print("\n=== Wildcard Search Example ===")

    for query in ["cohe*", "sem*t*c", "lev*ein dist?nce", "tech*"]:
        titles = [doc.title for doc in engine.search(query, "Wildcard")]
        print(f"  {query!r:25} -> {titles}")

    print("\nPattern checks:")
    for pattern, text in [("t?me", "time"), ("t*e", "time"), ("t?e", "time")]:
        print(f"  wildcard_match({pattern!r}, {text!r}) = {wildcard_match(pattern, text)}")


def stats_example(engine):
    """Show index statistics."""
    print("\n=== Index Statistics ===")
    for key, value in engine.get_stats().items():
        print(f"  {key}: {value}")


def main():
    """Run all examples."""
    engine = TextSearchEngine()
    engine.load_documents(CORPUS)
    engine.build_index()

    print(f"Available algorithms: {[a.value for a in Algorithm]}\n")
    ranked_search_example(engine)
    boolean_search_example(engine)
    fuzzy_search_example(engine)
    wildcard_search_example(engine)
    stats_example(engine)


if __name__ == "__main__":
    main()

#!/usr/bin/env python3
"""
Main entry point for the k-gram search engine.

This script provides a command-line interface for the search engine.
"""

import argparse
import logging
import sys

from kgram_search import Algorithm, SQLiteStorage, TextSearchEngine
from kgram_search import config


def main(argv=None):
    """Main entry point for the search engine."""
    parser = argparse.ArgumentParser(
        description="Full-text search with boolean, fuzzy, wildcard, TF-IDF and BM25 queries",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                                         # Start interactive search
  python main.py --corpus ./docs.csv                     # Use a custom CSV corpus
  python main.py --db ./docs.db                          # Use a SQLite document store
  python main.py --query "cohen kappa"                   # Single query mode (BM25)
  python main.py --query "stat* && coef*" -a Wildcard    # Pick an algorithm
  python main.py --build-only --stats                    # Just build and show statistics
        """
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--corpus",
        type=str,
        default=None,
        help="CSV file with title, body and url columns (default: examples/sample_corpus.csv)"
    )

    source.add_argument(
        "--db",
        type=str,
        default=None,
        help="SQLite database to read documents from instead of a CSV file"
    )

    parser.add_argument(
        "--query",
        type=str,
        default=None,
        help="Single query to process (non-interactive mode)"
    )

    parser.add_argument(
        "-a", "--algorithm",
        type=str,
        default=config.DEFAULT_ALGORITHM,
        help=f"Query algorithm: {', '.join(a.value for a in Algorithm)} (default: {config.DEFAULT_ALGORITHM})"
    )

    parser.add_argument(
        "--top-k",
        type=int,
        default=config.TOP_K_RESULTS,
        help=f"Number of results to display (default: {config.TOP_K_RESULTS})"
    )

    parser.add_argument(
        "--build-only",
        action="store_true",
        help="Only build the index, don't search"
    )

    parser.add_argument(
        "--stats",
        action="store_true",
        help="Show index statistics after building"
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default=config.LOG_LEVEL,
        help=f"Logging level (default: {config.LOG_LEVEL})"
    )

    args = parser.parse_args(argv)
    level = logging.getLevelName(args.log_level.upper())
    if not isinstance(level, int):
        print(f"Error: unknown log level {args.log_level!r}")
        return 1
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    overrides = {
        "DEFAULT_ALGORITHM": Algorithm.from_name(args.algorithm).value,
        "TOP_K_RESULTS": args.top_k,
    }
    try:
        storage = SQLiteStorage(args.db) if args.db else None
        engine = TextSearchEngine(storage=storage, config_dict=overrides)
        engine.load_documents(args.corpus)
        engine.build_index()
    except Exception as e:
        print(f"Error building index: {e}")
        return 1

    if args.stats:
        print("\n=== Index Statistics ===")
        for key, value in engine.get_stats().items():
            print(f"{key}: {value}")

    if args.build_only:
        print("Index building complete. Exiting.")
        return 0

    if args.query:
        try:
            results = engine.search(args.query, top_k=args.top_k)
        except Exception as e:
            print(f"Error processing query: {e}")
            return 1
        engine.print_results(results, args.query)
        return 0

    try:
        engine.interactive_search()
    except KeyboardInterrupt:
        print("\nExiting.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Shared fixtures: a three-document corpus and searchers built over it."""

import csv

import pytest

from kgram_search import Document, MemoryStorage, build_indices


CORPUS = [
    Document(
        id=1,
        title="Cohen's kappa",
        body=(
            "Cohen's kappa coefficient is a statistic that is used to measure "
            "inter-rater reliability for qualitative items."
        ),
        url="https://en.wikipedia.org/wiki/Cohen%27s_kappa",
    ),
    Document(
        id=2,
        title="Latent semantic analysis",
        body=(
            "Latent semantic analysis is a technique in natural language processing "
            "of analyzing relationships between a set of documents and the terms they contain."
        ),
        url="https://en.wikipedia.org/wiki/Latent_semantic_analysis",
    ),
    Document(
        id=3,
        title="Code-division multiple access",
        body=(
            "Code-division multiple access is a channel access method used by "
            "various radio communication technologies."
        ),
        url="https://en.wikipedia.org/wiki/Code-division_multiple_access",
    ),
]


@pytest.fixture
def documents():
    return list(CORPUS)


@pytest.fixture
def storage(documents):
    return MemoryStorage(documents)


@pytest.fixture
def searcher(storage):
    return build_indices(storage)


@pytest.fixture
def corpus_csv(tmp_path, documents):
    """The corpus written as a CSV file without an id column."""
    path = tmp_path / "corpus.csv"
    with open(path, "w", encoding="utf-8", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=["title", "body", "url"])
        writer.writeheader()
        for doc in documents:
            writer.writerow({"title": doc.title, "body": doc.body, "url": doc.url})
    return path

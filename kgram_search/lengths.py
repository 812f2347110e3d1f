"""Per-document body lengths used for length normalization."""

from typing import Dict

from .tokenizer import word_count


class DocumentLengths:
    """Tracks the word count of each document body and the collection total."""

    def __init__(self):
        self.lengths: Dict[int, int] = {}
        self.total_length = 0

    def __len__(self) -> int:
        return len(self.lengths)

    def add_document(self, doc_id: int, body: str) -> int:
        """Record the body length of a document and return it."""
        if doc_id in self.lengths:
            raise ValueError(f"Length of document {doc_id} already recorded")
        length = word_count(body)
        self.lengths[doc_id] = length
        self.total_length += length
        return length

    def doc_length(self, doc_id: int) -> int:
        return self.lengths.get(doc_id, 0)

    def average_length(self) -> float:
        if not self.lengths:
            return 0.0
        return self.total_length / len(self.lengths)

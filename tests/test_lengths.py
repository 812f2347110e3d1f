"""Unit tests for document length bookkeeping."""

import pytest

from kgram_search.lengths import DocumentLengths


@pytest.mark.unit
class TestDocumentLengths:

    def test_records_word_counts(self):
        lengths = DocumentLengths()
        assert lengths.add_document(1, "to be or not to be") == 6
        lengths.add_document(2, "Cohen's kappa")
        assert lengths.doc_length(1) == 6
        assert lengths.doc_length(2) == 2
        assert lengths.total_length == 8
        assert len(lengths) == 2

    def test_average_length(self):
        lengths = DocumentLengths()
        lengths.add_document(1, "one two three")
        lengths.add_document(2, "one")
        assert lengths.average_length() == 2.0

    def test_empty(self):
        lengths = DocumentLengths()
        assert lengths.average_length() == 0.0
        assert lengths.doc_length(5) == 0

    def test_empty_body_counts_as_zero(self):
        lengths = DocumentLengths()
        lengths.add_document(1, "")
        assert lengths.doc_length(1) == 0
        assert lengths.average_length() == 0.0

    def test_duplicate_document_is_rejected(self):
        lengths = DocumentLengths()
        lengths.add_document(1, "a b")
        with pytest.raises(ValueError):
            lengths.add_document(1, "c")

"""Tests for the command-line entry point."""

import pytest

from kgram_search import Document, SQLiteStorage
from main import main


@pytest.mark.integration
class TestMain:

    def test_single_query(self, corpus_csv, capsys):
        code = main(["--corpus", str(corpus_csv), "--query", "cohen", "--log-level", "WARNING"])
        assert code == 0
        assert "Cohen's kappa" in capsys.readouterr().out

    def test_algorithm_option(self, corpus_csv, capsys):
        code = main(["--corpus", str(corpus_csv), "--query", "tech*", "-a", "wildcard", "--log-level", "WARNING"])
        assert code == 0
        out = capsys.readouterr().out
        assert "Latent semantic analysis" in out
        assert "Code-division multiple access" in out

    def test_build_only_with_stats(self, corpus_csv, capsys):
        code = main(["--corpus", str(corpus_csv), "--build-only", "--stats", "--log-level", "WARNING"])
        assert code == 0
        out = capsys.readouterr().out
        assert "num_documents: 3" in out
        assert "Index building complete." in out

    def test_sqlite_store(self, tmp_path, documents, capsys):
        path = tmp_path / "docs.db"
        with SQLiteStorage(path) as storage:
            for doc in documents:
                storage.save(doc)
        code = main(["--db", str(path), "--query", "radio", "--log-level", "WARNING"])
        assert code == 0
        assert "Code-division multiple access" in capsys.readouterr().out

    def test_no_results(self, corpus_csv, capsys):
        code = main(["--corpus", str(corpus_csv), "--query", "zebra", "--log-level", "WARNING"])
        assert code == 0
        assert "No matching documents found." in capsys.readouterr().out

    def test_unknown_log_level(self, corpus_csv, capsys):
        code = main(["--corpus", str(corpus_csv), "--query", "cohen", "--log-level", "LOUD"])
        assert code == 1
        assert "unknown log level 'LOUD'" in capsys.readouterr().out

    def test_corpus_and_db_are_exclusive(self, corpus_csv, tmp_path, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--corpus", str(corpus_csv), "--db", str(tmp_path / "docs.db"), "--query", "cohen"])
        assert exc_info.value.code == 2
        assert "not allowed with argument" in capsys.readouterr().err

    def test_sparse_document_ids(self, tmp_path, capsys):
        path = tmp_path / "docs.db"
        with SQLiteStorage(path) as storage:
            storage.save(Document(id=5, title="Only", body="lonely text", url="u"))
        assert main(["--db", str(path), "--query", "lonely", "--top-k", "1", "--log-level", "WARNING"]) == 0
        assert "Only" in capsys.readouterr().out

"""
Document records and storage backends.

The search core only needs three operations from a storage: apply() to visit
every document while building, get() to resolve ranked IDs back to documents,
and save() to add new documents.
"""

import csv
import logging
import sqlite3
import threading
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence

logger = logging.getLogger(__name__)

CSV_FIELDS = ["id", "title", "body", "url"]


@dataclass(frozen=True)
class Document:
    """A stored document. The zero-valued Document stands for "not found"."""

    id: int = 0
    title: str = ""
    body: str = ""
    url: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.title or self.body or self.url)


class DocumentStorage:
    """
    Base class for document storages.

    Subclasses override apply, get and save.
    """

    def apply(self, visit: Callable[[Document], None]) -> None:
        raise NotImplementedError

    def get(self, ids: Sequence[int]) -> List[Document]:
        raise NotImplementedError

    def save(self, document: Document) -> Document:
        raise NotImplementedError

    def __len__(self) -> int:
        count = 0

        def _count(_doc):
            nonlocal count
            count += 1

        self.apply(_count)
        return count


class MemoryStorage(DocumentStorage):
    """Keeps documents in a dictionary keyed by ID."""

    def __init__(self, documents: Iterable[Document] = ()):
        self.documents: Dict[int, Document] = {}
        for doc in documents:
            self.save(doc)

    def __len__(self) -> int:
        return len(self.documents)

    def apply(self, visit: Callable[[Document], None]) -> None:
        for doc_id in sorted(self.documents):
            visit(self.documents[doc_id])

    def get(self, ids: Sequence[int]) -> List[Document]:
        return [self.documents.get(doc_id, Document()) for doc_id in ids]

    def save(self, document: Document) -> Document:
        if document.id == 0:
            document = replace(document, id=max(self.documents, default=0) + 1)
        self.documents[document.id] = document
        return document


class CSVStorage(DocumentStorage):
    """
    Flat-file storage backed by a CSV file.

    The file starts with a header naming the title, body and url columns. An
    id column is optional; without it documents are numbered by row,
    starting at 1.
    """

    def __init__(self, path):
        self.path = Path(path)
        self._cache: Optional[Dict[int, Document]] = None

    def _read(self) -> Dict[int, Document]:
        if self._cache is not None:
            return self._cache

        documents = {}
        if self.path.exists():
            with open(self.path, "r", encoding="utf-8", newline="") as f:
                reader = csv.DictReader(f)
                for row_number, row in enumerate(reader, start=1):
                    raw_id = (row.get("id") or "").strip()
                    doc_id = int(raw_id) if raw_id else row_number
                    documents[doc_id] = Document(
                        id=doc_id,
                        title=row.get("title") or "",
                        body=row.get("body") or "",
                        url=row.get("url") or "",
                    )
            logger.debug("Read %d documents from %s", len(documents), self.path)
        else:
            logger.warning("CSV corpus %s does not exist", self.path)
        self._cache = documents
        return documents

    def __len__(self) -> int:
        return len(self._read())

    def apply(self, visit: Callable[[Document], None]) -> None:
        documents = self._read()
        for doc_id in sorted(documents):
            visit(documents[doc_id])

    def get(self, ids: Sequence[int]) -> List[Document]:
        documents = self._read()
        return [documents.get(doc_id, Document()) for doc_id in ids]

    def save(self, document: Document) -> Document:
        documents = self._read()
        if document.id == 0:
            document = replace(document, id=max(documents, default=0) + 1)

        new_file = not self.path.exists() or self.path.stat().st_size == 0
        fieldnames = CSV_FIELDS
        if not new_file:
            with open(self.path, "r", encoding="utf-8", newline="") as f:
                header = next(csv.reader(f), [])
            if all(field in header for field in CSV_FIELDS):
                # Append in the file's own column order
                fieldnames = header
            else:
                # Rewrite with every column and explicit IDs
                self._rewrite(documents)
        with open(self.path, "a", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=fieldnames, restval="")
            if new_file:
                writer.writeheader()
            writer.writerow(_as_row(document))

        documents[document.id] = document
        return document

    def _rewrite(self, documents: Dict[int, Document]) -> None:
        with open(self.path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=CSV_FIELDS)
            writer.writeheader()
            for doc_id in sorted(documents):
                writer.writerow(_as_row(documents[doc_id]))


class SQLiteStorage(DocumentStorage):
    """
    Relational storage in a SQLite database with a single documents table.

    Each thread gets its own connection, so a Searcher backed by this storage
    can resolve queries from any thread.
    """

    def __init__(self, path):
        self.path = str(path)
        self._local = threading.local()
        self._lock = threading.Lock()
        self._connections: List[sqlite3.Connection] = []
        with self.connection() as conn:
            conn.execute(
                "CREATE TABLE IF NOT EXISTS documents ("
                "id INTEGER PRIMARY KEY, title TEXT NOT NULL, body TEXT NOT NULL, url TEXT NOT NULL)"
            )

    def connection(self) -> sqlite3.Connection:
        """The calling thread's connection, opened on first use."""
        conn = getattr(self._local, "connection", None)
        if conn is None:
            conn = sqlite3.connect(self.path, check_same_thread=False)
            self._local.connection = conn
            with self._lock:
                self._connections.append(conn)
            logger.debug("Opened SQLite connection to %s", self.path)
        return conn

    def close(self) -> None:
        """Close the connections of every thread."""
        with self._lock:
            connections, self._connections = self._connections, []
        for conn in connections:
            conn.close()
        self._local = threading.local()

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def __len__(self) -> int:
        return self.connection().execute("SELECT COUNT(*) FROM documents").fetchone()[0]

    def apply(self, visit: Callable[[Document], None]) -> None:
        rows = self.connection().execute("SELECT id, title, body, url FROM documents ORDER BY id")
        for row in rows:
            visit(Document(*row))

    def get(self, ids: Sequence[int]) -> List[Document]:
        ids = list(ids)
        if not ids:
            return []
        placeholders = ",".join("?" * len(set(ids)))
        cursor = self.connection().execute(
            f"SELECT id, title, body, url FROM documents WHERE id IN ({placeholders})",
            sorted(set(ids)),
        )
        found = {row[0]: Document(*row) for row in cursor}
        return [found.get(doc_id, Document()) for doc_id in ids]

    def save(self, document: Document) -> Document:
        conn = self.connection()
        with conn:
            if document.id == 0:
                cursor = conn.execute(
                    "INSERT INTO documents (title, body, url) VALUES (?, ?, ?)",
                    (document.title, document.body, document.url),
                )
                document = replace(document, id=cursor.lastrowid)
            else:
                conn.execute(
                    "INSERT OR REPLACE INTO documents (id, title, body, url) VALUES (?, ?, ?, ?)",
                    (document.id, document.title, document.body, document.url),
                )
        return document


def _as_row(document: Document) -> Dict[str, object]:
    return {"id": document.id, "title": document.title, "body": document.body, "url": document.url}

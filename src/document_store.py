"""
Document store: a SQLite-backed host document made of text elements
"""
import asyncio
import os
import sqlite3
import threading
import time
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from src.errors import DocumentStoreError


class DocumentStore:
    """Stores documents as ordered text elements in SQLite"""

    def __init__(self, db_path: str = "database/documents.db"):
        """
        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = str(db_path)
        self._lock = threading.RLock()

        # Ensure directory exists
        directory = os.path.dirname(self.db_path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        self.init_database()

    def _connect(self) -> sqlite3.Connection:
        max_retries = 5
        retry_delay = 0.1

        for attempt in range(max_retries):
            conn = None
            try:
                conn = sqlite3.connect(self.db_path, timeout=30.0, check_same_thread=False)
                conn.execute("PRAGMA journal_mode=WAL")
                conn.execute("PRAGMA busy_timeout=30000")
                return conn
            except sqlite3.OperationalError as e:
                if conn:
                    conn.close()
                if "database is locked" in str(e) and attempt < max_retries - 1:
                    time.sleep(retry_delay * (2 ** attempt))  # Exponential backoff
                    continue
                raise

    @contextmanager
    def get_connection(self):
        """Context manager for database connections"""
        with self._lock:
            conn = self._connect()
            try:
                yield conn
            finally:
                conn.close()

    def init_database(self):
        """Initialize database tables if they don't exist"""
        with self.get_connection() as conn:
            cursor = conn.cursor()

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS documents (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    document_id TEXT UNIQUE NOT NULL,
                    title TEXT,
                    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                )
            """)

            cursor.execute("""
                CREATE TABLE IF NOT EXISTS text_elements (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    document_id TEXT NOT NULL,
                    position INTEGER NOT NULL,
                    text TEXT NOT NULL,
                    FOREIGN KEY (document_id) REFERENCES documents(document_id)
                )
            """)

            cursor.execute("""
                CREATE INDEX IF NOT EXISTS idx_document_elements
                ON text_elements(document_id, position)
            """)

            conn.commit()

    def create_document(
        self, texts: Sequence[str], title: str = None, document_id: str = None
    ) -> str:
        """Create a document with one text element per entry in texts"""
        document_id = document_id or str(uuid.uuid4())
        with self.get_connection() as conn:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    "INSERT INTO documents (document_id, title) VALUES (?, ?)",
                    (document_id, title or "Untitled Document"),
                )
            except sqlite3.IntegrityError:
                raise DocumentStoreError(f"Document already exists: {document_id}")

            cursor.executemany(
                "INSERT INTO text_elements (document_id, position, text) VALUES (?, ?, ?)",
                [(document_id, position, text) for position, text in enumerate(texts)],
            )
            conn.commit()

        return document_id

    def document_exists(self, document_id: str) -> bool:
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT 1 FROM documents WHERE document_id = ?", (document_id,)
            )
            return cursor.fetchone() is not None

    def get_elements(
        self, document_id: str, element_ids: Optional[Sequence[int]] = None
    ) -> List[Dict]:
        """
        Retrieve text elements in document order

        Args:
            document_id: Document to read
            element_ids: Restrict to these elements (None = all)
        """
        with self.get_connection() as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.cursor()

            cursor.execute(
                """SELECT id, position, text FROM text_elements
                   WHERE document_id = ?
                   ORDER BY position ASC, id ASC""",
                (document_id,),
            )
            rows = cursor.fetchall()

        wanted = set(element_ids) if element_ids is not None else None
        return [
            {"id": row["id"], "position": row["position"], "text": row["text"]}
            for row in rows
            if wanted is None or row["id"] in wanted
        ]

    def count_elements(
        self, document_id: str, element_ids: Optional[Sequence[int]] = None
    ) -> int:
        return len(self.get_elements(document_id, element_ids))

    def replace_texts(
        self,
        document_id: str,
        updates: Dict[int, str],
        expected: Optional[Dict[int, str]] = None,
    ):
        """
        Write new texts for several elements in a single transaction

        When expected is given, an element whose stored text differs from
        its expected value aborts the whole write. Nothing is written unless
        every element is updated.
        """
        with self.get_connection() as conn:
            cursor = conn.cursor()
            try:
                for element_id, text in updates.items():
                    if expected is not None and element_id in expected:
                        cursor.execute(
                            """UPDATE text_elements SET text = ?
                               WHERE id = ? AND document_id = ? AND text = ?""",
                            (text, element_id, document_id, expected[element_id]),
                        )
                    else:
                        cursor.execute(
                            "UPDATE text_elements SET text = ? WHERE id = ? AND document_id = ?",
                            (text, element_id, document_id),
                        )
                    if cursor.rowcount != 1:
                        raise DocumentStoreError(
                            f"Text element {element_id} changed or was removed since it was read"
                        )

                cursor.execute(
                    "UPDATE documents SET updated_at = CURRENT_TIMESTAMP WHERE document_id = ?",
                    (document_id,),
                )
                conn.commit()
            except Exception:
                conn.rollback()
                raise

    def get_document_stats(self, document_id: str) -> Dict:
        """Get statistics about a document"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "SELECT COUNT(*), COALESCE(SUM(LENGTH(text)), 0) FROM text_elements WHERE document_id = ?",
                (document_id,),
            )
            total_elements, total_characters = cursor.fetchone()

        return {
            "total_elements": total_elements,
            "total_characters": total_characters,
        }

    def list_documents(self, limit: int = 10) -> List[Dict]:
        """List recently updated documents"""
        with self.get_connection() as conn:
            conn.row_factory = sqlite3.Row
            cursor = conn.cursor()

            cursor.execute(
                """SELECT document_id, title, created_at, updated_at
                   FROM documents
                   ORDER BY updated_at DESC, id DESC
                   LIMIT ?""",
                (limit,),
            )

            return [
                {
                    "document_id": row["document_id"],
                    "title": row["title"],
                    "created_at": row["created_at"],
                    "updated_at": row["updated_at"],
                }
                for row in cursor.fetchall()
            ]

    def delete_document(self, document_id: str):
        """Delete a document and all its text elements"""
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM text_elements WHERE document_id = ?", (document_id,))
            cursor.execute("DELETE FROM documents WHERE document_id = ?", (document_id,))
            conn.commit()

    def update_document_title(self, document_id: str, title: str):
        with self.get_connection() as conn:
            cursor = conn.cursor()
            cursor.execute(
                "UPDATE documents SET title = ? WHERE document_id = ?",
                (title, document_id),
            )
            conn.commit()


@dataclass
class TextElement:
    id: int
    position: int
    text: str


class DocumentDraft:
    def __init__(self, store: DocumentStore, document_id: str, contents: List[TextElement]):
        self._store = store
        self._document_id = document_id
        self._originals = {element.id: element.text for element in contents}
        self.contents = contents

    async def save(self) -> None:
        updates = {element.id: element.text for element in self.contents}
        await asyncio.to_thread(
            self._store.replace_texts, self._document_id, updates, self._originals
        )


class DocumentSelection:
    """
    Selection over a stored document, optionally limited to some elements

    The element count is taken when the selection is made and refreshed on
    each read, so checking it never touches the database.
    """

    def __init__(
        self,
        store: DocumentStore,
        document_id: str,
        element_ids: Optional[Sequence[int]] = None,
    ):
        self.store = store
        self.document_id = document_id
        self.element_ids = list(element_ids) if element_ids is not None else None
        self._count = store.count_elements(document_id, self.element_ids)

    @property
    def count(self) -> int:
        return self._count

    async def read(self) -> DocumentDraft:
        exists = await asyncio.to_thread(self.store.document_exists, self.document_id)
        if not exists:
            raise DocumentStoreError(f"Document not found: {self.document_id}")

        rows = await asyncio.to_thread(
            self.store.get_elements, self.document_id, self.element_ids
        )
        self._count = len(rows)
        return DocumentDraft(
            self.store, self.document_id, [TextElement(**row) for row in rows]
        )

from __future__ import annotations

import logging
import sqlite3
from typing import Any, List, Mapping, Tuple

from pg_bulk_import.io.sinks import IndexSink
from pg_bulk_import.utils.paths import ensure_parent_dir

logger = logging.getLogger(__name__)


def sqlite_index_open(db_path: str) -> sqlite3.Connection:
    """
    Open and initialize a SQLite-backed exact-match index store.

    This function creates (or opens) a SQLite database holding one row per
    indexed (index, entity, key, value) entry. The database is configured
    with write-oriented pragmas and ensures that the entry table and its
    lookup index exist.

    Args:
        db_path (str): Path to the SQLite database file, or ":memory:".

    Returns:
        sqlite3.Connection: Open SQLite connection ready for use.
    """
    if db_path != ":memory:":
        ensure_parent_dir(db_path)
    conn = sqlite3.connect(db_path)
    conn.execute("PRAGMA journal_mode=WAL;")
    conn.execute("PRAGMA synchronous=NORMAL;")
    conn.execute("PRAGMA temp_store=MEMORY;")
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS index_entries (
            index_name TEXT NOT NULL,
            entity_id INTEGER NOT NULL,
            key TEXT NOT NULL,
            value
        )
        """
    )
    conn.execute("CREATE INDEX IF NOT EXISTS idx_index_lookup ON index_entries(index_name, key, value)")
    return conn


def sqlite_index_put_many(conn: sqlite3.Connection, rows: List[Tuple[str, int, str, Any]]) -> None:
    """
    Insert multiple index entries in one batch.

    Args:
        conn (sqlite3.Connection): Open SQLite connection.
        rows (List[Tuple[str, int, str, Any]]): (index_name, entity_id, key, value) entries.

    Returns:
        None
    """
    conn.executemany(
        "INSERT INTO index_entries(index_name, entity_id, key, value) VALUES (?, ?, ?, ?)",
        rows,
    )


def sqlite_index_get(conn: sqlite3.Connection, index_name: str, key: str, value: Any) -> List[int]:
    """
    Return the ids of entities whose indexed `key` equals `value` exactly.

    Args:
        conn (sqlite3.Connection): Open SQLite connection.
        index_name (str): Index to query.
        key (str): Property name.
        value (Any): Value to match.

    Returns:
        List[int]: Matching entity ids in ascending order.
    """
    cur = conn.execute(
        "SELECT entity_id FROM index_entries WHERE index_name = ? AND key = ? AND value = ? ORDER BY entity_id",
        (index_name, key, value),
    )
    return [row[0] for row in cur.fetchall()]


class SqliteIndexSink(IndexSink):
    """
    Exact-match secondary indices stored in one SQLite database.

    Entries are buffered and written in batches of `batch_size`; everything
    is committed on `flush()` and `shutdown()`.
    """

    def __init__(self, db_path: str = ":memory:", batch_size: int = 10_000):
        self.db_path = db_path
        self.batch_size = batch_size
        self.conn = sqlite_index_open(db_path)
        self._pending: List[Tuple[str, int, str, Any]] = []

    def add_to_index(self, index_name: str, entity_id: int, properties: Mapping[str, Any]) -> None:
        for key, value in properties.items():
            self._pending.append((index_name, entity_id, key, value))
        if len(self._pending) >= self.batch_size:
            self._write_pending()

    def _write_pending(self) -> None:
        if self._pending:
            sqlite_index_put_many(self.conn, self._pending)
            self._pending = []

    def flush(self) -> None:
        self._write_pending()
        self.conn.commit()

    def lookup(self, index_name: str, key: str, value: Any) -> List[int]:
        self.flush()
        return sqlite_index_get(self.conn, index_name, key, value)

    def shutdown(self) -> None:
        if self.conn is None:
            return
        self.flush()
        self.conn.close()
        self.conn = None
        logger.debug("Closed index store %s", self.db_path)

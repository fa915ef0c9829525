"""SQLite backend for datastone.

Entities of every kind live in one ``entities`` table. Payloads are stored as
JSON text and native queries are translated into SQL over ``json_extract``.
"""

import json
import os
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional, Tuple

from loguru import logger

from ..models.config import (
    DEFAULT_DATABASE_TIMEOUT,
    DEFAULT_JOURNAL_MODE,
    DELETE_BATCH_SIZE,
)
from ..utils.path_manager import PathManager
from .base import BackendCursor, BackendStore, BackendStoreError, Done, NoSuchEntity
from .key import Key
from .query import BackendQuery

JOURNAL_MODES = {"DELETE", "TRUNCATE", "PERSIST", "MEMORY", "WAL", "OFF"}

MEMORY_DATABASE = ":memory:"


class SQLiteCursor(BackendCursor):
    """Lazily fetched results of one native query."""

    def __init__(self, cursor: sqlite3.Cursor, lock: threading.RLock, keys_only: bool):
        self._cursor = cursor
        self._lock = lock
        self._keys_only = keys_only

    def next(self) -> Tuple[Key, Optional[Dict[str, Any]]]:
        if self._cursor is None:
            raise Done()

        with self._lock:
            try:
                row = self._cursor.fetchone()
            except sqlite3.Error as e:
                raise BackendStoreError(f"SQLite fetch failed: {e}") from e

        if row is None:
            self.close()
            raise Done()

        return _row_to_result(row, self._keys_only)

    def close(self):
        if self._cursor is not None:
            with self._lock:
                self._cursor.close()
            self._cursor = None


class SQLiteBackend(BackendStore):
    """SQLite backend store.

    The connection is shared between threads; every statement runs under a
    re-entrant lock.
    """

    def __init__(
        self,
        db_path: str,
        timeout: float = DEFAULT_DATABASE_TIMEOUT,
        journal_mode: str = DEFAULT_JOURNAL_MODE,
    ):
        """Initialize the SQLite backend.

        Args:
            db_path: Path to the SQLite database file, or ":memory:"
            timeout: Seconds to wait for a locked database
            journal_mode: SQLite journal mode

        Raises:
            ValueError: If the path is a directory or the journal mode is unknown
        """
        journal_mode = journal_mode.upper()
        if journal_mode not in JOURNAL_MODES:
            raise ValueError(f"Unknown journal mode: {journal_mode}")

        if db_path != MEMORY_DATABASE:
            if os.path.isdir(db_path):
                raise ValueError(f"Path points to a directory, expected file: {db_path}")
            # Create directory if it doesn't exist
            directory = os.path.dirname(db_path)
            if directory:
                PathManager.ensure_directory(directory)

        self.db_path = db_path
        self._lock = threading.RLock()

        # Connect to database
        self.conn = sqlite3.connect(db_path, timeout=timeout, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        with self._guard("configure"):
            self.conn.execute(f"PRAGMA journal_mode={journal_mode}")

        self.create_tables()

        logger.info(f"SQLite backend initialized at {db_path}")

    @contextmanager
    def _guard(self, operation: str) -> Iterator[None]:
        """Serialize access and wrap sqlite3 errors for one operation."""
        with self._lock:
            try:
                yield
            except sqlite3.Error as e:
                raise BackendStoreError(f"SQLite {operation} failed: {e}") from e

    def create_tables(self):
        """Create database tables if they don't exist."""
        with self._guard("create tables"):
            self.conn.execute('''
            CREATE TABLE IF NOT EXISTS entities (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                kind TEXT NOT NULL,
                payload TEXT NOT NULL,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP
            )
            ''')

            self.conn.execute('''
            CREATE INDEX IF NOT EXISTS idx_entities_kind ON entities (kind, id)
            ''')

            self.conn.commit()

    def new_key(self, kind: str) -> Key:
        _check_kind(kind)
        return Key(kind=kind)

    def decode_key(self, encoded: str) -> Key:
        return Key.decode(encoded)

    def get(self, key: Key) -> Dict[str, Any]:
        _check_complete(key)
        with self._guard("get"):
            row = self.conn.execute(
                "SELECT id, kind, payload FROM entities WHERE kind = ? AND id = ?",
                (key.kind, key.id),
            ).fetchone()

        if row is None:
            raise NoSuchEntity(f"No entity stored under {key.kind}/{key.id}")

        return json.loads(row["payload"])

    def put(self, key: Key, payload: Dict[str, Any]) -> Key:
        if not isinstance(key, Key):
            raise BackendStoreError(f"Unsupported key type: {type(key).__name__}")
        _check_kind(key.kind)
        data = _dump_payload(payload)
        now = datetime.now().isoformat()

        with self._guard("put"):
            if key.incomplete:
                cursor = self.conn.execute(
                    "INSERT INTO entities (kind, payload, created_at) VALUES (?, ?, ?)",
                    (key.kind, data, now),
                )
                self.conn.commit()
                stored = Key(kind=key.kind, id=cursor.lastrowid)
                logger.debug(f"Inserted entity {stored.kind}/{stored.id}")
                return stored

            cursor = self.conn.execute(
                '''
                INSERT INTO entities (id, kind, payload, created_at) VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    payload = excluded.payload,
                    updated_at = excluded.created_at
                WHERE entities.kind = excluded.kind
                ''',
                (key.id, key.kind, data, now),
            )
            self.conn.commit()

        if cursor.rowcount == 0:
            raise BackendStoreError(
                f"Entity id {key.id} is already bound to a kind other than {key.kind}")

        logger.debug(f"Stored entity {key.kind}/{key.id}")
        return key

    def delete(self, key: Key):
        _check_complete(key)
        with self._guard("delete"):
            cursor = self.conn.execute(
                "DELETE FROM entities WHERE kind = ? AND id = ?",
                (key.kind, key.id),
            )
            self.conn.commit()

        logger.debug(f"Deleted {cursor.rowcount} entity for {key.kind}/{key.id}")

    def delete_multi(self, keys: List[Key]):
        for key in keys:
            _check_complete(key)

        deleted = 0
        # One transaction for all batches: either every key goes or none
        with self._guard("delete multi"), self.conn:
            for start in range(0, len(keys), DELETE_BATCH_SIZE):
                batch = keys[start:start + DELETE_BATCH_SIZE]
                conditions = " OR ".join(["(kind = ? AND id = ?)"] * len(batch))
                params: List[Any] = []
                for key in batch:
                    params.extend([key.kind, key.id])
                cursor = self.conn.execute(f"DELETE FROM entities WHERE {conditions}", params)
                deleted += cursor.rowcount

        logger.debug(f"Deleted {deleted} entities in bulk")

    def run(self, query: BackendQuery) -> SQLiteCursor:
        sql, params = _build_select(query, "id, kind" if query.keys_only else "id, kind, payload")
        with self._guard("query"):
            cursor = self.conn.cursor()
            cursor.execute(sql, params)
        return SQLiteCursor(cursor, self._lock, query.keys_only)

    def get_all(self, query: BackendQuery) -> List[Tuple[Key, Optional[Dict[str, Any]]]]:
        sql, params = _build_select(query, "id, kind" if query.keys_only else "id, kind, payload")
        with self._guard("query"):
            rows = self.conn.execute(sql, params).fetchall()
        return [_row_to_result(row, query.keys_only) for row in rows]

    def count(self, query: BackendQuery) -> int:
        sql, params = _build_select(query, "id")
        with self._guard("count"):
            row = self.conn.execute(f"SELECT COUNT(*) FROM ({sql})", params).fetchone()
        return row[0]

    def close(self):
        """Close the database connection."""
        if self.conn:
            with self._lock:
                self.conn.close()
            logger.debug(f"SQLite backend at {self.db_path} closed")


def _check_kind(kind: Any):
    if not isinstance(kind, str) or not kind:
        raise BackendStoreError(f"Kind must be a non-empty string, got {kind!r}")


def _check_complete(key: Any):
    if not isinstance(key, Key):
        raise BackendStoreError(f"Unsupported key type: {type(key).__name__}")
    if key.incomplete:
        raise BackendStoreError(f"Incomplete key for kind {key.kind} cannot address an entity")


def _dump_payload(payload: Dict[str, Any]) -> str:
    if not isinstance(payload, dict):
        raise BackendStoreError(f"Payload must be a JSON object, got {type(payload).__name__}")
    try:
        return json.dumps(payload, ensure_ascii=False, allow_nan=False)
    except (TypeError, ValueError) as e:
        raise BackendStoreError(f"Payload is not JSON serializable: {e}") from e


def _json_path(field: str) -> str:
    """Return the json_extract path addressing a top-level field."""
    if '"' in field:
        raise BackendStoreError(f"Invalid field name: {field!r}")
    return f'$."{field}"'


def _build_select(query: BackendQuery, columns: str) -> Tuple[str, List[Any]]:
    """Translate a native query into a SELECT statement.

    Args:
        query: Native query
        columns: Column list to select

    Returns:
        SQL text and its parameters
    """
    _check_kind(query.kind)
    sql = f"SELECT {columns} FROM entities WHERE kind = ?"
    params: List[Any] = [query.kind]

    for flt in query.filters:
        if flt.op == "=" and flt.value is None:
            # Only stored nulls; a missing field has no json_type
            sql += " AND json_type(payload, ?) = 'null'"
            params.append(_json_path(flt.field))
            continue
        sql += f" AND json_extract(payload, ?) {flt.op} ?"
        params.extend([_json_path(flt.field), flt.value])

    order_clauses = []
    for order in query.orders:
        direction = "DESC" if order.descending else "ASC"
        order_clauses.append(f"json_extract(payload, ?) {direction}")
        params.append(_json_path(order.field))
    # Ties always resolve in insertion order
    order_clauses.append("id ASC")
    sql += " ORDER BY " + ", ".join(order_clauses)

    if query.limit is not None or query.offset is not None:
        sql += " LIMIT ? OFFSET ?"
        params.append(query.limit if query.limit is not None else -1)
        params.append(query.offset if query.offset is not None else 0)

    return sql, params


def _row_to_result(row: sqlite3.Row, keys_only: bool) -> Tuple[Key, Optional[Dict[str, Any]]]:
    key = Key(kind=row["kind"], id=row["id"])
    if keys_only:
        return key, None
    return key, json.loads(row["payload"])

"""Persistent, key-ordered byte trees kept in a single SQLite file."""

from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from os import PathLike
from pathlib import Path
from typing import Optional, Union

from .errors import StorageError

Key = Union[bytes, bytearray, memoryview, str]

_DB_FILENAME = "store.sqlite3"


def _key_bytes(key: Key) -> bytes:
    if isinstance(key, str):
        return key.encode("utf-8")
    return bytes(key)


class Database:
    """A directory-backed database holding any number of named trees."""

    def __init__(self, path: Union[str, "PathLike[str]"]) -> None:
        self.path = Path(path)
        self._conn: Optional[sqlite3.Connection] = None
        try:
            self.path.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(self.path / _DB_FILENAME)
        except (OSError, sqlite3.Error) as exc:
            raise StorageError(f"cannot open database at {self.path}: {exc}") from exc
        try:
            with conn:
                conn.execute(
                    "CREATE TABLE IF NOT EXISTS entries ("
                    "tree TEXT NOT NULL, key BLOB NOT NULL, value BLOB NOT NULL, "
                    "PRIMARY KEY (tree, key))"
                )
        except sqlite3.Error as exc:
            conn.close()
            raise StorageError(f"cannot open database at {self.path}: {exc}") from exc
        self._conn = conn

    def connection(self) -> sqlite3.Connection:
        """Return the live connection, or raise if the database is closed."""
        if self._conn is None:
            raise StorageError("database is closed")
        return self._conn

    def open_tree(self, name: str) -> "Tree":
        """Return the tree called ``name``, creating it on first write."""
        self.connection()
        return Tree(self, name)

    def close(self) -> None:
        """Close the database; further tree access raises StorageError."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class Tree:
    """A named keyspace within a database, iterated in byte order of its keys."""

    def __init__(self, database: Database, name: str) -> None:
        self._db = database
        self.name = name

    def insert(self, key: Key, value: bytes) -> Optional[bytes]:
        """Store ``value`` under ``key`` and return the value it replaced."""
        k = _key_bytes(key)
        conn = self._db.connection()
        try:
            with conn:
                row = conn.execute(
                    "SELECT value FROM entries WHERE tree = ? AND key = ?",
                    (self.name, k),
                ).fetchone()
                conn.execute(
                    "INSERT OR REPLACE INTO entries (tree, key, value) VALUES (?, ?, ?)",
                    (self.name, k, bytes(value)),
                )
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        return bytes(row[0]) if row else None

    def get(self, key: Key) -> Optional[bytes]:
        """Return the value under ``key``, or None."""
        conn = self._db.connection()
        try:
            row = conn.execute(
                "SELECT value FROM entries WHERE tree = ? AND key = ?",
                (self.name, _key_bytes(key)),
            ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        return bytes(row[0]) if row else None

    def items(self) -> Iterator[tuple[bytes, bytes]]:
        """Yield every (key, value) pair in ascending key order."""
        conn = self._db.connection()
        try:
            rows = conn.execute(
                "SELECT key, value FROM entries WHERE tree = ? ORDER BY key",
                (self.name,),
            ).fetchall()
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        for key, value in rows:
            yield bytes(key), bytes(value)

    def __len__(self) -> int:
        conn = self._db.connection()
        try:
            (count,) = conn.execute(
                "SELECT COUNT(*) FROM entries WHERE tree = ?", (self.name,)
            ).fetchone()
        except sqlite3.Error as exc:
            raise StorageError(str(exc)) from exc
        return count
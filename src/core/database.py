"""
SQLite storage for user credentials.
"""

import sqlite3
from pathlib import Path

from core.config import DB_PATH


def get_connection(db_path: Path = DB_PATH) -> sqlite3.Connection:
    """Get a database connection."""
    return sqlite3.connect(db_path)


def upsert_credential_data(conn: sqlite3.Connection, user_id: str, data: str):
    """Insert the serialized credential, replacing any existing row for user_id."""
    cursor = conn.cursor()
    cursor.execute(
        """
        INSERT INTO credentials (user_id, data) VALUES (?, ?)
        ON CONFLICT (user_id) DO UPDATE SET data = excluded.data
        """,
        (user_id, data),
    )
    conn.commit()


def read_credential_data(conn: sqlite3.Connection, user_id: str) -> str | None:
    """Return the serialized credential for user_id, or None if absent."""
    cursor = conn.cursor()
    cursor.execute("SELECT data FROM credentials WHERE user_id = ?", (user_id,))
    row = cursor.fetchone()
    if row is None:
        return None
    return row[0]


class SqliteCredentialStore:
    """
    Key/value credential store backed by the `credentials` table.

    Opens a fresh connection per call so it can be used from worker threads.
    """

    def __init__(self, db_path: Path = DB_PATH):
        self.db_path = db_path

    def get(self, user_id: str) -> str | None:
        conn = get_connection(self.db_path)
        try:
            return read_credential_data(conn, user_id)
        finally:
            conn.close()

    def upsert(self, user_id: str, data: str) -> None:
        conn = get_connection(self.db_path)
        try:
            upsert_credential_data(conn, user_id, data)
        finally:
            conn.close()

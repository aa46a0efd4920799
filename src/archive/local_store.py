"""SQLite-backed local store for downloaded archive files."""

import sqlite3
from datetime import datetime
from pathlib import Path

from src.utils.exceptions import StoreError
from src.utils.logger import setup_logger

logger = setup_logger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS files (
    file_name TEXT NOT NULL,
    init_time TEXT NOT NULL,
    data BLOB NOT NULL,
    PRIMARY KEY (file_name, init_time)
)
"""


def _time_key(init_time: datetime) -> str:
    return init_time.strftime("%Y-%m-%dT%H:%M:%S")


class LocalStore:
    """Keeps a copy of every archive file keyed by (file name, init time).

    Files in the archive never change once published, so entries are never
    expired.

    Args:
        connection: Open SQLite connection holding the files table.
        path: Path of the database file, for logging.
    """

    def __init__(self, connection: sqlite3.Connection, path: Path) -> None:
        self._conn = connection
        self.path = path

    @classmethod
    def connect(cls, path: Path) -> "LocalStore":
        """Open (creating if needed) the store database at path.

        Raises:
            StoreError: If the database can't be created or opened.
        """
        conn = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(path, check_same_thread=False)
            conn.execute(SCHEMA)
            conn.commit()
        except (OSError, sqlite3.Error) as e:
            if conn is not None:
                conn.close()
            raise StoreError(
                "Failed to open local store",
                context={"path": str(path), "error": str(e)},
            ) from e

        logger.debug(f"Connected to local store at {path}")
        return cls(conn, path)

    def retrieve_file(self, file_name: str, init_time: datetime) -> bytes | None:
        """Return the stored bytes for a file, or None if it isn't stored.

        Raises:
            StoreError: If the database query fails.
        """
        try:
            row = self._conn.execute(
                "SELECT data FROM files WHERE file_name = ? AND init_time = ?",
                (file_name, _time_key(init_time)),
            ).fetchone()
        except sqlite3.Error as e:
            raise StoreError(
                "Failed to read from local store",
                context={"file_name": file_name, "error": str(e)},
            ) from e

        return None if row is None else bytes(row[0])

    def add_file(self, file_name: str, init_time: datetime, data: bytes) -> None:
        """Store the bytes of a file, replacing any existing copy.

        Raises:
            StoreError: If the write fails.
        """
        try:
            with self._conn:
                self._conn.execute(
                    "INSERT OR REPLACE INTO files (file_name, init_time, data) "
                    "VALUES (?, ?, ?)",
                    (file_name, _time_key(init_time), sqlite3.Binary(data)),
                )
        except sqlite3.Error as e:
            raise StoreError(
                "Failed to write to local store",
                context={"file_name": file_name, "error": str(e)},
            ) from e

        logger.debug(f"Stored {file_name} for {_time_key(init_time)}")

    def close(self) -> None:
        """Close the database connection."""
        self._conn.close()

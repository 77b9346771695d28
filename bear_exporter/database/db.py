"""
Read-only connection management for the Bear database.
"""
import sqlite3
import logging
from pathlib import Path
from typing import Optional

from .schema import verify_schema
from ..exceptions import DatabaseError, SourceNotFoundError


class SourceDB:
    def __init__(self, db_path: Path):
        self.db_path = db_path
        self._conn: Optional[sqlite3.Connection] = None

    def connect(self) -> sqlite3.Connection:
        """
        Opens the database read-only and checks the notes table layout.
        """
        if self._conn:
            return self._conn

        if not self.db_path.is_file():
            raise SourceNotFoundError(f"Bear database not found at {self.db_path}")

        logging.info(f"Connecting to database: {self.db_path}")
        uri = f"{self.db_path.resolve().as_uri()}?mode=ro"
        try:
            conn = sqlite3.connect(uri, uri=True)
        except sqlite3.Error as e:
            raise DatabaseError(f"Cannot open {self.db_path}: {e}") from e

        try:
            verify_schema(conn)
        except sqlite3.Error as e:
            conn.close()
            raise DatabaseError(f"Cannot read {self.db_path}: {e}") from e
        except DatabaseError:
            conn.close()
            raise

        self._conn = conn
        return self._conn

    def close(self):
        if self._conn:
            self._conn.close()
            self._conn = None

    def __enter__(self):
        return self.connect()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()

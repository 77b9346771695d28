import sqlite3
from typing import Any, Iterator, Tuple

from .. import config
from ..exceptions import DatabaseError


class NoteQueries:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def _where(self, include_trashed: bool) -> str:
        # Same filter for count and fetch so totals match the rows scanned
        return "" if include_trashed else " WHERE ZTRASHED IS NOT 1"

    def count_notes(self, include_trashed: bool) -> int:
        cur = self.conn.cursor()
        try:
            cur.execute(f"SELECT COUNT(*) FROM {config.NOTES_TABLE}{self._where(include_trashed)}")
            (total,) = cur.fetchone()
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to count notes: {e}") from e
        return int(total)

    def iter_note_rows(self, include_trashed: bool) -> Iterator[Tuple[Any, ...]]:
        """Yields raw note rows in database delivery order (see config.NOTE_COLUMNS)."""
        columns = ", ".join(config.NOTE_COLUMNS)
        cur = self.conn.cursor()
        try:
            cur.execute(f"SELECT {columns} FROM {config.NOTES_TABLE}{self._where(include_trashed)}")
            while True:
                row = cur.fetchone()
                if row is None:
                    return
                yield row
        except sqlite3.Error as e:
            raise DatabaseError(f"Failed to read notes: {e}") from e

import pytest
import sqlite3
from contextlib import closing
from pathlib import Path
from bear_exporter import config
from bear_exporter.database.schema import init_schema


class BearSource:
    """A Bear data directory on disk: database plus Local Files tree."""

    def __init__(self, root: Path):
        self.root = root
        self.db_path = root / config.DB_RELPATH
        self.local_files = root / config.APP_DATA_DIR / config.LOCAL_FILES_DIR

        self.db_path.parent.mkdir(parents=True)
        for subdir in config.ATTACHMENT_DIRS.values():
            (self.local_files / subdir).mkdir(parents=True)

        with closing(sqlite3.connect(self.db_path)) as c:
            init_schema(c)

    def add_note(self, note_id, text="", has_images=0, has_files=0, trashed=0,
                 created=0.0, modified=0.0, pinned=0):
        with closing(sqlite3.connect(self.db_path)) as c, c:
            c.execute("""
                INSERT INTO ZSFNOTE (
                    ZUNIQUEIDENTIFIER, ZTEXT, ZHASIMAGES, ZHASFILES, ZTRASHED,
                    ZCREATIONDATE, ZMODIFICATIONDATE, ZPINNED
                )
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
            """, (note_id, text, has_images, has_files, trashed, created, modified, pinned))

    def add_attachment(self, kind: str, name: str, data: bytes = b"data") -> Path:
        path = self.local_files / config.ATTACHMENT_DIRS[kind] / name
        path.write_bytes(data)
        return path


@pytest.fixture
def conn():
    """Returns an in-memory SQLite connection with the notes table created."""
    c = sqlite3.connect(":memory:")
    init_schema(c)
    try:
        yield c
    finally:
        c.close()

@pytest.fixture
def bear_source(tmp_path):
    return BearSource(tmp_path / "bear")

@pytest.fixture
def dest(tmp_path):
    d = tmp_path / "export"
    d.mkdir()
    return d

"""
Notes table layout expected from Bear's database.
"""
import sqlite3
import logging

from .. import config
from ..exceptions import SchemaError


def verify_schema(conn: sqlite3.Connection):
    """
    Checks that the notes table exists and exposes every column we read.
    Raises SchemaError otherwise.
    """
    cur = conn.cursor()
    cur.execute(f"PRAGMA table_info({config.NOTES_TABLE})")
    present = {row[1] for row in cur.fetchall()}

    if not present:
        raise SchemaError(f"Table {config.NOTES_TABLE} not found in source database.")

    missing = [col for col in config.NOTE_COLUMNS if col not in present]
    if missing:
        raise SchemaError(f"Table {config.NOTES_TABLE} is missing columns: {', '.join(missing)}")

    logging.debug(f"Schema verified: {config.NOTES_TABLE} has {len(present)} columns.")


def init_schema(conn: sqlite3.Connection):
    """
    Creates an empty Bear-shaped notes table.
    Only used to build fixture databases; the real source is never written to.
    """
    with conn:
        conn.execute(f"""
        CREATE TABLE IF NOT EXISTS {config.NOTES_TABLE} (
            Z_PK                INTEGER PRIMARY KEY,
            ZUNIQUEIDENTIFIER   VARCHAR,
            ZTITLE              VARCHAR,
            ZTEXT               VARCHAR,
            ZHASIMAGES          INTEGER,
            ZHASFILES           INTEGER,
            ZTRASHED            INTEGER,
            ZARCHIVED           INTEGER,
            ZPINNED             INTEGER,
            ZCREATIONDATE       TIMESTAMP,
            ZMODIFICATIONDATE   TIMESTAMP
        );
        """)

    logging.debug("Notes schema initialized.")

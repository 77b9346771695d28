"""
Configuration constants for the Bear exporter.
"""
import re
from datetime import datetime, UTC
from pathlib import Path

# --- Source Layout ---
DEFAULT_BEAR_PATH = Path("~/Library/Group Containers/9K33E3U3T4.net.shinyfrog.bear").expanduser()
APP_DATA_DIR = "Application Data"
DB_RELPATH = Path(APP_DATA_DIR) / "database.sqlite"
LOCAL_FILES_DIR = "Local Files"

# Attachment kind -> subdirectory under Local Files
ATTACHMENT_DIRS = {
    'file': 'Note Files',
    'image': 'Note Images',
}

# --- Notes Table ---
NOTES_TABLE = "ZSFNOTE"
NOTE_COLUMNS = [
    'ZUNIQUEIDENTIFIER',
    'ZTEXT',
    'ZHASIMAGES',
    'ZHASFILES',
    'ZTRASHED',
    'ZCREATIONDATE',
    'ZMODIFICATIONDATE',
    'ZPINNED',
]

# Bear stores dates as seconds since the Core Data reference date
REFERENCE_EPOCH = datetime(2001, 1, 1, tzinfo=UTC)

# --- Attachment Parsing ---
# [image:NAME] / [file:NAME], NAME runs up to the first closing bracket
ATTACHMENT_PATTERN = re.compile(r"\[(image|file):([^\]]+)\]")

# --- Output ---
JSON_SUFFIX = ".json"
LOG_FILE_NAME = "export.log"

# --- Progress ---
PROGRESS_LOG_INTERVAL = 100  # notes between progress log lines
MONITOR_POLL_INTERVAL = 0.1  # seconds between progress bar refreshes

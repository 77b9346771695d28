import json
from dataclasses import dataclass
from datetime import datetime, timedelta, UTC
from pathlib import Path
from typing import Any, Dict, Sequence

from . import config


def from_core_data_timestamp(value: float) -> datetime:
    """Converts seconds since the 2001 reference date into an aware UTC datetime."""
    return config.REFERENCE_EPOCH + timedelta(seconds=value)


def _flag(value: Any) -> bool:
    return value == 1


@dataclass(frozen=True)
class NoteRecord:
    """
    Represents one note read from the Bear database.
    """
    id: str
    text: str
    has_images: bool
    has_files: bool
    trashed: bool
    creation_date: datetime
    modification_date: datetime
    pinned: bool

    @classmethod
    def from_row(cls, row: Sequence[Any]) -> "NoteRecord":
        """
        Builds a record from a ZSFNOTE row (see config.NOTE_COLUMNS for order).
        Raises TypeError/ValueError/OverflowError on rows that cannot be coerced.
        """
        note_id, text, has_images, has_files, trashed, created, modified, pinned = row
        if note_id is None:
            raise TypeError("Note row has no unique identifier")

        # A broken creation date should not cost us the note
        try:
            creation_date = from_core_data_timestamp(created)
        except (TypeError, ValueError, OverflowError):
            creation_date = datetime.now(UTC)

        return cls(
            id=str(note_id),
            text=text or "",
            has_images=_flag(has_images),
            has_files=_flag(has_files),
            trashed=_flag(trashed),
            creation_date=creation_date,
            modification_date=from_core_data_timestamp(modified),
            pinned=_flag(pinned),
        )

    @property
    def may_have_attachments(self) -> bool:
        return self.has_images or self.has_files

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'text': self.text,
            'hasImages': self.has_images,
            'hasFiles': self.has_files,
            'trashed': self.trashed,
            'creationDate': self.creation_date.isoformat(timespec='microseconds'),
            'modificationDate': self.modification_date.isoformat(timespec='microseconds'),
            'pinned': self.pinned,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NoteRecord":
        return cls(
            id=data['id'],
            text=data['text'],
            has_images=data['hasImages'],
            has_files=data['hasFiles'],
            trashed=data['trashed'],
            creation_date=datetime.fromisoformat(data['creationDate']),
            modification_date=datetime.fromisoformat(data['modificationDate']),
            pinned=data['pinned'],
        )


@dataclass(frozen=True)
class AttachmentReference:
    kind: str   # image/file
    name: str   # filename as written in the note, unsanitized


@dataclass(frozen=True)
class CopyTask:
    source: Path
    destination: Path

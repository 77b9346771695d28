import os
import logging
from pathlib import Path
from typing import Dict, Optional

from .access import AccessGrant, source_access
from .attachments.copier import AttachmentCopier
from .attachments.references import parse_references
from .attachments.resolver import AttachmentResolver
from .database.db import SourceDB
from .database.ops import NoteQueries
from .exceptions import BearExportError, DestinationError, NoteDecodeError, NoteWriteError, SourceNotFoundError
from .models import NoteRecord
from .state import ExportRun
from . import config


class ExportPipeline:
    def __init__(self,
                 source_root: Path,
                 dest_root: Path,
                 include_trashed: bool = False,
                 run: Optional[ExportRun] = None,
                 grant: Optional[AccessGrant] = None,
                 show_progress: bool = True):
        self.source_root = source_root
        self.dest_root = dest_root
        self.include_trashed = include_trashed
        self.run = run or ExportRun()
        self.grant = grant
        self.show_progress = show_progress
        self.db_path = source_root / config.DB_RELPATH

    def validate(self):
        """
        Checks both roots before anything starts.
        Raises SourceNotFoundError / DestinationError.
        """
        if not self.db_path.is_file():
            raise SourceNotFoundError(f"No Bear database at {self.db_path}")
        if not self.dest_root.is_dir():
            raise DestinationError(f"Destination {self.dest_root} is not a directory")
        if not os.access(self.dest_root, os.W_OK):
            raise DestinationError(f"Destination {self.dest_root} is not writable")

    def execute(self) -> ExportRun:
        """
        Runs the export.
        1. Scan (write one JSON per note, collect attachment copy tasks)
        2. Copy (attachments, best-effort)

        Any fatal error is recorded on the run and re-raised.
        """
        try:
            self.validate()
            self.run.start()

            with source_access(self.source_root, self.grant):
                with SourceDB(self.db_path) as conn:
                    resolver = AttachmentResolver(self.source_root, self.dest_root)

                    # --- Phase 1: Scan ---
                    logging.info(f"Scanning notes in {self.db_path} (IncludeTrashed={self.include_trashed})...")
                    to_copy = self._scan(NoteQueries(conn), resolver)
                    logging.info(f"Scan complete. Exported {self.run.processed_notes} notes.")

                    # --- Phase 2: Copy ---
                    copier = AttachmentCopier(resolver, self.run, show_progress=self.show_progress)
                    copier.execute(to_copy)
        except BearExportError as e:
            self.run.fail(str(e))
            raise
        except Exception as e:
            self.run.fail(f"Unexpected error: {e}")
            raise

        self.run.finish()
        logging.info(
            f"Export complete: {self.run.processed_notes} notes, "
            f"{self.run.files_copied} files copied, {len(self.run.errors)} errors."
        )
        return self.run

    def _scan(self, queries: NoteQueries, resolver: AttachmentResolver) -> Dict[Path, Path]:
        """Writes every note and returns the destination -> source copy map."""
        self.run.set_total(queries.count_notes(self.include_trashed))

        to_copy: Dict[Path, Path] = {}
        for row in queries.iter_note_rows(self.include_trashed):
            note = self._decode(row)

            if note.may_have_attachments:
                for ref in parse_references(note.text):
                    task = resolver.resolve(ref)
                    if not resolver.is_contained(task):
                        message = f"{ref.name} points outside the attachment directories"
                        logging.warning(message)
                        self.run.add_error(message)
                        continue
                    # Flattened destinations: last source seen wins
                    to_copy[task.destination] = task.source

            self._write_note(note)
            self.run.note_processed()

            processed = self.run.processed_notes
            if processed % config.PROGRESS_LOG_INTERVAL == 0:
                logging.info(f"Exported {processed}/{self.run.total_notes} notes...")

        return to_copy

    def _decode(self, row) -> NoteRecord:
        try:
            return NoteRecord.from_row(row)
        except (TypeError, ValueError, OverflowError) as e:
            raise NoteDecodeError(f"Cannot decode note row {row[:1]!r}: {e}") from e

    def _write_note(self, note: NoteRecord):
        path = self.dest_root / f"{note.id}{config.JSON_SUFFIX}"
        try:
            payload = note.to_json()
            path.write_text(payload, encoding="utf-8")
        except (OSError, TypeError, ValueError) as e:
            raise NoteWriteError(f"Failed to write {path}: {e}") from e
        logging.debug(f"Wrote {path}")

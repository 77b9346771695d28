"""
Shared progress state for one export run.

The worker thread is the only writer; any other thread may read through
snapshot(), which returns an immutable copy taken under the lock.
"""
import threading
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class RunSnapshot:
    started_at: Optional[datetime]
    finished_at: Optional[datetime]
    total_notes: int
    processed_notes: int
    files_copied: int
    errors: Tuple[str, ...]
    fatal_error: Optional[str]

    @property
    def done(self) -> bool:
        return self.finished_at is not None or self.fatal_error is not None

    @property
    def succeeded(self) -> bool:
        return self.finished_at is not None

    @property
    def elapsed_seconds(self) -> float:
        if self.started_at is None:
            return 0.0
        end = self.finished_at or datetime.now(UTC)
        return (end - self.started_at).total_seconds()


class ExportRun:
    def __init__(self):
        self._lock = threading.Lock()
        self._started_at: Optional[datetime] = None
        self._finished_at: Optional[datetime] = None
        self._total_notes = 0
        self._processed_notes = 0
        self._files_copied = 0
        self._errors: List[str] = []
        self._fatal_error: Optional[str] = None

    # --- Writer side (worker thread) ---

    def start(self):
        with self._lock:
            self._started_at = datetime.now(UTC)

    def set_total(self, total: int):
        with self._lock:
            self._total_notes = total

    def note_processed(self):
        with self._lock:
            self._processed_notes += 1

    def file_copied(self):
        with self._lock:
            self._files_copied += 1

    def add_error(self, message: str):
        with self._lock:
            self._errors.append(message)

    def fail(self, message: str):
        with self._lock:
            self._fatal_error = message

    def finish(self):
        with self._lock:
            self._finished_at = datetime.now(UTC)

    # --- Reader side ---

    def snapshot(self) -> RunSnapshot:
        with self._lock:
            return RunSnapshot(
                started_at=self._started_at,
                finished_at=self._finished_at,
                total_notes=self._total_notes,
                processed_notes=self._processed_notes,
                files_copied=self._files_copied,
                errors=tuple(self._errors),
                fatal_error=self._fatal_error,
            )

    @property
    def total_notes(self) -> int:
        with self._lock:
            return self._total_notes

    @property
    def processed_notes(self) -> int:
        with self._lock:
            return self._processed_notes

    @property
    def files_copied(self) -> int:
        with self._lock:
            return self._files_copied

    @property
    def errors(self) -> List[str]:
        with self._lock:
            return list(self._errors)

    @property
    def fatal_error(self) -> Optional[str]:
        with self._lock:
            return self._fatal_error

    @property
    def finished_at(self) -> Optional[datetime]:
        with self._lock:
            return self._finished_at

import time
import logging
from concurrent.futures import Future
from typing import List
from tqdm import tqdm

from .state import ExportRun, RunSnapshot
from . import config


def human_duration(seconds: float) -> str:
    """Zero-padded MM:SS; minutes keep counting past an hour."""
    total = max(0, int(round(seconds)))
    minutes, secs = divmod(total, 60)
    return f"{minutes:02d}:{secs:02d}"


def format_summary(snap: RunSnapshot) -> List[str]:
    """
    Human-readable end-of-run lines: counts on success, the fatal error
    otherwise, followed by every recoverable error.
    """
    lines = []
    if snap.fatal_error is not None:
        lines.append(f"Export failed after {snap.processed_notes} notes: {snap.fatal_error}")
    elif snap.succeeded:
        lines.append(f"Processed {snap.total_notes} notes in {human_duration(snap.elapsed_seconds)}")
        if snap.files_copied > 0:
            lines.append(f"{snap.files_copied} files copied")
    else:
        lines.append(f"{snap.processed_notes} / {snap.total_notes}")

    lines.extend(snap.errors)
    return lines


class ProgressMonitor:
    """Draws a processed/total bar from run snapshots until the worker is done."""

    def __init__(self, run: ExportRun, poll_interval: float = config.MONITOR_POLL_INTERVAL):
        self.run = run
        self.poll_interval = poll_interval

    def follow(self, future: Future) -> RunSnapshot:
        with tqdm(total=0, desc="Exporting", unit="note") as bar:
            while True:
                finished = future.done()
                snap = self.run.snapshot()
                self._update(bar, snap)
                if finished:
                    break
                time.sleep(self.poll_interval)

        logging.debug(f"Monitor stopped at {snap.processed_notes}/{snap.total_notes}")
        return snap

    def _update(self, bar: tqdm, snap: RunSnapshot):
        if bar.total != snap.total_notes:
            bar.total = snap.total_notes
        bar.n = snap.processed_notes
        bar.set_postfix(files=snap.files_copied, errors=len(snap.errors), refresh=False)
        bar.refresh()

import shutil
import logging
from pathlib import Path
from typing import Dict
from tqdm import tqdm

from .resolver import AttachmentResolver
from ..exceptions import FileOperationError
from ..state import ExportRun


class AttachmentCopier:
    def __init__(self, resolver: AttachmentResolver, run: ExportRun, show_progress: bool = True):
        self.resolver = resolver
        self.run = run
        self.show_progress = show_progress

    def execute(self, tasks: Dict[Path, Path]):
        """
        Copies every collected attachment (destination -> source mapping).
        Missing sources are recorded on the run; copy failures are logged and skipped.
        """
        if not tasks:
            logging.info("No attachments to copy.")
            return

        logging.info(f"Copying {len(tasks)} attachments...")

        for dest, src in tqdm(tasks.items(), desc="Copying", disable=not self.show_progress):
            if not self._exists(src):
                message = f"{self.resolver.display_path(src)} could not be found"
                logging.warning(message)
                self.run.add_error(message)
                continue

            try:
                self._copy(src, dest)
            except FileOperationError as e:
                logging.error(str(e))
                continue

            self.run.file_copied()

    def _exists(self, src: Path) -> bool:
        # Names the OS cannot even stat (too long, bad bytes) count as missing
        try:
            return src.exists()
        except OSError as e:
            logging.debug(f"Cannot stat {src}: {e}")
            return False

    def _copy(self, src: Path, dest: Path):
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copy2(src, dest)
        except OSError as e:
            raise FileOperationError(f"Failed to copy {src} -> {dest}: {e}") from e

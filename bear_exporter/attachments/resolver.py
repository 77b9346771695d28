import os
from pathlib import Path

from .. import config
from ..models import AttachmentReference, CopyTask


def _is_inside(path: Path, root: Path) -> bool:
    """Lexical containment check, no filesystem access."""
    path = Path(os.path.normpath(path))
    root = Path(os.path.normpath(root))
    return root in path.parents


class AttachmentResolver:
    def __init__(self, source_root: Path, dest_root: Path):
        self.base_dir = source_root / config.APP_DATA_DIR / config.LOCAL_FILES_DIR
        self.dest_root = dest_root

    def resolve(self, ref: AttachmentReference) -> CopyTask:
        """
        Maps a reference to where Bear keeps the file and where the export puts it.
        Attachments are flattened into the destination root whatever their kind.
        A leading slash in the name is appended, not treated as an absolute path.
        """
        subdir = config.ATTACHMENT_DIRS[ref.kind]
        name = ref.name.lstrip("/")
        return CopyTask(
            source=self.base_dir / subdir / name,
            destination=self.dest_root / name,
        )

    def is_contained(self, task: CopyTask) -> bool:
        """False when '..' segments take either path out of its root."""
        return _is_inside(task.source, self.base_dir) and _is_inside(task.destination, self.dest_root)

    def display_path(self, source: Path) -> str:
        """Source path relative to Local Files, for error messages."""
        try:
            return str(source.relative_to(self.base_dir))
        except ValueError:
            return str(source)

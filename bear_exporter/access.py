"""
Scoped access to the source directory.

Sandboxed platforms hand out read access to a user-picked directory as a
grant that has to be started and stopped explicitly. The pipeline holds one
grant for the whole run and always releases it, including on fatal errors.
"""
import os
import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Protocol

from .exceptions import SourceNotFoundError


class AccessGrant(Protocol):
    def start(self) -> bool:
        """Begins access; returns True if stop() must be called afterwards."""
        ...

    def stop(self):
        ...


class DirectoryAccess:
    """Default grant for platforms without scoped access: plain permission check."""

    def __init__(self, root: Path):
        self.root = root

    def start(self) -> bool:
        if not os.access(self.root, os.R_OK | os.X_OK):
            raise SourceNotFoundError(f"Source directory {self.root} is not readable")
        return False

    def stop(self):
        pass


@contextmanager
def source_access(root: Path, grant: Optional[AccessGrant] = None) -> Iterator[Path]:
    grant = grant or DirectoryAccess(root)
    must_stop = grant.start()
    logging.debug(f"Acquired access to {root}")
    try:
        yield root
    finally:
        if must_stop:
            grant.stop()
            logging.debug(f"Released access to {root}")

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Optional

from .core import ExportPipeline
from .state import ExportRun


class ExportWorker:
    """
    Runs one pipeline on a single background thread.
    Callers watch pipeline.run (or the returned future) while it works.
    """

    def __init__(self, pipeline: ExportPipeline):
        self.pipeline = pipeline
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="bear-export")
        self._future: Optional[Future] = None
        self._closed = False

    @property
    def run(self) -> ExportRun:
        return self.pipeline.run

    def start(self) -> Future:
        if self._future is None:
            logging.debug("Starting export worker.")
            self._future = self._executor.submit(self.pipeline.execute)
        return self._future

    def wait(self, timeout: Optional[float] = None) -> ExportRun:
        """Blocks until the run ends; re-raises its fatal error, if any."""
        return self.start().result(timeout=timeout)

    def shutdown(self, wait: bool = True):
        if self._closed:
            return
        self._closed = True
        self._executor.shutdown(wait=wait)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()

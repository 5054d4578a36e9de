"""Background catalog loading.

The HTTP request runs on a :class:`QThreadPool` worker so the window keeps
handling hover and clicks while it waits. The result comes back through a
Qt signal and is delivered on the thread that owns the loader.
"""
from __future__ import annotations

import logging
import threading
from typing import Optional

from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal, Slot

from ..catalog.client import CatalogClient
from ..catalog.models import CatalogError, LoadResult


class LoadSignals(QObject):
    """Signal emitter for a catalog worker."""

    finished = Signal(object)  # LoadResult


class CatalogLoadWorker(QRunnable):
    """Runs one catalog load in a background thread."""

    def __init__(self, client: CatalogClient, cancelled: threading.Event) -> None:
        super().__init__()
        self.client = client
        self.cancelled = cancelled
        self.signals = LoadSignals()

    @Slot()
    def run(self) -> None:
        try:
            result = self.client.load()
        except Exception as exc:  # keep the view out of LOADING on unexpected failures
            logging.getLogger(__name__).exception("Catalog worker crashed")
            result = LoadResult.failed(CatalogError(f"Unexpected error: {exc}"))
        if self.cancelled.is_set():
            return
        self.signals.finished.emit(result)


class CatalogLoader(QObject):
    """Starts the catalog load at most once and forwards its result.

    ``cancel()`` drops a pending result; the request itself is left to finish
    in the pool since ``requests`` offers no way to abort it mid-flight.
    """

    loaded = Signal(object)  # LoadResult

    def __init__(
        self,
        client: CatalogClient,
        thread_pool: Optional[QThreadPool] = None,
        logger: Optional[logging.Logger] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._client = client
        self._pool = thread_pool or QThreadPool.globalInstance()
        self._logger = logger or logging.getLogger(__name__)
        self._cancelled = threading.Event()
        self._worker: Optional[CatalogLoadWorker] = None
        self._started = False
        self._finished = False

    @property
    def client(self) -> CatalogClient:
        return self._client

    @property
    def started(self) -> bool:
        return self._started

    @property
    def pending(self) -> bool:
        return self._started and not self._finished and not self._cancelled.is_set()

    def start(self) -> bool:
        """Kick off the load. Returns False when it was already started."""
        if self._started:
            self._logger.debug("Catalog load already started, ignoring")
            return False
        self._started = True
        self._worker = CatalogLoadWorker(self._client, self._cancelled)
        self._worker.setAutoDelete(False)
        self._worker.signals.finished.connect(self._on_finished)
        self._logger.info("Starting catalog load")
        self._pool.start(self._worker)
        return True

    def cancel(self) -> None:
        if not self.pending:
            return
        self._cancelled.set()
        self._logger.info("Catalog load cancelled, pending result will be discarded")

    @Slot(object)
    def _on_finished(self, result: LoadResult) -> None:
        if self._cancelled.is_set():
            self._logger.debug("Discarding catalog result after cancellation")
            return
        self._finished = True
        self.loaded.emit(result)


__all__ = ["CatalogLoadWorker", "CatalogLoader", "LoadSignals"]

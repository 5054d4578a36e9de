"""Tests for the one-shot background catalog loader."""
from __future__ import annotations

import os
from typing import List, cast

import pytest
from PySide6.QtCore import QRunnable, QThreadPool
from PySide6.QtWidgets import QApplication

from filmbrowser.browser.loader import CatalogLoader
from filmbrowser.catalog.models import CatalogUnavailableError, Film, LoadResult

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="module")
def qt_app() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return cast(QApplication, app)


FILM = Film(
    title="A New Hope",
    episode_id=4,
    release_date="1977-05-25",
    director="George Lucas",
    producer="Gary Kurtz, Rick McCallum",
    opening_crawl="It is a period of civil war...",
)


class StubClient:
    def __init__(self, result: LoadResult) -> None:
        self.result = result
        self.calls = 0

    def load(self) -> LoadResult:
        self.calls += 1
        return self.result


class ExplodingClient:
    def load(self) -> LoadResult:
        raise RuntimeError("boom")


class ManualPool:
    """Collects runnables so tests decide when they run."""

    def __init__(self) -> None:
        self.runnables: List[QRunnable] = []

    def start(self, runnable: QRunnable) -> None:
        self.runnables.append(runnable)

    def run_all(self) -> None:
        for runnable in self.runnables:
            runnable.run()


def _collect(loader: CatalogLoader) -> List[LoadResult]:
    received: List[LoadResult] = []
    loader.loaded.connect(received.append)
    return received


def test_start_runs_client_once(qt_app: QApplication) -> None:
    client = StubClient(LoadResult.ok([FILM]))
    pool = ManualPool()
    loader = CatalogLoader(client, thread_pool=pool)  # type: ignore[arg-type]
    received = _collect(loader)

    assert loader.start()
    assert not loader.start()
    assert loader.pending
    pool.run_all()

    assert client.calls == 1
    assert len(pool.runnables) == 1
    assert len(received) == 1
    assert received[0].films == (FILM,)
    assert not loader.pending


def test_cancel_discards_pending_result(qt_app: QApplication) -> None:
    pool = ManualPool()
    loader = CatalogLoader(StubClient(LoadResult.ok([FILM])), thread_pool=pool)  # type: ignore[arg-type]
    received = _collect(loader)

    loader.start()
    loader.cancel()
    pool.run_all()

    assert received == []
    assert not loader.pending
    assert not loader.start()


def test_cancel_before_start_is_noop(qt_app: QApplication) -> None:
    pool = ManualPool()
    loader = CatalogLoader(StubClient(LoadResult.ok([FILM])), thread_pool=pool)  # type: ignore[arg-type]
    received = _collect(loader)

    loader.cancel()
    loader.start()
    pool.run_all()

    assert len(received) == 1


def test_failed_result_is_forwarded(qt_app: QApplication) -> None:
    error = CatalogUnavailableError("offline")
    pool = ManualPool()
    loader = CatalogLoader(StubClient(LoadResult.failed(error)), thread_pool=pool)  # type: ignore[arg-type]
    received = _collect(loader)

    loader.start()
    pool.run_all()

    assert received[0].error is error


def test_unexpected_client_crash_becomes_failed_result(qt_app: QApplication) -> None:
    pool = ManualPool()
    loader = CatalogLoader(ExplodingClient(), thread_pool=pool)  # type: ignore[arg-type]
    received = _collect(loader)

    loader.start()
    pool.run_all()

    assert len(received) == 1
    assert not received[0].succeeded
    assert "boom" in received[0].error.message


def test_result_arrives_from_worker_thread(qt_app: QApplication) -> None:
    pool = QThreadPool()
    loader = CatalogLoader(StubClient(LoadResult.ok([FILM])), thread_pool=pool)  # type: ignore[arg-type]
    received = _collect(loader)

    loader.start()
    assert pool.waitForDone(5000)
    for _ in range(20):
        qt_app.processEvents()
        if received:
            break

    assert len(received) == 1
    assert received[0].films == (FILM,)

from __future__ import annotations

from typing import Any, Dict, Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import QHBoxLayout, QLabel, QMainWindow, QVBoxLayout, QWidget

from ..catalog.client import CatalogClient
from ..catalog.covers import BACKGROUND_IMAGE, CoverCache
from ..catalog.models import LoadResult
from ..core.services import CoreServices
from .loader import CatalogLoader
from .state import LoadStatus, ViewState
from .widgets import (
    EMPTY_TEXT,
    FAILED_TEXT,
    LOADING_TEXT,
    BackgroundWidget,
    FilmPane,
    Sidebar,
)

HEADER_TITLE = "Star Wars Films"
HEADER_SUBTITLE = "Explore the Star Wars universe!"


class FilmBrowserWindow(QMainWindow):
    """Single-window film browser.

    The catalog is requested the first time the window is shown and never
    again. Every state change goes through :class:`ViewState` and is followed
    by :meth:`render`.
    """

    def __init__(
        self,
        services: CoreServices,
        loader: Optional[CatalogLoader] = None,
    ) -> None:
        super().__init__()
        self._services = services
        self._logger = services.get_logger("FilmBrowserWindow")
        self._settings = services.settings()
        self._window_config = services.get_browser_config()
        self.state = ViewState()
        self._rendered_films: tuple = ()

        if loader is None:
            client = CatalogClient(
                endpoint=self._settings.endpoint,
                timeout=self._settings.request_timeout,
                logger=services.get_logger("CatalogClient"),
            )
            loader = CatalogLoader(client, logger=services.get_logger("CatalogLoader"), parent=self)
        self._loader = loader
        self._loader.loaded.connect(self.apply_load_result)

        self.setWindowTitle(HEADER_TITLE)
        self.resize(1100, 720)

        self.covers = CoverCache(self._settings.assets_dir)
        container = BackgroundWidget(self._settings.assets_dir / BACKGROUND_IMAGE)
        root_layout = QVBoxLayout(container)
        root_layout.setContentsMargins(0, 0, 0, 0)
        root_layout.setSpacing(0)

        header = QWidget()
        header_layout = QVBoxLayout(header)
        header_layout.setContentsMargins(0, 32, 0, 32)
        title = QLabel(HEADER_TITLE)
        title.setObjectName("HeaderTitle")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet("color:#ffffff;font-size:40px;font-weight:700;")
        subtitle = QLabel(HEADER_SUBTITLE)
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        subtitle.setStyleSheet("color:#ffffff;font-size:16px;")
        header_layout.addWidget(title)
        header_layout.addWidget(subtitle)
        root_layout.addWidget(header)

        body = QHBoxLayout()
        body.setContentsMargins(0, 0, 0, 0)
        self.sidebar = Sidebar()
        self.film_pane = FilmPane(self.covers)
        body.addWidget(self.sidebar, stretch=0)
        body.addWidget(self.film_pane, stretch=1)
        root_layout.addLayout(body, stretch=1)

        self.setCentralWidget(container)

        film_list = self.sidebar.film_list
        film_list.hover_entered.connect(self._on_hover_entered)
        film_list.hover_left.connect(self._on_hover_left)
        film_list.film_clicked.connect(self._on_film_clicked)

        self._restore_window_settings()
        self.render()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load_catalog(self) -> None:
        if self._loader.started:
            return
        self.state.begin_load()
        self.render()
        self._loader.start()

    @Slot(object)
    def apply_load_result(self, result: LoadResult) -> None:
        if not self.state.apply_result(result):
            return
        if result.succeeded:
            self._logger.info("Showing %d films", len(self.state.films))
        else:
            self._logger.warning("Film list unavailable: %s", self.state.error)
        self.render()

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------
    def _on_hover_entered(self, episode_id: int) -> None:
        film = self.state.film_for_episode(episode_id)
        if film is None:
            return
        self.state.hover_enter(film)
        self.render()

    def _on_hover_left(self) -> None:
        self.state.hover_leave()
        self.render()

    def _on_film_clicked(self, episode_id: int) -> None:
        film = self.state.film_for_episode(episode_id)
        if film is None:
            return
        self.state.select(film)
        self._logger.debug("Selected %s", film.title)
        self.render()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------
    def render(self) -> None:
        self._render_sidebar()
        self.film_pane.show_detail(self.state.detail())
        self.film_pane.show_crawl(self.state.crawl_film)

    def _render_sidebar(self) -> None:
        status = self.state.status
        if status is LoadStatus.LOADING:
            self.sidebar.show_message(LOADING_TEXT)
        elif status is LoadStatus.FAILED:
            error = self.state.error
            self.sidebar.show_message(FAILED_TEXT, error.message if error else "")
        elif not self.state.films:
            self.sidebar.show_message(EMPTY_TEXT)
        elif self._rendered_films != self.state.films:
            self.sidebar.show_films(self.state.films)
        self._rendered_films = self.state.films if status is LoadStatus.READY else ()

    # ------------------------------------------------------------------
    # Window settings
    # ------------------------------------------------------------------
    def _restore_window_settings(self) -> None:
        size = self._window_config.get("window_size", None)
        if isinstance(size, (list, tuple)) and len(size) == 2:
            try:
                width, height = int(size[0]), int(size[1])
            except (TypeError, ValueError):
                width = height = 0
            if width > 0 and height > 0:
                self.resize(width, height)

        position = self._window_config.get("window_pos", None)
        if isinstance(position, (list, tuple)) and len(position) == 2:
            try:
                x, y = int(position[0]), int(position[1])
            except (TypeError, ValueError):
                pass
            else:
                self.move(x, y)

    def _save_window_settings(self) -> None:
        payload: Dict[str, Any] = {
            "window_size": [self.width(), self.height()],
            "window_pos": [self.x(), self.y()],
        }
        changed = {key: value for key, value in payload.items() if self._window_config.get(key) != value}
        if changed:
            self._window_config.update(changed)

    # ------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------
    def showEvent(self, event) -> None:  # type: ignore[override]
        super().showEvent(event)
        self.load_catalog()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._loader.cancel()
        self._loader.client.close()
        self._save_window_settings()
        super().closeEvent(event)


__all__ = ["FilmBrowserWindow", "HEADER_SUBTITLE", "HEADER_TITLE"]

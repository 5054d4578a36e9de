"""Widgets composing the film browser window."""
from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence

from PySide6.QtCore import QEvent, Qt, Signal
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPixmap
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from ..catalog.covers import POSTER_SIZE, CoverCache
from ..catalog.models import Film
from .formatting import format_release_date
from .state import FilmDetail

LOADING_TEXT = "Loading..."
EMPTY_TEXT = "No films available."
FAILED_TEXT = "Could not load films."

CARD_STYLE = "background-color: rgba(31, 41, 55, 230); border-radius: 8px; color: #ffffff;"
CRAWL_STYLE = "background-color: rgba(55, 65, 81, 230); border-radius: 8px; color: #ffffff;"


class FilmListWidget(QListWidget):
    """Sidebar list reporting pointer enter/leave and clicks per film row.

    Rows carry the film's episode number under ``Qt.UserRole``.
    """

    hover_entered = Signal(int)
    hover_left = Signal()
    film_clicked = Signal(int)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("FilmList")
        self.setMouseTracking(True)
        self.setSelectionMode(QListWidget.SelectionMode.NoSelection)
        self.setFrameShape(QFrame.Shape.NoFrame)
        self.setCursor(Qt.CursorShape.PointingHandCursor)
        self.setStyleSheet(
            "QListWidget{background:transparent;color:#ffffff;}"
            "QListWidget::item:hover{text-decoration:underline;}"
        )
        self._hover_episode: Optional[int] = None
        self.itemEntered.connect(self._on_item_entered)
        self.itemClicked.connect(self._on_item_clicked)

    def set_films(self, films: Sequence[Film]) -> None:
        self.clear()
        self._hover_episode = None
        for film in films:
            item = QListWidgetItem(film.title)
            item.setData(Qt.ItemDataRole.UserRole, film.episode_id)
            self.addItem(item)

    def titles(self) -> list:
        return [self.item(row).text() for row in range(self.count())]

    def episode_at(self, row: int) -> Optional[int]:
        item = self.item(row)
        if item is None:
            return None
        return item.data(Qt.ItemDataRole.UserRole)

    def _on_item_entered(self, item: QListWidgetItem) -> None:
        episode = item.data(Qt.ItemDataRole.UserRole)
        if episode == self._hover_episode:
            return
        self._hover_episode = episode
        self.hover_entered.emit(episode)

    def _on_item_clicked(self, item: QListWidgetItem) -> None:
        self.film_clicked.emit(item.data(Qt.ItemDataRole.UserRole))

    def _clear_hover(self) -> None:
        if self._hover_episode is None:
            return
        self._hover_episode = None
        self.hover_left.emit()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if self.itemAt(event.position().toPoint()) is None:
            self._clear_hover()
        super().mouseMoveEvent(event)

    def leaveEvent(self, event: QEvent) -> None:  # type: ignore[override]
        self._clear_hover()
        super().leaveEvent(event)


class Sidebar(QWidget):
    """Film List panel: a status message or the list of titles."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("Sidebar")
        self.setFixedWidth(256)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet("#Sidebar{background-color: rgba(31, 41, 55, 235);} QLabel{color:#ffffff;}")

        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        title = QLabel("Film List")
        title.setStyleSheet("font-size:18px;font-weight:700;")
        layout.addWidget(title)

        self.stack = QStackedWidget()
        self.message_label = QLabel(LOADING_TEXT)
        self.message_label.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.message_label.setWordWrap(True)
        self.film_list = FilmListWidget()
        self.stack.addWidget(self.message_label)
        self.stack.addWidget(self.film_list)
        layout.addWidget(self.stack, stretch=1)

    def show_message(self, text: str, tooltip: str = "") -> None:
        self.film_list.set_films(())
        self.message_label.setText(text)
        self.message_label.setToolTip(tooltip)
        self.stack.setCurrentWidget(self.message_label)

    def show_films(self, films: Sequence[Film]) -> None:
        self.film_list.set_films(films)
        self.stack.setCurrentWidget(self.film_list)

    @property
    def message(self) -> str:
        if self.stack.currentWidget() is self.message_label:
            return self.message_label.text()
        return ""


class FilmDetailCard(QFrame):
    """Title, episode, credits and release date of the active film."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("DetailCard")
        self.setStyleSheet(CARD_STYLE)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        self.title_label = QLabel()
        self.title_label.setStyleSheet("font-size:22px;font-weight:700;")
        self.episode_label = QLabel()
        self.episode_label.setStyleSheet("color:#9ca3af;")
        self.director_label = QLabel()
        self.producer_label = QLabel()
        self.release_label = QLabel()
        for label in (self.title_label, self.episode_label, self.director_label, self.producer_label, self.release_label):
            label.setWordWrap(True)
            layout.addWidget(label)

    def show_detail(self, detail: FilmDetail) -> None:
        self.title_label.setText(detail.title)
        self.episode_label.setText(detail.episode_label)
        self.director_label.setText(f"<b>Director:</b> {detail.director}")
        self.producer_label.setText(f"<b>Producer:</b> {detail.producer}")
        self.release_label.setText(f"<b>Release Date:</b> {format_release_date(detail.release_date)}")


class CrawlPanel(QFrame):
    """Opening crawl of the selected film."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("CrawlPanel")
        self.setStyleSheet(CRAWL_STYLE)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(16, 16, 16, 16)
        heading = QLabel("Opening Crawl")
        heading.setStyleSheet("font-size:18px;font-weight:700;")
        layout.addWidget(heading)
        self.text_label = QLabel()
        self.text_label.setWordWrap(True)
        self.text_label.setTextFormat(Qt.TextFormat.PlainText)
        layout.addWidget(self.text_label)
        self._film: Optional[Film] = None
        self.setVisible(False)

    @property
    def film(self) -> Optional[Film]:
        return self._film

    def show_film(self, film: Optional[Film]) -> None:
        self._film = film
        if film is None:
            self.text_label.clear()
            self.setVisible(False)
            return
        self.text_label.setText(film.opening_crawl)
        self.setVisible(True)


class FilmPane(QWidget):
    """Main area: poster on the left, detail card and opening crawl on the right.

    Poster and card follow the active (hovered or selected) film, the crawl
    follows the selection only.
    """

    def __init__(self, covers: CoverCache, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._covers = covers
        self._detail: Optional[FilmDetail] = None

        layout = QHBoxLayout(self)
        layout.setContentsMargins(24, 0, 24, 0)

        poster_column = QVBoxLayout()
        self.poster_label = QLabel()
        self.poster_label.setObjectName("Poster")
        self.poster_label.setFixedSize(POSTER_SIZE)
        self.poster_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        poster_column.addStretch(1)
        poster_column.addWidget(self.poster_label, alignment=Qt.AlignmentFlag.AlignHCenter)
        poster_column.addStretch(1)
        layout.addLayout(poster_column, stretch=1)

        info_column = QVBoxLayout()
        self.card = FilmDetailCard()
        self.crawl_panel = CrawlPanel()
        info_column.addWidget(self.card)
        info_column.addWidget(self.crawl_panel)
        info_column.addStretch(1)
        layout.addLayout(info_column, stretch=2)

        self.poster_label.setVisible(False)
        self.card.setVisible(False)

    @property
    def detail(self) -> Optional[FilmDetail]:
        return self._detail

    @property
    def cover_path(self) -> str:
        return self._detail.cover_path if self._detail else ""

    @property
    def detail_shown(self) -> bool:
        return not self.card.isHidden()

    @property
    def crawl_shown(self) -> bool:
        return not self.crawl_panel.isHidden()

    def show_detail(self, detail: Optional[FilmDetail]) -> None:
        self._detail = detail
        if detail is None:
            self.poster_label.clear()
            self.poster_label.setVisible(False)
            self.card.setVisible(False)
            return
        self.poster_label.setPixmap(self._covers.get(detail.cover_path, detail.title))
        self.poster_label.setToolTip(detail.title)
        self.card.show_detail(detail)
        self.poster_label.setVisible(True)
        self.card.setVisible(True)

    def show_crawl(self, film: Optional[Film]) -> None:
        self.crawl_panel.show_film(film)


class BackgroundWidget(QWidget):
    """Container painting the background image scaled to cover its area."""

    FALLBACK_COLOR = QColor(10, 10, 18)

    def __init__(self, image_path: Path, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._pixmap = QPixmap(str(image_path)) if image_path.exists() else QPixmap()

    @property
    def has_image(self) -> bool:
        return not self._pixmap.isNull()

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        if self._pixmap.isNull():
            painter.fillRect(self.rect(), self.FALLBACK_COLOR)
        else:
            scaled = self._pixmap.scaled(
                self.size(),
                Qt.AspectRatioMode.KeepAspectRatioByExpanding,
                Qt.TransformationMode.SmoothTransformation,
            )
            x = (self.width() - scaled.width()) // 2
            y = (self.height() - scaled.height()) // 2
            painter.drawPixmap(x, y, scaled)
        painter.end()
        super().paintEvent(event)


__all__ = [
    "BackgroundWidget",
    "CrawlPanel",
    "EMPTY_TEXT",
    "FAILED_TEXT",
    "FilmDetailCard",
    "FilmListWidget",
    "FilmPane",
    "LOADING_TEXT",
    "Sidebar",
]

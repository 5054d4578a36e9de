"""Cover art utilities for the film browser."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from PySide6.QtCore import QRectF, QSize, Qt
from PySide6.QtGui import QColor, QFont, QPainter, QPixmap, QTextOption

from .models import Film

logger = logging.getLogger(__name__)

COVER_IMAGES: Mapping[int, str] = {
    1: "images/episode1.jpeg",
    2: "images/episode2.jpeg",
    3: "images/episode3.jpeg",
    4: "images/episode4.jpeg",
    5: "images/episode5.jpeg",
    6: "images/episode6.jpeg",
}
DEFAULT_COVER = "images/default.jpeg"
BACKGROUND_IMAGE = "images/star-wars-bg.jpeg"

POSTER_SIZE = QSize(200, 300)
PLACEHOLDER_COLOR = QColor(31, 41, 55)


def cover_path_for_episode(episode_id: int) -> str:
    """Return the mapped cover path, or an empty string for unmapped episodes."""
    return COVER_IMAGES.get(episode_id, "")


def resolve_cover(film: Optional[Film]) -> str:
    """Return the path to display for ``film``, falling back to the default cover."""
    if film is None or not film.cover_path:
        return DEFAULT_COVER
    return film.cover_path


def placeholder_pixmap(size: QSize, label: str = "") -> QPixmap:
    """Create a flat poster placeholder with an optional caption."""
    if size.isEmpty():
        size = POSTER_SIZE
    pixmap = QPixmap(size)
    pixmap.fill(PLACEHOLDER_COLOR)
    if label:
        _draw_caption(pixmap, label)
    return pixmap


def _draw_caption(pixmap: QPixmap, label: str) -> None:
    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
    painter.setPen(QColor(255, 255, 255, 220))
    font = QFont()
    font.setPointSizeF(max(8.0, pixmap.height() * 0.05))
    font.setBold(True)
    painter.setFont(font)
    margin = pixmap.width() * 0.08
    rect = QRectF(margin, margin, pixmap.width() - 2 * margin, pixmap.height() - 2 * margin)
    option = QTextOption(Qt.AlignmentFlag.AlignCenter)
    option.setWrapMode(QTextOption.WrapMode.WordWrap)
    painter.drawText(rect, label, option)
    painter.end()


def load_cover_pixmap(assets_dir: Path, relative_path: str, size: QSize, label: str = "") -> QPixmap:
    """Load a cover from the assets directory, painting a placeholder if it is missing."""
    if size.isEmpty():
        size = POSTER_SIZE
    path = assets_dir / relative_path
    if path.exists():
        pixmap = QPixmap(str(path))
        if not pixmap.isNull():
            return pixmap.scaled(size, Qt.AspectRatioMode.KeepAspectRatio, Qt.TransformationMode.SmoothTransformation)
        logger.debug("Cover %s could not be decoded", path)
    else:
        logger.debug("Cover %s not found, using placeholder", path)
    return placeholder_pixmap(size, label)


@dataclass
class CoverCache:
    """In-memory cache of scaled cover pixmaps keyed by relative path."""

    assets_dir: Path
    size: QSize = POSTER_SIZE
    _cache: Dict[str, QPixmap] = None  # type: ignore[assignment]

    def __post_init__(self) -> None:
        if self._cache is None:
            self._cache = {}

    def get(self, relative_path: str, label: str = "") -> QPixmap:
        key = f"{relative_path}|{label}"
        pixmap = self._cache.get(key)
        if pixmap is not None:
            return pixmap
        pixmap = load_cover_pixmap(self.assets_dir, relative_path, self.size, label)
        self._cache[key] = pixmap
        return pixmap

    def for_film(self, film: Film) -> QPixmap:
        return self.get(resolve_cover(film), film.title)

    def clear(self) -> None:
        self._cache.clear()


__all__ = [
    "COVER_IMAGES",
    "DEFAULT_COVER",
    "BACKGROUND_IMAGE",
    "CoverCache",
    "cover_path_for_episode",
    "load_cover_pixmap",
    "placeholder_pixmap",
    "resolve_cover",
]

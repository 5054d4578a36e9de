"""View state for the film browser.

The state is owned by the window and changed only through the mutators
below: :meth:`ViewState.begin_load`, :meth:`ViewState.apply_result`,
:meth:`ViewState.hover_enter`, :meth:`ViewState.hover_leave` and
:meth:`ViewState.select`. Rendering reads it through :attr:`active_film`,
:attr:`crawl_film` and :meth:`detail`.

Hover and selection are independent. Hover wins the detail pane while it is
set; the opening crawl only ever follows the selection.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from ..catalog.covers import resolve_cover
from ..catalog.models import CatalogError, Film, LoadResult

logger = logging.getLogger(__name__)


class LoadStatus(enum.Enum):
    """Where the single catalog load currently stands."""

    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class FilmDetail:
    """What the detail pane shows for the active film."""

    title: str
    episode_label: str
    director: str
    producer: str
    release_date: str
    cover_path: str

    @classmethod
    def for_film(cls, film: Film) -> "FilmDetail":
        return cls(
            title=film.title,
            episode_label=film.episode_label,
            director=film.director,
            producer=film.producer,
            release_date=film.release_date,
            cover_path=resolve_cover(film),
        )


class ViewState:
    def __init__(self) -> None:
        self._films: Tuple[Film, ...] = ()
        self._by_episode: Dict[int, Film] = {}
        self._status = LoadStatus.LOADING
        self._error: Optional[CatalogError] = None
        self._hovered: Optional[Film] = None
        self._selected: Optional[Film] = None

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    @property
    def films(self) -> Tuple[Film, ...]:
        return self._films

    @property
    def status(self) -> LoadStatus:
        return self._status

    @property
    def loading(self) -> bool:
        return self._status is LoadStatus.LOADING

    @property
    def error(self) -> Optional[CatalogError]:
        return self._error

    @property
    def hovered(self) -> Optional[Film]:
        return self._hovered

    @property
    def selected(self) -> Optional[Film]:
        return self._selected

    def film_for_episode(self, episode_id: int) -> Optional[Film]:
        return self._by_episode.get(episode_id)

    @property
    def active_film(self) -> Optional[Film]:
        """Hovered film if any, else the selected one."""
        if self._hovered is not None:
            return self._hovered
        return self._selected

    @property
    def crawl_film(self) -> Optional[Film]:
        return self._selected

    def detail(self) -> Optional[FilmDetail]:
        film = self.active_film
        if film is None:
            return None
        return FilmDetail.for_film(film)

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    def begin_load(self) -> None:
        if self._status is not LoadStatus.LOADING:
            logger.warning("Ignoring load start, catalog already %s", self._status.value)
            return
        self._films = ()
        self._by_episode = {}

    def apply_result(self, result: LoadResult) -> bool:
        """Store the outcome of the catalog load. Returns False if a load already completed."""
        if self._status is not LoadStatus.LOADING:
            logger.warning("Ignoring duplicate catalog result, state is %s", self._status.value)
            return False
        if result.succeeded:
            self._films = tuple(result.films)
            self._by_episode = {film.episode_id: film for film in self._films}
            self._status = LoadStatus.READY
        else:
            self._error = result.error
            self._status = LoadStatus.FAILED
        return True

    def hover_enter(self, film: Film) -> None:
        self._hovered = self._require_loaded(film)

    def hover_leave(self) -> None:
        self._hovered = None

    def select(self, film: Film) -> None:
        self._selected = self._require_loaded(film)

    def _require_loaded(self, film: Film) -> Film:
        known = self._by_episode.get(film.episode_id)
        if known is None or known != film:
            raise ValueError(f"Film {film.title!r} (episode {film.episode_id}) is not in the loaded catalog")
        return known


__all__ = ["FilmDetail", "LoadStatus", "ViewState"]

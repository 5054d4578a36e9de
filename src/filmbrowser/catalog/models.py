"""Film records and load results for the catalog.

A :class:`Film` is built once per payload entry when the remote fetch
resolves and is immutable afterwards. :class:`LoadResult` carries either the
mapped sequence or the typed error that stopped the load.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

REQUIRED_FIELDS: Tuple[str, ...] = (
    "title",
    "episode_id",
    "release_date",
    "director",
    "producer",
    "opening_crawl",
)
# release_date may be null and renders as N/A
TEXT_FIELDS: Tuple[str, ...] = ("title", "director", "producer", "opening_crawl")


class CatalogError(Exception):
    """Base class for everything that can stop a catalog load."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CatalogUnavailableError(CatalogError):
    """The endpoint could not be reached or answered with an HTTP error."""


class MalformedCatalogError(CatalogError):
    """The endpoint answered, but not with a usable film collection."""


@dataclass(frozen=True)
class Film:
    """One catalog entry with its resolved cover path.

    ``extra`` keeps every source field that has no dedicated attribute, so
    the record is a full copy of what the endpoint returned.
    """

    title: str
    episode_id: int
    release_date: str
    director: str
    producer: str
    opening_crawl: str
    cover_path: str = ""
    extra: Mapping[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any], cover_path: str = "") -> "Film":
        if not isinstance(payload, Mapping):
            raise MalformedCatalogError(f"Film entry is not an object: {payload!r}")
        missing = [name for name in REQUIRED_FIELDS if name not in payload]
        if missing:
            raise MalformedCatalogError(f"Film entry is missing fields: {', '.join(missing)}")
        episode_id = payload["episode_id"]
        # bool is an int subclass, but never a valid episode number
        if isinstance(episode_id, bool) or not isinstance(episode_id, int):
            raise MalformedCatalogError(f"episode_id must be an integer, got {episode_id!r}")
        for name in TEXT_FIELDS:
            if not isinstance(payload[name], str):
                raise MalformedCatalogError(f"{name} must be a string, got {payload[name]!r}")
        release_date = payload["release_date"]
        if release_date is not None and not isinstance(release_date, str):
            raise MalformedCatalogError(f"release_date must be a string, got {release_date!r}")
        extra: Dict[str, Any] = {key: value for key, value in payload.items() if key not in REQUIRED_FIELDS}
        return cls(
            title=payload["title"],
            episode_id=episode_id,
            release_date=release_date or "",
            director=payload["director"],
            producer=payload["producer"],
            opening_crawl=payload["opening_crawl"],
            cover_path=cover_path,
            extra=MappingProxyType(extra),
        )

    @property
    def episode_label(self) -> str:
        return f"Episode {self.episode_id}"


def ensure_unique_episodes(films: Iterable[Film]) -> Tuple[Film, ...]:
    """Return ``films`` as a tuple, rejecting repeated episode numbers."""
    seen = set()
    ordered = tuple(films)
    for film in ordered:
        if film.episode_id in seen:
            raise MalformedCatalogError(f"Duplicate episode_id {film.episode_id} in catalog")
        seen.add(film.episode_id)
    return ordered


@dataclass(frozen=True)
class LoadResult:
    """Outcome of one catalog load: films on success, an error otherwise."""

    films: Tuple[Film, ...] = ()
    error: Optional[CatalogError] = None

    @classmethod
    def ok(cls, films: Iterable[Film]) -> "LoadResult":
        return cls(films=ensure_unique_episodes(films))

    @classmethod
    def failed(cls, error: CatalogError) -> "LoadResult":
        return cls(error=error)

    @property
    def succeeded(self) -> bool:
        return self.error is None


__all__ = [
    "CatalogError",
    "CatalogUnavailableError",
    "MalformedCatalogError",
    "Film",
    "LoadResult",
    "ensure_unique_episodes",
]

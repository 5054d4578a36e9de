"""HTTP client for the remote film catalog.

One GET against a fixed endpoint, first page only. Records are mapped to
:class:`Film` in the order the endpoint returns them, each decorated with
its local cover path.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, List, Optional

import requests

from .covers import cover_path_for_episode
from .models import (
    CatalogError,
    CatalogUnavailableError,
    Film,
    LoadResult,
    MalformedCatalogError,
    ensure_unique_episodes,
)

DEFAULT_ENDPOINT = "https://swapi.dev/api/films/"


class CatalogClient:
    """Fetches the film collection and maps it to :class:`Film` records."""

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        timeout: Optional[float] = 15.0,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.endpoint = endpoint
        self.timeout = timeout
        self._session = session or requests.Session()
        self._logger = logger or logging.getLogger(__name__)

    def fetch_films(self) -> List[Film]:
        """Fetch and map the catalog. Raises a :class:`CatalogError` subclass on failure."""
        self._logger.info("Fetching film catalog from %s", self.endpoint)
        try:
            response = self._session.get(
                self.endpoint,
                headers={"Accept": "application/json"},
                timeout=self.timeout,
            )
            response.raise_for_status()
        except requests.exceptions.Timeout as exc:
            raise CatalogUnavailableError(f"Request to {self.endpoint} timed out") from exc
        except requests.exceptions.ConnectionError as exc:
            raise CatalogUnavailableError(f"Could not connect to {self.endpoint}") from exc
        except requests.exceptions.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else "?"
            raise CatalogUnavailableError(f"Catalog request failed with HTTP {status}") from exc
        except requests.exceptions.RequestException as exc:
            raise CatalogUnavailableError(f"Catalog request failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedCatalogError("Catalog response is not valid JSON") from exc
        return self.map_results(body)

    def map_results(self, body: Any) -> List[Film]:
        """Map a decoded response body to films, keeping the received order."""
        if not isinstance(body, dict):
            raise MalformedCatalogError("Catalog response is not a JSON object")
        results = body.get("results")
        if not isinstance(results, list):
            raise MalformedCatalogError("Catalog response has no 'results' list")
        films = []
        for entry in results:
            film = Film.from_payload(entry)
            films.append(replace(film, cover_path=cover_path_for_episode(film.episode_id)))
        return list(ensure_unique_episodes(films))

    def load(self) -> LoadResult:
        """Run :meth:`fetch_films` and fold any catalog error into the result."""
        try:
            films = self.fetch_films()
        except CatalogError as exc:
            self._logger.error("Film catalog load failed: %s", exc.message)
            return LoadResult.failed(exc)
        self._logger.info("Loaded %d films", len(films))
        return LoadResult.ok(films)

    def close(self) -> None:
        self._session.close()


__all__ = ["CatalogClient", "DEFAULT_ENDPOINT"]

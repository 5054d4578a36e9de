"""Film catalog: records, remote client and cover images."""
from __future__ import annotations

from .client import CatalogClient
from .models import CatalogError, CatalogUnavailableError, Film, LoadResult, MalformedCatalogError

__all__ = [
    "CatalogClient",
    "CatalogError",
    "CatalogUnavailableError",
    "Film",
    "LoadResult",
    "MalformedCatalogError",
]

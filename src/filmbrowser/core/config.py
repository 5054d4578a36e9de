from __future__ import annotations

import json
import threading
from pathlib import Path
from typing import Any, Dict, Iterator, MutableMapping, Optional


class ConfigStore:
    """Thread-safe JSON-backed settings store split into named sections."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._lock = threading.RLock()
        self._data: Dict[str, Dict[str, Any]] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> None:
        if not self._path.exists():
            self._data = {}
            return
        try:
            with self._path.open("r", encoding="utf-8") as handle:
                raw = json.load(handle)
        except (OSError, json.JSONDecodeError):
            self._data = {}
            return
        if isinstance(raw, dict):
            self._data = {key.lower(): value for key, value in raw.items() if isinstance(value, dict)}
        else:
            self._data = {}

    def save(self) -> None:
        with self._lock:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with self._path.open("w", encoding="utf-8") as handle:
                json.dump(self._data, handle, indent=2, sort_keys=True)

    def get_section(self, name: str) -> "SectionConfig":
        name = name.lower()
        with self._lock:
            snapshot = dict(self._data.get(name, {}))
        return SectionConfig(self, name, snapshot)

    def update_section(self, name: str, values: Dict[str, Any]) -> None:
        name = name.lower()
        with self._lock:
            bucket = self._data.setdefault(name, {})
            bucket.update(values)
            self.save()

    def write_section(self, name: str, values: Dict[str, Any]) -> None:
        name = name.lower()
        with self._lock:
            self._data[name] = dict(values)
            self.save()


class SectionConfig(MutableMapping[str, Any]):
    """Mapping view over one section of the settings file."""

    def __init__(self, store: ConfigStore, name: str, cache: Optional[Dict[str, Any]] = None) -> None:
        self._store = store
        self._name = name
        self._cache = cache or {}

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> Any:
        return self._cache[key]

    def __setitem__(self, key: str, value: Any) -> None:
        self._cache[key] = value
        self._store.update_section(self._name, {key: value})

    def __delitem__(self, key: str) -> None:
        if key not in self._cache:
            raise KeyError(key)
        del self._cache[key]
        self._store.write_section(self._name, self._cache)

    def __iter__(self) -> Iterator[str]:
        return iter(self._cache)

    def __len__(self) -> int:
        return len(self._cache)

    def get(self, key: str, default: Any = None) -> Any:
        return self._cache.get(key, default)

    def update(self, other: Optional[Dict[str, Any]] = None, **kwargs: Any) -> None:  # type: ignore[override]
        payload: Dict[str, Any] = {}
        if other:
            payload.update(other)
        if kwargs:
            payload.update(kwargs)
        if not payload:
            return
        self._cache.update(payload)
        self._store.update_section(self._name, payload)

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._cache)

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

from ..catalog.client import DEFAULT_ENDPOINT
from .config import ConfigStore, SectionConfig

DEFAULT_TIMEOUT = 15.0
ASSETS_DIR = Path(__file__).resolve().parents[1] / "assets"

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@dataclass(frozen=True)
class BrowserSettings:
    """Typed view of the ``browser`` settings section."""

    endpoint: str = DEFAULT_ENDPOINT
    request_timeout: Optional[float] = DEFAULT_TIMEOUT
    assets_dir: Path = ASSETS_DIR
    log_level: str = "info"

    @classmethod
    def from_config(cls, section: SectionConfig) -> "BrowserSettings":
        endpoint = section.get("endpoint") or DEFAULT_ENDPOINT
        timeout = _coerce_timeout(section.get("request_timeout", DEFAULT_TIMEOUT))
        assets_raw = section.get("assets_dir")
        assets_dir = Path(assets_raw).expanduser() if assets_raw else ASSETS_DIR
        level = str(section.get("log_level") or "info").lower()
        if level not in LOG_LEVELS:
            level = "info"
        return cls(endpoint=str(endpoint), request_timeout=timeout, assets_dir=assets_dir, log_level=level)


def _coerce_timeout(value: Any) -> Optional[float]:
    if value is None:
        return None
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        return DEFAULT_TIMEOUT
    return timeout if timeout > 0 else None


class CoreServices:
    """Shared services for the browser window: paths, logging and settings."""

    def __init__(
        self,
        app_name: str = "FilmBrowser",
        data_dir: Optional[Path] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.app_name = app_name
        self.data_dir = data_dir or self._resolve_data_dir(app_name)
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._config_store = ConfigStore(self.data_dir / "config.json")
        self._logger = logger or self._configure_logger(app_name, self.data_dir / "logs")
        self._logger.setLevel(LOG_LEVELS[self.settings().log_level])

    @staticmethod
    def _resolve_data_dir(app_name: str) -> Path:
        if os.name == "nt":
            base = Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
        else:
            base = Path(os.getenv("XDG_CONFIG_HOME", Path.home() / ".config"))
        return base / app_name.lower()

    @staticmethod
    def _configure_logger(app_name: str, log_dir: Path) -> logging.Logger:
        logger = logging.getLogger(app_name)
        if not logger.handlers:
            formatter = logging.Formatter(
                "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
            )
            handler = logging.StreamHandler()
            handler.setFormatter(formatter)
            logger.addHandler(handler)
            try:
                log_dir.mkdir(parents=True, exist_ok=True)
                log_path = log_dir / f"{app_name.lower()}-{datetime.now().strftime('%Y-%m-%d')}.log"
                file_handler = logging.FileHandler(log_path, encoding="utf-8")
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)
            except OSError:
                logger.warning("Log directory %s is not writable, logging to console only", log_dir)
        return logger

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def get_logger(self, name: str) -> logging.Logger:
        return self._logger.getChild(name)

    @property
    def config_store(self) -> ConfigStore:
        return self._config_store

    def get_browser_config(self) -> SectionConfig:
        return self._config_store.get_section("browser")

    def settings(self) -> BrowserSettings:
        return BrowserSettings.from_config(self.get_browser_config())

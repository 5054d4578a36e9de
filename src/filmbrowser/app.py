from __future__ import annotations

import sys

from PySide6.QtWidgets import QApplication

from .browser.window import FilmBrowserWindow
from .core.services import CoreServices


def main() -> int:
    app = QApplication(sys.argv)
    app.setApplicationName("Film Browser")
    services = CoreServices()
    services.logger.info("Settings loaded from %s", services.config_store.path)
    window = FilmBrowserWindow(services=services)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())

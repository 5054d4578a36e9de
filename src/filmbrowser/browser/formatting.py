"""Display formatting helpers."""
from __future__ import annotations

from typing import Optional

from PySide6.QtCore import QDate, QLocale, Qt

NOT_AVAILABLE = "N/A"


def format_release_date(value: str, locale: Optional[QLocale] = None) -> str:
    """Render an ISO ``YYYY-MM-DD`` date in the viewer's short date format."""
    if not value:
        return NOT_AVAILABLE
    date = QDate.fromString(value.strip()[:10], Qt.DateFormat.ISODate)
    if not date.isValid():
        return NOT_AVAILABLE
    locale = locale or QLocale()
    return locale.toString(date, QLocale.FormatType.ShortFormat)


__all__ = ["NOT_AVAILABLE", "format_release_date"]

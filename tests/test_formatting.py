from __future__ import annotations

import pytest
from PySide6.QtCore import QDate, QLocale

from filmbrowser.browser.formatting import NOT_AVAILABLE, format_release_date


def test_uses_viewer_locale_short_format() -> None:
    expected = QLocale().toString(QDate(1977, 5, 25), QLocale.FormatType.ShortFormat)

    assert format_release_date("1977-05-25") == expected


def test_explicit_locale_controls_field_order() -> None:
    american = format_release_date("1977-05-25", QLocale("en_US"))
    german = format_release_date("1977-05-25", QLocale("de_DE"))

    assert american.startswith("5/25")
    assert german.startswith("25.05")


@pytest.mark.parametrize("value", ["", "not a date", "1977-13-40"])
def test_unusable_values_render_not_available(value: str) -> None:
    assert format_release_date(value) == NOT_AVAILABLE == "N/A"

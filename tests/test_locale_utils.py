"""Locale used in redirect paths."""

import pytest

from app.utils.locale_utils import detect_locale, localized_path


@pytest.mark.parametrize(
    "explicit, cookie, header, expected",
    [
        ("zh", "ko", "en-US", "zh"),
        ("fr", "ko", "en-US", "ko"),
        (None, "xx", "vi-VN,vi;q=0.9,en;q=0.8", "vi"),
        (None, None, "fr-FR,en;q=0.5", "en"),
        (None, None, "fr-FR", "vi"),
        (None, None, None, "vi"),
    ],
)
def test_detect_locale(explicit, cookie, header, expected):
    assert detect_locale(explicit, cookie, header) == expected


def test_localized_path():
    assert localized_path("en", "/register") == "/en/register"
    assert localized_path("ko") == "/ko"

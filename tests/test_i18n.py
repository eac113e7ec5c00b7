"""
Tests for language selection and message lookup.
"""

import pytest

from worktime.i18n import get_language, set_language, tr


def test_english_messages():
    assert get_language() == "en"
    assert tr("notify.task_added") == "Task added."
    assert tr("confirm.delete", name="Emails") == "Delete? Emails"


def test_german_messages():
    set_language("de")
    assert get_language() == "de"
    assert tr("main.total", time="01:00:00") == "Gesamtzeit: 01:00:00"


@pytest.mark.parametrize("lang", ["fr", "", "xx"])
def test_unsupported_language_falls_back_to_english(lang):
    set_language(lang)
    assert get_language() == "en"


def test_auto_picks_a_supported_language():
    set_language("auto")
    assert get_language() in ("en", "de")


def test_unknown_key_returns_key():
    assert tr("does.not.exist") == "does.not.exist"


def test_missing_format_argument_leaves_text():
    assert tr("notify.exported") == "Saved data to {file}"

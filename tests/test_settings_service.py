"""Tests for the key/value settings table."""

import pytest

from ghdash.services.settings_service import SettingsService


@pytest.fixture
def prefs(store):
    return SettingsService(store)


class TestSettingsService:
    def test_get_default(self, prefs):
        assert prefs.get("theme") is None
        assert prefs.get("theme", "light") == "light"

    def test_set_and_get(self, prefs):
        prefs.set("theme", "dark")
        assert prefs.get("theme") == "dark"

    def test_set_replaces(self, prefs):
        prefs.set("theme", "dark")
        prefs.set("theme", "solarized")
        assert prefs.all() == {"theme": "solarized"}

    def test_delete(self, prefs):
        prefs.set("theme", "dark")
        assert prefs.delete("theme") is True
        assert prefs.delete("theme") is False
        assert prefs.get("theme") is None

    def test_all_sorted_by_key(self, prefs):
        prefs.set("b", "2")
        prefs.set("a", "1")
        assert list(prefs.all().items()) == [("a", "1"), ("b", "2")]

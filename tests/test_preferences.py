"""
Testes das preferências da aplicação e da configuração.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from golem.config import GolemConfig
from golem.preferences import AppPreferences, load_preferences, save_preferences
from golem.storage import SQLiteStore


class TestAppPreferences:
    def test_defaults_on_empty_store(self, store: SQLiteStore) -> None:
        prefs = load_preferences(store)

        assert prefs == AppPreferences(800.0, 600.0, "", "GET")

    def test_save_and_load(self, store: SQLiteStore) -> None:
        save_preferences(store, AppPreferences(1024.5, 768.0, "http://x", "POST"))

        assert store.get_all_preferences()["window_width"] == "1024.500000"
        assert load_preferences(store) == AppPreferences(1024.5, 768.0, "http://x", "POST")

    def test_unparseable_numbers_keep_defaults(self, store: SQLiteStore) -> None:
        store.set_preference("window_width", "wide")
        store.set_preference("window_height", "480")

        prefs = load_preferences(store)

        assert prefs.window_width == 800.0
        assert prefs.window_height == 480.0

    def test_read_error_returns_defaults(self, tmp_path: Path) -> None:
        s = SQLiteStore(tmp_path / "golem.db")
        s.close()

        assert load_preferences(s) == AppPreferences()


class TestGolemConfig:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        for key in ("GOLEM_DB_PATH", "GOLEM_REQUEST_TIMEOUT", "GOLEM_EXPORT_LIMIT"):
            monkeypatch.delenv(key, raising=False)

        config = GolemConfig.from_env()

        assert config.db_path == "~/.golem/golem.db"
        assert config.request_timeout == 30.0
        assert config.history_page_size == 100
        assert config.export_limit == 10000

    def test_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GOLEM_DB_PATH", "/tmp/x.db")
        monkeypatch.setenv("GOLEM_REQUEST_TIMEOUT", "2.5")
        monkeypatch.setenv("GOLEM_VERBOSE", "yes")
        monkeypatch.setenv("GOLEM_EXPORT_LIMIT", "abc")

        config = GolemConfig.from_env()

        assert config.db_path == "/tmp/x.db"
        assert config.request_timeout == 2.5
        assert config.verbose is True
        assert config.export_limit == 10000

    def test_for_testing_uses_memory(self) -> None:
        assert GolemConfig.for_testing().db_path == ":memory:"

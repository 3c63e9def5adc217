"""
================================================================================
Testes do CLI
================================================================================

Usa click.testing.CliRunner com store e cliente HTTP injetados em `obj`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest
from click.testing import CliRunner

from golem.cli import cli
from golem.storage import RequestHistory, SavedRequest, SQLiteStore


MOCK_BASE = "http://mock.local"

MakeHistory = Callable[..., RequestHistory]


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def runner() -> CliRunner:
    """Runner para testes de CLI."""
    return CliRunner()


@pytest.fixture
def invoke(
    runner: CliRunner, store: SQLiteStore, http_client: httpx.Client
) -> Callable[..., Any]:
    """Invoca o CLI com store e cliente HTTP de teste."""

    def _invoke(args: list[str], **kwargs: Any) -> Any:
        return runner.invoke(
            cli, args, obj={"store": store, "http_client": http_client}, **kwargs
        )

    return _invoke


# =============================================================================
# TESTES DE HELP E VERSION
# =============================================================================


class TestCliHelp:
    """Testes do help e version."""

    def test_help_shows_commands(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        for name in ("send", "history", "collection", "saved", "prefs", "serve"):
            assert name in result.output

    def test_version_shows_version(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_global_flags_in_help(self, runner: CliRunner) -> None:
        result = runner.invoke(cli, ["--help"])

        assert "--verbose" in result.output
        assert "--quiet" in result.output
        assert "--json" in result.output
        assert "--db" in result.output


# =============================================================================
# SEND
# =============================================================================


class TestSendCommand:
    def test_send_records_history_and_preferences(
        self, invoke: Callable[..., Any], store: SQLiteStore
    ) -> None:
        result = invoke(["send", "-X", "post", f"{MOCK_BASE}/ok"])

        assert result.exit_code == 0, result.output
        assert "200 OK" in result.output
        rows = store.list_history()
        assert len(rows) == 1
        assert rows[0].method == "POST"
        assert rows[0].response_status == "200 OK"
        prefs = store.get_all_preferences()
        assert prefs["last_url"] == f"{MOCK_BASE}/ok"
        assert prefs["last_method"] == "POST"

    def test_send_json_output(self, invoke: Callable[..., Any]) -> None:
        result = invoke(["-q", "--json", "send", f"{MOCK_BASE}/cookies"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["status_code"] == 200
        assert [h["value"] for h in data["headers"] if h["key"] == "Set-Cookie"] == ["a=1", "b=2"]

    def test_send_without_url_uses_last_url(
        self, invoke: Callable[..., Any], store: SQLiteStore
    ) -> None:
        store.set_preference("last_url", f"{MOCK_BASE}/error")
        store.set_preference("last_method", "DELETE")

        result = invoke(["send"])

        assert result.exit_code == 0, result.output
        assert store.list_history()[0].method == "DELETE"
        assert store.list_history()[0].response_status == "500 Internal Server Error"

    def test_send_without_any_url_fails(self, invoke: Callable[..., Any]) -> None:
        result = invoke(["send"])

        assert result.exit_code == 1
        assert "Informe uma URL" in result.output

    def test_transport_error_exits_1_and_records_error(
        self, invoke: Callable[..., Any], store: SQLiteStore
    ) -> None:
        result = invoke(["send", f"{MOCK_BASE}/slow"])

        assert result.exit_code == 1
        assert "Status: Error" in result.output
        assert store.list_history()[0].response_status == "Error"


# =============================================================================
# HISTORY
# =============================================================================


class TestHistoryCommand:
    def test_list_json(
        self, invoke: Callable[..., Any], store: SQLiteStore, make_history: MakeHistory
    ) -> None:
        store.save_history(make_history(url="http://api/users"))
        store.save_history(make_history(url="http://api/orders", minutes_ago=1))

        result = invoke(["-q", "--json", "history", "-n", "1"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [r["url"] for r in data["history"]] == ["http://api/users"]

    def test_search_json(
        self, invoke: Callable[..., Any], store: SQLiteStore, make_history: MakeHistory
    ) -> None:
        store.save_history(make_history(url="http://api/users"))
        store.save_history(make_history(url="http://api/orders", minutes_ago=1))

        result = invoke(["-q", "--json", "history", "--search", "orders"])

        data = json.loads(result.stdout)
        assert [r["url"] for r in data["history"]] == ["http://api/orders"]

    def test_search_with_offset_is_usage_error(self, invoke: Callable[..., Any]) -> None:
        result = invoke(["history", "--search", "users", "--offset", "5"])

        assert result.exit_code == 2
        assert "--offset" in result.output

    def test_empty_history_message(self, invoke: Callable[..., Any]) -> None:
        result = invoke(["history"])

        assert result.exit_code == 0
        assert "Nenhuma requisição encontrada" in result.output

    def test_show_missing_exits_1(self, invoke: Callable[..., Any]) -> None:
        result = invoke(["history", "show", "99"])

        assert result.exit_code == 1
        assert "não encontrada" in result.output

    def test_delete(
        self, invoke: Callable[..., Any], store: SQLiteStore, make_history: MakeHistory
    ) -> None:
        entry = store.save_history(make_history())

        result = invoke(["history", "delete", str(entry.id)])

        assert result.exit_code == 0
        assert store.count_history() == 0

    def test_clear_asks_confirmation(
        self, invoke: Callable[..., Any], store: SQLiteStore, make_history: MakeHistory
    ) -> None:
        store.save_history(make_history())

        declined = invoke(["history", "clear"], input="n\n")
        assert store.count_history() == 1
        assert declined.exit_code == 0

        accepted = invoke(["history", "clear"], input="y\n")
        assert accepted.exit_code == 0
        assert store.count_history() == 0

    def test_export_then_import(
        self,
        invoke: Callable[..., Any],
        store: SQLiteStore,
        make_history: MakeHistory,
        tmp_path: Path,
    ) -> None:
        store.save_history(make_history())
        path = tmp_path / "history.json"

        exported = invoke(["history", "export", str(path)])
        assert exported.exit_code == 0
        assert len(json.loads(path.read_text(encoding="utf-8"))) == 1

        invoke(["history", "clear", "--force"])
        imported = invoke(["history", "import", str(path)])

        assert imported.exit_code == 0
        assert store.count_history() == 1

    def test_import_failure_exits_1_and_writes_nothing(
        self, invoke: Callable[..., Any], store: SQLiteStore, tmp_path: Path
    ) -> None:
        path = tmp_path / "bad.json"
        path.write_text(
            json.dumps([
                {"url": "http://x/1", "method": "GET", "timestamp": "2024-01-01T00:00:00Z"},
                {"url": "http://x/2"},
            ]),
            encoding="utf-8",
        )

        result = invoke(["history", "import", str(path)])

        assert result.exit_code == 1
        assert "nenhum registro gravado" in result.output
        assert store.count_history() == 0


# =============================================================================
# COLLECTIONS / SAVED / PREFS
# =============================================================================


class TestCollectionAndSavedCommands:
    def test_collection_lifecycle(self, invoke: Callable[..., Any], store: SQLiteStore) -> None:
        created = invoke(["-q", "--json", "collection", "create", "Users API", "-d", "CRUD"])
        assert created.exit_code == 0
        col_id = json.loads(created.stdout)["id"]

        listed = invoke(["-q", "--json", "collection", "list"])
        assert [c["name"] for c in json.loads(listed.stdout)["collections"]] == ["Users API"]

        assert invoke(["collection", "delete", str(col_id)]).exit_code == 0
        assert invoke(["collection", "delete", str(col_id)]).exit_code == 1

    def test_saved_add_with_headers(self, invoke: Callable[..., Any], store: SQLiteStore) -> None:
        col = store.create_collection("c")

        result = invoke([
            "saved", "add", "create-user", "http://api/users",
            "-X", "POST", "-c", str(col.id),
            "--header", "Content-Type: application/json", "--body", "{}",
        ])

        assert result.exit_code == 0, result.output
        saved = store.list_saved_requests(col.id)
        assert len(saved) == 1
        assert saved[0].method == "POST"
        assert json.loads(saved[0].headers or "") == [
            {"key": "Content-Type", "value": "application/json"}
        ]

    def test_saved_add_unknown_collection_fails(self, invoke: Callable[..., Any]) -> None:
        result = invoke(["saved", "add", "x", "http://api", "-c", "999"])

        assert result.exit_code == 1

    def test_saved_add_bad_header_is_usage_error(self, invoke: Callable[..., Any]) -> None:
        result = invoke(["saved", "add", "x", "http://api", "--header", "semdoispontos"])

        assert result.exit_code == 2

    def test_saved_list_unfiled_json(self, invoke: Callable[..., Any], store: SQLiteStore) -> None:
        store.save_request(SavedRequest(name="b", url="http://x/b", method="GET"))
        store.save_request(SavedRequest(name="a", url="http://x/a", method="GET"))

        result = invoke(["-q", "--json", "saved", "list"])

        assert [s["name"] for s in json.loads(result.stdout)["saved"]] == ["a", "b"]

    def test_saved_run_records_with_collection(
        self, invoke: Callable[..., Any], store: SQLiteStore
    ) -> None:
        col = store.create_collection("c")
        entry = store.save_request(
            SavedRequest(name="ok", url=f"{MOCK_BASE}/ok", method="GET", collection_id=col.id)
        )

        result = invoke(["saved", "run", str(entry.id)])

        assert result.exit_code == 0, result.output
        row = store.list_history()[0]
        assert row.collection_id == col.id
        assert row.response_status == "200 OK"

    def test_saved_run_transport_error_exits_1(
        self, invoke: Callable[..., Any], store: SQLiteStore
    ) -> None:
        entry = store.save_request(SavedRequest(name="down", url=f"{MOCK_BASE}/down", method="GET"))

        result = invoke(["saved", "run", str(entry.id)])

        assert result.exit_code == 1
        assert "Status: Error" in result.output
        assert store.list_history()[0].response_status == "Error"

    def test_saved_show_missing(self, invoke: Callable[..., Any]) -> None:
        assert invoke(["saved", "show", "5"]).exit_code == 1

    def test_prefs_set_and_list(self, invoke: Callable[..., Any], store: SQLiteStore) -> None:
        assert invoke(["prefs", "set", "last_method", "PUT"]).exit_code == 0

        result = invoke(["-q", "--json", "prefs"])

        assert json.loads(result.stdout)["preferences"] == {"last_method": "PUT"}
        assert store.get_preference("last_method") is not None


class TestDatabaseOption:
    def test_db_option_opens_and_closes_store(self, runner: CliRunner, tmp_path: Path) -> None:
        """Sem store injetado, `--db` abre o arquivo informado."""
        db = tmp_path / "cli.db"

        result = runner.invoke(cli, ["--db", str(db), "prefs", "set", "k", "v"])

        assert result.exit_code == 0, result.output
        with SQLiteStore(db) as s:
            assert s.get_all_preferences() == {"k": "v"}

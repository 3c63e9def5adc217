"""
================================================================================
Testes da API REST
================================================================================

Testes para os endpoints da API usando FastAPI TestClient.

## Cobertura:

- GET /health
- POST /api/v1/send
- GET/DELETE /api/v1/history
- /api/v1/collections, /api/v1/saved
- /api/v1/preferences
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from golem.api import APIConfig, create_app
from golem.api.deps import get_http_client
from golem.config import GolemConfig
from golem.storage import RequestHistory, SQLiteStore


MOCK_BASE = "http://mock.local"

MakeHistory = Callable[..., RequestHistory]


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def test_config() -> APIConfig:
    """Configuração para testes."""
    return APIConfig(
        host="127.0.0.1",
        port=8888,
        debug=True,
        cors_origins=["*"],
        docs_enabled=True,
    )


@pytest.fixture
def client(
    test_config: APIConfig, store: SQLiteStore, http_client: httpx.Client
) -> TestClient:
    """TestClient com store injetado e cliente HTTP simulado."""
    app = create_app(test_config, store=store, settings=GolemConfig.for_testing())
    app.dependency_overrides[get_http_client] = lambda: http_client
    return TestClient(app)


# =============================================================================
# Testes: Health Check
# =============================================================================


class TestHealthEndpoint:
    def test_root_health(self, client: TestClient) -> None:
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert response.json()["version"] == "0.1.0"

    def test_api_health_reports_storage(self, client: TestClient) -> None:
        data = client.get("/api/v1/health").json()

        assert data["components"]["storage"] == "available"

    def test_request_id_header(self, client: TestClient) -> None:
        response = client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"

    def test_lifespan_opens_and_closes_store(
        self, test_config: APIConfig, tmp_path: Path
    ) -> None:
        """Sem store injetado, o banco é aberto no startup."""
        settings = GolemConfig(db_path=str(tmp_path / "api.db"))
        app = create_app(test_config, settings=settings)

        with TestClient(app) as c:
            assert c.put("/api/v1/preferences/k", json={"value": "v"}).status_code == 200
            store = app.state.store
            assert store is not None

        assert store.closed is True
        assert app.state.store is None


# =============================================================================
# Testes: Send
# =============================================================================


class TestSendEndpoint:
    def test_send_returns_response_and_records(
        self, client: TestClient, store: SQLiteStore
    ) -> None:
        response = client.post("/api/v1/send", json={"method": "get", "url": f"{MOCK_BASE}/ok"})

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "200 OK"
        assert data["status_code"] == 200
        assert "hello" in data["body"]
        # Background task roda antes do TestClient devolver a resposta
        rows = store.list_history()
        assert len(rows) == 1
        assert rows[0].method == "GET"

    def test_send_http_error_status_is_success(self, client: TestClient) -> None:
        response = client.post("/api/v1/send", json={"url": f"{MOCK_BASE}/error"})

        assert response.status_code == 200
        assert response.json()["status"] == "500 Internal Server Error"

    def test_transport_error_gives_502(self, client: TestClient, store: SQLiteStore) -> None:
        response = client.post("/api/v1/send", json={"method": "GET", "url": f"{MOCK_BASE}/down"})

        assert response.status_code == 502
        data = response.json()
        assert data["success"] is False
        assert data["status"] == "Error"
        assert data["error"]["code"] == "E3001"
        assert store.list_history()[0].response_status == "Error"

    def test_invalid_payload_gives_422(self, client: TestClient) -> None:
        response = client.post("/api/v1/send", json={"method": "TRACE", "url": ""})

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "E1009"


# =============================================================================
# Testes: History
# =============================================================================


class TestHistoryEndpoint:
    def test_list_paginated(
        self, client: TestClient, store: SQLiteStore, make_history: MakeHistory
    ) -> None:
        for i in range(3):
            store.save_history(make_history(url=f"http://x/{i}", minutes_ago=i))

        data = client.get("/api/v1/history", params={"limit": 2, "offset": 1}).json()

        assert [r["url"] for r in data["records"]] == ["http://x/1", "http://x/2"]
        assert data["total"] == 3

    def test_search(
        self, client: TestClient, store: SQLiteStore, make_history: MakeHistory
    ) -> None:
        store.save_history(make_history(url="http://api/users"))
        store.save_history(make_history(url="http://api/Users", minutes_ago=1))

        data = client.get("/api/v1/history", params={"q": "users"}).json()

        assert [r["url"] for r in data["records"]] == ["http://api/users"]

    def test_get_missing_is_404(self, client: TestClient) -> None:
        response = client.get("/api/v1/history/42")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "E4002"

    def test_delete_one_and_clear(
        self, client: TestClient, store: SQLiteStore, make_history: MakeHistory
    ) -> None:
        first = store.save_history(make_history())
        store.save_history(make_history(minutes_ago=1))

        assert client.delete(f"/api/v1/history/{first.id}").status_code == 200
        assert client.delete(f"/api/v1/history/{first.id}").status_code == 404

        cleared = client.delete("/api/v1/history").json()
        assert cleared["deleted"] == 1
        assert store.count_history() == 0

    def test_send_shows_up_in_first_page(self, client: TestClient) -> None:
        """A primeira página vem do feed em memória, atualizado após gravar."""
        assert client.get("/api/v1/history").json()["records"] == []

        client.post("/api/v1/send", json={"method": "PUT", "url": f"{MOCK_BASE}/ok"})
        data = client.get("/api/v1/history").json()

        assert [(r["method"], r["url"]) for r in data["records"]] == [("PUT", f"{MOCK_BASE}/ok")]
        feed = client.app.state.feed
        assert [e.method for e in feed.entries] == ["PUT"]
        assert feed.page_size == GolemConfig.for_testing().history_page_size

    def test_clear_empties_first_page(
        self, client: TestClient, store: SQLiteStore, make_history: MakeHistory
    ) -> None:
        store.save_history(make_history())
        assert len(client.get("/api/v1/history").json()["records"]) == 1

        client.delete("/api/v1/history")

        assert client.get("/api/v1/history").json()["records"] == []


# =============================================================================
# Testes: Collections / Saved / Preferences
# =============================================================================


class TestCollectionsAndSaved:
    def test_create_list_delete_collection(self, client: TestClient) -> None:
        created = client.post("/api/v1/collections", json={"name": "Users", "description": "d"})
        assert created.status_code == 201
        col_id = created.json()["id"]

        listed = client.get("/api/v1/collections").json()
        assert [c["name"] for c in listed["collections"]] == ["Users"]

        assert client.delete(f"/api/v1/collections/{col_id}").status_code == 200
        assert client.delete(f"/api/v1/collections/{col_id}").status_code == 404

    def test_saved_by_collection_and_unfiled(self, client: TestClient) -> None:
        col_id = client.post("/api/v1/collections", json={"name": "c"}).json()["id"]
        client.post("/api/v1/saved", json={"name": "in", "url": "http://x", "collection_id": col_id})
        client.post("/api/v1/saved", json={"name": "out", "url": "http://y", "method": "POST"})

        in_col = client.get("/api/v1/saved", params={"collection_id": col_id}).json()["saved"]
        unfiled = client.get("/api/v1/saved").json()["saved"]
        forced = client.get(
            "/api/v1/saved", params={"collection_id": col_id, "unfiled": True}
        ).json()["saved"]

        assert [s["name"] for s in in_col] == ["in"]
        assert [s["name"] for s in unfiled] == ["out"]
        assert [s["name"] for s in forced] == ["out"]

    def test_saved_missing_is_404_e4002(self, client: TestClient) -> None:
        response = client.get("/api/v1/saved/7")

        assert response.status_code == 404
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "E4002"

    def test_saved_unknown_collection_is_404(self, client: TestClient) -> None:
        response = client.post(
            "/api/v1/saved", json={"name": "x", "url": "http://x", "collection_id": 999}
        )

        assert response.status_code == 404

    def test_collection_delete_cascades_saved(self, client: TestClient) -> None:
        col_id = client.post("/api/v1/collections", json={"name": "c"}).json()["id"]
        saved_id = client.post(
            "/api/v1/saved", json={"name": "s", "url": "http://x", "collection_id": col_id}
        ).json()["id"]

        client.delete(f"/api/v1/collections/{col_id}")

        assert client.get(f"/api/v1/saved/{saved_id}").status_code == 404


class TestPreferencesEndpoint:
    def test_put_and_get(self, client: TestClient) -> None:
        put = client.put("/api/v1/preferences/last_url", json={"value": "http://x"})
        assert put.status_code == 200

        data = client.get("/api/v1/preferences").json()
        assert data["preferences"] == {"last_url": "http://x"}

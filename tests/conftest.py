"""
Fixtures compartilhadas: store em arquivo temporário e cliente httpx com
transporte simulado (sem rede).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Generator

import httpx
import pytest

from golem.storage import RequestHistory, SQLiteStore


MOCK_BASE = "http://mock.local"

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def mock_handler(request: httpx.Request) -> httpx.Response:
    """
    Servidor simulado.

    - /ok → 200 JSON
    - /cookies → 200 com Set-Cookie repetido
    - /error → 500
    - /slow → ReadTimeout
    - /down → ConnectError
    """
    path = request.url.path
    if path == "/ok":
        return httpx.Response(200, json={"hello": "world"})
    if path == "/cookies":
        return httpx.Response(
            200,
            headers=[("Set-Cookie", "a=1"), ("Set-Cookie", "b=2"), ("X-Trace", "t1")],
            text="cookies",
        )
    if path == "/error":
        return httpx.Response(500, text="boom")
    if path == "/slow":
        raise httpx.ReadTimeout("timed out", request=request)
    if path == "/down":
        raise httpx.ConnectError("connection refused", request=request)
    return httpx.Response(404, text="not found")


@pytest.fixture
def store(tmp_path: Path) -> Generator[SQLiteStore, None, None]:
    """Store SQLite num arquivo temporário."""
    s = SQLiteStore(db_path=tmp_path / "golem.db")
    yield s
    s.close()


@pytest.fixture
def http_client() -> Generator[httpx.Client, None, None]:
    """Cliente httpx com MockTransport."""
    client = httpx.Client(transport=httpx.MockTransport(mock_handler), follow_redirects=True)
    yield client
    client.close()


@pytest.fixture
def make_history() -> Callable[..., RequestHistory]:
    """Fábrica de linhas de histórico com timestamp controlado."""

    def _make(
        url: str = f"{MOCK_BASE}/ok",
        method: str = "GET",
        minutes_ago: int = 0,
        **kwargs: Any,
    ) -> RequestHistory:
        kwargs.setdefault("response_status", "200 OK")
        return RequestHistory(
            url=url,
            method=method,
            timestamp=BASE_TIME - timedelta(minutes=minutes_ago),
            **kwargs,
        )

    return _make

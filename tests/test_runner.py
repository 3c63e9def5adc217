"""
Testes do executor de requisições (httpx com MockTransport, sem rede).
"""

from __future__ import annotations

import time
from datetime import timedelta
from typing import Iterator

import httpx
import pytest

from golem.runner import RequestExecutionError, execute_request

MOCK_BASE = "http://mock.local"


def drip_client(chunks: int, interval: float) -> httpx.Client:
    """Cliente cujo servidor envia o corpo um byte por vez, com pausas."""

    def body() -> Iterator[bytes]:
        for _ in range(chunks):
            time.sleep(interval)
            yield b"x"

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=body())

    return httpx.Client(transport=httpx.MockTransport(handler))


class TestExecuteRequest:
    def test_success_returns_normalized_info(self, http_client: httpx.Client) -> None:
        info = execute_request("get", f"{MOCK_BASE}/ok", client=http_client)

        assert info.status == "200 OK"
        assert info.status_code == 200
        assert info.ok is True
        assert '"hello"' in info.body
        assert info.size == len(info.body.encode("utf-8"))
        assert info.response_time >= timedelta(0)
        assert info.response_time_ms >= 0

    def test_repeated_headers_kept_in_order(self, http_client: httpx.Client) -> None:
        info = execute_request("GET", f"{MOCK_BASE}/cookies", client=http_client)

        cookies = [h.value for h in info.headers if h.key.lower() == "set-cookie"]
        assert cookies == ["a=1", "b=2"]
        assert any(h.key == "X-Trace" and h.value == "t1" for h in info.headers)

    def test_http_error_status_is_not_an_exception(self, http_client: httpx.Client) -> None:
        info = execute_request("DELETE", f"{MOCK_BASE}/error", client=http_client)

        assert info.status == "500 Internal Server Error"
        assert info.ok is False
        assert info.body == "boom"

    def test_timeout_raises_execution_error(self, http_client: httpx.Client) -> None:
        with pytest.raises(RequestExecutionError) as exc_info:
            execute_request("GET", f"{MOCK_BASE}/slow", client=http_client)

        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)
        assert exc_info.value.method == "GET"

    def test_connect_error_raises_execution_error(self, http_client: httpx.Client) -> None:
        with pytest.raises(RequestExecutionError) as exc_info:
            execute_request("POST", f"{MOCK_BASE}/down", client=http_client)

        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
        assert "connection refused" in str(exc_info.value)

    def test_empty_url_rejected_before_io(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        with httpx.Client(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(RequestExecutionError):
                execute_request("GET", "", client=client)

        assert calls == []

    def test_unsupported_scheme_raises_execution_error(self) -> None:
        """Sem cliente injetado: esquema desconhecido falha sem rede."""
        with pytest.raises(RequestExecutionError):
            execute_request("GET", "ftp://example.invalid/file", timeout=1.0)


class TestTotalTimeout:
    """O timeout limita a chamada inteira, inclusive a leitura do corpo."""

    def test_slow_body_past_deadline_raises(self) -> None:
        with drip_client(chunks=6, interval=0.3) as client:
            start = time.perf_counter()
            with pytest.raises(RequestExecutionError) as exc_info:
                execute_request("GET", f"{MOCK_BASE}/drip", timeout=0.5, client=client)
            elapsed = time.perf_counter() - start

        assert isinstance(exc_info.value.__cause__, httpx.ReadTimeout)
        assert "0.5s timeout" in str(exc_info.value)
        assert elapsed < 1.5

    def test_slow_body_within_deadline_succeeds(self) -> None:
        with drip_client(chunks=3, interval=0.05) as client:
            info = execute_request("GET", f"{MOCK_BASE}/drip", timeout=5.0, client=client)

        assert info.body == "xxx"
        assert info.size == 3
        assert info.response_time >= timedelta(seconds=0.15)

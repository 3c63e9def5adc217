"""
================================================================================
Dependências Injetáveis da API
================================================================================

Dependências injetadas nos endpoints via FastAPI Depends. O store e a
configuração vivem em `app.state`; testes substituem o cliente HTTP com
`app.dependency_overrides`.
"""

from __future__ import annotations

import httpx
from fastapi import Depends, HTTPException, Request, status

from ..config import GolemConfig
from ..feed import HistoryFeed
from ..recorder import HistoryRecorder
from ..storage import SQLiteStore


def get_store(request: Request) -> SQLiteStore:
    """
    Fornece o store aberto no startup (ou injetado em `create_app`).

    ## Uso em endpoint:

        >>> @router.get("/")
        >>> def endpoint(store: SQLiteStore = Depends(get_store)):
        ...     store.list_history()
    """
    store: SQLiteStore | None = getattr(request.app.state, "store", None)
    if store is None or store.closed:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"code": "E5003", "message": "Banco de dados indisponível"},
        )
    return store


def get_settings(request: Request) -> GolemConfig:
    return request.app.state.settings


def get_http_client() -> httpx.Client | None:
    """Cliente HTTP para o executor. None usa um cliente por requisição."""
    return None


def get_feed(request: Request, store: SQLiteStore = Depends(get_store)) -> HistoryFeed:
    """
    Cache das linhas mais recentes, compartilhado pela app.

    Criado e carregado no primeiro uso; recriado se o store mudar.
    """
    feed: HistoryFeed | None = getattr(request.app.state, "feed", None)
    if feed is None or feed.store is not store:
        feed = HistoryFeed(store, page_size=get_settings(request).history_page_size)
        feed.load()
        request.app.state.feed = feed
    return feed


def build_recorder(
    store: SQLiteStore,
    settings: GolemConfig,
    client: httpx.Client | None,
    feed: HistoryFeed | None = None,
) -> HistoryRecorder:
    """Recorder que, após gravar, coloca a linha no topo do feed."""
    return HistoryRecorder(
        store,
        on_recorded=feed.prepend if feed is not None else None,
        timeout=settings.request_timeout,
        client=client,
    )

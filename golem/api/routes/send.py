"""
================================================================================
Rota: /send
================================================================================

Executa uma requisição HTTP e devolve a resposta normalizada.

## Fluxo:

1. Executa a requisição (método + URL, timeout configurado)
2. Devolve o resultado ao cliente
3. Grava o histórico numa background task, depois da resposta enviada

Falhas de transporte (DNS, conexão, timeout, URL inválida) viram 502 com
`status: "Error"`. Status HTTP de erro do destino são respostas normais.
"""

from __future__ import annotations

from typing import Any

import httpx
from fastapi import APIRouter, BackgroundTasks, Depends, status
from fastapi.responses import JSONResponse

from ...config import GolemConfig
from ...feed import HistoryFeed
from ...recorder import ERROR_STATUS
from ...storage import SQLiteStore
from ..deps import build_recorder, get_feed, get_http_client, get_settings, get_store
from ..schemas.common import ErrorResponse
from ..schemas.send import HeaderSchema, SendRequest, SendResponse


router = APIRouter()


@router.post(
    "",
    response_model=SendResponse,
    summary="Executar Requisição",
    description="Executa uma requisição HTTP e grava o resultado no histórico.",
    responses={status.HTTP_502_BAD_GATEWAY: {"model": ErrorResponse}},
)
def send_request(
    payload: SendRequest,
    background_tasks: BackgroundTasks,
    store: SQLiteStore = Depends(get_store),
    settings: GolemConfig = Depends(get_settings),
    client: httpx.Client | None = Depends(get_http_client),
    feed: HistoryFeed = Depends(get_feed),
) -> Any:
    """
    Executa a requisição.

    ## Observações:

    - Endpoint síncrono: roda no threadpool do FastAPI
    - A gravação do histórico não afeta a resposta; falhas só aparecem no log
    - Depois de gravada, a linha entra no topo do feed de `GET /history`
    """
    recorder = build_recorder(store, settings, client, feed)
    outcome = recorder.execute(payload.method, payload.url)
    background_tasks.add_task(recorder.record_outcome, outcome)

    response = outcome.response
    if response is None:
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={
                "success": False,
                "method": outcome.method,
                "url": outcome.url,
                "status": ERROR_STATUS,
                "error": {
                    "code": "E3001",
                    "message": str(outcome.error),
                },
            },
        )

    return SendResponse(
        method=outcome.method,
        url=outcome.url,
        status=response.status,
        status_code=response.status_code,
        body=response.body,
        size=response.size,
        response_time_ms=response.response_time_ms,
        headers=[HeaderSchema(key=h.key, value=h.value) for h in response.headers],
    )

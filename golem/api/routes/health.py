"""
================================================================================
Rota: /health
================================================================================

Health check e status da API.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Request

from ... import __version__
from ..schemas.common import HealthResponse


router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health Check",
    description="Verifica se a API está funcionando e retorna informações de status.",
)
async def health_check(request: Request) -> HealthResponse:
    """
    Retorna status de saúde da API.

    ## Resposta:

    - `status`: "healthy" se o banco está aberto, "degraded" caso contrário
    - `version`: Versão do Golem
    - `components.storage`: "available" ou "unavailable"
    """
    store = getattr(request.app.state, "store", None)
    storage_ok = store is not None and not store.closed

    return HealthResponse(
        status="healthy" if storage_ok else "degraded",
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        components={"storage": "available" if storage_ok else "unavailable"},
    )


@router.get(
    "/",
    summary="API Info",
    description="Informações básicas sobre a API.",
)
async def api_info() -> dict[str, Any]:
    return {
        "name": "Golem API",
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
    }

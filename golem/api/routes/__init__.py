"""
================================================================================
Rotas da API
================================================================================

Este módulo agrupa todas as rotas da API.
"""

from fastapi import APIRouter

from .collections import collections_router, saved_router
from .health import router as health_router
from .history import router as history_router
from .preferences import router as preferences_router
from .send import router as send_router


def create_api_router() -> APIRouter:
    """
    Cria e configura o router principal da API.

    ## Rotas registradas:

    - /health - Health check
    - /send - Execução de requisições
    - /history - Histórico de requisições
    - /collections - Coleções
    - /saved - Requisições salvas
    - /preferences - Preferências da aplicação
    """
    router = APIRouter()

    router.include_router(health_router, tags=["Health"])
    router.include_router(send_router, prefix="/send", tags=["Send"])
    router.include_router(history_router, prefix="/history", tags=["History"])
    router.include_router(collections_router, prefix="/collections", tags=["Collections"])
    router.include_router(saved_router, prefix="/saved", tags=["Saved"])
    router.include_router(preferences_router, prefix="/preferences", tags=["Preferences"])

    return router


__all__ = ["create_api_router"]

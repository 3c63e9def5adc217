"""
================================================================================
Rota: /history
================================================================================

Histórico de requisições executadas.

## Funcionalidades:

- Listagem paginada (mais recente primeiro); a primeira página sai do
  feed em memória, atualizado a cada `/send`
- Busca por substring em URL, método ou status (diferencia maiúsculas)
- Detalhes de uma linha
- Remoção de uma linha ou de todo o histórico
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...feed import HistoryFeed
from ...storage import SQLiteStore
from ..deps import get_feed, get_store
from ..schemas.common import DeleteResponse
from ..schemas.history import HistoryEntrySchema, HistoryListResponse


router = APIRouter()


@router.get(
    "",
    response_model=HistoryListResponse,
    summary="Listar Histórico",
    description="""
Lista requisições anteriores, da mais recente para a mais antiga.

## Parâmetros:

- **limit**: Máximo de linhas (1-1000, padrão 100)
- **offset**: Pula as N mais recentes (ignorado com `q`)
- **q**: Substring em URL, método ou status; vazio equivale a sem filtro
    """,
)
def list_history(
    limit: int = Query(100, ge=1, le=1000, description="Máximo de linhas"),
    offset: int = Query(0, ge=0, description="Linhas a pular"),
    q: str | None = Query(None, description="Termo de busca"),
    store: SQLiteStore = Depends(get_store),
    feed: HistoryFeed = Depends(get_feed),
) -> HistoryListResponse:
    if q:
        records = store.search_history(q, limit=limit)
    elif offset == 0 and limit <= feed.page_size:
        records = list(feed.entries[:limit])
    else:
        records = store.list_history(limit=limit, offset=offset)

    return HistoryListResponse(
        records=[HistoryEntrySchema.model_validate(r) for r in records],
        total=store.count_history(),
        limit=limit,
        offset=0 if q else offset,
        q=q or None,
    )


@router.get(
    "/{history_id}",
    response_model=HistoryEntrySchema,
    summary="Detalhes da Requisição",
)
def get_history(
    history_id: int,
    store: SQLiteStore = Depends(get_store),
) -> HistoryEntrySchema:
    # StorageNotFoundError vira 404 no handler da app
    return HistoryEntrySchema.model_validate(store.get_history(history_id))


@router.delete(
    "/{history_id}",
    response_model=DeleteResponse,
    summary="Remover Requisição",
)
def delete_history(
    history_id: int,
    store: SQLiteStore = Depends(get_store),
    feed: HistoryFeed = Depends(get_feed),
) -> DeleteResponse:
    if not store.delete_history(history_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={
                "code": "E4002",
                "message": f"Requisição não encontrada no histórico: {history_id}",
            },
        )
    feed.refresh()
    return DeleteResponse(message=f"Requisição {history_id} removida", deleted=1)


@router.delete(
    "",
    response_model=DeleteResponse,
    summary="Limpar Histórico",
    description="Remove todas as linhas do histórico. A exclusão é permanente.",
)
def clear_history(feed: HistoryFeed = Depends(get_feed)) -> DeleteResponse:
    removed = feed.clear()
    return DeleteResponse(message="Histórico limpo", deleted=removed)

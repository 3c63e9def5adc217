"""
================================================================================
Rotas: /collections e /saved
================================================================================

Coleções e requisições salvas.

Remover uma coleção remove suas requisições salvas; o histórico que
apontava para ela fica sem coleção.
"""

from __future__ import annotations

import sqlite3

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...storage import SavedRequest, SQLiteStore
from ..deps import get_store
from ..schemas.collections import (
    CollectionCreate,
    CollectionListResponse,
    CollectionSchema,
    SavedRequestCreate,
    SavedRequestListResponse,
    SavedRequestSchema,
)
from ..schemas.common import DeleteResponse


collections_router = APIRouter()
saved_router = APIRouter()


def _not_found(message: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"code": "E4002", "message": message},
    )


# =============================================================================
# COLEÇÕES
# =============================================================================


@collections_router.get("", response_model=CollectionListResponse, summary="Listar Coleções")
def list_collections(store: SQLiteStore = Depends(get_store)) -> CollectionListResponse:
    return CollectionListResponse(
        collections=[CollectionSchema.model_validate(c) for c in store.list_collections()],
    )


@collections_router.post(
    "",
    response_model=CollectionSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Criar Coleção",
)
def create_collection(
    payload: CollectionCreate,
    store: SQLiteStore = Depends(get_store),
) -> CollectionSchema:
    created = store.create_collection(payload.name, payload.description)
    return CollectionSchema.model_validate(created)


@collections_router.delete(
    "/{collection_id}",
    response_model=DeleteResponse,
    summary="Remover Coleção",
)
def delete_collection(
    collection_id: int,
    store: SQLiteStore = Depends(get_store),
) -> DeleteResponse:
    if not store.delete_collection(collection_id):
        raise _not_found(f"Coleção não encontrada: {collection_id}")
    return DeleteResponse(message=f"Coleção {collection_id} removida", deleted=1)


# =============================================================================
# REQUISIÇÕES SALVAS
# =============================================================================


@saved_router.get(
    "",
    response_model=SavedRequestListResponse,
    summary="Listar Requisições Salvas",
    description="""
Lista requisições salvas ordenadas por nome.

- **collection_id**: Requisições da coleção
- **unfiled**: Requisições sem coleção (padrão quando `collection_id` é omitido)
    """,
)
def list_saved(
    collection_id: int | None = Query(None, description="ID da coleção"),
    unfiled: bool = Query(False, description="Somente requisições sem coleção"),
    store: SQLiteStore = Depends(get_store),
) -> SavedRequestListResponse:
    selected = None if unfiled else collection_id
    return SavedRequestListResponse(
        saved=[SavedRequestSchema.model_validate(s) for s in store.list_saved_requests(selected)],
    )


@saved_router.post(
    "",
    response_model=SavedRequestSchema,
    status_code=status.HTTP_201_CREATED,
    summary="Salvar Requisição",
)
def create_saved(
    payload: SavedRequestCreate,
    store: SQLiteStore = Depends(get_store),
) -> SavedRequestSchema:
    entry = SavedRequest(
        name=payload.name,
        url=payload.url,
        method=payload.method,
        headers=payload.headers,
        body=payload.body,
        collection_id=payload.collection_id,
    )
    try:
        store.save_request(entry)
    except sqlite3.IntegrityError:
        raise _not_found(f"Coleção não encontrada: {payload.collection_id}")
    return SavedRequestSchema.model_validate(entry)


@saved_router.get("/{request_id}", response_model=SavedRequestSchema, summary="Detalhes")
def get_saved(
    request_id: int,
    store: SQLiteStore = Depends(get_store),
) -> SavedRequestSchema:
    return SavedRequestSchema.model_validate(store.get_saved_request(request_id))


@saved_router.delete(
    "/{request_id}",
    response_model=DeleteResponse,
    summary="Remover Requisição Salva",
)
def delete_saved(
    request_id: int,
    store: SQLiteStore = Depends(get_store),
) -> DeleteResponse:
    if not store.delete_saved_request(request_id):
        raise _not_found(f"Requisição salva não encontrada: {request_id}")
    return DeleteResponse(message=f"Requisição salva {request_id} removida", deleted=1)

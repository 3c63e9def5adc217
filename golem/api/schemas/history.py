"""
================================================================================
Schemas para /history
================================================================================
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class HistoryEntrySchema(BaseModel):
    """
    Uma linha do histórico de requisições.

    `headers`/`body` são os da requisição; `response_headers` é a lista JSON
    de pares {"key", "value"} como gravada.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    method: str
    timestamp: datetime
    headers: str | None = None
    body: str | None = None
    response_status: str | None = Field(None, examples=["200 OK", "Error"])
    response_body: str | None = None
    response_headers: str | None = None
    response_time_ms: int = 0
    response_size: int = 0
    is_favorite: bool = False
    collection_id: int | None = None


class HistoryListResponse(BaseModel):
    """
    Lista de histórico (paginada ou filtrada por busca).
    """

    success: bool = True
    records: list[HistoryEntrySchema]
    total: int = Field(..., description="Total de linhas no histórico (sem filtro)")
    limit: int
    offset: int
    q: str | None = Field(None, description="Termo de busca aplicado")

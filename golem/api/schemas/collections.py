"""
Schemas para /collections e /saved.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class CollectionCreate(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""


class CollectionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    created_at: datetime


class CollectionListResponse(BaseModel):
    success: bool = True
    collections: list[CollectionSchema]


class SavedRequestCreate(BaseModel):
    """
    Nova requisição salva.

    `headers` é texto livre (o CLI grava uma lista JSON de pares).
    """

    name: str = Field(..., min_length=1)
    url: str = Field(..., min_length=1)
    method: Literal["GET", "POST", "PUT", "PATCH", "DELETE"] = "GET"
    headers: str | None = None
    body: str | None = None
    collection_id: int | None = None


class SavedRequestSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    url: str
    method: str
    headers: str | None = None
    body: str | None = None
    collection_id: int | None = None
    created_at: datetime


class SavedRequestListResponse(BaseModel):
    success: bool = True
    saved: list[SavedRequestSchema]

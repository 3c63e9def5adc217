"""
Rota: /preferences — leitura e upsert de preferências.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from ...storage import SQLiteStore
from ..deps import get_store
from ..schemas.preferences import PreferencesResponse, PreferenceValue


router = APIRouter()


@router.get("", response_model=PreferencesResponse, summary="Listar Preferências")
def list_preferences(store: SQLiteStore = Depends(get_store)) -> PreferencesResponse:
    return PreferencesResponse(preferences=store.get_all_preferences())


@router.put("/{key}", summary="Gravar Preferência")
def put_preference(
    key: str,
    payload: PreferenceValue,
    store: SQLiteStore = Depends(get_store),
) -> dict[str, Any]:
    store.set_preference(key, payload.value)
    return {"success": True, "key": key, "value": payload.value}

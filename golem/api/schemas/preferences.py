"""
Schemas para /preferences.
"""

from __future__ import annotations

from pydantic import BaseModel


class PreferenceValue(BaseModel):
    value: str


class PreferencesResponse(BaseModel):
    success: bool = True
    preferences: dict[str, str]

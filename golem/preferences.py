"""
================================================================================
Preferências da Aplicação
================================================================================

Visão tipada sobre a tabela `preferences`: tamanho da janela, última URL e
último método usados.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .storage.sqlite import SQLiteStore


logger = logging.getLogger(__name__)

SUPPORTED_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")

KEY_WINDOW_WIDTH = "window_width"
KEY_WINDOW_HEIGHT = "window_height"
KEY_LAST_URL = "last_url"
KEY_LAST_METHOD = "last_method"


@dataclass
class AppPreferences:
    """Preferências com valores padrão para a primeira execução."""

    window_width: float = 800.0
    window_height: float = 600.0
    last_url: str = ""
    last_method: str = "GET"


def _parse_float(value: str | None, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def load_preferences(store: SQLiteStore) -> AppPreferences:
    """
    Carrega as preferências do store.

    Erros de leitura são registrados e os valores padrão são usados.
    Números inválidos mantêm o padrão.
    """
    prefs = AppPreferences()
    try:
        stored = store.get_all_preferences()
    except Exception:
        logger.exception("Error loading preferences")
        return prefs

    prefs.window_width = _parse_float(stored.get(KEY_WINDOW_WIDTH), prefs.window_width)
    prefs.window_height = _parse_float(stored.get(KEY_WINDOW_HEIGHT), prefs.window_height)
    if KEY_LAST_URL in stored:
        prefs.last_url = stored[KEY_LAST_URL]
    if stored.get(KEY_LAST_METHOD):
        prefs.last_method = stored[KEY_LAST_METHOD]
    return prefs


def save_preferences(store: SQLiteStore, prefs: AppPreferences) -> None:
    """Grava as quatro chaves de preferência."""
    store.set_preference(KEY_WINDOW_WIDTH, f"{prefs.window_width:f}")
    store.set_preference(KEY_WINDOW_HEIGHT, f"{prefs.window_height:f}")
    store.set_preference(KEY_LAST_URL, prefs.last_url)
    store.set_preference(KEY_LAST_METHOD, prefs.last_method)

"""
================================================================================
HISTORY FEED — Cache em memória do histórico recente
================================================================================

Mantém as linhas mais recentes do histórico para exibição (painel lateral,
listagens do CLI). É a parte não visual do painel de histórico: carregar,
buscar, limpar, adicionar e formatar "há quanto tempo".

## Thread safety:

O cache tem seu próprio lock, já que o recorder adiciona linhas a partir
de uma thread em background.
"""

from __future__ import annotations

import logging
import threading
from datetime import datetime, timedelta

from .storage.base import RequestHistory, utc_now
from .storage.sqlite import SQLiteStore


logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


def format_age(ts: datetime, now: datetime | None = None) -> str:
    """
    Formata um timestamp relativo ao instante atual.

    ## Exemplos:
        - 30s atrás → "just now"
        - 5min atrás → "5 mins ago"
        - 1h atrás → "1 hour ago"
        - 3 dias atrás → "3 days ago"
        - 2 semanas atrás → "Jan 2, 2006"
    """
    now = now or utc_now()
    diff = now - ts

    if diff < timedelta(minutes=1):
        return "just now"
    if diff < timedelta(hours=1):
        mins = int(diff / timedelta(minutes=1))
        return "1 min ago" if mins == 1 else f"{mins} mins ago"
    if diff < timedelta(days=1):
        hours = int(diff / timedelta(hours=1))
        return "1 hour ago" if hours == 1 else f"{hours} hours ago"
    if diff < timedelta(days=7):
        days = int(diff / timedelta(days=1))
        return "1 day ago" if days == 1 else f"{days} days ago"
    return f"{ts:%b} {ts.day}, {ts.year}"


def _matches(entry: RequestHistory, term: str) -> bool:
    fields = (entry.url, entry.method, entry.response_status or "")
    return any(term in value for value in fields)


class HistoryFeed:
    """
    Lista em memória com as `page_size` linhas mais recentes.

    ## Exemplo:

        >>> feed = HistoryFeed(store)
        >>> feed.load()
        >>> feed.search("users")
        >>> [e.url for e in feed.entries]
    """

    def __init__(self, store: SQLiteStore, page_size: int = DEFAULT_PAGE_SIZE) -> None:
        self.store = store
        self.page_size = page_size
        self._entries: list[RequestHistory] = []
        self._term = ""
        self._lock = threading.Lock()

    @property
    def entries(self) -> tuple[RequestHistory, ...]:
        with self._lock:
            return tuple(self._entries)

    @property
    def term(self) -> str:
        """Termo de busca ativo ("" = sem filtro)."""
        return self._term

    def load(self) -> list[RequestHistory]:
        """Recarrega as linhas mais recentes, sem filtro."""
        history = self.store.list_history(limit=self.page_size, offset=0)
        with self._lock:
            self._term = ""
            self._entries = history
        return list(history)

    def search(self, term: str) -> list[RequestHistory]:
        """Filtra por substring; termo vazio equivale a `load()`."""
        if not term:
            return self.load()

        history = self.store.search_history(term, limit=self.page_size)
        with self._lock:
            self._term = term
            self._entries = history
        return list(history)

    def refresh(self) -> list[RequestHistory]:
        """Reaplica o filtro ativo."""
        return self.search(self._term)

    def clear(self) -> int:
        """Apaga todo o histórico do store e esvazia o cache."""
        removed = self.store.clear_history()
        with self._lock:
            self._entries = []
        return removed

    def add(self, entry: RequestHistory) -> bool:
        """
        Persiste uma linha e a coloca no topo do cache.

        Em caso de falha a exceção é registrada no log e o cache fica como
        estava.
        """
        try:
            self.store.save_history(entry)
        except Exception:
            logger.exception("Failed to save request to history")
            return False

        self.prepend(entry)
        return True

    def prepend(self, entry: RequestHistory) -> None:
        """
        Coloca uma linha já persistida no topo, respeitando `page_size`.

        Com uma busca ativa, linhas que não casam com o termo ficam de fora.
        """
        with self._lock:
            if self._term and not _matches(entry, self._term):
                return
            self._entries.insert(0, entry)
            del self._entries[self.page_size:]

"""
================================================================================
HISTORY RECORDER
================================================================================

Cola entre o executor e o storage: transforma uma requisição executada e
seu resultado numa linha de `RequestHistory` e a persiste.

## Semântica "fire-and-forget":

A gravação do histórico nunca afeta a resposta que o usuário vê. Falhas de
persistência são registradas no log e descartadas, sem rollback nem retry.

## Fluxo completo (`submit`):

```
    submit(method, url)
          │
    execute_request ──> Outcome (resposta OU erro) ──> devolvido ao chamador
          │
    [thread daemon]
          │
    build_entry ──> store.save_history ──> on_recorded(entry)
                           │
                     (falha → log)
```
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from typing import Callable

import httpx

from .runner.execute import (
    DEFAULT_TIMEOUT_SECONDS,
    RequestExecutionError,
    ResponseInfo,
    execute_request,
)
from .storage.base import RequestHistory, utc_now
from .storage.sqlite import SQLiteStore


logger = logging.getLogger(__name__)

# Status gravado quando a requisição falha no transporte
ERROR_STATUS = "Error"


@dataclass
class Outcome:
    """Resultado de uma execução: exatamente um de `response` ou `error`."""

    method: str
    url: str
    response: ResponseInfo | None = None
    error: Exception | None = None
    collection_id: int | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None


def serialize_headers(response: ResponseInfo) -> str:
    """Serializa os headers como lista JSON de {"key", "value"}."""
    return json.dumps([header.to_dict() for header in response.headers], ensure_ascii=False)


class HistoryRecorder:
    """
    Grava execuções no histórico.

    ## Parâmetros:

    - `store`: Store injetado pelo ponto de entrada
    - `on_recorded`: Callback opcional chamado após cada gravação bem-sucedida
      (ex: atualizar um cache de lista em memória)
    - `timeout`: Timeout usado por `submit`
    - `client`: Cliente httpx compartilhado (opcional; testes injetam um
      MockTransport)
    """

    def __init__(
        self,
        store: SQLiteStore,
        on_recorded: Callable[[RequestHistory], None] | None = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: httpx.Client | None = None,
    ) -> None:
        self.store = store
        self.on_recorded = on_recorded
        self.timeout = timeout
        self.client = client

    def build_entry(
        self,
        method: str,
        url: str,
        response: ResponseInfo | None = None,
        error: Exception | None = None,
        collection_id: int | None = None,
    ) -> RequestHistory:
        """
        Monta a linha de histórico para uma execução.

        - Sucesso: copia status, corpo, headers (JSON), tempo e tamanho
        - Falha: status "Error" e demais campos de resposta vazios
        - Timestamp: sempre o instante atual
        """
        entry = RequestHistory(
            url=url,
            method=method,
            timestamp=utc_now(),
            collection_id=collection_id,
        )

        if error is not None or response is None:
            entry.response_status = ERROR_STATUS
            return entry

        entry.response_status = response.status
        entry.response_body = response.body
        entry.response_headers = serialize_headers(response)
        entry.response_time_ms = response.response_time_ms
        entry.response_size = response.size
        return entry

    def record(
        self,
        method: str,
        url: str,
        response: ResponseInfo | None = None,
        error: Exception | None = None,
        collection_id: int | None = None,
    ) -> RequestHistory | None:
        """
        Monta e persiste a linha de histórico.

        ## Retorna:
            A linha gravada (com `id`), ou None se a persistência falhou.
        """
        entry = self.build_entry(
            method, url, response=response, error=error, collection_id=collection_id
        )
        try:
            self.store.save_history(entry)
        except Exception:
            logger.exception("Failed to save request to history: %s %s", method, url)
            return None

        if self.on_recorded is not None:
            try:
                self.on_recorded(entry)
            except Exception:
                logger.exception("History refresh callback failed")
        return entry

    def record_outcome(self, outcome: Outcome) -> RequestHistory | None:
        return self.record(
            outcome.method,
            outcome.url,
            response=outcome.response,
            error=outcome.error,
            collection_id=outcome.collection_id,
        )

    def record_in_background(self, outcome: Outcome) -> threading.Thread:
        """
        Grava o resultado numa thread daemon separada.

        A falha só é observável pelo log. A thread é devolvida para quem
        quiser aguardar (testes, shutdown).
        """
        thread = threading.Thread(
            target=self.record_outcome,
            args=(outcome,),
            name="golem-history-recorder",
            daemon=True,
        )
        thread.start()
        return thread

    def execute(
        self, method: str, url: str, collection_id: int | None = None
    ) -> Outcome:
        """Executa a requisição e captura o resultado sem levantar exceção."""
        method = (method or "GET").upper()
        try:
            response = execute_request(method, url, timeout=self.timeout, client=self.client)
        except RequestExecutionError as e:
            return Outcome(method=method, url=url, error=e, collection_id=collection_id)
        return Outcome(
            method=method, url=url, response=response, collection_id=collection_id
        )

    def submit(
        self,
        method: str,
        url: str,
        background: bool = True,
        collection_id: int | None = None,
    ) -> Outcome:
        """
        Executa e registra uma requisição.

        O resultado volta ao chamador imediatamente; a gravação do histórico
        acontece numa thread separada (ou inline, com `background=False`).
        """
        outcome = self.execute(method, url, collection_id=collection_id)
        if background:
            self.record_in_background(outcome)
        else:
            self.record_outcome(outcome)
        return outcome

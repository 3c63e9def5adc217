"""
================================================================================
History Export / Import
================================================================================

Serializa o histórico de requisições para um arquivo JSON e de volta.

## Formato:

Array JSON de objetos com os campos `id, url, method, headers, body,
timestamp (ISO 8601), response_status, response_body, response_headers,
response_time_ms, response_size, is_favorite, collection_id`. Campos de
texto opcionais vazios são omitidos.

## Importação atômica:

Todas as linhas são inseridas numa única transação. Se qualquer linha
falhar (campo ausente, tipo inválido, violação de constraint), nada é
gravado e a exceção original é relançada.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .base import RequestHistory, StorageFormatError
from .sqlite import SQLiteStore, insert_history


logger = logging.getLogger(__name__)

EXPORT_LIMIT = 10000


def export_history(
    store: SQLiteStore,
    path: str | Path,
    limit: int = EXPORT_LIMIT,
) -> int:
    """
    Exporta até `limit` linhas mais recentes para `path`.

    ## Retorno:

    Número de linhas exportadas.
    """
    history = store.list_history(limit=limit, offset=0)
    data = [entry.to_dict() for entry in history]

    Path(path).write_text(
        json.dumps(data, indent=2, ensure_ascii=False),
        encoding="utf-8",
    )
    logger.info("Exported %d history entries to %s", len(data), path)
    return len(data)


def import_history(store: SQLiteStore, path: str | Path) -> int:
    """
    Importa linhas de histórico de um arquivo JSON, tudo ou nada.

    Os IDs do arquivo são ignorados; o banco atribui novos.

    ## Retorno:

    Número de linhas importadas.

    ## Raises:

    - `OSError` / `json.JSONDecodeError`: Arquivo ilegível
    - `StorageFormatError`: Conteúdo não é um array
    - `KeyError` / `TypeError` / `ValueError` / `sqlite3.Error`: Linha
      inválida (a importação inteira é desfeita)
    """
    raw: Any = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(raw, list):
        raise StorageFormatError(
            f"Expected a JSON array of history entries, got {type(raw).__name__}"
        )

    with store.transaction() as cursor:
        for item in raw:
            entry = RequestHistory.from_dict(item)
            insert_history(cursor, entry)

    logger.info("Imported %d history entries from %s", len(raw), path)
    return len(raw)

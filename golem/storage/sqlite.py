"""
================================================================================
SQLite Storage Backend
================================================================================

Camada de acesso a dados do Golem: CRUD tipado e busca sobre as quatro
tabelas (preferências, coleções, histórico e requisições salvas).

## Concorrência:

- Uma única `sqlite3.Connection` compartilhada (no máximo uma conexão aberta)
- Um `ReadWriteLock` por store: leituras pelo caminho compartilhado,
  escritas pelo caminho exclusivo
- O lock só impede chamadas intercaladas ao driver; o SQLite já garante
  escritor único. Não há isolamento transacional entre operações distintas,
  exceto dentro de `transaction()`

## Integridade referencial:

`PRAGMA foreign_keys=ON` em toda conexão. As regras de cascata ficam no
schema (ver `schema.py`), não no código da aplicação.

## Uso:

```python
from golem.storage import SQLiteStore

# Padrão: ~/.golem/golem.db (ou $GOLEM_DB_PATH)
store = SQLiteStore()

# Em memória (testes)
store = SQLiteStore(db_path=":memory:")

col = store.create_collection("Users API", "CRUD de usuários")
store.save_request(SavedRequest(name="list", url="...", method="GET",
                                collection_id=col.id))
recent = store.list_history(limit=100)
store.close()
```
"""

from __future__ import annotations

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

from .base import (
    Collection,
    Preference,
    RequestHistory,
    SavedRequest,
    StorageConnectionError,
    StorageError,
    StorageNotFoundError,
    from_iso,
    to_iso,
    utc_now,
)
from .locks import ReadWriteLock
from .schema import ensure_schema


logger = logging.getLogger(__name__)

# Constantes
DEFAULT_DB_PATH = "~/.golem/golem.db"
MEMORY_DB = ":memory:"

_HISTORY_COLUMNS = """
    id, url, method, headers, body, timestamp,
    response_status, response_body, response_headers,
    response_time_ms, response_size, is_favorite, collection_id
"""

_SAVED_COLUMNS = "id, name, url, method, headers, body, collection_id, created_at"


def resolve_db_path(db_path: str | Path | None = None) -> str:
    """
    Resolve o caminho do banco.

    ## Prioridade:
    1. Parâmetro explícito
    2. Variável de ambiente GOLEM_DB_PATH
    3. ~/.golem/golem.db
    """
    if db_path is None:
        db_path = os.environ.get("GOLEM_DB_PATH") or DEFAULT_DB_PATH

    db_path = str(db_path)
    if db_path == MEMORY_DB:
        return db_path
    return os.path.expanduser(os.path.expandvars(db_path))


def insert_history(cursor: sqlite3.Cursor, entry: RequestHistory) -> int:
    """
    Insere uma linha de histórico usando o cursor informado.

    Um `collection_id` que não existe no banco é gravado como NULL
    (referência fraca, nunca pendurada).
    """
    cursor.execute(
        """
        INSERT INTO request_history (
            url, method, headers, body, timestamp,
            response_status, response_body, response_headers,
            response_time_ms, response_size, is_favorite, collection_id
        ) VALUES (
            ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?,
            (SELECT id FROM collections WHERE id = ?)
        )
        """,
        (
            entry.url,
            entry.method,
            entry.headers,
            entry.body,
            to_iso(entry.timestamp or utc_now()),
            entry.response_status,
            entry.response_body,
            entry.response_headers,
            entry.response_time_ms,
            entry.response_size,
            int(entry.is_favorite),
            entry.collection_id,
        ),
    )
    return int(cursor.lastrowid or 0)


class SQLiteStore:
    """
    Store SQLite com uma conexão e um lock leitor/escritor.

    Construído explicitamente pelo ponto de entrada e injetado em todos os
    colaboradores (recorder, feed, CLI, API).

    ## Parâmetros:

    - `db_path`: Caminho do arquivo .db (default: ~/.golem/golem.db)

    ## Raises:

    - `StorageConnectionError`: Se o banco não puder ser aberto ou migrado
    """

    def __init__(self, db_path: str | Path | None = None) -> None:
        self.db_path = resolve_db_path(db_path)
        self._lock = ReadWriteLock()
        self._closed = False
        self._conn = self._connect()

    def _connect(self) -> sqlite3.Connection:
        """Abre a conexão e aplica o schema. Qualquer falha é fatal."""
        try:
            if self.db_path != MEMORY_DB:
                Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

            conn = sqlite3.connect(
                self.db_path,
                check_same_thread=False,
                timeout=30.0,
            )
        except (OSError, sqlite3.Error) as e:
            raise StorageConnectionError(
                f"Failed to open database {self.db_path}: {e}"
            ) from e

        try:
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys=ON")
            if self.db_path != MEMORY_DB:
                try:
                    conn.execute("PRAGMA journal_mode=WAL")
                except sqlite3.OperationalError:
                    # Alguns filesystems não suportam WAL
                    pass
            ensure_schema(conn)
        except sqlite3.Error as e:
            conn.close()
            raise StorageConnectionError(
                f"Failed to migrate database {self.db_path}: {e}"
            ) from e

        logger.debug("Opened database %s", self.db_path)
        return conn

    def _connection(self) -> sqlite3.Connection:
        if self._closed:
            raise StorageError("Storage is closed")
        return self._conn

    def _query(self, sql: str, params: tuple[Any, ...] = ()) -> list[sqlite3.Row]:
        """Executa uma leitura pelo caminho compartilhado do lock."""
        with self._lock.read():
            return self._connection().execute(sql, params).fetchall()

    def _execute(self, sql: str, params: tuple[Any, ...] = ()) -> sqlite3.Cursor:
        """Executa uma escrita pelo caminho exclusivo e faz commit."""
        with self._lock.write():
            conn = self._connection()
            try:
                cursor = conn.execute(sql, params)
                conn.commit()
            except sqlite3.Error:
                conn.rollback()
                raise
            return cursor

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Cursor, None, None]:
        """
        Unidade de trabalho com várias instruções.

        Segura o lock exclusivo durante todo o bloco. Faz commit se o bloco
        terminar normalmente e rollback em qualquer exceção (que é relançada
        sem alteração).

        ## Exemplo:

            >>> with store.transaction() as cursor:
            ...     insert_history(cursor, entry_a)
            ...     insert_history(cursor, entry_b)
        """
        with self._lock.write():
            conn = self._connection()
            cursor = conn.cursor()
            try:
                cursor.execute("BEGIN")
                yield cursor
                conn.commit()
            except BaseException:
                conn.rollback()
                raise
            finally:
                cursor.close()

    # =========================================================================
    # Preferences
    # =========================================================================

    def get_preference(self, key: str) -> Preference | None:
        """Obtém uma preferência, ou None se a chave não existe."""
        rows = self._query(
            "SELECT key, value, updated_at FROM preferences WHERE key = ?",
            (key,),
        )
        if not rows:
            return None
        row = rows[0]
        return Preference(
            key=row["key"],
            value=row["value"],
            updated_at=from_iso(row["updated_at"]),
        )

    def set_preference(self, key: str, value: str) -> None:
        """Upsert por chave; sempre atualiza `updated_at`."""
        self._execute(
            """
            INSERT INTO preferences (key, value, updated_at)
            VALUES (?, ?, ?)
            ON CONFLICT(key) DO UPDATE SET
                value = excluded.value,
                updated_at = excluded.updated_at
            """,
            (key, value, to_iso(utc_now())),
        )

    def get_all_preferences(self) -> dict[str, str]:
        rows = self._query("SELECT key, value FROM preferences")
        return {row["key"]: row["value"] for row in rows}

    # =========================================================================
    # Collections
    # =========================================================================

    def create_collection(self, name: str, description: str = "") -> Collection:
        created_at = utc_now()
        cursor = self._execute(
            "INSERT INTO collections (name, description, created_at) VALUES (?, ?, ?)",
            (name, description, to_iso(created_at)),
        )
        return Collection(
            id=int(cursor.lastrowid or 0),
            name=name,
            description=description,
            created_at=created_at,
        )

    def list_collections(self) -> list[Collection]:
        """Lista coleções ordenadas por nome."""
        rows = self._query(
            "SELECT id, name, description, created_at FROM collections "
            "ORDER BY name, id"
        )
        return [
            Collection(
                id=row["id"],
                name=row["name"],
                description=row["description"] or "",
                created_at=from_iso(row["created_at"]),
            )
            for row in rows
        ]

    def delete_collection(self, collection_id: int) -> bool:
        """
        Remove uma coleção.

        O banco remove as requisições salvas da coleção (CASCADE) e anula a
        referência nas linhas de histórico (SET NULL).

        ## Retorno:

        True se removida, False se não existia.
        """
        cursor = self._execute("DELETE FROM collections WHERE id = ?", (collection_id,))
        return cursor.rowcount > 0

    # =========================================================================
    # Request history
    # =========================================================================

    def _row_to_history(self, row: sqlite3.Row) -> RequestHistory:
        return RequestHistory(
            id=row["id"],
            url=row["url"],
            method=row["method"],
            headers=row["headers"],
            body=row["body"],
            timestamp=from_iso(row["timestamp"]),
            response_status=row["response_status"],
            response_body=row["response_body"],
            response_headers=row["response_headers"],
            response_time_ms=row["response_time_ms"] or 0,
            response_size=row["response_size"] or 0,
            is_favorite=bool(row["is_favorite"]),
            collection_id=row["collection_id"],
        )

    def save_history(self, entry: RequestHistory) -> RequestHistory:
        """
        Persiste uma linha de histórico e atribui `entry.id`.

        ## Retorno:

        A própria entrada, com `id` preenchido.
        """
        with self.transaction() as cursor:
            entry.id = insert_history(cursor, entry)
        return entry

    def list_history(self, limit: int = 100, offset: int = 0) -> list[RequestHistory]:
        """Lista o histórico do mais recente para o mais antigo."""
        rows = self._query(
            f"SELECT {_HISTORY_COLUMNS} FROM request_history "
            "ORDER BY timestamp DESC, id DESC LIMIT ? OFFSET ?",
            (limit, offset),
        )
        return [self._row_to_history(row) for row in rows]

    def search_history(self, term: str, limit: int = 100) -> list[RequestHistory]:
        """
        Busca por substring em url, method ou response_status.

        A comparação diferencia maiúsculas de minúsculas e não interpreta
        curingas (`%`, `_`). Termo vazio equivale a `list_history(limit)`.
        """
        rows = self._query(
            f"SELECT {_HISTORY_COLUMNS} FROM request_history "
            "WHERE instr(url, ?) > 0 OR instr(method, ?) > 0 "
            "OR instr(response_status, ?) > 0 "
            "ORDER BY timestamp DESC, id DESC LIMIT ?",
            (term, term, term, limit),
        )
        return [self._row_to_history(row) for row in rows]

    def get_history(self, history_id: int) -> RequestHistory:
        """
        Obtém uma linha de histórico por ID.

        ## Raises:

        - `StorageNotFoundError`: Se a linha não existe
        """
        rows = self._query(
            f"SELECT {_HISTORY_COLUMNS} FROM request_history WHERE id = ?",
            (history_id,),
        )
        if not rows:
            raise StorageNotFoundError(f"History entry not found: {history_id}")
        return self._row_to_history(rows[0])

    def delete_history(self, history_id: int) -> bool:
        cursor = self._execute("DELETE FROM request_history WHERE id = ?", (history_id,))
        return cursor.rowcount > 0

    def clear_history(self) -> int:
        """Remove todo o histórico. Retorna o número de linhas removidas."""
        cursor = self._execute("DELETE FROM request_history")
        return cursor.rowcount

    def count_history(self) -> int:
        rows = self._query("SELECT COUNT(*) AS total FROM request_history")
        return int(rows[0]["total"])

    # =========================================================================
    # Saved requests
    # =========================================================================

    def _row_to_saved(self, row: sqlite3.Row) -> SavedRequest:
        return SavedRequest(
            id=row["id"],
            name=row["name"],
            url=row["url"],
            method=row["method"],
            headers=row["headers"],
            body=row["body"],
            collection_id=row["collection_id"],
            created_at=from_iso(row["created_at"]),
        )

    def save_request(self, entry: SavedRequest) -> SavedRequest:
        """
        Persiste uma requisição salva e atribui `entry.id`.

        ## Raises:

        - `sqlite3.IntegrityError`: Se `collection_id` não existe
        """
        created_at = entry.created_at or utc_now()
        cursor = self._execute(
            """
            INSERT INTO saved_requests (
                name, url, method, headers, body, collection_id, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                entry.name,
                entry.url,
                entry.method,
                entry.headers,
                entry.body,
                entry.collection_id,
                to_iso(created_at),
            ),
        )
        entry.id = int(cursor.lastrowid or 0)
        entry.created_at = created_at
        return entry

    def list_saved_requests(self, collection_id: int | None = None) -> list[SavedRequest]:
        """
        Lista requisições salvas ordenadas por nome.

        `collection_id=None` seleciona as requisições sem coleção.
        """
        if collection_id is not None:
            rows = self._query(
                f"SELECT {_SAVED_COLUMNS} FROM saved_requests "
                "WHERE collection_id = ? ORDER BY name, id",
                (collection_id,),
            )
        else:
            rows = self._query(
                f"SELECT {_SAVED_COLUMNS} FROM saved_requests "
                "WHERE collection_id IS NULL ORDER BY name, id"
            )
        return [self._row_to_saved(row) for row in rows]

    def get_saved_request(self, request_id: int) -> SavedRequest:
        """
        Obtém uma requisição salva por ID.

        ## Raises:

        - `StorageNotFoundError`: Se a requisição não existe
        """
        rows = self._query(
            f"SELECT {_SAVED_COLUMNS} FROM saved_requests WHERE id = ?",
            (request_id,),
        )
        if not rows:
            raise StorageNotFoundError(f"Saved request not found: {request_id}")
        return self._row_to_saved(rows[0])

    def delete_saved_request(self, request_id: int) -> bool:
        cursor = self._execute("DELETE FROM saved_requests WHERE id = ?", (request_id,))
        return cursor.rowcount > 0

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Fecha a conexão. Chamadas seguintes levantam StorageError."""
        with self._lock.write():
            if self._closed:
                return
            self._closed = True
            self._conn.close()
        logger.debug("Closed database %s", self.db_path)

    def __enter__(self) -> "SQLiteStore":
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()

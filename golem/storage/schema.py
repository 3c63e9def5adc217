"""
================================================================================
Schema Manager
================================================================================

Cria as tabelas e índices do Golem se ainda não existirem.

## Schema:

```sql
preferences      (key PK, value, updated_at)
collections      (id PK, name, description, created_at)
request_history  (id PK, url, method, headers, body, timestamp,
                  response_status, response_body, response_headers,
                  response_time_ms, response_size, is_favorite,
                  collection_id -> collections ON DELETE SET NULL)
saved_requests   (id PK, name, url, method, headers, body,
                  collection_id -> collections ON DELETE CASCADE, created_at)
schema_meta      (key PK, value)
```

`ensure_schema` é idempotente: pode rodar a cada inicialização e nunca
remove nem altera dados existentes.
"""

from __future__ import annotations

import logging
import sqlite3


logger = logging.getLogger(__name__)

SCHEMA_VERSION = 1

_STATEMENTS = (
    """
    CREATE TABLE IF NOT EXISTS preferences (
        key TEXT PRIMARY KEY,
        value TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS collections (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        description TEXT NOT NULL DEFAULT '',
        created_at TEXT NOT NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS request_history (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        url TEXT NOT NULL,
        method TEXT NOT NULL,
        headers TEXT,
        body TEXT,
        timestamp TEXT NOT NULL,
        response_status TEXT,
        response_body TEXT,
        response_headers TEXT,
        response_time_ms INTEGER NOT NULL DEFAULT 0,
        response_size INTEGER NOT NULL DEFAULT 0,
        is_favorite INTEGER NOT NULL DEFAULT 0,
        collection_id INTEGER,
        FOREIGN KEY (collection_id) REFERENCES collections(id) ON DELETE SET NULL
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS saved_requests (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        name TEXT NOT NULL,
        url TEXT NOT NULL,
        method TEXT NOT NULL,
        headers TEXT,
        body TEXT,
        collection_id INTEGER,
        created_at TEXT NOT NULL,
        FOREIGN KEY (collection_id) REFERENCES collections(id) ON DELETE CASCADE
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_request_history_timestamp "
    "ON request_history(timestamp DESC)",
    "CREATE INDEX IF NOT EXISTS idx_request_history_url ON request_history(url)",
    "CREATE INDEX IF NOT EXISTS idx_request_history_method ON request_history(method)",
    "CREATE INDEX IF NOT EXISTS idx_saved_requests_collection "
    "ON saved_requests(collection_id)",
    """
    CREATE TABLE IF NOT EXISTS schema_meta (
        key TEXT PRIMARY KEY,
        value TEXT
    )
    """,
)


def ensure_schema(conn: sqlite3.Connection) -> None:
    """
    Garante que todas as tabelas e índices existem.

    ## Raises:

    - `sqlite3.Error`: Banco inacessível ou corrompido (fatal na inicialização)
    """
    cursor = conn.cursor()
    try:
        for statement in _STATEMENTS:
            cursor.execute(statement)

        cursor.execute(
            "INSERT OR IGNORE INTO schema_meta (key, value) VALUES (?, ?)",
            ("version", str(SCHEMA_VERSION)),
        )
        conn.commit()
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        cursor.close()

    logger.debug("Schema ensured (version %s)", SCHEMA_VERSION)


def get_schema_version(conn: sqlite3.Connection) -> int | None:
    """Versão gravada em schema_meta, ou None se ausente."""
    row = conn.execute(
        "SELECT value FROM schema_meta WHERE key = 'version'"
    ).fetchone()
    if row is None:
        return None
    return int(row[0])

"""
================================================================================
STORAGE MODULE - Local Persistence for Golem
================================================================================

Persistência local do Golem num único arquivo SQLite: preferências,
coleções, histórico de requisições e requisições salvas.

## Arquitetura:

```
    ┌──────────────────┐     ┌──────────────────┐
    │  transfer.py     │     │   factory.py     │
    │ (export/import)  │     │  (open_store)    │
    └────────┬─────────┘     └────────┬─────────┘
             │                        │
             ▼                        ▼
    ┌─────────────────────────────────────────┐
    │        SQLiteStore (sqlite.py)          │
    │  ReadWriteLock + 1 conexão compartilhada │
    └────────────────────┬────────────────────┘
                         │
                         ▼
                 schema.py (ensure_schema)
```

## Uso:

```python
from golem.storage import open_store, export_history

store = open_store()
store.set_preference("last_method", "POST")
export_history(store, "history.json")
store.close()
```

## Configuração via variáveis de ambiente:

- `GOLEM_DB_PATH`: Caminho do banco SQLite (default: ~/.golem/golem.db)
"""

from .base import (
    Collection,
    Preference,
    RequestHistory,
    SavedRequest,
    StorageConnectionError,
    StorageError,
    StorageFormatError,
    StorageNotFoundError,
)
from .factory import open_store
from .locks import ReadWriteLock
from .schema import SCHEMA_VERSION, ensure_schema
from .sqlite import SQLiteStore
from .transfer import export_history, import_history

__all__ = [
    # Types
    "Collection",
    "Preference",
    "RequestHistory",
    "SavedRequest",
    # Errors
    "StorageError",
    "StorageNotFoundError",
    "StorageConnectionError",
    "StorageFormatError",
    # Store
    "SQLiteStore",
    "ReadWriteLock",
    "SCHEMA_VERSION",
    "ensure_schema",
    "open_store",
    # Transfer
    "export_history",
    "import_history",
]

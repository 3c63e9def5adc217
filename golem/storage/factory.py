"""
================================================================================
Storage Factory
================================================================================

Cria o store a partir da configuração da aplicação.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .sqlite import SQLiteStore

if TYPE_CHECKING:
    from ..config import GolemConfig


def open_store(config: "GolemConfig | None" = None) -> SQLiteStore:
    """
    Abre o store configurado.

    ## Parâmetros:

    - `config`: Configuração. Se None, usa `GolemConfig.from_env()`

    ## Raises:

    - `StorageConnectionError`: Banco indisponível (fatal na inicialização)

    ## Exemplo:

        >>> store = open_store()
        >>> store.list_history(limit=10)
    """
    if config is None:
        from ..config import GolemConfig

        config = GolemConfig.from_env()

    return SQLiteStore(db_path=config.db_path)

"""
================================================================================
CONFIGURAÇÃO CENTRALIZADA DO GOLEM
================================================================================

Este módulo centraliza as configurações do Golem num único lugar, para que
CLI, API e testes leiam as mesmas opções da mesma forma.

## Fontes de configuração (em ordem de prioridade):

1. Parâmetros passados diretamente
2. Variáveis de ambiente
3. Valores padrão

## Exemplo de uso:

    >>> config = GolemConfig.from_env()
    >>> config.request_timeout
    30.0

    >>> # Ou com valores customizados
    >>> config = GolemConfig(db_path="/tmp/golem.db", verbose=True)
"""

from __future__ import annotations

import os

from pydantic import BaseModel, Field


class GolemConfig(BaseModel):
    """
    Configuração centralizada do Golem.

    ## Atributos:

    - `db_path`: Caminho do banco SQLite
    - `request_timeout`: Timeout fixo de cada requisição HTTP (segundos)
    - `history_page_size`: Quantas linhas o feed de histórico mantém em memória
    - `export_limit`: Máximo de linhas exportadas
    - `verbose`: Logs detalhados
    - `silent`: Apenas erros
    """

    db_path: str = Field(
        default="~/.golem/golem.db",
        description="Caminho do banco SQLite (':memory:' para testes)"
    )

    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout de cada requisição HTTP em segundos"
    )

    history_page_size: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Linhas de histórico mantidas no feed em memória"
    )

    export_limit: int = Field(
        default=10000,
        ge=1,
        description="Máximo de linhas de histórico exportadas"
    )

    verbose: bool = Field(
        default=False,
        description="Se True, exibe logs detalhados de debug"
    )

    silent: bool = Field(
        default=False,
        description="Se True, suprime todos os logs exceto erros"
    )

    @classmethod
    def from_env(cls) -> "GolemConfig":
        """
        Cria configuração a partir de variáveis de ambiente.

        ## Variáveis suportadas:

        - `GOLEM_DB_PATH`: Caminho do banco (default: ~/.golem/golem.db)
        - `GOLEM_REQUEST_TIMEOUT`: Timeout HTTP em segundos (default: 30)
        - `GOLEM_HISTORY_PAGE_SIZE`: Linhas no feed (default: 100)
        - `GOLEM_EXPORT_LIMIT`: Máximo exportado (default: 10000)
        - `GOLEM_VERBOSE`: Logs detalhados (default: "false")
        - `GOLEM_SILENT`: Modo silencioso (default: "false")
        """
        def get_bool(key: str, default: bool) -> bool:
            val = os.environ.get(key, str(default)).lower()
            return val in ("true", "1", "yes", "on")

        def get_float(key: str, default: float) -> float:
            try:
                return float(os.environ.get(key, str(default)))
            except ValueError:
                return default

        def get_int(key: str, default: int) -> int:
            try:
                return int(os.environ.get(key, str(default)))
            except ValueError:
                return default

        return cls(
            db_path=os.environ.get("GOLEM_DB_PATH") or "~/.golem/golem.db",
            request_timeout=get_float("GOLEM_REQUEST_TIMEOUT", 30.0),
            history_page_size=get_int("GOLEM_HISTORY_PAGE_SIZE", 100),
            export_limit=get_int("GOLEM_EXPORT_LIMIT", 10000),
            verbose=get_bool("GOLEM_VERBOSE", False),
            silent=get_bool("GOLEM_SILENT", False),
        )

    @classmethod
    def for_testing(cls) -> "GolemConfig":
        """
        Configuração para testes.

        - Banco em memória (não polui ~/.golem)
        - Timeout curto
        - Verbose habilitado (facilita debug)
        """
        return cls(
            db_path=":memory:",
            request_timeout=5.0,
            verbose=True,
        )

"""
================================================================================
STORAGE BASE - Data Types and Exceptions
================================================================================

Define os tipos persistidos pelo Golem e a hierarquia de erros do storage.

## Tipos:

- `Preference`: configuração chave/valor da aplicação
- `Collection`: agrupamento nomeado de requisições salvas
- `RequestHistory`: registro imutável de uma requisição executada
- `SavedRequest`: template de requisição reutilizável

## Timestamps:

Todos os timestamps são `datetime` com timezone UTC. No banco eles viram
texto ISO 8601 com microssegundos (ver `to_iso`), então ordenar o texto
equivale a ordenar no tempo.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any


# =============================================================================
# Exceptions
# =============================================================================


class StorageError(Exception):
    """Erro base para operações de storage."""

    pass


class StorageNotFoundError(StorageError):
    """Registro não encontrado no storage."""

    pass


class StorageConnectionError(StorageError):
    """Banco indisponível na inicialização (arquivo, permissão, migração)."""

    pass


class StorageFormatError(StorageError):
    """Arquivo de importação com formato inválido."""

    pass


# =============================================================================
# Timestamps
# =============================================================================


def utc_now() -> datetime:
    """Hora atual em UTC."""
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """
    Serializa um datetime para o formato armazenado no banco.

    Datetimes sem timezone são tratados como UTC. O resultado sempre tem
    microssegundos, garantindo largura fixa e ordenação lexicográfica correta.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat(timespec="microseconds")


def from_iso(value: str | datetime) -> datetime:
    """Converte texto ISO 8601 (aceita sufixo "Z") para datetime UTC."""
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


# =============================================================================
# Data Types
# =============================================================================


@dataclass
class Preference:
    """Preferência persistida (upsert por chave, sem deleção)."""

    key: str
    value: str
    updated_at: datetime


@dataclass
class Collection:
    """Agrupamento nomeado de requisições salvas."""

    id: int
    name: str
    description: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "created_at": to_iso(self.created_at),
        }


# Campos de texto opcionais omitidos da exportação quando vazios
_OPTIONAL_TEXT_FIELDS = (
    "headers",
    "body",
    "response_status",
    "response_body",
    "response_headers",
)


@dataclass
class RequestHistory:
    """
    Registro de uma requisição executada e do seu resultado.

    ## Atributos obrigatórios:

    - `url`: URL requisitada
    - `method`: Método HTTP (GET, POST, ...)

    ## Atributos opcionais:

    - `id`: Atribuído pelo storage em `save_history` (None antes disso)
    - `headers` / `body`: Dados da requisição
    - `timestamp`: Momento da execução (default: agora, UTC)
    - `response_status`: Ex: "200 OK", ou "Error" em falha de transporte
    - `response_body` / `response_headers`: Dados da resposta
    - `response_time_ms`: Latência em milissegundos
    - `response_size`: Tamanho do corpo em bytes
    - `is_favorite`: Marcado como favorito
    - `collection_id`: Referência fraca (vira None quando a coleção é removida)
    """

    url: str
    method: str
    id: int | None = None
    headers: str | None = None
    body: str | None = None
    timestamp: datetime | None = None
    response_status: str | None = None
    response_body: str | None = None
    response_headers: str | None = None
    response_time_ms: int = 0
    response_size: int = 0
    is_favorite: bool = False
    collection_id: int | None = None

    def __post_init__(self) -> None:
        if self.timestamp is None:
            self.timestamp = utc_now()

    def to_dict(self) -> dict[str, Any]:
        """
        Converte para o formato do arquivo de exportação.

        Campos de texto opcionais vazios são omitidos.
        """
        data: dict[str, Any] = {
            "id": self.id,
            "url": self.url,
            "method": self.method,
            "headers": self.headers,
            "body": self.body,
            "timestamp": to_iso(self.timestamp or utc_now()),
            "response_status": self.response_status,
            "response_body": self.response_body,
            "response_headers": self.response_headers,
            "response_time_ms": self.response_time_ms,
            "response_size": self.response_size,
            "is_favorite": self.is_favorite,
            "collection_id": self.collection_id,
        }
        for name in _OPTIONAL_TEXT_FIELDS:
            if not data[name]:
                del data[name]
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RequestHistory":
        """
        Cria instância a partir de um objeto do arquivo de exportação.

        ## Raises:

        - `KeyError`: Se `url`, `method` ou `timestamp` estiverem ausentes
        - `TypeError` / `ValueError`: Se algum campo tiver tipo inválido
        """
        if not isinstance(data, dict):
            raise TypeError(f"history row must be an object, got {type(data).__name__}")

        url = data["url"]
        method = data["method"]
        if not isinstance(url, str) or not isinstance(method, str):
            raise TypeError("url and method must be strings")

        collection_id = data.get("collection_id")
        if collection_id is not None and not isinstance(collection_id, int):
            raise TypeError("collection_id must be an integer or null")

        # bool ou 0/1; "false" não vira True
        is_favorite = data.get("is_favorite") or False
        if not isinstance(is_favorite, int) or is_favorite not in (0, 1):
            raise TypeError("is_favorite must be a boolean")

        return cls(
            id=data.get("id"),
            url=url,
            method=method,
            headers=data.get("headers") or None,
            body=data.get("body") or None,
            timestamp=from_iso(data["timestamp"]),
            response_status=data.get("response_status") or None,
            response_body=data.get("response_body") or None,
            response_headers=data.get("response_headers") or None,
            response_time_ms=int(data.get("response_time_ms") or 0),
            response_size=int(data.get("response_size") or 0),
            is_favorite=bool(is_favorite),
            collection_id=collection_id,
        )


@dataclass
class SavedRequest:
    """Template de requisição criado pelo usuário."""

    name: str
    url: str
    method: str
    id: int | None = None
    headers: str | None = None
    body: str | None = None
    collection_id: int | None = None
    created_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "method": self.method,
            "headers": self.headers,
            "body": self.body,
            "collection_id": self.collection_id,
            "created_at": to_iso(self.created_at) if self.created_at else None,
        }

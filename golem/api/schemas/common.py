"""
================================================================================
Schemas Comuns da API
================================================================================

Modelos base reutilizados em múltiplos endpoints.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """
    Detalhes de um erro estruturado.

    ## Atributos:

    - `code`: Código de erro (ex: E4002, E5001)
    - `message`: Mensagem legível do erro
    """

    code: str = Field(..., description="Código de erro estruturado", examples=["E4002"])
    message: str = Field(..., description="Mensagem legível do erro")


class ErrorResponse(BaseModel):
    """
    Resposta de erro padronizada.

    ## Exemplo:

        {
            "success": false,
            "error": {
                "code": "E4002",
                "message": "Requisição salva não encontrada: 7"
            }
        }
    """

    success: bool = Field(False, description="Sempre false para erros")
    error: ErrorDetail = Field(..., description="Detalhes do erro")
    request_id: str | None = Field(None, description="ID da requisição para debug")


class DeleteResponse(BaseModel):
    """Confirmação de remoção."""

    success: bool = True
    message: str
    deleted: int = Field(..., description="Quantidade de registros removidos")


class HealthResponse(BaseModel):
    """
    Resposta do health check.
    """

    status: str = Field(..., description="Status do serviço", examples=["healthy"])
    version: str = Field(..., description="Versão do Golem", examples=["0.1.0"])
    timestamp: datetime = Field(..., description="Timestamp do check")
    components: dict[str, str] = Field(
        default_factory=dict,
        description="Status dos componentes internos"
    )

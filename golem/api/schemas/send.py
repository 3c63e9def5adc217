"""
================================================================================
Schemas para /send
================================================================================
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class SendRequest(BaseModel):
    """
    Requisição a executar.

    ## Exemplo:

        {"method": "GET", "url": "https://httpbin.org/get"}
    """

    method: Literal["GET", "POST", "PUT", "PATCH", "DELETE"] = Field(
        "GET",
        description="Método HTTP"
    )
    url: str = Field(..., min_length=1, description="URL de destino")

    @field_validator("method", mode="before")
    @classmethod
    def _upper_method(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value


class HeaderSchema(BaseModel):
    key: str
    value: str


class SendResponse(BaseModel):
    """
    Resultado normalizado da execução.

    Status HTTP de erro (4xx/5xx) também são execuções bem-sucedidas.
    """

    success: bool = True
    method: str
    url: str
    status: str = Field(..., examples=["200 OK"])
    status_code: int
    body: str
    size: int = Field(..., description="Tamanho do corpo em bytes")
    response_time_ms: int
    headers: list[HeaderSchema] = Field(default_factory=list)

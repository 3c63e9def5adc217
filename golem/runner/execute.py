"""
================================================================================
EXECUTOR DE REQUISIÇÕES HTTP
================================================================================

Executa uma única chamada HTTP e devolve um `ResponseInfo` normalizado.

## Regras:

- Timeout fixo (30 segundos por padrão) cobrindo a chamada inteira,
  da conexão ao último byte do corpo; sem retries
- Redirects seguidos com a política padrão do cliente
- Tempo medido de imediatamente antes da chamada até o fim da leitura
  do corpo da resposta
- Cada ocorrência de header vira um par separado, na ordem recebida
- Status HTTP de erro (4xx, 5xx) NÃO é falha: é uma execução bem-sucedida
  com aquele status. Só falhas de transporte (DNS, conexão, timeout,
  URL inválida) levantam `RequestExecutionError`

## Fluxo:

```
    execute_request(method, url)
              │
        [perf_counter]
              │
     httpx.Client.stream ──(erro de transporte)──> RequestExecutionError
              │
      [corpo lido em blocos] ──(prazo estourado)──> RequestExecutionError
              │
        [perf_counter]
              │
         ResponseInfo
```
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from datetime import timedelta

import httpx


logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 30.0


class RequestExecutionError(Exception):
    """
    Falha de transporte ao executar uma requisição.

    A exceção original do httpx fica em `__cause__`.
    """

    def __init__(self, message: str, method: str, url: str) -> None:
        super().__init__(message)
        self.method = method
        self.url = url


@dataclass
class ResponseHeader:
    """Um par chave/valor de header, como recebido."""

    key: str
    value: str

    def to_dict(self) -> dict[str, str]:
        return {"key": self.key, "value": self.value}


@dataclass
class ResponseInfo:
    """
    Resposta normalizada de uma execução.

    ## Atributos:
        status: Linha de status legível, ex: "200 OK", "404 Not Found"
        status_code: Código numérico
        body: Corpo decodificado como texto
        headers: Pares de header na ordem recebida (chaves podem repetir)
        size: Tamanho do corpo em bytes
        response_time: Tempo total até o corpo ser lido
    """

    status: str
    status_code: int
    body: str
    size: int
    response_time: timedelta
    headers: list[ResponseHeader] = field(default_factory=list)

    @property
    def response_time_ms(self) -> int:
        return int(self.response_time / timedelta(milliseconds=1))

    @property
    def ok(self) -> bool:
        """True para status 2xx."""
        return 200 <= self.status_code < 300


def _status_line(response: httpx.Response) -> str:
    reason = response.reason_phrase
    return f"{response.status_code} {reason}".strip()


def _collect_headers(response: httpx.Response) -> list[ResponseHeader]:
    encoding = response.headers.encoding
    return [
        ResponseHeader(key.decode(encoding), value.decode(encoding))
        for key, value in response.headers.raw
    ]


def execute_request(
    method: str,
    url: str,
    *,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    client: httpx.Client | None = None,
) -> ResponseInfo:
    """
    Executa uma requisição HTTP sem corpo.

    ## Parâmetros:
        method: Método HTTP (normalizado para maiúsculas)
        url: URL absoluta
        timeout: Prazo total em segundos (conexão + envio + leitura do corpo)
        client: Cliente httpx já configurado (testes injetam MockTransport)

    ## Retorna:
        ResponseInfo com status, corpo, headers, tamanho e tempo.

    ## Raises:
        RequestExecutionError: Falha de transporte ou URL inválida

    ## Exemplo:
        >>> info = execute_request("GET", "https://httpbin.org/get")
        >>> info.status
        '200 OK'
    """
    method = (method or "GET").upper()
    if not url:
        raise RequestExecutionError("URL is required", method, url)

    owns_client = client is None
    if client is None:
        client = httpx.Client(timeout=timeout, follow_redirects=True)

    logger.debug("%s %s", method, url)
    start = time.perf_counter()
    deadline = start + timeout
    try:
        # Cada fase do httpx fica limitada ao prazo total; o laço abaixo
        # garante que a soma delas também fique
        with client.stream(method, url, timeout=timeout) as response:
            chunks: list[bytes] = []
            for chunk in response.iter_bytes():
                chunks.append(chunk)
                if time.perf_counter() > deadline:
                    raise httpx.ReadTimeout(
                        f"request exceeded the {timeout:g}s timeout",
                        request=response.request,
                    )
        elapsed = time.perf_counter() - start
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.debug("%s %s failed: %s", method, url, e)
        raise RequestExecutionError(str(e) or type(e).__name__, method, url) from e
    finally:
        if owns_client:
            client.close()

    content = b"".join(chunks)
    info = ResponseInfo(
        status=_status_line(response),
        status_code=response.status_code,
        body=content.decode(response.encoding or "utf-8", errors="replace"),
        size=len(content),
        response_time=timedelta(seconds=elapsed),
        headers=_collect_headers(response),
    )
    logger.debug("%s %s -> %s (%d bytes, %d ms)", method, url, info.status, info.size, info.response_time_ms)
    return info

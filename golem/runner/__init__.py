"""
Executor de requisições HTTP do Golem.

Uma chamada síncrona por requisição, timeout fixo, sem retries.
"""

from .execute import (
    DEFAULT_TIMEOUT_SECONDS,
    RequestExecutionError,
    ResponseHeader,
    ResponseInfo,
    execute_request,
)

__all__ = [
    "DEFAULT_TIMEOUT_SECONDS",
    "RequestExecutionError",
    "ResponseHeader",
    "ResponseInfo",
    "execute_request",
]

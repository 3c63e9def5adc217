"""
================================================================================
FastAPI Application Factory
================================================================================

Cria e configura a aplicação FastAPI do Golem.

## Uso:

```python
from golem.api import create_app

app = create_app()
```

## Via CLI:

```bash
golem serve --port 8000 --reload
```

## Ciclo de vida do store:

- `create_app(store=...)`: o store injetado é usado e nunca fechado pela app
- Sem store: o lifespan abre o banco no startup e fecha no shutdown
"""

from __future__ import annotations

import logging
import uuid
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import __version__
from ..config import GolemConfig
from ..storage import SQLiteStore, StorageNotFoundError, open_store
from .config import APIConfig
from .routes import create_api_router


logger = logging.getLogger(__name__)


def _error_payload(request: Request, code: str, message: str, **extra: Any) -> dict[str, Any]:
    error: dict[str, Any] = {"code": code, "message": message}
    error.update(extra)
    return {
        "success": False,
        "error": error,
        "request_id": getattr(request.state, "request_id", None),
    }


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Gerencia ciclo de vida da aplicação.

    - Startup: Abre o banco (se nenhum store foi injetado)
    - Shutdown: Fecha o banco aberto aqui
    """
    app.state.start_time = datetime.now(timezone.utc)
    owned: SQLiteStore | None = None

    if app.state.store is None:
        # Falha aqui impede o startup (StorageConnectionError)
        owned = open_store(app.state.settings)
        app.state.store = owned
        logger.info("Database opened: %s", owned.db_path)

    yield

    if owned is not None:
        owned.close()
        app.state.store = None
        app.state.feed = None


def create_app(
    config: APIConfig | None = None,
    store: SQLiteStore | None = None,
    settings: GolemConfig | None = None,
) -> FastAPI:
    """
    Cria e configura a aplicação FastAPI.

    ## Parâmetros:

    - `config`: Configuração do servidor. Se None, usa valores de ambiente.
    - `store`: Store já aberto (testes). Se None, o lifespan abre um.
    - `settings`: Configuração do Golem (timeout, caminho do banco).

    ## Exemplo:

        >>> app = create_app()
        >>> # ou com store em memória
        >>> app = create_app(store=SQLiteStore(":memory:"))
    """
    if config is None:
        config = APIConfig.from_env()
    if settings is None:
        settings = GolemConfig.from_env()

    app = FastAPI(
        title="Golem API",
        description="""
## 🧪 Golem — API Tester

Backend REST local para uma interface gráfica do Golem.

### Funcionalidades:

- **Send**: Executar requisições HTTP
- **History**: Consultar, buscar e limpar o histórico
- **Collections / Saved**: Coleções de requisições reutilizáveis
- **Preferences**: Preferências da aplicação
        """,
        version=__version__,
        docs_url="/docs" if config.docs_enabled else None,
        redoc_url="/redoc" if config.docs_enabled else None,
        openapi_url="/openapi.json" if config.docs_enabled else None,
        lifespan=lifespan,
    )

    app.state.config = config
    app.state.settings = settings
    app.state.store = store
    app.state.feed = None

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_request_id(  # pyright: ignore[reportUnusedFunction]
        request: Request,
        call_next: Any
    ) -> Any:
        request_id = request.headers.get("X-Request-ID", uuid.uuid4().hex[:12])
        request.state.request_id = request_id
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id
        return response

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(  # pyright: ignore[reportUnusedFunction]
        request: Request,
        exc: StarletteHTTPException
    ) -> JSONResponse:
        if isinstance(exc.detail, dict) and "code" in exc.detail:
            code = str(exc.detail["code"])
            message = str(exc.detail.get("message", ""))
        else:
            code = f"E{exc.status_code}"
            message = str(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_payload(request, code, message),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(StorageNotFoundError)
    async def not_found_handler(  # pyright: ignore[reportUnusedFunction]
        request: Request,
        exc: StorageNotFoundError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=_error_payload(request, "E4002", str(exc)),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(  # pyright: ignore[reportUnusedFunction]
        request: Request,
        exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=_error_payload(
                request,
                "E1009",
                "Erro de validação nos dados enviados",
                details=jsonable_errors(exc),
            ),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(  # pyright: ignore[reportUnusedFunction]
        request: Request,
        exc: Exception
    ) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        message = str(exc) if config.debug else "Erro interno do servidor"
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_payload(request, "E5001", message),
        )

    app.include_router(create_api_router(), prefix=config.api_prefix)

    # Health check na raiz (sem prefixo)
    @app.get("/health", tags=["Health"])
    async def root_health() -> dict[str, Any]:  # pyright: ignore[reportUnusedFunction]
        return {
            "status": "healthy",
            "version": __version__,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    return app


def jsonable_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    """Erros de validação sem objetos não serializáveis (ex: `ctx`)."""
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]


def get_app() -> FastAPI:
    """
    Retorna instância da app para uso com uvicorn.

    ## Uso com uvicorn:

    ```bash
    uvicorn golem.api.app:get_app --factory --reload
    ```
    """
    return create_app()

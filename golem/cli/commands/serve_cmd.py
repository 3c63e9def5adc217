"""
================================================================================
Comando: golem serve — Inicia o backend REST
================================================================================

Expõe histórico, coleções, requisições salvas e preferências via HTTP,
para que uma interface gráfica externa dirija o Golem.

## Uso:

```bash
golem serve
golem serve --port 3000
golem serve --reload --debug
golem serve --host 127.0.0.1 --port 8080
```

## Endpoints:

- GET    /health
- POST   /api/v1/send
- GET    /api/v1/history
- DELETE /api/v1/history[/{id}]
- GET    /api/v1/collections, POST, DELETE /{id}
- GET    /api/v1/saved, POST, GET/DELETE /{id}
- GET    /api/v1/preferences, PUT /{key}
"""

from __future__ import annotations

import os

import click
import uvicorn
from rich.console import Console
from rich.panel import Panel

from ..registry import register_command


@register_command
@click.command()
@click.option(
    "--host",
    "-h",
    type=str,
    default="127.0.0.1",
    help="Host para bind do servidor (padrão: 127.0.0.1)"
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=8000,
    help="Porta do servidor (padrão: 8000)"
)
@click.option(
    "--reload",
    is_flag=True,
    help="Modo desenvolvimento com auto-reload"
)
@click.option(
    "--debug",
    is_flag=True,
    help="Modo debug (mostra erros detalhados)"
)
@click.option(
    "--no-docs",
    is_flag=True,
    help="Desabilitar documentação interativa (/docs, /redoc)"
)
@click.pass_context
def serve(
    ctx: click.Context,
    host: str,
    port: int,
    reload: bool,
    debug: bool,
    no_docs: bool,
) -> None:
    """
    🚀 Inicia o backend REST do Golem.

    \b
    Exemplos:
      golem serve                    # http://127.0.0.1:8000
      golem serve --port 3000        # Porta customizada
      golem serve --reload --debug   # Modo desenvolvimento
    """
    console: Console = ctx.obj.get("console", Console())
    error_console: Console = ctx.obj["error_console"]

    # A app é criada pela factory no processo do uvicorn
    os.environ["GOLEM_API_HOST"] = host
    os.environ["GOLEM_API_PORT"] = str(port)
    os.environ["GOLEM_API_DEBUG"] = "true" if debug else "false"
    os.environ["GOLEM_API_DOCS"] = "false" if no_docs else "true"
    if ctx.obj.get("db_path"):
        os.environ["GOLEM_DB_PATH"] = ctx.obj["db_path"]

    base_url = f"http://{'localhost' if host == '0.0.0.0' else host}:{port}"
    console.print(Panel(
        f"[bold]API:[/bold]    {base_url}/api/v1\n"
        f"[bold]Health:[/bold] {base_url}/health\n"
        f"[bold]Docs:[/bold]   {'desabilitada' if no_docs else base_url + '/docs'}\n\n"
        "[dim]Pressione Ctrl+C para encerrar[/dim]",
        title="🧪 Golem API",
        border_style="cyan",
    ))

    try:
        uvicorn.run(
            "golem.api.app:get_app",
            host=host,
            port=port,
            reload=reload,
            factory=True,
            log_level="debug" if debug else "info",
            access_log=debug,
        )
    except Exception as e:
        error_console.print(f"[red]Erro ao iniciar servidor:[/red] {e}")
        raise SystemExit(1)

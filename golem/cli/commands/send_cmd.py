"""
================================================================================
Comando: golem send — Executa uma requisição HTTP
================================================================================

Executa uma requisição, mostra status/tamanho/tempo/corpo e grava o
resultado no histórico.

## Uso:

```bash
# GET simples
golem send https://httpbin.org/get

# Outro método
golem send -X DELETE https://api.example.com/users/1

# Mostra headers da resposta
golem send -i https://httpbin.org/get

# Repete a última requisição (URL e método das preferências)
golem send
```
"""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from ...preferences import SUPPORTED_METHODS, load_preferences, save_preferences
from ...recorder import HistoryRecorder
from ..registry import register_command
from ..utils import (
    emit_json,
    format_duration,
    format_size,
    get_config,
    get_console,
    get_http_client,
    get_store,
    status_style,
)


def _render_body(console: Console, body: str) -> None:
    """Imprime o corpo, formatado quando for JSON."""
    if not body:
        console.print("[dim](corpo vazio)[/dim]")
        return
    try:
        parsed = json.loads(body)
    except ValueError:
        console.print(body, markup=False, highlight=False)
        return
    console.print(Syntax(json.dumps(parsed, indent=2, ensure_ascii=False), "json"))


@register_command
@click.command()
@click.argument("url", required=False)
@click.option(
    "--method", "-X",
    type=click.Choice(SUPPORTED_METHODS, case_sensitive=False),
    default=None,
    help="Método HTTP (padrão: último usado, ou GET)"
)
@click.option(
    "--include", "-i",
    is_flag=True,
    help="Mostra os headers da resposta"
)
@click.pass_context
def send(ctx: click.Context, url: str | None, method: str | None, include: bool) -> None:
    """
    Executa uma requisição HTTP e grava no histórico.

    \b
    Exemplos:
      golem send https://httpbin.org/get
      golem send -X POST https://httpbin.org/post
      golem send                      # repete a última URL
    """
    console = get_console(ctx)
    error_console: Console = ctx.obj["error_console"]
    json_output: bool = ctx.obj.get("json_output", False)

    store = get_store(ctx)
    config = get_config(ctx)
    prefs = load_preferences(store)

    url = url or prefs.last_url
    method = (method or prefs.last_method or "GET").upper()

    if not url:
        error_console.print("[red]Error:[/red] Informe uma URL")
        raise SystemExit(1)

    prefs.last_url = url
    prefs.last_method = method
    save_preferences(store, prefs)

    recorder = HistoryRecorder(
        store,
        timeout=config.request_timeout,
        client=get_http_client(ctx),
    )
    # Inline: o processo termina logo após o comando
    outcome = recorder.submit(method, url, background=False)

    response = outcome.response
    if response is None:
        if json_output:
            emit_json({"method": method, "url": url, "status": "Error", "error": str(outcome.error)})
        else:
            error_console.print(f"[red]Status: Error[/red]\n[red]Error:[/red] {outcome.error}")
        raise SystemExit(1)

    if json_output:
        emit_json({
            "method": method,
            "url": url,
            "status": response.status,
            "status_code": response.status_code,
            "size": response.size,
            "response_time_ms": response.response_time_ms,
            "headers": [h.to_dict() for h in response.headers],
            "body": response.body,
        })
        return

    style = status_style(response.status)
    console.print(Panel(
        f"[bold]Status:[/bold] [{style}]{response.status}[/{style}]   "
        f"[bold]Size:[/bold] {format_size(response.size)}   "
        f"[bold]Time:[/bold] {format_duration(response.response_time_ms)}",
        title=f"{method} {url}",
        border_style=style,
    ))

    if include and response.headers:
        table = Table(title="Headers")
        table.add_column("Header", style="cyan")
        table.add_column("Valor")
        for header in response.headers:
            table.add_row(header.key, header.value)
        console.print(table)

    _render_body(console, response.body)

"""
================================================================================
Comando: golem saved — Requisições Salvas
================================================================================

Templates de requisição com nome, opcionalmente agrupados em coleções.

## Uso:

```bash
golem saved add list-users https://api.example.com/users -c 1
golem saved add create-user https://api.example.com/users -X POST \\
    --header "Content-Type: application/json" --body '{"name": "x"}'
golem saved list            # sem coleção
golem saved list -c 1       # da coleção 1
golem saved show 4
golem saved run 4           # executa e grava no histórico
golem saved delete 4
```
"""

from __future__ import annotations

import sqlite3

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...preferences import SUPPORTED_METHODS
from ...recorder import HistoryRecorder
from ...storage import SavedRequest, StorageNotFoundError
from ..registry import register_command
from ..utils import (
    emit_json,
    format_duration,
    format_size,
    get_config,
    get_console,
    get_http_client,
    get_store,
    parse_headers,
    status_style,
)


def _load_saved(ctx: click.Context, request_id: int) -> SavedRequest:
    error_console: Console = ctx.obj["error_console"]
    try:
        return get_store(ctx).get_saved_request(request_id)
    except StorageNotFoundError:
        error_console.print(f"[red]❌ Requisição salva '{request_id}' não encontrada[/red]")
        raise SystemExit(1)


@register_command
@click.group()
def saved() -> None:
    """Gerencia requisições salvas."""


@saved.command()
@click.argument("name")
@click.argument("url")
@click.option(
    "--method", "-X",
    type=click.Choice(SUPPORTED_METHODS, case_sensitive=False),
    default="GET",
    help="Método HTTP (padrão: GET)"
)
@click.option("--collection", "-c", "collection_id", type=int, default=None, help="ID da coleção")
@click.option("--header", "-H", "headers", multiple=True, help="Header 'Chave: valor' (repetível)")
@click.option("--body", default=None, help="Corpo da requisição")
@click.pass_context
def add(
    ctx: click.Context,
    name: str,
    url: str,
    method: str,
    collection_id: int | None,
    headers: tuple[str, ...],
    body: str | None,
) -> None:
    """Salva uma requisição."""
    console = get_console(ctx)
    error_console: Console = ctx.obj["error_console"]

    entry = SavedRequest(
        name=name,
        url=url,
        method=method.upper(),
        headers=parse_headers(headers),
        body=body,
        collection_id=collection_id,
    )
    try:
        get_store(ctx).save_request(entry)
    except sqlite3.IntegrityError:
        error_console.print(f"[red]❌ Coleção '{collection_id}' não encontrada[/red]")
        raise SystemExit(1)

    if ctx.obj.get("json_output", False):
        emit_json(entry.to_dict())
        return

    console.print(f"[green]✅ Requisição salva:[/green] {entry.name} (ID {entry.id})")


@saved.command(name="list")
@click.option("--collection", "-c", "collection_id", type=int, default=None, help="ID da coleção")
@click.pass_context
def list_cmd(ctx: click.Context, collection_id: int | None) -> None:
    """
    Lista requisições salvas por nome.

    Sem `-c`, lista as requisições que não pertencem a nenhuma coleção.
    """
    console = get_console(ctx)
    requests = get_store(ctx).list_saved_requests(collection_id)

    if ctx.obj.get("json_output", False):
        emit_json({"saved": [r.to_dict() for r in requests]})
        return

    if not requests:
        console.print("[dim]Nenhuma requisição salva[/dim]")
        return

    title = "⭐ Requisições salvas"
    title += f" (coleção {collection_id})" if collection_id is not None else " (sem coleção)"
    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Nome", style="bold")
    table.add_column("Método")
    table.add_column("URL", max_width=60)
    for item in requests:
        table.add_row(str(item.id), item.name, item.method, item.url)
    console.print(table)


@saved.command()
@click.argument("request_id", type=int)
@click.pass_context
def show(ctx: click.Context, request_id: int) -> None:
    """Mostra uma requisição salva."""
    console = get_console(ctx)
    entry = _load_saved(ctx, request_id)

    if ctx.obj.get("json_output", False):
        emit_json(entry.to_dict())
        return

    console.print(Panel(
        f"[bold]Nome:[/bold] {entry.name}\n"
        f"[bold]Requisição:[/bold] {entry.method} {entry.url}\n"
        f"[bold]Coleção:[/bold] {entry.collection_id if entry.collection_id is not None else '-'}\n"
        f"[bold]Headers:[/bold] {entry.headers or '-'}\n"
        f"[bold]Corpo:[/bold] {entry.body or '-'}",
        title=f"⭐ #{entry.id}",
        border_style="blue",
    ))


@saved.command()
@click.argument("request_id", type=int)
@click.pass_context
def delete(ctx: click.Context, request_id: int) -> None:
    """Remove uma requisição salva."""
    console = get_console(ctx)
    error_console: Console = ctx.obj["error_console"]

    if not get_store(ctx).delete_saved_request(request_id):
        error_console.print(f"[red]❌ Requisição salva '{request_id}' não encontrada[/red]")
        raise SystemExit(1)

    console.print(f"[green]✅ Requisição salva {request_id} removida[/green]")


@saved.command()
@click.argument("request_id", type=int)
@click.pass_context
def run(ctx: click.Context, request_id: int) -> None:
    """
    Executa uma requisição salva e grava no histórico.

    O executor envia apenas método e URL; headers e corpo salvos não
    são enviados.
    """
    console = get_console(ctx)
    error_console: Console = ctx.obj["error_console"]
    entry = _load_saved(ctx, request_id)
    config = get_config(ctx)

    recorder = HistoryRecorder(
        get_store(ctx),
        timeout=config.request_timeout,
        client=get_http_client(ctx),
    )
    outcome = recorder.submit(
        entry.method, entry.url, background=False, collection_id=entry.collection_id
    )

    response = outcome.response
    if response is None:
        error_console.print(f"[red]Status: Error[/red]\n[red]Error:[/red] {outcome.error}")
        raise SystemExit(1)

    if ctx.obj.get("json_output", False):
        emit_json({
            "saved_id": entry.id,
            "status": response.status,
            "size": response.size,
            "response_time_ms": response.response_time_ms,
            "body": response.body,
        })
        return

    style = status_style(response.status)
    console.print(
        f"[bold]{entry.name}[/bold] → [{style}]{response.status}[/{style}] "
        f"({format_size(response.size)}, {format_duration(response.response_time_ms)})"
    )
    if response.body:
        console.print(response.body, markup=False, highlight=False)

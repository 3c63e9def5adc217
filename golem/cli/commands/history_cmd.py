"""
================================================================================
Comando: golem history — Histórico de Requisições
================================================================================

Lista, busca e gerencia o histórico de requisições executadas.

## Uso:

```bash
# Últimas 20 requisições
golem history

# Paginação
golem history --limit 50 --offset 50

# Busca (url, método ou status; diferencia maiúsculas)
golem history --search users

# Detalhes / remoção
golem history show 42
golem history delete 42

# Limpa tudo
golem history clear --force

# Exporta / importa JSON
golem history export history.json
golem history import history.json
```
"""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ...feed import format_age
from ...storage import (
    RequestHistory,
    StorageNotFoundError,
    export_history,
    import_history,
)
from ..registry import register_command
from ..utils import (
    emit_json,
    format_duration,
    format_size,
    get_config,
    get_console,
    get_store,
    status_style,
)


def _history_table(records: list[RequestHistory], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Método", style="bold")
    table.add_column("URL", max_width=50)
    table.add_column("Status", justify="center")
    table.add_column("Tempo", justify="right")
    table.add_column("Quando", style="dim")

    for record in records:
        style = status_style(record.response_status)
        status = record.response_status or "-"
        table.add_row(
            str(record.id),
            record.method,
            record.url,
            f"[{style}]{status}[/{style}]",
            format_duration(record.response_time_ms),
            format_age(record.timestamp) if record.timestamp else "-",
        )
    return table


@register_command
@click.group(invoke_without_command=True)
@click.option(
    "--limit", "-n",
    type=click.IntRange(min=1),
    default=20,
    help="Número de requisições a exibir (padrão: 20)"
)
@click.option(
    "--offset",
    type=click.IntRange(min=0),
    default=0,
    help="Pula as N mais recentes (não combina com --search)"
)
@click.option(
    "--search", "-s",
    "term",
    default=None,
    help="Filtra por substring em URL, método ou status"
)
@click.pass_context
def history(ctx: click.Context, limit: int, offset: int, term: str | None) -> None:
    """
    Visualiza o histórico de requisições.

    \b
    Exemplos:
      golem history                  # Últimas 20
      golem history -n 50            # Últimas 50
      golem history -s POST          # Busca
      golem history show 42          # Detalhes
      golem history export out.json  # Exporta
    """
    if ctx.invoked_subcommand is not None:
        return

    console = get_console(ctx)
    json_output: bool = ctx.obj.get("json_output", False)
    if term and offset:
        raise click.UsageError("--offset não pode ser combinado com --search", ctx=ctx)

    store = get_store(ctx)

    if term:
        records = store.search_history(term, limit=limit)
    else:
        records = store.list_history(limit=limit, offset=offset)

    if json_output:
        emit_json({"history": [r.to_dict() for r in records]})
        return

    if not records:
        console.print("[dim]Nenhuma requisição encontrada[/dim]")
        return

    title = f"📜 Histórico ({len(records)})"
    if term:
        title += f" — busca: {term!r}"
    console.print(_history_table(records, title))


@history.command()
@click.argument("history_id", type=int)
@click.pass_context
def show(ctx: click.Context, history_id: int) -> None:
    """
    Mostra detalhes de uma requisição do histórico.

    \b
    Exemplo:
      golem history show 42
    """
    console = get_console(ctx)
    error_console: Console = ctx.obj["error_console"]
    json_output: bool = ctx.obj.get("json_output", False)

    try:
        record = get_store(ctx).get_history(history_id)
    except StorageNotFoundError:
        error_console.print(f"[red]❌ Requisição '{history_id}' não encontrada[/red]")
        raise SystemExit(1)

    if json_output:
        emit_json(record.to_dict())
        return

    style = status_style(record.response_status)
    console.print(Panel(
        f"[bold]ID:[/bold] {record.id}\n"
        f"[bold]Data:[/bold] {record.timestamp:%Y-%m-%d %H:%M:%S}\n"
        f"[bold]Requisição:[/bold] {record.method} {record.url}\n"
        f"[bold]Status:[/bold] [{style}]{record.response_status or '-'}[/{style}]\n"
        f"[bold]Tamanho:[/bold] {format_size(record.response_size)}\n"
        f"[bold]Tempo:[/bold] {format_duration(record.response_time_ms)}\n"
        f"[bold]Coleção:[/bold] {record.collection_id if record.collection_id is not None else '-'}",
        title="📋 Detalhes da Requisição",
        border_style="blue",
    ))

    if record.response_headers:
        try:
            headers = json.loads(record.response_headers)
        except ValueError:
            headers = []
        if headers:
            table = Table(title="Headers")
            table.add_column("Header", style="cyan")
            table.add_column("Valor")
            for header in headers:
                table.add_row(str(header.get("key", "")), str(header.get("value", "")))
            console.print(table)

    if record.response_body:
        console.print(record.response_body, markup=False, highlight=False)


@history.command()
@click.argument("history_id", type=int)
@click.pass_context
def delete(ctx: click.Context, history_id: int) -> None:
    """Remove uma requisição do histórico."""
    console = get_console(ctx)
    error_console: Console = ctx.obj["error_console"]

    if not get_store(ctx).delete_history(history_id):
        error_console.print(f"[red]❌ Requisição '{history_id}' não encontrada[/red]")
        raise SystemExit(1)

    console.print(f"[green]✅ Requisição {history_id} removida[/green]")


@history.command()
@click.option("--force", "-f", is_flag=True, help="Não pedir confirmação")
@click.pass_context
def clear(ctx: click.Context, force: bool) -> None:
    """
    Limpa todo o histórico de requisições.

    \b
    Exemplo:
      golem history clear
      golem history clear --force
    """
    console = get_console(ctx)

    if not force:
        if not click.confirm("Deseja realmente limpar todo o histórico?"):
            console.print("[dim]Operação cancelada[/dim]")
            return

    removed = get_store(ctx).clear_history()
    console.print(f"[green]✅ Histórico limpo: {removed} registros removidos[/green]")


@history.command(name="export")
@click.argument("path", type=click.Path(dir_okay=False, writable=True))
@click.pass_context
def export_cmd(ctx: click.Context, path: str) -> None:
    """Exporta o histórico (até o limite configurado) para um arquivo JSON."""
    console = get_console(ctx)
    error_console: Console = ctx.obj["error_console"]
    config = get_config(ctx)

    try:
        count = export_history(get_store(ctx), path, limit=config.export_limit)
    except OSError as e:
        error_console.print(f"[red]❌ Falha ao exportar:[/red] {e}")
        raise SystemExit(1)

    console.print(f"[green]✅ {count} registros exportados para {path}[/green]")


@history.command(name="import")
@click.argument("path", type=click.Path(exists=True, dir_okay=False))
@click.pass_context
def import_cmd(ctx: click.Context, path: str) -> None:
    """
    Importa histórico de um arquivo JSON.

    A importação é tudo ou nada: se qualquer registro for inválido,
    nenhum é gravado.
    """
    console = get_console(ctx)
    error_console: Console = ctx.obj["error_console"]

    try:
        count = import_history(get_store(ctx), path)
    except Exception as e:
        error_console.print(
            f"[red]❌ Importação cancelada, nenhum registro gravado:[/red] "
            f"{type(e).__name__}: {e}"
        )
        raise SystemExit(1)

    console.print(f"[green]✅ {count} registros importados de {path}[/green]")

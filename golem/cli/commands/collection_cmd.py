"""
================================================================================
Comando: golem collection — Coleções de Requisições
================================================================================

## Uso:

```bash
golem collection create "Users API" -d "Endpoints de usuários"
golem collection list
golem collection delete 3
```

Remover uma coleção remove também suas requisições salvas; as linhas de
histórico que apontavam para ela ficam sem coleção.
"""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from ..registry import register_command
from ..utils import emit_json, get_console, get_store


@register_command
@click.group()
def collection() -> None:
    """Gerencia coleções de requisições salvas."""


@collection.command()
@click.argument("name")
@click.option("--description", "-d", default="", help="Descrição da coleção")
@click.pass_context
def create(ctx: click.Context, name: str, description: str) -> None:
    """Cria uma nova coleção."""
    console = get_console(ctx)
    created = get_store(ctx).create_collection(name, description)

    if ctx.obj.get("json_output", False):
        emit_json(created.to_dict())
        return

    console.print(f"[green]✅ Coleção criada:[/green] {created.name} (ID {created.id})")


@collection.command(name="list")
@click.pass_context
def list_cmd(ctx: click.Context) -> None:
    """Lista as coleções por nome."""
    console = get_console(ctx)
    collections = get_store(ctx).list_collections()

    if ctx.obj.get("json_output", False):
        emit_json({"collections": [c.to_dict() for c in collections]})
        return

    if not collections:
        console.print("[dim]Nenhuma coleção[/dim]")
        return

    table = Table(title=f"📁 Coleções ({len(collections)})")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Nome", style="bold")
    table.add_column("Descrição")
    table.add_column("Criada em", style="dim")
    for item in collections:
        table.add_row(
            str(item.id),
            item.name,
            item.description or "-",
            f"{item.created_at:%Y-%m-%d %H:%M}",
        )
    console.print(table)


@collection.command()
@click.argument("collection_id", type=int)
@click.pass_context
def delete(ctx: click.Context, collection_id: int) -> None:
    """Remove uma coleção e suas requisições salvas."""
    console = get_console(ctx)
    error_console: Console = ctx.obj["error_console"]

    if not get_store(ctx).delete_collection(collection_id):
        error_console.print(f"[red]❌ Coleção '{collection_id}' não encontrada[/red]")
        raise SystemExit(1)

    console.print(f"[green]✅ Coleção {collection_id} removida[/green]")

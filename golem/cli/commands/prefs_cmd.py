"""
Comando: golem prefs — lista e altera preferências.

```bash
golem prefs
golem prefs set last_method POST
```
"""

from __future__ import annotations

import click
from rich.table import Table

from ..registry import register_command
from ..utils import emit_json, get_console, get_store


@register_command
@click.group(invoke_without_command=True)
@click.pass_context
def prefs(ctx: click.Context) -> None:
    """Lista as preferências gravadas."""
    if ctx.invoked_subcommand is not None:
        return

    console = get_console(ctx)
    stored = get_store(ctx).get_all_preferences()

    if ctx.obj.get("json_output", False):
        emit_json({"preferences": stored})
        return

    if not stored:
        console.print("[dim]Nenhuma preferência gravada[/dim]")
        return

    table = Table(title="⚙️  Preferências")
    table.add_column("Chave", style="cyan")
    table.add_column("Valor")
    for key in sorted(stored):
        table.add_row(key, stored[key])
    console.print(table)


@prefs.command(name="set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_cmd(ctx: click.Context, key: str, value: str) -> None:
    """Grava (ou sobrescreve) uma preferência."""
    get_store(ctx).set_preference(key, value)
    get_console(ctx).print(f"[green]✅ {key} = {value}[/green]")

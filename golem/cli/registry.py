"""
================================================================================
Registro dos Subcomandos
================================================================================

Cada módulo em `commands/` decora seu comando (ou grupo) com
`@register_command`. O `main.py` importa os módulos listados em
`COMMAND_MODULES` e anexa ao grupo `golem` tudo que foi registrado.

```python
# commands/ping_cmd.py
@register_command
@click.command()
def ping() -> None:
    ...
```
"""

from __future__ import annotations

import importlib
from typing import TypeVar

import click


CommandT = TypeVar("CommandT", bound=click.Command)

# Ordem de importação = ordem de registro
COMMAND_MODULES = (
    "send_cmd",
    "history_cmd",
    "collection_cmd",
    "saved_cmd",
    "prefs_cmd",
    "serve_cmd",
)

_commands: dict[str, click.Command] = {}


def register_command(cmd: CommandT) -> CommandT:
    """Decorator: guarda o comando pelo nome (reimportar não duplica)."""
    if cmd.name:
        _commands.setdefault(cmd.name, cmd)
    return cmd


def load_commands() -> None:
    """Importa os módulos de `commands/`; o import dispara o registro."""
    for module in COMMAND_MODULES:
        importlib.import_module(f"{__package__}.commands.{module}")


def register_all_commands(group: click.Group) -> None:
    for name, cmd in _commands.items():
        if name not in group.commands:
            group.add_command(cmd, name)

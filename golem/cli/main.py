"""
================================================================================
CLI Principal — Entry Point e Configuração
================================================================================

Este módulo define o comando `golem` e registra todos os subcomandos.

## Arquitetura:

```
golem (grupo principal)
├── send        → Executa uma requisição e grava no histórico
├── history     → Lista/busca/exporta/importa o histórico
├── collection  → Gerencia coleções
├── saved       → Gerencia requisições salvas
├── prefs       → Preferências da aplicação
└── serve       → Backend REST local (para uma UI externa)
```

## Flags Globais:

- `--verbose / -v` → Modo verbose (mais detalhes)
- `--quiet / -q` → Modo silencioso (só erros)
- `--json` → Saída estruturada JSON
- `--db PATH` → Caminho do banco (sobrescreve GOLEM_DB_PATH)
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from ..config import GolemConfig
from .registry import load_commands, register_all_commands

# Console global para output formatado
console = Console()
error_console = Console(stderr=True)

# Console silencioso (para modo --quiet)
quiet_console = Console(quiet=True)


def log_level(verbose: bool, quiet: bool) -> int:
    """`-q` vence `-v`; sem flags, INFO."""
    if quiet:
        return logging.ERROR
    return logging.DEBUG if verbose else logging.INFO


def setup_logging(verbose: bool, quiet: bool) -> None:
    """
    Instala o RichHandler no stderr.

    As flags somam-se a `GOLEM_VERBOSE` / `GOLEM_SILENT`.
    """
    env = GolemConfig.from_env()
    verbose = verbose or env.verbose
    quiet = quiet or env.silent

    logging.basicConfig(
        level=log_level(verbose, quiet),
        format="%(message)s",
        handlers=[RichHandler(console=error_console, show_time=False, show_path=False)],
        force=True,
    )
    # httpx loga cada requisição em INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


# =============================================================================
# GRUPO PRINCIPAL
# =============================================================================


@click.group()
@click.version_option(version="0.1.0", prog_name="golem")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Modo verbose (mostra mais detalhes)",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Modo silencioso (mostra só erros)",
)
@click.option(
    "--json",
    "json_output",
    is_flag=True,
    help="Saída estruturada em JSON",
)
@click.option(
    "--db",
    "db_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Caminho do banco SQLite (padrão: ~/.golem/golem.db)",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    json_output: bool,
    db_path: str | None,
) -> None:
    """
    🧪 Golem — API Tester

    Executa requisições HTTP, guarda um histórico pesquisável e
    coleções de requisições reutilizáveis.

    \b
    Exemplos:
      golem send https://httpbin.org/get        # GET simples
      golem send -X DELETE https://api/x/1      # Outro método
      golem history --search users              # Busca no histórico
      golem history export history.json         # Exporta histórico
      golem collection create "Users API"       # Nova coleção
      golem saved add list-users https://api/users -c 1
    """
    setup_logging(verbose, quiet)

    # Testes injetam "store" e "http_client" em obj; o resto vem das flags
    obj = ctx.ensure_object(dict)
    obj.update(
        verbose=verbose,
        quiet=quiet,
        json_output=json_output,
        console=quiet_console if (json_output or quiet) else console,
        error_console=error_console,
    )
    if db_path:
        obj["db_path"] = db_path


# =============================================================================
# REGISTRA SUBCOMANDOS
# =============================================================================

load_commands()
register_all_commands(cli)


# =============================================================================
# PONTO DE ENTRADA
# =============================================================================


def main() -> None:
    """Entry point para o comando `golem`."""
    cli()


if __name__ == "__main__":
    main()

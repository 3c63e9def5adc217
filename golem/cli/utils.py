"""
================================================================================
Utilitários do CLI
================================================================================

Funções auxiliares compartilhadas entre os comandos do CLI: acesso ao store
do contexto, cliente HTTP, formatação e saída JSON.
"""

from __future__ import annotations

import json
from typing import Any

import click
import httpx
from rich.console import Console

from ..config import GolemConfig
from ..storage import SQLiteStore, StorageConnectionError


def get_console(ctx: click.Context) -> Console:
    return ctx.obj["console"]


def get_store(ctx: click.Context) -> SQLiteStore:
    """
    Obtém o store do contexto, abrindo-o na primeira chamada.

    O store aberto aqui é fechado quando o contexto raiz termina. Um store
    injetado em `ctx.obj["store"]` (testes) não é fechado.

    Se o banco não puder ser aberto, a aplicação não inicia (exit 1).
    """
    store: SQLiteStore | None = ctx.obj.get("store")
    if store is not None:
        return store

    config = get_config(ctx)
    try:
        store = SQLiteStore(db_path=config.db_path)
    except StorageConnectionError as e:
        error_console: Console = ctx.obj["error_console"]
        error_console.print(f"[red]❌ Banco de dados indisponível:[/red] {e}")
        raise SystemExit(1)

    ctx.obj["store"] = store
    ctx.find_root().call_on_close(store.close)
    return store


def get_config(ctx: click.Context) -> GolemConfig:
    """Configuração do ambiente, com `--db` sobrescrevendo o caminho."""
    config = GolemConfig.from_env()
    db_path = ctx.obj.get("db_path")
    if db_path:
        config = config.model_copy(update={"db_path": db_path})
    return config


def get_http_client(ctx: click.Context) -> httpx.Client | None:
    """Cliente HTTP injetado no contexto (testes), ou None para o padrão."""
    return ctx.obj.get("http_client")


def emit_json(data: Any) -> None:
    """Imprime JSON em stdout (modo --json)."""
    click.echo(json.dumps(data, indent=2, ensure_ascii=False, default=str))


def format_duration(ms: int) -> str:
    """
    Formata duração em milissegundos para string legível.

    ## Exemplos:
        - 50 → "50ms"
        - 1500 → "1.5s"
        - 65000 → "1m 5s"
    """
    if ms < 1000:
        return f"{ms}ms"

    seconds = ms / 1000
    if seconds < 60:
        return f"{seconds:.1f}s"

    minutes = int(seconds // 60)
    remaining_seconds = int(seconds % 60)
    return f"{minutes}m {remaining_seconds}s"


def format_size(size: int) -> str:
    """
    Formata tamanho em bytes.

    ## Exemplos:
        - 512 → "512 B"
        - 2048 → "2.0 KB"
    """
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def status_style(status: str | None) -> str:
    """Cor rich para uma linha de status ("200 OK", "Error", ...)."""
    if not status or status == "Error":
        return "red"
    code = status.split(" ", 1)[0]
    if code.startswith("2"):
        return "green"
    if code.startswith("3"):
        return "cyan"
    if code.startswith("4"):
        return "yellow"
    return "red"


def parse_headers(values: tuple[str, ...]) -> str | None:
    """
    Converte opções `--header "Chave: valor"` em JSON.

    ## Raises:
        click.BadParameter: Se algum header não tiver ":"
    """
    if not values:
        return None

    pairs: list[dict[str, str]] = []
    for raw in values:
        if ":" not in raw:
            raise click.BadParameter(f"Header inválido (use 'Chave: valor'): {raw}")
        key, value = raw.split(":", 1)
        pairs.append({"key": key.strip(), "value": value.strip()})
    return json.dumps(pairs, ensure_ascii=False)

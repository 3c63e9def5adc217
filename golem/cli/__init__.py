"""
================================================================================
CLI `golem` — Interface de Linha de Comando do Golem
================================================================================

Este pacote fornece o comando `golem` para executar requisições HTTP e
gerenciar histórico, coleções e requisições salvas pelo terminal.

## Comandos disponíveis:

```bash
golem send https://httpbin.org/get        # Executa e grava no histórico
golem history                             # Últimas requisições
golem history export history.json         # Exporta histórico
golem collection list                     # Coleções
golem saved run 3                         # Executa requisição salva
golem serve --port 8000                   # Backend REST local
```

O CLI é construído com:
- **Click**: Framework de CLI
- **Rich**: Tabelas, painéis e cores no terminal
"""

from .main import cli

__all__ = ["cli"]

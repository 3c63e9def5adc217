"""
================================================================================
API Module — Backend REST do Golem
================================================================================

Expõe execução de requisições, histórico, coleções, requisições salvas e
preferências via REST, para que uma interface gráfica use o Golem sem o CLI.

## Endpoints disponíveis:

| Método | Endpoint                      | Descrição                       |
|--------|-------------------------------|---------------------------------|
| GET    | /health                       | Health check e versão           |
| POST   | /api/v1/send                  | Executar requisição             |
| GET    | /api/v1/history               | Listar/buscar histórico         |
| DELETE | /api/v1/history[/{id}]        | Remover linha / limpar          |
| GET    | /api/v1/collections           | Listar coleções                 |
| POST   | /api/v1/collections           | Criar coleção                   |
| DELETE | /api/v1/collections/{id}      | Remover coleção                 |
| GET    | /api/v1/saved                 | Listar requisições salvas       |
| POST   | /api/v1/saved                 | Salvar requisição               |
| GET    | /api/v1/saved/{id}            | Detalhes                        |
| DELETE | /api/v1/saved/{id}            | Remover                         |
| GET    | /api/v1/preferences           | Listar preferências             |
| PUT    | /api/v1/preferences/{key}     | Gravar preferência              |

## Uso:

```python
from golem.api import create_app

app = create_app()
# ou via CLI: golem serve
```
"""

from .app import create_app
from .config import APIConfig

__all__ = [
    "create_app",
    "APIConfig",
]

"""
================================================================================
PONTO DE ENTRADA DO GOLEM
================================================================================

Permite executar o Golem como módulo, sem o script `golem` instalado.

## Uso:

```bash
python -m golem.main send https://httpbin.org/get
python -m golem history --search users
```

## Arquitetura:

```
main.py (este) -> cli/main.py -> recorder.py -> runner/execute.py -> httpx
                              -> storage/sqlite.py -> SQLite
```
"""

from __future__ import annotations

from .cli.main import main

if __name__ == "__main__":
    main()

"""
================================================================================
Reader/Writer Lock
================================================================================

Lock compartilhado/exclusivo usado pelo `SQLiteStore` em volta da única
conexão com o banco.

- Leitores entram juntos enquanto não houver escritor ativo ou esperando
- Escritores entram sozinhos
- Escritores esperando têm preferência sobre novos leitores

## Uso:

```python
lock = ReadWriteLock()

with lock.read():
    ...  # várias threads ao mesmo tempo

with lock.write():
    ...  # uma thread por vez, sem leitores
```
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Generator


class ReadWriteLock:
    """Lock com caminho compartilhado (leitura) e exclusivo (escrita)."""

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._waiting_writers = 0

    def acquire_read(self) -> None:
        with self._cond:
            while self._writer or self._waiting_writers:
                self._cond.wait()
            self._readers += 1

    def release_read(self) -> None:
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self) -> None:
        with self._cond:
            self._waiting_writers += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._waiting_writers -= 1
            self._writer = True

    def release_write(self) -> None:
        with self._cond:
            self._writer = False
            self._cond.notify_all()

    @contextmanager
    def read(self) -> Generator[None, None, None]:
        """Context manager para o caminho compartilhado."""
        self.acquire_read()
        try:
            yield
        finally:
            self.release_read()

    @contextmanager
    def write(self) -> Generator[None, None, None]:
        """Context manager para o caminho exclusivo."""
        self.acquire_write()
        try:
            yield
        finally:
            self.release_write()

"""
Golem — cliente para testes de APIs HTTP.

Executa requisições, guarda um histórico pesquisável e coleções de
requisições reutilizáveis num arquivo SQLite local.
"""

__version__ = "0.1.0"

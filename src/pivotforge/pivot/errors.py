"""
Exceções do gerador de pivot e do runner em lote.

Taxonomia
---------
- SchemaError: falha na fase de descoberta (tabela sem colunas, identificadores
  inválidos, colunas de ordenação desconhecidas).
- ExecutionError: qualquer falha devolvida pelo engine (metadados, contagem,
  execução do DDL gerado).

O aviso de truncamento (tabela com mais linhas que `max_rows`) NÃO é exceção:
vai como comentário no topo do SQL gerado.
"""

from __future__ import annotations


class PivotError(Exception):
    """Base de todas as falhas do pivot."""


class SchemaError(PivotError):
    """Descoberta de schema falhou (ex.: nenhuma coluna encontrada)."""


class ExecutionError(PivotError):
    """O engine relacional falhou ao consultar metadados ou executar SQL."""

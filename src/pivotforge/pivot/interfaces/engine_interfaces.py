"""
Interfaces do engine relacional usadas pelo gerador e pelo runner em lote.
Define o contrato mínimo que o ambiente hospedeiro precisa fornecer.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Any, List


class MetadataReader(ABC):
    """
    Contrato de leitura de metadados (catálogo + contagem).

    Implementações devem:
    - tratar o nome da tabela de forma case-insensitive;
    - devolver lista vazia quando a tabela não existir (o gerador converte
      isso em SchemaError);
    - propagar falhas do engine como ExecutionError.
    """

    @abstractmethod
    def list_columns(self, table: str) -> List[str]:
        """
        Lista as colunas da tabela, na ordem do catálogo.

        Parâmetros
        - table: nome da tabela (1 a 3 partes).

        Retorno
        - list[str]: nomes de coluna (vazia se a tabela não existir).
        """
        raise NotImplementedError

    @abstractmethod
    def count_rows(self, table: str) -> int:
        """Total de linhas da tabela (full scan ou metadado)."""
        raise NotImplementedError


class StatementExecutor(ABC):
    """Executa um statement SQL de forma síncrona (request, bloqueio, resposta)."""

    @abstractmethod
    def execute(self, sql: str) -> Any:
        """
        Executa `sql` e devolve o resultado do engine.

        Exceptions
        - ExecutionError: qualquer falha reportada pelo engine.
        """
        raise NotImplementedError

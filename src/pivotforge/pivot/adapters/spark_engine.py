"""
Implementações Spark das interfaces do engine.

- SparkCatalogReader: colunas via resolução do próprio Spark (spark.table),
  funciona com tabelas UC, Hive e views temporárias.
- InformationSchemaReader: colunas via <catalog>.information_schema.columns
  (Unity Catalog), comparando o nome em caixa alta.
- SparkStatementExecutor: spark.sql(...) síncrono.

Qualquer exceção do Spark vira ExecutionError (encadeada com `from`).
"""

from __future__ import annotations
from typing import List, Optional

from pyspark.errors import AnalysisException
from pyspark.sql import DataFrame, SparkSession

from pivotforge.pivot.errors import ExecutionError
from pivotforge.pivot.interfaces.engine_interfaces import MetadataReader, StatementExecutor
from pivotforge.pivot.utils.identifiers import quote_ident, quote_table, split_table_name, sql_literal


def _is_table_not_found(err: AnalysisException) -> bool:
    """Só a tabela/view ausente; schema ou catálogo ausente é erro real."""
    if err.getErrorClass() == "TABLE_OR_VIEW_NOT_FOUND":
        return True
    return "[TABLE_OR_VIEW_NOT_FOUND]" in str(err)


class _SparkCountMixin:
    spark: SparkSession

    def count_rows(self, table: str) -> int:
        """SELECT COUNT(*) na tabela (nome com quoting)."""
        sql = f"SELECT COUNT(*) AS row_count FROM {quote_table(table)}"
        try:
            return int(self.spark.sql(sql).first()[0])
        except Exception as e:
            raise ExecutionError(f"Falha ao contar linhas de '{table}': {e}") from e


class SparkCatalogReader(_SparkCountMixin, MetadataReader):
    """
    Lê colunas resolvendo a tabela no SparkSession.

    O resolver do Spark é case-insensitive (spark.sql.caseSensitive=false),
    então "ORDERS" e "orders" apontam para a mesma tabela.
    """

    def __init__(self, spark: SparkSession) -> None:
        self.spark = spark

    def list_columns(self, table: str) -> List[str]:
        try:
            return list(self.spark.table(quote_table(table)).columns)
        except AnalysisException as e:
            if _is_table_not_found(e):
                return []
            raise ExecutionError(f"Falha ao ler colunas de '{table}': {e}") from e
        except Exception as e:
            raise ExecutionError(f"Falha ao ler colunas de '{table}': {e}") from e


class InformationSchemaReader(_SparkCountMixin, MetadataReader):
    """
    Lê colunas do information_schema do Unity Catalog.

    Resolução do catálogo
    - catalog.schema.table: usa o catálogo informado e filtra pelo schema.
    - schema.table: catálogo corrente, filtra pelo schema.
    - table: catálogo corrente, qualquer schema (só pelo nome da tabela).

    A comparação é feita com upper() dos dois lados.
    """

    def __init__(self, spark: SparkSession) -> None:
        self.spark = spark

    def _columns_query(self, table: str) -> str:
        parts = split_table_name(table)
        catalog: Optional[str] = parts[0] if len(parts) == 3 else None
        schema: Optional[str] = parts[-2] if len(parts) >= 2 else None
        tbl = parts[-1]

        source = "information_schema.columns"
        if catalog:
            source = f"{quote_ident(catalog)}.{source}"

        where = [f"upper(table_name) = {sql_literal(tbl.upper())}"]
        if schema:
            where.append(f"upper(table_schema) = {sql_literal(schema.upper())}")

        return (
            f"SELECT column_name FROM {source} "
            f"WHERE {' AND '.join(where)} "
            f"ORDER BY ordinal_position"
        )

    def list_columns(self, table: str) -> List[str]:
        sql = self._columns_query(table)
        try:
            return [row[0] for row in self.spark.sql(sql).collect()]
        except Exception as e:
            raise ExecutionError(f"Falha ao ler colunas de '{table}': {e}") from e


class SparkStatementExecutor(StatementExecutor):
    """Executa o DDL gerado com spark.sql (DDL é avaliado de forma eager)."""

    def __init__(self, spark: SparkSession) -> None:
        self.spark = spark

    def execute(self, sql: str) -> DataFrame:
        try:
            return self.spark.sql(sql)
        except Exception as e:
            raise ExecutionError(str(e)) from e

"""
Gerador do SQL de transposição (pivot) de uma tabela.

Colunas da origem viram linhas; linhas da origem (até `max_rows`) viram
colunas row_1..row_N. O SQL é um único CREATE OR REPLACE ... AS com quatro
CTEs: numeração -> limite -> unpivot (STACK) -> pivot (MAX(CASE ...)).

Numeração
---------
Sem `order_by`, as linhas são numeradas numa ordem arbitrária definida pelo
engine (monotonically_increasing_id); duas execuções podem atribuir linhas a
colunas diferentes. Quem precisa de atribuição estável informa `order_by`
(ou ordena a origem antes).

max_rows = 0
------------
Gera um destino só com `col_name` e nenhuma linha. É válido (e inútil);
não tratamos como caso especial.
"""

from __future__ import annotations
from typing import Callable, Optional, Sequence

from pivotforge.pivot.domain.results import PivotPlan, effective_row_count
from pivotforge.pivot.domain.types import ColumnName, ObjectKind, TableName
from pivotforge.pivot.errors import SchemaError
from pivotforge.pivot.interfaces.engine_interfaces import MetadataReader
from pivotforge.pivot.utils.identifiers import (
    pivoted_name,
    quote_ident,
    quote_table,
    split_table_name,
    sql_literal,
)

ROW_NUM_COL = "_pivot_row_num"
OBJECT_KINDS = ("TABLE", "VIEW", "TEMPORARY VIEW")


def truncation_advisory(table: str, row_count: int, max_rows: int) -> Optional[str]:
    """Mensagem de truncamento, ou None se a tabela cabe no limite."""
    if row_count <= max_rows:
        return None
    return (
        f"Warning: Table '{table}' has {row_count} rows, but only {max_rows} "
        f"will be pivoted due to max_rows limit."
    )


def build_pivot_sql(
    source: str,
    destination: str,
    columns: Sequence[str],
    max_rows: int,
    effective_rows: int,
    *,
    order_by: Optional[Sequence[str]] = None,
    object_kind: ObjectKind = "TABLE",
) -> str:
    """
    Monta o statement de pivot a partir do snapshot de colunas.

    Parâmetros
    ----------
    source, destination : str
        Nomes já com quoting.
    columns : Sequence[str]
        Colunas da origem (sem quoting); cada uma vira uma linha do destino.
    max_rows : int
        Filtro da CTE limited_rows.
    effective_rows : int
        Quantidade de colunas row_N projetadas.
    order_by : Sequence[str] | None
        Colunas da numeração; None = ordem arbitrária do engine.
    object_kind : {"TABLE","VIEW","TEMPORARY VIEW"}
        Tipo do objeto criado.
    """
    if order_by:
        order_clause = ", ".join(quote_ident(c) for c in order_by)
    else:
        order_clause = "monotonically_increasing_id()"

    stack_args = ",\n        ".join(
        f"{sql_literal(c)}, CAST({quote_ident(c)} AS STRING)" for c in columns
    )

    projections = ["col_name"] + [
        f"MAX(CASE WHEN {ROW_NUM_COL} = {i} THEN col_value END) AS row_{i}"
        for i in range(1, effective_rows + 1)
    ]
    select_list = ",\n    ".join(projections)

    return f"""CREATE OR REPLACE {object_kind} {destination} AS
WITH numbered_rows AS (
    SELECT
        ROW_NUMBER() OVER (ORDER BY {order_clause}) AS {ROW_NUM_COL},
        *
    FROM {source}
),
limited_rows AS (
    SELECT * FROM numbered_rows
    WHERE {ROW_NUM_COL} <= {max_rows}
),
unpivoted AS (
    SELECT
        limited_rows.{ROW_NUM_COL} AS {ROW_NUM_COL},
        kv.col_name AS col_name,
        kv.col_value AS col_value
    FROM limited_rows
    LATERAL VIEW STACK({len(columns)},
        {stack_args}
    ) kv AS col_name, col_value
)
SELECT
    {select_list}
FROM unpivoted
GROUP BY col_name
ORDER BY col_name"""


class PivotSqlGenerator:
    """
    Gera o SQL de pivot de uma tabela consultando metadados em tempo de execução.

    Parâmetros do construtor
    ------------------------
    reader : MetadataReader
        Fonte de colunas e contagem de linhas.
    suffix : str
        Sufixo do destino (default "_PIVOTED").
    object_kind : {"TABLE","VIEW","TEMPORARY VIEW"}
        Tipo do objeto destino.
    logger : Callable[[str], None] | None
        Recebe linhas de log (ex.: print em dev).
    """

    def __init__(
        self,
        reader: MetadataReader,
        *,
        suffix: str = "_PIVOTED",
        object_kind: ObjectKind = "TABLE",
        logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        if object_kind not in OBJECT_KINDS:
            raise ValueError(f"object_kind inválido: '{object_kind}' (esperado um de {OBJECT_KINDS})")
        self.reader = reader
        self.suffix = suffix
        self.object_kind = object_kind
        self.logger = logger

    def _destination(self, table: str) -> str:
        # view temporária não aceita nome qualificado
        if self.object_kind == "TEMPORARY VIEW":
            return quote_ident(split_table_name(table)[-1] + self.suffix)
        return pivoted_name(table, self.suffix)

    def _discover_columns(self, table: str) -> list[ColumnName]:
        columns = [ColumnName(c) for c in self.reader.list_columns(table)]
        if not columns:
            raise SchemaError(f"no columns found for table {table}")
        if ROW_NUM_COL in {c.lower() for c in columns}:
            raise SchemaError(f"Coluna reservada '{ROW_NUM_COL}' presente em '{table}'.")
        return columns

    def plan(
        self,
        table: TableName,
        max_rows: int,
        order_by: Optional[Sequence[str]] = None,
    ) -> PivotPlan:
        """
        Descobre colunas e contagem, aplica o limite e monta o SQL.

        Retorno
        -------
        PivotPlan

        Exceções
        --------
        ValueError
            max_rows negativo.
        SchemaError
            Nenhuma coluna encontrada, identificador inválido ou order_by
            com coluna inexistente.
        ExecutionError
            Propagada do MetadataReader (sem retry).
        """
        if max_rows < 0:
            raise ValueError(f"max_rows deve ser >= 0, recebido: {max_rows}")

        source = quote_table(table)
        destination = self._destination(table)

        columns = self._discover_columns(table)

        if order_by:
            known = {c.lower() for c in columns}
            missing = [c for c in order_by if c.lower() not in known]
            if missing:
                raise SchemaError(f"order_by com colunas inexistentes em '{table}': {missing}")

        row_count = int(self.reader.count_rows(table))
        effective = effective_row_count(row_count, max_rows)
        advisory = truncation_advisory(table, row_count, max_rows)

        if self.logger:
            self.logger(
                f"[pivot] table={table} columns={len(columns)} rows={row_count} "
                f"max_rows={max_rows} effective={effective}"
            )
            if advisory:
                self.logger(f"[pivot] {advisory}")

        sql = build_pivot_sql(
            source,
            destination,
            columns,
            max_rows,
            effective,
            order_by=order_by,
            object_kind=self.object_kind,
        )
        if advisory:
            sql = f"-- {advisory}\n{sql}"

        return PivotPlan(
            source=table,
            destination=destination,
            columns=tuple(columns),
            row_count=row_count,
            max_rows=max_rows,
            effective_row_count=effective,
            advisory=advisory,
            sql=sql,
        )

    def generate(
        self,
        table: TableName,
        max_rows: int,
        order_by: Optional[Sequence[str]] = None,
    ) -> str:
        """Atalho para plan(...).sql."""
        return self.plan(table, max_rows, order_by=order_by).sql

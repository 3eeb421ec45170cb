"""
Orquestrador do lote de pivot.

Para cada tabela, em ordem: gera o SQL, executa, registra o desfecho.
Falha de uma tabela vira um TableOutcome de erro e o lote segue; não há
rollback entre tabelas (um erro posterior não desfaz pivots já feitos).
"""

from __future__ import annotations
from typing import Callable, List, Optional, Sequence

from pivotforge.monitoring.azure_table_runs import PivotRunLogger
from pivotforge.pivot.domain.results import BatchResult, TableOutcome
from pivotforge.pivot.domain.types import TableName
from pivotforge.pivot.generator import PivotSqlGenerator
from pivotforge.pivot.interfaces.engine_interfaces import StatementExecutor


class PivotBatchOrchestrator:
    """
    Runner sequencial do pivot com isolamento por tabela.

    Parâmetros do construtor
    ------------------------
    generator : PivotSqlGenerator
        Gera o SQL (e consulta metadados) de cada tabela.
    executor : StatementExecutor
        Executa o DDL gerado.
    env : str
        Ambiente lógico (ex.: "dev", "hml", "prd"), usado no monitoramento.
    logger : Callable[[str], None] | None
        Recebe linhas de log (ex.: print em dev).
    """

    def __init__(
        self,
        generator: PivotSqlGenerator,
        executor: StatementExecutor,
        env: str = "dev",
        logger: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.generator = generator
        self.executor = executor
        self.env = env
        self.logger = logger

    # ---------------- passos do fluxo ---------------- #

    def pivot_one(
        self,
        table: TableName,
        max_rows: int,
        *,
        order_by: Optional[Sequence[str]] = None,
        dry_run: bool = False,
    ) -> TableOutcome:
        """
        Gera e (opcionalmente) executa o pivot de uma tabela.

        Nunca levanta exceção: qualquer erro de geração ou execução vira
        TableOutcome(status="error", detail=<mensagem>).
        """
        try:
            sql = self.generator.generate(table, max_rows, order_by=order_by)
        except Exception as e:
            if self.logger: self.logger(f"[pivot][ERROR] generate table={table}: {e}")
            return TableOutcome(table=table, status="error", detail=str(e))

        if dry_run:
            return TableOutcome(table=table, status="success", detail="planned", sql=sql)

        try:
            self.executor.execute(sql)
        except Exception as e:
            if self.logger: self.logger(f"[pivot][ERROR] execute table={table}: {e}")
            return TableOutcome(table=table, status="error", detail=str(e), sql=sql)

        if self.logger: self.logger(f"[pivot] ok table={table}")
        return TableOutcome(table=table, status="success", detail="pivoted", sql=sql)

    # ---------------- orquestração de alto nível ---------------- #

    def run_all(
        self,
        tables: Sequence[TableName],
        max_rows: int,
        *,
        order_by: Optional[Sequence[str]] = None,
        dry_run: bool = False,
    ) -> BatchResult:
        """
        Processa todas as tabelas, em ordem, e devolve o relatório completo.

        Parâmetros
        ----------
        tables : Sequence[str]
            Tabelas a pivotar.
        max_rows : int
            Limite de linhas (compartilhado por todas as tabelas).
        order_by : Sequence[str] | None
            Colunas de numeração aplicadas a todas as tabelas.
        dry_run : bool
            Se True, só gera o SQL (detail="planned").

        Retorno
        -------
        BatchResult
            Um TableOutcome por tabela, na ordem da entrada.
        """
        tables = list(tables)
        outcomes: List[TableOutcome] = []

        with PivotRunLogger(
            env=self.env,
            tables=tables,
            max_rows=max_rows,
            extra={"dry_run": dry_run},
        ) as runlog:
            for idx, table in enumerate(tables, 1):
                outcome = self.pivot_one(table, max_rows, order_by=order_by, dry_run=dry_run)
                outcomes.append(outcome)
                runlog.record_table(idx, table, outcome.status, outcome.detail)

            result = BatchResult(outcomes=tuple(outcomes))
            runlog.finish(
                status=result.run_status,
                tables_total=len(result),
                tables_ok=len(result.succeeded),
                tables_error=len(result.failed),
            )

        if self.logger:
            self.logger(
                f"[pivot] batch done: {len(result.succeeded)}/{len(result)} ok status={result.run_status}"
            )
        return result

"""
Fixtures compartilhadas:
- Spark local para os testes de integração/adapters
- FakeReader / FakeExecutor em memória (engine substituído)
- Monitoramento desligado (sem MON_TABLE_ACCOUNT)
"""

from __future__ import annotations
from typing import Dict, List, Optional

import pytest
from pyspark.sql import SparkSession

from pivotforge.pivot.errors import ExecutionError
from pivotforge.pivot.interfaces.engine_interfaces import MetadataReader, StatementExecutor


# ---------------------------------------------------------------------------
# Engine em memória
# ---------------------------------------------------------------------------
class FakeReader(MetadataReader):
    """
    Catálogo em memória: {nome_em_caixa_alta: (colunas, contagem)}.
    Tabelas em `broken` levantam ExecutionError na leitura de colunas.
    """

    def __init__(self, tables: Dict[str, tuple], broken: Optional[List[str]] = None):
        self.tables = {k.upper(): v for k, v in tables.items()}
        self.broken = {b.upper() for b in (broken or [])}
        self.calls: List[tuple] = []

    def list_columns(self, table):
        self.calls.append(("columns", table))
        if table.upper() in self.broken:
            raise ExecutionError(f"catalog offline for {table}")
        cols, _ = self.tables.get(table.upper(), ([], 0))
        return list(cols)

    def count_rows(self, table):
        self.calls.append(("count", table))
        _, count = self.tables[table.upper()]
        return count


class FakeExecutor(StatementExecutor):
    """Guarda os SQLs executados; falha quando o SQL contém algum trecho de `fail_on`."""

    def __init__(self, fail_on: Optional[List[str]] = None):
        self.fail_on = fail_on or []
        self.executed: List[str] = []

    def execute(self, sql):
        for marker in self.fail_on:
            if marker in sql:
                raise ExecutionError(f"TABLE_ALREADY_EXISTS: {marker}")
        self.executed.append(sql)
        return None


@pytest.fixture
def fake_reader():
    return FakeReader(
        {
            "T": (["x", "y"], 1500),
            "T1": (["id", "name", "amount"], 3),
            "T2": (["id"], 1),
            "EMPTY": ([], 0),
        }
    )


@pytest.fixture
def fake_executor():
    return FakeExecutor()


@pytest.fixture(autouse=True)
def _no_monitoring(monkeypatch):
    """Garante monitoramento no-op (sem chamadas Azure) em toda a suíte."""
    monkeypatch.delenv("MON_TABLE_ACCOUNT", raising=False)


# ---------------------------------------------------------------------------
# Spark
# ---------------------------------------------------------------------------
@pytest.fixture(scope="session")
def spark():
    """
    SparkSession local para testes.
    """
    spark = (
        SparkSession.builder
        .appName("pivotforge-tests")
        .master("local[2]")
        .config("spark.ui.showConsoleProgress", "false")
        .config("spark.sql.session.timeZone", "UTC")
        .config("spark.sql.shuffle.partitions", "1")
        .getOrCreate()
    )
    yield spark
    spark.stop()


@pytest.fixture
def make_reader():
    """Factory: make_reader({"A": (["c"], 1)}, broken=["B"])."""
    return FakeReader


@pytest.fixture
def make_executor():
    """Factory: make_executor(fail_on=["`B_PIVOTED`"])."""
    return FakeExecutor

"""
Módulo: test_azure_table_runs
Finalidade: validar o PivotRunLogger:
 - no-op sem MON_TABLE_ACCOUNT
 - entidades de run e de tabela enviadas ao Table Storage (cliente falso)
"""

import pivotforge.monitoring.azure_table_runs as mod
from pivotforge.monitoring.azure_table_runs import PivotRunLogger


def test_noop_sem_env():
    with PivotRunLogger(env="dev", tables=["a"], max_rows=10) as runlog:
        runlog.record_table(1, "a", "success", "pivoted")
        runlog.finish(status="ok")
    assert runlog._tc is None


class _FakeTableClient:
    def __init__(self):
        self.entities = []
    def upsert_entity(self, mode, entity):
        self.entities.append(dict(entity))


def test_registra_run_e_tabelas(monkeypatch):
    """Propósito: running -> tabela -> fechamento com status e métricas."""
    tc = _FakeTableClient()
    monkeypatch.setattr(mod, "_table_client", lambda: tc, raising=True)

    with PivotRunLogger(env="prd", tables=["a", "b"], max_rows=5, run_id="r1") as runlog:
        runlog.record_table(1, "a", "success", "pivoted")
        runlog.record_table(2, "b", "error", "boom")
        runlog.finish(status="partial", tables_total=2, tables_ok=1, tables_error=1)

    first, t1, t2, last = tc.entities
    assert first["status"] == "running" and first["RowKey"] == "r1"
    assert first["PartitionKey"].startswith("prd|pivot|")
    assert t1["RowKey"] == "r1|0001" and t1["status"] == "success"
    assert t2["RowKey"] == "r1|0002" and t2["detail"] == "boom"
    assert last["status"] == "partial"
    assert last["tables_error"] == 1
    assert last["duration_ms"] >= 0
    # finish explícito: __exit__ não grava de novo
    assert len(tc.entities) == 4


def test_exit_com_excecao_marca_fail(monkeypatch):
    tc = _FakeTableClient()
    monkeypatch.setattr(mod, "_table_client", lambda: tc, raising=True)

    try:
        with PivotRunLogger(env="dev", tables=["a"], max_rows=1):
            raise RuntimeError("driver lost")
    except RuntimeError:
        pass

    assert tc.entities[-1]["status"] == "fail"
    assert "driver lost" in tc.entities[-1]["error_json"]


def test_table_client_desabilitado_sem_conta(monkeypatch):
    monkeypatch.setenv("MON_TABLE_ACCOUNT", "  ")
    assert mod._table_client() is None


def test_falhas_do_table_storage_nao_propagam(monkeypatch):
    """Propósito: cliente que não constrói ou upsert com erro viram entradas em `errors`, sem exceção."""
    from azure.core.exceptions import HttpResponseError

    def broken_client():
        raise HttpResponseError("auth failed")

    monkeypatch.setattr(mod, "_table_client", broken_client, raising=True)
    with PivotRunLogger(env="dev", tables=["a"], max_rows=1) as runlog:
        runlog.record_table(1, "a", "success", "pivoted")
        runlog.finish(status="ok")
    assert runlog._tc is None
    assert runlog.errors and "auth failed" in runlog.errors[0]

    class ThrottledClient:
        def upsert_entity(self, mode, entity):
            raise HttpResponseError("429 throttled")

    monkeypatch.setattr(mod, "_table_client", lambda: ThrottledClient(), raising=True)
    with PivotRunLogger(env="dev", tables=["a"], max_rows=1, run_id="r9") as runlog:
        runlog.record_table(1, "a", "success", "pivoted")
        runlog.finish(status="ok")
    # running + tabela + fechamento
    assert len(runlog.errors) == 3
    assert runlog.errors[1].startswith("r9|0001: ")

"""
Monitoramento de execuções do pivot em Azure Table Storage.

Objetivo
--------
Registrar início/fim de um lote (run) e o desfecho de cada tabela,
usando autenticação AAD com SPN (DefaultAzureCredential).

Design
------
- Vira no-op quando MON_TABLE_ACCOUNT não está definido (CI / local).
- Best-effort: falha do Table Storage (credencial, throttling, rede) nunca
  interrompe o lote; o erro fica em `errors` e o run segue.
- PartitionKey por env/pipeline/dia; RowKey = run_id (lote) ou
  run_id|NNNN (tabela NNNN do lote).
- Upsert idempotente por (PartitionKey, RowKey).

ENVs esperadas
--------------
- AZURE_CLIENT_ID / AZURE_TENANT_ID / AZURE_CLIENT_SECRET
- MON_TABLE_ACCOUNT   -> nome da Storage Account
- MON_TABLE_NAME      -> nome da tabela (default 'pivot_runs') [opcional]
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
import json
import os
import uuid

from azure.core.exceptions import ResourceExistsError
from azure.data.tables import TableClient, TableServiceClient, UpdateMode
from azure.identity import DefaultAzureCredential

_MAX_PROP = 32000


def _iso_now() -> str:
    """Timestamp atual em ISO-8601 UTC (com 'Z')."""
    return datetime.now(tz=timezone.utc).isoformat().replace("+00:00", "Z")


def _yyyymmdd(ts: Optional[datetime] = None) -> str:
    ts = ts or datetime.now(tz=timezone.utc)
    return ts.strftime("%Y%m%d")


def _enabled() -> bool:
    """Monitoramento só roda com MON_TABLE_ACCOUNT definido."""
    return bool(os.getenv("MON_TABLE_ACCOUNT", "").strip())


def _table_client() -> Optional[TableClient]:
    """
    Constrói um TableClient para a tabela de runs.

    Retorna
    -------
    TableClient | None
        None quando desabilitado (no-op).
    """
    if not _enabled():
        return None

    account = os.environ["MON_TABLE_ACCOUNT"].strip()
    table = os.getenv("MON_TABLE_NAME", "pivot_runs").strip() or "pivot_runs"
    endpoint = f"https://{account}.table.core.windows.net"

    svc = TableServiceClient(endpoint=endpoint, credential=DefaultAzureCredential())
    try:
        svc.create_table(table_name=table)
    except ResourceExistsError:
        pass
    return svc.get_table_client(table_name=table)


def _partition_key(env: str, pipeline: str, ts: Optional[datetime] = None) -> str:
    """PartitionKey no formato "{env}|{pipeline}|{yyyymmdd}"."""
    return f"{env}|{pipeline}|{_yyyymmdd(ts)}"


def _clip(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    return text[:_MAX_PROP]


@dataclass
class PivotRunLogger:
    """
    Context manager para registrar um lote de pivot.

    Atributos
    ---------
    env : str
        Ambiente lógico (ex.: dev|hml|prd).
    tables : list[str]
        Tabelas pedidas no lote.
    max_rows : int
        Limite de linhas usado no lote.
    pipeline : str
        Nome do pipeline (default "pivot").
    run_id : str
        Identificador do lote (UUID4 quando não informado).
    extra : dict
        Propriedades adicionais curtas (serializadas em JSON).
    """

    env: str
    tables: List[str]
    max_rows: int
    pipeline: str = "pivot"
    run_id: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    _tc: Optional[TableClient] = field(init=False, default=None, repr=False)
    _start_iso: str = field(init=False, default="", repr=False)
    _finished: bool = field(init=False, default=False, repr=False)
    errors: List[str] = field(init=False, default_factory=list, repr=False)

    def __post_init__(self) -> None:
        self.run_id = self.run_id or uuid.uuid4().hex
        try:
            self._tc = _table_client()
        except Exception as e:
            # sem cliente = no-op
            self.errors.append(f"table_client: {e}")
            self._tc = None
        self._start_iso = _iso_now()

    # ---------- API pública ----------

    def __enter__(self) -> "PivotRunLogger":
        self._upsert_run(status="running", ts_end=None, duration_ms=None, error_json=None)
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """Fecha o run se o chamador não chamou finish()."""
        if self._finished:
            return
        status = "ok" if exc_type is None else "fail"
        self.finish(status=status, error_json=(str(exc) if exc else None))

    def record_table(self, index: int, table: str, status: str, detail: str) -> None:
        """
        Registra o desfecho de uma tabela do lote.

        Parâmetros
        ----------
        index : int
            Posição da tabela na entrada (1-based).
        table : str
            Nome da tabela.
        status : str
            'success' | 'error'
        detail : str
            'pivoted' / 'planned' ou mensagem de erro.
        """
        self._safe_upsert({
            "PartitionKey": _partition_key(self.env, self.pipeline),
            "RowKey": f"{self.run_id}|{index:04d}",
            "run_id": self.run_id,
            "table": table,
            "status": status,
            "detail": _clip(detail),
            "ts": _iso_now(),
        })

    def finish(self, status: str = "ok", *, error_json: Optional[str] = None, **metrics) -> None:
        """
        Conclui o run atualizando ts_end, duração e métricas opcionais.

        Parâmetros
        ----------
        status : str
            'ok' | 'fail' | 'partial'
        error_json : str | None
            Mensagem/resumo de erro quando falho.
        metrics : dict
            Ex.: tables_total=..., tables_ok=..., tables_error=...
        """
        ts_end = _iso_now()
        start = datetime.fromisoformat(self._start_iso.replace("Z", "+00:00"))
        end = datetime.fromisoformat(ts_end.replace("Z", "+00:00"))
        duration_ms = max(0, int((end - start).total_seconds() * 1000))
        self._upsert_run(
            status=status,
            ts_end=ts_end,
            duration_ms=duration_ms,
            error_json=error_json,
            **metrics,
        )
        self._finished = True

    # ---------- internos ----------

    def _upsert_run(
        self,
        *,
        status: str,
        ts_end: Optional[str],
        duration_ms: Optional[int],
        error_json: Optional[str],
        **metrics,
    ) -> None:
        if not self._tc:
            return

        entity: Dict[str, Any] = {
            "PartitionKey": _partition_key(self.env, self.pipeline),
            "RowKey": self.run_id,
            "pipeline": self.pipeline,
            "tables_json": _clip(json.dumps(self.tables, ensure_ascii=False)),
            "max_rows": self.max_rows,
            "status": status,
            "ts_start": self._start_iso,
            "ts_end": ts_end,
            "duration_ms": duration_ms,
        }
        if self.extra:
            entity["extra_json"] = _clip(json.dumps(self.extra, ensure_ascii=False))
        entity.update(metrics)
        if error_json:
            entity["error_json"] = _clip(error_json)

        self._safe_upsert(entity)

    def _safe_upsert(self, entity: Dict[str, Any]) -> None:
        """Upsert no Table Storage; falhas são guardadas em `errors`, nunca propagadas."""
        if not self._tc:
            return
        try:
            self._tc.upsert_entity(mode=UpdateMode.MERGE, entity=entity)
        except Exception as e:
            self.errors.append(f"{entity.get('RowKey')}: {e}")

"""
Modelos tipados do pivot: plano de geração e resultado do lote.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pivotforge.pivot.domain.types import ColumnName, OutcomeStatus, TableName


def effective_row_count(row_count: int, max_rows: int) -> int:
    """Quantidade de linhas da origem que viram colunas no destino."""
    return min(row_count, max_rows)


@dataclass(frozen=True)
class PivotPlan:
    """
    Tudo o que o gerador decidiu para uma tabela.

    Parâmetros
    ----------
    source : str
        Tabela de origem (como informada pelo chamador).
    destination : str
        Objeto destino, já com quoting (ex.: `sales`.`orders_PIVOTED`).
    columns : tuple[str, ...]
        Snapshot das colunas descobertas (não é revalidado na execução).
    row_count : int
        Total de linhas da origem no momento da geração.
    max_rows : int
        Limite pedido pelo chamador.
    effective_row_count : int
        min(row_count, max_rows) = número de colunas row_N geradas.
    advisory : str | None
        Aviso de truncamento (None quando a tabela cabe no limite).
    sql : str
        Statement final (aviso como comentário no topo, quando houver).
    """
    source: TableName
    destination: str
    columns: Tuple[ColumnName, ...]
    row_count: int
    max_rows: int
    effective_row_count: int
    advisory: Optional[str]
    sql: str

    @property
    def truncated(self) -> bool:
        return self.advisory is not None

    def as_dict(self) -> Dict[str, Any]:
        """Serializa o plano em dicionário simples (útil para logs e outputs)."""
        return {
            "source": self.source,
            "destination": self.destination,
            "columns": list(self.columns),
            "row_count": self.row_count,
            "max_rows": self.max_rows,
            "effective_row_count": self.effective_row_count,
            "advisory": self.advisory,
        }


@dataclass(frozen=True)
class TableOutcome:
    """
    Resultado de uma tabela dentro do lote.

    Parâmetros
    ----------
    table : str
        Tabela como informada na entrada.
    status : {"success","error"}
        Desfecho da tabela.
    detail : str
        "pivoted"/"planned" no sucesso; mensagem do erro na falha.
    sql : str | None
        SQL gerado (None quando a geração falhou).
    """
    table: TableName
    status: OutcomeStatus
    detail: str
    sql: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "success"

    def as_line(self) -> str:
        if self.ok:
            return f"Successfully pivoted table: {self.table}"
        return f"Error pivoting table '{self.table}': {self.detail}"


@dataclass(frozen=True)
class BatchResult:
    """
    Relatório ordenado do lote: um TableOutcome por tabela pedida,
    na mesma ordem da entrada.
    """
    outcomes: Tuple[TableOutcome, ...] = field(default_factory=tuple)

    def __iter__(self):
        return iter(self.outcomes)

    def __len__(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> List[TableOutcome]:
        return [o for o in self.outcomes if o.ok]

    @property
    def failed(self) -> List[TableOutcome]:
        return [o for o in self.outcomes if not o.ok]

    @property
    def run_status(self) -> str:
        """'ok' | 'partial' | 'fail' (vocabulário do PipelineRunLogger)."""
        if not self.failed:
            return "ok"
        if self.succeeded:
            return "partial"
        return "fail"

    def as_text(self) -> str:
        """Uma linha legível por tabela, separadas por quebra de linha."""
        return "\n".join(o.as_line() for o in self.outcomes)

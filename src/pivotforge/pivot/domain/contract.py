"""
Contrato YAML do lote de pivot.

Exemplo
-------
version: "1.0"
tables: [sales.orders, sales.customers]
max_rows: 1000
order_by: [id]          # opcional, ordem determinística das colunas row_N
object_kind: TABLE      # TABLE | VIEW | TEMPORARY VIEW
dry_run: false
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from pivotforge.pivot.domain.types import ColumnName, ObjectKind, TableName


class PivotBatchYaml(BaseModel):
    """
    Contrato completo do lote.

    Atributos
    ----------
    version : str
        Versão do contrato (suporta apenas 1.x).
    tables : list[str]
        Tabelas a pivotar, na ordem de processamento.
    max_rows : int | None
        Limite de linhas por tabela; None usa o default de Settings.
    order_by : list[str] | None
        Colunas para numeração determinística das linhas.
    object_kind : {"TABLE","VIEW","TEMPORARY VIEW"} | None
        Tipo do objeto destino; None usa o default de Settings.
    dry_run : bool
        Se True, apenas gera o SQL (não executa).

    Regras
    ------
    • extra="forbid": rejeita campos não declarados no YAML.
    • tables: não vazia e sem nomes em branco.
    """
    model_config = ConfigDict(extra="forbid")

    version: str
    tables: List[TableName]
    max_rows: Optional[int] = Field(default=None, ge=0)
    order_by: Optional[List[ColumnName]] = None
    object_kind: Optional[ObjectKind] = None
    dry_run: bool = False

    @field_validator("version")
    @classmethod
    def v1_only(cls, v: str) -> str:
        """Garante que a versão principal do contrato seja 1.x."""
        if v.split(".")[0] != "1":
            raise ValueError("Somente versão 1.x suportada por enquanto.")
        return v

    @field_validator("tables")
    @classmethod
    def tables_not_blank(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("tables deve conter ao menos uma tabela")
        cleaned = [t.strip() for t in v]
        if any(not t for t in cleaned):
            raise ValueError("tables contém nome de tabela vazio")
        return cleaned

"""
Entrada CLI do pivot em lote.

Uso
  pivotforge --contract_path batch.yaml
  pivotforge --tables sales.orders,sales.customers --max_rows 500 [--dry_run]

Imprime uma linha por tabela e sai com código 1 se alguma falhou.
"""

from __future__ import annotations
import argparse
import sys
import yaml
from pyspark.sql import SparkSession
from pivotforge.pivot.domain import PivotBatchYaml
from pivotforge.pivot.application.pipeline import run_batch

def _parse_args(argv=None):
    p = argparse.ArgumentParser(description="Pivot (transposição) de tabelas em lote")
    src = p.add_mutually_exclusive_group(required=True)
    src.add_argument("--contract_path", help="Caminho do contrato YAML do lote")
    src.add_argument("--tables", help="Tabelas separadas por vírgula")
    p.add_argument("--max_rows", type=int, default=None, help="Limite de linhas por tabela")
    p.add_argument("--dry_run", action="store_true", help="Só gera o SQL, não executa")
    return p.parse_args(argv)

def load_contract(args) -> PivotBatchYaml:
    """Contrato a partir do YAML ou dos argumentos soltos (--tables/--max_rows)."""
    if args.contract_path:
        with open(args.contract_path, "r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
        if args.max_rows is not None:
            raw["max_rows"] = args.max_rows
        if args.dry_run:
            raw["dry_run"] = True
        return PivotBatchYaml(**raw)
    return PivotBatchYaml(
        version="1.0",
        tables=[t for t in args.tables.split(",") if t.strip()],
        max_rows=args.max_rows,
        dry_run=args.dry_run,
    )

def main(argv=None) -> int:
    args = _parse_args(argv)
    cfg = load_contract(args)
    spark = SparkSession.getActiveSession() or SparkSession.builder.getOrCreate()
    result = run_batch(spark, cfg)
    print(result.as_text())
    return 1 if result.failed else 0

if __name__ == "__main__":
    sys.exit(main())

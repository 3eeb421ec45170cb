"""
Montagem do pivot em Spark (contrato -> reader/executor -> lote).
"""

from __future__ import annotations
from pyspark.sql import SparkSession
from pivotforge.pivot.adapters.spark_engine import (
    InformationSchemaReader,
    SparkCatalogReader,
    SparkStatementExecutor,
)
from pivotforge.pivot.application.settings import SETTINGS
from pivotforge.pivot.domain.contract import PivotBatchYaml
from pivotforge.pivot.domain.results import BatchResult
from pivotforge.pivot.generator import PivotSqlGenerator
from pivotforge.pivot.interfaces.engine_interfaces import MetadataReader
from pivotforge.pivot.orchestrator import PivotBatchOrchestrator


def make_reader(spark: SparkSession, source: str) -> MetadataReader:
    """Escolhe o MetadataReader por nome ('catalog' | 'information_schema')."""
    if source == "catalog":
        return SparkCatalogReader(spark)
    if source == "information_schema":
        return InformationSchemaReader(spark)
    raise ValueError(f"PIVOT_METADATA inválido: '{source}' (esperado catalog|information_schema)")


def run_batch(spark: SparkSession, cfg: PivotBatchYaml) -> BatchResult:
    """
    Executa o lote descrito por um contrato validado (PivotBatchYaml).
    Campos ausentes no contrato caem nos defaults de SETTINGS.
    """
    logger = (print if SETTINGS.env == "dev" else None)

    generator = PivotSqlGenerator(
        make_reader(spark, SETTINGS.metadata_source),
        suffix=SETTINGS.suffix,
        object_kind=cfg.object_kind or SETTINGS.object_kind,
        logger=logger,
    )
    orchestrator = PivotBatchOrchestrator(
        generator,
        SparkStatementExecutor(spark),
        env=SETTINGS.env,
        logger=logger,
    )

    max_rows = SETTINGS.max_rows if cfg.max_rows is None else cfg.max_rows
    return orchestrator.run_all(
        cfg.tables,
        max_rows,
        order_by=cfg.order_by,
        dry_run=cfg.dry_run,
    )

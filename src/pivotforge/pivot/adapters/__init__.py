from pivotforge.pivot.adapters.spark_engine import (
    InformationSchemaReader,
    SparkCatalogReader,
    SparkStatementExecutor,
)

__all__ = ["InformationSchemaReader", "SparkCatalogReader", "SparkStatementExecutor"]

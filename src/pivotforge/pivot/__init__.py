from pivotforge.pivot.errors import ExecutionError, PivotError, SchemaError
from pivotforge.pivot.generator import PivotSqlGenerator
from pivotforge.pivot.orchestrator import PivotBatchOrchestrator

__all__ = [
    "ExecutionError",
    "PivotError",
    "SchemaError",
    "PivotSqlGenerator",
    "PivotBatchOrchestrator",
]

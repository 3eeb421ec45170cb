from pivotforge.pivot.domain.contract import PivotBatchYaml
from pivotforge.pivot.domain.results import BatchResult, PivotPlan, TableOutcome, effective_row_count

__all__ = ["PivotBatchYaml", "BatchResult", "PivotPlan", "TableOutcome", "effective_row_count"]

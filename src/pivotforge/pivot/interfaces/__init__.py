from pivotforge.pivot.interfaces.engine_interfaces import MetadataReader, StatementExecutor

__all__ = ["MetadataReader", "StatementExecutor"]

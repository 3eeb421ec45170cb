"""
Configurações do pivot (defaults por ambiente).
"""

from __future__ import annotations
import os
from dataclasses import dataclass

@dataclass(frozen=True)
class Settings:
    env: str = os.getenv("ENV", "dev")
    max_rows: int = int(os.getenv("PIVOT_MAX_ROWS", "1000"))
    suffix: str = os.getenv("PIVOT_SUFFIX", "_PIVOTED")
    object_kind: str = os.getenv("PIVOT_OBJECT_KIND", "TABLE").upper()
    # catalog | information_schema
    metadata_source: str = os.getenv("PIVOT_METADATA", "catalog").lower()

SETTINGS = Settings()

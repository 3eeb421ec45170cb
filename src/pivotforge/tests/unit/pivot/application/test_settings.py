"""
Módulo: test_settings
Finalidade: validar leitura de defaults via variáveis de ambiente.
"""

import importlib


def test_settings_defaults(monkeypatch):
    for var in ("ENV", "PIVOT_MAX_ROWS", "PIVOT_SUFFIX", "PIVOT_OBJECT_KIND", "PIVOT_METADATA"):
        monkeypatch.delenv(var, raising=False)
    import pivotforge.pivot.application.settings as mod
    mod = importlib.reload(mod)

    s = mod.Settings()
    assert s.env == "dev"
    assert s.max_rows == 1000
    assert s.suffix == "_PIVOTED"
    assert s.object_kind == "TABLE"
    assert s.metadata_source == "catalog"


def test_settings_por_ambiente(monkeypatch):
    monkeypatch.setenv("ENV", "prd")
    monkeypatch.setenv("PIVOT_MAX_ROWS", "50")
    monkeypatch.setenv("PIVOT_OBJECT_KIND", "view")
    monkeypatch.setenv("PIVOT_METADATA", "INFORMATION_SCHEMA")
    import pivotforge.pivot.application.settings as mod
    mod = importlib.reload(mod)

    assert mod.SETTINGS.env == "prd"
    assert mod.SETTINGS.max_rows == 50
    assert mod.SETTINGS.object_kind == "VIEW"
    assert mod.SETTINGS.metadata_source == "information_schema"

    monkeypatch.undo()
    importlib.reload(mod)

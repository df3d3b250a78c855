from __future__ import annotations

import pytest

from lfa_diagnostics import EngineConfig, InventoryCatalog, load_default_catalog


@pytest.fixture
def catalog() -> InventoryCatalog:
    return load_default_catalog()


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture(autouse=True)
def clear_engine_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "LFA_DEFAULT_BANDWIDTH",
        "LFA_LOAD_WARNING_PERCENT",
        "LFA_LOAD_CRITICAL_PERCENT",
        "LFA_IMPACT_CRITICAL",
        "LFA_IMPACT_WARNING",
        "LFA_IMPACT_INFO",
        "LFA_WARNING_SCORE_THRESHOLD",
    ):
        monkeypatch.delenv(name, raising=False)

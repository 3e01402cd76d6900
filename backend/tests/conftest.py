"""Shared fixtures: keep every test away from real settings and .env files."""

import pytest

from wagerbook.config import LedgerConfig, get_settings


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    for var in ("WAGERBOOK_LOGFIRE_TOKEN", "WAGERBOOK_LOG_LEVEL", "WAGERBOOK_DATA_DIR"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def ledger_config() -> LedgerConfig:
    return LedgerConfig(house_rate=0.1)

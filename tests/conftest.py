"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from noteorganizer.api.dependencies import (
    get_data_path,
    get_processor,
    get_session,
    get_settings,
    get_state_store,
)
from noteorganizer.main import app


def clear_dependency_caches():
    for cached in (get_session, get_processor, get_state_store, get_data_path, get_settings):
        cached.cache_clear()


@pytest.fixture(autouse=True)
def isolated_data_path(tmp_path, monkeypatch):
    """Point every test at its own data directory with no API key configured."""
    data_path = tmp_path / "data"
    monkeypatch.setenv("NOTEORGANIZER_DATA_PATH", str(data_path))
    monkeypatch.delenv("NOTEORGANIZER_API_KEY", raising=False)
    monkeypatch.delenv("NOTEORGANIZER_SMART_MODE", raising=False)
    clear_dependency_caches()
    yield data_path
    clear_dependency_caches()


@pytest.fixture
def client():
    return TestClient(app)

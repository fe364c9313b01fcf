from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.main import app


@pytest.fixture(autouse=True)
def _mock_settings(monkeypatch):
    monkeypatch.setattr(settings, "use_mocks", True)
    monkeypatch.setattr(settings, "simulate_latency", False)
    monkeypatch.setattr(settings, "mock_seed", None)
    monkeypatch.setattr(settings, "assistant_chunk_delay_ms", 0)
    yield


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as c:
        yield c

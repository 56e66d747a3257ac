from __future__ import annotations

from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from feedback_service.analytics import AnalyticsClient
from feedback_service.app import app
from feedback_service.routes import get_analytics_client, get_file_storage
from feedback_service.storage import FileStorage


@pytest.fixture
def storage(tmp_path) -> FileStorage:
    return FileStorage(tmp_path / "uploads", max_bytes=1024, ttl_seconds=3600)


@pytest.fixture
def analytics_client() -> AnalyticsClient:
    return AnalyticsClient(api_key="TEST_KEY", api_url="http://llm.test/generateContent")


@pytest.fixture
def client(storage, analytics_client) -> Iterator[TestClient]:
    app.dependency_overrides[get_file_storage] = lambda: storage
    app.dependency_overrides[get_analytics_client] = lambda: analytics_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()

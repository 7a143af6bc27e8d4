from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from ideation.api.deps import get_orchestrator
from ideation.api.main import create_app


@pytest.fixture
def client():
    app = create_app()
    orchestrator = MagicMock()
    orchestrator.active_session_count = 2
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator
    return TestClient(app)


def test_health_check(client):
    response = client.get("/api/v1/health")
    assert response.status_code == 200
    assert response.json() == {
        "status": "healthy",
        "message": "Server Healthy",
        "active_sessions": 2,
    }


def test_correlation_header_echoed(client):
    response = client.get("/api/v1/health", headers={"X-Correlation-ID": "abc-123"})
    assert response.headers["X-Correlation-ID"] == "abc-123"


def test_correlation_header_generated(client):
    response = client.get("/api/v1/health")
    assert response.headers["X-Correlation-ID"]

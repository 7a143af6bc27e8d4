"""
Tests for the ideation session endpoints.

Route-to-status mapping runs against a mocked orchestrator; the turn
lifecycle runs against a real orchestrator with a scripted gateway.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ideation.api.deps import get_orchestrator
from ideation.api.routers.sessions import router as sessions_router
from ideation.application.services.session_orchestrator import TurnHandle
from ideation.core.cancellation import CancellationToken
from ideation.core.exceptions import (
    SessionAlreadyRunningError,
    SessionNotFoundError,
    ValidationError,
)
from ideation.models.session import IdeationMessage, IdeationSession, MessageRole


@pytest.fixture
def app():
    app = FastAPI()
    app.include_router(sessions_router)
    return app


@pytest.fixture
def mock_orchestrator():
    orchestrator = MagicMock()
    orchestrator.start_session = AsyncMock()
    orchestrator.get_session = AsyncMock()
    orchestrator.stop_session = AsyncMock()
    return orchestrator


@pytest.fixture
def client(app, mock_orchestrator):
    app.dependency_overrides[get_orchestrator] = lambda: mock_orchestrator
    return TestClient(app)


class TestRouteMapping:
    def test_start_session_created(self, client, mock_orchestrator):
        mock_orchestrator.start_session.return_value = IdeationSession(
            id="s1", project_path="/tmp/p"
        )

        response = client.post(
            "/ideation/sessions",
            json={"projectPath": "/tmp/p", "promptCategory": "security"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["id"] == "s1"
        assert data["projectPath"] == "/tmp/p"
        options = mock_orchestrator.start_session.call_args.args[1]
        assert options.prompt_category.value == "security"

    def test_start_session_bad_path(self, client, mock_orchestrator):
        mock_orchestrator.start_session.side_effect = ValidationError(
            "Project path does not exist", field="project_path"
        )

        response = client.post("/ideation/sessions", json={"projectPath": "/nope"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Project path does not exist"

    def test_start_session_requires_path(self, client):
        response = client.post("/ideation/sessions", json={})

        assert response.status_code == 422

    def test_get_session_not_found(self, client, mock_orchestrator):
        mock_orchestrator.get_session.return_value = None

        response = client.get("/ideation/sessions/s1", params={"project_path": "/tmp/p"})

        assert response.status_code == 404

    def test_get_session_invalid_id(self, client, mock_orchestrator):
        mock_orchestrator.get_session.side_effect = ValidationError(
            "Invalid session_id", field="session_id"
        )

        response = client.get("/ideation/sessions/bad~id", params={"project_path": "/tmp/p"})

        assert response.status_code == 400

    def test_send_message_accepted(self, client, mock_orchestrator):
        user_message = IdeationMessage(id="m1", role=MessageRole.USER, content="hi")
        token = CancellationToken()
        mock_orchestrator.start_turn.return_value = TurnHandle(
            session_id="s1", user_message=user_message, token=token, task=MagicMock()
        )

        response = client.post("/ideation/sessions/s1/messages", json={"message": "hi"})

        assert response.status_code == 202
        assert response.json() == {"sessionId": "s1", "messageId": "m1"}
        args = mock_orchestrator.start_turn.call_args.args
        assert args[0] == "s1"
        assert args[1] == "hi"
        assert args[2].model is None

    def test_send_message_unknown_session(self, client, mock_orchestrator):
        mock_orchestrator.start_turn.side_effect = SessionNotFoundError("s1")

        response = client.post("/ideation/sessions/s1/messages", json={"message": "hi"})

        assert response.status_code == 404

    def test_send_message_while_running(self, client, mock_orchestrator):
        mock_orchestrator.start_turn.side_effect = SessionAlreadyRunningError("s1")

        response = client.post("/ideation/sessions/s1/messages", json={"message": "hi"})

        assert response.status_code == 409
        assert response.json()["detail"] == "Session is already processing a message"

    def test_send_message_rejects_empty_text(self, client, mock_orchestrator):
        response = client.post("/ideation/sessions/s1/messages", json={"message": ""})

        assert response.status_code == 422
        mock_orchestrator.start_turn.assert_not_called()

    def test_stop_session(self, client, mock_orchestrator):
        response = client.post("/ideation/sessions/s1/stop")

        assert response.status_code == 204
        mock_orchestrator.stop_session.assert_awaited_once_with("s1")

    def test_running_flag(self, client, mock_orchestrator):
        mock_orchestrator.is_session_running.return_value = True

        response = client.get("/ideation/sessions/s1/running")

        assert response.status_code == 200
        assert response.json() == {"sessionId": "s1", "isRunning": True}


class TestTurnLifecycle:
    """End-to-end through the HTTP surface with a real orchestrator."""

    @pytest.fixture
    def live_client(self, app, make_orchestrator, make_gateway):
        orchestrator = make_orchestrator(make_gateway(hang=True))
        app.dependency_overrides[get_orchestrator] = lambda: orchestrator
        with TestClient(app) as client:
            yield client

    def test_create_then_get(self, live_client, project_dir):
        created = live_client.post(
            "/ideation/sessions", json={"projectPath": str(project_dir)}
        ).json()

        response = live_client.get(
            f"/ideation/sessions/{created['id']}",
            params={"project_path": str(project_dir)},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "active"
        assert data["messages"] == []
        assert data["isRunning"] is False

    def test_missing_project_dir(self, live_client, tmp_path):
        response = live_client.post(
            "/ideation/sessions", json={"projectPath": str(tmp_path / "missing")}
        )

        assert response.status_code == 400

    def test_second_turn_conflicts_until_stopped(self, live_client, project_dir):
        session_id = live_client.post(
            "/ideation/sessions", json={"projectPath": str(project_dir)}
        ).json()["id"]

        first = live_client.post(
            f"/ideation/sessions/{session_id}/messages", json={"message": "idea?"}
        )
        second = live_client.post(
            f"/ideation/sessions/{session_id}/messages", json={"message": "again"}
        )
        running = live_client.get(f"/ideation/sessions/{session_id}/running").json()

        assert first.status_code == 202
        assert second.status_code == 409
        assert running["isRunning"] is True

        assert live_client.post(f"/ideation/sessions/{session_id}/stop").status_code == 204

        running = live_client.get(f"/ideation/sessions/{session_id}/running").json()
        session = live_client.get(
            f"/ideation/sessions/{session_id}",
            params={"project_path": str(project_dir)},
        ).json()
        assert running["isRunning"] is False
        assert session["status"] == "completed"
        assert [m["role"] for m in session["messages"]] == ["user"]

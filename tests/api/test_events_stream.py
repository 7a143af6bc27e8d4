"""Tests for the ideation events WebSocket relay."""

from unittest.mock import patch

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from ideation.api.deps import get_orchestrator
from ideation.api.deps.dependencies import ServiceCache
from ideation.api.routers.events_stream import router as events_router
from ideation.api.routers.sessions import router as sessions_router


@pytest.fixture
def client(event_bus, orchestrator):
    app = FastAPI()
    app.include_router(sessions_router)
    app.include_router(events_router)
    app.dependency_overrides[get_orchestrator] = lambda: orchestrator

    cache = ServiceCache()
    cache._event_bus = event_bus
    cache._orchestrator = orchestrator

    with patch("ideation.api.routers.events_stream.get_service_cache", return_value=cache):
        with TestClient(app) as client:
            yield client


def test_connected_then_ping(client):
    with client.websocket_connect("/ws/ideation/events?session_id=s1") as ws:
        assert ws.receive_json() == {"event": "connected", "data": {"session_id": "s1"}}

        ws.send_json({"event": "ping"})
        assert ws.receive_json() == {"event": "pong"}


def test_invalid_json(client):
    with client.websocket_connect("/ws/ideation/events") as ws:
        ws.receive_json()

        ws.send_text("not json")

        reply = ws.receive_json()
        assert reply["event"] == "error"
        assert reply["data"]["code"] == "INVALID_JSON"


def test_relays_session_and_turn_events(client, project_dir):
    with client.websocket_connect("/ws/ideation/events") as ws:
        ws.receive_json()

        session_id = client.post(
            "/ideation/sessions", json={"projectPath": str(project_dir)}
        ).json()["id"]
        started = ws.receive_json()
        assert started["event"] == "ideation:session-started"
        assert started["data"]["session_id"] == session_id

        client.post(f"/ideation/sessions/{session_id}/messages", json={"message": "go"})

        received = [ws.receive_json() for _ in range(5)]
        assert {e["event"] for e in received} == {"ideation:stream"}
        assert [e["data"]["type"] for e in received] == [
            "message", "stream", "stream", "stream", "message-complete",
        ]
        assert received[-1]["data"]["content"] == "Hello there"

"""
WebSocket relay for ideation events.

Forwards event bus traffic to a connected client, optionally filtered to a
single session.

Routes: WS /ws/ideation/events?session_id=

Server sends:
    {"event": "connected", "data": {"session_id": "..." | null}}
    {"event": "ideation:session-started", "data": {...}}
    {"event": "ideation:session-ended", "data": {...}}
    {"event": "ideation:stream", "data": {"type": "message" | "stream" | ...}}
    {"event": "pong"}

Client sends:
    {"event": "ping"}

Dependencies: fastapi, ideation.core.event_bus
System role: WebSocket streaming API
"""

import asyncio
import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ideation.api.deps import get_service_cache
from ideation.core.event_bus import Subscription

logger = logging.getLogger(__name__)
router = APIRouter(tags=["streaming"])


async def _relay(websocket: WebSocket, subscription: Subscription) -> None:
    async for event in subscription:
        await websocket.send_json(event.to_dict())


async def _receive(websocket: WebSocket) -> None:
    while True:
        raw_data = await websocket.receive_text()
        try:
            data = json.loads(raw_data)
        except json.JSONDecodeError:
            await websocket.send_json({
                "event": "error",
                "data": {"code": "INVALID_JSON", "message": "Invalid JSON format"},
            })
            continue
        if isinstance(data, dict) and data.get("event") == "ping":
            await websocket.send_json({"event": "pong"})


@router.websocket("/ws/ideation/events")
async def websocket_events(
    websocket: WebSocket,
    session_id: str | None = None,
) -> None:
    """
    Stream ideation events to a client until it disconnects.

    Args:
        websocket: WebSocket connection
        session_id: Optional session filter from the query string
    """
    await websocket.accept()
    bus = get_service_cache().event_bus
    subscription = bus.subscribe(session_id=session_id)
    logger.info(
        "Event stream connected",
        extra={"session_id": session_id, "subscription_id": subscription.id},
    )

    await websocket.send_json({"event": "connected", "data": {"session_id": session_id}})

    relay_task = asyncio.create_task(_relay(websocket, subscription))
    receive_task = asyncio.create_task(_receive(websocket))
    try:
        done, _ = await asyncio.wait(
            {relay_task, receive_task},
            return_when=asyncio.FIRST_COMPLETED,
        )
        for task in done:
            exc = task.exception()
            if exc is not None and not isinstance(exc, WebSocketDisconnect):
                logger.error(
                    "Event stream failed",
                    extra={
                        "subscription_id": subscription.id,
                        "error_type": type(exc).__name__,
                        "error_msg": str(exc),
                    },
                )
    finally:
        relay_task.cancel()
        receive_task.cancel()
        await asyncio.gather(relay_task, receive_task, return_exceptions=True)
        subscription.close()
        logger.info(
            "Event stream disconnected",
            extra={"subscription_id": subscription.id, "dropped": subscription.dropped},
        )

"""
In-process event bus.

Publish/subscribe channel the orchestrator uses to announce session
lifecycle and streaming events. Emission is synchronous and never awaits a
subscriber: queued subscribers get events via put_nowait on a bounded queue
(dropped when full), listeners are plain callbacks whose failures are logged.

Dependencies: asyncio, ideation.models.events
System role: Fire-and-forget event delivery to UI relays and loggers
"""

import asyncio
import logging
import uuid
from collections.abc import Callable

from ideation.models.events import SessionEvent

logger = logging.getLogger(__name__)

EventListener = Callable[[SessionEvent], None]


class Subscription:
    """
    Queue-backed subscription to bus events.

    Iterate with `async for` or call `get()`. Close it (or use it as an async
    context manager) to stop receiving events.
    """

    def __init__(
        self,
        bus: "EventBus",
        session_id: str | None,
        maxsize: int,
    ) -> None:
        self.id = uuid.uuid4().hex
        self.session_id = session_id
        self.dropped = 0
        self._bus = bus
        self._queue: asyncio.Queue[SessionEvent] = asyncio.Queue(maxsize=maxsize)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def matches(self, event: SessionEvent) -> bool:
        """Whether this subscription wants the event."""
        return self.session_id is None or self.session_id == event.session_id

    def offer(self, event: SessionEvent) -> bool:
        """Enqueue without blocking. Returns False if the event was dropped."""
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            self.dropped += 1
            return False
        return True

    async def get(self) -> SessionEvent:
        """Wait for the next event."""
        return await self._queue.get()

    def get_nowait(self) -> SessionEvent:
        """Return a queued event or raise asyncio.QueueEmpty."""
        return self._queue.get_nowait()

    def pending(self) -> int:
        """Number of queued events."""
        return self._queue.qsize()

    def close(self) -> None:
        """Unsubscribe from the bus."""
        if not self._closed:
            self._closed = True
            self._bus.unsubscribe(self)

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> SessionEvent:
        if self._closed and self._queue.empty():
            raise StopAsyncIteration
        return await self._queue.get()

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()


class EventBus:
    """Publish/subscribe hub for session events."""

    def __init__(self, queue_size: int = 1000) -> None:
        """
        Initialize event bus.

        Args:
            queue_size: Default bound for subscriber queues
        """
        self._queue_size = queue_size
        self._subscriptions: dict[str, Subscription] = {}
        self._listeners: list[EventListener] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._subscriptions)

    def subscribe(
        self,
        session_id: str | None = None,
        maxsize: int | None = None,
    ) -> Subscription:
        """
        Create a queue subscription.

        Args:
            session_id: Only receive events for this session (None = all)
            maxsize: Queue bound, defaults to the bus setting

        Returns:
            Subscription: Async-iterable subscription
        """
        subscription = Subscription(self, session_id, maxsize or self._queue_size)
        self._subscriptions[subscription.id] = subscription
        logger.debug(
            "Event subscription added",
            extra={"subscription_id": subscription.id, "session_id": session_id},
        )
        return subscription

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription. Unknown subscriptions are ignored."""
        self._subscriptions.pop(subscription.id, None)

    def add_listener(self, listener: EventListener) -> None:
        """Register a synchronous callback invoked on every emit. Must not block."""
        self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        """Unregister a callback."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def emit(self, event: SessionEvent) -> None:
        """
        Deliver an event to all subscribers and listeners.

        Never blocks and never raises because of a subscriber.

        Args:
            event: Event to publish
        """
        for subscription in list(self._subscriptions.values()):
            if not subscription.matches(event):
                continue
            if not subscription.offer(event):
                logger.warning(
                    "Subscriber queue full, event dropped",
                    extra={
                        "subscription_id": subscription.id,
                        "session_id": event.session_id,
                        "event_type": event.type,
                        "dropped_total": subscription.dropped,
                    },
                )

        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logger.exception(
                    "Event listener failed",
                    extra={
                        "session_id": event.session_id,
                        "event_type": event.type,
                        "error_type": type(e).__name__,
                        "error_msg": str(e),
                    },
                )

"""
Cooperative cancellation for streaming turns.

A CancellationToken is created fresh for every turn and handed to both the
orchestrator's fragment loop and the provider gateway. Triggering it stops
consumption at the next suspension point instead of after the next
fragment arrives.

Dependencies: asyncio
System role: Turn cancellation primitive
"""

import asyncio
from collections.abc import AsyncIterable, AsyncIterator
from typing import TypeVar

from ideation.core.exceptions import TurnCancelledError

T = TypeVar("T")


class CancellationToken:
    """One-shot cancellation signal for a single turn."""

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None
        self._timer: asyncio.TimerHandle | None = None

    @property
    def is_cancelled(self) -> bool:
        """Whether cancel() has been called."""
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        """Reason passed to the first cancel() call."""
        return self._reason

    def cancel(self, reason: str = "cancelled") -> None:
        """
        Trigger cancellation. Later calls are ignored.

        Args:
            reason: Short label recorded for logging (e.g. "stopped", "timeout")
        """
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()
        self._clear_timer()

    def cancel_after(self, delay: float, reason: str = "timeout") -> None:
        """
        Schedule cancellation after a delay on the running event loop.

        Callers compose turn deadlines with this; the orchestrator itself
        never imposes one.

        Args:
            delay: Seconds until cancellation
            reason: Reason recorded when the deadline fires
        """
        if self._event.is_set():
            return
        self._clear_timer()
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(delay, self.cancel, reason)

    def raise_if_cancelled(self, session_id: str | None = None) -> None:
        """
        Raise TurnCancelledError if the token has fired.

        Raises:
            TurnCancelledError: If cancelled
        """
        if self._event.is_set():
            raise TurnCancelledError(session_id=session_id, reason=self._reason)

    async def wait(self) -> None:
        """Block until the token is cancelled."""
        await self._event.wait()

    def dispose(self) -> None:
        """Drop any pending deadline timer."""
        self._clear_timer()

    def _clear_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None


async def iterate_until_cancelled(
    source: AsyncIterable[T],
    token: CancellationToken,
    session_id: str | None = None,
) -> AsyncIterator[T]:
    """
    Re-yield items from an async iterable until the token fires.

    Each pending item is raced against the token, so a slow source is
    abandoned as soon as cancellation happens. The source is closed on exit.

    Args:
        source: Async iterable of fragments
        token: Cancellation token for the current turn
        session_id: Session id attached to the raised error

    Yields:
        Items from source, in order

    Raises:
        TurnCancelledError: When the token fires before the source is exhausted
    """
    iterator = aiter(source)
    cancel_waiter = asyncio.ensure_future(token.wait())
    pending: asyncio.Future | None = None
    try:
        while True:
            token.raise_if_cancelled(session_id)
            pending = asyncio.ensure_future(anext(iterator))
            await asyncio.wait({pending, cancel_waiter}, return_when=asyncio.FIRST_COMPLETED)
            if not pending.done():
                raise TurnCancelledError(session_id=session_id, reason=token.reason)
            try:
                item = pending.result()
            except StopAsyncIteration:
                return
            finally:
                pending = None
            yield item
    finally:
        cancel_waiter.cancel()
        if pending is not None and not pending.done():
            pending.cancel()
            await asyncio.wait({pending})
        aclose = getattr(iterator, "aclose", None)
        if aclose is not None:
            await aclose()

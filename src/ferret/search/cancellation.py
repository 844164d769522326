"""Cooperative cancellation for provider searches."""

from __future__ import annotations

import asyncio
import contextlib
import time
from typing import Awaitable, Optional, TypeVar

from ferret.exceptions import SearchCancelled

T = TypeVar("T")


class CancelToken:
    """Cancellation handle carrying an optional deadline and a cancel signal.

    Create a token, pass it to ``provider.search(token, request)`` and call
    ``token.cancel()`` from a signal handler or another coroutine to stop the
    search. Deadline expiry is treated exactly like an explicit cancel.
    """

    def __init__(self, *, timeout: Optional[float] = None) -> None:
        self._event = asyncio.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self.reason: Optional[str] = None

    def cancel(self, reason: str = "search was cancelled") -> None:
        """Request cancellation. Only the first reason is kept."""
        if not self._event.is_set():
            self.reason = reason
            self._event.set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    @property
    def is_cancelled(self) -> bool:
        if not self._event.is_set() and self.remaining() == 0.0:
            self.cancel("deadline exceeded")
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        if self.is_cancelled:
            raise SearchCancelled(self.reason or "search was cancelled")

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await ``awaitable`` unless the token fires first.

        When the token fires, the underlying task is cancelled and awaited so
        that its resources are released, then ``SearchCancelled`` is raised.
        A result that arrives after the token fired is discarded.
        """
        task = asyncio.ensure_future(awaitable)
        if self.is_cancelled:
            await self._discard(task)
            self.raise_if_cancelled()
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            # The loop clock may wake us marginally before the deadline
            while not task.done() and not self.is_cancelled:
                await asyncio.wait(
                    {task, waiter},
                    timeout=self.remaining(),
                    return_when=asyncio.FIRST_COMPLETED,
                )
        except asyncio.CancelledError:
            await self._discard(task)
            raise
        finally:
            waiter.cancel()
        if self.is_cancelled:
            await self._discard(task)
            self.raise_if_cancelled()
        return task.result()

    @staticmethod
    async def _discard(task: asyncio.Future) -> None:
        if not task.done():
            task.cancel()
        # Errors raised after cancellation belong to a discarded request
        with contextlib.suppress(asyncio.CancelledError, Exception):
            await task

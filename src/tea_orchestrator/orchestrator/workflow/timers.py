"""Cancellable fixed delays.

A delay waits through an injected `sleep` coroutine function so tests can swap
`asyncio.sleep` for a virtual clock. Cancelling a pending delay through
:meth:`Delay.cancel` surfaces as :class:`TimerInterrupted` to whoever awaits it;
cancelling the awaiting task itself still propagates `CancelledError`.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable

Sleep = Callable[[float], Awaitable[None]]


class TimerInterrupted(Exception):
    """Raised when a pending delay is cancelled before it elapsed."""


def _own_task_is_cancelling() -> bool:
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0


class Delay:
    """A fixed delay that can be interrupted from the outside."""

    def __init__(self, duration_ms: int, *, sleep: Sleep = asyncio.sleep) -> None:
        if duration_ms < 0:
            raise ValueError(f"duration_ms must be >= 0, got {duration_ms}")
        self.duration_ms = duration_ms
        self._sleep = sleep
        self._pending: asyncio.Future[None] | None = None

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    async def wait(self) -> None:
        self._pending = asyncio.ensure_future(self._sleep(self.duration_ms / 1000))
        try:
            await self._pending
        except asyncio.CancelledError as e:
            if _own_task_is_cancelling():
                raise
            raise TimerInterrupted(f"Delay of {self.duration_ms} ms was interrupted") from e
        finally:
            self._pending = None

    def cancel(self) -> bool:
        """Interrupt a pending wait. Returns False when nothing is pending."""

        if not self.pending:
            return False
        assert self._pending is not None
        self._pending.cancel()
        return True


class FallbackTimer(Delay):
    """Stands in for the kettle when its status endpoint is unreachable."""

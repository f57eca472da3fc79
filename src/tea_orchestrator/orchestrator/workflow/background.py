from __future__ import annotations

import asyncio
import logging

from .timers import Delay, Sleep, TimerInterrupted

logger = logging.getLogger(__name__)


class BackgroundTaskInterrupted(RuntimeError):
    """The background work was interrupted before it finished."""


class SnackPreparation:
    """Unrelated preparation work running next to the boiler.

    It has a fixed duration and no result; completion is only a
    synchronisation signal for the orchestrator.
    """

    def __init__(
        self,
        duration_ms: int,
        *,
        sleep: Sleep = asyncio.sleep,
        log: logging.Logger | None = None,
    ) -> None:
        self._delay = Delay(duration_ms, sleep=sleep)
        self._log = log or logger.getChild("SnackPreparation")

    @property
    def duration_ms(self) -> int:
        return self._delay.duration_ms

    async def run(self) -> None:
        self._log.info("PrepareSnacks -> Preparing snacks...")
        try:
            await self._delay.wait()
        except TimerInterrupted as e:
            raise BackgroundTaskInterrupted("Snack preparation was interrupted") from e
        self._log.info("PrepareSnacks -> Snacks ready!")

    def cancel(self) -> bool:
        return self._delay.cancel()

from __future__ import annotations

import logging
from enum import Enum

from tea_orchestrator.orchestrator.kettle.service import ProbeResult, StatusProbe

from .timers import FallbackTimer, TimerInterrupted

logger = logging.getLogger(__name__)


class WaterState(str, Enum):
    """Token handed from the boiler to the pour step."""

    BOILED = "Boiled Water"
    NOT_BOILED = "Not Boiled"


class WaterBoiler:
    """Boils water by asking the kettle, falling back to a timer.

    A reachable kettle is assumed to be heating already, so no local wait is
    added. An unreachable one is replaced by `FallbackTimer`. `boil()` always
    resolves: the probe absorbs network errors and an interrupted timer maps
    to `WaterState.NOT_BOILED`.
    """

    def __init__(
        self,
        probe: StatusProbe,
        timer: FallbackTimer,
        *,
        log: logging.Logger | None = None,
    ) -> None:
        self._probe = probe
        self._timer = timer
        self._log = log or logger.getChild("WaterBoiler")

    async def boil(self) -> WaterState:
        self._log.info("BoilWater START - Checking kettle status...")

        status = await self._probe.check_status()

        if status is ProbeResult.AVAILABLE:
            self._log.info("BoilWater - Kettle responded")
        else:
            self._log.warning("BoilWater - Kettle offline, using timer fallback")
            try:
                await self._timer.wait()
            except TimerInterrupted as e:
                self._log.warning("BoilWater - Fallback timer interrupted: %s", e)
                return WaterState.NOT_BOILED

        self._log.info("BoilWater END")
        return WaterState.BOILED

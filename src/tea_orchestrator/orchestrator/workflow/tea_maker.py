"""The make-tea workflow.

Boiling water and snack preparation start together as asyncio tasks. Placing
the tea bag runs eagerly while both are in flight. Pouring waits for the
boiler only; serving waits for both.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Protocol

from .background import BackgroundTaskInterrupted
from .boiler import WaterState
from .state_machine import WorkflowRun, WorkflowState

logger = logging.getLogger(__name__)


class Boiler(Protocol):
    async def boil(self) -> WaterState: ...


class BackgroundWork(Protocol):
    async def run(self) -> None: ...


class TeaSteps:
    """The synchronous steps around the two concurrent tasks."""

    def __init__(self, *, log: logging.Logger | None = None) -> None:
        self._log = log or logger.getChild("TeaMaker")

    def put_tea_in_cup(self) -> None:
        self._log.info("PutTeaInCup -> Tea bag placed in cup")

    def pour_water_into_cup(self, water: WaterState) -> None:
        self._log.info("PourWaterIntoCup -> Pouring %s into cup", water.value)

    def serve_cup(self) -> None:
        self._log.info("ServeCup -> Cup is ready to serve!")


class TeaMaker:
    def __init__(
        self,
        boiler: Boiler,
        background: BackgroundWork,
        *,
        steps: TeaSteps | None = None,
        clock: Callable[[], float] = time.perf_counter,
        log: logging.Logger | None = None,
    ) -> None:
        self._boiler = boiler
        self._background = background
        self._steps = steps or TeaSteps()
        self._clock = clock
        self._log = log or logger.getChild("TeaMaker")

    async def make_tea(self) -> WorkflowRun:
        run = WorkflowRun(started_at=self._clock())
        self._log.info("MakeTea - START", extra={"run_id": run.run_id})

        boiling = asyncio.create_task(self._boiler.boil(), name=f"boil-water-{run.run_id}")
        snacks = asyncio.create_task(self._background.run(), name=f"prepare-snacks-{run.run_id}")
        try:
            return await self._join(run, boiling, snacks)
        finally:
            # A failing step must not leave either task running past the run.
            pending = [task for task in (boiling, snacks) if not task.done()]
            for task in pending:
                task.cancel()
            if pending:
                await asyncio.wait(pending)

    async def _join(
        self,
        run: WorkflowRun,
        boiling: asyncio.Task[WaterState],
        snacks: asyncio.Task[None],
    ) -> WorkflowRun:
        # Runs before either task gets a chance to progress.
        self._steps.put_tea_in_cup()
        run.advance(WorkflowState.TEA_PLACED, at=self._clock())

        run.advance(WorkflowState.WAITING_ON_BOILER_AND_BACKGROUND, at=self._clock())
        self._log.info("MakeTea - waiting for boiled water")

        run.water = await boiling
        if run.water is WaterState.BOILED:
            self._steps.pour_water_into_cup(run.water)
            if not snacks.done():
                run.advance(WorkflowState.POURED_WAITING_ON_BACKGROUND, at=self._clock())
        else:
            run.failure = "Water did not boil"

        try:
            await snacks
        except BackgroundTaskInterrupted as e:
            run.failure = f"{run.failure}; {e}" if run.failure else str(e)

        if run.failure is not None:
            run.advance(WorkflowState.INTERRUPTED, at=self._clock())
            self._log.warning(
                "MakeTea - INTERRUPTED: %s",
                run.failure,
                extra={"run_id": run.run_id},
            )
            return run

        self._steps.serve_cup()
        run.advance(WorkflowState.SERVED, at=self._clock())
        self._log.info(
            "MakeTea - END",
            extra={"run_id": run.run_id, "elapsed_seconds": run.elapsed_seconds},
        )
        return run

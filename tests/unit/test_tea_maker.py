"""Unit tests for the make-tea orchestration.

Ordering and timing are asserted against a virtual clock, so the 3 s / 20 s
reference durations run instantly and deterministically.
"""

from __future__ import annotations

import asyncio

import pytest
from fakes import FakeClock, RecordingSteps, StaticProbe, record

from tea_orchestrator.orchestrator.kettle.service import ProbeResult
from tea_orchestrator.orchestrator.workflow.background import (
    BackgroundTaskInterrupted,
    SnackPreparation,
)
from tea_orchestrator.orchestrator.workflow.boiler import WaterBoiler, WaterState
from tea_orchestrator.orchestrator.workflow.state_machine import WorkflowState
from tea_orchestrator.orchestrator.workflow.tea_maker import TeaMaker
from tea_orchestrator.orchestrator.workflow.timers import FallbackTimer


class TimedBoiler:
    def __init__(self, clock: FakeClock, seconds: float, events: list[str]) -> None:
        self._clock = clock
        self._seconds = seconds
        self._events = events

    async def boil(self) -> WaterState:
        await self._clock.sleep(self._seconds)
        self._events.append("boiled")
        return WaterState.BOILED


class TimedBackground:
    def __init__(self, clock: FakeClock, seconds: float, events: list[str]) -> None:
        self._clock = clock
        self._seconds = seconds
        self._events = events

    async def run(self) -> None:
        await self._clock.sleep(self._seconds)
        self._events.append("background done")


class InterruptedBackground:
    def __init__(self, events: list[str]) -> None:
        self._events = events

    async def run(self) -> None:
        self._events.append("background interrupted")
        raise BackgroundTaskInterrupted("Snack preparation was interrupted")


class BrokenBoiler:
    async def boil(self) -> WaterState:
        raise RuntimeError("kettle exploded")


class CancellableBackground:
    def __init__(self, clock: FakeClock, events: list[str]) -> None:
        self._clock = clock
        self._events = events

    async def run(self) -> None:
        try:
            await self._clock.sleep(20.0)
        except asyncio.CancelledError:
            self._events.append("background cancelled")
            raise


def _tea_maker(
    clock: FakeClock,
    events: list[str],
    *,
    probe: StaticProbe,
    boiling_time_ms: int = 3000,
    snack_preparation_ms: int = 20000,
) -> TeaMaker:
    boiler = WaterBoiler(probe, FallbackTimer(boiling_time_ms, sleep=clock.sleep))
    snacks = SnackPreparation(snack_preparation_ms, sleep=clock.sleep)

    class RecordedBoiler:
        async def boil(self) -> WaterState:
            return await record(events, "boiled", boiler.boil())

    class RecordedSnacks:
        async def run(self) -> None:
            await record(events, "background done", snacks.run())

    return TeaMaker(
        RecordedBoiler(), RecordedSnacks(), steps=RecordingSteps(events), clock=clock.time
    )


@pytest.mark.asyncio
async def test_tea_is_placed_before_either_task_resolves(
    fake_clock: FakeClock, events: list[str]
) -> None:
    tea_maker = TeaMaker(
        TimedBoiler(fake_clock, 0.0, events),
        TimedBackground(fake_clock, 0.0, events),
        steps=RecordingSteps(events),
        clock=fake_clock.time,
    )

    run = await fake_clock.run(tea_maker.make_tea())

    assert events[0] == "tea placed"
    assert run.served


@pytest.mark.asyncio
async def test_serve_waits_for_background_when_boiler_finishes_first(
    fake_clock: FakeClock, events: list[str]
) -> None:
    tea_maker = TeaMaker(
        TimedBoiler(fake_clock, 0.010, events),
        TimedBackground(fake_clock, 0.050, events),
        steps=RecordingSteps(events),
        clock=fake_clock.time,
    )

    run = await fake_clock.run(tea_maker.make_tea())

    assert events == ["tea placed", "boiled", "poured", "background done", "served"]
    assert [s.state for s in run.history] == [
        WorkflowState.START,
        WorkflowState.TEA_PLACED,
        WorkflowState.WAITING_ON_BOILER_AND_BACKGROUND,
        WorkflowState.POURED_WAITING_ON_BACKGROUND,
        WorkflowState.SERVED,
    ]


@pytest.mark.asyncio
async def test_serve_waits_for_boiler_when_background_finishes_first(
    fake_clock: FakeClock, events: list[str]
) -> None:
    tea_maker = TeaMaker(
        TimedBoiler(fake_clock, 0.050, events),
        TimedBackground(fake_clock, 0.010, events),
        steps=RecordingSteps(events),
        clock=fake_clock.time,
    )

    run = await fake_clock.run(tea_maker.make_tea())

    assert events == ["tea placed", "background done", "boiled", "poured", "served"]
    # Background already finished at pour time, so the run goes straight to SERVED.
    assert [s.state for s in run.history] == [
        WorkflowState.START,
        WorkflowState.TEA_PLACED,
        WorkflowState.WAITING_ON_BOILER_AND_BACKGROUND,
        WorkflowState.SERVED,
    ]


@pytest.mark.asyncio
async def test_boiling_and_background_run_concurrently(
    fake_clock: FakeClock, events: list[str]
) -> None:
    tea_maker = TeaMaker(
        TimedBoiler(fake_clock, 3.0, events),
        TimedBackground(fake_clock, 20.0, events),
        steps=RecordingSteps(events),
        clock=fake_clock.time,
    )

    run = await fake_clock.run(tea_maker.make_tea())

    # max(3, 20), not 3 + 20.
    assert run.elapsed_seconds == pytest.approx(20.0)
    assert fake_clock.now == pytest.approx(20.0)


@pytest.mark.asyncio
async def test_available_kettle_total_is_background_duration(
    fake_clock: FakeClock, events: list[str]
) -> None:
    probe = StaticProbe(ProbeResult.AVAILABLE)
    tea_maker = _tea_maker(fake_clock, events, probe=probe)

    run = await fake_clock.run(tea_maker.make_tea())

    assert run.served
    assert run.water is WaterState.BOILED
    assert probe.calls == 1
    assert run.elapsed_seconds == pytest.approx(20.0)
    # Pouring happened at t=0, long before the snacks were ready.
    assert run.history[3].state is WorkflowState.POURED_WAITING_ON_BACKGROUND
    assert run.history[3].entered_at == pytest.approx(0.0)


@pytest.mark.asyncio
async def test_kettle_timeout_and_fallback_still_dominated_by_background(
    fake_clock: FakeClock, events: list[str]
) -> None:
    probe = StaticProbe(ProbeResult.UNAVAILABLE, clock=fake_clock, delay_seconds=3.0)
    tea_maker = _tea_maker(fake_clock, events, probe=probe)

    run = await fake_clock.run(tea_maker.make_tea())

    assert run.served
    assert probe.calls == 1
    poured = next(
        s for s in run.history if s.state is WorkflowState.POURED_WAITING_ON_BACKGROUND
    )
    # 3 s probe timeout + 3 s fallback timer before pouring.
    assert poured.entered_at == pytest.approx(6.0)
    assert run.elapsed_seconds == pytest.approx(20.0)
    assert events == ["tea placed", "boiled", "poured", "background done", "served"]


@pytest.mark.asyncio
async def test_slow_fallback_outlasting_background(
    fake_clock: FakeClock, events: list[str]
) -> None:
    tea_maker = _tea_maker(
        fake_clock,
        events,
        probe=StaticProbe(ProbeResult.UNAVAILABLE),
        boiling_time_ms=30000,
        snack_preparation_ms=20000,
    )

    run = await fake_clock.run(tea_maker.make_tea())

    assert events == ["tea placed", "background done", "boiled", "poured", "served"]
    assert run.elapsed_seconds == pytest.approx(30.0)


@pytest.mark.asyncio
async def test_unboiled_water_interrupts_the_run_without_serving(
    fake_clock: FakeClock, events: list[str]
) -> None:
    class ColdBoiler:
        async def boil(self) -> WaterState:
            events.append("boiler interrupted")
            return WaterState.NOT_BOILED

    tea_maker = TeaMaker(
        ColdBoiler(),
        TimedBackground(fake_clock, 20.0, events),
        steps=RecordingSteps(events),
        clock=fake_clock.time,
    )

    run = await fake_clock.run(tea_maker.make_tea())

    assert run.state is WorkflowState.INTERRUPTED
    assert not run.served
    assert run.water is WaterState.NOT_BOILED
    assert run.failure == "Water did not boil"
    # The background task is still joined before the run ends.
    assert events == ["tea placed", "boiler interrupted", "background done"]
    assert run.elapsed_seconds == pytest.approx(20.0)


@pytest.mark.asyncio
async def test_interrupted_background_is_reported_not_raised(
    fake_clock: FakeClock, events: list[str]
) -> None:
    tea_maker = TeaMaker(
        TimedBoiler(fake_clock, 3.0, events),
        InterruptedBackground(events),
        steps=RecordingSteps(events),
        clock=fake_clock.time,
    )

    run = await fake_clock.run(tea_maker.make_tea())

    assert run.state is WorkflowState.INTERRUPTED
    assert run.failure == "Snack preparation was interrupted"
    assert "served" not in events
    assert events.index("poured") > events.index("boiled")


@pytest.mark.asyncio
async def test_cancelling_snack_preparation_mid_run(
    fake_clock: FakeClock, events: list[str]
) -> None:
    snacks = SnackPreparation(20000, sleep=fake_clock.sleep)
    tea_maker = TeaMaker(
        TimedBoiler(fake_clock, 3.0, events),
        snacks,
        steps=RecordingSteps(events),
        clock=fake_clock.time,
    )

    async def scenario():
        making = asyncio.create_task(tea_maker.make_tea())
        for _ in range(5):
            await asyncio.sleep(0)
        assert snacks.cancel() is True
        return await making

    run = await fake_clock.run(scenario())

    assert run.state is WorkflowState.INTERRUPTED
    assert "interrupted" in (run.failure or "")
    assert run.elapsed_seconds == pytest.approx(3.0)


@pytest.mark.asyncio
async def test_failing_boiler_does_not_leave_background_running(
    fake_clock: FakeClock, events: list[str]
) -> None:
    tea_maker = TeaMaker(
        BrokenBoiler(),
        CancellableBackground(fake_clock, events),
        steps=RecordingSteps(events),
        clock=fake_clock.time,
    )

    with pytest.raises(RuntimeError, match="kettle exploded"):
        await fake_clock.run(tea_maker.make_tea())

    assert events == ["tea placed", "background cancelled"]
    assert fake_clock.now == 0.0
    leftover = [
        task
        for task in asyncio.all_tasks()
        if task.get_name().startswith("prepare-snacks-") and not task.done()
    ]
    assert leftover == []


@pytest.mark.asyncio
async def test_run_json_summary(fake_clock: FakeClock, events: list[str]) -> None:
    tea_maker = TeaMaker(
        TimedBoiler(fake_clock, 1.0, events),
        TimedBackground(fake_clock, 2.0, events),
        steps=RecordingSteps(events),
        clock=fake_clock.time,
    )

    run = await fake_clock.run(tea_maker.make_tea())
    summary = run.to_json()

    assert summary["state"] == "served"
    assert summary["water"] == "Boiled Water"
    assert summary["elapsed_seconds"] == pytest.approx(2.0)
    assert "failure" not in summary
    assert len(summary["history"]) == 5

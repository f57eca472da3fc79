#!/usr/bin/env python3
"""Programmatic make-tea example.

This demonstrates wiring the workflow components directly instead of going
through the CLI:

* load settings from `.env`
* share one HTTP client for the kettle probe
* shorten the background work so the example finishes quickly
* inspect the returned run
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

import httpx

from tea_orchestrator.orchestrator.config import TeaSettings
from tea_orchestrator.orchestrator.kettle.service import KettleService
from tea_orchestrator.orchestrator.logging import configure_logging
from tea_orchestrator.orchestrator.workflow.background import SnackPreparation
from tea_orchestrator.orchestrator.workflow.boiler import WaterBoiler
from tea_orchestrator.orchestrator.workflow.tea_maker import TeaMaker
from tea_orchestrator.orchestrator.workflow.timers import FallbackTimer


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Make a cup of tea (programmatic example).")
    parser.add_argument(
        "--kettle-url",
        default="https://httpbin.org/status/503",
        help="Kettle status URL; the default is always offline so the timer fallback runs",
    )
    parser.add_argument(
        "--snack-ms", type=int, default=2000, help="Background snack preparation time"
    )
    return parser.parse_args(argv)


async def _make_tea(settings: TeaSettings, kettle_url: str, snack_ms: int) -> int:
    async with httpx.AsyncClient(timeout=settings.kettle_timeout_seconds) as client:
        boiler = WaterBoiler(
            KettleService(client, url=kettle_url),
            FallbackTimer(settings.boiling_time_ms),
        )
        tea_maker = TeaMaker(boiler, SnackPreparation(snack_ms))
        run = await tea_maker.make_tea()

    print(f"Run {run.run_id}: {run.state.value} after {run.elapsed_seconds:.2f}s")
    for snapshot in run.history:
        print(f"  {snapshot.state.value}")
    return 0 if run.served else 4


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)

    settings = TeaSettings()
    configure_logging(settings.log_level, settings.log_format)

    return asyncio.run(_make_tea(settings, args.kettle_url, args.snack_ms))


if __name__ == "__main__":
    raise SystemExit(main())

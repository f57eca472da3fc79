"""CLI entrypoint for the tea orchestrator.

Commands:
- make-tea      run the make-tea workflow once
- scrape        scrape pages concurrently and print the most frequent words
- serve-kettle  serve the local kettle simulator
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time

import httpx
from pydantic import ValidationError

from tea_orchestrator import __version__
from tea_orchestrator.orchestrator.config import TeaSettings
from tea_orchestrator.orchestrator.kettle.service import KettleService
from tea_orchestrator.orchestrator.logging import configure_logging
from tea_orchestrator.orchestrator.scraping.web_scraper import WebScraper
from tea_orchestrator.orchestrator.workflow.background import SnackPreparation
from tea_orchestrator.orchestrator.workflow.boiler import WaterBoiler
from tea_orchestrator.orchestrator.workflow.state_machine import WorkflowRun
from tea_orchestrator.orchestrator.workflow.tea_maker import TeaMaker
from tea_orchestrator.orchestrator.workflow.timers import FallbackTimer

logger = logging.getLogger("tea_orchestrator.Program")


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {number}")
    return number


def build_http_client(settings: TeaSettings) -> httpx.AsyncClient:
    """Create the process-wide HTTP client; callers own and close it."""

    return httpx.AsyncClient(timeout=settings.kettle_timeout_seconds, follow_redirects=True)


def build_tea_maker(
    settings: TeaSettings, client: httpx.AsyncClient, *, kettle_url: str | None = None
) -> TeaMaker:
    probe = KettleService(client, url=kettle_url or settings.kettle_status_url)
    boiler = WaterBoiler(probe, FallbackTimer(settings.boiling_time_ms))
    snacks = SnackPreparation(settings.snack_preparation_ms)
    return TeaMaker(boiler, snacks)


async def _make_tea(settings: TeaSettings, *, kettle_url: str | None) -> WorkflowRun:
    async with build_http_client(settings) as client:
        tea_maker = build_tea_maker(settings, client, kettle_url=kettle_url)
        return await tea_maker.make_tea()


async def _scrape(settings: TeaSettings, urls: list[str]) -> list[tuple[str, int]]:
    async with build_http_client(settings) as client:
        return await WebScraper(client, urls).scrape_and_aggregate()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tea-orchestrator",
        description="Make tea while the snacks prepare themselves (asyncio orchestration demo)",
    )
    parser.add_argument("--version", action="version", version=f"tea-orchestrator {__version__}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    make_tea = subparsers.add_parser("make-tea", help="Run the make-tea workflow once")
    make_tea.add_argument(
        "--kettle-url",
        default=None,
        help="Kettle status URL (defaults to KETTLE_URL or the httpbin delay endpoint)",
    )

    scrape = subparsers.add_parser(
        "scrape", help="Scrape pages concurrently and print the most frequent words"
    )
    scrape.add_argument(
        "--url",
        dest="urls",
        action="append",
        default=None,
        help="Page to scrape (repeatable; defaults to SCRAPE_URLS)",
    )
    scrape.add_argument(
        "--top",
        type=_positive_int,
        default=None,
        help="Number of words to print (defaults to TOP_WORDS)",
    )

    serve_kettle = subparsers.add_parser("serve-kettle", help="Serve the local kettle simulator")
    serve_kettle.add_argument("--host", default=None, help="Bind address (KETTLE_SERVER_HOST)")
    serve_kettle.add_argument(
        "--port", type=int, default=None, help="Bind port (KETTLE_SERVER_PORT)"
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = TeaSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level, settings.log_format)

    try:
        if args.command == "make-tea":
            started = time.perf_counter()
            logger.info("=== Tea Making Process ===")
            run = asyncio.run(_make_tea(settings, kettle_url=args.kettle_url))
            logger.info("Total elapsed time: %.2fs", time.perf_counter() - started)
            if not run.served:
                logger.warning(
                    "Tea was not served",
                    extra={
                        "run_id": run.run_id,
                        "state": run.state.value,
                        "failure": run.failure,
                    },
                )
                return 4
            return 0

        if args.command == "scrape":
            urls = [u.strip() for u in (args.urls or settings.parsed_scrape_urls()) if u.strip()]
            if not urls:
                print("No URLs to scrape (use --url or SCRAPE_URLS)", file=sys.stderr)
                return 2
            top = args.top if args.top is not None else settings.top_words
            started = time.perf_counter()
            logger.info("=== Web Scraping ===")
            words = asyncio.run(_scrape(settings, urls))
            logger.info("Aggregated word counts (top %d, desc):", top)
            for word, count in words[:top]:
                print(f"{word}: {count}")
            logger.info("Total elapsed time: %.2fs", time.perf_counter() - started)
            return 0

        if args.command == "serve-kettle":
            import uvicorn

            from tea_orchestrator.server.app import create_app
            from tea_orchestrator.server.config import KettleServerSettings

            server_settings = KettleServerSettings()
            uvicorn.run(
                create_app(server_settings),
                host=args.host or server_settings.host,
                port=args.port or server_settings.port,
                log_level=settings.log_level.lower(),
            )
            return 0

        logger.error("Unknown command", extra={"command": args.command})
        return 2

    except Exception:
        logger.exception("Command failed")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())

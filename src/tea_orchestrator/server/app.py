"""FastAPI app factory for the kettle simulator.

Mirrors the two httpbin endpoints the workflow relies on, so the kettle can be
simulated locally: `/delay/{seconds}` answers after a pause and
`/status/{code}` answers with an arbitrary status code.
"""

from __future__ import annotations

import asyncio
import logging

from fastapi import FastAPI, HTTPException, Path, Response

from tea_orchestrator import __version__
from tea_orchestrator.server.config import KettleServerSettings
from tea_orchestrator.server.models import HealthResponse, KettleDelayResponse

logger = logging.getLogger(__name__)


def create_app(settings: KettleServerSettings | None = None) -> FastAPI:
    settings = settings or KettleServerSettings()

    app = FastAPI(
        title="Kettle Simulator",
        version=__version__,
        description="Local stand-in for the smart kettle status endpoint.",
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    # Expose settings for request handlers that want to read it.
    app.state.settings = settings

    @app.get("/api/v1/health", response_model=HealthResponse)
    def health() -> HealthResponse:
        return HealthResponse()

    @app.get("/delay/{seconds}", response_model=KettleDelayResponse)
    async def delay(seconds: float = Path(ge=0)) -> KettleDelayResponse:
        delayed = min(seconds, settings.max_delay_seconds)
        logger.info("Kettle heating", extra={"requested": seconds, "delayed": delayed})
        await asyncio.sleep(delayed)
        return KettleDelayResponse(requested_seconds=seconds, delayed_seconds=delayed)

    @app.get("/status/{code}")
    def status(code: int) -> Response:
        if not 100 <= code <= 599:
            raise HTTPException(status_code=400, detail=f"Invalid status code: {code}")
        return Response(status_code=code)

    return app

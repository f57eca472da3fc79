"""Kettle status probe.

Wraps a single GET against the smart kettle endpoint. Every failure mode
(connection error, timeout, non-2xx status, malformed URL, cancelled request)
is reported as `ProbeResult.UNAVAILABLE`; callers only learn *whether* the
kettle answered, never *why* it did not.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Protocol

import httpx

logger = logging.getLogger(__name__)


class ProbeResult(str, Enum):
    AVAILABLE = "available"
    UNAVAILABLE = "unavailable"

    @property
    def available(self) -> bool:
        return self is ProbeResult.AVAILABLE


class StatusProbe(Protocol):
    """Anything that can tell whether the kettle is reachable."""

    async def check_status(self) -> ProbeResult: ...


class KettleService:
    """Checks the smart kettle through a shared `httpx.AsyncClient`.

    The client is owned by the caller; this class never closes it.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        url: str,
        log: logging.Logger | None = None,
    ) -> None:
        self._client = client
        self.url = url
        self._log = log or logger.getChild("KettleService")

    async def check_status(self) -> ProbeResult:
        try:
            response = await self._client.get(self.url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            self._report_offline(e)
            return ProbeResult.UNAVAILABLE
        except asyncio.CancelledError as e:
            task = asyncio.current_task()
            if task is not None and task.cancelling() > 0:
                raise
            # The request was cancelled underneath us, not the caller's task.
            self._report_offline(e)
            return ProbeResult.UNAVAILABLE

        return ProbeResult.AVAILABLE

    def _report_offline(self, error: BaseException) -> None:
        self._log.warning(
            "CheckKettleStatus - Kettle offline because request to %s failed: %s | %s",
            self.url,
            type(error).__name__,
            error,
            extra={"url": self.url, "error_type": type(error).__name__},
        )

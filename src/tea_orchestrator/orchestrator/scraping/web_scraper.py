"""Concurrent page scraping with aggregated word counts.

All pages are fetched at once over the shared client; a page that fails to
load is logged and counted as empty instead of failing the whole scrape.
"""

from __future__ import annotations

import asyncio
import html
import logging
import re
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass

import httpx

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"\b[\w']+\b")
_SCRIPT_STYLE_RE = re.compile(r"<(script|style)[^>]*>.*?</\1>", re.IGNORECASE | re.DOTALL)
_HTML_TAG_RE = re.compile(r"<[^>]+>")


@dataclass(frozen=True, slots=True)
class WordCountResult:
    url: str
    word_counts: Counter[str]


def count_words(content: str) -> Counter[str]:
    """Count visible words in an HTML document (case-insensitive)."""

    visible = _SCRIPT_STYLE_RE.sub(" ", content)
    visible = _HTML_TAG_RE.sub(" ", visible)
    visible = html.unescape(visible)
    return Counter(match.group(0).lower() for match in _WORD_RE.finditer(visible))


class WebScraper:
    def __init__(
        self,
        client: httpx.AsyncClient,
        urls: Iterable[str],
        *,
        log: logging.Logger | None = None,
    ) -> None:
        self._client = client
        self.urls = [u for u in urls if u and u.strip()]
        if not self.urls:
            raise ValueError("At least one URL must be provided.")
        self._log = log or logger.getChild("WebScraper")

    async def scrape_and_aggregate(self) -> list[tuple[str, int]]:
        """Scrape every URL and return (word, count) pairs, most frequent first."""

        self._log.info("ScrapeAndAggregate - START")

        results = await asyncio.gather(*(self._scrape_url(url) for url in self.urls))
        self._log.info("ScrapeAndAggregate - All URLs scraped")

        aggregate: Counter[str] = Counter()
        for result in results:
            aggregate.update(result.word_counts)

        ordered = sorted(aggregate.items(), key=lambda kv: (-kv[1], kv[0]))
        self._log.info("ScrapeAndAggregate - Aggregation complete")
        return ordered

    async def _scrape_url(self, url: str) -> WordCountResult:
        self._log.info("ScrapeUrl - START (%s)", url)
        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL):
            self._log.exception("ScrapeUrl - ERROR (%s)", url, extra={"url": url})
            return WordCountResult(url=url, word_counts=Counter())

        counts = count_words(response.text)
        self._log.info(
            "ScrapeUrl - END (%s) - total words: %d, unique words: %d",
            url,
            sum(counts.values()),
            len(counts),
        )
        return WordCountResult(url=url, word_counts=counts)

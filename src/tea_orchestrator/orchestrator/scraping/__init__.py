"""Web scraping demo sharing the orchestrator's HTTP client."""

from tea_orchestrator.orchestrator.scraping.web_scraper import WebScraper, count_words

__all__ = ["WebScraper", "count_words"]

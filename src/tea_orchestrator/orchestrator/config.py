"""Configuration for the tea orchestrator.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

Every value has a working default (3 s boiling time,
20 s snack preparation), so `TeaSettings()` works without any `.env`.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SCRAPE_URLS = (
    "https://www.example.com",
    "https://www.iana.org/domains/reserved",
    "https://httpbin.org/html",
)


class TeaSettings(BaseSettings):
    """Settings for the tea orchestrator.

    Environment variables:
    - KETTLE_URL              (optional, derived from BOILING_TIME_MS when empty)
    - KETTLE_TIMEOUT_SECONDS  (optional)
    - BOILING_TIME_MS         (optional)
    - SNACK_PREPARATION_MS    (optional)
    - SCRAPE_URLS             (optional, comma-separated)
    - TOP_WORDS               (optional)
    - LOG_LEVEL               (optional)
    - LOG_FORMAT              (optional, "console" or "json")

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `TeaSettings(_env_file=path_to_env)`.
    """

    kettle_url: str = Field(
        default="",
        validation_alias="KETTLE_URL",
        description="Smart kettle status endpoint. Empty means the httpbin delay endpoint.",
    )
    kettle_timeout_seconds: float = Field(
        default=10.0,
        gt=0,
        validation_alias="KETTLE_TIMEOUT_SECONDS",
        description="Network timeout for the kettle status check",
    )

    boiling_time_ms: int = Field(
        default=3000,
        ge=0,
        validation_alias="BOILING_TIME_MS",
        description="Fallback boiling time used when the kettle is offline",
    )
    snack_preparation_ms: int = Field(
        default=20000,
        ge=0,
        validation_alias="SNACK_PREPARATION_MS",
        description="Duration of the background snack preparation",
    )

    scrape_urls: str = Field(
        default=",".join(DEFAULT_SCRAPE_URLS),
        validation_alias="SCRAPE_URLS",
        description="Comma-separated list of pages for the `scrape` command",
    )
    top_words: int = Field(
        default=10,
        gt=0,
        validation_alias="TOP_WORDS",
        description="Number of aggregated words printed by the `scrape` command",
    )

    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )
    log_format: Literal["console", "json"] = Field(
        default="console",
        validation_alias="LOG_FORMAT",
        description="Log line format",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("log_format", mode="before")
    @classmethod
    def _normalise_log_format(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower()
        return value

    @property
    def kettle_status_url(self) -> str:
        """URL probed by the kettle service.

        The default endpoint delays its response by the boiling time, so a
        reachable kettle takes as long as the timer fallback would.
        """

        if self.kettle_url.strip():
            return self.kettle_url.strip()
        return f"https://httpbin.org/delay/{self.boiling_time_ms // 1000}"

    def parsed_scrape_urls(self) -> list[str]:
        return [u.strip() for u in self.scrape_urls.split(",") if u.strip()]

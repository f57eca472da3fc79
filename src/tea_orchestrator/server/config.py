"""Configuration for the kettle simulator."""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class KettleServerSettings(BaseSettings):
    """Settings for the local kettle simulator.

    Point `KETTLE_URL` at `http://<host>:<port>/delay/3` to run the workflow
    without reaching the public internet, or at `/status/503` to exercise the
    timer fallback.
    """

    host: str = Field(default="127.0.0.1", validation_alias="KETTLE_SERVER_HOST")
    port: int = Field(default=8080, ge=1, le=65535, validation_alias="KETTLE_SERVER_PORT")

    max_delay_seconds: float = Field(
        default=10.0,
        ge=0,
        validation_alias="KETTLE_SERVER_MAX_DELAY_SECONDS",
        description="Upper bound for /delay/{seconds}; longer requests are clamped.",
    )

    model_config = SettingsConfigDict(
        env_prefix="", env_file=".env", extra="ignore", populate_by_name=True
    )

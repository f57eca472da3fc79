"""Test configuration and fixtures."""

from __future__ import annotations

import pytest
from fakes import FakeClock

SETTINGS_ENV_VARS = (
    "KETTLE_URL",
    "KETTLE_TIMEOUT_SECONDS",
    "BOILING_TIME_MS",
    "SNACK_PREPARATION_MS",
    "SCRAPE_URLS",
    "TOP_WORDS",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "KETTLE_SERVER_HOST",
    "KETTLE_SERVER_PORT",
    "KETTLE_SERVER_MAX_DELAY_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep exported variables out of the tests."""
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a fresh virtual clock starting at 0."""
    return FakeClock()


@pytest.fixture
def events() -> list[str]:
    """Provide an ordered event log shared by fakes."""
    return []

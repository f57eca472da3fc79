"""Pydantic models for the kettle simulator."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: Literal["ok"] = "ok"


class KettleDelayResponse(BaseModel):
    requested_seconds: float
    delayed_seconds: float
    status: Literal["heating"] = "heating"

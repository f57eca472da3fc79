"""Smart kettle status integration."""

from tea_orchestrator.orchestrator.kettle.service import KettleService, ProbeResult, StatusProbe

__all__ = ["KettleService", "ProbeResult", "StatusProbe"]

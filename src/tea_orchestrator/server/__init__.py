"""FastAPI kettle simulator for tea-orchestrator.

Design intent:
- Keep workflow logic in `tea_orchestrator.orchestrator.*`
- Keep server-specific concerns (routing, simulated delays) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from tea_orchestrator.server.app import create_app

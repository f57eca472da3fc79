"""Tea-making orchestrator components.

Provides:
- Settings loaded from .env
- Structured logging
- A small CLI surface
- The make-tea workflow (kettle probe, fallback timer, background task, join)
"""

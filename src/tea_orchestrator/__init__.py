"""Tea Orchestrator.

A small asyncio demonstration of orchestrating concurrent work:
- a remote kettle status check with a timer fallback
- an unrelated background task running concurrently
- a join point before the final synchronous step
"""

__version__ = "0.1.0"

from tea_orchestrator.orchestrator.config import TeaSettings

__all__ = ["__version__", "TeaSettings"]

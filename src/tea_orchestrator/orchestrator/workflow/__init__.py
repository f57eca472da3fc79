"""Explicit workflow domain concepts.

This package introduces first-class types for:
- Cancellable delays (the boiling fallback and the background work)
- The water boiler (kettle probe with timer fallback)
- The background snack preparation
- An in-memory state machine tracking one make-tea run
- The tea maker joining both concurrent tasks
"""

from .background import BackgroundTaskInterrupted, SnackPreparation
from .boiler import WaterBoiler, WaterState
from .state_machine import IllegalTransitionError, WorkflowRun, WorkflowState
from .tea_maker import TeaMaker, TeaSteps
from .timers import Delay, FallbackTimer, TimerInterrupted

__all__ = [
    "BackgroundTaskInterrupted",
    "Delay",
    "FallbackTimer",
    "IllegalTransitionError",
    "SnackPreparation",
    "TeaMaker",
    "TeaSteps",
    "TimerInterrupted",
    "WaterBoiler",
    "WaterState",
    "WorkflowRun",
    "WorkflowState",
]

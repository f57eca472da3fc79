from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum

from .boiler import WaterState


class WorkflowState(str, Enum):
    START = "start"
    TEA_PLACED = "tea_placed"
    WAITING_ON_BOILER_AND_BACKGROUND = "waiting_on_boiler_and_background"
    POURED_WAITING_ON_BACKGROUND = "poured_waiting_on_background"
    SERVED = "served"
    INTERRUPTED = "interrupted"


TERMINAL_STATES: frozenset[WorkflowState] = frozenset(
    {WorkflowState.SERVED, WorkflowState.INTERRUPTED}
)

ALLOWED_TRANSITIONS: dict[WorkflowState, set[WorkflowState]] = {
    WorkflowState.START: {WorkflowState.TEA_PLACED},
    WorkflowState.TEA_PLACED: {WorkflowState.WAITING_ON_BOILER_AND_BACKGROUND},
    WorkflowState.WAITING_ON_BOILER_AND_BACKGROUND: {
        WorkflowState.POURED_WAITING_ON_BACKGROUND,
        WorkflowState.SERVED,
        WorkflowState.INTERRUPTED,
    },
    WorkflowState.POURED_WAITING_ON_BACKGROUND: {
        WorkflowState.SERVED,
        WorkflowState.INTERRUPTED,
    },
    WorkflowState.SERVED: set(),
    WorkflowState.INTERRUPTED: set(),
}


class IllegalTransitionError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class WorkflowSnapshot:
    state: WorkflowState
    entered_at: float

    def to_json(self) -> dict[str, object]:
        return {"state": self.state.value, "entered_at": self.entered_at}


def transition(*, current: WorkflowSnapshot, to: WorkflowState, at: float) -> WorkflowSnapshot:
    allowed = ALLOWED_TRANSITIONS.get(current.state, set())
    if to not in allowed:
        raise IllegalTransitionError(f"Illegal transition: {current.state.value} -> {to.value}")
    return WorkflowSnapshot(state=to, entered_at=at)


@dataclass(slots=True)
class WorkflowRun:
    """One make-tea invocation.

    Kept in memory only and handed back to the caller when the run ends.
    `history` holds every state the run passed through, in order.
    """

    started_at: float
    run_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    history: list[WorkflowSnapshot] = field(default_factory=list)
    water: WaterState | None = None
    failure: str | None = None
    finished_at: float | None = None

    def __post_init__(self) -> None:
        if not self.history:
            self.history.append(
                WorkflowSnapshot(state=WorkflowState.START, entered_at=self.started_at)
            )

    @property
    def state(self) -> WorkflowState:
        return self.history[-1].state

    @property
    def served(self) -> bool:
        return self.state is WorkflowState.SERVED

    @property
    def elapsed_seconds(self) -> float | None:
        if self.finished_at is None:
            return None
        return self.finished_at - self.started_at

    def advance(self, to: WorkflowState, *, at: float) -> WorkflowSnapshot:
        snapshot = transition(current=self.history[-1], to=to, at=at)
        self.history.append(snapshot)
        if to in TERMINAL_STATES:
            self.finished_at = at
        return snapshot

    def to_json(self) -> dict[str, object]:
        out: dict[str, object] = {
            "run_id": self.run_id,
            "state": self.state.value,
            "history": [s.to_json() for s in self.history],
        }
        if self.water is not None:
            out["water"] = self.water.value
        if self.failure is not None:
            out["failure"] = self.failure
        if self.elapsed_seconds is not None:
            out["elapsed_seconds"] = self.elapsed_seconds
        return out

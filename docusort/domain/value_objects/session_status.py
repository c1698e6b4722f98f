"""
SessionStatus value object

Represents where an upload session is in the ingest/classify pipeline.
Enforces valid state transitions.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SessionState(str, Enum):
    """Valid session states."""
    INGESTING = "ingesting"
    CLASSIFYING = "classifying"
    COMPLETED = "completed"
    ERROR = "error"


_VALID_TRANSITIONS = {
    SessionState.INGESTING: {SessionState.CLASSIFYING, SessionState.ERROR},
    SessionState.CLASSIFYING: {SessionState.COMPLETED, SessionState.ERROR},
    SessionState.COMPLETED: set(),
    SessionState.ERROR: set(),
}


@dataclass(frozen=True)
class Progress:
    """A ``(current, total)`` counter; ``total`` is 0 until known."""

    current: int = 0
    total: int = 0

    def __post_init__(self):
        if self.current < 0 or self.total < 0:
            raise ValueError("progress counters must be >= 0")
        if self.total and self.current > self.total:
            raise ValueError("progress current cannot exceed total")

    @property
    def is_complete(self) -> bool:
        return self.total > 0 and self.current == self.total

    def percentage(self) -> float:
        if not self.total:
            return 0.0
        return self.current * 100.0 / self.total


@dataclass(frozen=True)
class SessionStatus:
    """Immutable session status with state transition validation."""

    state: SessionState
    error_message: Optional[str] = None

    @classmethod
    def ingesting(cls) -> SessionStatus:
        return cls(state=SessionState.INGESTING)

    @classmethod
    def error(cls, message: str) -> SessionStatus:
        return cls(state=SessionState.ERROR, error_message=message)

    def can_transition_to(self, new_state: SessionState) -> bool:
        """
        Check if transition to new state is valid.

        Valid transitions:
        - INGESTING → CLASSIFYING, ERROR
        - CLASSIFYING → COMPLETED, ERROR
        - COMPLETED, ERROR → (none - terminal states)
        """
        return new_state in _VALID_TRANSITIONS.get(self.state, set())

    def transition_to(self, new_state: SessionState, error_message: Optional[str] = None) -> SessionStatus:
        """
        Create new SessionStatus with transitioned state.

        Raises:
            ValueError: If transition is invalid
        """
        if not self.can_transition_to(new_state):
            raise ValueError(
                f"Invalid state transition from {self.state.value} to {new_state.value}"
            )
        return SessionStatus(state=new_state, error_message=error_message)

    def is_terminal(self) -> bool:
        return self.state in {SessionState.COMPLETED, SessionState.ERROR}

    def __str__(self) -> str:
        if self.error_message:
            return f"{self.state.value}: {self.error_message}"
        return self.state.value

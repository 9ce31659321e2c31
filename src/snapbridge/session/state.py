"""Session state and its closed set of transitions.

State is an immutable value; the only way to change it is reduce(), which
accepts exactly the transitions defined here.
"""

from dataclasses import dataclass, replace
from typing import Any, Optional, Union

from snapbridge.errors import SnapBridgeError
from snapbridge.snaps.models import SnapMetadata


@dataclass(frozen=True)
class ErrorInfo:
    """A failure prepared for display."""

    message: str
    cause: Optional[Any] = None

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ErrorInfo":
        if isinstance(exc, SnapBridgeError):
            return cls(message=exc.message, cause=exc.cause if exc.cause is not None else exc)
        return cls(message=str(exc) or type(exc).__name__, cause=exc)


@dataclass(frozen=True)
class SessionState:
    """Connection, capability and outcome state of one session.

    error and success persist independently; the sequence numbers record
    which of them the most recently completed operation produced.
    """

    is_capable_wallet: bool = False
    installed_snap: Optional[SnapMetadata] = None
    locked: bool = False
    error: Optional[ErrorInfo] = None
    success: Optional[str] = None
    error_seq: int = 0
    success_seq: int = 0
    outcome_seq: int = 0

    @property
    def latest_outcome(self) -> Optional[str]:
        """'success', 'error' or None, for the last completed operation."""
        if self.outcome_seq == 0:
            return None
        return "success" if self.success_seq > self.error_seq else "error"


@dataclass(frozen=True)
class SetLocked:
    locked: bool


@dataclass(frozen=True)
class SetError:
    error: ErrorInfo


@dataclass(frozen=True)
class SetSuccess:
    message: str


@dataclass(frozen=True)
class SetInstalled:
    snap: Optional[SnapMetadata]


@dataclass(frozen=True)
class SetCapability:
    capable: bool


Transition = Union[SetLocked, SetError, SetSuccess, SetInstalled, SetCapability]


def reduce(state: SessionState, transition: Transition) -> SessionState:
    """Apply one transition and return the new state."""
    if isinstance(transition, SetLocked):
        return replace(state, locked=transition.locked)

    if isinstance(transition, SetError):
        seq = state.outcome_seq + 1
        return replace(state, error=transition.error, error_seq=seq, outcome_seq=seq)

    if isinstance(transition, SetSuccess):
        seq = state.outcome_seq + 1
        return replace(state, success=transition.message, success_seq=seq, outcome_seq=seq)

    if isinstance(transition, SetInstalled):
        return replace(state, installed_snap=transition.snap)

    if isinstance(transition, SetCapability):
        return replace(state, is_capable_wallet=transition.capable)

    raise TypeError(f"Unknown session transition: {transition!r}")

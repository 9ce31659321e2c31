"""Session state, locking and user-triggered operations."""

from snapbridge.session.lock import operation_lock
from snapbridge.session.operations import OperationOutcome, SnapSession, format_balance
from snapbridge.session.state import (
    ErrorInfo,
    SessionState,
    SetCapability,
    SetError,
    SetInstalled,
    SetLocked,
    SetSuccess,
    Transition,
    reduce,
)
from snapbridge.session.store import SessionStore

__all__ = [
    "ErrorInfo",
    "SessionState",
    "SetCapability",
    "SetError",
    "SetInstalled",
    "SetLocked",
    "SetSuccess",
    "Transition",
    "reduce",
    "SessionStore",
    "operation_lock",
    "OperationOutcome",
    "SnapSession",
    "format_balance",
]

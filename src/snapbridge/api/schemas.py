"""Response contracts for the snap endpoints."""

from typing import Any, Optional

from pydantic import BaseModel, Field

from snapbridge.session.operations import OperationOutcome, SnapSession
from snapbridge.session.state import ErrorInfo
from snapbridge.snaps.models import SnapMetadata


class ErrorBody(BaseModel):
    """An error banner."""

    message: str

    @classmethod
    def from_info(cls, info: Optional[ErrorInfo]) -> Optional["ErrorBody"]:
        return cls(message=info.message) if info else None


class SessionStateResponse(BaseModel):
    """Current session state plus the actions it allows."""

    is_capable_wallet: bool
    installed_snap: Optional[SnapMetadata] = None
    locked: bool
    error: Optional[ErrorBody] = None
    success: Optional[str] = None
    latest_outcome: Optional[str] = Field(
        None, description="Which banner reflects the last completed operation"
    )
    can_connect: bool
    actions_enabled: bool
    swap_configured: bool = Field(
        True, description="Whether the output token is set, which transact requires"
    )

    @classmethod
    def from_session(cls, session: SnapSession) -> "SessionStateResponse":
        state = session.state
        return cls(
            is_capable_wallet=state.is_capable_wallet,
            installed_snap=state.installed_snap,
            locked=state.locked,
            error=ErrorBody.from_info(state.error),
            success=state.success,
            latest_outcome=state.latest_outcome,
            can_connect=session.can_connect,
            actions_enabled=session.actions_enabled,
            swap_configured=session.swap_configured,
        )


class OperationResponse(BaseModel):
    """Outcome of one triggered operation."""

    operation: str
    success: bool
    message: Optional[str] = None
    error: Optional[ErrorBody] = None
    result: Any = None
    state: SessionStateResponse

    @classmethod
    def build(cls, outcome: OperationOutcome, session: SnapSession) -> "OperationResponse":
        result = outcome.result
        if isinstance(result, BaseModel):
            result = result.model_dump()
        return cls(
            operation=outcome.operation,
            success=outcome.success,
            message=outcome.message,
            error=ErrorBody.from_info(outcome.error),
            result=result,
            state=SessionStateResponse.from_session(session),
        )

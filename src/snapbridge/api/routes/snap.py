"""Snap action endpoints.

Each POST triggers one operation. Operations that ran return 200 whatever
their outcome; requests refused by gating (lock held, wallet not capable,
snap missing) never reach the wallet and return 409 / 412.
"""

from fastapi import APIRouter, Depends, HTTPException, Request

from snapbridge.api.schemas import OperationResponse, SessionStateResponse
from snapbridge.errors import ActionUnavailableError, OperationInProgressError
from snapbridge.session.operations import OperationOutcome, SnapSession

router = APIRouter(prefix="/snap")


def get_session(request: Request) -> SnapSession:
    return request.app.state.session


async def _trigger(session: SnapSession, action) -> OperationResponse:
    try:
        outcome: OperationOutcome = await action()
    except OperationInProgressError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except ActionUnavailableError as e:
        raise HTTPException(status_code=412, detail=e.message)
    return OperationResponse.build(outcome, session)


@router.get("/state", response_model=SessionStateResponse)
async def get_state(session: SnapSession = Depends(get_session)) -> SessionStateResponse:
    """Get the current session state."""
    return SessionStateResponse.from_session(session)


@router.post("/refresh", response_model=SessionStateResponse)
async def refresh(session: SnapSession = Depends(get_session)) -> SessionStateResponse:
    """Re-detect wallet capability and the installed snap."""
    await session.refresh()
    return SessionStateResponse.from_session(session)


@router.post("/connect", response_model=OperationResponse)
async def connect(session: SnapSession = Depends(get_session)) -> OperationResponse:
    """Install or enable the snap in the wallet."""
    return await _trigger(session, session.connect)


@router.post("/login", response_model=OperationResponse)
async def login(session: SnapSession = Depends(get_session)) -> OperationResponse:
    """Prompt the user to log into their snap account."""
    return await _trigger(session, session.login)


@router.post("/balance", response_model=OperationResponse)
async def balance(session: SnapSession = Depends(get_session)) -> OperationResponse:
    """Request the snap account balance."""
    return await _trigger(session, session.request_balance)


@router.post("/transact", response_model=OperationResponse)
async def transact(session: SnapSession = Depends(get_session)) -> OperationResponse:
    """Build the fixed swap and submit it through the snap.

    THIS INDUCES AN ON-CHAIN ACTION if the user approves the wallet prompt.
    """
    return await _trigger(session, session.transact)

"""User-triggered snap operations.

SnapSession is the trigger layer: it gates every action on the session
state, runs it under the session lock and records exactly one outcome
(success message or error) per operation. No failure escapes an operation;
retrying is always a new call.
"""

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Awaitable, Callable, Mapping, Optional

from snapbridge.config import Settings, get_settings
from snapbridge.constants import SNAP_REQUEST_BALANCE, SNAP_TRANSACT
from snapbridge.errors import (
    ActionUnavailableError,
    InvocationError,
    OperationInProgressError,
    SnapConnectionError,
)
from snapbridge.gateway.base import ProviderGateway
from snapbridge.session.lock import operation_lock
from snapbridge.session.state import (
    ErrorInfo,
    SessionState,
    SetCapability,
    SetError,
    SetInstalled,
    SetSuccess,
)
from snapbridge.session.store import SessionStore
from snapbridge.snaps.connector import connect_snap
from snapbridge.snaps.discovery import detect_capability, get_snap
from snapbridge.snaps.invoker import SnapInvoker
from snapbridge.swap.builder import build_swap

logger = logging.getLogger(__name__)

MILLI = Decimal(1000)
THREE_PLACES = Decimal("0.001")


def format_balance(milli_units: Any) -> str:
    """Convert a balance in milli-units to a whole-unit string, e.g. 1234 -> "1.234"."""
    if isinstance(milli_units, bool):
        milli_units = None
    try:
        value = Decimal(str(milli_units))
    except (InvalidOperation, ValueError):
        raise InvocationError(
            f"Snap returned a non-numeric balance: {milli_units!r}",
            method=SNAP_REQUEST_BALANCE,
        )
    if not value.is_finite():
        raise InvocationError(
            f"Snap returned a non-numeric balance: {milli_units!r}",
            method=SNAP_REQUEST_BALANCE,
        )
    return str((value / MILLI).quantize(THREE_PLACES, rounding=ROUND_HALF_UP))


@dataclass
class OperationOutcome:
    """What one operation recorded in the session."""

    operation: str
    success: bool
    message: Optional[str] = None
    error: Optional[ErrorInfo] = None
    result: Any = None


class SnapSession:
    """One client session against a wallet and its snap."""

    def __init__(
        self,
        gateway: ProviderGateway,
        store: Optional[SessionStore] = None,
        settings: Optional[Settings] = None,
    ):
        self.gateway = gateway
        self.store = store or SessionStore()
        self.settings = settings or get_settings()
        self.invoker = SnapInvoker(gateway, self.settings.snap_origin)

    @property
    def state(self) -> SessionState:
        return self.store.state

    @property
    def can_connect(self) -> bool:
        return self.state.is_capable_wallet and not self.state.locked

    @property
    def actions_enabled(self) -> bool:
        state = self.state
        return state.is_capable_wallet and state.installed_snap is not None and not state.locked

    @property
    def swap_configured(self) -> bool:
        """Whether an output token is set, which transact requires."""
        return bool(self.settings.token_out)

    async def refresh(self) -> SessionState:
        """Re-detect wallet capability and the installed snap. Never raises."""
        capable = await detect_capability(self.gateway)
        self.store.dispatch(SetCapability(capable))

        snap = None
        if capable:
            snap = await get_snap(
                self.gateway, self.settings.snap_origin, self.settings.snap_version
            )
        self.store.dispatch(SetInstalled(snap))
        if not self.swap_configured:
            logger.warning("TOKEN_OUT is not configured; transact is unavailable")
        return self.state

    def _check_available(self, operation: str, needs_snap: bool) -> None:
        state = self.state
        if state.locked:
            raise OperationInProgressError(operation)
        if not state.is_capable_wallet:
            raise ActionUnavailableError(operation, "the wallet does not support snaps")
        if needs_snap and state.installed_snap is None:
            raise ActionUnavailableError(operation, "the snap is not installed")

    async def _run(
        self,
        operation: str,
        action: Callable[[], Awaitable[tuple[str, Any]]],
        needs_snap: bool = True,
    ) -> OperationOutcome:
        self._check_available(operation, needs_snap)

        async with operation_lock(self.store, operation):
            try:
                message, result = await action()
            except Exception as e:
                logger.error(f"Operation {operation} failed: {e}")
                error = ErrorInfo.from_exception(e)
                self.store.dispatch(SetError(error))
                return OperationOutcome(operation=operation, success=False, error=error)

            self.store.dispatch(SetSuccess(message))
            logger.info(f"Operation {operation} succeeded: {message}")
            return OperationOutcome(
                operation=operation, success=True, message=message, result=result
            )

    async def connect(self) -> OperationOutcome:
        """Install/enable the snap and refresh the installed-snap state."""
        return await self._run("connect", self._connect, needs_snap=False)

    async def login(self) -> OperationOutcome:
        """Prompt the user to log into their snap account."""
        return await self._run("login", self._login)

    async def request_balance(self) -> OperationOutcome:
        """Fetch and format the snap account balance."""
        return await self._run("balance", self._request_balance)

    async def transact(self) -> OperationOutcome:
        """Build the fixed swap and have the snap execute it."""
        if not self.swap_configured:
            raise ActionUnavailableError(
                "transact", "the output token (TOKEN_OUT) is not configured"
            )
        return await self._run("transact", self._transact)

    async def _connect(self) -> tuple[str, Any]:
        origin = self.settings.snap_origin
        version = self.settings.snap_version
        await connect_snap(self.gateway, origin, {"version": version} if version else {})

        snap = await get_snap(self.gateway, origin, version)
        self.store.dispatch(SetInstalled(snap))
        if snap is None:
            raise SnapConnectionError(f"Snap {origin} was not found after connecting")
        return f"Snap {origin} connected.", snap

    async def _login(self) -> tuple[str, Any]:
        (await self.invoker.initialize()).unwrap()
        return "User successfully logged in.", None

    async def _request_balance(self) -> tuple[str, Any]:
        raw = (await self.invoker.request_balance()).unwrap()
        balance = format_balance(raw)
        return (
            f"User's {self.settings.account_label} balance is "
            f"{balance} {self.settings.balance_symbol}.",
            balance,
        )

    async def _transact(self) -> tuple[str, Any]:
        settings = self.settings
        transaction = await build_swap(
            self.gateway,
            router_address=settings.router_address,
            token_in=settings.wrapped_ether,
            token_out=settings.token_out,
            fee_tier=settings.pool_fee,
            amount_in_ether=settings.swap_amount_ether,
            mainnet_chain_id=settings.mainnet_chain_id,
        )

        receipt = (await self.invoker.transact(transaction.to_snap_payload())).unwrap()
        tx_hash = receipt.get("transactionHash") if isinstance(receipt, Mapping) else None
        if not tx_hash:
            raise InvocationError(
                "Snap did not return a transaction hash",
                method=SNAP_TRANSACT,
                cause=receipt,
            )
        return f"Transaction successful; its hash was {tx_hash}.", receipt

"""Uniform invocation of remote snap methods.

Every domain operation (initialize, requestBalance, transact) goes through
invoke_snap, so the wallet always sees the same call shape:
wallet_invokeSnap [snap_id, {method, params?}].
"""

import logging
from typing import Any, Mapping, Optional

from snapbridge.constants import (
    METHOD_INVOKE_SNAP,
    SNAP_INITIALIZE,
    SNAP_REQUEST_BALANCE,
    SNAP_TRANSACT,
)
from snapbridge.errors import InvocationError
from snapbridge.gateway.base import ProviderGateway
from snapbridge.snaps.models import InvocationRequest, InvocationResult

logger = logging.getLogger(__name__)


async def invoke_snap(
    gateway: ProviderGateway,
    snap_id: str,
    request: InvocationRequest,
) -> InvocationResult:
    """Invoke a method on an installed snap.

    Args:
        gateway: Wallet gateway
        snap_id: Target snap origin id
        request: Method name and parameters

    Returns:
        InvocationResult carrying the raw result or an InvocationError
    """
    logger.debug("Invoking snap %s method %s", snap_id, request.method)
    result = await gateway.request(METHOD_INVOKE_SNAP, [snap_id, request.to_payload()])

    if not result.success:
        cause = result.error
        message = cause.message if cause else "unknown error"
        logger.info("Snap method %s failed: %s", request.method, message)
        return InvocationResult(
            success=False,
            method=request.method,
            error=InvocationError(
                f"Snap method '{request.method}' failed: {message}",
                method=request.method,
                cause=cause,
            ),
        )

    return InvocationResult(success=True, method=request.method, result=result.result)


class SnapInvoker:
    """Invoker bound to one snap, exposing its domain methods."""

    def __init__(self, gateway: ProviderGateway, snap_id: str):
        self.gateway = gateway
        self.snap_id = snap_id

    async def invoke(
        self, method: str, params: Optional[Mapping[str, Any]] = None
    ) -> InvocationResult:
        return await invoke_snap(self.gateway, self.snap_id, InvocationRequest(method, params))

    async def initialize(self) -> InvocationResult:
        """Prompt the user to log into their snap account."""
        return await self.invoke(SNAP_INITIALIZE)

    async def request_balance(self) -> InvocationResult:
        """Request the account balance in milli-units."""
        return await self.invoke(SNAP_REQUEST_BALANCE)

    async def transact(self, transaction: Mapping[str, Any]) -> InvocationResult:
        """Hand an unsigned transaction to the snap for private execution."""
        return await self.invoke(SNAP_TRANSACT, transaction)

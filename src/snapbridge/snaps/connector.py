"""Snap installation / permission requests."""

import logging
from typing import Any, Mapping, Optional

from snapbridge.constants import METHOD_ENABLE
from snapbridge.errors import SnapConnectionError
from snapbridge.gateway.base import ProviderGateway

logger = logging.getLogger(__name__)


def build_enable_params(snap_id: str, params: Optional[Mapping[str, Any]] = None) -> list:
    """Build wallet_enable parameters requesting one snap."""
    return [{"wallet_snap": {snap_id: {"params": dict(params or {})}}}]


async def connect_snap(
    gateway: ProviderGateway,
    snap_id: str,
    params: Optional[Mapping[str, Any]] = None,
) -> None:
    """Ask the wallet to enable (installing if needed) a snap.

    Enabling an already-installed snap succeeds without changes.

    Args:
        gateway: Wallet gateway
        snap_id: Snap origin id
        params: Install parameters, e.g. {"version": "0.1.0"}

    Raises:
        SnapConnectionError: If the user declines or installation fails
    """
    logger.info("Requesting snap connection: %s", snap_id)
    result = await gateway.request(METHOD_ENABLE, build_enable_params(snap_id, params))

    if not result.success:
        error = result.error
        raise SnapConnectionError(
            f"Failed to connect snap {snap_id}: {error.message if error else 'unknown error'}",
            cause=error,
        )

    logger.info("Snap connected: %s", snap_id)

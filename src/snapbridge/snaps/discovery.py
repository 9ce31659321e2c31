"""Capability detection and installed-snap discovery.

Both checks run opportunistically when a session refreshes, so neither may
raise: an undetectable wallet is simply not capable, and a failed listing
is treated as "nothing installed".
"""

import logging
from typing import Optional, Sequence

from pydantic import ValidationError

from snapbridge.constants import METHOD_CLIENT_VERSION, METHOD_GET_SNAPS
from snapbridge.errors import DiscoveryError
from snapbridge.gateway.base import ProviderGateway
from snapbridge.snaps.models import SnapMetadata

logger = logging.getLogger(__name__)

FLASK_MARKER = "flask"


async def detect_capability(gateway: ProviderGateway) -> bool:
    """Check whether the wallet is a snaps-capable (Flask) build.

    Args:
        gateway: Wallet gateway

    Returns:
        True if the client version identifies a Flask wallet
    """
    result = await gateway.request(METHOD_CLIENT_VERSION)
    if not result.success:
        logger.info("Capability detection failed, assuming no snap support: %s", result.error)
        return False

    return FLASK_MARKER in str(result.result or "").lower()


def parse_snaps(payload: object) -> list[SnapMetadata]:
    """Parse a wallet_getSnaps response (mapping of id -> snap record)."""
    if not isinstance(payload, dict):
        raise DiscoveryError(f"Unexpected wallet_getSnaps payload: {type(payload).__name__}")

    snaps = []
    for snap_id, record in payload.items():
        if not isinstance(record, dict):
            raise DiscoveryError(f"Malformed snap record for {snap_id}")
        try:
            snaps.append(SnapMetadata.model_validate({"id": snap_id, **record}))
        except ValidationError as e:
            raise DiscoveryError(f"Malformed snap record for {snap_id}", cause=e)
    return snaps


async def list_installed_snaps(gateway: ProviderGateway) -> list[SnapMetadata]:
    """List snaps installed in the wallet.

    Returns:
        Installed snaps, or an empty list if the wallet could not be queried
    """
    result = await gateway.request(METHOD_GET_SNAPS)
    if not result.success:
        logger.warning("Failed to obtain installed snaps: %s", result.error)
        return []

    try:
        return parse_snaps(result.result)
    except DiscoveryError as e:
        logger.warning("Failed to obtain installed snaps: %s", e)
        return []


def find_snap(
    snaps: Sequence[SnapMetadata],
    target_id: str,
    version: Optional[str] = None,
) -> Optional[SnapMetadata]:
    """Find a snap by exact id and, if given, exact version."""
    for snap in snaps:
        if snap.id == target_id and (not version or snap.version == version):
            return snap
    return None


async def get_snap(
    gateway: ProviderGateway,
    target_id: str,
    version: Optional[str] = None,
) -> Optional[SnapMetadata]:
    """Query the wallet and return the target snap if it is installed."""
    return find_snap(await list_installed_snaps(gateway), target_id, version)

"""Snap discovery, connection and invocation."""

from snapbridge.snaps.connector import connect_snap
from snapbridge.snaps.discovery import (
    detect_capability,
    find_snap,
    get_snap,
    list_installed_snaps,
)
from snapbridge.snaps.invoker import SnapInvoker, invoke_snap
from snapbridge.snaps.models import InvocationRequest, InvocationResult, SnapMetadata

__all__ = [
    "SnapMetadata",
    "InvocationRequest",
    "InvocationResult",
    "detect_capability",
    "list_installed_snaps",
    "find_snap",
    "get_snap",
    "connect_snap",
    "invoke_snap",
    "SnapInvoker",
]

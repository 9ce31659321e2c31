"""Dry-run wallet for development and testing (no real wallet)."""

import hashlib
import json
import logging
from typing import Any, Optional

from snapbridge.constants import (
    METHOD_ACCOUNTS,
    METHOD_CHAIN_ID,
    METHOD_CLIENT_VERSION,
    METHOD_ENABLE,
    METHOD_GET_SNAPS,
    METHOD_INVOKE_SNAP,
    SNAP_INITIALIZE,
    SNAP_REQUEST_BALANCE,
    SNAP_TRANSACT,
    UNAUTHORIZED_CODE,
    USER_REJECTED_CODE,
)
from snapbridge.errors import ProviderError
from snapbridge.gateway.base import ProviderGateway, RpcResult

logger = logging.getLogger(__name__)

FLASK_CLIENT_VERSION = "MetaMask/v10.25.0-flask.0"
DEFAULT_ACCOUNT = "0x000000000000000000000000000000000000dEaD"


class DryRunWallet(ProviderGateway):
    """Simulated Flask wallet with an in-memory snap registry.

    Every request is recorded in ``calls`` so tests can assert which wallet
    methods were reached. Failures can be scripted per wallet method with
    ``fail_method`` or per snap method with ``fail_snap_method``.
    """

    def __init__(
        self,
        client_version: str = FLASK_CLIENT_VERSION,
        accounts: Optional[list[str]] = None,
        chain_id: int = 1,
        balance: int = 0,
        installed: Optional[dict[str, str]] = None,
        default_version: str = "0.1.0",
    ):
        self.client_version = client_version
        self.accounts = list(accounts) if accounts is not None else [DEFAULT_ACCOUNT]
        self.chain_id = chain_id
        self.balance = balance
        self.default_version = default_version
        self.snaps: dict[str, dict] = {}
        self.logged_in = False
        self.submitted: list[dict] = []
        self.calls: list[tuple[str, Any]] = []
        self._method_failures: dict[str, ProviderError] = {}
        self._snap_failures: dict[str, ProviderError] = {}

        for snap_id, version in (installed or {}).items():
            self._install(snap_id, version)

    @property
    def name(self) -> str:
        return "dryrun"

    def fail_method(self, method: str, error: Optional[ProviderError] = None) -> None:
        """Make every call to a wallet method fail."""
        self._method_failures[method] = error or ProviderError(
            "User rejected request", code=USER_REJECTED_CODE
        )

    def fail_snap_method(self, method: str, error: Optional[ProviderError] = None) -> None:
        """Make every invocation of a snap method fail."""
        self._snap_failures[method] = error or ProviderError(
            "User rejected request", code=USER_REJECTED_CODE
        )

    def clear_failures(self) -> None:
        self._method_failures.clear()
        self._snap_failures.clear()

    async def request(self, method: str, params: Any = None) -> RpcResult:
        self.calls.append((method, params))
        logger.debug("dry-run wallet request: %s", method)

        if method in self._method_failures:
            return RpcResult.fail(self._method_failures[method])

        try:
            if method == METHOD_CLIENT_VERSION:
                return RpcResult.ok(self.client_version)
            if method == METHOD_ACCOUNTS:
                return RpcResult.ok(list(self.accounts))
            if method == METHOD_CHAIN_ID:
                return RpcResult.ok(hex(self.chain_id))
            if method == METHOD_GET_SNAPS:
                return RpcResult.ok({k: dict(v) for k, v in self.snaps.items()})
            if method == METHOD_ENABLE:
                return RpcResult.ok(self._enable(params))
            if method == METHOD_INVOKE_SNAP:
                return RpcResult.ok(self._invoke(params))
        except ProviderError as e:
            return RpcResult.fail(e)

        return RpcResult.fail(
            ProviderError(f"The method '{method}' does not exist", code=-32601)
        )

    def _install(self, snap_id: str, version: str) -> dict:
        snap = {"id": snap_id, "version": version, "enabled": True, "blocked": False}
        self.snaps[snap_id] = snap
        return snap

    def _enable(self, params: Any) -> dict:
        try:
            requested = params[0]["wallet_snap"]
        except (IndexError, KeyError, TypeError):
            raise ProviderError("Invalid wallet_enable parameters", code=-32602)

        result = {}
        for snap_id, options in requested.items():
            existing = self.snaps.get(snap_id)
            if existing is not None:
                result[snap_id] = dict(existing)
                continue
            version = (options.get("params") or {}).get("version") or self.default_version
            result[snap_id] = dict(self._install(snap_id, version))
        return {"accounts": list(self.accounts), "snaps": result}

    def _invoke(self, params: Any) -> Any:
        try:
            snap_id, payload = params[0], params[1]
            snap_method = payload["method"]
        except (IndexError, KeyError, TypeError):
            raise ProviderError("Invalid wallet_invokeSnap parameters", code=-32602)

        if snap_id not in self.snaps:
            raise ProviderError(
                f"Snap \"{snap_id}\" is not permitted for this origin",
                code=UNAUTHORIZED_CODE,
            )
        if snap_method in self._snap_failures:
            raise self._snap_failures[snap_method]

        if snap_method == SNAP_INITIALIZE:
            self.logged_in = True
            return None
        if snap_method == SNAP_REQUEST_BALANCE:
            return self.balance
        if snap_method == SNAP_TRANSACT:
            tx = payload.get("params") or {}
            self.submitted.append(tx)
            digest = hashlib.sha256(json.dumps(tx, sort_keys=True).encode()).hexdigest()
            return {"transactionHash": f"0x{digest}", "status": 1}

        raise ProviderError(f"Method not found: {snap_method}", code=-32601)

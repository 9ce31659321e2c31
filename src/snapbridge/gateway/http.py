"""JSON-RPC gateway to a wallet bridge reachable over HTTP."""

import itertools
import logging
from typing import Any, Optional

import httpx

from snapbridge.errors import ProviderError, ProviderUnavailableError
from snapbridge.gateway.base import ProviderGateway, RpcResult

logger = logging.getLogger(__name__)


class HttpProviderGateway(ProviderGateway):
    """Forwards wallet requests as JSON-RPC 2.0 calls.

    A single attempt is made per request. Transport failures mean no wallet
    is reachable and map to ProviderUnavailableError; JSON-RPC error objects
    map to ProviderError with the wallet's code and data.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 120.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize gateway.

        Args:
            url: Wallet bridge JSON-RPC endpoint
            timeout: Transport timeout in seconds
            client: Optional preconfigured client (tests inject a mock transport)
        """
        self.url = url
        self.timeout = timeout
        self._http_client = client
        self._ids = itertools.count(1)

    @property
    def name(self) -> str:
        return "http"

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(timeout=self.timeout)
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def request(self, method: str, params: Any = None) -> RpcResult:
        if not self.url:
            return RpcResult.fail(
                ProviderUnavailableError("No wallet endpoint configured")
            )

        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method}
        if params is not None:
            payload["params"] = params

        try:
            client = await self._get_client()
            response = await client.post(self.url, json=payload)
        except httpx.TransportError as e:
            logger.warning(f"Wallet bridge unreachable for {method}: {e}")
            return RpcResult.fail(
                ProviderUnavailableError(f"Wallet unreachable: {e}", cause=e)
            )

        if response.status_code != 200:
            return RpcResult.fail(
                ProviderError(
                    f"Wallet bridge returned HTTP {response.status_code}",
                    code=response.status_code,
                    data=response.text,
                )
            )

        try:
            body = response.json()
        except ValueError as e:
            return RpcResult.fail(
                ProviderError("Wallet bridge returned invalid JSON", cause=e)
            )

        error = body.get("error") if isinstance(body, dict) else None
        if error and not isinstance(error, dict):
            return RpcResult.fail(ProviderError(str(error), data=error))
        if error:
            return RpcResult.fail(
                ProviderError(
                    error.get("message", "Unknown wallet error"),
                    code=error.get("code"),
                    data=error.get("data"),
                )
            )

        if not isinstance(body, dict) or "result" not in body:
            return RpcResult.fail(ProviderError("Malformed JSON-RPC response", data=body))

        return RpcResult.ok(body["result"])

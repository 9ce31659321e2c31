"""Provider gateway base interface.

The gateway is the only channel to the host wallet. Every call is a single
attempt whose outcome comes back as an RpcResult; failures are carried, not
raised, so callers decide how to surface them.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional

from snapbridge.errors import ProviderError, ProviderUnavailableError


@dataclass
class RpcResult:
    """Outcome of one wallet request."""

    success: bool
    result: Any = None
    error: Optional[ProviderError] = None

    @classmethod
    def ok(cls, result: Any = None) -> "RpcResult":
        return cls(success=True, result=result)

    @classmethod
    def fail(cls, error: ProviderError) -> "RpcResult":
        return cls(success=False, error=error)

    def unwrap(self) -> Any:
        """Return the result or raise the carried error."""
        if not self.success:
            raise self.error or ProviderError("Wallet request failed")
        return self.result


class ProviderGateway(ABC):
    """Abstract base class for wallet request channels."""

    @abstractmethod
    async def request(self, method: str, params: Any = None) -> RpcResult:
        """Send one request to the wallet.

        Args:
            method: Wallet RPC method name
            params: Positional (list) or named (dict) parameters

        Returns:
            RpcResult with the method-specific result or the failure
        """
        raise NotImplementedError()

    async def close(self) -> None:
        """Release transport resources."""
        return None

    @property
    @abstractmethod
    def name(self) -> str:
        """Gateway name."""
        raise NotImplementedError()


class UnavailableGateway(ProviderGateway):
    """Gateway used when no compatible wallet is present."""

    @property
    def name(self) -> str:
        return "none"

    async def request(self, method: str, params: Any = None) -> RpcResult:
        return RpcResult.fail(
            ProviderUnavailableError("No compatible wallet detected")
        )

"""Gateway factory for the configured wallet provider."""

from snapbridge.config import get_settings
from snapbridge.gateway.base import ProviderGateway, UnavailableGateway
from snapbridge.gateway.dryrun import DryRunWallet
from snapbridge.gateway.http import HttpProviderGateway

# Singleton instance
_gateway_instance: ProviderGateway | None = None


def get_gateway() -> ProviderGateway:
    """Get the configured wallet gateway.

    Gateway is selected based on WALLET_PROVIDER environment variable:
    - dryrun (default): Simulated Flask wallet for development
    - http: JSON-RPC wallet bridge at WALLET_RPC_URL
    - none: No wallet available; every request fails

    Returns:
        Configured ProviderGateway instance
    """
    global _gateway_instance

    if _gateway_instance is not None:
        return _gateway_instance

    settings = get_settings()
    provider_name = settings.wallet_provider.lower()

    if provider_name == "http":
        _gateway_instance = HttpProviderGateway(
            url=settings.wallet_rpc_url,
            timeout=settings.wallet_timeout,
        )
    elif provider_name == "none":
        _gateway_instance = UnavailableGateway()
    else:
        _gateway_instance = DryRunWallet()

    return _gateway_instance


def reset_gateway() -> None:
    """Reset gateway instance (useful for testing)."""
    global _gateway_instance
    _gateway_instance = None

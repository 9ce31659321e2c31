"""Application configuration using pydantic-settings.

Holds the static identifiers the bridge needs: snap origin, wallet
endpoint, router/token addresses and the fixed swap parameters.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from snapbridge.constants import (
    DEFAULT_SNAP_ORIGIN,
    MAINNET_CHAIN_ID,
    SWAP_ROUTER_02,
    WRAPPED_ETHER,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=True, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Log level when debug is off")

    # ======================
    # API
    # ======================
    api_host: str = Field(default="127.0.0.1", description="API server host")
    api_port: int = Field(default=8000, description="API server port")

    # ======================
    # Wallet provider
    # ======================
    wallet_provider: str = Field(
        default="dryrun", description="Wallet gateway: dryrun, http or none"
    )
    wallet_rpc_url: str = Field(
        default="", description="JSON-RPC endpoint of the wallet bridge (http provider)"
    )
    wallet_timeout: float = Field(
        default=120.0, description="Transport timeout for wallet requests in seconds"
    )

    # ======================
    # Snap
    # ======================
    snap_origin: str = Field(default=DEFAULT_SNAP_ORIGIN, description="Snap origin id")
    snap_version: Optional[str] = Field(
        default=None, description="Required snap version (None = any)"
    )

    # ======================
    # Swap
    # ======================
    router_address: str = Field(default=SWAP_ROUTER_02, description="Swap router address")
    wrapped_ether: str = Field(default=WRAPPED_ETHER, description="Input token (WETH)")
    token_out: str = Field(default="", description="Output token address")
    pool_fee: int = Field(default=3000, description="Pool fee tier in hundredths of a bip")
    swap_amount_ether: str = Field(default="0.1", description="Fixed swap input in ether")
    mainnet_chain_id: int = Field(default=MAINNET_CHAIN_ID, description="Required chain id")
    balance_symbol: str = Field(default="ETH", description="Currency shown for balances")
    account_label: str = Field(default="Firn", description="Account name shown for balances")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def get_safe_dict(self) -> dict:
        """Return settings dict with endpoint credentials redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "wallet": {
                "provider": self.wallet_provider,
                "rpc_url": self._redact_url(self.wallet_rpc_url) or "(not set)",
                "timeout": self.wallet_timeout,
            },
            "snap": {
                "origin": self.snap_origin,
                "version": self.snap_version or "(any)",
            },
            "swap": {
                "router": self.router_address,
                "token_in": self.wrapped_ether,
                "token_out": self.token_out or "(not set)",
                "fee": self.pool_fee,
                "amount": self.swap_amount_ether,
                "chain_id": self.mainnet_chain_id,
            },
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact credentials embedded in a URL."""
        if "://" in url and "@" in url:
            proto, rest = url.split("://", 1)
            creds, host = rest.rsplit("@", 1)
            if ":" in creds:
                user, _ = creds.split(":", 1)
                return f"{proto}://{user}:***@{host}"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""Wallet request channels."""

from snapbridge.gateway.base import ProviderGateway, RpcResult, UnavailableGateway
from snapbridge.gateway.dryrun import DryRunWallet
from snapbridge.gateway.factory import get_gateway, reset_gateway
from snapbridge.gateway.http import HttpProviderGateway

__all__ = [
    "ProviderGateway",
    "RpcResult",
    "UnavailableGateway",
    "DryRunWallet",
    "HttpProviderGateway",
    "get_gateway",
    "reset_gateway",
]

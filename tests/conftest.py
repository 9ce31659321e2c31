"""Pytest configuration and fixtures."""

import os

import pytest
import pytest_asyncio

# Set test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["WALLET_PROVIDER"] = "dryrun"
os.environ["DEBUG"] = "true"

from snapbridge.config import Settings
from snapbridge.constants import DEFAULT_SNAP_ORIGIN
from snapbridge.gateway.dryrun import DryRunWallet
from snapbridge.gateway.factory import reset_gateway
from snapbridge.session.operations import SnapSession

ACCOUNT = "0x2222222222222222222222222222222222222222"
SECOND_ACCOUNT = "0x3333333333333333333333333333333333333333"
TOKEN_OUT = "0x1111111111111111111111111111111111111111"


@pytest.fixture(autouse=True)
def _reset_gateway():
    """Drop the cached gateway between tests."""
    reset_gateway()
    yield
    reset_gateway()


@pytest.fixture
def settings() -> Settings:
    """Settings with an output token configured."""
    return Settings(token_out=TOKEN_OUT, snap_version=None)


@pytest.fixture
def wallet() -> DryRunWallet:
    """Flask wallet without the snap installed."""
    return DryRunWallet(accounts=[ACCOUNT, SECOND_ACCOUNT], balance=1234)


@pytest.fixture
def installed_wallet() -> DryRunWallet:
    """Flask wallet with the snap already installed."""
    return DryRunWallet(
        accounts=[ACCOUNT, SECOND_ACCOUNT],
        balance=1234,
        installed={DEFAULT_SNAP_ORIGIN: "0.1.0"},
    )


@pytest_asyncio.fixture
async def session(installed_wallet, settings) -> SnapSession:
    """Refreshed session over a wallet with the snap installed."""
    session = SnapSession(installed_wallet, settings=settings)
    await session.refresh()
    return session

"""Tests for user-triggered snap operations."""

import asyncio

import pytest

from snapbridge.config import Settings
from snapbridge.constants import DEFAULT_SNAP_ORIGIN, METHOD_ENABLE, METHOD_INVOKE_SNAP
from snapbridge.errors import (
    ActionUnavailableError,
    InvocationError,
    OperationInProgressError,
    ProviderError,
    WrongNetworkError,
)
from snapbridge.gateway.base import UnavailableGateway
from snapbridge.gateway.dryrun import DryRunWallet
from snapbridge.session.operations import SnapSession, format_balance

from tests.conftest import ACCOUNT, TOKEN_OUT


class BlockingWallet(DryRunWallet):
    """Wallet whose snap invocations wait until released."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.entered = asyncio.Event()
        self.release = asyncio.Event()

    async def request(self, method, params=None):
        if method == METHOD_INVOKE_SNAP:
            self.entered.set()
            await self.release.wait()
        return await super().request(method, params)


class TestFormatBalance:
    """Tests for milli-unit balance formatting."""

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (1234, "1.234"),
            (0, "0.000"),
            (1000, "1.000"),
            (5, "0.005"),
            ("2500", "2.500"),
            (1234.5, "1.235"),
        ],
    )
    def test_format(self, raw, expected):
        assert format_balance(raw) == expected

    @pytest.mark.parametrize("raw", [None, "lots", True, float("nan")])
    def test_non_numeric_rejected(self, raw):
        with pytest.raises(InvocationError):
            format_balance(raw)


class TestRefresh:
    """Tests for capability and snap discovery on refresh."""

    @pytest.mark.asyncio
    async def test_refresh_installed(self, session):
        state = session.state

        assert state.is_capable_wallet is True
        assert state.installed_snap.id == DEFAULT_SNAP_ORIGIN
        assert session.actions_enabled is True

    @pytest.mark.asyncio
    async def test_refresh_not_installed(self, wallet, settings):
        session = SnapSession(wallet, settings=settings)
        await session.refresh()

        assert session.state.is_capable_wallet is True
        assert session.state.installed_snap is None
        assert session.can_connect is True
        assert session.actions_enabled is False

    @pytest.mark.asyncio
    async def test_refresh_without_wallet(self, settings):
        session = SnapSession(UnavailableGateway(), settings=settings)
        state = await session.refresh()

        assert state.is_capable_wallet is False
        assert state.error is None

    @pytest.mark.asyncio
    async def test_version_mismatch_not_installed(self, installed_wallet):
        session = SnapSession(
            installed_wallet, settings=Settings(token_out=TOKEN_OUT, snap_version="9.9.9")
        )
        await session.refresh()
        assert session.state.installed_snap is None


class TestIncapableWallet:
    """A wallet without snap support disables every action."""

    @pytest.mark.asyncio
    async def test_all_actions_disabled_without_network_calls(self, settings):
        wallet = DryRunWallet(
            client_version="MetaMask/v10.25.0",
            installed={DEFAULT_SNAP_ORIGIN: "0.1.0"},
        )
        session = SnapSession(wallet, settings=settings)
        await session.refresh()
        calls_after_refresh = list(wallet.calls)

        assert session.can_connect is False
        assert session.actions_enabled is False

        for action in (session.connect, session.login, session.request_balance, session.transact):
            with pytest.raises(ActionUnavailableError):
                await action()

        assert wallet.calls == calls_after_refresh
        assert session.state.locked is False
        assert session.state.error is None
        assert session.state.success is None


class TestOperations:
    """Tests for the four operations."""

    @pytest.mark.asyncio
    async def test_connect(self, wallet, settings):
        session = SnapSession(wallet, settings=settings)
        await session.refresh()

        outcome = await session.connect()

        assert outcome.success is True
        assert session.state.installed_snap.id == DEFAULT_SNAP_ORIGIN
        assert session.state.success == f"Snap {DEFAULT_SNAP_ORIGIN} connected."
        assert session.actions_enabled is True

    @pytest.mark.asyncio
    async def test_connect_declined(self, wallet, settings):
        wallet.fail_method(METHOD_ENABLE)
        session = SnapSession(wallet, settings=settings)
        await session.refresh()

        outcome = await session.connect()

        assert outcome.success is False
        assert "User rejected request" in session.state.error.message
        assert session.state.installed_snap is None
        assert session.state.locked is False

    @pytest.mark.asyncio
    async def test_login(self, session, installed_wallet):
        outcome = await session.login()

        assert outcome.success is True
        assert session.state.success == "User successfully logged in."
        assert installed_wallet.logged_in is True

    @pytest.mark.asyncio
    async def test_request_balance(self, session):
        outcome = await session.request_balance()

        assert outcome.result == "1.234"
        assert session.state.success == "User's Firn balance is 1.234 ETH."

    @pytest.mark.asyncio
    async def test_transact(self, session, installed_wallet):
        outcome = await session.transact()

        assert outcome.success is True
        tx_hash = outcome.result["transactionHash"]
        assert session.state.success == f"Transaction successful; its hash was {tx_hash}."

        (submitted,) = installed_wallet.submitted
        assert submitted["value"] == hex(10**17)
        assert submitted["chainId"] == 1

    @pytest.mark.asyncio
    async def test_transact_wrong_network(self, settings):
        wallet = DryRunWallet(
            accounts=[ACCOUNT], chain_id=5, installed={DEFAULT_SNAP_ORIGIN: "0.1.0"}
        )
        session = SnapSession(wallet, settings=settings)
        await session.refresh()

        outcome = await session.transact()

        assert outcome.success is False
        assert isinstance(outcome.error.cause, WrongNetworkError)
        assert "mainnet" in session.state.error.message
        assert wallet.submitted == []

    @pytest.mark.asyncio
    async def test_transact_requires_output_token(self, installed_wallet):
        session = SnapSession(installed_wallet, settings=Settings(token_out="", snap_version=None))
        await session.refresh()
        calls_after_refresh = list(installed_wallet.calls)

        assert session.swap_configured is False
        assert session.actions_enabled is True
        with pytest.raises(ActionUnavailableError) as exc_info:
            await session.transact()

        assert "TOKEN_OUT" in exc_info.value.message
        assert installed_wallet.calls == calls_after_refresh
        assert installed_wallet.submitted == []
        assert session.state.locked is False
        assert session.state.error is None

    @pytest.mark.asyncio
    async def test_transact_without_hash(self, session, installed_wallet):
        class NoHashWallet(DryRunWallet):
            async def request(self, method, params=None):
                result = await super().request(method, params)
                if method == METHOD_INVOKE_SNAP and params[1]["method"] == "transact":
                    result.result = {"status": 1}
                return result

        wallet = NoHashWallet(accounts=[ACCOUNT], installed={DEFAULT_SNAP_ORIGIN: "0.1.0"})
        session = SnapSession(wallet, settings=session.settings)
        await session.refresh()

        outcome = await session.transact()

        assert outcome.success is False
        assert "transaction hash" in session.state.error.message


class TestFailureHandling:
    """Failures are recorded, never raised, and always release the lock."""

    @pytest.mark.asyncio
    async def test_user_rejection_keeps_previous_success(self, session, installed_wallet):
        await session.login()
        assert session.state.success == "User successfully logged in."

        installed_wallet.fail_snap_method(
            "requestBalance", ProviderError("User rejected request", code=4001)
        )
        outcome = await session.request_balance()

        state = session.state
        assert outcome.success is False
        assert "User rejected request" in state.error.message
        assert state.success == "User successfully logged in."
        assert state.latest_outcome == "error"
        assert state.locked is False

    @pytest.mark.asyncio
    async def test_lock_never_left_held(self, session, installed_wallet):
        assert session.state.locked is False

        installed_wallet.fail_snap_method("initialize")
        installed_wallet.fail_snap_method("transact")
        for action in (session.login, session.request_balance, session.transact, session.login):
            await action()
            assert session.state.locked is False

    @pytest.mark.asyncio
    async def test_unexpected_exception_recorded(self, session, monkeypatch):
        async def explode():
            raise RuntimeError("unexpected")

        monkeypatch.setattr(session.invoker, "initialize", explode)

        outcome = await session.login()

        assert outcome.success is False
        assert session.state.error.message == "unexpected"
        assert session.state.locked is False

    @pytest.mark.asyncio
    async def test_exactly_one_outcome_per_operation(self, session):
        await session.login()
        await session.request_balance()
        assert session.state.outcome_seq == 2


class TestSingleFlight:
    """Only one operation may hold the lock."""

    @pytest.mark.asyncio
    async def test_second_operation_rejected_while_in_flight(self, settings):
        wallet = BlockingWallet(accounts=[ACCOUNT], installed={DEFAULT_SNAP_ORIGIN: "0.1.0"})
        session = SnapSession(wallet, settings=settings)
        await session.refresh()

        first = asyncio.create_task(session.login())
        await wallet.entered.wait()

        assert session.state.locked is True
        assert session.actions_enabled is False
        with pytest.raises(OperationInProgressError):
            await session.request_balance()

        wallet.release.set()
        outcome = await first

        assert outcome.success is True
        assert session.state.locked is False

    @pytest.mark.asyncio
    async def test_cancelled_operation_releases_lock(self, settings):
        wallet = BlockingWallet(accounts=[ACCOUNT], installed={DEFAULT_SNAP_ORIGIN: "0.1.0"})
        session = SnapSession(wallet, settings=settings)
        await session.refresh()

        task = asyncio.create_task(session.login())
        await wallet.entered.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert session.state.locked is False
        assert session.state.outcome_seq == 0

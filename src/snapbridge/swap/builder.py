"""Transaction builder for the snap's private swap.

This service builds an unsigned router call for the snap to sign.
NO signing, broadcasting or confirmation tracking happens here.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from web3 import Web3

from snapbridge.constants import MAINNET_CHAIN_ID, METHOD_ACCOUNTS, METHOD_CHAIN_ID, ROUTER_ABI
from snapbridge.errors import TransactionValidationError, WrongNetworkError
from snapbridge.gateway.base import ProviderGateway
from snapbridge.swap.contracts import SwapParams, SwapTransaction

logger = logging.getLogger(__name__)

MAX_FEE_TIER = 2**24

NO_SLIPPAGE_WARNING = (
    "amountOutMinimum and sqrtPriceLimitX96 are zero: the swap has no "
    "slippage or price protection."
)

# Address-less contract used only for calldata encoding
_router = Web3().eth.contract(abi=ROUTER_ABI)


def _checksum(label: str, address: Optional[str]) -> str:
    if not address or not Web3.is_address(address):
        raise TransactionValidationError(f"Invalid {label} address: {address!r}")
    return Web3.to_checksum_address(address)


def _parse_amount(amount: Any) -> tuple[Decimal, int]:
    """Parse an ether amount into (decimal, exact wei)."""
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise TransactionValidationError(f"Invalid swap amount: {amount!r}")
    if not value.is_finite() or value <= 0:
        raise TransactionValidationError(f"Swap amount must be positive: {amount!r}")

    try:
        wei = Web3.to_wei(value, "ether")
    except ValueError:
        raise TransactionValidationError(f"Swap amount is out of range: {amount!r}")
    if wei <= 0 or Web3.from_wei(wei, "ether") != value:
        raise TransactionValidationError(
            f"Swap amount is not a whole number of wei: {amount!r}"
        )
    return value, wei


def _parse_chain_id(raw: Any) -> int:
    try:
        if isinstance(raw, str):
            return int(raw, 16) if raw.lower().startswith("0x") else int(raw)
        return int(raw)
    except (TypeError, ValueError):
        raise TransactionValidationError(f"Wallet reported an invalid chain id: {raw!r}")


async def read_environment(gateway: ProviderGateway) -> tuple[list[str], int]:
    """Read the connected accounts and active chain id from the wallet.

    Raises:
        ProviderError: If the wallet cannot answer
    """
    accounts = (await gateway.request(METHOD_ACCOUNTS)).unwrap() or []
    chain_id = _parse_chain_id((await gateway.request(METHOD_CHAIN_ID)).unwrap())
    return list(accounts), chain_id


def encode_exact_input_single(params: SwapParams) -> str:
    """Encode exactInputSingle calldata as a 0x-prefixed hex string."""
    return _router.encode_abi("exactInputSingle", args=[params.as_abi_tuple()])


async def build_swap(
    gateway: ProviderGateway,
    router_address: str,
    token_in: str,
    token_out: str,
    fee_tier: int,
    amount_in_ether: str = "0.1",
    mainnet_chain_id: int = MAINNET_CHAIN_ID,
) -> SwapTransaction:
    """Build an unsigned single-hop swap paid for in native currency.

    Args:
        gateway: Wallet gateway used to read accounts and chain id
        router_address: Swap router contract
        token_in: Wrapped native token (supplied via value, no approval)
        token_out: Token to buy
        fee_tier: Pool fee tier
        amount_in_ether: Decimal amount of the native unit to swap
        mainnet_chain_id: The only chain the swap may be built for

    Returns:
        SwapTransaction for the snap to sign

    Raises:
        TransactionValidationError: If inputs are malformed or no account is connected
        WrongNetworkError: If the wallet is not on mainnet
        ProviderError: If the wallet cannot be read
    """
    router = _checksum("router", router_address)
    token_in = _checksum("input token", token_in)
    token_out = _checksum("output token", token_out)
    if isinstance(fee_tier, bool) or not isinstance(fee_tier, int) or not 0 < fee_tier < MAX_FEE_TIER:
        raise TransactionValidationError(f"Invalid fee tier: {fee_tier!r}")
    amount, amount_in = _parse_amount(amount_in_ether)

    accounts, chain_id = await read_environment(gateway)
    if chain_id != mainnet_chain_id:
        raise WrongNetworkError(
            chain_id,
            mainnet_chain_id,
            f"This method is designed to buy {amount} ETH worth of tokens. "
            f"You have to be connected to mainnet (chain {mainnet_chain_id}) to invoke it; "
            f"the wallet is on chain {chain_id}.",
        )
    if not accounts:
        raise TransactionValidationError("No wallet account is connected")

    params = SwapParams(
        token_in=token_in,
        token_out=token_out,
        fee=fee_tier,
        recipient=_checksum("recipient", accounts[0]),
        amount_in=amount_in,
    )

    logger.info(
        "Built swap of %s wei %s -> %s for %s",
        amount_in,
        token_in[:10],
        token_out[:10],
        params.recipient[:10],
    )

    return SwapTransaction(
        chain_id=chain_id,
        to=router,
        data=encode_exact_input_single(params),
        value=amount_in,
        params=params,
        description=f"Swap {amount} ETH for {token_out[:10]}... via {router[:10]}...",
        warnings=[NO_SLIPPAGE_WARNING],
    )

"""Swap transaction contracts.

These contracts describe an unsigned router call that the snap signs and
submits. NO signing or broadcasting happens in this package.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SwapParams(BaseModel):
    """Arguments of the router's single-hop exact-input swap."""

    model_config = ConfigDict(frozen=True)

    token_in: str = Field(..., description="Input token (wrapped native asset)")
    token_out: str = Field(..., description="Output token")
    fee: int = Field(..., description="Pool fee tier")
    recipient: str = Field(..., description="Receiver of the output tokens")
    amount_in: int = Field(..., description="Input amount in base units")
    amount_out_minimum: int = Field(default=0, description="Minimum output (0 = unprotected)")
    sqrt_price_limit_x96: int = Field(default=0, description="Price limit (0 = none)")

    def as_abi_tuple(self) -> tuple:
        """Arguments in ExactInputSingleParams component order."""
        return (
            self.token_in,
            self.token_out,
            self.fee,
            self.recipient,
            self.amount_in,
            self.amount_out_minimum,
            self.sqrt_price_limit_x96,
        )


class SwapTransaction(BaseModel):
    """An unsigned swap transaction for the snap to sign.

    The snap is responsible for:
    1. Signing this transaction
    2. Routing and broadcasting it privately
    """

    model_config = ConfigDict(frozen=True)

    chain_id: int = Field(..., description="EVM chain ID")
    to: str = Field(..., description="Router contract address")
    data: str = Field(..., description="Encoded router call (hex)")
    value: int = Field(..., description="Native currency attached, in wei")
    params: SwapParams = Field(..., description="Decoded swap arguments")
    description: str = Field(default="", description="Human-readable description")
    warnings: list[str] = Field(default_factory=list, description="Any warnings")

    def to_snap_payload(self) -> dict[str, Any]:
        """Serialize to the unsigned-transaction shape the snap expects."""
        return {
            "to": self.to,
            "data": self.data,
            "value": hex(self.value),
            "chainId": self.chain_id,
        }

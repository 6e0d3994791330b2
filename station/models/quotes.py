"""Pydantic request/response models for the quoting API.

Amounts, balances and prices travel as decimal strings so that uint256 values
survive JSON round-trips without float precision loss.
"""

from pydantic import BaseModel, Field

from station.math.fixed_point import ONE_18
from station.models.types import Uint256


class SwapQuoteRequest(BaseModel):
    """Swap between two tokens at the oracle price ratio."""

    index_in: int = Field(alias="indexIn", ge=0)
    index_out: int = Field(alias="indexOut", ge=0)
    amount: Uint256 = Field(description="Fixed side of the swap (in or out)")
    prices: list[Uint256]

    model_config = {"populate_by_name": True}


class SwapQuoteResponse(BaseModel):
    """Computed side of a swap."""

    amount: Uint256


class JoinQuoteRequest(BaseModel):
    """Deposit of arbitrary token amounts."""

    balances: list[Uint256]
    amounts_in: list[Uint256] = Field(alias="amountsIn")
    total_bpt: Uint256 = Field(alias="totalBpt")
    prices: list[Uint256]
    price_scale: Uint256 = Field(
        default=str(ONE_18),
        alias="priceScale",
        description="Fixed-point unit of the prices, used when the pool is empty",
    )

    model_config = {"populate_by_name": True}


class JoinQuoteResponse(BaseModel):
    """BPT minted for a deposit."""

    bpt_out: Uint256 = Field(alias="bptOut")

    model_config = {"populate_by_name": True}


class ExitQuoteRequest(BaseModel):
    """Withdrawal of arbitrary token amounts."""

    balances: list[Uint256]
    amounts_out: list[Uint256] = Field(alias="amountsOut")
    total_bpt: Uint256 = Field(alias="totalBpt")
    prices: list[Uint256]

    model_config = {"populate_by_name": True}


class ExitQuoteResponse(BaseModel):
    """BPT burned for a withdrawal, with the echoed amounts."""

    bpt_in: Uint256 = Field(alias="bptIn")
    amounts_out: list[Uint256] = Field(alias="amountsOut")

    model_config = {"populate_by_name": True}


class SwapFeeRequest(BaseModel):
    """Token movements of a swap batch."""

    balances: list[Uint256]
    amounts_in: list[Uint256] = Field(alias="amountsIn")
    amounts_out: list[Uint256] = Field(alias="amountsOut")
    amp: int = Field(ge=0)
    prices: list[Uint256]

    model_config = {"populate_by_name": True}


class SwapFeeResponse(BaseModel):
    """Swap fee amount."""

    fee: Uint256


class WithdrawFeeRequest(BaseModel):
    """Withdrawn amounts and the pool's withdraw fee divisor."""

    amounts_out: list[Uint256] = Field(alias="amountsOut")
    withdraw_fee_rate: int = Field(alias="withdrawFeeRate", ge=0)
    prices: list[Uint256]

    model_config = {"populate_by_name": True}


class WithdrawFeeResponse(BaseModel):
    """Withdrawal fee per token."""

    fees: list[Uint256]


class ErrorResponse(BaseModel):
    """Domain error returned with HTTP 422."""

    error: str = Field(description="Error class name, e.g. InvalidPrice")
    detail: str

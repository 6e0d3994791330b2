"""Pydantic models for the Station quoting API."""

from station.models.quotes import (
    ErrorResponse,
    ExitQuoteRequest,
    ExitQuoteResponse,
    JoinQuoteRequest,
    JoinQuoteResponse,
    SwapFeeRequest,
    SwapFeeResponse,
    SwapQuoteRequest,
    SwapQuoteResponse,
    WithdrawFeeRequest,
    WithdrawFeeResponse,
)
from station.models.types import Uint256

__all__ = [
    # Types
    "Uint256",
    # Swap quotes
    "SwapQuoteRequest",
    "SwapQuoteResponse",
    # Liquidity quotes
    "JoinQuoteRequest",
    "JoinQuoteResponse",
    "ExitQuoteRequest",
    "ExitQuoteResponse",
    # Fees
    "SwapFeeRequest",
    "SwapFeeResponse",
    "WithdrawFeeRequest",
    "WithdrawFeeResponse",
    # Errors
    "ErrorResponse",
]

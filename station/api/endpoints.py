"""API endpoints for Station pool quotes.

Each endpoint validates the request with pydantic, calls one pure math
function and returns the result. Domain errors propagate to the handler
registered in station.api.main.
"""

import structlog
from fastapi import APIRouter

from station.math import (
    bpt_in_for_all_tokens_out,
    bpt_out_for_all_tokens_in,
    calculate_swap_fee_amount,
    calculate_withdraw_fee,
    in_given_out,
    out_given_in,
)
from station.models import (
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
from station.models.types import to_ints

logger = structlog.get_logger()

router = APIRouter(prefix="/quote")


@router.post("/swap/in-given-out")
async def quote_in_given_out(request: SwapQuoteRequest) -> SwapQuoteResponse:
    """Amount of token in required to receive `amount` of token out."""
    amount_in = in_given_out(
        request.index_in, request.index_out, int(request.amount), to_ints(request.prices)
    )
    logger.debug("quote_in_given_out", amount_out=request.amount, amount_in=amount_in)
    return SwapQuoteResponse(amount=str(amount_in))


@router.post("/swap/out-given-in")
async def quote_out_given_in(request: SwapQuoteRequest) -> SwapQuoteResponse:
    """Amount of token out received for paying `amount` of token in."""
    amount_out = out_given_in(
        request.index_in, request.index_out, int(request.amount), to_ints(request.prices)
    )
    logger.debug("quote_out_given_in", amount_in=request.amount, amount_out=amount_out)
    return SwapQuoteResponse(amount=str(amount_out))


@router.post("/join/bpt-out")
async def quote_join(request: JoinQuoteRequest) -> JoinQuoteResponse:
    """BPT minted for depositing `amountsIn`."""
    bpt_out = bpt_out_for_all_tokens_in(
        to_ints(request.balances),
        to_ints(request.amounts_in),
        int(request.total_bpt),
        to_ints(request.prices),
        price_scale=int(request.price_scale),
    )
    logger.debug("quote_join", bpt_out=bpt_out)
    return JoinQuoteResponse(bpt_out=str(bpt_out))


@router.post("/exit/bpt-in")
async def quote_exit(request: ExitQuoteRequest) -> ExitQuoteResponse:
    """BPT burned for withdrawing `amountsOut`."""
    bpt_in, amounts_out = bpt_in_for_all_tokens_out(
        to_ints(request.balances),
        to_ints(request.amounts_out),
        int(request.total_bpt),
        to_ints(request.prices),
    )
    logger.debug("quote_exit", bpt_in=bpt_in)
    return ExitQuoteResponse(bpt_in=str(bpt_in), amounts_out=[str(a) for a in amounts_out])


@router.post("/fees/swap")
async def quote_swap_fee(request: SwapFeeRequest) -> SwapFeeResponse:
    """Swap fee for a batch of token movements."""
    fee = calculate_swap_fee_amount(
        to_ints(request.balances),
        to_ints(request.amounts_in),
        to_ints(request.amounts_out),
        request.amp,
        to_ints(request.prices),
    )
    return SwapFeeResponse(fee=str(fee))


@router.post("/fees/withdraw")
async def quote_withdraw_fee(request: WithdrawFeeRequest) -> WithdrawFeeResponse:
    """Per-token withdrawal fee."""
    fees = calculate_withdraw_fee(
        to_ints(request.amounts_out), request.withdraw_fee_rate, to_ints(request.prices)
    )
    return WithdrawFeeResponse(fees=[str(f) for f in fees])

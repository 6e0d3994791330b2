"""Station pool fee math.

Two fees are charged by the pool:
- Swap fee: the smaller of the total amount moving in and the total amount
  moving out of a swap batch.
- Withdrawal fee: each withdrawn amount divided by the withdraw fee rate.

The withdraw fee rate is a divisor, not a percentage: a rate of 10 charges
1/10 of the amount, a rate of 20 charges 1/20. A rate of 0 disables the fee.
"""

from __future__ import annotations

from collections.abc import Sequence

from station.safe_int import S, SafeInt

from .validation import check_amounts, check_lengths, check_prices

WITHDRAW_FEE_DISABLED = 0


def _amp_scaled(fee: SafeInt, amp: int) -> SafeInt:
    """Scale a swap fee by the amplification parameter.

    Reserved for curve-based fee tiers; currently returns the fee unchanged.
    """
    return fee


def calculate_swap_fee_amount(
    balances: Sequence[int],
    amounts_in: Sequence[int],
    amounts_out: Sequence[int],
    amp: int,
    prices: Sequence[int],
) -> int:
    """Calculate the swap fee for a batch of token movements.

    Formula:
        fee = min(sum(amounts_in), sum(amounts_out))

    The fee is the portion of the batch that is matched on both sides. amp is
    validated but does not change the result.

    Args:
        balances: Current pool balances, one per token
        amounts_in: Amounts entering the pool, one per token
        amounts_out: Amounts leaving the pool, one per token
        amp: Amplification parameter of the pool
        prices: Oracle price vector, one per token

    Returns:
        Fee amount

    Raises:
        DimensionMismatch: If vector lengths disagree
        InvalidPrice: If any price is zero or negative
        ArithmeticOverflow: If an input or amp is negative, or a sum overflows
    """
    check_lengths(balances=balances, amounts_in=amounts_in, amounts_out=amounts_out, prices=prices)
    check_prices(prices)
    check_amounts("balances", balances)
    check_amounts("amounts_in", amounts_in)
    check_amounts("amounts_out", amounts_out)
    check_amounts("amp", [amp])

    total_in = sum(amounts_in, SafeInt.zero())
    total_out = sum(amounts_out, SafeInt.zero())
    return _amp_scaled(total_in.min(total_out), amp).value


def calculate_withdraw_fee(
    amounts_out: Sequence[int],
    withdraw_fee_rate: int,
    prices: Sequence[int],
) -> list[int]:
    """Calculate the per-token fee for a withdrawal.

    Formula:
        fees[i] = amounts_out[i] / withdraw_fee_rate  (rounded down)
        fees[i] = 0                                    if withdraw_fee_rate == 0

    Args:
        amounts_out: Withdrawn amounts, one per token
        withdraw_fee_rate: Fee divisor; 0 disables the fee
        prices: Oracle price vector, one per token

    Returns:
        Fee per token

    Raises:
        DimensionMismatch: If vector lengths disagree
        InvalidPrice: If any price is zero or negative
        ArithmeticOverflow: If an amount or the rate is negative
    """
    check_lengths(amounts_out=amounts_out, prices=prices)
    check_prices(prices)
    check_amounts("amounts_out", amounts_out)
    check_amounts("withdraw_fee_rate", [withdraw_fee_rate])

    if withdraw_fee_rate == WITHDRAW_FEE_DISABLED:
        return [0] * len(amounts_out)
    return [(S(amount) // withdraw_fee_rate).value for amount in amounts_out]

"""Station pool join/exit math.

Pool shares (BPT) are minted and burned strictly by aggregate price-weighted
value. A deposit or withdrawal may use any token ratio; only the total value
moved relative to the pool's current value matters:

    bpt = total_bpt * sum(amounts[i] * prices[i]) / sum(balances[i] * prices[i])

This keeps value-per-share constant for every call with total_bpt > 0. Minting
rounds down and burning rounds up, so rounding never dilutes existing holders.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import NamedTuple

from station.errors import DivisionByZero, InsufficientBalance, PoolStateError
from station.safe_int import S

from .fixed_point import ONE_18, weighted_value
from .validation import check_amounts, check_lengths, check_prices


class ExitAmounts(NamedTuple):
    """BPT burned for a withdrawal, and the token amounts actually paid out."""

    bpt_in: int
    amounts_out: tuple[int, ...]


def _check_vectors(
    balances: Sequence[int],
    amounts: Sequence[int],
    total_bpt: int,
    prices: Sequence[int],
    amounts_name: str,
) -> None:
    check_lengths(balances=balances, **{amounts_name: amounts}, prices=prices)
    check_prices(prices)
    check_amounts("balances", balances)
    check_amounts(amounts_name, amounts)
    check_amounts("total_bpt", [total_bpt])


def bootstrap_bpt_out(
    amounts_in: Sequence[int],
    prices: Sequence[int],
    price_scale: int = ONE_18,
) -> int:
    """BPT minted by the first deposit into an empty pool.

    One share is minted per unit of price-normalised value deposited:

        bpt_out = sum(amounts_in[i] * prices[i]) / price_scale  (rounded down)

    With 18-decimal prices this means depositing 1e18 of a token priced at
    1.0 mints 1e18 BPT. Pools quoting raw integer prices use price_scale=1,
    which mints exactly the deposited value.

    Raises:
        PoolStateError: If a non-zero deposit is worth less than one share
        DivisionByZero: If price_scale is zero
    """
    check_lengths(amounts_in=amounts_in, prices=prices)
    check_prices(prices)
    check_amounts("amounts_in", amounts_in)
    value_added = weighted_value(amounts_in, prices)
    bpt_out = (value_added // price_scale).value
    if value_added and not bpt_out:
        raise PoolStateError(
            f"Deposit worth {value_added} mints no BPT at price scale {price_scale}"
        )
    return bpt_out


def bpt_out_for_all_tokens_in(
    balances: Sequence[int],
    amounts_in: Sequence[int],
    total_bpt: int,
    prices: Sequence[int],
    *,
    price_scale: int = ONE_18,
) -> int:
    """Calculate BPT minted for a deposit of arbitrary token amounts.

    Formula:
        value_added   = sum(amounts_in[i] * prices[i])
        current_value = sum(balances[i] * prices[i])
        bpt_out       = total_bpt * value_added / current_value  (rounded down)

    An all-zero deposit mints nothing. A non-zero deposit that would mint
    nothing is rejected rather than absorbed. When total_bpt is zero the pool
    is uninitialised and bootstrap_bpt_out() decides the mint.

    Args:
        balances: Current pool balances, one per token
        amounts_in: Deposited amounts, one per token
        total_bpt: Outstanding pool share supply
        prices: Oracle price vector, one per token
        price_scale: Fixed-point unit of the prices, used only when bootstrapping

    Returns:
        Amount of BPT to mint

    Raises:
        DimensionMismatch: If vector lengths disagree
        InvalidPrice: If any price is zero or negative
        DivisionByZero: If total_bpt > 0 but the pool holds no value
        PoolStateError: If a non-zero deposit rounds down to zero BPT
        ArithmeticOverflow: If an input is negative or a product overflows
    """
    _check_vectors(balances, amounts_in, total_bpt, prices, "amounts_in")

    value_added = weighted_value(amounts_in, prices)
    if not value_added:
        return 0

    if total_bpt == 0:
        return bootstrap_bpt_out(amounts_in, prices, price_scale)

    current_value = weighted_value(balances, prices)
    if not current_value:
        raise DivisionByZero(f"Pool holds no value but total_bpt is {total_bpt}")

    bpt_out = (S(total_bpt) * value_added // current_value).value
    if not bpt_out:
        raise PoolStateError(
            f"Deposit worth {value_added} mints no BPT against pool value {current_value}"
        )
    return bpt_out


def bpt_in_for_all_tokens_out(
    balances: Sequence[int],
    amounts_out: Sequence[int],
    total_bpt: int,
    prices: Sequence[int],
    *,
    bpt_in_adjustment: Callable[[int], int] | None = None,
) -> ExitAmounts:
    """Calculate BPT burned for a withdrawal of arbitrary token amounts.

    Formula:
        value_removed = sum(amounts_out[i] * prices[i])
        current_value = sum(balances[i] * prices[i])
        bpt_in        = total_bpt * value_removed / current_value  (rounded up)

    Requested amounts are never clamped: a request larger than the pool's
    balance of that token fails.

    Args:
        balances: Current pool balances, one per token
        amounts_out: Requested withdrawal amounts, one per token
        total_bpt: Outstanding pool share supply
        prices: Oracle price vector, one per token
        bpt_in_adjustment: Optional hook applied to the computed bpt_in,
            e.g. to charge a withdrawal premium. Identity when omitted.

    Returns:
        ExitAmounts(bpt_in, amounts_out)

    Raises:
        DimensionMismatch: If vector lengths disagree
        InvalidPrice: If any price is zero or negative
        InsufficientBalance: If amounts_out[i] > balances[i] for some i
        DivisionByZero: If a non-zero withdrawal hits an empty pool
        ArithmeticOverflow: If an input is negative or a product overflows
    """
    _check_vectors(balances, amounts_out, total_bpt, prices, "amounts_out")

    for index, (balance, amount) in enumerate(zip(balances, amounts_out, strict=True)):
        if amount > balance:
            raise InsufficientBalance(
                f"Withdrawal {amount} of token {index} exceeds balance {balance}"
            )

    echoed = tuple(amounts_out)
    value_removed = weighted_value(amounts_out, prices)
    if not value_removed:
        return ExitAmounts(bpt_in=0, amounts_out=echoed)

    if total_bpt == 0:
        raise DivisionByZero("Cannot burn BPT from a pool with zero supply")

    current_value = weighted_value(balances, prices)
    # amounts_out <= balances and value_removed > 0 imply current_value > 0
    bpt_in = (S(total_bpt) * value_removed).ceiling_div(current_value).value

    if bpt_in_adjustment is not None:
        bpt_in = S(bpt_in_adjustment(bpt_in)).value

    return ExitAmounts(bpt_in=bpt_in, amounts_out=echoed)


def all_tokens_in_for_exact_bpt_out(
    balances: Sequence[int],
    bpt_amount_out: int,
    total_bpt: int,
) -> list[int]:
    """Calculate the proportional deposit needed to mint an exact BPT amount.

    Each token is charged its share of the pool's balance:

        amounts_in[i] = balances[i] * bpt_amount_out / total_bpt  (rounded up)

    Because the deposit is proportional to balances, its value relative to the
    pool is bpt_amount_out / total_bpt whatever the prices are.

    Raises:
        DivisionByZero: If total_bpt is zero (the pool must be initialised first)
        PoolStateError: If BPT is requested from a pool holding no balances
        ArithmeticOverflow: If an input is negative or a product overflows
    """
    check_amounts("balances", balances)
    check_amounts("bpt_amount_out", [bpt_amount_out])
    if total_bpt == 0:
        raise DivisionByZero("Cannot join proportionally while total_bpt is zero")
    if bpt_amount_out and not any(balances):
        raise PoolStateError(f"Pool holds no balances backing total_bpt {total_bpt}")
    return [(S(balance) * bpt_amount_out).ceiling_div(total_bpt).value for balance in balances]

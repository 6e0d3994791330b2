"""Station pool swap math.

Swaps convert between two pool tokens at the oracle price ratio. There is no
bonding curve, so the quoted rate does not depend on balances or trade size.

Rounding always favours the pool: amounts the trader receives are rounded
down, amounts the trader must pay are rounded up.
"""

from __future__ import annotations

from collections.abc import Sequence

from station.errors import DimensionMismatch

from .fixed_point import mul_div_down, mul_div_up
from .validation import check_amounts, check_index, check_prices


def _check_pair(index_in: int, index_out: int, prices: Sequence[int]) -> None:
    check_index("index_in", index_in, len(prices))
    check_index("index_out", index_out, len(prices))
    if index_in == index_out:
        raise DimensionMismatch(f"Cannot swap token {index_in} for itself")
    check_prices(prices)


def out_given_in(
    index_in: int,
    index_out: int,
    amount_in: int,
    prices: Sequence[int],
) -> int:
    """Calculate output amount for a given input (sell order).

    Formula:
        amount_out = amount_in * prices[index_in] / prices[index_out]  (rounded down)

    Args:
        index_in: Token index the trader pays
        index_out: Token index the trader receives
        amount_in: Amount of token in
        prices: Oracle price vector, one entry per pool token

    Returns:
        Amount of token out

    Raises:
        DimensionMismatch: If an index is out of range or index_in == index_out
        InvalidPrice: If any price is zero or negative
        ArithmeticOverflow: If amount_in is negative or the product overflows
    """
    _check_pair(index_in, index_out, prices)
    check_amounts("amount_in", [amount_in])
    return mul_div_down(amount_in, prices[index_in], prices[index_out])


def in_given_out(
    index_in: int,
    index_out: int,
    amount_out: int,
    prices: Sequence[int],
) -> int:
    """Calculate input amount for a given output (buy order).

    Formula:
        amount_in = amount_out * prices[index_out] / prices[index_in]  (rounded up)

    Args:
        index_in: Token index the trader pays
        index_out: Token index the trader receives
        amount_out: Amount of token out
        prices: Oracle price vector, one entry per pool token

    Returns:
        Amount of token in required

    Raises:
        DimensionMismatch: If an index is out of range or index_in == index_out
        InvalidPrice: If any price is zero or negative
        ArithmeticOverflow: If amount_out is negative or the product overflows
    """
    _check_pair(index_in, index_out, prices)
    check_amounts("amount_out", [amount_out])
    return mul_div_up(amount_out, prices[index_out], prices[index_in])

"""Integer fixed-point helpers shared by the pool math.

Values are plain integers. Prices are conventionally 18-decimal fixed point
(1.0 == ONE_18), but the conversion and proportionality formulas only ever
multiply and divide values of the same convention, so the scale cancels out
and callers may use any consistent scaling.

Rounding follows Balancer's FixedPoint.sol naming: `_down` floors, `_up`
ceils. Every intermediate is uint256-checked through SafeInt.
"""

from __future__ import annotations

from collections.abc import Sequence

from station.safe_int import S, SafeInt

__all__ = [
    "ONE_18",
    "mul_div_down",
    "mul_div_up",
    "weighted_value",
]

ONE_18 = 10**18


def mul_div_down(a: int, b: int, c: int) -> int:
    """Compute floor(a * b / c) without intermediate truncation."""
    return ((S(a) * b) // c).value


def mul_div_up(a: int, b: int, c: int) -> int:
    """Compute ceil(a * b / c) without intermediate truncation."""
    return (S(a) * b).ceiling_div(c).value


def weighted_value(amounts: Sequence[int], prices: Sequence[int]) -> SafeInt:
    """Price-weighted value of an amount vector: sum(amounts[i] * prices[i]).

    The caller is responsible for checking that both vectors have the same
    length; zip() would otherwise silently truncate.
    """
    total = SafeInt.zero()
    for amount, price in zip(amounts, prices, strict=True):
        total = total + S(amount) * price
    return total

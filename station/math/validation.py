"""Input validation shared by the pool math functions."""

from __future__ import annotations

from collections.abc import Sequence

from station.errors import ArithmeticOverflow, DimensionMismatch, InvalidPrice
from station.safe_int import UINT256_MAX


def check_lengths(**vectors: Sequence[int]) -> int:
    """Check that every named vector has the same length.

    Args:
        **vectors: Vectors keyed by name, used in the error message

    Returns:
        The common length

    Raises:
        DimensionMismatch: If any two lengths differ
    """
    lengths = {name: len(vector) for name, vector in vectors.items()}
    if len(set(lengths.values())) > 1:
        detail = ", ".join(f"{name}={length}" for name, length in lengths.items())
        raise DimensionMismatch(f"Vector lengths disagree: {detail}")
    return next(iter(lengths.values()), 0)


def check_prices(prices: Sequence[int]) -> None:
    """Reject zero or negative prices.

    Raises:
        InvalidPrice: If any entry is <= 0
    """
    for index, price in enumerate(prices):
        if price <= 0:
            raise InvalidPrice(f"Price at index {index} must be positive, got {price}")


def check_amounts(name: str, amounts: Sequence[int]) -> None:
    """Reject amounts outside the uint256 range.

    Raises:
        ArithmeticOverflow: If any entry is negative or exceeds uint256 max
    """
    for index, amount in enumerate(amounts):
        if amount < 0 or amount > UINT256_MAX:
            raise ArithmeticOverflow(f"{name}[{index}] outside uint256 range: {amount}")


def check_index(name: str, index: int, size: int) -> None:
    """Reject a token index outside [0, size).

    Raises:
        DimensionMismatch: If index is out of range
    """
    if not 0 <= index < size:
        raise DimensionMismatch(f"{name} {index} out of range for {size} tokens")

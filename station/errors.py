"""Station pool error classes.

Every failure of the pricing core surfaces as a subclass of StationMathError,
raised synchronously to the caller. Nothing is retried or recovered internally.
"""


class StationMathError(Exception):
    """Base error for Station pool operations."""

    pass


class DimensionMismatch(StationMathError):
    """Vector lengths disagree, or a token index is out of range."""

    pass


class InvalidPrice(StationMathError):
    """A price entry is zero or negative."""

    pass


class DivisionByZero(StationMathError, ZeroDivisionError):
    """A zero divisor was reached outside the bootstrap path."""

    pass


class InsufficientBalance(StationMathError):
    """A withdrawal amount exceeds the corresponding token balance."""

    pass


class ArithmeticOverflow(StationMathError, ArithmeticError):
    """A value left the uint256 range (overflow, underflow or negative input)."""

    pass


class InvalidPayload(StationMathError):
    """Join/exit user data could not be decoded."""

    pass


class PoolStateError(StationMathError):
    """The join/exit is not allowed for the current supply, or would mint no shares."""

    pass

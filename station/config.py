"""Configuration for Station pools and the quoting service."""

from __future__ import annotations

import os
from dataclasses import dataclass

from station.math.fees import WITHDRAW_FEE_DISABLED
from station.math.fixed_point import ONE_18

# Service configuration from environment variables with sensible defaults
HOST = os.environ.get("STATION_HOST", "0.0.0.0")
PORT = int(os.environ.get("STATION_PORT", "8000"))
DEBUG = os.environ.get("STATION_DEBUG", "false").lower() in ("true", "1", "yes")
LOG_LEVEL = os.environ.get("STATION_LOG_LEVEL", "INFO").upper()

# Pool defaults (matching the factory arguments used in pool deployment)
DEFAULT_AMP = 10
DEFAULT_WITHDRAW_FEE_RATE = WITHDRAW_FEE_DISABLED
DEFAULT_PRICE_SCALE = ONE_18

MIN_TOKENS = 2


@dataclass(frozen=True)
class PoolConfig:
    """Pool-lifetime constants of a Station pool.

    Attributes:
        tokens: Token addresses, in TokenIndex order
        amp: Amplification parameter (must be positive)
        withdraw_fee_rate: Withdrawal fee divisor; 0 disables the fee
        price_scale: Fixed-point unit of the oracle prices (1 for raw integer prices)
    """

    tokens: tuple[str, ...]
    amp: int = DEFAULT_AMP
    withdraw_fee_rate: int = DEFAULT_WITHDRAW_FEE_RATE
    price_scale: int = DEFAULT_PRICE_SCALE

    def __post_init__(self) -> None:
        if len(self.tokens) < MIN_TOKENS:
            raise ValueError(f"Pool needs at least {MIN_TOKENS} tokens, got {len(self.tokens)}")
        if len({token.lower() for token in self.tokens}) != len(self.tokens):
            raise ValueError(f"Pool tokens must be unique: {self.tokens}")
        if self.amp <= 0:
            raise ValueError(f"amp must be positive, got {self.amp}")
        if self.withdraw_fee_rate < 0:
            raise ValueError(f"withdraw_fee_rate must be non-negative, got {self.withdraw_fee_rate}")
        if self.price_scale <= 0:
            raise ValueError(f"price_scale must be positive, got {self.price_scale}")

    def token_index(self, token: str) -> int | None:
        """Get the TokenIndex of a token (case-insensitive), or None."""
        token_lower = token.lower()
        for index, candidate in enumerate(self.tokens):
            if candidate.lower() == token_lower:
                return index
        return None

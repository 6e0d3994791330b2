"""Station pool entry points.

StationPool is the boundary between the Vault and the pure pool math. For each
swap/join/exit it decodes the request, calls exactly one math function with
the Vault's snapshot, and returns the computed amounts. It never holds
balances; the Vault applies the result to its own ledger.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

import structlog

from station.codec import JoinInit, decode_exit, decode_join
from station.config import PoolConfig
from station.errors import DimensionMismatch, PoolStateError
from station.math import (
    all_tokens_in_for_exact_bpt_out,
    bpt_in_for_all_tokens_out,
    bpt_out_for_all_tokens_in,
    calculate_swap_fee_amount,
    calculate_withdraw_fee,
    in_given_out,
    out_given_in,
)

logger = structlog.get_logger()


@dataclass(frozen=True)
class PoolSnapshot:
    """Vault-owned pool state for a single call.

    Attributes:
        balances: Pool balances, in TokenIndex order
        prices: Oracle prices, in TokenIndex order
        total_bpt: Outstanding pool share supply
    """

    balances: tuple[int, ...]
    prices: tuple[int, ...]
    total_bpt: int

    @classmethod
    def of(cls, balances: Sequence[int], prices: Sequence[int], total_bpt: int) -> PoolSnapshot:
        """Create a snapshot from any sequences."""
        return cls(balances=tuple(balances), prices=tuple(prices), total_bpt=total_bpt)


class SwapKind(str, Enum):
    """Which side of a swap is fixed."""

    GIVEN_IN = "given_in"
    GIVEN_OUT = "given_out"


@dataclass(frozen=True)
class SwapRequest:
    """A single swap between two pool tokens.

    Attributes:
        kind: GIVEN_IN fixes amount as the input, GIVEN_OUT as the output
        index_in: TokenIndex the trader pays
        index_out: TokenIndex the trader receives
        amount: The fixed amount
    """

    kind: SwapKind
    index_in: int
    index_out: int
    amount: int


@dataclass(frozen=True)
class SwapResult:
    """Result of a swap.

    Attributes:
        amount_in: Amount the trader pays
        amount_out: Amount the trader receives
        fee_amount: Imbalance fee reported for the swap
    """

    amount_in: int
    amount_out: int
    fee_amount: int


@dataclass(frozen=True)
class JoinResult:
    """Result of a join: BPT to mint and token amounts to pull from the user."""

    bpt_out: int
    amounts_in: tuple[int, ...]


@dataclass(frozen=True)
class ExitResult:
    """Result of an exit.

    Attributes:
        bpt_in: BPT to burn from the user
        amounts_out: Token amounts to send to the user
        withdraw_fees: Withdrawal fee per token, retained by the pool
    """

    bpt_in: int
    amounts_out: tuple[int, ...]
    withdraw_fees: tuple[int, ...]


class StationPool:
    """Oracle-priced multi-asset pool.

    Attributes:
        config: Pool-lifetime constants (tokens, amp, withdraw fee rate)
    """

    def __init__(self, config: PoolConfig) -> None:
        self.config = config

    @property
    def tokens(self) -> tuple[str, ...]:
        return self.config.tokens

    def get_amp(self) -> int:
        """Amplification parameter of the pool."""
        return self.config.amp

    def token_index(self, token: str) -> int:
        """Get the TokenIndex of a token.

        Raises:
            DimensionMismatch: If the token is not in the pool
        """
        index = self.config.token_index(token)
        if index is None:
            raise DimensionMismatch(f"Token {token} is not registered in the pool")
        return index

    def _check_snapshot(self, snapshot: PoolSnapshot) -> None:
        size = len(self.tokens)
        if len(snapshot.balances) != size or len(snapshot.prices) != size:
            raise DimensionMismatch(
                f"Snapshot has {len(snapshot.balances)} balances and "
                f"{len(snapshot.prices)} prices for {size} tokens"
            )

    def on_swap(self, request: SwapRequest, snapshot: PoolSnapshot) -> SwapResult:
        """Quote a swap at the oracle price ratio.

        Raises:
            StationMathError: Any error from the swap or fee math
        """
        self._check_snapshot(snapshot)

        if request.kind == SwapKind.GIVEN_IN:
            amount_in = request.amount
            amount_out = out_given_in(
                request.index_in, request.index_out, amount_in, snapshot.prices
            )
        else:
            amount_out = request.amount
            amount_in = in_given_out(
                request.index_in, request.index_out, amount_out, snapshot.prices
            )

        amounts_in = [0] * len(self.tokens)
        amounts_out = [0] * len(self.tokens)
        amounts_in[request.index_in] = amount_in
        amounts_out[request.index_out] = amount_out
        fee_amount = calculate_swap_fee_amount(
            snapshot.balances, amounts_in, amounts_out, self.config.amp, snapshot.prices
        )

        logger.info(
            "pool_swap",
            kind=request.kind.value,
            index_in=request.index_in,
            index_out=request.index_out,
            amount_in=amount_in,
            amount_out=amount_out,
            fee_amount=fee_amount,
        )
        return SwapResult(amount_in=amount_in, amount_out=amount_out, fee_amount=fee_amount)

    def on_join_pool(self, user_data: bytes, snapshot: PoolSnapshot) -> JoinResult:
        """Compute BPT minted and tokens pulled for a join.

        Init is only valid on an empty pool; ProportionalIn only on an
        initialised one.

        Raises:
            InvalidPayload: If user_data cannot be decoded
            PoolStateError: If the join kind does not match the pool's supply,
                or a non-zero Init deposit would mint no BPT
            StationMathError: Any error from the liquidity math
        """
        self._check_snapshot(snapshot)
        join = decode_join(user_data)

        if isinstance(join, JoinInit):
            if snapshot.total_bpt != 0:
                raise PoolStateError(f"Pool already initialised (total_bpt={snapshot.total_bpt})")
            if len(join.amounts_in) != len(self.tokens):
                raise DimensionMismatch(
                    f"Init carries {len(join.amounts_in)} amounts for {len(self.tokens)} tokens"
                )
            amounts_in = join.amounts_in
            bpt_out = bpt_out_for_all_tokens_in(
                snapshot.balances,
                amounts_in,
                snapshot.total_bpt,
                snapshot.prices,
                price_scale=self.config.price_scale,
            )
        else:
            if snapshot.total_bpt == 0:
                raise PoolStateError("Pool must be initialised before a proportional join")
            bpt_out = join.bpt_amount_out
            amounts_in = tuple(
                all_tokens_in_for_exact_bpt_out(snapshot.balances, bpt_out, snapshot.total_bpt)
            )

        logger.info(
            "pool_join",
            kind=join.kind.name,
            bpt_out=bpt_out,
            amounts_in=list(amounts_in),
            total_bpt=snapshot.total_bpt,
        )
        return JoinResult(bpt_out=bpt_out, amounts_in=amounts_in)

    def on_exit_pool(self, user_data: bytes, snapshot: PoolSnapshot) -> ExitResult:
        """Compute BPT burned, tokens paid out and withdrawal fees for an exit.

        Raises:
            InvalidPayload: If user_data cannot be decoded
            StationMathError: Any error from the liquidity or fee math
        """
        self._check_snapshot(snapshot)
        exit_ = decode_exit(user_data)

        bpt_in, amounts_out = bpt_in_for_all_tokens_out(
            snapshot.balances, exit_.amounts_out, snapshot.total_bpt, snapshot.prices
        )
        withdraw_fees = calculate_withdraw_fee(
            amounts_out, self.config.withdraw_fee_rate, snapshot.prices
        )

        logger.info(
            "pool_exit",
            kind=exit_.kind.name,
            bpt_in=bpt_in,
            amounts_out=list(amounts_out),
            withdraw_fees=withdraw_fees,
        )
        return ExitResult(
            bpt_in=bpt_in,
            amounts_out=amounts_out,
            withdraw_fees=tuple(withdraw_fees),
        )

"""Tests for the StationPool entry points.

This module tests:
- PoolConfig validation and token lookup
- on_swap (given in / given out, fee reporting)
- on_join_pool (Init bootstrap, ProportionalIn)
- on_exit_pool (BPT burn plus withdrawal fees)
- A full init -> join -> exit lifecycle against a Vault-style ledger
"""

import pytest
from structlog.testing import capture_logs

from station.codec import (
    ExitProportionalOut,
    JoinInit,
    JoinProportionalIn,
    encode_exit,
    encode_join,
)
from station.config import PoolConfig
from station.errors import (
    DimensionMismatch,
    InsufficientBalance,
    InvalidPayload,
    InvalidPrice,
    PoolStateError,
)
from station.pool import PoolSnapshot, StationPool, SwapKind, SwapRequest

E18 = 10**18


class TestPoolConfig:
    """Tests for PoolConfig validation."""

    TOKEN_A = "0x" + "a" * 40
    TOKEN_B = "0x" + "b" * 40

    def test_defaults(self) -> None:
        """amp defaults to 10, withdrawal fee disabled."""
        config = PoolConfig(tokens=(self.TOKEN_A, self.TOKEN_B))
        assert config.amp == 10
        assert config.withdraw_fee_rate == 0

    def test_single_token_rejected(self) -> None:
        """A pool needs at least two tokens."""
        with pytest.raises(ValueError, match="at least 2"):
            PoolConfig(tokens=(self.TOKEN_A,))

    def test_duplicate_tokens_rejected(self) -> None:
        """Tokens are unique, case-insensitively."""
        with pytest.raises(ValueError, match="unique"):
            PoolConfig(tokens=(self.TOKEN_A, self.TOKEN_A.upper()))

    def test_non_positive_amp_rejected(self) -> None:
        """amp must be positive."""
        with pytest.raises(ValueError, match="amp"):
            PoolConfig(tokens=(self.TOKEN_A, self.TOKEN_B), amp=0)

    def test_negative_withdraw_fee_rate_rejected(self) -> None:
        """withdraw_fee_rate must be non-negative."""
        with pytest.raises(ValueError, match="withdraw_fee_rate"):
            PoolConfig(tokens=(self.TOKEN_A, self.TOKEN_B), withdraw_fee_rate=-1)

    def test_price_scale_default_and_validation(self) -> None:
        """price_scale defaults to 1e18 and must be positive."""
        assert PoolConfig(tokens=(self.TOKEN_A, self.TOKEN_B)).price_scale == E18
        with pytest.raises(ValueError, match="price_scale"):
            PoolConfig(tokens=(self.TOKEN_A, self.TOKEN_B), price_scale=0)

    def test_token_index_case_insensitive(self) -> None:
        """Token lookup ignores address case."""
        config = PoolConfig(tokens=(self.TOKEN_A, self.TOKEN_B))
        assert config.token_index(self.TOKEN_B.upper()) == 1
        assert config.token_index("0x" + "f" * 40) is None


class TestStationPoolBasics:
    """Tests for pool accessors."""

    def test_amp(self, station_pool: StationPool) -> None:
        """get_amp returns the configured amp."""
        assert station_pool.get_amp() == 10

    def test_token_index(self, station_pool: StationPool) -> None:
        """Registered tokens resolve to their index."""
        assert station_pool.token_index(station_pool.tokens[2]) == 2

    def test_package_exports(self) -> None:
        """The package root re-exports the pool types and version."""
        import station

        assert station.StationPool is StationPool
        assert station.PoolConfig is PoolConfig
        assert station.__version__ == "0.1.0"

    def test_unknown_token_raises(self, station_pool: StationPool) -> None:
        """Unregistered tokens raise DimensionMismatch."""
        with pytest.raises(DimensionMismatch, match="not registered"):
            station_pool.token_index("0x" + "9" * 40)


class TestOnSwap:
    """Tests for StationPool.on_swap."""

    def test_given_in(self, station_pool: StationPool) -> None:
        """Selling 1 BTC at 2x the ETH price yields 2 ETH."""
        snapshot = PoolSnapshot.of([10 * E18] * 4, [2 * E18, E18, E18, E18], 40 * E18)
        result = station_pool.on_swap(SwapRequest(SwapKind.GIVEN_IN, 0, 1, E18), snapshot)
        assert result.amount_in == E18
        assert result.amount_out == 2 * E18
        assert result.fee_amount == E18

    def test_given_out(self, station_pool: StationPool) -> None:
        """Buying 2 ETH with BTC at 2x the ETH price costs 1 BTC."""
        snapshot = PoolSnapshot.of([10 * E18] * 4, [2 * E18, E18, E18, E18], 40 * E18)
        result = station_pool.on_swap(SwapRequest(SwapKind.GIVEN_OUT, 0, 1, 2 * E18), snapshot)
        assert result.amount_in == E18
        assert result.amount_out == 2 * E18

    def test_zero_amount(self, station_pool: StationPool, unit_prices) -> None:
        """A zero swap quotes zero and charges nothing."""
        snapshot = PoolSnapshot.of([10 * E18] * 4, unit_prices, 40 * E18)
        result = station_pool.on_swap(SwapRequest(SwapKind.GIVEN_IN, 2, 3, 0), snapshot)
        assert (result.amount_in, result.amount_out, result.fee_amount) == (0, 0, 0)

    def test_snapshot_size_mismatch_raises(self, station_pool: StationPool) -> None:
        """The snapshot must cover every pool token."""
        snapshot = PoolSnapshot.of([E18, E18], [E18, E18], E18)
        with pytest.raises(DimensionMismatch, match="4 tokens"):
            station_pool.on_swap(SwapRequest(SwapKind.GIVEN_IN, 0, 1, E18), snapshot)

    def test_invalid_price_raises(self, station_pool: StationPool) -> None:
        """Prices from the oracle are validated."""
        snapshot = PoolSnapshot.of([E18] * 4, [E18, 0, E18, E18], 4 * E18)
        with pytest.raises(InvalidPrice):
            station_pool.on_swap(SwapRequest(SwapKind.GIVEN_IN, 0, 1, E18), snapshot)

    def test_logs_swap(self, station_pool: StationPool, unit_prices) -> None:
        """Each swap emits one pool_swap event."""
        snapshot = PoolSnapshot.of([10 * E18] * 4, unit_prices, 40 * E18)
        with capture_logs() as logs:
            station_pool.on_swap(SwapRequest(SwapKind.GIVEN_IN, 0, 1, E18), snapshot)
        events = [log for log in logs if log["event"] == "pool_swap"]
        assert len(events) == 1
        assert events[0]["amount_out"] == E18
        assert events[0]["kind"] == "given_in"


class TestOnJoinPool:
    """Tests for StationPool.on_join_pool."""

    def test_init_bootstraps_supply(self, station_pool: StationPool, unit_prices) -> None:
        """Init into an empty pool mints one BPT per unit of value."""
        amounts = (50 * E18,) * 4
        user_data = encode_join(JoinInit(amounts_in=amounts))
        result = station_pool.on_join_pool(user_data, PoolSnapshot.of([0] * 4, unit_prices, 0))
        assert result.bpt_out == 200 * E18
        assert result.amounts_in == amounts

    def test_init_on_initialised_pool_raises(self, station_pool: StationPool, unit_prices) -> None:
        """Init is only valid while total_bpt is zero."""
        user_data = encode_join(JoinInit(amounts_in=(E18,) * 4))
        snapshot = PoolSnapshot.of([E18] * 4, unit_prices, 4 * E18)
        with pytest.raises(PoolStateError, match="already initialised"):
            station_pool.on_join_pool(user_data, snapshot)

    def test_init_wrong_length_raises(self, station_pool: StationPool, unit_prices) -> None:
        """Init must carry one amount per token."""
        user_data = encode_join(JoinInit(amounts_in=(E18, E18)))
        with pytest.raises(DimensionMismatch, match="2 amounts"):
            station_pool.on_join_pool(user_data, PoolSnapshot.of([0] * 4, unit_prices, 0))

    def test_proportional_in(self, station_pool: StationPool, unit_prices) -> None:
        """Minting as much BPT as exists requires doubling every balance."""
        user_data = encode_join(JoinProportionalIn(bpt_amount_out=200 * E18))
        snapshot = PoolSnapshot.of([50 * E18] * 4, unit_prices, 200 * E18)
        result = station_pool.on_join_pool(user_data, snapshot)
        assert result.bpt_out == 200 * E18
        assert result.amounts_in == (50 * E18,) * 4

    def test_proportional_in_on_empty_pool_raises(self, station_pool: StationPool, unit_prices) -> None:
        """ProportionalIn needs an initialised pool."""
        user_data = encode_join(JoinProportionalIn(bpt_amount_out=E18))
        with pytest.raises(PoolStateError, match="initialised"):
            station_pool.on_join_pool(user_data, PoolSnapshot.of([0] * 4, unit_prices, 0))

    def test_init_with_raw_prices(self) -> None:
        """A pool quoting raw integer prices bootstraps with price_scale=1."""
        pool = StationPool(PoolConfig(tokens=("0x" + "1" * 40, "0x" + "2" * 40), price_scale=1))
        user_data = encode_join(JoinInit(amounts_in=(5 * E18 // 10, 4 * E18 // 10)))
        result = pool.on_join_pool(user_data, PoolSnapshot.of([0, 0], [1, 1], 0))
        assert result.bpt_out == 9 * E18 // 10

    def test_init_minting_nothing_raises(self) -> None:
        """An Init worth less than one share fails instead of pulling tokens for no BPT."""
        pool = StationPool(PoolConfig(tokens=("0x" + "1" * 40, "0x" + "2" * 40)))
        user_data = encode_join(JoinInit(amounts_in=(5 * E18 // 10, 4 * E18 // 10)))
        with pytest.raises(PoolStateError, match="mints no BPT"):
            pool.on_join_pool(user_data, PoolSnapshot.of([0, 0], [1, 1], 0))

    def test_proportional_in_without_balances_raises(
        self, station_pool: StationPool, unit_prices
    ) -> None:
        """Supply with no backing balances cannot mint shares for free."""
        user_data = encode_join(JoinProportionalIn(bpt_amount_out=E18))
        with pytest.raises(PoolStateError, match="no balances"):
            station_pool.on_join_pool(user_data, PoolSnapshot.of([0] * 4, unit_prices, 4 * E18))

    def test_garbage_user_data_raises(self, station_pool: StationPool, unit_prices) -> None:
        """Undecodable user data is rejected."""
        with pytest.raises(InvalidPayload):
            station_pool.on_join_pool(b"\x00", PoolSnapshot.of([0] * 4, unit_prices, 0))


class TestOnExitPool:
    """Tests for StationPool.on_exit_pool."""

    def test_exit_burns_and_charges_fee(self, station_pool: StationPool, unit_prices) -> None:
        """Withdrawing half the pool burns half the supply; fee is 1/10 of each amount."""
        amounts = (50 * E18,) * 4
        user_data = encode_exit(ExitProportionalOut(amounts_out=amounts))
        snapshot = PoolSnapshot.of([100 * E18] * 4, unit_prices, 400 * E18)
        result = station_pool.on_exit_pool(user_data, snapshot)
        assert result.bpt_in == 200 * E18
        assert result.amounts_out == amounts
        assert result.withdraw_fees == (5 * E18,) * 4

    def test_exit_fee_disabled(self, unit_prices) -> None:
        """withdraw_fee_rate 0 charges no fee."""
        pool = StationPool(PoolConfig(tokens=("0x" + "1" * 40, "0x" + "2" * 40)))
        user_data = encode_exit(ExitProportionalOut(amounts_out=(E18, E18)))
        result = pool.on_exit_pool(user_data, PoolSnapshot.of([2 * E18] * 2, [E18, E18], 2 * E18))
        assert result.bpt_in == E18
        assert result.withdraw_fees == (0, 0)

    def test_exit_above_balance_raises(self, station_pool: StationPool, unit_prices) -> None:
        """Exits never clamp to the available balance."""
        user_data = encode_exit(ExitProportionalOut(amounts_out=(E18, 0, 0, 0)))
        snapshot = PoolSnapshot.of([0, E18, E18, E18], unit_prices, 3 * E18)
        with pytest.raises(InsufficientBalance):
            station_pool.on_exit_pool(user_data, snapshot)

    def test_exit_wrong_length_raises(self, station_pool: StationPool, unit_prices) -> None:
        """Exit must carry one amount per token."""
        user_data = encode_exit(ExitProportionalOut(amounts_out=(E18,)))
        snapshot = PoolSnapshot.of([E18] * 4, unit_prices, 4 * E18)
        with pytest.raises(DimensionMismatch):
            station_pool.on_exit_pool(user_data, snapshot)


class TestPoolLifecycle:
    """Init, join and exit against a minimal Vault-style ledger."""

    def test_value_per_share_is_preserved(self, station_pool: StationPool, unit_prices) -> None:
        """Each step keeps balance value / total_bpt constant."""
        balances = [0] * 4
        total_bpt = 0

        init = station_pool.on_join_pool(
            encode_join(JoinInit(amounts_in=(50 * E18,) * 4)),
            PoolSnapshot.of(balances, unit_prices, total_bpt),
        )
        balances = [b + a for b, a in zip(balances, init.amounts_in)]
        total_bpt += init.bpt_out
        assert (balances, total_bpt) == ([50 * E18] * 4, 200 * E18)

        join = station_pool.on_join_pool(
            encode_join(JoinProportionalIn(bpt_amount_out=200 * E18)),
            PoolSnapshot.of(balances, unit_prices, total_bpt),
        )
        balances = [b + a for b, a in zip(balances, join.amounts_in)]
        total_bpt += join.bpt_out
        assert (balances, total_bpt) == ([100 * E18] * 4, 400 * E18)

        exit_ = station_pool.on_exit_pool(
            encode_exit(ExitProportionalOut(amounts_out=(50 * E18,) * 4)),
            PoolSnapshot.of(balances, unit_prices, total_bpt),
        )
        balances = [b - a for b, a in zip(balances, exit_.amounts_out)]
        total_bpt -= exit_.bpt_in
        assert (balances, total_bpt) == ([50 * E18] * 4, 200 * E18)

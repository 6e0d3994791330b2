"""Pure pricing and accounting math for Station pools.

- invariant_pricing: swap conversion at the oracle price ratio
- proportional_liquidity: BPT minted/burned by price-weighted value
- fees: swap imbalance fee and withdrawal fee
- fixed_point: shared integer fixed-point helpers
"""

from station.math.fees import calculate_swap_fee_amount, calculate_withdraw_fee
from station.math.fixed_point import ONE_18
from station.math.invariant_pricing import in_given_out, out_given_in
from station.math.proportional_liquidity import (
    ExitAmounts,
    all_tokens_in_for_exact_bpt_out,
    bootstrap_bpt_out,
    bpt_in_for_all_tokens_out,
    bpt_out_for_all_tokens_in,
)

__all__ = [
    "ONE_18",
    "ExitAmounts",
    "in_given_out",
    "out_given_in",
    "bootstrap_bpt_out",
    "bpt_out_for_all_tokens_in",
    "bpt_in_for_all_tokens_out",
    "all_tokens_in_for_exact_bpt_out",
    "calculate_swap_fee_amount",
    "calculate_withdraw_fee",
]

"""Pool — движок учёта пула ликвидности и кривая комиссии swap."""

from .fee_curve import calculate_fee, fee_for_final_liquidity
from .liquidity_pool import LiquidityPool, SwapResult

__all__ = [
    "LiquidityPool",
    "SwapResult",
    "calculate_fee",
    "fee_for_final_liquidity",
]

"""
instant_unstake — пул ликвидности для мгновенного unstake.

Держатели staked asset получают base asset сразу, без ожидания периода
unstake, торгуя через пул, который финансируют liquidity providers.
"""

from instant_unstake.core.errors import (
    ArithmeticOverflow,
    InsufficientLiquidity,
    InsufficientShares,
    InvalidConfig,
    PoolError,
    ZeroAmount,
)
from instant_unstake.core.domain import (
    FeeRate,
    LpTokenAmount,
    PoolConfig,
    PoolSnapshot,
    Price,
    StakedTokenAmount,
    TokenAmount,
)
from instant_unstake.pool import LiquidityPool, SwapResult

__all__ = [
    # Engine
    "LiquidityPool",
    "SwapResult",
    # Units
    "TokenAmount",
    "StakedTokenAmount",
    "LpTokenAmount",
    "Price",
    "FeeRate",
    # Models
    "PoolConfig",
    "PoolSnapshot",
    # Errors
    "PoolError",
    "InvalidConfig",
    "ZeroAmount",
    "InsufficientShares",
    "InsufficientLiquidity",
    "ArithmeticOverflow",
]

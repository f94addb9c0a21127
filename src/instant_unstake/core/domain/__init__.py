"""
Domain models and value objects.

Contains pool units (TokenAmount, StakedTokenAmount, LpTokenAmount, Price,
FeeRate), the immutable PoolConfig and the PoolSnapshot model.
"""

from instant_unstake.core.domain.pool_config import PoolConfig
from instant_unstake.core.domain.pool_state import SNAPSHOT_SCHEMA_VERSION, PoolSnapshot
from instant_unstake.core.domain.units import (
    BPS_PER_UNIT,
    FeeRate,
    LpTokenAmount,
    Price,
    StakedTokenAmount,
    TokenAmount,
    apply_fee,
    fee_rate_from_bps,
    pool_value,
    pool_value_scaled,
    require_unit,
    staked_to_token,
)

__all__ = [
    # Units module
    "BPS_PER_UNIT",
    "TokenAmount",
    "StakedTokenAmount",
    "LpTokenAmount",
    "Price",
    "FeeRate",
    "apply_fee",
    "fee_rate_from_bps",
    "pool_value",
    "pool_value_scaled",
    "require_unit",
    "staked_to_token",
    # Config model
    "PoolConfig",
    # Snapshot model
    "PoolSnapshot",
    "SNAPSHOT_SCHEMA_VERSION",
]

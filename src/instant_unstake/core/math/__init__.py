"""
Core math modules для instant_unstake

Fixed-point арифметика с гарантией детерминизма.
"""

from instant_unstake.core.math.fixed_point import (
    DECIMALS,
    FACTOR,
    RAW_MAX,
    FixedPoint,
    check_range,
    div_floor,
    mul_div_floor,
    mul_floor,
)

__all__ = [
    # Constants
    "DECIMALS",
    "FACTOR",
    "RAW_MAX",
    # Types
    "FixedPoint",
    # Functions
    "check_range",
    "div_floor",
    "mul_div_floor",
    "mul_floor",
]

"""
Test suite for instant_unstake

Contains:
- tests/unit/          : Unit tests for fixed-point math, units, fee curve,
                         pool config, snapshots/contracts and LiquidityPool
"""

"""
Contract Validation Module

Валидация JSON-контракта снапшота пула (pool_state.json).
"""

from .validators import (
    POOL_STATE_SCHEMA,
    PoolStateValidator,
    SchemaLoader,
    validate_pool_state,
)

__all__ = [
    "POOL_STATE_SCHEMA",
    "SchemaLoader",
    "PoolStateValidator",
    "validate_pool_state",
]

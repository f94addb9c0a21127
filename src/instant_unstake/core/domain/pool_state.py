"""
PoolSnapshot — снапшот состояния пула

Immutable Pydantic модель, представляющая полное состояние пула
(конфигурация + резервы + выпущенные LP-токены) в raw-единицах.
Полная совместимость с JSON Schema (contracts/schema/pool_state.json).

Используется для аудита и для восстановления пула в заданном состоянии
(LiquidityPool.from_snapshot).
"""

from typing import Final

from pydantic import BaseModel, Field, model_validator

from instant_unstake.core.math.fixed_point import DECIMALS, FACTOR, RAW_MAX

# Версия схемы снапшота
SNAPSHOT_SCHEMA_VERSION: Final[str] = "1"


class PoolSnapshot(BaseModel):
    """
    Снапшот пула ликвидности.

    Все величины — целые raw-значения fixed-point (value * 10**decimals).
    """

    # Метаданные
    schema_version: str = Field(
        SNAPSHOT_SCHEMA_VERSION, pattern="^1$", description="Версия схемы снапшота"
    )
    decimals: int = Field(
        DECIMALS, ge=DECIMALS, le=DECIMALS, description="Число знаков fixed-point"
    )

    # Конфигурация
    price: int = Field(..., gt=0, le=RAW_MAX, description="Цена staked в base (raw)")
    liquidity_target: int = Field(
        ..., gt=0, le=RAW_MAX, description="Целевой резерв base asset (raw)"
    )
    min_fee: int = Field(..., ge=0, le=FACTOR, description="Минимальная комиссия (raw)")
    max_fee: int = Field(..., ge=0, le=FACTOR, description="Максимальная комиссия (raw)")

    # Состояние
    token_amount: int = Field(..., ge=0, le=RAW_MAX, description="Резерв base asset (raw)")
    staked_token_amount: int = Field(
        ..., ge=0, le=RAW_MAX, description="Резерв staked asset (raw)"
    )
    lp_token_amount: int = Field(
        ..., ge=0, le=RAW_MAX, description="Выпущенные LP-токены (raw)"
    )

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def validate_invariants(self) -> "PoolSnapshot":
        """
        Инварианты пула:
        - min_fee <= max_fee
        - lp_token_amount == 0 ⇔ оба резерва == 0
        """
        if self.min_fee > self.max_fee:
            raise ValueError(f"min_fee {self.min_fee} must be <= max_fee {self.max_fee}")

        reserves_empty = self.token_amount == 0 and self.staked_token_amount == 0
        if (self.lp_token_amount == 0) != reserves_empty:
            raise ValueError(
                "lp_token_amount must be zero exactly when both reserves are zero: "
                f"lp={self.lp_token_amount}, token={self.token_amount}, "
                f"staked={self.staked_token_amount}"
            )
        return self

    def is_empty(self) -> bool:
        return self.lp_token_amount == 0

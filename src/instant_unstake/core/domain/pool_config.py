"""
PoolConfig — неизменяемая конфигурация пула

Immutable Pydantic модель: цена, целевая ликвидность и границы комиссии
фиксируются при создании пула и не меняются до конца его жизни.
Конфигурация встроена в каждый экземпляр пула, глобального состояния нет.

Ограничения:
- price > 0
- liquidity_target > 0
- 0 <= min_fee <= max_fee <= 1
"""

from pydantic import BaseModel, Field, InstanceOf, field_validator, model_validator

from .units import FeeRate, Price, TokenAmount


class PoolConfig(BaseModel):
    """
    Конфигурация пула ликвидности.

    Immutable модель (frozen=True). Поля принимают только готовые экземпляры
    единиц (InstanceOf): dict или raw int не конвертируются. Нарушение ограничений →
    pydantic.ValidationError (LiquidityPool.init переводит её в InvalidConfig).
    """

    price: InstanceOf[Price] = Field(..., description="Цена staked asset в base asset")
    liquidity_target: InstanceOf[TokenAmount] = Field(
        ..., description="Уровень резерва base asset, выше которого действует min_fee"
    )
    min_fee: InstanceOf[FeeRate] = Field(..., description="Минимальная комиссия swap (доля)")
    max_fee: InstanceOf[FeeRate] = Field(..., description="Максимальная комиссия swap (доля)")

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    @field_validator("price")
    @classmethod
    def validate_price_positive(cls, v: Price) -> Price:
        if v.is_zero():
            raise ValueError("price must be > 0")
        return v

    @field_validator("liquidity_target")
    @classmethod
    def validate_target_positive(cls, v: TokenAmount) -> TokenAmount:
        if v.is_zero():
            raise ValueError("liquidity_target must be > 0")
        return v

    @model_validator(mode="after")
    def validate_fee_bounds(self) -> "PoolConfig":
        """
        Проверка порядка границ комиссии.

        Верхняя граница 1 уже гарантирована типом FeeRate.
        """
        if self.min_fee > self.max_fee:
            raise ValueError(
                f"min_fee {self.min_fee} must be <= max_fee {self.max_fee}"
            )
        return self

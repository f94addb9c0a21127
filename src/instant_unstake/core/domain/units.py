"""
Units — типизированные единицы пула и конверсии между ними

Единственный допустимый способ преобразований между:
- TokenAmount (base asset)
- StakedTokenAmount (staked asset)
- LpTokenAmount (доли пула)
- Price (base за 1 staked)
- FeeRate (доля в [0, 1])

ЗАПРЕЩЕНО смешивать единицы без явного конвертера из этого модуля:
TokenAmount + StakedTokenAmount → TypeError.
"""

from typing import Final

from instant_unstake.core.math.fixed_point import (
    FACTOR,
    FixedPoint,
    check_range,
    mul_div_floor,
    mul_floor,
)

# Базисных пунктов в единице
BPS_PER_UNIT: Final[int] = 10_000


# =============================================================================
# ТИПЫ ЕДИНИЦ
# =============================================================================


class TokenAmount(FixedPoint):
    """Количество base asset."""


class StakedTokenAmount(FixedPoint):
    """Количество staked asset."""


class LpTokenAmount(FixedPoint):
    """Количество LP-токенов (долей пула)."""


class Price(FixedPoint):
    """Сколько base asset стоит 1 staked asset."""


class FeeRate(FixedPoint):
    """
    Ставка комиссии как доля: 0.001 == 0.1%.

    Допустимый диапазон [0, 1], то есть raw <= FACTOR.
    """

    def __post_init__(self) -> None:
        super().__post_init__()
        if self.raw > FACTOR:
            raise ValueError(f"FeeRate must be <= 1, got {self}")


# =============================================================================
# КОНВЕРТЕРЫ
# =============================================================================


def require_unit(value: object, cls: type, name: str) -> None:
    """Проверка точного типа единицы (подклассы не взаимозаменяемы)."""
    if type(value) is not cls:
        raise TypeError(f"{name} must be {cls.__name__}, got {type(value).__name__}")


def staked_to_token(staked: StakedTokenAmount, price: Price) -> TokenAmount:
    """
    Стоимость staked asset в base asset: floor(staked * price).

    Examples:
        >>> staked_to_token(StakedTokenAmount.from_int(10), Price.from_str("1.5"))
        TokenAmount(raw=15000000)
    """
    require_unit(staked, StakedTokenAmount, "staked")
    require_unit(price, Price, "price")
    return TokenAmount(mul_floor(staked.raw, price.raw, "staked_value"))


def pool_value_scaled(
    token_amount: TokenAmount,
    staked_token_amount: StakedTokenAmount,
    price: Price,
) -> int:
    """
    Стоимость пула V, умноженная на FACTOR, без округления.

    V * FACTOR = token_raw * FACTOR + staked_raw * price_raw

    Используется в расчёте долей, чтобы floor от V не влиял на результат.
    """
    require_unit(token_amount, TokenAmount, "token_amount")
    require_unit(staked_token_amount, StakedTokenAmount, "staked_token_amount")
    require_unit(price, Price, "price")
    return token_amount.raw * FACTOR + staked_token_amount.raw * price.raw


def pool_value(
    token_amount: TokenAmount,
    staked_token_amount: StakedTokenAmount,
    price: Price,
) -> TokenAmount:
    """
    Стоимость пула в base asset: V = token + staked * price (floor).

    Raises:
        ArithmeticOverflow: Если V не представимо
    """
    scaled = pool_value_scaled(token_amount, staked_token_amount, price)
    return TokenAmount(check_range(scaled // FACTOR, "pool_value"))


def apply_fee(gross: TokenAmount, fee: FeeRate) -> TokenAmount:
    """
    Сумма после комиссии: floor(gross * (1 - fee)).

    Удержанная часть gross - result >= gross * fee остаётся в пуле.

    Examples:
        >>> apply_fee(TokenAmount.from_int(15), FeeRate.from_str("0.001"))
        TokenAmount(raw=14985000)
    """
    require_unit(gross, TokenAmount, "gross")
    require_unit(fee, FeeRate, "fee")
    return TokenAmount(mul_div_floor(gross.raw, FACTOR - fee.raw, FACTOR, "net_amount"))


def fee_rate_from_bps(bps: int) -> FeeRate:
    """
    Базисные пункты → FeeRate.

    Examples:
        >>> fee_rate_from_bps(10)  # 0.1%
        FeeRate(raw=1000)

    Raises:
        ValueError: Если bps вне [0, 10000]
    """
    if isinstance(bps, bool) or not isinstance(bps, int):
        raise TypeError(f"bps must be int, got {type(bps).__name__}")
    if not 0 <= bps <= BPS_PER_UNIT:
        raise ValueError(f"bps must be in [0, {BPS_PER_UNIT}], got {bps}")
    return FeeRate(bps * FACTOR // BPS_PER_UNIT)

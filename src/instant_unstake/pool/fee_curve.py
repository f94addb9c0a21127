"""
Fee Curve — динамическая комиссия swap

Чистая функция без состояния: комиссия зависит только от того, сколько
base asset останется в пуле после сделки, относительно liquidity_target.

ФОРМУЛА:
    post = max(base_reserve_before - gross_out, 0)

    post >= liquidity_target  →  fee = min_fee
    иначе                     →  fee = max_fee - (max_fee - min_fee) * post / liquidity_target

    fee ∈ [min_fee, max_fee], при post == 0 fee == max_fee.

Кривая оценивается по ликвидности ПОСЛЕ сделки: крупный swap, уводящий пул
ниже целевого уровня, платит больше.

Округление (fixed-point):
    ratio = floor(post * FACTOR / liquidity_target)
    fee   = max_fee - floor((max_fee - min_fee) * ratio / FACTOR)
Оба floor сдвигают комиссию вверх, монотонность по gross_out сохраняется.
"""

from instant_unstake.core.domain.units import FeeRate, TokenAmount
from instant_unstake.core.math.fixed_point import div_floor, mul_floor


def fee_for_final_liquidity(
    final_liquidity: TokenAmount,
    liquidity_target: TokenAmount,
    min_fee: FeeRate,
    max_fee: FeeRate,
) -> FeeRate:
    """
    Комиссия для заданной ликвидности после сделки.

    Args:
        final_liquidity: Резерв base asset после выплаты (уже неотрицательный)
        liquidity_target: Целевой уровень резерва
        min_fee: Нижняя граница комиссии
        max_fee: Верхняя граница комиссии

    Returns:
        FeeRate в [min_fee, max_fee]

    Raises:
        ValueError: Если min_fee > max_fee
    """
    if min_fee > max_fee:
        raise ValueError(f"min_fee {min_fee} must be <= max_fee {max_fee}")

    if final_liquidity >= liquidity_target:
        return min_fee

    # final_liquidity < liquidity_target, поэтому target > 0 и ratio < FACTOR
    ratio = div_floor(final_liquidity.raw, liquidity_target.raw, "liquidity_ratio")
    discount = mul_floor(max_fee.raw - min_fee.raw, ratio, "fee_discount")
    fee = max_fee.raw - discount

    return FeeRate(min(max(fee, min_fee.raw), max_fee.raw))


def calculate_fee(
    base_reserve_before: TokenAmount,
    gross_out: TokenAmount,
    liquidity_target: TokenAmount,
    min_fee: FeeRate,
    max_fee: FeeRate,
) -> FeeRate:
    """
    Комиссия swap по резерву до сделки и брутто-выплате.

    Отрицательный post-trade резерв обрезается до 0 (такой swap всё равно
    будет отклонён по InsufficientLiquidity).

    Examples:
        >>> calculate_fee(
        ...     TokenAmount.from_int(1000), TokenAmount.from_int(15),
        ...     TokenAmount.from_int(90), FeeRate.from_str("0.001"), FeeRate.from_str("0.09"),
        ... )
        FeeRate(raw=1000)
    """
    post = max(base_reserve_before.raw - gross_out.raw, 0)
    return fee_for_final_liquidity(TokenAmount(post), liquidity_target, min_fee, max_fee)

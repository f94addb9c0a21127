"""
Тесты для модуля FixedPoint

Проверяет:
1. Конструкторы (raw, from_int, from_str, from_float)
2. Проверку диапазона и ArithmeticOverflow
3. floor-умножение и деление
4. Запрет смешивания единиц
5. Строковое представление
"""

from decimal import Decimal

import pytest

from instant_unstake.core.errors import ArithmeticOverflow
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
from instant_unstake.core.domain.units import StakedTokenAmount, TokenAmount

# =============================================================================
# ТЕСТЫ КОНСТРУКТОРОВ
# =============================================================================


class TestConstructors:
    """Тесты для конструкторов FixedPoint"""

    def test_factor_matches_decimals(self) -> None:
        assert DECIMALS == 6
        assert FACTOR == 1_000_000

    def test_from_int(self) -> None:
        """Целые единицы масштабируются на FACTOR"""
        assert FixedPoint.from_int(12345).raw == 12345 * FACTOR
        assert FixedPoint.from_int(0).raw == 0

    def test_from_str_exact(self) -> None:
        """Разбор строки точный, без ошибок округления float"""
        assert FixedPoint.from_str("123.456789").raw == 123_456_789
        assert FixedPoint.from_str("0.001").raw == 1_000
        assert FixedPoint.from_str("91.009").raw == 91_009_000
        assert FixedPoint.from_str("  7 ").raw == 7 * FACTOR

    def test_from_str_too_many_decimals_raises(self) -> None:
        with pytest.raises(ValueError, match="decimal places"):
            FixedPoint.from_str("0.0000001")

    @pytest.mark.parametrize("value", ["-1", "abc", "NaN", "Infinity", ""])
    def test_from_str_invalid_raises(self, value: str) -> None:
        with pytest.raises(ValueError):
            FixedPoint.from_str(value)

    def test_from_float_rounds_to_nearest_unit(self) -> None:
        """Float округляется до ближайшей raw-единицы"""
        assert FixedPoint.from_float(123.456789).raw == 123_456_789
        assert FixedPoint.from_float(1.5).raw == 1_500_000
        assert FixedPoint.from_float(0.09).raw == 90_000

    @pytest.mark.parametrize("value", [-123.456789, float("nan"), float("inf")])
    def test_from_float_invalid_raises(self, value: float) -> None:
        with pytest.raises(ValueError):
            FixedPoint.from_float(value)

    def test_default_zero(self) -> None:
        assert FixedPoint.zero().raw == 0
        assert FixedPoint.zero().is_zero()
        assert not FixedPoint.zero()

    def test_raw_must_be_int(self) -> None:
        with pytest.raises(TypeError):
            FixedPoint(1.5)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            FixedPoint(True)  # type: ignore[arg-type]

    def test_raw_out_of_range_raises(self) -> None:
        assert FixedPoint(RAW_MAX).raw == RAW_MAX
        with pytest.raises(ArithmeticOverflow):
            FixedPoint(RAW_MAX + 1)
        with pytest.raises(ArithmeticOverflow):
            FixedPoint(-1)


# =============================================================================
# ТЕСТЫ АРИФМЕТИКИ
# =============================================================================


class TestArithmetic:
    """Тесты для сложения/вычитания и raw-хелперов"""

    def test_addition(self) -> None:
        a = FixedPoint.from_str("12.345678")
        b = FixedPoint.from_str("7.654321")
        assert (a + b).raw == 19_999_999

    def test_subtraction(self) -> None:
        a = FixedPoint.from_int(10)
        b = FixedPoint.from_int(5)
        assert (a - b) == FixedPoint.from_int(5)

    def test_subtraction_underflow_raises(self) -> None:
        """В отличие от saturating-вычитания, underflow — ошибка"""
        with pytest.raises(ArithmeticOverflow, match="underflow"):
            FixedPoint.from_int(5) - FixedPoint.from_int(10)

    def test_addition_overflow_raises(self) -> None:
        with pytest.raises(ArithmeticOverflow, match="overflow"):
            FixedPoint(RAW_MAX) + FixedPoint(1)

    def test_result_keeps_unit_type(self) -> None:
        total = TokenAmount.from_int(1) + TokenAmount.from_int(2)
        assert type(total) is TokenAmount

    def test_mixing_units_raises(self) -> None:
        """TokenAmount и StakedTokenAmount не взаимозаменяемы"""
        with pytest.raises(TypeError, match="explicit converter"):
            TokenAmount.from_int(1) + StakedTokenAmount.from_int(1)
        with pytest.raises(TypeError):
            TokenAmount.from_int(1) < StakedTokenAmount.from_int(2)

    def test_different_units_never_equal(self) -> None:
        assert TokenAmount.from_int(1) != StakedTokenAmount.from_int(1)

    def test_mul_floor(self) -> None:
        """1.234567 * 2.345678 = 2.895896... → floor"""
        assert mul_floor(1_234_567, 2_345_678) == 2_895_896

    def test_div_floor(self) -> None:
        """2.345678 / 1.234567 = 1.900000... → floor"""
        assert div_floor(2_345_678, 1_234_567) == 1_900_000

    def test_mul_div_floor_rounds_down(self) -> None:
        assert mul_div_floor(10, 7, 3) == 23
        assert mul_div_floor(1, 1, 2) == 0

    def test_mul_div_floor_division_by_zero(self) -> None:
        with pytest.raises(ArithmeticOverflow, match="division by zero"):
            mul_div_floor(1, 1, 0)

    def test_mul_floor_overflow_detected(self) -> None:
        """Промежуточный результат точный, проверяется только итог"""
        assert mul_floor(RAW_MAX, FACTOR) == RAW_MAX
        with pytest.raises(ArithmeticOverflow):
            mul_floor(RAW_MAX, 2 * FACTOR)

    def test_check_range(self) -> None:
        assert check_range(0) == 0
        assert check_range(RAW_MAX) == RAW_MAX
        with pytest.raises(ArithmeticOverflow, match="reserve"):
            check_range(-5, "reserve")


# =============================================================================
# ТЕСТЫ СРАВНЕНИЯ И ПРЕДСТАВЛЕНИЯ
# =============================================================================


class TestComparisonAndDisplay:
    """Тесты для порядка, равенства и str/repr"""

    def test_ordering(self) -> None:
        a = FixedPoint.from_float(5.0)
        b = FixedPoint.from_float(10.0)
        assert a < b
        assert b > a
        assert a <= FixedPoint.from_float(5.0)
        assert b >= FixedPoint.from_float(10.0)

    def test_hashable(self) -> None:
        assert len({TokenAmount.from_int(1), TokenAmount(FACTOR)}) == 1

    def test_str(self) -> None:
        assert str(FixedPoint.from_str("123.456789")) == "123.456789"
        assert str(FixedPoint.from_int(100)) == "100.000000"
        assert str(FixedPoint(1)) == "0.000001"

    def test_repr_includes_unit(self) -> None:
        assert repr(TokenAmount(5)) == "TokenAmount(raw=5)"

    def test_to_decimal(self) -> None:
        assert FixedPoint.from_str("9.9991").to_decimal() == Decimal("9.9991")

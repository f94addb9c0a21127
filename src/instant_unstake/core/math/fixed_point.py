"""
FixedPoint — детерминированная fixed-point арифметика

Все суммы в пуле (резервы, LP-токены, цена, комиссии) хранятся как целое
число минимальных единиц (raw) с фиксированным числом знаков после запятой.
Float для учёта резервов и долей не используется.

Представление:
    value = raw / FACTOR, FACTOR = 10 ** DECIMALS
    0 <= raw <= RAW_MAX (беззнаковое 64-битное)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Выход результата за [0, RAW_MAX] → ArithmeticOverflow (никакого wrap/saturate)
2. Умножение и деление округляются вниз (floor)
3. Промежуточные произведения точные (int без ограничения разрядности)
4. Все операции детерминированы и воспроизводимы
"""

import math
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Final, TypeVar

from instant_unstake.core.errors import ArithmeticOverflow

# =============================================================================
# ПАРАМЕТРЫ ПРЕДСТАВЛЕНИЯ
# =============================================================================

# Число знаков после запятой
DECIMALS: Final[int] = 6

# Масштаб: 1.0 == FACTOR raw-единиц
FACTOR: Final[int] = 10**DECIMALS

# Максимальное raw-значение (u64)
RAW_MAX: Final[int] = 2**64 - 1

_FP = TypeVar("_FP", bound="FixedPoint")


# =============================================================================
# RAW-ХЕЛПЕРЫ
# =============================================================================


def check_range(raw: int, what: str = "value") -> int:
    """
    Проверка, что raw-значение представимо.

    Args:
        raw: Результат вычисления в raw-единицах
        what: Имя величины (для сообщения об ошибке)

    Returns:
        raw без изменений

    Raises:
        ArithmeticOverflow: Если raw < 0 или raw > RAW_MAX
    """
    if raw < 0:
        raise ArithmeticOverflow(f"{what} underflow: {raw} < 0")
    if raw > RAW_MAX:
        raise ArithmeticOverflow(f"{what} overflow: {raw} > {RAW_MAX}")
    return raw


def mul_div_floor(a: int, b: int, c: int, what: str = "mul_div") -> int:
    """
    floor(a * b / c) в точной целочисленной арифметике.

    Args:
        a: Множитель (raw)
        b: Множитель (raw)
        c: Делитель (raw)
        what: Имя величины (для сообщения об ошибке)

    Returns:
        Результат в raw-единицах, проверенный на диапазон

    Raises:
        ArithmeticOverflow: Если c == 0 или результат вне диапазона

    Examples:
        >>> mul_div_floor(10, 7, 3)
        23
    """
    if c == 0:
        raise ArithmeticOverflow(f"{what}: division by zero")
    return check_range((a * b) // c, what)


def mul_floor(a: int, b: int, what: str = "mul") -> int:
    """
    Fixed-point умножение: floor(a * b / FACTOR).

    Examples:
        >>> mul_floor(1_500_000, 10_000_000)  # 1.5 * 10.0
        15000000
    """
    return mul_div_floor(a, b, FACTOR, what)


def div_floor(a: int, b: int, what: str = "div") -> int:
    """
    Fixed-point деление: floor(a * FACTOR / b).

    Examples:
        >>> div_floor(3_000_000, 2_000_000)  # 3.0 / 2.0
        1500000
    """
    return mul_div_floor(a, FACTOR, b, what)


# =============================================================================
# FIXED POINT
# =============================================================================


@dataclass(frozen=True, order=True)
class FixedPoint:
    """
    Неотрицательное fixed-point число с DECIMALS знаками.

    Immutable (frozen=True). Сравнение и сложение допускаются только
    между значениями одного типа: подклассы (TokenAmount, Price, ...)
    не взаимозаменяемы без явного конвертера из units.
    """

    raw: int

    def __post_init__(self) -> None:
        if isinstance(self.raw, bool) or not isinstance(self.raw, int):
            raise TypeError(
                f"{type(self).__name__}.raw must be int, got {type(self.raw).__name__}"
            )
        check_range(self.raw, type(self).__name__)

    # -------------------------------------------------------------------------
    # Конструкторы
    # -------------------------------------------------------------------------

    @classmethod
    def zero(cls: type[_FP]) -> _FP:
        return cls(0)

    @classmethod
    def from_int(cls: type[_FP], value: int) -> _FP:
        """
        Целое число единиц → fixed-point.

        Examples:
            >>> FixedPoint.from_int(100).raw
            100000000
        """
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"value must be int, got {type(value).__name__}")
        if value < 0:
            raise ValueError(f"value must be non-negative, got {value}")
        return cls(value * FACTOR)

    @classmethod
    def from_str(cls: type[_FP], value: str) -> _FP:
        """
        Точный разбор десятичной строки.

        Args:
            value: Строка вида "123.456789" (не более DECIMALS знаков)

        Raises:
            ValueError: Если строка не число, отрицательная, не конечная
                или содержит больше DECIMALS знаков после запятой
        """
        try:
            parsed = Decimal(value.strip())
        except (InvalidOperation, AttributeError) as e:
            raise ValueError(f"not a decimal number: {value!r}") from e

        if not parsed.is_finite():
            raise ValueError(f"value must be finite, got {value!r}")
        if parsed < 0:
            raise ValueError(f"value must be non-negative, got {value!r}")

        scaled = parsed.scaleb(DECIMALS)
        if scaled != scaled.to_integral_value():
            raise ValueError(f"{value!r} has more than {DECIMALS} decimal places")
        return cls(int(scaled))

    @classmethod
    def from_float(cls: type[_FP], value: float) -> _FP:
        """
        Float → fixed-point с округлением до ближайшей raw-единицы.

        Только для ввода: внутри движка float не используется.

        Raises:
            ValueError: Если value NaN/Inf или отрицательное
        """
        if not math.isfinite(value):
            raise ValueError(f"value must be finite, got {value}")
        if value < 0:
            raise ValueError(f"value must be non-negative, got {value}")
        return cls(int(round(value * FACTOR)))

    # -------------------------------------------------------------------------
    # Арифметика
    # -------------------------------------------------------------------------

    def _require_same_unit(self, other: object) -> None:
        if type(other) is not type(self):
            raise TypeError(
                f"cannot combine {type(self).__name__} with {type(other).__name__}; "
                f"use an explicit converter from units"
            )

    def __add__(self: _FP, other: _FP) -> _FP:
        if not isinstance(other, FixedPoint):
            return NotImplemented
        self._require_same_unit(other)
        return type(self)(check_range(self.raw + other.raw, type(self).__name__))

    def __sub__(self: _FP, other: _FP) -> _FP:
        if not isinstance(other, FixedPoint):
            return NotImplemented
        self._require_same_unit(other)
        return type(self)(check_range(self.raw - other.raw, type(self).__name__))

    def __bool__(self) -> bool:
        return self.raw != 0

    def is_zero(self) -> bool:
        return self.raw == 0

    # -------------------------------------------------------------------------
    # Представление
    # -------------------------------------------------------------------------

    def to_decimal(self) -> Decimal:
        """Точное Decimal-представление (для отчётов и сравнений в тестах)."""
        return Decimal(self.raw).scaleb(-DECIMALS)

    def __str__(self) -> str:
        whole, frac = divmod(self.raw, FACTOR)
        return f"{whole}.{frac:0{DECIMALS}d}"

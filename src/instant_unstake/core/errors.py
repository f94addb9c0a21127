"""
Pool Errors — типизированные ошибки движка пула

Все ошибки возвращаются вызывающему синхронно, внутри ядра повторов нет.

КРИТИЧЕСКИЙ ИНВАРИАНТ:
Любая ошибка оставляет состояние пула без изменений (strong exception safety).
"""


class PoolError(Exception):
    """Базовая ошибка движка пула ликвидности."""
    pass


class InvalidConfig(PoolError):
    """
    Невалидные параметры init.

    Нарушено хотя бы одно из: price > 0, liquidity_target > 0,
    0 <= min_fee <= max_fee <= 1.
    """
    pass


class ZeroAmount(PoolError):
    """
    Количество равно нулю или округляется до нуля.

    Кроме нулевого аргумента: swap, у которого gross или выплата после комиссии
    округляются до 0, и депозит, за который выпускается 0 LP-токенов.
    Резерв без LP-токенов не возникает.
    """
    pass


class InsufficientShares(PoolError):
    """Попытка погасить больше LP-токенов, чем выпущено."""
    pass


class InsufficientLiquidity(PoolError):
    """Swap требует выплатить больше base asset, чем есть в пуле."""
    pass


class ArithmeticOverflow(PoolError):
    """
    Результат вычисления вышел за представимый диапазон.

    Диапазон fixed-point: 0 <= raw <= RAW_MAX. Отрицательный результат
    (underflow) и деление на ноль также попадают сюда.
    """
    pass

"""Liquidity Pool — движок учёта пула мгновенного unstake.

Пул хранит два резерва (base asset и staked asset) и число выпущенных
LP-токенов. Операции:
- add_liquidity: LP вносит base asset, получает LP-токены
- remove_liquidity: LP гасит LP-токены, получает пропорциональную долю резервов
- swap: держатель staked asset получает base asset немедленно за комиссию

Стоимость пула в base asset:
    V = token_amount + staked_token_amount * price

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Резервы и supply LP-токенов >= 0
2. lp_token_amount == 0 ⇔ token_amount == 0 и staked_token_amount == 0
3. swap никогда не уменьшает V (комиссия остаётся в пуле)
4. Любая ошибка оставляет состояние без изменений: все новые значения
   вычисляются заранее, присваивание только после всех проверок

Каждая операция — одна синхронная транзакция над одним пулом, без I/O и
без блокировок. Синхронизация последовательности вызовов — забота вызывающего.
"""

from typing import NamedTuple

from pydantic import ValidationError

from instant_unstake.core.contracts.validators import validate_pool_state
from instant_unstake.core.domain.pool_config import PoolConfig
from instant_unstake.core.domain.pool_state import PoolSnapshot
from instant_unstake.core.domain.units import (
    FeeRate,
    LpTokenAmount,
    Price,
    StakedTokenAmount,
    TokenAmount,
    apply_fee,
    pool_value,
    pool_value_scaled,
    require_unit,
    staked_to_token,
)
from instant_unstake.core.errors import (
    InsufficientLiquidity,
    InsufficientShares,
    InvalidConfig,
    ZeroAmount,
)
from instant_unstake.core.math.fixed_point import FACTOR, mul_div_floor
from instant_unstake.pool.fee_curve import calculate_fee


class SwapResult(NamedTuple):
    """Результат swap: выплата в base asset и применённая комиссия."""

    token_out: TokenAmount
    fee_rate: FeeRate


class LiquidityPool:
    """Пул ликвидности base asset для мгновенного обмена staked asset.

    Создаётся через LiquidityPool.init (пустой пул) или
    LiquidityPool.from_snapshot (пул в заданном состоянии).
    """

    def __init__(self, config: PoolConfig):
        """
        Args:
            config: провалидированная неизменяемая конфигурация
        """
        self._config = config
        self._token_amount = TokenAmount.zero()
        self._staked_token_amount = StakedTokenAmount.zero()
        self._lp_token_amount = LpTokenAmount.zero()

    @classmethod
    def init(
        cls,
        price: Price,
        liquidity_target: TokenAmount,
        min_fee: FeeRate,
        max_fee: FeeRate,
    ) -> "LiquidityPool":
        """Создание пустого пула.

        Raises:
            InvalidConfig: price <= 0, liquidity_target <= 0,
                min_fee > max_fee или аргумент не того типа
        """
        try:
            config = PoolConfig(
                price=price,
                liquidity_target=liquidity_target,
                min_fee=min_fee,
                max_fee=max_fee,
            )
        except ValidationError as e:
            raise InvalidConfig(f"Invalid pool config: {e}") from e
        return cls(config)

    @classmethod
    def from_snapshot(cls, snapshot: PoolSnapshot) -> "LiquidityPool":
        """Восстановление пула из снапшота (аудит, тесты на произвольных состояниях)."""
        pool = cls.init(
            price=Price(snapshot.price),
            liquidity_target=TokenAmount(snapshot.liquidity_target),
            min_fee=FeeRate(snapshot.min_fee),
            max_fee=FeeRate(snapshot.max_fee),
        )
        pool._token_amount = TokenAmount(snapshot.token_amount)
        pool._staked_token_amount = StakedTokenAmount(snapshot.staked_token_amount)
        pool._lp_token_amount = LpTokenAmount(snapshot.lp_token_amount)
        return pool

    @classmethod
    def from_state(cls, data: dict) -> "LiquidityPool":
        """Восстановление пула из JSON-представления снапшота.

        Данные сначала проходят контракт pool_state.json, затем инварианты
        PoolSnapshot.

        Raises:
            jsonschema.ValidationError: нарушена структура или диапазоны полей
            pydantic.ValidationError: нарушены кросс-полевые инварианты
        """
        validate_pool_state(data)
        return cls.from_snapshot(PoolSnapshot(**data))

    # -------------------------------------------------------------------------
    # Состояние (read-only)
    # -------------------------------------------------------------------------

    @property
    def config(self) -> PoolConfig:
        return self._config

    @property
    def price(self) -> Price:
        return self._config.price

    @property
    def token_amount(self) -> TokenAmount:
        return self._token_amount

    @property
    def staked_token_amount(self) -> StakedTokenAmount:
        return self._staked_token_amount

    @property
    def lp_token_amount(self) -> LpTokenAmount:
        return self._lp_token_amount

    def pool_value(self) -> TokenAmount:
        """Текущая стоимость пула V в base asset (floor)."""
        return pool_value(self._token_amount, self._staked_token_amount, self.price)

    def snapshot(self) -> PoolSnapshot:
        return PoolSnapshot(
            price=self._config.price.raw,
            liquidity_target=self._config.liquidity_target.raw,
            min_fee=self._config.min_fee.raw,
            max_fee=self._config.max_fee.raw,
            token_amount=self._token_amount.raw,
            staked_token_amount=self._staked_token_amount.raw,
            lp_token_amount=self._lp_token_amount.raw,
        )

    # -------------------------------------------------------------------------
    # Операции
    # -------------------------------------------------------------------------

    def add_liquidity(self, token_amount: TokenAmount) -> LpTokenAmount:
        """Внесение base asset в пул.

        Пустой пул: LP-токены выпускаются 1:1 (первый LP задаёт единицу доли).
        Иначе: minted = floor(token_amount * lp_supply / V), где V — стоимость
        пула до внесения. Доля существующих LP в V не размывается.

        Args:
            token_amount: вносимый base asset (> 0)

        Returns:
            Выпущенные LP-токены

        Raises:
            ZeroAmount: token_amount == 0 или депозит слишком мал для 1 raw LP
            ArithmeticOverflow: резерв или supply выходят за диапазон
        """
        require_unit(token_amount, TokenAmount, "token_amount")
        if token_amount.is_zero():
            raise ZeroAmount("token_amount must be > 0")

        if self._lp_token_amount.is_zero():
            minted = LpTokenAmount(token_amount.raw)
        else:
            # V * FACTOR точно, без промежуточного floor
            value_scaled = pool_value_scaled(
                self._token_amount, self._staked_token_amount, self.price
            )
            minted = LpTokenAmount(
                mul_div_floor(
                    token_amount.raw * FACTOR,
                    self._lp_token_amount.raw,
                    value_scaled,
                    "minted_lp",
                )
            )
            if minted.is_zero():
                raise ZeroAmount(
                    f"deposit {token_amount} is too small to mint any LP tokens "
                    f"(LP supply {self._lp_token_amount})"
                )

        new_token_amount = self._token_amount + token_amount
        new_lp_token_amount = self._lp_token_amount + minted

        self._token_amount = new_token_amount
        self._lp_token_amount = new_lp_token_amount
        return minted

    def remove_liquidity(
        self, lp_token_amount: LpTokenAmount
    ) -> tuple[TokenAmount, StakedTokenAmount]:
        """Погашение LP-токенов.

        Выплата строго пропорциональна:
            token_out  = floor(token_amount * lp / lp_supply)
            staked_out = floor(staked_token_amount * lp / lp_supply)
        Пыль от floor остаётся в пуле. Полный выход (lp == lp_supply) отдаёт
        резервы целиком, чтобы пул стал ровно пустым.

        Raises:
            ZeroAmount: lp_token_amount == 0
            InsufficientShares: lp_token_amount > lp_supply
        """
        require_unit(lp_token_amount, LpTokenAmount, "lp_token_amount")
        if lp_token_amount.is_zero():
            raise ZeroAmount("lp_token_amount must be > 0")
        if lp_token_amount > self._lp_token_amount:
            raise InsufficientShares(
                f"cannot redeem {lp_token_amount} LP tokens, "
                f"only {self._lp_token_amount} outstanding"
            )

        if lp_token_amount == self._lp_token_amount:
            token_out = self._token_amount
            staked_out = self._staked_token_amount
        else:
            supply = self._lp_token_amount.raw
            token_out = TokenAmount(
                mul_div_floor(self._token_amount.raw, lp_token_amount.raw, supply, "token_out")
            )
            staked_out = StakedTokenAmount(
                mul_div_floor(
                    self._staked_token_amount.raw, lp_token_amount.raw, supply, "staked_out"
                )
            )

        new_token_amount = self._token_amount - token_out
        new_staked_token_amount = self._staked_token_amount - staked_out
        new_lp_token_amount = self._lp_token_amount - lp_token_amount

        self._token_amount = new_token_amount
        self._staked_token_amount = new_staked_token_amount
        self._lp_token_amount = new_lp_token_amount
        return token_out, staked_out

    def quote_swap(self, staked_token_amount: StakedTokenAmount) -> SwapResult:
        """Расчёт swap без изменения состояния.

        1. gross = floor(staked * price)
        2. fee по кривой для резерва ПОСЛЕ выплаты gross
        3. token_out = floor(gross * (1 - fee))

        Raises:
            ZeroAmount: staked == 0, gross или token_out округляются до 0
            InsufficientLiquidity: token_out > token_amount
            ArithmeticOverflow: gross вне диапазона
        """
        require_unit(staked_token_amount, StakedTokenAmount, "staked_token_amount")
        if staked_token_amount.is_zero():
            raise ZeroAmount("staked_token_amount must be > 0")

        gross = staked_to_token(staked_token_amount, self.price)
        if gross.is_zero():
            raise ZeroAmount(
                f"staked_token_amount {staked_token_amount} is worth less than "
                f"one base unit at price {self.price}"
            )

        fee_rate = calculate_fee(
            self._token_amount,
            gross,
            self._config.liquidity_target,
            self._config.min_fee,
            self._config.max_fee,
        )
        token_out = apply_fee(gross, fee_rate)
        if token_out.is_zero():
            raise ZeroAmount(
                f"swap of {staked_token_amount} pays nothing after fee {fee_rate}"
            )

        if token_out > self._token_amount:
            raise InsufficientLiquidity(
                f"swap requires {token_out} base tokens, pool holds {self._token_amount}"
            )
        return SwapResult(token_out=token_out, fee_rate=fee_rate)

    def swap(self, staked_token_amount: StakedTokenAmount) -> SwapResult:
        """Обмен staked asset на base asset (all-or-nothing, без частичного исполнения).

        Удержанная комиссия gross - token_out увеличивает V — это доход LP.

        Returns:
            SwapResult(token_out, fee_rate)
        """
        result = self.quote_swap(staked_token_amount)

        new_staked_token_amount = self._staked_token_amount + staked_token_amount
        new_token_amount = self._token_amount - result.token_out

        self._staked_token_amount = new_staked_token_amount
        self._token_amount = new_token_amount
        return result

    def __str__(self) -> str:
        return (
            "> LiquidityPool\n"
            f"\t const Price: {self._config.price}\n"
            f"\t const Min fee: {self._config.min_fee}\n"
            f"\t const Max fee: {self._config.max_fee}\n"
            f"\t const Target liquidity: {self._config.liquidity_target}\n"
            f"\t - Token amount: {self._token_amount}\n"
            f"\t - Liquidity token amount: {self._lp_token_amount}\n"
            f"\t - Staked token amount: {self._staked_token_amount}\n"
        )

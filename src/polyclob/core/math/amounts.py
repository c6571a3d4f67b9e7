"""
OrderAmounts — Fixed-point расчёт сумм ордера

Перевод человеческих price/size в raw целочисленные суммы контракта:
- tick_decimals = число дробных знаков tick size
- size_decimals = 2 (фиксировано)
- amount_decimals = tick_decimals + size_decimals

price округляется до tick_decimals, size до size_decimals (ROUND_HALF_UP,
т.е. половина от нуля), cost = round(shares * price, amount_decimals).
Raw суммы получаются умножением на 10^decimals и отбрасыванием дробной
части (floor): сумма никогда не завышается.

BUY:  maker отдаёт cost (USDC), получает shares
SELL: maker отдаёт shares, получает cost (USDC)

Вся арифметика в Decimal. float переводится через repr, чтобы двоичная
погрешность не попадала в raw сумму.
"""

import re
from dataclasses import dataclass
from decimal import ROUND_FLOOR, ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Final, Union

from polyclob.core.domain.order import OrderSide
from polyclob.core.errors import InvalidAmount


# =============================================================================
# ПАРАМЕТРЫ
# =============================================================================

# Точность размера ордера (shares) в дробных знаках
SIZE_DECIMALS: Final[int] = 2

# Точность Decimal контекста: с запасом покрывает uint256
DECIMAL_PRECISION: Final[int] = 80

_TICK_SIZE_RE: Final = re.compile(r"^[0-9]+(\.[0-9]+)?$")

Number = Union[Decimal, int, float, str]


# =============================================================================
# ТИПЫ
# =============================================================================


@dataclass(frozen=True)
class OrderAmounts:
    """Raw суммы ордера (целочисленные строки)."""

    maker: str
    taker: str


# =============================================================================
# ПРИМИТИВЫ
# =============================================================================


def to_decimal(value: Number, name: str = "value") -> Decimal:
    """
    Конверсия входного числа в конечный Decimal.

    Args:
        value: Decimal, int, float или десятичная строка
        name: Имя параметра для сообщения об ошибке

    Returns:
        Decimal

    Raises:
        InvalidAmount: Если значение не число или не конечно
    """
    if isinstance(value, bool):
        raise InvalidAmount(f"{name} must be a number, got bool")

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation as exc:
            raise InvalidAmount(f"{name} is not a valid decimal: {value!r}") from exc
    else:
        raise InvalidAmount(f"{name} must be a number, got {type(value).__name__}")

    if not result.is_finite():
        raise InvalidAmount(f"{name} must be finite, got {value!r}")

    return result


def tick_decimals(tick_size: str) -> int:
    """
    Число дробных знаков tick size.

    Считается по строке, как её прислала биржа: "0.01" → 2, "1" → 0.

    Raises:
        InvalidAmount: Если tick_size не положительная десятичная строка
    """
    if not isinstance(tick_size, str) or not _TICK_SIZE_RE.match(tick_size):
        raise InvalidAmount(f"tick size is not a valid decimal string: {tick_size!r}")

    if Decimal(tick_size) <= 0:
        raise InvalidAmount(f"tick size must be positive: {tick_size!r}")

    _, _, fraction = tick_size.partition(".")
    return len(fraction)


def round_half_up(value: Decimal, places: int) -> Decimal:
    """
    Округление до places знаков, половина округляется от нуля.

    Raises:
        InvalidAmount: Если результат не помещается в DECIMAL_PRECISION знаков
    """
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        try:
            return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
        except InvalidOperation as exc:
            raise InvalidAmount(f"{value} is out of range at {places} decimals") from exc


def to_raw(value: Decimal, decimals: int) -> str:
    """
    Decimal → raw целое (value * 10^decimals) с отбрасыванием дробной части.

    Returns:
        Целочисленная строка без десятичной точки
    """
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        raw = value.scaleb(decimals).to_integral_value(rounding=ROUND_FLOOR)
    return str(int(raw))


def from_raw(raw: str, decimals: int) -> Decimal:
    """Raw целое → Decimal (raw / 10^decimals)."""
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        return Decimal(int(raw)).scaleb(-decimals)


# =============================================================================
# РАСЧЁТ СУММ ОРДЕРА
# =============================================================================


def calculate_order_amounts(
    side: Union[OrderSide, str],
    price: Number,
    size: Number,
    tick_size: str,
) -> OrderAmounts:
    """
    Raw maker/taker суммы ордера.

    Пример: price=0.45, size=100, tick_size="0.01", BUY
        tick_decimals=2, amount_decimals=4
        shares=100.00 → "10000", cost=45.0000 → "450000"
        maker="450000", taker="10000"

    Args:
        side: Сторона ордера
        price: Цена за долю (> 0)
        size: Количество долей (> 0)
        tick_size: Tick size рынка (десятичная строка)

    Returns:
        OrderAmounts(maker, taker)

    Raises:
        InvalidAmount: Если price/size не положительны, слишком велики
            или tick_size некорректен
    """
    price_dec = to_decimal(price, "price")
    size_dec = to_decimal(size, "size")

    if price_dec <= 0:
        raise InvalidAmount(f"price must be positive, got {price}")
    if size_dec <= 0:
        raise InvalidAmount(f"size must be positive, got {size}")

    price_decimals = tick_decimals(tick_size)
    amount_decimals = price_decimals + SIZE_DECIMALS

    rounded_price = round_half_up(price_dec, price_decimals)
    shares = round_half_up(size_dec, SIZE_DECIMALS)
    with localcontext() as ctx:
        ctx.prec = DECIMAL_PRECISION
        notional = shares * rounded_price
    cost = round_half_up(notional, amount_decimals)

    shares_raw = to_raw(shares, SIZE_DECIMALS)
    cost_raw = to_raw(cost, amount_decimals)

    if OrderSide(side) == OrderSide.BUY:
        return OrderAmounts(maker=cost_raw, taker=shares_raw)
    return OrderAmounts(maker=shares_raw, taker=cost_raw)

"""
Order — Модели ордера CTF Exchange

Immutable Pydantic модели ордера в wire-представлении биржи:
- все денежные и идентификационные поля — целочисленные строки без десятичной точки
- side и signatureType — строковые метки (в EIP-712 сообщении кодируются числами)

Python-атрибуты в snake_case, wire-имена (camelCase) задаются через alias.
"""

from decimal import Decimal
from enum import Enum
from typing import Any, Dict, Final, Union

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# CONSTANTS
# =============================================================================

ZERO_ADDRESS: Final[str] = "0x0000000000000000000000000000000000000000"

# taker == "public" означает ордер для любого контрагента (zero address)
PUBLIC_TAKER: Final[str] = "public"

ADDRESS_PATTERN: Final[str] = r"^0x[0-9a-fA-F]{40}$"
UINT_PATTERN: Final[str] = r"^[0-9]+$"


# =============================================================================
# ENUMS
# =============================================================================


class OrderSide(str, Enum):
    """Сторона ордера"""

    BUY = "BUY"
    SELL = "SELL"


class SignatureType(str, Enum):
    """Тип подписи ордера (определяет, как контракт проверяет signer)"""

    EOA = "eoa"
    POLY_PROXY = "poly-proxy"
    POLY_GNOSIS_SAFE = "poly-gnosis-safe"


class OrderType(str, Enum):
    """Time-in-force: Good till cancelled | Fill or kill | Good till date | Fill and kill"""

    GTC = "GTC"
    FOK = "FOK"
    GTD = "GTD"
    FAK = "FAK"


_SIDE_CODES: Final[Dict[OrderSide, int]] = {
    OrderSide.BUY: 0,
    OrderSide.SELL: 1,
}

_SIGNATURE_TYPE_CODES: Final[Dict[SignatureType, int]] = {
    SignatureType.EOA: 0,
    SignatureType.POLY_PROXY: 1,
    SignatureType.POLY_GNOSIS_SAFE: 2,
}


def order_side_to_number(side: Union[OrderSide, str]) -> int:
    """
    Числовой код стороны для on-chain кодирования.

    Returns:
        BUY → 0, SELL → 1
    """
    return _SIDE_CODES[OrderSide(side)]


def signature_type_to_number(signature_type: Union[SignatureType, str]) -> int:
    """
    Числовой код типа подписи для on-chain кодирования.

    Returns:
        eoa → 0, poly-proxy → 1, poly-gnosis-safe → 2
    """
    return _SIGNATURE_TYPE_CODES[SignatureType(signature_type)]


# =============================================================================
# ORDER MODELS
# =============================================================================


class Order(BaseModel):
    """
    Неподписанный ордер.

    Порядок полей совпадает с порядком полей EIP-712 типа Order.
    Создаётся на каждое торговое намерение, после сборки не изменяется.
    """

    salt: str = Field(..., pattern=UINT_PATTERN, description="Случайное число для различения ордеров")
    maker: str = Field(..., pattern=ADDRESS_PATTERN, description="Адрес, чьи средства используются")
    signer: str = Field(..., pattern=ADDRESS_PATTERN, description="Адрес, подписывающий ордер")
    taker: str = Field(..., pattern=ADDRESS_PATTERN, description="Контрагент (zero address = любой)")
    token_id: str = Field(..., alias="tokenId", pattern=UINT_PATTERN, description="ERC1155 token id")
    maker_amount: str = Field(
        ..., alias="makerAmount", pattern=UINT_PATTERN, description="Сколько отдаёт maker (raw)"
    )
    taker_amount: str = Field(
        ..., alias="takerAmount", pattern=UINT_PATTERN, description="Сколько получает maker (raw)"
    )
    expiration: str = Field(..., pattern=UINT_PATTERN, description="Unix время истечения (0 = нет)")
    nonce: str = Field(..., pattern=UINT_PATTERN, description="Nonce аккаунта на бирже")
    fee_rate_bps: str = Field(..., alias="feeRateBps", pattern=UINT_PATTERN, description="Комиссия (bps)")
    side: OrderSide = Field(..., description="Сторона ордера")
    signature_type: SignatureType = Field(
        SignatureType.EOA, alias="signatureType", description="Тип подписи"
    )

    model_config = {"frozen": True, "populate_by_name": True}

    def to_wire(self) -> Dict[str, Any]:
        """Wire-представление (camelCase, строки) для REST API."""
        return self.model_dump(by_alias=True, mode="json")

    def with_signature(self, signature: str) -> "SignedOrder":
        """Подписанная копия ордера."""
        return SignedOrder(**self.model_dump(), signature=signature)


class SignedOrder(Order):
    """Ордер вместе с EIP-712 подписью. Может отправляться повторно."""

    signature: str = Field(..., min_length=1, description="EIP-712 подпись (0x-hex)")

    def unsigned(self) -> Order:
        """Ордер без подписи."""
        return Order(**self.model_dump(exclude={"signature"}))


# =============================================================================
# ORDER INTENT
# =============================================================================


class OrderIntent(BaseModel):
    """
    Торговое намерение пользователя (человеческие price/size).

    price и size не ограничиваются здесь: их проверяет калькулятор сумм,
    который поднимает InvalidAmount.
    """

    token_id: str = Field(..., pattern=UINT_PATTERN, description="Token id исхода рынка")
    price: Union[Decimal, int, float, str] = Field(..., description="Цена за долю")
    size: Union[Decimal, int, float, str] = Field(..., description="Количество долей")
    side: OrderSide = Field(..., description="Сторона ордера")
    expiration: int = Field(0, ge=0, description="Unix время истечения (0 = без истечения)")
    taker: str = Field(PUBLIC_TAKER, description="Адрес контрагента или 'public'")
    # False: подпись для обычного exchange, neg-risk рынки требуют True
    neg_risk: bool = Field(False, description="Подписывать для neg-risk exchange")

    model_config = {"frozen": True}

    @field_validator("taker")
    @classmethod
    def validate_taker(cls, v: str) -> str:
        """taker — 'public' или EVM адрес"""
        if v == PUBLIC_TAKER:
            return v
        if len(v) != 42 or not v.startswith("0x"):
            raise ValueError(f"taker must be 'public' or an address, got {v!r}")
        try:
            int(v[2:], 16)
        except ValueError:
            raise ValueError(f"taker must be 'public' or an address, got {v!r}")
        return v

    def taker_address(self) -> str:
        """Адрес taker для ордера ('public' → zero address)"""
        return ZERO_ADDRESS if self.taker == PUBLIC_TAKER else self.taker

"""
Responses — модели ответов REST API по ордерам

Поля повторяют wire-имена биржи через alias. Неизвестные поля игнорируются.
"""

from typing import List, Optional, Union

from pydantic import BaseModel, Field

from .order import OrderSide


class OrderResponse(BaseModel):
    """Ответ на размещение ордера."""

    success: bool = Field(..., description="Ордер принят")
    error_msg: Optional[str] = Field(None, alias="errorMsg", description="Причина отказа")
    order_id: Optional[str] = Field(None, alias="orderID", description="Идентификатор ордера")
    transactions_hashes: List[str] = Field(
        default_factory=list, alias="transactionsHashes", description="Хэши транзакций матчинга"
    )
    status: Optional[str] = Field(None, description="Статус (matched/live/delayed)")

    model_config = {"frozen": True, "populate_by_name": True}


class CancelResponse(BaseModel):
    """Ответ на отмену ордера(ов)."""

    success: bool = Field(True, description="Отмена принята")
    error_msg: Optional[str] = Field(None, alias="errorMsg", description="Причина отказа")
    canceled: List[str] = Field(default_factory=list, description="Отменённые ордера")

    model_config = {"frozen": True, "populate_by_name": True}


class AssociateTrade(BaseModel):
    """Сделка, связанная с открытым ордером."""

    id: str
    order_id: str
    market: str
    asset_id: str
    side: OrderSide
    size: str
    fee_rate_bps: str
    price: str
    status: str
    match_time: Optional[str] = None
    last_update: Optional[str] = None
    outcome: Optional[str] = None
    owner: Optional[str] = None
    maker_address: Optional[str] = None
    transaction_hash: Optional[str] = None

    model_config = {"frozen": True}


class OpenOrder(BaseModel):
    """Открытый ордер аккаунта (/data/order, /data/orders)."""

    id: str
    market: str
    asset_id: str
    owner: str
    side: OrderSide
    size: str = Field(..., description="Оставшийся размер")
    original_size: str
    price: str
    type: str = Field(..., description="Time-in-force (GTC/FOK/GTD/FAK)")
    fee_rate_bps: str = "0"
    status: str
    created_at: Optional[Union[int, str]] = None
    last_update: Optional[str] = None
    outcome: Optional[str] = None
    expiration: Optional[str] = None
    maker_address: Optional[str] = None
    associate_trades: List[AssociateTrade] = Field(default_factory=list)

    model_config = {"frozen": True}

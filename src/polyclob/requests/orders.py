"""
Order Requests — создание, размещение и отмена ордеров

create_and_post_order не атомарен:
- без L2 credentials AuthRequired поднимается до обращения к signer
- ошибки подписи (InvalidAmount, MarketDataUnavailable, SigningFailed)
  пробрасываются как есть
- ошибки размещения — PostFailed с уже подписанным ордером внутри, его можно
  отправить повторно через post_order без переподписи
"""

import logging
from typing import Any, List, Optional

from pydantic import ValidationError

from polyclob.core.domain.credentials import ApiCredentials, ApiRequest, AuthKind
from polyclob.core.domain.order import OrderIntent, OrderType, SignedOrder
from polyclob.core.domain.responses import CancelResponse, OpenOrder, OrderResponse
from polyclob.core.errors import AuthRequired, ClobError, PostFailed, RequestFailed
from polyclob.orders.builder import OrderBuilder
from polyclob.transport.dispatcher import AuthenticatedRequestDispatcher


logger = logging.getLogger(__name__)


class OrderRequests:
    """Запросы по ордерам аккаунта (L2)."""

    def __init__(self, dispatcher: AuthenticatedRequestDispatcher, builder: OrderBuilder):
        self.dispatcher = dispatcher
        self.builder = builder

    # -------------------------------------------------------------------------
    # Create / post
    # -------------------------------------------------------------------------

    def create_order(self, intent: OrderIntent) -> SignedOrder:
        """Сборка и подпись ордера (см. OrderBuilder.create_order)."""
        return self.builder.create_order(intent)

    def post_order(
        self,
        signed_order: SignedOrder,
        order_type: OrderType = OrderType.GTC,
    ) -> OrderResponse:
        """
        Размещение подписанного ордера.

        Raises:
            AuthRequired: Нет L2 credentials
            PostFailed: Сервер отклонил ордер или запрос не дошёл
        """
        credentials = self._require_credentials()

        body = {
            "order": signed_order.to_wire(),
            "owner": credentials.api_key,
            "orderType": OrderType(order_type).value,
        }
        try:
            payload = self.dispatcher.request(
                ApiRequest(method="POST", path="/order", auth=AuthKind.L2, body=body)
            )
        except RequestFailed as exc:
            raise PostFailed(exc.reason, signed_order, exc.status_code) from exc

        try:
            response = OrderResponse.model_validate(payload)
        except ValidationError as exc:
            raise PostFailed(f"unexpected post response: {payload!r}", signed_order) from exc

        if not response.success:
            raise PostFailed(response.error_msg or "order rejected", signed_order)

        logger.info("order %s posted (%s)", response.order_id, response.status)
        return response

    def create_and_post_order(
        self,
        intent: OrderIntent,
        order_type: OrderType = OrderType.GTC,
    ) -> OrderResponse:
        """
        Создание и размещение ордера за один вызов.

        Raises:
            AuthRequired: Нет L2 credentials, signer не вызывался
            InvalidAmount, MarketDataUnavailable, SigningFailed: ордер не подписан
            PostFailed: ордер подписан, но не размещён (signed_order внутри ошибки)
        """
        self._require_credentials()
        signed_order = self.create_order(intent)
        try:
            return self.post_order(signed_order, order_type)
        except PostFailed:
            raise
        except ClobError as exc:
            raise PostFailed(str(exc), signed_order) from exc

    # -------------------------------------------------------------------------
    # Cancel
    # -------------------------------------------------------------------------

    def cancel_order(self, order_id: str) -> CancelResponse:
        """Отмена одного ордера."""
        payload = self.dispatcher.request(
            ApiRequest(method="DELETE", path="/order", auth=AuthKind.L2, body={"orderID": order_id})
        )
        response = CancelResponse.model_validate(payload)
        if response.success:
            logger.info("order %s cancel requested", order_id)
        return response

    def cancel_orders(self, order_ids: List[str]) -> CancelResponse:
        """Отмена нескольких ордеров."""
        payload = self.dispatcher.request(
            ApiRequest(method="DELETE", path="/orders", auth=AuthKind.L2, body=list(order_ids))
        )
        return CancelResponse.model_validate(payload)

    def cancel_all_orders(self) -> CancelResponse:
        """Отмена всех открытых ордеров аккаунта."""
        payload = self.dispatcher.request(
            ApiRequest(method="DELETE", path="/cancel-all", auth=AuthKind.L2)
        )
        return CancelResponse.model_validate(payload)

    def _require_credentials(self) -> ApiCredentials:
        credentials = self.dispatcher.credentials
        if credentials is None:
            raise AuthRequired("posting an order requires API credentials (L2)")
        return credentials

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_order(self, order_id: str) -> OpenOrder:
        """Ордер по идентификатору."""
        payload = self.dispatcher.request(
            ApiRequest(method="GET", path=f"/data/order/{order_id}", auth=AuthKind.L2)
        )
        return OpenOrder.model_validate(payload)

    def list_orders(
        self,
        market_id: str,
        asset_id: Optional[str] = None,
        order_id: Optional[str] = None,
    ) -> List[OpenOrder]:
        """Открытые ордера аккаунта на рынке."""
        payload = self.dispatcher.request(
            ApiRequest(
                method="GET",
                path="/data/orders",
                auth=AuthKind.L2,
                params={"id": order_id, "market": market_id, "asset_id": asset_id},
            )
        )
        return [OpenOrder.model_validate(item) for item in _items(payload)]

    def check_order_reward_scoring(self, order_id: str) -> bool:
        """Участвует ли ордер в программе rewards."""
        payload = self.dispatcher.request(
            ApiRequest(
                method="GET",
                path="/order-scoring",
                auth=AuthKind.L2,
                params={"order_id": order_id},
            )
        )
        return bool(payload.get("scoring")) if isinstance(payload, dict) else False


def _items(payload: Any) -> List[Any]:
    # /data/orders отдаёт либо список, либо страницу {"data": [...]}
    if isinstance(payload, dict):
        return list(payload.get("data") or [])
    return list(payload or [])

"""
Domain models and value objects.

Contains fundamental domain entities like Order, SignedOrder, OrderIntent,
ApiCredentials, AuthKind and REST response models.
"""

from polyclob.core.domain.credentials import (
    ApiCredentials,
    ApiRequest,
    AuthKind,
    HeaderPayload,
)
from polyclob.core.domain.order import (
    PUBLIC_TAKER,
    ZERO_ADDRESS,
    Order,
    OrderIntent,
    OrderSide,
    OrderType,
    SignatureType,
    SignedOrder,
    order_side_to_number,
    signature_type_to_number,
)
from polyclob.core.domain.responses import (
    AssociateTrade,
    CancelResponse,
    OpenOrder,
    OrderResponse,
)

__all__ = [
    # Order model
    "ZERO_ADDRESS",
    "PUBLIC_TAKER",
    "Order",
    "SignedOrder",
    "OrderIntent",
    "OrderSide",
    "OrderType",
    "SignatureType",
    "order_side_to_number",
    "signature_type_to_number",
    # Credentials
    "ApiCredentials",
    "ApiRequest",
    "AuthKind",
    "HeaderPayload",
    # Responses
    "OrderResponse",
    "CancelResponse",
    "OpenOrder",
    "AssociateTrade",
]

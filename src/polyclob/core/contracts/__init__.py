"""
Wire contracts — JSON Schema проверки payload биржи.
"""

from .validators import (
    SIGNED_ORDER_CONTRACT,
    TYPED_DATA_CONTRACT,
    ContractValidator,
    SchemaLoader,
    SignedOrderValidator,
    TypedDataValidator,
    signed_order_violations,
    validate_signed_order,
    validate_typed_data,
)

__all__ = [
    "SIGNED_ORDER_CONTRACT",
    "TYPED_DATA_CONTRACT",
    "SchemaLoader",
    "ContractValidator",
    "SignedOrderValidator",
    "TypedDataValidator",
    "signed_order_violations",
    "validate_signed_order",
    "validate_typed_data",
]

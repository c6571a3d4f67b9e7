"""
Signing — EIP-712 typed data, L2 HMAC подписи и signer capability.
"""

from .eip712 import (
    CLOB_AUTH_MESSAGE,
    TypedData,
    build_clob_auth_typed_data,
    build_order_typed_data,
    order_message,
)
from .hmac_signature import build_hmac_signature, serialize_body
from .registry import (
    POLYGON_AMOY_CONTRACTS,
    POLYGON_CONTRACTS,
    ContractConfig,
    get_contract_config,
)
from .signer import LocalAccountSigner, MessageSigner, sign_typed_data

__all__ = [
    # EIP-712
    "CLOB_AUTH_MESSAGE",
    "TypedData",
    "build_clob_auth_typed_data",
    "build_order_typed_data",
    "order_message",
    # HMAC
    "build_hmac_signature",
    "serialize_body",
    # Registry
    "ContractConfig",
    "POLYGON_CONTRACTS",
    "POLYGON_AMOY_CONTRACTS",
    "get_contract_config",
    # Signer
    "MessageSigner",
    "LocalAccountSigner",
    "sign_typed_data",
]

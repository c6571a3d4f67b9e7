"""
EIP-712 TypedData — сборка структурированных сообщений для подписи

Два вида сообщений:
- ClobAuth : аттестация контроля над кошельком (L1), используется для выдачи
             API credentials
- Order    : ордер CTF Exchange, проверяется on-chain контрактом

Порядок полей и типы в схемах — внешний контракт с verifying contract,
менять их нельзя. Модуль чистый: signer здесь не вызывается.

Кодирование значений:
- в REST теле ордера суммы и id — строки
- в EIP-712 сообщении — целые (uint256), side/signatureType — коды (uint8)
"""

import copy
import json
from dataclasses import dataclass
from typing import Any, Dict, Final, List, Tuple

from polyclob.core.domain.order import (
    Order,
    order_side_to_number,
    signature_type_to_number,
)
from polyclob.signing.registry import get_contract_config


# =============================================================================
# CONSTANTS
# =============================================================================

CLOB_AUTH_DOMAIN_NAME: Final[str] = "ClobAuthDomain"
CLOB_AUTH_DOMAIN_VERSION: Final[str] = "1"
CLOB_AUTH_PRIMARY_TYPE: Final[str] = "ClobAuth"
CLOB_AUTH_MESSAGE: Final[str] = "This message attests that I control the given wallet"

ORDER_DOMAIN_NAME: Final[str] = "Polymarket CTF Exchange"
ORDER_DOMAIN_VERSION: Final[str] = "1"
ORDER_PRIMARY_TYPE: Final[str] = "Order"

EIP712_DOMAIN_TYPE: Final[str] = "EIP712Domain"

_DOMAIN_FIELDS: Final[Tuple[Tuple[str, str], ...]] = (
    ("name", "string"),
    ("version", "string"),
    ("chainId", "uint256"),
    ("verifyingContract", "address"),
)

CLOB_AUTH_FIELDS: Final[Tuple[Tuple[str, str], ...]] = (
    ("address", "address"),
    ("timestamp", "string"),
    ("nonce", "uint256"),
    ("message", "string"),
)

ORDER_FIELDS: Final[Tuple[Tuple[str, str], ...]] = (
    ("salt", "uint256"),
    ("maker", "address"),
    ("signer", "address"),
    ("taker", "address"),
    ("tokenId", "uint256"),
    ("makerAmount", "uint256"),
    ("takerAmount", "uint256"),
    ("expiration", "uint256"),
    ("nonce", "uint256"),
    ("feeRateBps", "uint256"),
    ("side", "uint8"),
    ("signatureType", "uint8"),
)


# =============================================================================
# TYPED DATA
# =============================================================================


@dataclass(frozen=True)
class TypedData:
    """
    EIP-712 документ: (domain, types, primaryType, message).

    types всегда содержит EIP712Domain, выведенный из ключей domain.
    """

    domain: Dict[str, Any]
    types: Dict[str, List[Dict[str, str]]]
    primary_type: str
    message: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        """Полный EIP-712 документ (копия, изменения не влияют на TypedData)."""
        return {
            "types": copy.deepcopy(self.types),
            "primaryType": self.primary_type,
            "domain": dict(self.domain),
            "message": dict(self.message),
        }

    def canonical_json(self) -> str:
        """Детерминированная JSON сериализация документа."""
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))


def _struct_type(fields: Tuple[Tuple[str, str], ...]) -> List[Dict[str, str]]:
    return [{"name": name, "type": type_} for name, type_ in fields]


def _domain_type(domain: Dict[str, Any]) -> List[Dict[str, str]]:
    return _struct_type(tuple(f for f in _DOMAIN_FIELDS if f[0] in domain))


# =============================================================================
# BUILDERS
# =============================================================================


def build_clob_auth_typed_data(
    address: str,
    chain_id: int,
    timestamp: int,
    nonce: int = 0,
) -> TypedData:
    """
    ClobAuth сообщение для L1 аутентификации.

    Args:
        address: Адрес кошелька
        chain_id: Chain id сети
        timestamp: Unix время (секунды), в сообщении — строка
        nonce: Nonce (uint256)

    Returns:
        TypedData для передачи signer
    """
    domain = {
        "name": CLOB_AUTH_DOMAIN_NAME,
        "version": CLOB_AUTH_DOMAIN_VERSION,
        "chainId": int(chain_id),
    }
    message = {
        "address": address,
        "timestamp": str(int(timestamp)),
        "nonce": int(nonce),
        "message": CLOB_AUTH_MESSAGE,
    }
    return TypedData(
        domain=domain,
        types={
            EIP712_DOMAIN_TYPE: _domain_type(domain),
            CLOB_AUTH_PRIMARY_TYPE: _struct_type(CLOB_AUTH_FIELDS),
        },
        primary_type=CLOB_AUTH_PRIMARY_TYPE,
        message=message,
    )


def order_message(order: Order) -> Dict[str, Any]:
    """
    EIP-712 сообщение ордера: uint поля — int, side/signatureType — коды.
    """
    wire = order.to_wire()
    message: Dict[str, Any] = {}
    for name, type_ in ORDER_FIELDS:
        if name == "side":
            message[name] = order_side_to_number(order.side)
        elif name == "signatureType":
            message[name] = signature_type_to_number(order.signature_type)
        elif type_ == "uint256":
            message[name] = int(wire[name])
        else:
            message[name] = wire[name]
    return message


def build_order_typed_data(order: Order, chain_id: int, neg_risk: bool = False) -> TypedData:
    """
    Order сообщение для подписи ордера.

    verifyingContract берётся из реестра контрактов по chain id. По умолчанию
    (neg_risk=False) это обычный exchange; ордера neg-risk рынков подписываются
    только для neg-risk exchange, для них нужен neg_risk=True.

    Args:
        order: Неподписанный ордер (signature, если есть, игнорируется)
        chain_id: Chain id сети
        neg_risk: Подписывать для neg-risk exchange

    Returns:
        TypedData для передачи signer
    """
    contracts = get_contract_config(chain_id)
    domain = {
        "name": ORDER_DOMAIN_NAME,
        "version": ORDER_DOMAIN_VERSION,
        "chainId": int(chain_id),
        "verifyingContract": contracts.exchange_for(neg_risk),
    }
    return TypedData(
        domain=domain,
        types={
            EIP712_DOMAIN_TYPE: _domain_type(domain),
            ORDER_PRIMARY_TYPE: _struct_type(ORDER_FIELDS),
        },
        primary_type=ORDER_PRIMARY_TYPE,
        message=order_message(order),
    )

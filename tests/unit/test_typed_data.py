"""
Тесты для EIP-712 TypedData и реестра контрактов

Проверяемые инварианты:
1. Детерминизм: одинаковые входы → байт-в-байт одинаковый документ
2. chain id 137 → mainnet verifyingContract, иначе → Amoy
3. neg_risk переключает verifyingContract на neg-risk exchange
4. Сообщение ордера: uint256 — int, side/signatureType — коды
5. Порядок полей типов фиксирован
6. Документы соответствуют контракту typed_data.json
"""

import pytest

from polyclob.core.contracts import validate_typed_data
from polyclob.core.domain import ZERO_ADDRESS, Order, OrderSide, SignatureType
from polyclob.signing.eip712 import (
    CLOB_AUTH_MESSAGE,
    ORDER_FIELDS,
    build_clob_auth_typed_data,
    build_order_typed_data,
    order_message,
)
from polyclob.signing.registry import (
    AMOY_CHAIN_ID,
    POLYGON_AMOY_CONTRACTS,
    POLYGON_CHAIN_ID,
    POLYGON_CONTRACTS,
    get_contract_config,
)


MAKER = "0x1111111111111111111111111111111111111111"


@pytest.fixture
def order():
    return Order(
        salt="987654321",
        maker=MAKER,
        signer=MAKER,
        taker=ZERO_ADDRESS,
        token_id="1234567890123456789",
        maker_amount="450000",
        taker_amount="10000",
        expiration="0",
        nonce="3",
        fee_rate_bps="10",
        side=OrderSide.SELL,
        signature_type=SignatureType.POLY_PROXY,
    )


# =============================================================================
# ТЕСТЫ: Реестр контрактов
# =============================================================================


class TestContractRegistry:
    def test_mainnet(self):
        assert get_contract_config(POLYGON_CHAIN_ID) is POLYGON_CONTRACTS

    @pytest.mark.parametrize("chain_id", [AMOY_CHAIN_ID, 1, 31337])
    def test_any_other_chain_is_testnet(self, chain_id):
        assert get_contract_config(chain_id) is POLYGON_AMOY_CONTRACTS

    def test_exchange_for(self):
        assert POLYGON_CONTRACTS.exchange_for(False) == POLYGON_CONTRACTS.exchange
        assert POLYGON_CONTRACTS.exchange_for(True) == POLYGON_CONTRACTS.neg_risk_exchange


# =============================================================================
# ТЕСТЫ: Order typed data
# =============================================================================


class TestOrderTypedData:
    """EIP-712 документ ордера."""

    def test_deterministic(self, order):
        first = build_order_typed_data(order, POLYGON_CHAIN_ID)
        second = build_order_typed_data(order, POLYGON_CHAIN_ID)
        assert first == second
        assert first.canonical_json() == second.canonical_json()

    def test_domain_mainnet(self, order):
        typed = build_order_typed_data(order, POLYGON_CHAIN_ID)
        assert typed.domain == {
            "name": "Polymarket CTF Exchange",
            "version": "1",
            "chainId": 137,
            "verifyingContract": POLYGON_CONTRACTS.exchange,
        }
        assert typed.primary_type == "Order"

    def test_domain_testnet(self, order):
        typed = build_order_typed_data(order, AMOY_CHAIN_ID)
        assert typed.domain["chainId"] == AMOY_CHAIN_ID
        assert typed.domain["verifyingContract"] == POLYGON_AMOY_CONTRACTS.exchange

    def test_neg_risk_exchange(self, order):
        typed = build_order_typed_data(order, POLYGON_CHAIN_ID, neg_risk=True)
        assert typed.domain["verifyingContract"] == POLYGON_CONTRACTS.neg_risk_exchange

    def test_field_order(self, order):
        typed = build_order_typed_data(order, POLYGON_CHAIN_ID)
        assert [f["name"] for f in typed.types["Order"]] == [name for name, _ in ORDER_FIELDS]
        assert [f["name"] for f in typed.types["EIP712Domain"]] == [
            "name",
            "version",
            "chainId",
            "verifyingContract",
        ]

    def test_message_encoding(self, order):
        """REST тело — строки, сообщение для подписи — целые и коды."""
        message = order_message(order)
        assert message["salt"] == 987654321
        assert message["tokenId"] == 1234567890123456789
        assert message["makerAmount"] == 450000
        assert message["nonce"] == 3
        assert message["feeRateBps"] == 10
        assert message["side"] == 1
        assert message["signatureType"] == 1
        assert message["maker"] == MAKER
        assert message["taker"] == ZERO_ADDRESS

        assert order.to_wire()["makerAmount"] == "450000"

    def test_signature_ignored(self, order):
        signed = order.with_signature("0xdeadbeef")
        assert build_order_typed_data(signed, POLYGON_CHAIN_ID) == build_order_typed_data(
            order, POLYGON_CHAIN_ID
        )

    def test_to_dict_is_copy(self, order):
        typed = build_order_typed_data(order, POLYGON_CHAIN_ID)
        document = typed.to_dict()
        document["types"]["Order"].clear()
        document["message"]["salt"] = 0
        assert len(typed.types["Order"]) == 12
        assert typed.message["salt"] == 987654321

    def test_matches_contract(self, order):
        validate_typed_data(build_order_typed_data(order, POLYGON_CHAIN_ID).to_dict())


# =============================================================================
# ТЕСТЫ: ClobAuth typed data
# =============================================================================


class TestClobAuthTypedData:
    """EIP-712 документ L1 аттестации."""

    def test_structure(self):
        typed = build_clob_auth_typed_data(MAKER, POLYGON_CHAIN_ID, timestamp=1700000000, nonce=5)
        assert typed.domain == {"name": "ClobAuthDomain", "version": "1", "chainId": 137}
        assert typed.primary_type == "ClobAuth"
        assert typed.types["ClobAuth"] == [
            {"name": "address", "type": "address"},
            {"name": "timestamp", "type": "string"},
            {"name": "nonce", "type": "uint256"},
            {"name": "message", "type": "string"},
        ]
        assert typed.message == {
            "address": MAKER,
            "timestamp": "1700000000",
            "nonce": 5,
            "message": CLOB_AUTH_MESSAGE,
        }

    def test_domain_type_has_no_verifying_contract(self):
        typed = build_clob_auth_typed_data(MAKER, POLYGON_CHAIN_ID, timestamp=1)
        assert [f["name"] for f in typed.types["EIP712Domain"]] == ["name", "version", "chainId"]

    def test_deterministic(self):
        first = build_clob_auth_typed_data(MAKER, AMOY_CHAIN_ID, timestamp=1700000000)
        second = build_clob_auth_typed_data(MAKER, AMOY_CHAIN_ID, timestamp=1700000000)
        assert first.canonical_json() == second.canonical_json()

    def test_timestamp_changes_document(self):
        first = build_clob_auth_typed_data(MAKER, POLYGON_CHAIN_ID, timestamp=1700000000)
        second = build_clob_auth_typed_data(MAKER, POLYGON_CHAIN_ID, timestamp=1700000001)
        assert first.canonical_json() != second.canonical_json()

    def test_matches_contract(self):
        validate_typed_data(build_clob_auth_typed_data(MAKER, POLYGON_CHAIN_ID, timestamp=1).to_dict())

"""
Тесты для Signer capability

Проверяемые инварианты:
1. sign_typed_data приводит любую ошибку signer к SigningRejected
2. Пустая подпись — SigningRejected
3. LocalAccountSigner подписывает EIP-712 так, что из подписи
   восстанавливается адрес аккаунта
"""

import pytest
from eth_account import Account
from eth_account.messages import encode_typed_data

from polyclob.core.domain import ZERO_ADDRESS, Order, OrderSide
from polyclob.core.errors import SigningRejected
from polyclob.signing.eip712 import build_clob_auth_typed_data, build_order_typed_data
from polyclob.signing.signer import LocalAccountSigner, MessageSigner, sign_typed_data
from tests.fakes import FakeSigner


# Тестовый ключ (публично известный, только для тестов)
TEST_PRIVATE_KEY = "0x4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318"


class EmptySigner(FakeSigner):
    def sign_typed_data(self, domain, types, primary_type, message) -> str:
        return ""


# =============================================================================
# ТЕСТЫ: sign_typed_data
# =============================================================================


class TestSignTypedData:
    def test_fake_signer_satisfies_protocol(self, fake_signer):
        assert isinstance(fake_signer, MessageSigner)

    def test_passes_typed_data_to_signer(self, fake_signer):
        typed = build_clob_auth_typed_data(fake_signer.address, 137, timestamp=1700000000)
        signature = sign_typed_data(fake_signer, typed)

        assert signature.startswith("0x")
        call = fake_signer.calls[0]
        assert call["primary_type"] == "ClobAuth"
        assert call["domain"] == typed.domain
        assert call["message"] == typed.message

    def test_signer_error_wrapped(self):
        signer = FakeSigner(error=RuntimeError("device disconnected"))
        typed = build_clob_auth_typed_data(signer.address, 137, timestamp=1)
        with pytest.raises(SigningRejected) as exc_info:
            sign_typed_data(signer, typed)
        assert isinstance(exc_info.value.__cause__, RuntimeError)

    def test_rejection_passes_through(self):
        rejection = SigningRejected("user cancelled")
        signer = FakeSigner(error=rejection)
        typed = build_clob_auth_typed_data(signer.address, 137, timestamp=1)
        with pytest.raises(SigningRejected) as exc_info:
            sign_typed_data(signer, typed)
        assert exc_info.value is rejection

    def test_empty_signature(self):
        signer = EmptySigner()
        typed = build_clob_auth_typed_data(signer.address, 137, timestamp=1)
        with pytest.raises(SigningRejected):
            sign_typed_data(signer, typed)


# =============================================================================
# ТЕСТЫ: LocalAccountSigner
# =============================================================================


class TestLocalAccountSigner:
    """Подпись локальным приватным ключом (eth_account)."""

    @pytest.fixture
    def signer(self):
        return LocalAccountSigner(TEST_PRIVATE_KEY)

    def test_address(self, signer):
        assert signer.address == Account.from_key(TEST_PRIVATE_KEY).address
        assert isinstance(signer, MessageSigner)

    def test_repr_hides_key(self, signer):
        assert TEST_PRIVATE_KEY[2:] not in repr(signer)
        assert signer.address in repr(signer)

    def test_invalid_key(self):
        with pytest.raises(ValueError):
            LocalAccountSigner("0x1234")

    def test_clob_auth_signature_recovers_address(self, signer):
        typed = build_clob_auth_typed_data(signer.address, 137, timestamp=1700000000, nonce=0)
        signature = sign_typed_data(signer, typed)

        recovered = Account.recover_message(
            encode_typed_data(full_message=typed.to_dict()),
            signature=signature,
        )
        assert recovered == signer.address

    def test_order_signature_recovers_address(self, signer):
        order = Order(
            salt="42",
            maker=signer.address,
            signer=signer.address,
            taker=ZERO_ADDRESS,
            token_id="1234567890",
            maker_amount="450000",
            taker_amount="10000",
            expiration="0",
            nonce="0",
            fee_rate_bps="0",
            side=OrderSide.BUY,
        )
        typed = build_order_typed_data(order, 137)
        signature = sign_typed_data(signer, typed)

        recovered = Account.recover_message(
            encode_typed_data(full_message=typed.to_dict()),
            signature=signature,
        )
        assert recovered == signer.address

    def test_deterministic(self, signer):
        """ECDSA по RFC 6979: одинаковое сообщение → одинаковая подпись"""
        typed = build_clob_auth_typed_data(signer.address, 137, timestamp=1)
        assert sign_typed_data(signer, typed) == sign_typed_data(signer, typed)

"""
Signer — capability подписи EIP-712 сообщений

Ядро не знает, как хранится ключ: signer передаётся как объект с одним
методом sign_typed_data и адресом аккаунта. Это позволяет подставлять
аппаратные кошельки, удалённые signer и тестовые двойники.

LocalAccountSigner — реализация на eth_account для локального приватного ключа.
"""

import logging
from typing import Any, Dict, List, Protocol, runtime_checkable

from eth_account import Account
from eth_account.messages import encode_typed_data
from eth_utils import to_hex

from polyclob.core.errors import SigningRejected
from polyclob.signing.eip712 import TypedData


logger = logging.getLogger(__name__)


@runtime_checkable
class MessageSigner(Protocol):
    """Capability подписи EIP-712 сообщений от имени одного аккаунта."""

    @property
    def address(self) -> str:
        """Адрес аккаунта, которым подписываются сообщения."""
        ...

    def sign_typed_data(
        self,
        domain: Dict[str, Any],
        types: Dict[str, List[Dict[str, str]]],
        primary_type: str,
        message: Dict[str, Any],
    ) -> str:
        """
        Подпись EIP-712 сообщения.

        Returns:
            Подпись (0x-hex)

        Raises:
            SigningRejected: Если подпись отклонена
        """
        ...


def sign_typed_data(signer: MessageSigner, typed_data: TypedData) -> str:
    """
    Подпись TypedData через signer.

    Любая ошибка signer приводится к SigningRejected (исходная ошибка
    сохраняется в __cause__).

    Raises:
        SigningRejected: Если signer отказал, упал или вернул пустую подпись
    """
    try:
        signature = signer.sign_typed_data(
            domain=typed_data.domain,
            types=typed_data.types,
            primary_type=typed_data.primary_type,
            message=typed_data.message,
        )
    except SigningRejected:
        raise
    except Exception as exc:
        raise SigningRejected(f"signer failed on {typed_data.primary_type}: {exc}") from exc

    if not signature:
        raise SigningRejected(f"signer returned empty signature for {typed_data.primary_type}")

    return signature


class LocalAccountSigner:
    """Signer на локальном приватном ключе (eth_account)."""

    def __init__(self, private_key: str):
        """
        Args:
            private_key: Приватный ключ (hex, с 0x или без)

        Raises:
            ValueError: Если ключ некорректен
        """
        try:
            self._account = Account.from_key(private_key)
        except Exception as exc:
            raise ValueError("invalid private key") from exc

    def __repr__(self) -> str:
        return f"LocalAccountSigner(address={self.address})"

    @property
    def address(self) -> str:
        return self._account.address

    def sign_typed_data(
        self,
        domain: Dict[str, Any],
        types: Dict[str, List[Dict[str, str]]],
        primary_type: str,
        message: Dict[str, Any],
    ) -> str:
        full_message = {
            "types": types,
            "primaryType": primary_type,
            "domain": domain,
            "message": message,
        }
        try:
            signable = encode_typed_data(full_message=full_message)
            signed = self._account.sign_message(signable)
        except Exception as exc:
            raise SigningRejected(f"failed to sign {primary_type}: {exc}") from exc

        logger.debug("signed %s with %s", primary_type, self.address)
        return to_hex(signed.signature)

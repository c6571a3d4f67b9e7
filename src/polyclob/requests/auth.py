"""
Auth Requests — выдача L2 API credentials через L1 аттестацию

ClobAuth подпись кошелька обменивается на {apiKey, secret, passphrase}:
- POST /auth/api-key         : создать новый ключ для nonce
- GET  /auth/derive-api-key  : получить ранее созданный ключ для nonce
"""

import logging
from typing import Any

from pydantic import ValidationError

from polyclob.core.domain.credentials import ApiCredentials, ApiRequest, AuthKind
from polyclob.core.errors import RequestFailed
from polyclob.transport.dispatcher import AuthenticatedRequestDispatcher


logger = logging.getLogger(__name__)


class AuthRequests:
    """Запросы выдачи API credentials (L1)."""

    def __init__(self, dispatcher: AuthenticatedRequestDispatcher):
        self.dispatcher = dispatcher

    def create_api_key(self, nonce: int = 0) -> ApiCredentials:
        """
        Создание новых API credentials.

        Raises:
            AuthRequired: Нет signer
            SigningRejected: Signer отказал в подписи
            RequestFailed: Сервер отказал
        """
        payload = self.dispatcher.request(
            ApiRequest(method="POST", path="/auth/api-key", auth=AuthKind.L1, l1_nonce=nonce)
        )
        return _parse_credentials(payload)

    def derive_api_key(self, nonce: int = 0) -> ApiCredentials:
        """Получение существующих API credentials для nonce."""
        payload = self.dispatcher.request(
            ApiRequest(method="GET", path="/auth/derive-api-key", auth=AuthKind.L1, l1_nonce=nonce)
        )
        return _parse_credentials(payload)

    def create_or_derive_api_key(self, nonce: int = 0) -> ApiCredentials:
        """
        Создание credentials; если ключ для nonce уже существует — derive.
        """
        try:
            return self.create_api_key(nonce)
        except RequestFailed as exc:
            logger.info("create api key failed (%s), deriving existing key", exc.reason)
            return self.derive_api_key(nonce)


def _parse_credentials(payload: Any) -> ApiCredentials:
    try:
        return ApiCredentials.model_validate(payload)
    except ValidationError as exc:
        raise RequestFailed("credentials missing in auth response") from exc

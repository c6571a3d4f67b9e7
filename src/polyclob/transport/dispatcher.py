"""
Authenticated Request Dispatcher — классификация запросов по уровню аутентификации

Для каждого ApiRequest:
- none : отправляется как есть
- l1   : ClobAuth подпись кошелька (только выдача credentials)
- l2   : HMAC заголовки API credentials, считаются заново на каждый запрос,
         т.к. timestamp входит в подписываемое сообщение

Тело сериализуется один раз; HMAC считается над той же строкой, что уходит
в transport. Credentials и signer — общий read-only контекст, диспетчер их
не изменяет. Окна replay контролирует сервер.
"""

import logging
import time
from typing import Any, Callable, Dict, Optional

from polyclob.core.domain.credentials import ApiCredentials, ApiRequest, AuthKind, HeaderPayload
from polyclob.core.errors import AuthRequired, RequestFailed
from polyclob.signing.hmac_signature import serialize_body
from polyclob.signing.signer import MessageSigner
from polyclob.transport.headers import create_l1_headers, create_l2_headers
from polyclob.transport.http import Transport


logger = logging.getLogger(__name__)


def extract_reason(payload: Any) -> str:
    """Причина ошибки из тела ответа сервера."""
    if isinstance(payload, dict):
        for key in ("error", "errorMsg", "message"):
            if payload.get(key):
                return str(payload[key])
        return str(payload)
    if payload:
        return str(payload)
    return "empty response"


class AuthenticatedRequestDispatcher:
    """
    Диспетчер запросов: добавляет заголовки аутентификации и передаёт
    запрос в transport.
    """

    def __init__(
        self,
        transport: Transport,
        chain_id: int,
        signer: Optional[MessageSigner] = None,
        credentials: Optional[ApiCredentials] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Args:
            transport: HTTP transport
            chain_id: Chain id (домен ClobAuth)
            signer: Кошелёк аккаунта (нужен для l1 и как адрес для l2)
            credentials: L2 API credentials
            clock: Источник unix времени (секунды)
        """
        self.transport = transport
        self.chain_id = chain_id
        self.signer = signer
        self.credentials = credentials
        self._clock = clock or time.time

    def request(self, request: ApiRequest) -> Any:
        """
        Отправка запроса с заголовками нужного уровня.

        Returns:
            Разобранное тело ответа

        Raises:
            AuthRequired: Нет signer/credentials для уровня запроса (до обращения к сети)
            SigningRejected: Signer отказал в L1 подписи
            RequestFailed: Сервер вернул статус >= 400 или запрос не дошёл
        """
        method = request.method.upper()
        data = serialize_body(request.body) if request.body is not None else None
        headers = self.build_auth_headers(request, data)

        logger.debug("dispatching %s %s auth=%s", method, request.path, request.auth.value)
        response = self.transport.send(
            method,
            request.path,
            params=request.params,
            data=data,
            headers=headers,
        )

        if response.status_code >= 400:
            raise RequestFailed(extract_reason(response.payload), response.status_code)

        return response.payload

    def build_auth_headers(self, request: ApiRequest, data: Optional[str] = None) -> Dict[str, str]:
        """
        Заголовки аутентификации для запроса.

        Args:
            request: Исходящий запрос
            data: Сериализованное тело (то, что уйдёт в transport)

        Raises:
            AuthRequired: Нет signer/credentials для уровня запроса
        """
        if request.auth == AuthKind.NONE:
            return {}

        timestamp = int(self._clock())

        if request.auth == AuthKind.L1:
            if self.signer is None:
                raise AuthRequired(f"{request.method} {request.path} requires a wallet signer (L1)")
            return create_l1_headers(
                signer=self.signer,
                chain_id=self.chain_id,
                timestamp=timestamp,
                nonce=request.l1_nonce,
            )

        if self.credentials is None:
            raise AuthRequired(f"{request.method} {request.path} requires API credentials (L2)")
        if self.signer is None:
            raise AuthRequired(f"{request.method} {request.path} requires a wallet address (L2)")

        payload = HeaderPayload(method=request.method.upper(), path=request.path, body=data)
        return create_l2_headers(
            address=self.signer.address,
            credentials=self.credentials,
            timestamp=timestamp,
            payload=payload,
        )

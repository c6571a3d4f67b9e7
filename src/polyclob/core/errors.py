"""
Errors — таксономия ошибок клиента

Каждая ошибка различима по типу, чтобы вызывающий код мог выбрать политику:
- InvalidAmount          : ошибка входных данных, не ретраится
- MarketDataUnavailable  : transient, можно повторить create_order целиком
- SigningRejected        : signer отказал или упал, автоматически не ретраится
- PostFailed             : сервер отклонил подписанный ордер, ордер остаётся валидным
- AuthRequired           : запрос без необходимых credentials, фатально для запроса
"""

from typing import Any, Optional


class ClobError(Exception):
    """Базовая ошибка клиента CLOB."""


class InvalidAmount(ClobError, ValueError):
    """Некорректные price/size/tick_size."""


class MarketDataUnavailable(ClobError):
    """Не удалось получить tick size, fee rate или nonce."""


class SigningRejected(ClobError):
    """Signer отклонил запрос на подпись или завершился с ошибкой."""


class SigningFailed(SigningRejected):
    """Подпись ордера не получена (ошибка OrderBuilder)."""


class AuthRequired(ClobError):
    """Для запроса не настроены необходимые credentials или signer."""


class InvalidOrderTransition(ClobError):
    """Недопустимый переход в жизненном цикле ордера."""


class RequestFailed(ClobError):
    """
    Сервер вернул ошибку или запрос не дошёл до сервера.

    Attributes:
        status_code: HTTP статус (None если ответ не получен)
        reason: Причина, извлечённая из ответа сервера
    """

    def __init__(self, reason: str, status_code: Optional[int] = None):
        super().__init__(
            f"request failed ({status_code}): {reason}" if status_code else f"request failed: {reason}"
        )
        self.reason = reason
        self.status_code = status_code


class PostFailed(RequestFailed):
    """
    Сервер не принял подписанный ордер.

    Подписанный ордер остаётся валидным и может быть отправлен повторно
    без повторной подписи.

    Attributes:
        signed_order: Ордер, который не удалось разместить
    """

    def __init__(self, reason: str, signed_order: Any, status_code: Optional[int] = None):
        super().__init__(reason, status_code)
        self.signed_order = signed_order

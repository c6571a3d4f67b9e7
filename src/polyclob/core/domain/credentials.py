"""
Credentials — API credentials и описание аутентифицированных запросов

Уровни аутентификации:
- none : запрос без заголовков аутентификации
- l1   : EIP-712 подпись кошелька (ClobAuth), только для выдачи credentials
- l2   : HMAC подпись API credentials, для обычных торговых запросов
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class AuthKind(str, Enum):
    """Требуемый уровень аутентификации запроса"""

    NONE = "none"
    L1 = "l1"
    L2 = "l2"


class ApiCredentials(BaseModel):
    """
    L2 API credentials, выданные биржей.

    Формат совпадает с ответом /auth/api-key: {apiKey, secret, passphrase}.
    secret и passphrase не попадают в repr.
    """

    api_key: str = Field(..., alias="apiKey", min_length=1, description="API key")
    secret: str = Field(..., min_length=1, repr=False, description="Секрет (url-safe base64)")
    passphrase: str = Field(..., min_length=1, repr=False, description="Passphrase")

    model_config = {"frozen": True, "populate_by_name": True}


@dataclass(frozen=True)
class HeaderPayload:
    """Данные запроса, над которыми считается L2 подпись."""

    method: str
    path: str
    body: Any = None


@dataclass(frozen=True)
class ApiRequest:
    """
    Исходящий запрос к REST API.

    Attributes:
        method: HTTP метод
        path: Путь относительно host (например, '/order')
        auth: Требуемый уровень аутентификации
        params: Query параметры (None значения отбрасываются transport)
        body: JSON-сериализуемое тело запроса
        l1_nonce: Nonce для ClobAuth сообщения (только для l1)
    """

    method: str
    path: str
    auth: AuthKind = AuthKind.NONE
    params: Optional[Dict[str, Any]] = field(default=None)
    body: Any = None
    l1_nonce: int = 0


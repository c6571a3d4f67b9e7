"""
HMAC Signature — L2 подпись запросов API credentials

message = timestamp + METHOD + path + body
signature = urlsafe_base64(HMAC-SHA256(urlsafe_base64_decode(secret), message))

Тело сериализуется канонически (sort_keys, компактные разделители), поэтому
одинаковые входы всегда дают одинаковую подпись. Диспетчер отправляет ровно
ту строку тела, над которой посчитана подпись.
"""

import base64
import binascii
import hashlib
import hmac
import json
from typing import Any, Union

from polyclob.core.errors import AuthRequired


def serialize_body(body: Any) -> str:
    """
    Каноническая сериализация тела запроса.

    Returns:
        "" для None, строка как есть, иначе JSON с сортировкой ключей
    """
    if body is None:
        return ""
    if isinstance(body, str):
        return body
    return json.dumps(body, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def decode_secret(secret: str) -> bytes:
    """
    Декодирование url-safe base64 секрета (padding восстанавливается).

    Raises:
        AuthRequired: Если секрет пустой или не декодируется
    """
    if not secret:
        raise AuthRequired("API secret is empty")
    padded = secret + "=" * (-len(secret) % 4)
    try:
        return base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError) as exc:
        raise AuthRequired("API secret is not valid url-safe base64") from exc


def build_hmac_signature(
    secret: str,
    timestamp: Union[int, str],
    method: str,
    path: str,
    body: Any = None,
) -> str:
    """
    HMAC-SHA256 подпись запроса для L2 заголовков.

    Args:
        secret: API secret (url-safe base64)
        timestamp: Unix время (секунды)
        method: HTTP метод
        path: Путь запроса без host
        body: Тело запроса (dict/list/str/None)

    Returns:
        Подпись в url-safe base64
    """
    message = f"{timestamp}{method}{path}{serialize_body(body)}"
    digest = hmac.new(decode_secret(secret), message.encode("utf-8"), hashlib.sha256).digest()
    return base64.urlsafe_b64encode(digest).decode("utf-8")

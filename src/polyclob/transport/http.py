"""
HTTP Transport — отправка запросов к REST API биржи

Transport — capability с одним методом send; RequestsTransport реализует её
поверх requests.Session. Аутентификацию transport не знает: заголовки
приходят готовыми от диспетчера.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, runtime_checkable

import requests

from polyclob.core.errors import RequestFailed


logger = logging.getLogger(__name__)

DEFAULT_HOST = "https://clob.polymarket.com"
DEFAULT_TIMEOUT_SEC = 10.0


@dataclass(frozen=True)
class TransportResponse:
    """Ответ transport: HTTP статус и разобранное тело (JSON или текст)."""

    status_code: int
    payload: Any

    @property
    def ok(self) -> bool:
        return self.status_code < 400


@runtime_checkable
class Transport(Protocol):
    """Capability отправки HTTP запросов."""

    def send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> TransportResponse:
        ...


class RequestsTransport:
    """Transport на requests.Session."""

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        timeout_sec: float = DEFAULT_TIMEOUT_SEC,
        session: Optional[requests.Session] = None,
    ):
        """
        Args:
            host: Базовый URL API (без завершающего '/')
            timeout_sec: Таймаут запроса
            session: Готовая сессия (по умолчанию создаётся новая)
        """
        self.host = host.rstrip("/")
        self.timeout_sec = timeout_sec
        self._session = session or requests.Session()

    def send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        data: Optional[str] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> TransportResponse:
        """
        Отправка запроса.

        Query параметры со значением None отбрасываются.

        Raises:
            RequestFailed: Если запрос не дошёл до сервера
        """
        url = f"{self.host}{path}"
        query = {k: v for k, v in (params or {}).items() if v is not None}

        request_headers = {"Accept": "application/json"}
        if data is not None:
            request_headers["Content-Type"] = "application/json"
        request_headers.update(headers or {})

        try:
            response = self._session.request(
                method,
                url,
                params=query or None,
                data=data.encode("utf-8") if data is not None else None,
                headers=request_headers,
                timeout=self.timeout_sec,
            )
        except requests.RequestException as exc:
            raise RequestFailed(f"{method} {path}: {exc}") from exc

        logger.debug("%s %s -> %s", method, path, response.status_code)

        try:
            payload = response.json()
        except ValueError:
            payload = response.text

        return TransportResponse(status_code=response.status_code, payload=payload)

    def close(self) -> None:
        self._session.close()

"""
Market Data Requests — tick size и fee rate рынка через REST API

Реализует MarketDataSource для OrderBuilder. Tick size — read-only
метаданные рынка, кэшируются на экземпляре.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Dict

from polyclob.core.domain.credentials import ApiRequest, AuthKind
from polyclob.core.errors import MarketDataUnavailable, RequestFailed
from polyclob.transport.dispatcher import AuthenticatedRequestDispatcher


logger = logging.getLogger(__name__)


def normalize_tick_size(value: Any) -> str:
    """
    Tick size из ответа API (число или строка) → десятичная строка.

    0.01 → "0.01", "0.001" → "0.001", 1e-4 → "0.0001"
    """
    try:
        return format(Decimal(str(value)), "f")
    except InvalidOperation as exc:
        raise MarketDataUnavailable(f"invalid tick size in response: {value!r}") from exc


class MarketDataRequests:
    """Запросы метаданных рынка (без аутентификации)."""

    def __init__(self, dispatcher: AuthenticatedRequestDispatcher):
        self.dispatcher = dispatcher
        self._tick_sizes: Dict[str, str] = {}

    def get_tick_size(self, token_id: str) -> str:
        """
        Минимальный tick size рынка токена.

        Raises:
            MarketDataUnavailable: Если запрос не удался или ответ некорректен
        """
        if token_id in self._tick_sizes:
            return self._tick_sizes[token_id]

        payload = self._get("/tick-size", token_id)
        if not isinstance(payload, dict) or "minimum_tick_size" not in payload:
            raise MarketDataUnavailable(f"tick size missing in response for token {token_id}")

        tick_size = normalize_tick_size(payload["minimum_tick_size"])
        self._tick_sizes[token_id] = tick_size
        logger.debug("tick size token=%s -> %s", token_id, tick_size)
        return tick_size

    def get_fee_rate_bps(self, token_id: str) -> int:
        """
        Базовая комиссия рынка токена (bps).

        Raises:
            MarketDataUnavailable: Если запрос не удался или ответ некорректен
        """
        payload = self._get("/fee-rate", token_id)
        if not isinstance(payload, dict) or "base_fee" not in payload:
            raise MarketDataUnavailable(f"fee rate missing in response for token {token_id}")

        try:
            return int(payload["base_fee"])
        except (TypeError, ValueError) as exc:
            raise MarketDataUnavailable(
                f"invalid fee rate for token {token_id}: {payload['base_fee']!r}"
            ) from exc

    def clear_cache(self) -> None:
        self._tick_sizes.clear()

    def _get(self, path: str, token_id: str) -> Any:
        try:
            return self.dispatcher.request(
                ApiRequest(method="GET", path=path, auth=AuthKind.NONE, params={"token_id": token_id})
            )
        except RequestFailed as exc:
            raise MarketDataUnavailable(f"GET {path} failed for token {token_id}: {exc.reason}") from exc

"""
Sources — внешние источники данных для сборки ордера

- MarketDataSource : tick size и fee rate по token id
- NonceSource      : текущий nonce аккаунта на бирже
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MarketDataSource(Protocol):
    """Метаданные рынка, необходимые для сборки ордера."""

    def get_tick_size(self, token_id: str) -> str:
        """Tick size рынка как десятичная строка (например, '0.01')."""
        ...

    def get_fee_rate_bps(self, token_id: str) -> int:
        """Базовая комиссия рынка в basis points."""
        ...


@runtime_checkable
class NonceSource(Protocol):
    """Источник nonce аккаунта. Уникальность nonce — ответственность источника."""

    def get_nonce(self) -> int:
        ...


class FixedNonceSource:
    """Nonce, который вызывающий код ведёт сам (например, после on-chain incrementNonce)."""

    def __init__(self, nonce: int = 0):
        if nonce < 0:
            raise ValueError(f"nonce cannot be negative: {nonce}")
        self._nonce = nonce

    def get_nonce(self) -> int:
        return self._nonce

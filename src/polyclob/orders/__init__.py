"""
Orders — сборка подписанных ордеров и их жизненный цикл.
"""

from .builder import OrderBuilder, generate_salt
from .lifecycle import LifecycleTransitionResult, OrderLifecycle, OrderState
from .sources import FixedNonceSource, MarketDataSource, NonceSource

__all__ = [
    "OrderBuilder",
    "generate_salt",
    "OrderLifecycle",
    "OrderState",
    "LifecycleTransitionResult",
    "MarketDataSource",
    "NonceSource",
    "FixedNonceSource",
]

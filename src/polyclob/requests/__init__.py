"""
Requests — типизированные группы запросов к REST API биржи.
"""

from .auth import AuthRequests
from .market import MarketDataRequests, normalize_tick_size
from .orders import OrderRequests

__all__ = [
    "AuthRequests",
    "MarketDataRequests",
    "normalize_tick_size",
    "OrderRequests",
]

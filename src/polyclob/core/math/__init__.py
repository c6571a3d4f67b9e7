"""
Fixed-point math primitives for exchange amounts.
"""

from polyclob.core.math.amounts import (
    SIZE_DECIMALS,
    OrderAmounts,
    calculate_order_amounts,
    from_raw,
    round_half_up,
    tick_decimals,
    to_decimal,
    to_raw,
)

__all__ = [
    "SIZE_DECIMALS",
    "OrderAmounts",
    "calculate_order_amounts",
    "tick_decimals",
    "round_half_up",
    "to_decimal",
    "to_raw",
    "from_raw",
]

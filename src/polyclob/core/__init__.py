"""
Core domain models, fixed-point math primitives, and wire contracts.

This module contains the foundational building blocks that are independent
of external systems (wallets, HTTP transport, market data).
"""

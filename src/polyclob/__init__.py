"""
polyclob — построение и подпись ордеров для CLOB биржи Polymarket.

Пакет содержит:
- core/       : доменные модели, fixed-point арифметику, JSON контракты
- signing/    : EIP-712 typed data, HMAC подписи, signer capability
- orders/     : сборка подписанных ордеров и их жизненный цикл
- transport/  : диспетчер аутентифицированных запросов и HTTP transport
- requests/   : типизированные группы запросов к REST API
"""

import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.3.0"

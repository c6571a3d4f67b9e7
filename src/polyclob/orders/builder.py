"""Order Builder — сборка и подпись ордера.

Последовательность create_order:
1. Fan-out: tick size, fee rate и nonce запрашиваются параллельно,
   барьер ждёт все три результата. Любая ошибка отменяет сборку целиком.
2. Raw суммы через calculate_order_amounts.
3. Salt + Order (wire-представление).
4. EIP-712 Order typed data → signer.
5. Проверка wire-контракта signed_order.

Вызывающий код получает либо полностью подписанный ордер, либо ошибку:
InvalidAmount, MarketDataUnavailable или SigningFailed.
"""

import logging
import random
from concurrent.futures import ALL_COMPLETED, Future, ThreadPoolExecutor, wait
from typing import Callable, Dict, Optional, Tuple

from polyclob.core.contracts import signed_order_violations
from polyclob.core.domain.order import Order, OrderIntent, SignatureType, SignedOrder
from polyclob.core.errors import (
    InvalidAmount,
    MarketDataUnavailable,
    SigningFailed,
    SigningRejected,
)
from polyclob.core.math.amounts import calculate_order_amounts
from polyclob.orders.lifecycle import OrderLifecycle, OrderState
from polyclob.orders.sources import MarketDataSource, NonceSource
from polyclob.signing.eip712 import build_order_typed_data
from polyclob.signing.signer import MessageSigner, sign_typed_data


logger = logging.getLogger(__name__)

# Ширина salt в битах
SALT_BITS = 53


def generate_salt() -> int:
    """Случайный salt ордера.

    Salt только различает иначе одинаковые ордера, криптостойкость не нужна.
    """
    return random.getrandbits(SALT_BITS)


class OrderBuilder:
    """Сборка подписанных ордеров.

    Не хранит изменяемого состояния: signer, market data и nonce source —
    внешние ресурсы, которыми владеет вызывающий код.
    """

    def __init__(
        self,
        signer: MessageSigner,
        market_data: MarketDataSource,
        chain_id: int,
        nonce_source: Optional[NonceSource] = None,
        signature_type: SignatureType = SignatureType.EOA,
        require_nonce: bool = False,
        salt_generator: Optional[Callable[[], int]] = None,
    ):
        """
        Args:
            signer: Signer аккаунта (maker и signer ордера)
            market_data: Источник tick size и fee rate
            chain_id: Chain id сети (определяет verifying contract)
            nonce_source: Источник nonce (None → nonce = 0)
            signature_type: Тип подписи ордера
            require_nonce: Запретить fallback nonce = 0 без источника
            salt_generator: Генератор salt (по умолчанию generate_salt)
        """
        self.signer = signer
        self.market_data = market_data
        self.chain_id = chain_id
        self.nonce_source = nonce_source
        self.signature_type = signature_type
        self.require_nonce = require_nonce
        self._salt_generator = salt_generator or generate_salt
        self._lifecycle = OrderLifecycle()

        if nonce_source is None and not require_nonce:
            logger.warning("no nonce source configured, orders will be signed with nonce=0")

    def create_order(self, intent: OrderIntent) -> SignedOrder:
        """Сборка и подпись ордера по торговому намерению.

        Raises:
            InvalidAmount: Некорректные price/size/tick size
            MarketDataUnavailable: Не удалось получить tick size, fee rate или nonce
            SigningFailed: Signer отказал или упал
        """
        state = OrderState.DRAFTING

        tick_size, fee_rate_bps, nonce = self._resolve_lookups(intent.token_id)

        amounts = calculate_order_amounts(
            side=intent.side,
            price=intent.price,
            size=intent.size,
            tick_size=tick_size,
        )
        state = self._advance(state, OrderState.AMOUNTS_COMPUTED)

        address = self.signer.address
        order = Order(
            salt=str(self._salt_generator()),
            maker=address,
            signer=address,
            taker=intent.taker_address(),
            token_id=intent.token_id,
            maker_amount=amounts.maker,
            taker_amount=amounts.taker,
            expiration=str(intent.expiration),
            nonce=str(nonce),
            fee_rate_bps=str(fee_rate_bps),
            side=intent.side,
            signature_type=self.signature_type,
        )

        signed = order.with_signature(self.sign_order(order, neg_risk=intent.neg_risk))

        violations = signed_order_violations(signed.to_wire())
        if violations:
            raise InvalidAmount(f"built order violates wire contract: {'; '.join(violations)}")

        self._advance(state, OrderState.SIGNED)
        logger.info(
            "signed %s order token=%s maker_amount=%s taker_amount=%s",
            signed.side.value,
            signed.token_id,
            signed.maker_amount,
            signed.taker_amount,
        )
        return signed

    def sign_order(self, order: Order, neg_risk: bool = False) -> str:
        """EIP-712 подпись ордера.

        Raises:
            SigningFailed: Signer отказал или упал
        """
        typed_data = build_order_typed_data(order, self.chain_id, neg_risk=neg_risk)
        try:
            return sign_typed_data(self.signer, typed_data)
        except SigningRejected as exc:
            raise SigningFailed(f"order signing failed: {exc}") from exc

    # -------------------------------------------------------------------------
    # Lookups
    # -------------------------------------------------------------------------

    def _resolve_lookups(self, token_id: str) -> Tuple[str, int, int]:
        """Параллельные tick size, fee rate и nonce с барьером.

        Raises:
            MarketDataUnavailable: Если хотя бы один запрос упал
        """
        with ThreadPoolExecutor(max_workers=3, thread_name_prefix="polyclob-lookup") as pool:
            futures: Dict[str, Future] = {
                "tick_size": pool.submit(self.market_data.get_tick_size, token_id),
                "fee_rate_bps": pool.submit(self._get_fee_rate_bps, token_id),
                "nonce": pool.submit(self._get_nonce),
            }
            # Барьер: дальше только когда завершены все три
            wait(futures.values(), return_when=ALL_COMPLETED)

        failures = {
            name: future.exception()
            for name, future in futures.items()
            if future.exception() is not None
        }
        if failures:
            first_exc = next(iter(failures.values()))
            raise MarketDataUnavailable(
                f"{', '.join(failures)} lookup failed for token {token_id}: {first_exc}"
            ) from first_exc

        tick_size = futures["tick_size"].result()
        fee_rate_bps = futures["fee_rate_bps"].result()
        nonce = futures["nonce"].result()
        logger.debug(
            "resolved token=%s tick_size=%s fee_rate_bps=%s nonce=%s",
            token_id,
            tick_size,
            fee_rate_bps,
            nonce,
        )

        return str(tick_size), fee_rate_bps, nonce

    def _get_fee_rate_bps(self, token_id: str) -> int:
        fee_rate_bps = int(self.market_data.get_fee_rate_bps(token_id))
        if fee_rate_bps < 0:
            raise MarketDataUnavailable(f"negative fee rate for token {token_id}: {fee_rate_bps}")
        return fee_rate_bps

    def _get_nonce(self) -> int:
        if self.nonce_source is None:
            if self.require_nonce:
                raise MarketDataUnavailable("nonce source is required but not configured")
            return 0

        nonce = int(self.nonce_source.get_nonce())
        if nonce < 0:
            raise MarketDataUnavailable(f"nonce source returned negative nonce: {nonce}")
        return nonce

    def _advance(self, current: OrderState, target: OrderState) -> OrderState:
        result = self._lifecycle.evaluate_transition(current, target)
        logger.debug("order lifecycle: %s", result.transition_reason)
        return result.new_state

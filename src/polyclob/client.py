"""
ClobClient — связывает конфигурацию, transport, signer и группы запросов

    client = ClobClient(ClientConfig.from_env(), signer=LocalAccountSigner(key))
    creds = client.auth.create_or_derive_api_key()
    client = client.with_credentials(creds)
    client.orders.create_and_post_order(OrderIntent(...))
"""

from typing import Callable, Optional

from polyclob.config import ClientConfig
from polyclob.core.domain.credentials import ApiCredentials
from polyclob.core.errors import AuthRequired
from polyclob.orders.builder import OrderBuilder
from polyclob.orders.sources import MarketDataSource, NonceSource
from polyclob.requests.auth import AuthRequests
from polyclob.requests.market import MarketDataRequests
from polyclob.requests.orders import OrderRequests
from polyclob.signing.signer import MessageSigner
from polyclob.transport.dispatcher import AuthenticatedRequestDispatcher
from polyclob.transport.http import RequestsTransport, Transport


class ClobClient:
    """Клиент CLOB API для одного аккаунта."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        signer: Optional[MessageSigner] = None,
        credentials: Optional[ApiCredentials] = None,
        transport: Optional[Transport] = None,
        nonce_source: Optional[NonceSource] = None,
        market_data: Optional[MarketDataSource] = None,
        clock: Optional[Callable[[], float]] = None,
    ):
        """
        Args:
            config: Конфигурация (по умолчанию ClientConfig())
            signer: Кошелёк аккаунта; без него доступны только публичные запросы
            credentials: L2 API credentials
            transport: HTTP transport (по умолчанию RequestsTransport)
            nonce_source: Источник nonce ордеров
            market_data: Источник tick size/fee rate (по умолчанию REST API)
            clock: Источник unix времени для заголовков аутентификации
        """
        self.config = config or ClientConfig()
        self.signer = signer
        self.nonce_source = nonce_source
        self.transport = transport or RequestsTransport(
            host=self.config.host,
            timeout_sec=self.config.request_timeout_sec,
        )
        self._clock = clock

        self.dispatcher = AuthenticatedRequestDispatcher(
            transport=self.transport,
            chain_id=self.config.chain_id,
            signer=signer,
            credentials=credentials,
            clock=clock,
        )
        self.market = MarketDataRequests(self.dispatcher)
        self.auth = AuthRequests(self.dispatcher)

        self._market_data = market_data
        self.builder: Optional[OrderBuilder] = None
        self._orders: Optional[OrderRequests] = None
        if signer is not None:
            self.builder = OrderBuilder(
                signer=signer,
                market_data=market_data or self.market,
                chain_id=self.config.chain_id,
                nonce_source=nonce_source,
                signature_type=self.config.signature_type,
                require_nonce=self.config.require_nonce,
            )
            self._orders = OrderRequests(self.dispatcher, self.builder)

    @property
    def orders(self) -> OrderRequests:
        """
        Запросы по ордерам аккаунта.

        Raises:
            AuthRequired: Клиент создан без signer
        """
        if self._orders is None:
            raise AuthRequired("order requests require a wallet signer")
        return self._orders

    @property
    def credentials(self) -> Optional[ApiCredentials]:
        return self.dispatcher.credentials

    def with_credentials(self, credentials: ApiCredentials) -> "ClobClient":
        """Новый клиент с L2 credentials; transport общий."""
        return ClobClient(
            config=self.config,
            signer=self.signer,
            credentials=credentials,
            transport=self.transport,
            nonce_source=self.nonce_source,
            market_data=self._market_data,
            clock=self._clock,
        )

import logging

import httpx

from domain.models.conversion import ExchangeValue
from infrastructure.clients.base import ExchangeValueClient
from infrastructure.discovery.load_balancer import LoadBalancer

logger = logging.getLogger(__name__)


class CurrencyExchangeProxy(ExchangeValueClient):
    """Client for the currency-exchange service addressed by logical name.

    Every call asks the load balancer for one registered instance of
    ``service_name``; the proxy never holds a network address itself.
    Passing ``url`` pins all calls to that address and skips discovery.
    """

    def __init__(
        self,
        load_balancer: LoadBalancer | None,
        service_name: str = 'currency-exchange',
        url: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 5.0,
    ):
        if load_balancer is None and not url:
            raise ValueError('Either a load balancer or a fixed url is required')
        super().__init__(client=client, timeout=timeout)
        self.service_name = service_name
        self.load_balancer = load_balancer
        self.url = _with_scheme(url) if url else None

    @property
    def name(self) -> str:
        return self.service_name

    async def retrieve_exchange_value(self, from_currency: str, to_currency: str) -> ExchangeValue:
        if self.url:
            return await self._get_exchange_value(self.url, from_currency, to_currency)

        instance = await self.load_balancer.choose(self.service_name)
        logger.debug(f'{self.service_name} resolved to {instance.instance_id} ({instance.base_url})')
        return await self._get_exchange_value(instance.base_url, from_currency, to_currency)


def _with_scheme(url: str) -> str:
    if '://' not in url:
        return f'http://{url}'
    return url

import httpx

from domain.models.conversion import ExchangeValue
from infrastructure.clients.base import ExchangeValueClient


class DirectExchangeClient(ExchangeValueClient):
    """Calls the currency-exchange service at a fixed address."""

    DEFAULT_BASE_URL = 'http://localhost:8000'

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        client: httpx.AsyncClient | None = None,
        timeout: float = 5.0,
    ):
        super().__init__(client=client, timeout=timeout)
        self.base_url = base_url.rstrip('/')

    @property
    def name(self) -> str:
        return 'direct'

    async def retrieve_exchange_value(self, from_currency: str, to_currency: str) -> ExchangeValue:
        return await self._get_exchange_value(self.base_url, from_currency, to_currency)

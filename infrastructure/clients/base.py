import json
import logging
import urllib.parse
from abc import ABC, abstractmethod
from decimal import Decimal

import httpx

from domain.exceptions.conversion import (
    UpstreamFaultError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)
from domain.models.conversion import ExchangeValue

logger = logging.getLogger(__name__)

EXCHANGE_PATH = '/currency-exchange/from/{from_currency}/to/{to_currency}'


def build_exchange_url(base_url: str, from_currency: str, to_currency: str) -> str:
    path = EXCHANGE_PATH.format(
        from_currency=urllib.parse.quote(from_currency, safe=''),
        to_currency=urllib.parse.quote(to_currency, safe=''),
    )
    return f"{base_url.rstrip('/')}{path}"


def decode_exchange_value(body: str) -> ExchangeValue:
    """Decode a currency-exchange JSON body, keeping numbers as Decimal."""
    try:
        data = json.loads(body, parse_float=Decimal)
    except ValueError as e:
        raise UpstreamFaultError(f'Malformed exchange response: {e}') from e

    if not isinstance(data, dict):
        raise UpstreamFaultError('Malformed exchange response: expected a JSON object')

    try:
        record_id = data['id']
        multiple = data['conversionMultiple']
        environment = data['environment']
    except KeyError as e:
        raise UpstreamFaultError(f'Malformed exchange response: missing field {e}') from e

    if isinstance(record_id, bool) or not isinstance(record_id, int):
        raise UpstreamFaultError('Malformed exchange response: id must be an integer')
    if not isinstance(environment, str):
        raise UpstreamFaultError('Malformed exchange response: environment must be a string')

    try:
        conversion_multiple = _to_decimal(multiple)
    except (ValueError, ArithmeticError) as e:
        raise UpstreamFaultError(
            f'Malformed exchange response: bad conversionMultiple {multiple!r}'
        ) from e

    return ExchangeValue(
        id=record_id,
        from_currency=str(data.get('from') or ''),
        to_currency=str(data.get('to') or ''),
        conversion_multiple=conversion_multiple,
        environment=environment,
    )


def _to_decimal(value) -> Decimal:
    if isinstance(value, bool):
        raise ValueError('boolean is not a number')
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, str)):
        result = Decimal(value)
    else:
        raise ValueError(f'unsupported type {type(value).__name__}')
    if not result.is_finite():
        raise ValueError('not a finite number')
    return result


class ExchangeValueClient(ABC):
    """Fetches exchange values from the currency-exchange service."""

    def __init__(self, client: httpx.AsyncClient | None = None, timeout: float = 5.0):
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    async def retrieve_exchange_value(self, from_currency: str, to_currency: str) -> ExchangeValue:
        ...

    async def _get_exchange_value(
        self, base_url: str, from_currency: str, to_currency: str
    ) -> ExchangeValue:
        url = build_exchange_url(base_url, from_currency, to_currency)
        logger.debug(f'{self.name}: GET {url}')

        try:
            response = await self._client.get(url, headers={'Accept': 'application/json'})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise UpstreamFaultError(
                f'{self.name}: upstream HTTP error {e.response.status_code}: {e.response.text[:200]}',
                status_code=e.response.status_code,
            ) from e
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(
                f'{self.name}: upstream timed out after {self.timeout}s ({base_url})'
            ) from e
        except httpx.RequestError as e:
            raise UpstreamUnavailableError(
                f'{self.name}: request failed: {e.__class__.__name__} ({base_url})'
            ) from e

        return decode_exchange_value(response.text)

    async def close(self) -> None:
        await self._client.aclose()

# nosec B101


import pytest
from decimal import Decimal
from unittest.mock import AsyncMock, Mock
import httpx

from domain.exceptions.conversion import (
    ServiceUnavailableError,
    UpstreamFaultError,
    UpstreamUnavailableError,
)
from domain.models.conversion import ServiceInstance
from infrastructure.clients.proxy import CurrencyExchangeProxy
from infrastructure.discovery.load_balancer import RoundRobinLoadBalancer
from infrastructure.discovery.registry import StaticServiceRegistry


EXCHANGE_BODY = (
    '{"id": 10001, "from": "USD", "to": "INR", '
    '"conversionMultiple": 65.00, "environment": "8000 instance-id"}'
)


def instance(port: int) -> ServiceInstance:
    return ServiceInstance(
        service_name='currency-exchange',
        instance_id=f'localhost:currency-exchange:{port}',
        host='localhost',
        port=port,
    )


def make_http_client(body: str = EXCHANGE_BODY) -> AsyncMock:
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_response = Mock()
    mock_response.text = body
    mock_response.raise_for_status = Mock()
    mock_client.get.return_value = mock_response
    return mock_client


def make_proxy(instances, http_client=None) -> CurrencyExchangeProxy:
    registry = StaticServiceRegistry({'currency-exchange': instances})
    return CurrencyExchangeProxy(
        RoundRobinLoadBalancer(registry),
        service_name='currency-exchange',
        client=http_client or make_http_client(),
    )


@pytest.mark.asyncio
async def test_retrieve_exchange_value_resolves_instance_by_name():
    http_client = make_http_client()
    proxy = make_proxy([instance(8000)], http_client)

    value = await proxy.retrieve_exchange_value('USD', 'INR')

    assert value.id == 10001
    assert value.conversion_multiple == Decimal('65.00')
    assert http_client.get.call_args[0][0] == 'http://localhost:8000/currency-exchange/from/USD/to/INR'


@pytest.mark.asyncio
async def test_calls_alternate_between_registered_instances():
    http_client = make_http_client()
    proxy = make_proxy([instance(8000), instance(8001)], http_client)

    for _ in range(4):
        await proxy.retrieve_exchange_value('USD', 'INR')

    urls = [call[0][0] for call in http_client.get.call_args_list]
    assert urls == [
        'http://localhost:8000/currency-exchange/from/USD/to/INR',
        'http://localhost:8001/currency-exchange/from/USD/to/INR',
        'http://localhost:8000/currency-exchange/from/USD/to/INR',
        'http://localhost:8001/currency-exchange/from/USD/to/INR',
    ]


@pytest.mark.asyncio
async def test_no_registered_instances_is_unavailable():
    http_client = make_http_client()
    proxy = make_proxy([], http_client)

    with pytest.raises(ServiceUnavailableError) as exc_info:
        await proxy.retrieve_exchange_value('USD', 'INR')

    assert isinstance(exc_info.value, UpstreamUnavailableError)
    assert not isinstance(exc_info.value, UpstreamFaultError)
    assert exc_info.value.service_name == 'currency-exchange'
    http_client.get.assert_not_called()


@pytest.mark.asyncio
async def test_malformed_body_is_fault_not_unavailable():
    proxy = make_proxy([instance(8000)], make_http_client('{"id": 1}'))

    with pytest.raises(UpstreamFaultError) as exc_info:
        await proxy.retrieve_exchange_value('USD', 'INR')

    assert not isinstance(exc_info.value, UpstreamUnavailableError)


@pytest.mark.asyncio
async def test_fixed_url_bypasses_discovery():
    http_client = make_http_client()
    proxy = CurrencyExchangeProxy(None, url='localhost:8010', client=http_client)

    await proxy.retrieve_exchange_value('EUR', 'INR')

    assert http_client.get.call_args[0][0] == 'http://localhost:8010/currency-exchange/from/EUR/to/INR'


def test_requires_load_balancer_or_url():
    with pytest.raises(ValueError):
        CurrencyExchangeProxy(None, client=make_http_client())

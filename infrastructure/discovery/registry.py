import logging
import urllib.parse
from abc import ABC, abstractmethod

import httpx

from domain.exceptions.conversion import (
    UpstreamFaultError,
    UpstreamTimeoutError,
    UpstreamUnavailableError,
)
from domain.models.conversion import ServiceInstance

logger = logging.getLogger(__name__)


class ServiceRegistry(ABC):
    """Source of the instances currently registered under a logical name."""

    @abstractmethod
    async def get_instances(self, service_name: str) -> list[ServiceInstance]:
        ...

    async def close(self) -> None:
        return None


class StaticServiceRegistry(ServiceRegistry):
    def __init__(self, instances: dict[str, list[ServiceInstance]] | None = None):
        self._instances = {
            name.lower(): list(items) for name, items in (instances or {}).items()
        }

    @classmethod
    def from_addresses(cls, service_name: str, addresses: str) -> 'StaticServiceRegistry':
        """Build a registry from a comma separated ``host:port`` list."""
        instances = [
            parse_address(service_name, address)
            for address in addresses.split(',')
            if address.strip()
        ]
        return cls({service_name: instances})

    async def get_instances(self, service_name: str) -> list[ServiceInstance]:
        return list(self._instances.get(service_name.lower(), []))


def parse_address(service_name: str, address: str) -> ServiceInstance:
    address = address.strip()
    if '://' not in address:
        address = f'http://{address}'
    parts = urllib.parse.urlsplit(address)
    if not parts.hostname:
        raise ValueError(f'Invalid instance address: {address!r}')

    secure = parts.scheme == 'https'
    port = parts.port or (443 if secure else 80)
    return ServiceInstance(
        service_name=service_name,
        instance_id=f'{parts.hostname}:{service_name}:{port}',
        host=parts.hostname,
        port=port,
        secure=secure,
    )


class EurekaServiceRegistry(ServiceRegistry):
    """Reads instances from a Eureka naming server's REST API.

    Only ``UP`` instances are returned. Registration and heartbeats are
    left to the instances themselves.
    """

    def __init__(
        self,
        base_url: str = 'http://localhost:8761/eureka',
        client: httpx.AsyncClient | None = None,
        timeout: float = 5.0,
    ):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(timeout))

    async def get_instances(self, service_name: str) -> list[ServiceInstance]:
        app_name = urllib.parse.quote(service_name.upper(), safe='')
        url = f'{self.base_url}/apps/{app_name}'

        try:
            response = await self._client.get(url, headers={'Accept': 'application/json'})
            if response.status_code == 404:
                return []
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise UpstreamUnavailableError(
                f'Eureka HTTP error {e.response.status_code} for {service_name}'
            ) from e
        except httpx.TimeoutException as e:
            raise UpstreamTimeoutError(f'Eureka request timed out for {service_name}') from e
        except httpx.RequestError as e:
            raise UpstreamUnavailableError(f'Eureka request failed: {e.__class__.__name__}') from e
        except ValueError as e:
            raise UpstreamFaultError(f'Eureka response parsing error: {str(e)}') from e

        return parse_eureka_application(service_name, data)

    async def close(self) -> None:
        await self._client.aclose()


def parse_eureka_application(service_name: str, data: dict) -> list[ServiceInstance]:
    try:
        raw_instances = data['application'].get('instance', [])
    except (KeyError, TypeError, AttributeError) as e:
        raise UpstreamFaultError(f'Eureka response missing application for {service_name}') from e

    # a single registered instance comes back as an object, not a list
    if isinstance(raw_instances, dict):
        raw_instances = [raw_instances]

    instances = []
    for raw in raw_instances:
        try:
            if raw.get('status') != 'UP':
                continue
            secure = _port_enabled(raw.get('securePort'))
            port_info = raw['securePort'] if secure else raw['port']
            host = raw.get('hostName') or raw['ipAddr']
            instances.append(
                ServiceInstance(
                    service_name=service_name,
                    instance_id=raw.get('instanceId') or host,
                    host=host,
                    port=int(port_info['$']),
                    secure=secure,
                )
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise UpstreamFaultError(f'Malformed Eureka instance for {service_name}: {e}') from e

    logger.debug(f'Eureka returned {len(instances)} UP instance(s) for {service_name}')
    return instances


def _port_enabled(port_info) -> bool:
    if not isinstance(port_info, dict):
        return False
    return str(port_info.get('@enabled', 'false')).lower() == 'true'

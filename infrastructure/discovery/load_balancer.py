import asyncio
import logging
import random
from abc import ABC, abstractmethod

from domain.exceptions.conversion import ServiceUnavailableError
from domain.models.conversion import ServiceInstance
from infrastructure.discovery.registry import ServiceRegistry

logger = logging.getLogger(__name__)


class LoadBalancer(ABC):
    def __init__(self, registry: ServiceRegistry):
        self.registry = registry

    @abstractmethod
    async def choose(self, service_name: str) -> ServiceInstance:
        ...

    async def _instances(self, service_name: str) -> list[ServiceInstance]:
        instances = await self.registry.get_instances(service_name)
        if not instances:
            logger.warning(f'No instances registered for {service_name}')
            raise ServiceUnavailableError(service_name)
        return instances


class RoundRobinLoadBalancer(LoadBalancer):
    """Cycles through the registered instances of each service in turn.

    The instance list is fetched on every call so that instances joining
    or leaving the registry are picked up without a restart.
    """

    def __init__(self, registry: ServiceRegistry):
        super().__init__(registry)
        self._positions: dict[str, int] = {}
        self._lock = asyncio.Lock()

    async def choose(self, service_name: str) -> ServiceInstance:
        instances = await self._instances(service_name)
        async with self._lock:
            position = self._positions.get(service_name, 0)
            self._positions[service_name] = position + 1
        return instances[position % len(instances)]


class RandomLoadBalancer(LoadBalancer):
    def __init__(self, registry: ServiceRegistry, rng: random.Random | None = None):
        super().__init__(registry)
        self._rng = rng or random.Random()

    async def choose(self, service_name: str) -> ServiceInstance:
        instances = await self._instances(service_name)
        return self._rng.choice(instances)


LOAD_BALANCERS = {
    'round_robin': RoundRobinLoadBalancer,
    'random': RandomLoadBalancer,
}


def create_load_balancer(strategy: str, registry: ServiceRegistry) -> LoadBalancer:
    try:
        balancer_cls = LOAD_BALANCERS[strategy.lower()]
    except KeyError as e:
        raise ValueError(f'Unknown load balancer strategy: {strategy}') from e
    return balancer_cls(registry)

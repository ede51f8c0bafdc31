import pytest

from api.dependencies import build_registry, cleanup_dependencies, deps, init_dependencies
from config.settings import Settings
from infrastructure.discovery import (
	EurekaServiceRegistry,
	RandomLoadBalancer,
	RoundRobinLoadBalancer,
	StaticServiceRegistry,
)


@pytest.mark.asyncio
async def test_init_dependencies_with_static_discovery():
	settings = Settings(
		DISCOVERY_BACKEND='static',
		EXCHANGE_INSTANCES='localhost:8000,localhost:8001',
		LOAD_BALANCER='round_robin',
	)

	init_dependencies(settings)
	try:
		assert isinstance(deps.registry, StaticServiceRegistry)
		assert isinstance(deps.load_balancer, RoundRobinLoadBalancer)
		assert deps.exchange_proxy.url is None
		assert deps.direct_client.base_url == 'http://localhost:8000'

		instances = await deps.registry.get_instances('currency-exchange')
		assert [i.port for i in instances] == [8000, 8001]
	finally:
		await cleanup_dependencies()


@pytest.mark.asyncio
async def test_init_dependencies_with_pinned_proxy_url():
	settings = Settings(EXCHANGE_PROXY_URL='localhost:8010')

	init_dependencies(settings)
	try:
		assert deps.registry is None
		assert deps.load_balancer is None
		assert deps.exchange_proxy.url == 'http://localhost:8010'
	finally:
		await cleanup_dependencies()


@pytest.mark.asyncio
async def test_build_registry_eureka():
	registry = build_registry(Settings(DISCOVERY_BACKEND='eureka', EUREKA_URL='http://eureka:8761/eureka'))

	assert isinstance(registry, EurekaServiceRegistry)
	assert registry.base_url == 'http://eureka:8761/eureka'
	await registry.close()


def test_build_registry_rejects_unknown_backend():
	with pytest.raises(ValueError):
		build_registry(Settings(DISCOVERY_BACKEND='consul'))


@pytest.mark.asyncio
async def test_random_load_balancer_from_settings():
	init_dependencies(Settings(DISCOVERY_BACKEND='static', LOAD_BALANCER='random'))
	try:
		assert isinstance(deps.load_balancer, RandomLoadBalancer)
	finally:
		await cleanup_dependencies()

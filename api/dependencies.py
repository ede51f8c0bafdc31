import logging
from typing import Annotated

from fastapi import Depends

from application.services import ConversionService
from config.settings import Settings, get_settings
from domain.models.conversion import MechanismTag
from infrastructure.clients import CurrencyExchangeProxy, DirectExchangeClient, ExchangeValueClient
from infrastructure.discovery import (
	EurekaServiceRegistry,
	LoadBalancer,
	ServiceRegistry,
	StaticServiceRegistry,
	create_load_balancer,
)

logger = logging.getLogger(__name__)


class AppDependencies:
	"""Container for application-wide singleton dependencies."""

	direct_client: DirectExchangeClient | None = None
	exchange_proxy: CurrencyExchangeProxy | None = None
	registry: ServiceRegistry | None = None
	load_balancer: LoadBalancer | None = None


deps = AppDependencies()


def build_registry(settings: Settings) -> ServiceRegistry:
	backend = settings.DISCOVERY_BACKEND.lower()
	if backend == 'eureka':
		return EurekaServiceRegistry(settings.EUREKA_URL, timeout=settings.UPSTREAM_TIMEOUT_SECONDS)
	if backend == 'static':
		return StaticServiceRegistry.from_addresses(
			settings.EXCHANGE_SERVICE_NAME, settings.EXCHANGE_INSTANCES
		)
	raise ValueError(f'Unknown discovery backend: {settings.DISCOVERY_BACKEND}')


def init_dependencies(settings: Settings | None = None) -> None:
	"""Initialize all singleton dependencies. Called at app startup."""
	logger.info('Initializing dependencies...')
	settings = settings or get_settings()

	deps.direct_client = DirectExchangeClient(
		settings.EXCHANGE_BASE_URL, timeout=settings.UPSTREAM_TIMEOUT_SECONDS
	)

	if settings.EXCHANGE_PROXY_URL:
		logger.info(f'{settings.EXCHANGE_SERVICE_NAME} pinned to {settings.EXCHANGE_PROXY_URL}')
		deps.registry = None
		deps.load_balancer = None
	else:
		deps.registry = build_registry(settings)
		deps.load_balancer = create_load_balancer(settings.LOAD_BALANCER, deps.registry)
		logger.info(
			f'{settings.EXCHANGE_SERVICE_NAME} resolved through {type(deps.registry).__name__} '
			f'with {type(deps.load_balancer).__name__}'
		)

	deps.exchange_proxy = CurrencyExchangeProxy(
		deps.load_balancer,
		service_name=settings.EXCHANGE_SERVICE_NAME,
		url=settings.EXCHANGE_PROXY_URL or None,
		timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
	)
	logger.info('Dependencies initialized')


async def cleanup_dependencies() -> None:
	logger.info('Cleaning up dependencies...')

	if deps.direct_client:
		await deps.direct_client.close()
	if deps.exchange_proxy:
		await deps.exchange_proxy.close()
	if deps.registry:
		await deps.registry.close()

	logger.info('Cleanup complete')


def get_direct_client() -> DirectExchangeClient:
	if deps.direct_client is None:
		raise RuntimeError('Direct exchange client not initialized')
	return deps.direct_client


def get_exchange_proxy() -> CurrencyExchangeProxy:
	if deps.exchange_proxy is None:
		raise RuntimeError('Currency exchange proxy not initialized')
	return deps.exchange_proxy


def get_direct_conversion_service(
	client: Annotated[ExchangeValueClient, Depends(get_direct_client)],
) -> ConversionService:
	return ConversionService(client=client, mechanism=MechanismTag.REST_TEMPLATE)


def get_proxy_conversion_service(
	client: Annotated[ExchangeValueClient, Depends(get_exchange_proxy)],
) -> ConversionService:
	return ConversionService(client=client, mechanism=MechanismTag.FEIGN)

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	# Application
	APP_NAME: str = 'currency-conversion'
	PORT: int = 8100
	DEBUG: bool = False
	LOG_LEVEL: str = 'INFO'

	# Direct upstream
	EXCHANGE_BASE_URL: str = 'http://localhost:8000'
	UPSTREAM_TIMEOUT_SECONDS: float = 5.0

	# Proxy upstream
	EXCHANGE_SERVICE_NAME: str = 'currency-exchange'
	EXCHANGE_PROXY_URL: str = ''

	# Discovery
	DISCOVERY_BACKEND: str = 'eureka'
	EUREKA_URL: str = 'http://localhost:8761/eureka'
	EXCHANGE_INSTANCES: str = 'localhost:8000'
	LOAD_BALANCER: str = 'round_robin'

	model_config = SettingsConfigDict(env_file='.env', case_sensitive=False, extra='ignore')


@lru_cache
def get_settings() -> Settings:
	return Settings()

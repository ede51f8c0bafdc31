from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class MechanismTag(str, Enum):
    REST_TEMPLATE = 'rest template'
    FEIGN = 'feign'


@dataclass(frozen=True)
class ExchangeValue:
    """Rate record as returned by the currency-exchange service."""

    id: int
    from_currency: str
    to_currency: str
    conversion_multiple: Decimal
    environment: str


@dataclass(frozen=True)
class ExchangeQuote:
    id: int
    from_currency: str
    to_currency: str
    quantity: Decimal
    conversion_multiple: Decimal
    total_calculated_amount: Decimal
    environment: str


@dataclass(frozen=True)
class ServiceInstance:
    service_name: str
    instance_id: str
    host: str
    port: int
    secure: bool = False

    @property
    def base_url(self) -> str:
        scheme = 'https' if self.secure else 'http'
        return f'{scheme}://{self.host}:{self.port}'

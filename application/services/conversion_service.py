import logging
from decimal import Decimal

from domain.exceptions.conversion import ConversionError, InvalidInputError
from domain.models.conversion import ExchangeQuote, ExchangeValue, MechanismTag
from infrastructure.clients.base import ExchangeValueClient

logger = logging.getLogger(__name__)


def compose(
	exchange_value: ExchangeValue,
	from_currency: str,
	to_currency: str,
	quantity: Decimal,
	mechanism: MechanismTag,
) -> ExchangeQuote:
	return ExchangeQuote(
		id=exchange_value.id,
		from_currency=from_currency,
		to_currency=to_currency,
		quantity=quantity,
		conversion_multiple=exchange_value.conversion_multiple,
		total_calculated_amount=quantity * exchange_value.conversion_multiple,
		environment=f'{exchange_value.environment} {mechanism.value}',
	)


class ConversionService:
	def __init__(self, client: ExchangeValueClient, mechanism: MechanismTag):
		self.client = client
		self.mechanism = mechanism

	async def convert(self, from_currency: str, to_currency: str, quantity: Decimal) -> ExchangeQuote:
		if not quantity.is_finite() or quantity < 0:
			raise InvalidInputError(f'Quantity must be a non-negative decimal, got {quantity}')

		try:
			exchange_value = await self.client.retrieve_exchange_value(from_currency, to_currency)
		except ConversionError as e:
			logger.warning(f'{self.mechanism.value}: {from_currency} -> {to_currency} failed: {e}')
			raise

		quote = compose(exchange_value, from_currency, to_currency, quantity, self.mechanism)
		logger.debug(
			f'{self.mechanism.value}: {quantity} {from_currency} -> '
			f'{quote.total_calculated_amount} {to_currency} (x{quote.conversion_multiple})'
		)
		return quote

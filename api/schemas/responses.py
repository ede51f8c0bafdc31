from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from domain.models.conversion import ExchangeQuote


class ConversionResponse(BaseModel):
	id: int = Field(..., description='Identifier of the upstream rate record')
	from_currency: str = Field(..., alias='from', description='Source currency code')
	to_currency: str = Field(..., alias='to', description='Target currency code')
	quantity: Decimal = Field(..., description='Amount to convert')
	conversion_multiple: Decimal = Field(
		..., alias='conversionMultiple', description='Exchange rate for from -> to'
	)
	total_calculated_amount: Decimal = Field(
		..., alias='totalCalculatedAmount', description='quantity x conversionMultiple'
	)
	environment: str = Field(..., description='Answering instance and call mechanism')

	model_config = ConfigDict(
		populate_by_name=True,
		json_schema_extra={
			'example': {
				'id': 10001,
				'from': 'USD',
				'to': 'INR',
				'quantity': 10,
				'conversionMultiple': 65.00,
				'totalCalculatedAmount': 650.00,
				'environment': '8000 instance-id rest template',
			}
		},
	)

	@classmethod
	def from_quote(cls, quote: ExchangeQuote) -> 'ConversionResponse':
		return cls(
			id=quote.id,
			from_currency=quote.from_currency,
			to_currency=quote.to_currency,
			quantity=quote.quantity,
			conversion_multiple=quote.conversion_multiple,
			total_calculated_amount=quote.total_calculated_amount,
			environment=quote.environment,
		)


class HealthResponse(BaseModel):
	status: str = Field(..., description='UP when the service is serving requests')
	service: str = Field(..., description='Application name')

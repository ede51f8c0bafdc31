from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from api.dependencies import get_direct_conversion_service, get_proxy_conversion_service
from api.responses import DecimalJSONResponse
from api.schemas import ConversionResponse
from application.services import ConversionService
from domain.models.conversion import ExchangeQuote

router = APIRouter(tags=['currency-conversion'])

CurrencyCode = Annotated[str, Path(min_length=1, description='Currency code, forwarded as-is')]
Quantity = Annotated[Decimal, Path(ge=0, description='Amount to convert')]


def _quote_response(quote: ExchangeQuote) -> DecimalJSONResponse:
	# model_dump keeps Decimal instances; the response renders them as numbers
	body = ConversionResponse.from_quote(quote).model_dump(by_alias=True)
	return DecimalJSONResponse(content=body)


@router.get(
	'/currency-conversion/from/{from_currency}/to/{to_currency}/quantity/{quantity}',
	response_model=ConversionResponse,
	response_class=DecimalJSONResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert a quantity by calling currency-exchange at a fixed address',
)
async def calculate_currency_conversion(
	from_currency: CurrencyCode,
	to_currency: CurrencyCode,
	quantity: Quantity,
	service: Annotated[ConversionService, Depends(get_direct_conversion_service)],
) -> DecimalJSONResponse:
	quote = await service.convert(from_currency, to_currency, quantity)
	return _quote_response(quote)


@router.get(
	'/currency-conversion-feign/from/{from_currency}/to/{to_currency}/quantity/{quantity}',
	response_model=ConversionResponse,
	response_class=DecimalJSONResponse,
	status_code=status.HTTP_200_OK,
	summary='Convert a quantity by calling currency-exchange through service discovery',
)
async def calculate_currency_conversion_feign(
	from_currency: CurrencyCode,
	to_currency: CurrencyCode,
	quantity: Quantity,
	service: Annotated[ConversionService, Depends(get_proxy_conversion_service)],
) -> DecimalJSONResponse:
	quote = await service.convert(from_currency, to_currency, quantity)
	return _quote_response(quote)

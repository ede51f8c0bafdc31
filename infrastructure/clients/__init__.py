from .base import ExchangeValueClient, decode_exchange_value
from .direct import DirectExchangeClient
from .proxy import CurrencyExchangeProxy

__all__ = ['ExchangeValueClient', 'decode_exchange_value', 'DirectExchangeClient', 'CurrencyExchangeProxy']

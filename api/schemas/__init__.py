from .responses import ConversionResponse, HealthResponse

__all__ = ['ConversionResponse', 'HealthResponse']

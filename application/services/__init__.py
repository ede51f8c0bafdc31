from .conversion_service import ConversionService, compose

__all__ = ['ConversionService', 'compose']

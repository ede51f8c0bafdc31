class ConversionError(Exception):
    kind = 'ConversionError'


class InvalidInputError(ConversionError):
    kind = 'InvalidInput'


class UpstreamUnavailableError(ConversionError):
    kind = 'UpstreamUnavailable'


class ServiceUnavailableError(UpstreamUnavailableError):
    def __init__(self, service_name: str):
        super().__init__(f'No instances available for service {service_name}')
        self.service_name = service_name


class UpstreamTimeoutError(UpstreamUnavailableError):
    kind = 'UpstreamTimeout'


class UpstreamFaultError(ConversionError):
    kind = 'UpstreamFault'

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code

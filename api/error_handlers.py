import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from domain.exceptions.conversion import (
	InvalidInputError,
	UpstreamFaultError,
	UpstreamTimeoutError,
	UpstreamUnavailableError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, kind: str, detail: str) -> JSONResponse:
	return JSONResponse(status_code=status_code, content={'detail': detail, 'error': kind})


def register_exception_handlers(app: FastAPI) -> None:
	@app.exception_handler(InvalidInputError)
	async def invalid_input_handler(request: Request, exc: InvalidInputError):
		return _error(400, exc.kind, str(exc))

	@app.exception_handler(RequestValidationError)
	async def request_validation_handler(request: Request, exc: RequestValidationError):
		messages = '; '.join(
			f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
			for error in exc.errors()
		)
		return _error(400, InvalidInputError.kind, messages or 'Invalid request')

	@app.exception_handler(UpstreamUnavailableError)
	async def upstream_unavailable_handler(request: Request, exc: UpstreamUnavailableError):
		logger.error(f'Upstream unavailable: {exc}')
		return _error(503, exc.kind, 'Currency exchange service unavailable')

	@app.exception_handler(UpstreamTimeoutError)
	async def upstream_timeout_handler(request: Request, exc: UpstreamTimeoutError):
		logger.error(f'Upstream timeout: {exc}')
		return _error(504, exc.kind, 'Currency exchange service timed out')

	@app.exception_handler(UpstreamFaultError)
	async def upstream_fault_handler(request: Request, exc: UpstreamFaultError):
		logger.error(f'Upstream fault: {exc}')
		return _error(502, exc.kind, 'Currency exchange service returned an invalid response')

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from api.dependencies import cleanup_dependencies, init_dependencies
from api.error_handlers import register_exception_handlers
from api.routes import conversion, health
from config.settings import get_settings

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logging.getLogger('httpx').setLevel(logging.WARNING)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
	logger.info(f'Starting {settings.APP_NAME}...')

	init_dependencies(settings)

	logger.info('Application ready')

	yield

	logger.info('Shutting down...')
	await cleanup_dependencies()


app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
	logger.error(f'Unhandled exception: {exc}', exc_info=exc)
	return JSONResponse(status_code=500, content={'detail': 'Internal server error'})


app.include_router(conversion.router)
app.include_router(health.router)
register_exception_handlers(app)


if __name__ == '__main__':
	import uvicorn

	uvicorn.run('api.main:app', host='0.0.0.0', port=settings.PORT, log_level=settings.LOG_LEVEL.lower())

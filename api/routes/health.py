from fastapi import APIRouter

from api.schemas import HealthResponse
from config.settings import get_settings

router = APIRouter(tags=['health'])


@router.get('/health', response_model=HealthResponse, summary='Liveness check')
async def health() -> HealthResponse:
	return HealthResponse(status='UP', service=get_settings().APP_NAME)

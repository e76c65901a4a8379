from fastapi import APIRouter, Depends
from pydantic import BaseModel

from src.config.settings import Settings
from src.dependencies import get_app_settings

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str
    version: str = "0.1.0"
    storage: str
    auth: str


@router.get("/", response_model=HealthCheckResponse)
async def health_check(settings: Settings = Depends(get_app_settings)) -> HealthCheckResponse:
    """
    Liveness probe. Reports which storage backend and admin auth strategy
    this deployment runs, never whether their secrets are set.
    """
    return HealthCheckResponse(
        status="healthy",
        storage=settings.storage_backend.value,
        auth=settings.admin_auth_strategy.value,
    )

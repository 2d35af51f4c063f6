"""Hello and health check endpoints."""

from fastapi import APIRouter

from planhub.api.deps import SettingsDep, StoreDep
from planhub.schemas.health import HealthResponse, HelloResponse

router = APIRouter()


@router.get("/hello", response_model=HelloResponse)
def get_hello() -> HelloResponse:
    return HelloResponse(message="Serverless backend working 🚀")


@router.get("/health", response_model=HealthResponse)
def get_health(store: StoreDep, settings: SettingsDep) -> HealthResponse:
    """
    Return service health status and whether the data file loads.
    Used by load balancers and monitoring.
    """
    return HealthResponse(
        environment=settings.APP_ENV,
        store="ok" if store.check() else "unavailable",
    )

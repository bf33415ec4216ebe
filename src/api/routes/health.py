"""
Health check API endpoint.

GET /health - Report service status and the configured LLM provider.
"""
import time

from fastapi import APIRouter

from src.api.models.responses import HealthResponse
from src.llm.factory import llm_client

router = APIRouter()

# Track service start time for uptime calculation
_start_time = time.time()

VERSION = "0.1.0"


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Liveness check.

    Does not call the upstream provider; it only reports which provider
    and model the service is configured for.
    """
    return HealthResponse(
        status="ok",
        version=VERSION,
        provider=llm_client.provider_name,
        model=llm_client.model_name,
        uptime_seconds=round(time.time() - _start_time, 2),
    )

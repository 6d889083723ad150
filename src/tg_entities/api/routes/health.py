"""
Health check endpoint for monitoring.
"""

import time
from fastapi import APIRouter

from ...config import settings
from ...extraction.providers import resolve_model
from ...models.api_models import HealthResponse
from ...version import API_VERSION

router = APIRouter()

_start_time = time.time()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Liveness plus the backend the next analysis would use.

    Does not contact the provider; a healthy service may still be running on
    regex fallback if the provider is unreachable.
    """
    resolved = resolve_model(settings)

    return HealthResponse(
        status="healthy",
        version=API_VERSION,
        uptime_seconds=time.time() - _start_time,
        llm_provider=resolved.provider.value,
        llm_model=resolved.model_id,
    )

"""
Version information endpoint.
"""

from fastapi import APIRouter

from ...models.api_models import VersionResponse
from ...version import API_VERSION, get_current_pipeline_version

router = APIRouter()


@router.get("/version", response_model=VersionResponse)
async def get_version() -> VersionResponse:
    """
    Get current API and pipeline version information.

    The provider and model are resolved from configuration at request time.
    """
    return VersionResponse(
        api_version=API_VERSION,
        pipeline_version=get_current_pipeline_version(),
    )

"""
Entity analysis API routes.

Provides:
- POST /api/v1/analyze - Extract entities from a message text
"""

from functools import lru_cache

from fastapi import APIRouter, Depends, status
import structlog

from ...extraction.analyzer import EntityAnalyzer
from ...models.api_models import AnalyzeRequest, AnalyzeResponse, DetectedEntity


logger = structlog.get_logger(__name__)

router = APIRouter()


@lru_cache(maxsize=1)
def get_analyzer() -> EntityAnalyzer:
    """Shared analyzer instance (overridable in tests via dependency_overrides)."""
    return EntityAnalyzer()


@router.post("/analyze", response_model=AnalyzeResponse, status_code=status.HTTP_200_OK)
async def analyze_endpoint(
    request: AnalyzeRequest,
    analyzer: EntityAnalyzer = Depends(get_analyzer),
) -> AnalyzeResponse:
    """
    Extract entities from a single message text.

    Never fails because of the extraction backend: backend errors switch to
    the regex fallback, and an empty list is a valid result.
    """
    logger.info("analysis_request_received", text_length=len(request.text))

    detections = await analyzer.analyze(request.text)

    return AnalyzeResponse(
        entities=[DetectedEntity.from_detection(d) for d in detections],
        count=len(detections),
    )

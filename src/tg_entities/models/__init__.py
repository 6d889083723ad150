"""
Data models for the entity extraction service.
"""

from .api_models import (
    AnalyzeRequest,
    AnalyzeResponse,
    DetectedEntity,
    HealthResponse,
    VersionResponse,
)
from .pipeline_version import PipelineVersion

__all__ = [
    "AnalyzeRequest",
    "AnalyzeResponse",
    "DetectedEntity",
    "HealthResponse",
    "PipelineVersion",
    "VersionResponse",
]

"""
API request and response models for FastAPI endpoints.

This module defines the Pydantic models used for API request/response validation.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..extraction.entity import EntityDetection, EntityType
from .pipeline_version import PipelineVersion


class AnalyzeRequest(BaseModel):
    """Request model for entity analysis."""

    text: str = Field(description="Message text to analyse", max_length=20000)


class DetectedEntity(BaseModel):
    """Entity as returned by the API (camelCase field names)."""

    type: EntityType
    value: str
    display_name: str = Field(alias="displayName")
    normalized_value: str = Field(alias="normalizedValue")
    confidence: float = Field(ge=0.0, le=1.0)
    start_offset: Optional[int] = Field(default=None, alias="startOffset")
    end_offset: Optional[int] = Field(default=None, alias="endOffset")
    reason: str
    description: Optional[str] = None
    wiki_url: Optional[str] = Field(default=None, alias="wikiUrl")

    model_config = {
        "populate_by_name": True,
    }

    @classmethod
    def from_detection(cls, detection: EntityDetection) -> "DetectedEntity":
        return cls(
            type=detection.type,
            value=detection.value,
            display_name=detection.display_name,
            normalized_value=detection.normalized_value,
            confidence=detection.confidence,
            start_offset=detection.start_offset,
            end_offset=detection.end_offset,
            reason=detection.reason,
            description=detection.description,
            wiki_url=detection.wiki_url,
        )


class AnalyzeResponse(BaseModel):
    """Response model for entity analysis."""

    entities: List[DetectedEntity] = Field(default_factory=list)
    count: int = Field(description="Number of entities")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Service status", examples=["healthy"])
    version: str = Field(description="API version", examples=["1.0.0"])
    uptime_seconds: float = Field(description="Service uptime")
    llm_provider: str = Field(description="Resolved LLM provider", examples=["openai"])
    llm_model: str = Field(description="Resolved model id", examples=["gpt-4o-mini"])


class VersionResponse(BaseModel):
    """Version information response."""

    api_version: str = Field(description="API version")
    pipeline_version: PipelineVersion = Field(
        description="Current pipeline version"
    )

"""
Structured response contract for model-based extraction.

The backend must return an object of the shape described by
ExtractionResponse. The model is validated once per response; a response
that does not satisfy it is a failure, never a partial result.

wikiUrl is bounded in length only. URI well-formedness is checked later by
the normalizer because strict backend schema modes reject "format": "uri".
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from .entity import EntityType, RawDetection


MAX_ENTITIES = 40
MAX_VALUE_LENGTH = 200
MAX_DISPLAY_NAME_LENGTH = 200
MAX_REASON_LENGTH = 240
MAX_DESCRIPTION_LENGTH = 500
MAX_WIKI_URL_LENGTH = 500


class ExtractedEntityPayload(BaseModel):
    """A single entity as returned by the backend."""

    type: EntityType = Field(..., description="Entity type from the closed set")
    value: str = Field(
        ...,
        min_length=1,
        max_length=MAX_VALUE_LENGTH,
        description="Entity exactly as written in the text",
    )
    display_name: Optional[str] = Field(
        default=None,
        alias="displayName",
        max_length=MAX_DISPLAY_NAME_LENGTH,
        description="Canonical human-readable name",
    )
    confidence: Optional[float] = Field(
        default=None, ge=0.0, le=1.0, strict=True, description="Confidence score 0-1"
    )
    reason: Optional[str] = Field(
        default=None, max_length=MAX_REASON_LENGTH, description="Why this is an entity"
    )
    description: Optional[str] = Field(
        default=None, max_length=MAX_DESCRIPTION_LENGTH, description="Short description"
    )
    wiki_url: Optional[str] = Field(
        default=None,
        alias="wikiUrl",
        max_length=MAX_WIKI_URL_LENGTH,
        description="Wikipedia article URL",
    )

    model_config = {
        "populate_by_name": True,
    }

    def to_raw_detection(self) -> RawDetection:
        """Convert to the pre-normalization candidate used by the pipeline."""
        return RawDetection(
            type=self.type,
            value=self.value,
            display_name=self.display_name,
            confidence=self.confidence,
            reason=self.reason,
            description=self.description,
            wiki_url=self.wiki_url,
        )


class ExtractionResponse(BaseModel):
    """Top-level backend response: a bounded list of entities."""

    entities: List[ExtractedEntityPayload] = Field(
        default_factory=list,
        max_length=MAX_ENTITIES,
        description="Entities explicitly present in the text",
    )

    def to_raw_detections(self) -> List[RawDetection]:
        return [entity.to_raw_detection() for entity in self.entities]

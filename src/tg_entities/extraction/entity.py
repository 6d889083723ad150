"""
Entity records for the extraction pipeline.

RawDetection is a candidate as reported by the model (before normalization);
EntityDetection is the final record handed to callers.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class EntityType(str, Enum):
    """Closed set of entity types the pipeline reports."""
    PERSON = "person"
    ORGANIZATION = "organization"
    LOCATION = "location"
    EVENT = "event"
    SPORTS_CLUB = "sports_club"


@dataclass
class RawDetection:
    """
    Pre-normalization candidate entity.

    Fields are intentionally loose: confidence may be missing, out of range
    or not a number. The normalizer is responsible for cleaning it up.
    """

    type: EntityType
    value: str
    display_name: Optional[str] = None
    confidence: Any = None
    reason: Optional[str] = None
    description: Optional[str] = None
    wiki_url: Any = None


@dataclass(frozen=True)
class EntityDetection:
    """
    Final entity record.

    Attributes:
        type: Entity type
        value: Literal surface form as reported
        display_name: User-facing label (defaults to value)
        normalized_value: Lower-cased, whitespace-collapsed value used for identity
        confidence: Confidence score (0.0-1.0)
        start_offset: Start position in source text, or None if not located
        end_offset: End position in source text, or None if not located
        reason: Free-text justification
        description: Optional free-text description
        wiki_url: Optional absolute http(s) URL
    """

    type: EntityType
    value: str
    display_name: str
    normalized_value: str
    confidence: float
    start_offset: Optional[int]
    end_offset: Optional[int]
    reason: str
    description: Optional[str] = None
    wiki_url: Optional[str] = None

    def __repr__(self) -> str:
        """String representation for debugging."""
        return (
            f"EntityDetection('{self.value}', {self.type.value}, "
            f"[{self.start_offset},{self.end_offset}], {self.confidence})"
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize using the camelCase field names consumers expect."""
        return {
            "type": self.type.value,
            "value": self.value,
            "displayName": self.display_name,
            "normalizedValue": self.normalized_value,
            "confidence": self.confidence,
            "startOffset": self.start_offset,
            "endOffset": self.end_offset,
            "reason": self.reason,
            "description": self.description,
            "wikiUrl": self.wiki_url,
        }


def dedupe_key(entity_type: EntityType, normalized_value: str) -> str:
    """Identity key for collapsing duplicates: "<type>:<normalized value>"."""
    return f"{EntityType(entity_type).value}:{normalized_value}"

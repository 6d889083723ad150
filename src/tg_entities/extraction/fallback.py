"""
RegEx-based fallback extraction.

Used when the model is unavailable or returns nothing. Three ordered passes
(person names, organizations with a legal form, event keywords) run over the
text; each match is deduplicated against everything collected so far using the
same (type, normalized value) key as the model path.

Known limitation: the person pass uses ASCII word boundaries, so it finds
Latin-script names ("John Smith") but not Cyrillic ones ("Пётр Петров").
"""

import re
from dataclasses import dataclass
from typing import List, Pattern, Set

import structlog

from .entity import EntityDetection, EntityType, dedupe_key
from .normalizer import normalize_value, sort_by_offset


logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class FallbackPattern:
    """One fallback pass: a compiled pattern plus the fixed attributes of its matches."""
    entity_type: EntityType
    regex: Pattern
    confidence: float
    reason: str


PERSON_PATTERN = FallbackPattern(
    entity_type=EntityType.PERSON,
    regex=re.compile(
        r"\b(?:"
        r"[А-ЯЁ][а-яё]{1,30}\s+[А-ЯЁ][а-яё]{1,30}(?:\s+[А-ЯЁ][а-яё]{1,30})?"
        r"|[A-Z][a-z]{1,30}\s+[A-Z][a-z]{1,30}(?:\s+[A-Z][a-z]{1,30})?"
        r")\b",
        re.ASCII,
    ),
    confidence=0.55,
    reason="Fallback: looks like a personal name.",
)

ORGANIZATION_PATTERN = FallbackPattern(
    entity_type=EntityType.ORGANIZATION,
    regex=re.compile(
        r"\b(?:ООО|АО|ПАО)\s+"
        r"(?:«[^»\n]{2,80}»|\"[^\"\n]{2,80}\"|[^\W_][\w .-]{1,79}\b)"
    ),
    confidence=0.65,
    reason="Fallback: company legal form detected.",
)

EVENT_PATTERN = FallbackPattern(
    entity_type=EntityType.EVENT,
    regex=re.compile(
        r"\b(?:матч|турнир|финал|конференция|форум|презентация|релиз|запуск"
        r"|match|final|conference|summit)\b",
        re.IGNORECASE,
    ),
    confidence=0.5,
    reason="Fallback: event keyword detected.",
)

# Pass order matters: earlier passes win on duplicate keys
FALLBACK_PATTERNS = (PERSON_PATTERN, ORGANIZATION_PATTERN, EVENT_PATTERN)


def collect_pattern_matches(
    text: str,
    pattern: FallbackPattern,
    detections: List[EntityDetection],
    seen: Set[str],
) -> int:
    """
    Append new matches of one pattern to detections.

    Args:
        text: Source text
        pattern: Fallback pass to run
        detections: Accumulated detections (mutated)
        seen: Dedupe keys already collected (mutated)

    Returns:
        Number of detections added by this pass
    """
    added = 0

    for match in pattern.regex.finditer(text):
        raw_value = match.group(0)
        value = raw_value.strip()

        if not value:
            continue

        normalized = normalize_value(value)
        key = dedupe_key(pattern.entity_type, normalized)

        if key in seen:
            continue

        seen.add(key)

        start = match.start() + (len(raw_value) - len(raw_value.lstrip()))
        detections.append(
            EntityDetection(
                type=pattern.entity_type,
                value=value,
                display_name=value,
                normalized_value=normalized,
                confidence=pattern.confidence,
                start_offset=start,
                end_offset=start + len(value),
                reason=pattern.reason,
                description=None,
                wiki_url=None,
            )
        )
        added += 1

    return added


def extract_entities_fallback(text: str) -> List[EntityDetection]:
    """
    Extract entities with the fallback patterns only (no external calls).

    Args:
        text: Source text

    Returns:
        Deduplicated detections sorted by start offset; may be empty

    Examples:
        >>> [d.value for d in extract_entities_fallback("Author: John Smith")]
        ['John Smith']
        >>> [d.type.value for d in extract_entities_fallback("Tomorrow is the conference")]
        ['event']
    """
    detections: List[EntityDetection] = []
    seen: Set[str] = set()

    for pattern in FALLBACK_PATTERNS:
        added = collect_pattern_matches(text, pattern, detections, seen)
        logger.debug(
            "fallback_pass_complete",
            entity_type=pattern.entity_type.value,
            matches=added,
        )

    return sort_by_offset(detections)

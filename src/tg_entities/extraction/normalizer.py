"""
Normalization of model-reported candidates.

Turns RawDetection candidates into EntityDetection records:
- trims values and drops empty ones
- deduplicates on (type, normalized value), first occurrence wins
- clamps confidence into [0, 1]
- fills display name and reason defaults
- keeps only absolute http(s) wiki URLs
- locates spans and sorts by start offset (unlocated entities last)
"""

import math
import re
from typing import Any, Iterable, List, Optional
from urllib.parse import urlparse

import structlog

from .entity import EntityDetection, EntityType, RawDetection, dedupe_key
from .span_locator import find_span


logger = structlog.get_logger(__name__)


DEFAULT_CONFIDENCE = 0.75
DEFAULT_REASON = "Extracted by LLM"

_WHITESPACE_RE = re.compile(r"\s+")
# Dot-separated labels of letters and digits with inner hyphens (IDN labels allowed)
_HOST_LABEL = r"[^\W_](?:(?:[^\W_]|-)*[^\W_])?"
_HOSTNAME_RE = re.compile(rf"(?:{_HOST_LABEL}\.)*{_HOST_LABEL}\.?")


def normalize_value(value: str) -> str:
    """
    Identity form of an entity value: trimmed, lower-cased, single-spaced.

    Examples:
        >>> normalize_value("  John   DOE ")
        'john doe'
    """
    return _WHITESPACE_RE.sub(" ", value.strip().lower())


def normalize_confidence(confidence: Any) -> float:
    """
    Clamp a reported confidence into [0, 1].

    Missing, non-numeric and NaN values fall back to DEFAULT_CONFIDENCE.
    """
    if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
        return DEFAULT_CONFIDENCE

    if math.isnan(confidence):
        return DEFAULT_CONFIDENCE

    if confidence < 0:
        return 0.0

    if confidence > 1:
        return 1.0

    return float(confidence)


def normalize_wiki_url(url: Any) -> Optional[str]:
    """
    Keep a URL only if it is an absolute http:// or https:// URL.

    Examples:
        >>> normalize_wiki_url("https://en.wikipedia.org/wiki/Moscow")
        'https://en.wikipedia.org/wiki/Moscow'
        >>> normalize_wiki_url("javascript:alert(1)") is None
        True
    """
    if not isinstance(url, str):
        return None

    candidate = url.strip()
    if not candidate:
        return None

    try:
        parsed = urlparse(candidate)
        # Accessing .port validates it
        parsed.port
    except ValueError:
        return None

    if parsed.scheme.lower() not in ("http", "https") or not parsed.hostname:
        return None

    if not _HOSTNAME_RE.fullmatch(parsed.hostname):
        return None

    return candidate


def normalize_display_name(display_name: Any, value: str) -> str:
    """Trimmed display name, or value when it is missing or blank."""
    if isinstance(display_name, str) and display_name.strip():
        return display_name.strip()
    return value


def sort_by_offset(detections: Iterable[EntityDetection]) -> List[EntityDetection]:
    """Stable sort by start offset; entities without a span go last."""
    return sorted(
        detections,
        key=lambda d: (d.start_offset is None, d.start_offset or 0),
    )


def normalize_detections(
    source: str, raw_entities: Iterable[RawDetection]
) -> List[EntityDetection]:
    """
    Normalize a batch of model candidates against the analysed text.

    Args:
        source: Text the candidates were extracted from
        raw_entities: Candidates in the order the model returned them

    Returns:
        Deduplicated EntityDetection list sorted by start offset

    Examples:
        >>> raw = [
        ...     RawDetection(type=EntityType.PERSON, value="John Doe", confidence=0.9),
        ...     RawDetection(type=EntityType.PERSON, value="john doe", confidence=0.8),
        ... ]
        >>> [d.value for d in normalize_detections("John Doe is great", raw)]
        ['John Doe']
    """
    detections: List[EntityDetection] = []
    seen = set()

    for raw in raw_entities:
        value = raw.value.strip()

        if not value:
            continue

        entity_type = EntityType(raw.type)
        normalized = normalize_value(value)
        key = dedupe_key(entity_type, normalized)

        if key in seen:
            logger.debug("duplicate_detection_dropped", dedupe_key=key)
            continue

        seen.add(key)

        start, end = find_span(source, value)

        detections.append(
            EntityDetection(
                type=entity_type,
                value=value,
                display_name=normalize_display_name(raw.display_name, value),
                normalized_value=normalized,
                confidence=normalize_confidence(raw.confidence),
                start_offset=start,
                end_offset=end,
                reason=raw.reason if raw.reason is not None else DEFAULT_REASON,
                description=raw.description,
                wiki_url=normalize_wiki_url(raw.wiki_url),
            )
        )

    return sort_by_offset(detections)

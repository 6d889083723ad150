"""
Entity analysis entry point.

Orchestrates one analysis:
1. Trim input; empty input returns [] without calling the backend
2. Resolve provider/model from configuration
3. Structured extraction through the injected client
4. Normalization (dedupe, confidence clamp, spans, ordering)
5. Regex fallback when step 3-4 fails or yields nothing

No exception raised inside the pipeline escapes analyze(); an empty list is
the only unusual outcome a caller observes.
"""

from typing import List, Optional

import structlog

from ..config import ConfigLookup, settings
from .entity import EntityDetection
from .fallback import extract_entities_fallback
from .llm_client import LLMExtractionClient, StructuredExtractionClient
from .normalizer import normalize_detections
from .providers import resolve_model


logger = structlog.get_logger(__name__)


class EntityAnalyzer:
    """
    Extracts entities from a single message text.

    Holds no per-call state, so one instance can serve concurrent analyze() calls.
    """

    def __init__(
        self,
        extraction_client: Optional[StructuredExtractionClient] = None,
        config: Optional[ConfigLookup] = None,
    ):
        """
        Initialize analyzer.

        Args:
            extraction_client: Optional pre-configured extraction client
            config: Optional configuration lookup (default: application settings)
        """
        self.config = config if config is not None else settings
        self.extraction_client = extraction_client or LLMExtractionClient()

    async def analyze(self, text: str) -> List[EntityDetection]:
        """
        Extract entities from text.

        Args:
            text: Message text

        Returns:
            Deduplicated entities sorted by start offset (unlocated ones last)
        """
        source = text.strip()

        if not source:
            return []

        try:
            detections = await self._analyze_with_llm(source)
        except Exception as e:
            logger.warning(
                "llm_extraction_failed_using_fallback",
                error=str(e),
                error_type=type(e).__name__,
            )
            return self._analyze_with_fallback(source)

        if detections:
            return detections

        logger.warning("llm_returned_no_entities_using_fallback", text_length=len(source))
        return self._analyze_with_fallback(source)

    async def _analyze_with_llm(self, source: str) -> List[EntityDetection]:
        resolved = resolve_model(self.config)

        raw_entities = await self.extraction_client.extract(
            source, resolved.provider, resolved.model_id
        )
        detections = normalize_detections(source, raw_entities)

        logger.info(
            "llm_extraction_finished",
            provider=resolved.provider.value,
            model=resolved.model_id,
            raw_count=len(raw_entities),
            entities=len(detections),
        )

        return detections

    def _analyze_with_fallback(self, source: str) -> List[EntityDetection]:
        detections = extract_entities_fallback(source)

        logger.info("fallback_extraction_finished", entities=len(detections))

        return detections


async def analyze_text(
    text: str,
    extraction_client: Optional[StructuredExtractionClient] = None,
    config: Optional[ConfigLookup] = None,
) -> List[EntityDetection]:
    """
    Analyze text with default or custom configuration.

    Example:
        >>> entities = await analyze_text("Elon Musk visited Berlin")
        >>> [e.to_dict() for e in entities]
    """
    analyzer = EntityAnalyzer(extraction_client=extraction_client, config=config)
    return await analyzer.analyze(text)

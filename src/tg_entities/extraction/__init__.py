"""
Entity extraction pipeline (LLM structured output + regex fallback).

Public API:
    - EntityAnalyzer / analyze_text: Complete pipeline (recommended)
    - EntityDetection, RawDetection, EntityType: Records
    - resolve_model / resolve_provider: Provider selection
    - LLMExtractionClient / StructuredExtractionClient: Backend call
    - normalize_detections: Normalization, dedupe and ordering
    - find_span: Span lookup
    - extract_entities_fallback: Regex-only extraction

Example usage:
    >>> from tg_entities.extraction import EntityAnalyzer
    >>>
    >>> analyzer = EntityAnalyzer()
    >>> entities = await analyzer.analyze("John Smith spoke at the conference")
    >>> for entity in entities:
    ...     print(f"{entity.value} [{entity.type.value}] @ {entity.start_offset}-{entity.end_offset}")
"""

from .analyzer import EntityAnalyzer, analyze_text
from .entity import EntityDetection, EntityType, RawDetection
from .fallback import extract_entities_fallback
from .llm_client import (
    ExtractionError,
    LLMExtractionClient,
    StructuredExtractionClient,
    create_backend,
)
from .normalizer import normalize_detections
from .prompts import ExtractionPrompt, load_extraction_prompt
from .providers import LLMProvider, ResolvedModel, resolve_model, resolve_provider
from .span_locator import find_span

__all__ = [
    # Main API
    "EntityAnalyzer",
    "analyze_text",
    "EntityDetection",
    "EntityType",
    "RawDetection",
    # Component functions (for advanced usage)
    "ExtractionError",
    "ExtractionPrompt",
    "LLMExtractionClient",
    "LLMProvider",
    "ResolvedModel",
    "StructuredExtractionClient",
    "create_backend",
    "extract_entities_fallback",
    "find_span",
    "load_extraction_prompt",
    "normalize_detections",
    "resolve_model",
    "resolve_provider",
]

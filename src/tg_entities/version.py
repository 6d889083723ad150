"""
Version constants for the entity extraction pipeline.

This module defines the version constants reported by the API so results can
be traced back to the pipeline configuration that produced them.
"""

from typing import Optional

from .config import ConfigLookup, settings
from .extraction.prompts import get_prompt_version
from .extraction.providers import resolve_model
from .models.pipeline_version import PipelineVersion

# API Version
API_VERSION = "1.0.0"

# Component versions (update these when implementations change)
EXTRACTION_VERSION = "entity-extraction-1.0.0"
SCHEMA_VERSION = "entities-schema-v1.1"
NORMALIZER_VERSION = "normalizer-1.0.0"
FALLBACK_VERSION = "regex-fallback-1.0.0"


def get_current_pipeline_version(config: Optional[ConfigLookup] = None) -> PipelineVersion:
    """
    Get current pipeline version configuration.

    Args:
        config: Configuration lookup used to resolve provider/model

    Returns:
        PipelineVersion instance with current versions
    """
    config = config if config is not None else settings
    resolved = resolve_model(config)

    return PipelineVersion(
        extraction_version=EXTRACTION_VERSION,
        schema_version=SCHEMA_VERSION,
        prompt_version=get_prompt_version(config),
        normalizer_version=NORMALIZER_VERSION,
        fallback_version=FALLBACK_VERSION,
        llm_provider=resolved.provider.value,
        llm_model=resolved.model_id,
    )

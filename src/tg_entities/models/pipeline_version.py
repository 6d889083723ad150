"""
Pipeline version model.

Tracks component versions and the resolved backend so an extraction result
can be reproduced: same versions + same backend + same input = same output
(up to model determinism at temperature 0).
"""

from pydantic import BaseModel, Field


class PipelineVersion(BaseModel):
    """
    Immutable version contract for the extraction pipeline.
    """

    extraction_version: str = Field(
        description="Extraction pipeline version", examples=["entity-extraction-1.0.0"]
    )
    schema_version: str = Field(
        description="Structured response schema version", examples=["entities-schema-v1.1"]
    )
    prompt_version: str = Field(
        description="Prompt version ('custom' when loaded from files)", examples=["v1.1"]
    )
    normalizer_version: str = Field(
        description="Normalization rules version", examples=["normalizer-1.0.0"]
    )
    fallback_version: str = Field(
        description="Regex fallback patterns version", examples=["regex-fallback-1.0.0"]
    )
    llm_provider: str = Field(description="Resolved LLM provider", examples=["openai"])
    llm_model: str = Field(description="Resolved model id", examples=["gpt-4o-mini"])

    model_config = {
        "frozen": True,  # Immutable
    }

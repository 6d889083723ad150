"""
Test doubles for the extraction pipeline.
"""

from typing import Dict, List, Optional, Union

from tg_entities.extraction.entity import EntityType, RawDetection
from tg_entities.extraction.llm_client import StructuredExtractionClient
from tg_entities.extraction.providers import LLMProvider


class FakeExtractionClient(StructuredExtractionClient):
    """
    In-memory StructuredExtractionClient.

    Returns the configured candidates, or raises the configured exception.
    Records every call as (source_text, provider, model_id).
    """

    def __init__(
        self,
        result: Optional[List[RawDetection]] = None,
        error: Optional[Exception] = None,
    ):
        self.result = result or []
        self.error = error
        self.calls: List[tuple] = []

    async def extract(
        self, source_text: str, provider: LLMProvider, model_id: str
    ) -> List[RawDetection]:
        self.calls.append((source_text, provider, model_id))
        if self.error is not None:
            raise self.error
        return list(self.result)


class DictConfig:
    """ConfigLookup backed by a plain dict."""

    def __init__(self, values: Optional[Dict[str, str]] = None):
        self.values = values or {}

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)


def raw(
    value: str,
    entity_type: Union[EntityType, str] = EntityType.PERSON,
    **kwargs,
) -> RawDetection:
    """Shorthand for building RawDetection candidates in tests."""
    return RawDetection(type=EntityType(entity_type), value=value, **kwargs)

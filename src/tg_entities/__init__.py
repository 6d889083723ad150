"""
Telegram post entity extraction.

Extracts people, organizations, locations, events and sports clubs from short
message texts using LLM structured output with a deterministic regex fallback.
"""

from .extraction import EntityAnalyzer, EntityDetection, EntityType, analyze_text

__version__ = "1.0.0"

__all__ = ["EntityAnalyzer", "EntityDetection", "EntityType", "analyze_text", "__version__"]

"""
Tool definitions for LLM function calling.

Defines the schema the backend uses to return extracted entities. Mirrors
ExtractionResponse in schemas.py; the pydantic model remains the authority
when validating responses.

Compatible with:
- OpenAI API and DeepSeek API (OpenAI function tools)
- Anthropic Messages API (tools with input_schema)
"""

from typing import Any, Dict, List

from .entity import EntityType
from .schemas import (
    MAX_DESCRIPTION_LENGTH,
    MAX_DISPLAY_NAME_LENGTH,
    MAX_ENTITIES,
    MAX_REASON_LENGTH,
    MAX_VALUE_LENGTH,
    MAX_WIKI_URL_LENGTH,
)


TOOL_NAME = "report_entities"
TOOL_DESCRIPTION = (
    "Report the named entities (people, organizations, locations, events, "
    "sports clubs) explicitly mentioned in the post."
)


def get_entity_types_enum() -> List[str]:
    """Get the list of valid entity types."""
    return [entity_type.value for entity_type in EntityType]


def _nullable_string(max_length: int, description: str) -> Dict[str, Any]:
    return {
        "type": ["string", "null"],
        "maxLength": max_length,
        "description": description,
    }


def get_extraction_json_schema() -> Dict[str, Any]:
    """
    JSON schema for the extraction response.

    No "format": "uri" on wikiUrl: strict schema modes reject it.
    """
    return {
        "type": "object",
        "required": ["entities"],
        "additionalProperties": False,
        "properties": {
            "entities": {
                "type": "array",
                "description": "Entities explicitly present in the text. Empty if none.",
                "maxItems": MAX_ENTITIES,
                "items": {
                    "type": "object",
                    "required": ["type", "value"],
                    "additionalProperties": False,
                    "properties": {
                        "type": {
                            "type": "string",
                            "enum": get_entity_types_enum(),
                            "description": "Entity type",
                        },
                        "value": {
                            "type": "string",
                            "minLength": 1,
                            "maxLength": MAX_VALUE_LENGTH,
                            "description": "Entity exactly as written in the text",
                        },
                        "displayName": _nullable_string(
                            MAX_DISPLAY_NAME_LENGTH,
                            "Canonical name in nominative form, if it differs from value",
                        ),
                        "confidence": {
                            "type": "number",
                            "minimum": 0,
                            "maximum": 1,
                            "description": "Confidence 0-1",
                        },
                        "reason": _nullable_string(
                            MAX_REASON_LENGTH, "Short justification"
                        ),
                        "description": _nullable_string(
                            MAX_DESCRIPTION_LENGTH, "One-sentence description of the entity"
                        ),
                        "wikiUrl": _nullable_string(
                            MAX_WIKI_URL_LENGTH, "Wikipedia article URL, only if certain"
                        ),
                    },
                },
            },
        },
    }


def get_openai_tool_definition() -> Dict[str, Any]:
    """Function tool in OpenAI chat-completions format (also used for DeepSeek)."""
    return {
        "type": "function",
        "function": {
            "name": TOOL_NAME,
            "description": TOOL_DESCRIPTION,
            "parameters": get_extraction_json_schema(),
        },
    }


def get_openai_tool_choice() -> Dict[str, Any]:
    return {"type": "function", "function": {"name": TOOL_NAME}}


def get_anthropic_tool_definition() -> Dict[str, Any]:
    """Tool in Anthropic Messages API format."""
    return {
        "name": TOOL_NAME,
        "description": TOOL_DESCRIPTION,
        "input_schema": get_extraction_json_schema(),
    }


def get_anthropic_tool_choice() -> Dict[str, Any]:
    return {"type": "tool", "name": TOOL_NAME}

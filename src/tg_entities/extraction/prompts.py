"""
Prompt management for LLM entity extraction.

Prompt text is an explicit value handed to the extraction client when it is
built. Built-in defaults can be replaced with plain-text files via
PROMPT_SYSTEM_PATH / PROMPT_USER_PATH.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import structlog

from ..config import ConfigLookup, Settings


logger = structlog.get_logger(__name__)


CURRENT_PROMPT_VERSION = "v1.1"
TEXT_PLACEHOLDER = "{text}"

DEFAULT_SYSTEM_PROMPT = " ".join([
    "You extract named entities from a Telegram post.",
    "Return only entities that are explicitly present in the text.",
    "Allowed types: person, organization, location, event, sports_club.",
    "Do not invent entities.",
    "Copy value exactly as it appears in the text.",
    "Add a short description and a Wikipedia URL only when you are certain.",
])

DEFAULT_USER_PROMPT_TEMPLATE = "\n".join([
    "Extract entities from the following post.",
    "Respond using the schema only.",
    "",
    TEXT_PLACEHOLDER,
])


@dataclass(frozen=True)
class ExtractionPrompt:
    """System instruction plus a user template containing {text}."""
    system: str = DEFAULT_SYSTEM_PROMPT
    user_template: str = DEFAULT_USER_PROMPT_TEMPLATE
    version: str = CURRENT_PROMPT_VERSION

    def __post_init__(self):
        if TEXT_PLACEHOLDER not in self.user_template:
            raise ValueError(
                f"User prompt template must contain the {TEXT_PLACEHOLDER} placeholder"
            )

    def build_user_prompt(self, source_text: str) -> str:
        """
        Substitute the source text into the user template.

        Plain replacement: braces inside the template or the text are left alone.
        """
        return self.user_template.replace(TEXT_PLACEHOLDER, source_text)


def get_prompt_version(config: ConfigLookup) -> str:
    """
    Prompt version the configuration selects, without reading any files.

    "custom" when either prompt file override is set.
    """
    if config.get("PROMPT_SYSTEM_PATH") or config.get("PROMPT_USER_PATH"):
        return "custom"
    return CURRENT_PROMPT_VERSION


def _read_prompt_file(path: str) -> str:
    content = Path(path).read_text(encoding="utf-8").strip()
    if not content:
        raise ValueError(f"Prompt file is empty: {path}")
    return content


def load_extraction_prompt(settings: Optional[Settings] = None) -> ExtractionPrompt:
    """
    Build the prompt from settings, reading override files if configured.

    Args:
        settings: Settings with optional prompt_system_path / prompt_user_path

    Returns:
        ExtractionPrompt instance

    Raises:
        OSError: If a configured prompt file cannot be read
        ValueError: If a prompt file is empty or the user template lacks {text}
    """
    if settings is None:
        return ExtractionPrompt()

    system = DEFAULT_SYSTEM_PROMPT
    user_template = DEFAULT_USER_PROMPT_TEMPLATE
    version = get_prompt_version(settings)

    system_path = settings.get("PROMPT_SYSTEM_PATH")
    user_path = settings.get("PROMPT_USER_PATH")

    if system_path:
        system = _read_prompt_file(system_path)

    if user_path:
        user_template = _read_prompt_file(user_path)

    logger.debug(
        "extraction_prompt_loaded",
        version=version,
        system_path=system_path,
        user_path=user_path,
    )

    return ExtractionPrompt(system=system, user_template=user_template, version=version)

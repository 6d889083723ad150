"""
Provider resolution.

Maps configuration (LLM_PROVIDER plus per-provider model overrides) to the
backend identity used for extraction. Reads configuration only; no network.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict

import structlog

from ..config import ConfigLookup


logger = structlog.get_logger(__name__)


class LLMProvider(str, Enum):
    """Supported extraction backends."""
    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    DEEPSEEK = "deepseek"


DEFAULT_PROVIDER = LLMProvider.OPENAI

MODEL_CONFIG_KEYS: Dict[LLMProvider, str] = {
    LLMProvider.OPENAI: "OPENAI_MODEL",
    LLMProvider.ANTHROPIC: "ANTHROPIC_MODEL",
    LLMProvider.DEEPSEEK: "DEEPSEEK_MODEL",
}

DEFAULT_MODELS: Dict[LLMProvider, str] = {
    LLMProvider.OPENAI: "gpt-4o-mini",
    LLMProvider.ANTHROPIC: "claude-3-5-haiku-latest",
    LLMProvider.DEEPSEEK: "deepseek-chat",
}


@dataclass(frozen=True)
class ResolvedModel:
    """Backend identity for one extraction call."""
    provider: LLMProvider
    model_id: str

    def __str__(self) -> str:
        return f"{self.provider.value}/{self.model_id}"


def resolve_provider(config: ConfigLookup) -> LLMProvider:
    """
    Read LLM_PROVIDER (case-insensitive, trimmed).

    Unset or blank selects openai. Unsupported values are logged and also
    select openai; this never raises.
    """
    configured = (config.get("LLM_PROVIDER") or "").strip().lower()

    if not configured:
        return DEFAULT_PROVIDER

    try:
        return LLMProvider(configured)
    except ValueError:
        logger.warning(
            "unsupported_llm_provider",
            configured=configured,
            fallback=DEFAULT_PROVIDER.value,
        )
        return DEFAULT_PROVIDER


def resolve_model(config: ConfigLookup) -> ResolvedModel:
    """
    Resolve provider and model id.

    Examples:
        >>> resolve_model({"LLM_PROVIDER": "anthropic", "ANTHROPIC_MODEL": "claude-test"})
        ResolvedModel(provider=<LLMProvider.ANTHROPIC: 'anthropic'>, model_id='claude-test')
    """
    provider = resolve_provider(config)
    model_id = config.get(MODEL_CONFIG_KEYS[provider]) or DEFAULT_MODELS[provider]
    return ResolvedModel(provider=provider, model_id=model_id)

"""
Structured extraction client.

Provides the StructuredExtractionClient interface (text in, raw entities out)
and its LLM-backed implementation for three providers:
- OpenAI API (openai SDK)
- DeepSeek API (OpenAI-compatible, openai SDK with a different base URL)
- Anthropic API (anthropic SDK)

Key features:
- Forced tool call so the model answers in the extraction schema
- Deterministic sampling (temperature 0)
- One pydantic validation per response; any violation is a failure
- Every backend error surfaces as ExtractionError

Retries, rate limiting and timeouts are left to the SDK clients.
"""

import json
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

import structlog
from anthropic import AsyncAnthropic
from openai import AsyncOpenAI
from pydantic import ValidationError

from ..config import Settings, settings as default_settings
from .entity import RawDetection
from .prompts import ExtractionPrompt, load_extraction_prompt
from .providers import LLMProvider
from .schemas import ExtractionResponse
from .tool_definitions import (
    TOOL_NAME,
    get_anthropic_tool_choice,
    get_anthropic_tool_definition,
    get_openai_tool_choice,
    get_openai_tool_definition,
)


logger = structlog.get_logger(__name__)


EXTRACTION_TEMPERATURE = 0.0


# ============================================================================
# ERRORS AND DATA CLASSES
# ============================================================================

class ExtractionError(Exception):
    """Structured extraction failed (network, auth, refusal or schema violation)."""

    def __init__(
        self,
        message: str,
        provider: Optional[LLMProvider] = None,
        model_id: Optional[str] = None,
    ):
        super().__init__(message)
        self.provider = provider
        self.model_id = model_id


@dataclass
class BackendResponse:
    """
    Unified backend response structure.

    Contains the raw tool call arguments and metadata about the request.
    """
    tool_result: Any
    model: str
    provider: LLMProvider
    tokens_input: Optional[int] = None
    tokens_output: Optional[int] = None
    latency_ms: int = 0
    finish_reason: str = "unknown"

    @property
    def tokens_total(self) -> Optional[int]:
        if self.tokens_input is None or self.tokens_output is None:
            return None
        return self.tokens_input + self.tokens_output


# ============================================================================
# EXTRACTION CLIENT INTERFACE
# ============================================================================

class StructuredExtractionClient(ABC):
    """
    Capability the analyzer depends on: extract raw candidates from text.

    Implementations raise ExtractionError on any failure.
    """

    @abstractmethod
    async def extract(
        self, source_text: str, provider: LLMProvider, model_id: str
    ) -> List[RawDetection]:
        """
        Extract candidate entities from source_text.

        Args:
            source_text: Trimmed, non-empty text to analyse
            provider: Backend to use
            model_id: Provider-specific model identifier

        Returns:
            Raw candidates in the order the backend reported them

        Raises:
            ExtractionError: On any backend or contract failure
        """


# ============================================================================
# PROVIDER BACKENDS
# ============================================================================

class ProviderBackend(ABC):
    """One wire protocol for calling a model with the extraction tool."""

    provider: LLMProvider

    @abstractmethod
    async def complete(
        self, system_prompt: str, user_prompt: str, model_id: str
    ) -> BackendResponse:
        """Call the model, forcing the extraction tool, and return its arguments."""


class OpenAICompatibleBackend(ProviderBackend):
    """
    OpenAI chat-completions backend.

    Works with:
    - OpenAI API (api.openai.com)
    - DeepSeek API (api.deepseek.com) - OpenAI-compatible
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        provider: LLMProvider = LLMProvider.OPENAI,
        timeout_seconds: float = 60.0,
        max_tokens: int = 2048,
    ):
        self.provider = provider
        self.base_url = base_url
        self.max_tokens = max_tokens
        self.client = AsyncOpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
        )

    async def complete(
        self, system_prompt: str, user_prompt: str, model_id: str
    ) -> BackendResponse:
        start_time = time.time()

        response = await self.client.chat.completions.create(
            model=model_id,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            tools=[get_openai_tool_definition()],
            tool_choice=get_openai_tool_choice(),
            temperature=EXTRACTION_TEMPERATURE,
            max_tokens=self.max_tokens,
        )

        choice = response.choices[0]
        tool_calls = choice.message.tool_calls

        if not tool_calls:
            raise ExtractionError(
                f"No tool calls in {self.provider.value} response "
                f"(finish_reason={choice.finish_reason})",
                provider=self.provider,
                model_id=model_id,
            )

        try:
            arguments = json.loads(tool_calls[0].function.arguments)
        except json.JSONDecodeError as e:
            raise ExtractionError(
                f"Tool call arguments are not valid JSON: {e}",
                provider=self.provider,
                model_id=model_id,
            ) from e

        usage = response.usage

        return BackendResponse(
            tool_result=arguments,
            model=model_id,
            provider=self.provider,
            tokens_input=usage.prompt_tokens if usage else None,
            tokens_output=usage.completion_tokens if usage else None,
            latency_ms=int((time.time() - start_time) * 1000),
            finish_reason=choice.finish_reason or "unknown",
        )


class AnthropicBackend(ProviderBackend):
    """Anthropic Messages API backend using forced tool use."""

    provider = LLMProvider.ANTHROPIC

    def __init__(
        self,
        api_key: str,
        timeout_seconds: float = 60.0,
        max_tokens: int = 2048,
    ):
        self.max_tokens = max_tokens
        self.client = AsyncAnthropic(api_key=api_key, timeout=timeout_seconds)

    async def complete(
        self, system_prompt: str, user_prompt: str, model_id: str
    ) -> BackendResponse:
        start_time = time.time()

        response = await self.client.messages.create(
            model=model_id,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
            tools=[get_anthropic_tool_definition()],
            tool_choice=get_anthropic_tool_choice(),
            temperature=EXTRACTION_TEMPERATURE,
            max_tokens=self.max_tokens,
        )

        tool_input = None
        for block in response.content:
            if getattr(block, "type", None) == "tool_use" and block.name == TOOL_NAME:
                tool_input = block.input
                break

        if tool_input is None:
            raise ExtractionError(
                f"No {TOOL_NAME} tool use in anthropic response "
                f"(stop_reason={response.stop_reason})",
                provider=self.provider,
                model_id=model_id,
            )

        usage = response.usage

        return BackendResponse(
            tool_result=tool_input,
            model=model_id,
            provider=self.provider,
            tokens_input=usage.input_tokens if usage else None,
            tokens_output=usage.output_tokens if usage else None,
            latency_ms=int((time.time() - start_time) * 1000),
            finish_reason=response.stop_reason or "unknown",
        )


# ============================================================================
# BACKEND FACTORY
# ============================================================================

def _require_api_key(api_key: Optional[str], env_name: str, provider: LLMProvider) -> str:
    if not api_key:
        raise ExtractionError(
            f"{env_name} is required when LLM_PROVIDER={provider.value}",
            provider=provider,
        )
    return api_key


def create_backend(provider: LLMProvider, settings: Settings) -> ProviderBackend:
    """
    Build the backend for a provider.

    Args:
        provider: Resolved provider
        settings: Credentials, endpoints and request limits

    Returns:
        Configured ProviderBackend

    Raises:
        ExtractionError: If the provider's API key is not configured
        ValueError: If provider is not a known LLMProvider
    """
    limits = {
        "timeout_seconds": settings.llm_timeout_seconds,
        "max_tokens": settings.llm_max_tokens,
    }

    logger.info("creating_llm_backend", provider=provider.value)

    if provider is LLMProvider.OPENAI:
        return OpenAICompatibleBackend(
            api_key=_require_api_key(settings.openai_api_key, "OPENAI_API_KEY", provider),
            base_url=settings.openai_base_url,
            provider=provider,
            **limits,
        )

    elif provider is LLMProvider.ANTHROPIC:
        return AnthropicBackend(
            api_key=_require_api_key(settings.anthropic_api_key, "ANTHROPIC_API_KEY", provider),
            **limits,
        )

    elif provider is LLMProvider.DEEPSEEK:
        return OpenAICompatibleBackend(
            api_key=_require_api_key(settings.deepseek_api_key, "DEEPSEEK_API_KEY", provider),
            base_url=settings.deepseek_base_url,
            provider=provider,
            **limits,
        )

    raise ValueError(f"Unknown LLM provider: {provider}")


# ============================================================================
# LLM EXTRACTION CLIENT
# ============================================================================

class LLMExtractionClient(StructuredExtractionClient):
    """
    StructuredExtractionClient backed by a generative model.

    Backends are created lazily, once per provider, and reused.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        prompt: Optional[ExtractionPrompt] = None,
        backend_factory: Callable[[LLMProvider, Settings], ProviderBackend] = create_backend,
    ):
        self.settings = settings or default_settings
        self.prompt = prompt or load_extraction_prompt(self.settings)
        self.backend_factory = backend_factory
        self._backends: Dict[LLMProvider, ProviderBackend] = {}

    def _get_backend(self, provider: LLMProvider) -> ProviderBackend:
        backend = self._backends.get(provider)
        if backend is None:
            backend = self.backend_factory(provider, self.settings)
            self._backends[provider] = backend
        return backend

    async def extract(
        self, source_text: str, provider: LLMProvider, model_id: str
    ) -> List[RawDetection]:
        log = logger.bind(provider=provider.value, model=model_id)

        try:
            backend = self._get_backend(provider)
            response = await backend.complete(
                system_prompt=self.prompt.system,
                user_prompt=self.prompt.build_user_prompt(source_text),
                model_id=model_id,
            )
        except ExtractionError:
            raise
        except Exception as e:
            log.error("llm_extraction_call_failed", error=str(e), error_type=type(e).__name__)
            raise ExtractionError(str(e), provider=provider, model_id=model_id) from e

        try:
            parsed = ExtractionResponse.model_validate(response.tool_result)
        except ValidationError as e:
            log.warning("llm_output_validation_failed", errors=e.error_count())
            raise ExtractionError(
                f"Response violates extraction schema ({e.error_count()} errors)",
                provider=provider,
                model_id=model_id,
            ) from e

        log.debug(
            "llm_extraction_call_completed",
            entities=len(parsed.entities),
            latency_ms=response.latency_ms,
            tokens_total=response.tokens_total,
            finish_reason=response.finish_reason,
        )

        return parsed.to_raw_detections()

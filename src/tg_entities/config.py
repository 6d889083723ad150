"""
Application configuration management.

This module handles configuration from environment variables using Pydantic Settings.
The extraction pipeline only needs key -> string lookups, exposed through the
ConfigLookup protocol so callers can pass any mapping-like source.
"""

from typing import Dict, Optional, Protocol

from pydantic_settings import BaseSettings


class ConfigLookup(Protocol):
    """Anything that resolves a configuration key to a string (or None)."""

    def get(self, key: str) -> Optional[str]:
        ...


class Settings(BaseSettings):
    """
    Application configuration from environment variables.

    All settings can be overridden via environment variables with the same name.
    """

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: str = "INFO"
    log_json: bool = True

    # LLM provider selection ("openai" | "anthropic" | "deepseek")
    llm_provider: Optional[str] = None

    # Per-provider model overrides (defaults live in extraction.providers)
    openai_model: Optional[str] = None
    anthropic_model: Optional[str] = None
    deepseek_model: Optional[str] = None

    # Credentials and endpoints
    openai_api_key: Optional[str] = None
    anthropic_api_key: Optional[str] = None
    deepseek_api_key: Optional[str] = None
    openai_base_url: str = "https://api.openai.com/v1"
    deepseek_base_url: str = "https://api.deepseek.com"

    # Request limits (timeouts are enforced by the SDK clients)
    llm_timeout_seconds: float = 60.0
    llm_max_tokens: int = 2048

    # Optional prompt overrides (plain text files)
    prompt_system_path: Optional[str] = None
    prompt_user_path: Optional[str] = None

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    def get(self, key: str) -> Optional[str]:
        """
        Look up a setting by its environment variable name.

        Args:
            key: Variable name, e.g. "LLM_PROVIDER"

        Returns:
            String value, or None when unset or blank
        """
        value = getattr(self, key.lower(), None)
        if value is None:
            return None
        value = str(value)
        return value if value.strip() else None


class OverrideConfig:
    """
    Layer explicit overrides on top of another lookup.

    Used by the CLI to apply --provider / --model without touching the environment.
    """

    def __init__(self, overrides: Dict[str, Optional[str]], base: ConfigLookup):
        self.overrides = {k: v for k, v in overrides.items() if v}
        self.base = base

    def get(self, key: str) -> Optional[str]:
        if key in self.overrides:
            return self.overrides[key]
        return self.base.get(key)


# Global settings instance
settings = Settings()

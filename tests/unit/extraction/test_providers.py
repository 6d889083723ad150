"""
Unit tests for provider resolution.

Tests LLM_PROVIDER parsing, unsupported-provider handling and model overrides.
"""

import pytest

from tg_entities.extraction.providers import (
    DEFAULT_MODELS,
    LLMProvider,
    ResolvedModel,
    resolve_model,
    resolve_provider,
)
from tests.fixtures.clients import DictConfig


class TestResolveProvider:
    """Test resolve_provider()."""

    def test_unset_defaults_to_openai(self, empty_config):
        assert resolve_provider(empty_config) is LLMProvider.OPENAI

    def test_blank_defaults_to_openai(self):
        assert resolve_provider(DictConfig({"LLM_PROVIDER": "   "})) is LLMProvider.OPENAI

    @pytest.mark.parametrize("configured,expected", [
        ("openai", LLMProvider.OPENAI),
        ("anthropic", LLMProvider.ANTHROPIC),
        ("deepseek", LLMProvider.DEEPSEEK),
        ("  Anthropic ", LLMProvider.ANTHROPIC),
        ("DEEPSEEK", LLMProvider.DEEPSEEK),
    ])
    def test_recognized_values(self, configured, expected):
        assert resolve_provider(DictConfig({"LLM_PROVIDER": configured})) is expected

    @pytest.mark.parametrize("configured", ["bogus", "unknown-provider", "ollama"])
    def test_unsupported_value_falls_back_to_openai(self, configured):
        assert resolve_provider(DictConfig({"LLM_PROVIDER": configured})) is LLMProvider.OPENAI


class TestResolveModel:
    """Test resolve_model()."""

    def test_default_models(self):
        assert DEFAULT_MODELS == {
            LLMProvider.OPENAI: "gpt-4o-mini",
            LLMProvider.ANTHROPIC: "claude-3-5-haiku-latest",
            LLMProvider.DEEPSEEK: "deepseek-chat",
        }

    def test_unset_config(self, empty_config):
        assert resolve_model(empty_config) == ResolvedModel(LLMProvider.OPENAI, "gpt-4o-mini")

    def test_bogus_provider_uses_openai_defaults(self):
        resolved = resolve_model(DictConfig({"LLM_PROVIDER": "bogus"}))

        assert resolved.provider is LLMProvider.OPENAI
        assert resolved.model_id == "gpt-4o-mini"

    def test_anthropic_override(self):
        resolved = resolve_model(DictConfig({
            "LLM_PROVIDER": "anthropic",
            "ANTHROPIC_MODEL": "claude-test",
        }))

        assert resolved.provider is LLMProvider.ANTHROPIC
        assert resolved.model_id == "claude-test"

    def test_deepseek_override(self):
        resolved = resolve_model(DictConfig({
            "LLM_PROVIDER": "deepseek",
            "DEEPSEEK_MODEL": "deepseek-test",
        }))

        assert resolved == ResolvedModel(LLMProvider.DEEPSEEK, "deepseek-test")

    def test_override_for_other_provider_is_ignored(self):
        resolved = resolve_model(DictConfig({
            "LLM_PROVIDER": "deepseek",
            "OPENAI_MODEL": "gpt-test",
        }))

        assert resolved.model_id == "deepseek-chat"

    def test_openai_override(self):
        resolved = resolve_model(DictConfig({"OPENAI_MODEL": "gpt-4o"}))

        assert resolved.model_id == "gpt-4o"

    def test_str(self):
        assert str(ResolvedModel(LLMProvider.ANTHROPIC, "claude-test")) == "anthropic/claude-test"

    def test_settings_as_config(self, mock_settings):
        """Settings implements the same lookup protocol."""
        mock_settings.llm_provider = "anthropic"
        mock_settings.anthropic_model = "claude-from-settings"

        resolved = resolve_model(mock_settings)

        assert resolved == ResolvedModel(LLMProvider.ANTHROPIC, "claude-from-settings")

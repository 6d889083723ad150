"""
Global pytest fixtures and configuration for test suite.

This module provides reusable fixtures for:
- Settings without environment leakage
- A fake structured extraction client (no network)
- Dict-based configuration lookups
- Sample message texts
- In-memory log capture
"""

from typing import Dict

import pytest
import structlog
from structlog.testing import LogCapture

from tg_entities.config import Settings
from .fixtures.clients import DictConfig, FakeExtractionClient
from .fixtures.messages import SAMPLE_MESSAGES


@pytest.fixture
def mock_settings() -> Settings:
    """
    Settings instance isolated from the .env file.

    Returns:
        Settings with test credentials
    """
    return Settings(
        _env_file=None,
        llm_provider="openai",
        openai_api_key="test-openai-key",
        anthropic_api_key="test-anthropic-key",
        deepseek_api_key="test-deepseek-key",
        log_level="DEBUG",
        log_json=False,
    )


@pytest.fixture
def empty_config() -> DictConfig:
    """Configuration with nothing set (all defaults)."""
    return DictConfig()


@pytest.fixture
def fake_client() -> FakeExtractionClient:
    """Extraction client returning no entities."""
    return FakeExtractionClient()


@pytest.fixture
def sample_messages() -> Dict[str, str]:
    """Sample message texts keyed by scenario."""
    return SAMPLE_MESSAGES


@pytest.fixture(autouse=True)
def log_output() -> LogCapture:
    """
    Capture structlog events in memory for the duration of a test.

    Logger caching is disabled so no logger keeps a reference to a stream
    that pytest swaps out between tests.
    """
    capture = LogCapture()
    structlog.contextvars.clear_contextvars()
    structlog.configure(
        processors=[structlog.contextvars.merge_contextvars, capture],
        cache_logger_on_first_use=False,
    )
    yield capture
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()

"""Shared pytest fixtures for Relay LLM SDK tests."""

import logging

import pytest
from dotenv import load_dotenv

# Load environment variables from .env file for tests
load_dotenv()

from relay_llm_sdk.models.generation import ProviderType
from relay_llm_sdk.models.streaming import StreamingOptions
from relay_llm_sdk.streaming.state import StreamAccumulatorState


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without network access")
    config.addinivalue_line("markers", "integration: tests spanning several layers of the SDK")
    config.addinivalue_line("markers", "slow: long-running tests")


@pytest.fixture
def clean_relay_env(monkeypatch):
    """Remove RELAY_* variables so option tests start from defaults."""
    for name in (
        "RELAY_DETECT_JSON_MODE",
        "RELAY_DEFAULT_FINISH_REASON",
        "RELAY_LOG_STREAMING_METRICS",
        "RELAY_CAPTURE_RAW_EVENTS",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def state():
    """Fresh accumulator state for primitive-level tests."""
    return StreamAccumulatorState(provider=ProviderType.OPENAI.value, model="gpt-4o-mini")


@pytest.fixture
def debug_options():
    """Options with every debugging aid enabled."""
    return StreamingOptions(log_streaming_metrics=True, capture_raw_events=True)


@pytest.fixture
def sdk_logs(caplog):
    """Capture every record below the relay_llm_sdk logger."""
    caplog.set_level(logging.DEBUG, logger="relay_llm_sdk")
    return caplog

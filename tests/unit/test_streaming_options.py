"""Unit tests for StreamingOptions."""

from unittest.mock import patch

import pytest

from relay_llm_sdk.errors import ConfigurationError
from relay_llm_sdk.models.streaming import DEBUG_OPTIONS, DEFAULT_OPTIONS, StreamingOptions


@pytest.mark.unit
class TestStreamingOptions:
    """Test option defaults and validation."""

    def test_defaults(self):
        options = StreamingOptions()
        assert options.detect_json_mode is True
        assert options.default_finish_reason == "stop"
        assert options.measure_ttft is True
        assert options.log_streaming_metrics is False
        assert options.capture_raw_events is False
        assert options.request_id is None

    def test_invalid_default_finish_reason(self):
        with pytest.raises(ConfigurationError) as exc_info:
            StreamingOptions(default_finish_reason="end_turn")
        assert "end_turn" in str(exc_info.value)

    def test_from_dict_ignores_unknown_keys(self):
        options = StreamingOptions.from_dict({
            "detect_json_mode": False,
            "default_finish_reason": "unknown",
            "buffer_size": 4096,
        })
        assert options.detect_json_mode is False
        assert options.default_finish_reason == "unknown"

    def test_to_dict(self):
        options = StreamingOptions(request_id="req-1")
        assert options.to_dict() == {
            "detect_json_mode": True,
            "default_finish_reason": "stop",
            "measure_ttft": True,
            "log_streaming_metrics": False,
            "capture_raw_events": False,
            "request_id": "req-1",
        }
        assert StreamingOptions.from_dict(options.to_dict()) == options

    def test_presets(self):
        assert DEFAULT_OPTIONS == StreamingOptions()
        assert DEBUG_OPTIONS.log_streaming_metrics
        assert DEBUG_OPTIONS.capture_raw_events


@pytest.mark.unit
class TestStreamingOptionsFromEnv:
    """Test reading RELAY_* environment variables."""

    def test_empty_environment(self):
        assert StreamingOptions.from_env({}) == StreamingOptions()

    def test_flags(self):
        options = StreamingOptions.from_env({
            "RELAY_DETECT_JSON_MODE": "false",
            "RELAY_LOG_STREAMING_METRICS": "1",
            "RELAY_CAPTURE_RAW_EVENTS": " YES ",
        })
        assert options.detect_json_mode is False
        assert options.log_streaming_metrics is True
        assert options.capture_raw_events is True

    def test_finish_reason_is_normalized(self):
        options = StreamingOptions.from_env({"RELAY_DEFAULT_FINISH_REASON": " Unknown "})
        assert options.default_finish_reason == "unknown"

    def test_bad_flag(self):
        with pytest.raises(ConfigurationError) as exc_info:
            StreamingOptions.from_env({"RELAY_DETECT_JSON_MODE": "maybe"})
        assert "RELAY_DETECT_JSON_MODE" in str(exc_info.value)

    def test_bad_finish_reason(self):
        with pytest.raises(ConfigurationError):
            StreamingOptions.from_env({"RELAY_DEFAULT_FINISH_REASON": "done"})

    def test_process_environment(self, clean_relay_env, monkeypatch):
        monkeypatch.setenv("RELAY_LOG_STREAMING_METRICS", "on")
        with patch("relay_llm_sdk.models.streaming.load_dotenv") as mock_load_dotenv:
            options = StreamingOptions.from_env()

        mock_load_dotenv.assert_called_once()
        assert options.log_streaming_metrics is True
        assert options.detect_json_mode is True

    def test_explicit_mapping_skips_dotenv(self):
        with patch("relay_llm_sdk.models.streaming.load_dotenv") as mock_load_dotenv:
            StreamingOptions.from_env({})
        mock_load_dotenv.assert_not_called()

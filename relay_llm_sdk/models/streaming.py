"""
Streaming configuration models.

This module provides the options that tune the stream normalization
engine: JSON-mode detection, the default finish reason, and debugging
aids such as metrics logging and raw event capture.
"""

import os
from dataclasses import dataclass
from typing import Optional, Dict, Any, Mapping

from dotenv import load_dotenv

from ..config.constants import (
    CANONICAL_FINISH_REASONS,
    ENV_CAPTURE_RAW_EVENTS,
    ENV_DEFAULT_FINISH_REASON,
    ENV_DETECT_JSON_MODE,
    ENV_LOG_STREAMING_METRICS,
    FALSY_ENV_VALUES,
    FINISH_STOP,
    TRUTHY_ENV_VALUES,
)
from ..errors import ConfigurationError


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in TRUTHY_ENV_VALUES:
        return True
    if lowered in FALSY_ENV_VALUES:
        return False
    raise ConfigurationError(f"{name} must be a boolean flag, got {value!r}")


@dataclass
class StreamingOptions:
    """
    Configuration for stream normalization.

    One options object can be shared by any number of adapters; it is
    never mutated by the engine.
    """

    # JSON handling
    detect_json_mode: bool = True
    """Treat a response whose first text starts with '{' or '[' as a JSON document."""

    # Finish reason
    default_finish_reason: str = FINISH_STOP
    """Finish reason used when the upstream ends without reporting one."""

    # Performance metrics
    measure_ttft: bool = True
    """Measure Time To First Token (first content, thinking or tool event)."""

    # Debugging
    log_streaming_metrics: bool = False
    """Log streaming metrics (event count, duration) when a stream ends."""

    capture_raw_events: bool = False
    """Keep every raw upstream event on the adapter for inspection."""

    request_id: Optional[str] = None
    """Correlation id added to log records; generated per stream when unset."""

    def __post_init__(self):
        """Validate configuration after initialization."""
        if self.default_finish_reason not in CANONICAL_FINISH_REASONS:
            raise ConfigurationError(
                f"default_finish_reason must be one of {', '.join(CANONICAL_FINISH_REASONS)}, "
                f"got {self.default_finish_reason!r}"
            )

    @classmethod
    def from_dict(cls, config: Dict[str, Any]) -> "StreamingOptions":
        """Create StreamingOptions from dictionary.

        Args:
            config: Configuration dictionary

        Returns:
            StreamingOptions instance
        """
        # Filter out unknown keys
        known_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered_config = {k: v for k, v in config.items() if k in known_fields}
        return cls(**filtered_config)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StreamingOptions":
        """Create StreamingOptions from RELAY_* environment variables.

        A .env file in the working directory is loaded first when reading
        the process environment.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            StreamingOptions instance
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        config: Dict[str, Any] = {}
        if ENV_DETECT_JSON_MODE in environ:
            config["detect_json_mode"] = _parse_bool(ENV_DETECT_JSON_MODE, environ[ENV_DETECT_JSON_MODE])
        if ENV_LOG_STREAMING_METRICS in environ:
            config["log_streaming_metrics"] = _parse_bool(
                ENV_LOG_STREAMING_METRICS, environ[ENV_LOG_STREAMING_METRICS]
            )
        if ENV_CAPTURE_RAW_EVENTS in environ:
            config["capture_raw_events"] = _parse_bool(ENV_CAPTURE_RAW_EVENTS, environ[ENV_CAPTURE_RAW_EVENTS])
        if ENV_DEFAULT_FINISH_REASON in environ:
            config["default_finish_reason"] = environ[ENV_DEFAULT_FINISH_REASON].strip().lower()
        return cls(**config)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary.

        Returns:
            Configuration as dictionary
        """
        return {
            "detect_json_mode": self.detect_json_mode,
            "default_finish_reason": self.default_finish_reason,
            "measure_ttft": self.measure_ttft,
            "log_streaming_metrics": self.log_streaming_metrics,
            "capture_raw_events": self.capture_raw_events,
            "request_id": self.request_id,
        }


# Preset configurations for common use cases

DEFAULT_OPTIONS = StreamingOptions()
"""Default streaming options with minimal overhead."""

DEBUG_OPTIONS = StreamingOptions(
    log_streaming_metrics=True,
    capture_raw_events=True,
)
"""Options for debugging with metrics logging and raw event capture."""

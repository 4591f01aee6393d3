"""
Streaming constants.

Canonical finish reasons and the environment variables read by
StreamingOptions.from_env().
"""

# Canonical finish-reason taxonomy
FINISH_STOP = "stop"
FINISH_LENGTH = "length"
FINISH_TOOL_CALLS = "tool_calls"
FINISH_CONTENT_FILTER = "content_filter"
FINISH_RECITATION_FILTER = "recitation_filter"
FINISH_ERROR = "error"
FINISH_UNKNOWN = "unknown"

CANONICAL_FINISH_REASONS = (
    FINISH_STOP,
    FINISH_LENGTH,
    FINISH_TOOL_CALLS,
    FINISH_CONTENT_FILTER,
    FINISH_RECITATION_FILTER,
    FINISH_ERROR,
    FINISH_UNKNOWN,
)

# Environment variables for streaming configuration
ENV_DETECT_JSON_MODE = "RELAY_DETECT_JSON_MODE"
ENV_DEFAULT_FINISH_REASON = "RELAY_DEFAULT_FINISH_REASON"
ENV_LOG_STREAMING_METRICS = "RELAY_LOG_STREAMING_METRICS"
ENV_CAPTURE_RAW_EVENTS = "RELAY_CAPTURE_RAW_EVENTS"

TRUTHY_ENV_VALUES = {"1", "true", "yes", "on"}
FALSY_ENV_VALUES = {"0", "false", "no", "off"}

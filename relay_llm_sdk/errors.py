"""
Error taxonomy for the streaming normalization engine.

Every failure surfaced to callers is one of these types, either raised
before streaming starts or carried inside a terminal ``error`` event.
"""

from datetime import datetime, timezone
from typing import Any, Optional


class RelayError(Exception):
    """Base class for all errors raised by the Relay LLM SDK."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.timestamp = datetime.now(timezone.utc)


class ConfigurationError(RelayError):
    """Invalid SDK configuration (bad option values, malformed env settings)."""

    def __init__(self, message: str):
        super().__init__(f"Configuration Error: {message}")


class UnsupportedFeatureError(RelayError):
    """The requested capability is not implemented for this upstream.

    Raised before any streaming begins, never mid-stream.
    """

    def __init__(self, provider: str, feature: str):
        super().__init__(f"Provider '{provider}' does not support the requested feature: {feature}")
        self.provider = provider
        self.feature = feature


class ProviderAPIError(RelayError):
    """
    The upstream responded with a structured failure, or its stream broke.

    Attributes:
        provider: Provider name
        status_code: HTTP status code if applicable
        error_code: Provider-specific error code (e.g. 'rate_limit_exceeded')
        error_type: Provider-specific error type (e.g. 'overloaded_error')
        underlying_error: The original exception or payload, also chained as __cause__
        retry_after: Seconds to wait before retry if the upstream said so
        is_retryable: Whether the failure looks transient (set by ErrorMapper)
    """

    def __init__(
        self,
        message: str,
        provider: str,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        error_type: Optional[str] = None,
        underlying_error: Any = None,
        retry_after: Optional[float] = None,
    ):
        status = f"(Status {status_code}) " if status_code else ""
        code = f"[Code: {error_code}] " if error_code else ""
        super().__init__(f"[{provider}] API Error {status}{code}: {message}")
        self.detail = message
        self.provider = provider
        self.status_code = status_code
        self.error_code = error_code
        self.error_type = error_type
        self.underlying_error = underlying_error
        self.retry_after = retry_after
        self.is_retryable = False
        if isinstance(underlying_error, BaseException):
            self.__cause__ = underlying_error


class MappingError(RelayError):
    """The adapter met upstream data it could not interpret."""

    def __init__(
        self,
        message: str,
        provider: Optional[str] = None,
        context: Optional[str] = None,
        cause: Any = None,
    ):
        provider_part = f"[{provider}]" if provider else ""
        context_part = f" [Context: {context}]" if context else ""
        super().__init__(f"Mapping Error {provider_part}{context_part}: {message}")
        self.provider = provider
        self.context = context
        self.cause = cause
        if isinstance(cause, BaseException):
            self.__cause__ = cause

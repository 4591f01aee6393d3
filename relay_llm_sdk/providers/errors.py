"""
Error mapping utilities for provider stream adapters.

This module provides consistent error mapping across all providers,
converting provider-specific errors to the SDK error taxonomy. Messages
are picked in a fixed order: nested structured message, top-level
message, stringified payload, generic fallback.
"""

from collections.abc import Mapping
from typing import Any, Optional
import json

import anthropic
import httpx
import openai
from google.genai import errors as genai_errors

from ..errors import MappingError, ProviderAPIError, RelayError
from ..models.generation import ProviderType


RATE_LIMIT_PHRASES = ("rate limit", "too many requests", "quota exceeded", "too_many_requests", "resource_exhausted")


def _nested_message(payload: Any) -> Optional[str]:
    """Message from an error body shaped {"error": {"message": ...}} or {"message": ...}."""
    if not isinstance(payload, Mapping):
        return None
    nested = payload.get("error")
    if isinstance(nested, Mapping) and isinstance(nested.get("message"), str) and nested["message"]:
        return nested["message"]
    if isinstance(payload.get("message"), str) and payload["message"]:
        return payload["message"]
    return None


def _nested_field(payload: Any, name: str) -> Optional[str]:
    if not isinstance(payload, Mapping):
        return None
    nested = payload.get("error")
    if isinstance(nested, Mapping) and nested.get(name) is not None:
        return str(nested[name])
    if payload.get(name) is not None and not isinstance(payload.get(name), Mapping):
        return str(payload[name])
    return None


def _stringify(payload: Any) -> Optional[str]:
    if payload is None:
        return None
    try:
        return json.dumps(payload, default=str)
    except (TypeError, ValueError):
        return str(payload)


class ErrorMapper:
    """Maps provider-specific errors to the SDK error taxonomy."""

    # Common HTTP status codes that indicate retryable errors
    RETRYABLE_STATUS_CODES = {408, 409, 429, 500, 502, 503, 504, 529}

    @staticmethod
    def extract_message(error: Any, payload: Any = None, provider: str = "upstream") -> str:
        """
        Pick the most useful human-readable message for an error.

        Args:
            error: Exception or raw error value
            payload: Structured error body, if any
            provider: Provider name used in the generic fallback

        Returns:
            Non-empty message string
        """
        message = _nested_message(payload)
        if message:
            return message

        top_level = getattr(error, "message", None)
        if isinstance(top_level, str) and top_level:
            return top_level
        if isinstance(error, BaseException) and str(error):
            return str(error)
        if isinstance(error, str) and error:
            return error

        stringified = _stringify(payload)
        if stringified and stringified not in ("{}", "null"):
            return stringified
        if error is not None and not isinstance(error, BaseException):
            stringified = _stringify(error)
            if stringified and stringified not in ("{}", "null"):
                return stringified
        return f"Unknown {provider} API error"

    @staticmethod
    def is_retryable(error: Any) -> bool:
        """
        Determine if an error is retryable.

        Args:
            error: The exception to check

        Returns:
            bool: True if the error is retryable
        """
        status_code = getattr(error, "status_code", None)
        if isinstance(status_code, int) and status_code in ErrorMapper.RETRYABLE_STATUS_CODES:
            return True

        if isinstance(error, (httpx.TimeoutException, httpx.ConnectError, httpx.RemoteProtocolError)):
            return True
        if isinstance(error, (openai.APIConnectionError, anthropic.APIConnectionError)):
            return True

        error_msg = str(getattr(error, "message", "") or error).lower()
        return any(phrase in error_msg for phrase in RATE_LIMIT_PHRASES)

    @staticmethod
    def get_retry_after(error: Any) -> Optional[float]:
        """
        Extract retry-after value from error if available.

        Args:
            error: The exception to check

        Returns:
            Optional[float]: Seconds to wait before retry, or None
        """
        response = getattr(error, "response", None)
        headers = getattr(response, "headers", None)
        if headers is not None:
            retry_after = headers.get("retry-after")
            if retry_after:
                try:
                    return float(retry_after)
                except ValueError:
                    pass
        return None

    @staticmethod
    def _finish(provider_error: ProviderAPIError, original: Any) -> ProviderAPIError:
        provider_error.is_retryable = (
            provider_error.status_code in ErrorMapper.RETRYABLE_STATUS_CODES
            or ErrorMapper.is_retryable(original if isinstance(original, BaseException) else provider_error)
        )
        if provider_error.retry_after is None and isinstance(original, BaseException):
            provider_error.retry_after = ErrorMapper.get_retry_after(original)
        return provider_error

    @staticmethod
    def map_stainless_error(error: Exception, provider: ProviderType) -> ProviderAPIError:
        """
        Map errors from Stainless-generated SDKs (openai, anthropic, groq).

        These carry ``status_code`` (status errors only), ``body`` and, for
        the OpenAI family, ``code`` and ``type``.
        """
        body = getattr(error, "body", None)
        status_code = getattr(error, "status_code", None)
        error_code = getattr(error, "code", None) or _nested_field(body, "code")
        error_type = getattr(error, "type", None) or _nested_field(body, "type")
        provider_error = ProviderAPIError(
            message=ErrorMapper.extract_message(error, body, provider.value),
            provider=provider.value,
            status_code=status_code if isinstance(status_code, int) else None,
            error_code=str(error_code) if error_code is not None else None,
            error_type=str(error_type) if error_type is not None else None,
            underlying_error=error,
        )
        return ErrorMapper._finish(provider_error, error)

    @staticmethod
    def map_openai_error(error: Exception) -> RelayError:
        """
        Map OpenAI-specific errors to the SDK taxonomy.

        Args:
            error: The OpenAI exception

        Returns:
            ProviderAPIError with appropriate metadata
        """
        return ErrorMapper.wrap(error, ProviderType.OPENAI)

    @staticmethod
    def map_anthropic_error(error: Exception) -> RelayError:
        """
        Map Anthropic-specific errors to the SDK taxonomy.

        Args:
            error: The Anthropic exception

        Returns:
            ProviderAPIError with appropriate metadata
        """
        return ErrorMapper.wrap(error, ProviderType.ANTHROPIC)

    @staticmethod
    def map_groq_error(error: Exception) -> RelayError:
        """
        Map Groq errors to the SDK taxonomy.

        Groq's SDK shares the Stainless error shape, so it is matched by
        its attributes rather than its classes.
        """
        return ErrorMapper.wrap(error, ProviderType.GROQ)

    @staticmethod
    def map_google_error(error: Exception) -> RelayError:
        """
        Map google-genai errors to the SDK taxonomy.

        ``google.genai.errors.APIError`` carries the HTTP status in ``code``,
        the RPC status name in ``status`` and the response body in ``details``.
        """
        if not isinstance(error, genai_errors.APIError):
            return ErrorMapper.wrap(error, ProviderType.GOOGLE)
        details = getattr(error, "details", None)
        status_code = getattr(error, "code", None)
        provider_error = ProviderAPIError(
            message=ErrorMapper.extract_message(error, details, ProviderType.GOOGLE.value),
            provider=ProviderType.GOOGLE.value,
            status_code=status_code if isinstance(status_code, int) else None,
            error_code=getattr(error, "status", None),
            error_type=type(error).__name__,
            underlying_error=error,
        )
        return ErrorMapper._finish(provider_error, error)

    @staticmethod
    def from_payload(payload: Any, provider: ProviderType, status_code: Optional[int] = None) -> ProviderAPIError:
        """
        Build an error from an error payload found inside the stream itself.

        Args:
            payload: Error body, e.g. {"type": "error", "error": {...}}
            provider: Provider that sent it
            status_code: HTTP-equivalent status, if known

        Returns:
            ProviderAPIError with the payload as its underlying error
        """
        message = ErrorMapper.extract_message(None, payload, provider.value)
        provider_error = ProviderAPIError(
            message=message,
            provider=provider.value,
            status_code=status_code,
            error_code=_nested_field(payload, "code"),
            error_type=_nested_field(payload, "type"),
            underlying_error=payload,
        )
        provider_error.is_retryable = (
            (status_code in ErrorMapper.RETRYABLE_STATUS_CODES)
            or provider_error.error_type in ("overloaded_error", "rate_limit_error", "api_error")
            or any(phrase in message.lower() for phrase in RATE_LIMIT_PHRASES)
        )
        return provider_error

    @staticmethod
    def wrap(error: Any, provider: ProviderType) -> RelayError:
        """
        Wrap any failure into the SDK taxonomy.

        RelayErrors pass through untouched. Known SDK errors keep their
        status, code and type. Anything else becomes a ProviderAPIError
        without status, so transport failures and malformed streams alike
        surface as one terminal error.

        Args:
            error: Exception (or non-exception value) that ended the stream
            provider: Provider of the stream

        Returns:
            RelayError with the original error retained as cause
        """
        if isinstance(error, RelayError):
            return error

        if provider == ProviderType.GOOGLE and isinstance(error, genai_errors.APIError):
            return ErrorMapper.map_google_error(error)

        if isinstance(error, (openai.APIError, anthropic.APIError)):
            return ErrorMapper.map_stainless_error(error, provider)

        # Duck-typed Stainless shape (groq and other OpenAI-compatible SDKs)
        if isinstance(error, Exception) and (
            isinstance(getattr(error, "status_code", None), int) or isinstance(getattr(error, "body", None), Mapping)
        ):
            return ErrorMapper.map_stainless_error(error, provider)

        if isinstance(error, (json.JSONDecodeError, UnicodeDecodeError)):
            return MappingError(
                f"Could not decode upstream event: {error}",
                provider=provider.value,
                context="decode",
                cause=error,
            )

        if isinstance(error, BaseException):
            provider_error = ProviderAPIError(
                message=ErrorMapper.extract_message(error, None, provider.value),
                provider=provider.value,
                error_type=type(error).__name__,
                underlying_error=error,
            )
            return ErrorMapper._finish(provider_error, error)

        # Non-exception values (e.g. error payloads yielded as events)
        return ErrorMapper.from_payload(error, provider)

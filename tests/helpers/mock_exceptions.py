"""Mock exception classes for testing provider error handling."""

from typing import Any, Dict, Optional


class MockHTTPResponse:
    """Mock HTTP response for exception testing."""

    def __init__(self, status_code: int, headers: Optional[Dict[str, str]] = None):
        self.status_code = status_code
        self.headers = headers or {}


class MockGroqError(Exception):
    """Mock of a Stainless-style error from an SDK we do not import (groq)."""

    def __init__(self, message: str, status_code: Optional[int] = None,
                 body: Optional[Dict[str, Any]] = None, headers: Optional[Dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.body = body
        self.response = MockHTTPResponse(status_code or 0, headers)


class MockGroqRateLimitError(MockGroqError):
    """Mock groq RateLimitError."""

    def __init__(self, message: str = "Rate limit reached for model", retry_after: int = 7):
        super().__init__(
            message,
            status_code=429,
            body={"error": {"message": message, "type": "tokens", "code": "rate_limit_exceeded"}},
            headers={"retry-after": str(retry_after)},
        )


class MockGroqAuthenticationError(MockGroqError):
    """Mock groq AuthenticationError."""

    def __init__(self, message: str = "Invalid API Key"):
        super().__init__(
            message,
            status_code=401,
            body={"error": {"message": message, "type": "invalid_request_error", "code": "invalid_api_key"}},
        )

"""
Structured error handling for the Cloud Inference service.

Provides custom exceptions and standardized error response models
for consistent API error responses.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Client errors (4xx)
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_REQUEST = "INVALID_REQUEST"

    # LLM errors (5xx)
    LLM_PROVIDER_ERROR = "LLM_PROVIDER_ERROR"
    LLM_TRANSPORT_ERROR = "LLM_TRANSPORT_ERROR"
    LLM_CLIENT_ERROR = "LLM_CLIENT_ERROR"
    LLM_EMPTY_RESPONSE = "LLM_EMPTY_RESPONSE"
    LLM_RESPONSE_INVALID = "LLM_RESPONSE_INVALID"
    LLM_TIMEOUT = "LLM_TIMEOUT"
    LLM_RATE_LIMITED = "LLM_RATE_LIMITED"

    # Server errors (5xx)
    INTERNAL_ERROR = "INTERNAL_ERROR"


class ErrorResponse(BaseModel):
    """
    Standardized error response format.

    All API errors return this structure for consistent client handling.
    """

    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional error details (upstream status, raw content, etc.)",
    )
    request_id: Optional[str] = Field(
        None,
        description="Request ID for tracing",
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the error occurred",
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": "Upstream returned server error 503",
                "error_code": "LLM_PROVIDER_ERROR",
                "details": {"status_code": 503, "body": "Service Unavailable"},
                "request_id": "550e8400-e29b-41d4-a716-446655440000",
                "timestamp": "2024-01-15T10:30:00Z",
            }
        }
    }


# Custom Exceptions


class InferenceBaseError(Exception):
    """Base exception for all service errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(InferenceBaseError):
    """Raised when request validation fails."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.VALIDATION_ERROR,
            details=details,
            status_code=400,
        )


class InvalidRequestError(InferenceBaseError):
    """Raised when the request body cannot be read (e.g. corrupt gzip)."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.INVALID_REQUEST,
            details=details,
            status_code=400,
        )


class LLMProviderError(InferenceBaseError):
    """Raised when the LLM provider fails in a way not covered below."""

    def __init__(self, message: str, provider: Optional[str] = None):
        super().__init__(
            message=message,
            error_code=ErrorCode.LLM_PROVIDER_ERROR,
            details={"provider": provider} if provider else None,
            status_code=503,
        )


class LLMTransportError(InferenceBaseError):
    """Raised when no response could be obtained from the provider."""

    def __init__(
        self,
        message: str,
        url: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.LLM_TRANSPORT_ERROR,
        status_code: int = 503,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            details={"url": url} if url else None,
            status_code=status_code,
        )


class LLMTimeoutError(LLMTransportError):
    """Raised when a single LLM request times out."""

    def __init__(self, timeout_seconds: float, url: Optional[str] = None):
        self.timeout_seconds = timeout_seconds
        super().__init__(
            message=f"LLM request timed out after {timeout_seconds} seconds",
            url=url,
            error_code=ErrorCode.LLM_TIMEOUT,
            status_code=504,
        )


class LLMUpstreamStatusError(InferenceBaseError):
    """
    Raised when the provider answers with a non-200 status.

    If the body decoded as a structured API error (``{"message", "code"}``),
    ``api_message`` and ``api_code`` are populated; otherwise only the
    status code and raw body are known.
    """

    def __init__(
        self,
        upstream_status: int,
        body: str,
        api_message: Optional[str] = None,
        api_code: Optional[int] = None,
        error_code: ErrorCode = ErrorCode.LLM_PROVIDER_ERROR,
        status_code: int = 502,
    ):
        self.upstream_status = upstream_status
        self.body = body
        self.api_message = api_message
        self.api_code = api_code

        if api_message is not None:
            message = f"API error {api_code}: {api_message}"
        elif body:
            message = f"unexpected status code: {upstream_status}, response: {body}"
        else:
            message = f"unexpected status code: {upstream_status}"

        super().__init__(
            message=message,
            error_code=error_code,
            details={
                "upstream_status": upstream_status,
                "body": body,
                "api_message": api_message,
                "api_code": api_code,
            },
            status_code=status_code,
        )


class LLMServerError(LLMUpstreamStatusError):
    """Raised for 5xx responses once the retry budget is spent."""

    def __init__(self, upstream_status: int, body: str, **kwargs):
        super().__init__(
            upstream_status,
            body,
            error_code=ErrorCode.LLM_PROVIDER_ERROR,
            status_code=503,
            **kwargs,
        )


class LLMClientError(LLMUpstreamStatusError):
    """Raised for 4xx responses. Never retried."""

    def __init__(
        self,
        upstream_status: int,
        body: str,
        error_code: ErrorCode = ErrorCode.LLM_CLIENT_ERROR,
        status_code: int = 502,
        **kwargs,
    ):
        super().__init__(
            upstream_status,
            body,
            error_code=error_code,
            status_code=status_code,
            **kwargs,
        )


class LLMRateLimitedError(LLMClientError):
    """Raised when the LLM provider rate limits the request (429)."""

    def __init__(self, upstream_status: int, body: str, **kwargs):
        super().__init__(
            upstream_status,
            body,
            error_code=ErrorCode.LLM_RATE_LIMITED,
            status_code=429,
            **kwargs,
        )


class LLMResponseInvalidError(InferenceBaseError):
    """Raised when LLM response cannot be parsed or validated."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: ErrorCode = ErrorCode.LLM_RESPONSE_INVALID,
    ):
        super().__init__(
            message=message,
            error_code=error_code,
            details=details,
            status_code=502,
        )


class LLMEmptyChoicesError(LLMResponseInvalidError):
    """Raised when the provider returns 200 with no choices."""

    def __init__(self, model: Optional[str] = None):
        super().__init__(
            message="no choices returned from model",
            details={"model": model} if model else None,
            error_code=ErrorCode.LLM_EMPTY_RESPONSE,
        )


class LLMMalformedOutputError(LLMResponseInvalidError):
    """Raised when classification output is not the expected JSON."""

    def __init__(self, message: str, raw_content: str, error: Optional[str] = None):
        self.raw_content = raw_content
        super().__init__(
            message=message,
            details={"error": error, "raw_content": raw_content},
        )

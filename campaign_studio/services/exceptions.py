from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    QUOTA_EXCEEDED = "quota_exceeded"
    UPSTREAM_FAILURE = "upstream_failure"
    UPSTREAM_MALFORMED = "upstream_malformed"


class ServiceError(Exception):
    """Base exception for service layer failures."""

    kind: ErrorKind = ErrorKind.UPSTREAM_FAILURE
    status_code: int = 500

    def __init__(self, message: str, *, cause: Exception | None = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class InvalidCampaignInput(ServiceError):
    """Raised before any generation when required request fields are empty."""

    kind = ErrorKind.INVALID_INPUT
    status_code = 400


class QuotaExceededError(ServiceError):
    """Raised by a text generator when the configured credential is out of quota."""

    kind = ErrorKind.QUOTA_EXCEEDED
    status_code = 429


class UpstreamServiceError(ServiceError):
    """Raised when the text-generation provider fails for any non-quota reason."""

    kind = ErrorKind.UPSTREAM_FAILURE

    def __init__(
        self,
        message: str,
        upstream_status: int | None = None,
        *,
        cause: Exception | None = None,
    ):
        super().__init__(message, cause=cause)
        self.upstream_status = upstream_status


class UpstreamMalformedError(ServiceError):
    """Raised when the provider reply is not a usable campaign JSON object."""

    kind = ErrorKind.UPSTREAM_MALFORMED

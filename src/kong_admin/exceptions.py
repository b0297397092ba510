"""Kong Admin API exception taxonomy.

Every failure surfaced by the SDK is a :class:`KongAPIError` subclass whose
``kind`` attribute names a stable :class:`ErrorKind`, so callers can branch on
the classification without caring about the concrete class.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorKind(StrEnum):
    """Stable classification of Kong Admin API failures."""

    BAD_REQUEST = "bad-request"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not-found"
    METHOD_NOT_ALLOWED = "method-not-allowed"
    CONFLICT = "conflict"
    RATE_LIMITED = "rate-limited"
    SERVER = "server"
    DECODE = "decode"
    TRANSPORT = "transport"
    OTHER = "other"


class KongAPIError(Exception):
    """Base exception for Kong Admin API errors.

    Attributes:
        message: Human-readable error message (the server's ``message`` field
            when the body carried one).
        status_code: HTTP status code (None when no response was received).
        response_body: Decoded response body, if it was valid JSON.
        raw_body: Raw response bytes, if a response was received.
        endpoint: The API endpoint that was called.
        details: Extra structured information (body ``details``, retry hints).
    """

    kind: ErrorKind = ErrorKind.OTHER

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response_body: Any = None,
        endpoint: str | None = None,
        raw_body: bytes | None = None,
        details: Any = None,
    ) -> None:
        """Initialize KongAPIError.

        Args:
            message: Human-readable error message.
            status_code: HTTP status code from Kong API.
            response_body: Decoded response body from Kong API.
            endpoint: The API endpoint that was called.
            raw_body: Undecoded response body.
            details: Extra structured error information.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response_body = response_body
        self.endpoint = endpoint
        self.raw_body = raw_body
        self.details = details

    def __str__(self) -> str:
        """Return string representation of the error."""
        if self.status_code:
            text = f'HTTP status {self.status_code} (message: "{self.message}")'
        else:
            text = self.message
        if self.endpoint:
            text = f"{text} [endpoint: {self.endpoint}]"
        return text


class KongBadRequestError(KongAPIError):
    """Exception raised when a call violates a client-side invariant.

    Raised before any request is issued, e.g. for an empty identifier, an
    unknown credential kind, or an update without an ID.
    """

    kind = ErrorKind.BAD_REQUEST

    def __init__(
        self,
        message: str = "Invalid request",
        status_code: int | None = None,
        response_body: Any = None,
        endpoint: str | None = None,
        raw_body: bytes | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            response_body=response_body,
            endpoint=endpoint,
            raw_body=raw_body,
            details=details,
        )


class KongValidationError(KongBadRequestError):
    """Exception raised when Kong rejects a request with HTTP 400.

    This includes schema violations, missing required fields, and invalid
    field values.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        validation_errors: dict[str, Any] | None = None,
        response_body: Any = None,
        endpoint: str | None = None,
        raw_body: bytes | None = None,
        details: Any = None,
    ) -> None:
        """Initialize KongValidationError.

        Args:
            message: Human-readable error message.
            validation_errors: Field-level errors reported by Kong.
            response_body: Decoded response body from Kong API.
            endpoint: The API endpoint that was called.
            raw_body: Undecoded response body.
            details: Extra structured error information.
        """
        super().__init__(
            message=message,
            status_code=400,
            response_body=response_body,
            endpoint=endpoint,
            raw_body=raw_body,
            details=details,
        )
        self.validation_errors = validation_errors or {}


class KongAuthError(KongAPIError):
    """Exception raised when Kong rejects the admin credentials (HTTP 401)."""

    kind = ErrorKind.UNAUTHORIZED

    def __init__(
        self,
        message: str = "Authentication to Kong Admin API failed",
        status_code: int = 401,
        response_body: Any = None,
        endpoint: str | None = None,
        raw_body: bytes | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=status_code,
            response_body=response_body,
            endpoint=endpoint,
            raw_body=raw_body,
            details=details,
        )


class KongForbiddenError(KongAuthError):
    """Exception raised when the admin is authenticated but not allowed (HTTP 403)."""

    kind = ErrorKind.FORBIDDEN

    def __init__(
        self,
        message: str = "Access to Kong Admin API resource forbidden",
        response_body: Any = None,
        endpoint: str | None = None,
        raw_body: bytes | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=403,
            response_body=response_body,
            endpoint=endpoint,
            raw_body=raw_body,
            details=details,
        )


class KongNotFoundError(KongAPIError):
    """Exception raised when a Kong entity is not found (HTTP 404).

    Attributes:
        resource_type: Type of resource that wasn't found, when known.
        resource_id: ID or name of the resource, when known.
    """

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self,
        resource_type: str | None = None,
        resource_id: str | None = None,
        message: str | None = None,
        response_body: Any = None,
        endpoint: str | None = None,
        raw_body: bytes | None = None,
        details: Any = None,
    ) -> None:
        """Initialize KongNotFoundError.

        Args:
            resource_type: Type of resource (e.g., "service", "route").
            resource_id: ID or name of the resource.
            message: Custom error message. Auto-generated if not provided.
            response_body: Decoded response body from Kong API.
            endpoint: The API endpoint that was called.
            raw_body: Undecoded response body.
            details: Extra structured error information.
        """
        if message is None:
            if resource_type and resource_id:
                message = f"{resource_type.capitalize()} '{resource_id}' not found"
            else:
                message = "Resource not found"
        super().__init__(
            message=message,
            status_code=404,
            response_body=response_body,
            endpoint=endpoint,
            raw_body=raw_body,
            details=details,
        )
        self.resource_type = resource_type
        self.resource_id = resource_id


class KongDBLessWriteError(KongAPIError):
    """Exception raised when attempting writes against a DB-less Kong node.

    DB-less nodes only accept configuration through ``POST /config``.
    """

    kind = ErrorKind.METHOD_NOT_ALLOWED

    def __init__(
        self,
        message: str = (
            "Cannot write to Kong in DB-less mode. "
            "Use declarative configuration (POST /config) instead."
        ),
        response_body: Any = None,
        endpoint: str | None = None,
        raw_body: bytes | None = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=405,
            response_body=response_body,
            endpoint=endpoint,
            raw_body=raw_body,
        )


class KongConflictError(KongAPIError):
    """Exception raised on HTTP 409 (duplicate natural key, entity still referenced)."""

    kind = ErrorKind.CONFLICT

    def __init__(
        self,
        message: str = "Conflict",
        response_body: Any = None,
        endpoint: str | None = None,
        raw_body: bytes | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=409,
            response_body=response_body,
            endpoint=endpoint,
            raw_body=raw_body,
            details=details,
        )


class KongRateLimitError(KongAPIError):
    """Exception raised on HTTP 429.

    Attributes:
        retry_after: Seconds the server asked the caller to wait, if given.
    """

    kind = ErrorKind.RATE_LIMITED

    def __init__(
        self,
        message: str = "Too many requests",
        retry_after: int | None = None,
        response_body: Any = None,
        endpoint: str | None = None,
        raw_body: bytes | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(
            message=message,
            status_code=429,
            response_body=response_body,
            endpoint=endpoint,
            raw_body=raw_body,
            details=details,
        )
        self.retry_after = retry_after


class KongServerError(KongAPIError):
    """Exception raised when Kong answers with a 5xx status."""

    kind = ErrorKind.SERVER


class KongDecodeError(KongAPIError):
    """Exception raised when a successful response body cannot be decoded."""

    kind = ErrorKind.DECODE


class KongConnectionError(KongAPIError):
    """Exception raised when no HTTP response was received.

    This includes network errors, timeouts, TLS failures, and DNS resolution
    failures.
    """

    kind = ErrorKind.TRANSPORT

    def __init__(
        self,
        message: str = "Failed to connect to Kong Admin API",
        endpoint: str | None = None,
        original_error: BaseException | None = None,
    ) -> None:
        """Initialize KongConnectionError.

        Args:
            message: Human-readable error message.
            endpoint: The API endpoint that was attempted.
            original_error: The original exception that caused this error.
        """
        super().__init__(message=message, endpoint=endpoint)
        self.original_error = original_error


class KongCancelledError(KongConnectionError):
    """Exception raised when a request context is cancelled or its deadline passes."""

    def __init__(
        self,
        message: str = "Request cancelled",
        endpoint: str | None = None,
    ) -> None:
        super().__init__(message=message, endpoint=endpoint)


def _kind_of(error: BaseException) -> ErrorKind | None:
    return error.kind if isinstance(error, KongAPIError) else None


def is_not_found(error: BaseException) -> bool:
    """Return True if the error is a Kong 404."""
    return _kind_of(error) == ErrorKind.NOT_FOUND


def is_conflict(error: BaseException) -> bool:
    """Return True if the error is a Kong 409."""
    return _kind_of(error) == ErrorKind.CONFLICT


def is_unauthorized(error: BaseException) -> bool:
    """Return True if the error is a Kong 401."""
    return _kind_of(error) == ErrorKind.UNAUTHORIZED


def is_forbidden(error: BaseException) -> bool:
    """Return True if the error is a Kong 403."""
    return _kind_of(error) == ErrorKind.FORBIDDEN


def is_transport_error(error: BaseException) -> bool:
    """Return True if no HTTP response was received (network, timeout, cancellation)."""
    return _kind_of(error) == ErrorKind.TRANSPORT

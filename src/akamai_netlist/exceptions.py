"""Akamai Network Lists exceptions.

Custom exceptions for credential loading and Network Lists API operations.

Exception Hierarchy:
    NetlistError (base for all tool exceptions)
    ├── CredentialsError (edgerc/environment credential failures)
    └── NetworkListAPIError (any failed API call)
        ├── NetworkListAuthError (401/403)
        ├── NetworkListNotFoundError (404)
        ├── NetworkListValidationError (400/422)
        ├── NetworkListConflictError (409)
        └── NetworkListRateLimitError (429)
"""

from __future__ import annotations

from typing import Any


class NetlistError(Exception):
    """Base exception for all akamai-netlist errors.

    Attributes:
        message: Human-readable error message.
        details: Additional context about the error.
        error_code: Machine-readable error code (optional).
    """

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            details: Additional context as key-value pairs.
            error_code: Machine-readable error code.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.error_code = error_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for structured output.

        Returns:
            Dictionary with error details suitable for JSON serialization.
        """
        result: dict[str, Any] = {
            "error": self.__class__.__name__,
            "message": self.message,
        }
        if self.error_code:
            result["code"] = self.error_code
        if self.details:
            result["details"] = self.details
        return result


class CredentialsError(NetlistError):
    """Credential loading error.

    Raised when the edgerc file, the requested section or the environment
    cannot provide a complete set of EdgeGrid credentials.

    Example:
        >>> raise CredentialsError(
        ...     "Cannot load credentials",
        ...     details={"section": "default"},
        ... )
    """

    def __init__(
        self,
        message: str = "Cannot load credentials",
        *,
        details: dict[str, Any] | None = None,
        error_code: str | None = None,
    ) -> None:
        super().__init__(message, details=details, error_code=error_code or "CREDENTIALS_ERROR")


class NetworkListAPIError(NetlistError):
    """Base exception for Network Lists API errors.

    Akamai answers failures with an RFC 7807 problem document. Its fields
    are kept so the message can be surfaced to the user verbatim.

    Attributes:
        status: HTTP status code (if available)
        title: Problem title from the response
        detail: Problem detail from the response
        instance: Problem instance identifier (useful for Akamai support)
        response: Raw response body (if available)
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        title: str | None = None,
        detail: str | None = None,
        instance: str | None = None,
        response: dict[str, Any] | str | None = None,
    ) -> None:
        """Initialize NetworkListAPIError.

        Args:
            message: Error message
            status: HTTP status code
            title: Problem title
            detail: Problem detail
            instance: Problem instance identifier
            response: Raw response body
        """
        details: dict[str, Any] = {}
        if status is not None:
            details["status"] = status
        if instance:
            details["instance"] = instance
        super().__init__(message, details=details, error_code=str(status) if status else None)
        self.status = status
        self.title = title
        self.detail = detail
        self.instance = instance
        self.response = response

    def __str__(self) -> str:
        """Return string representation."""
        parts = [self.message]
        if self.status:
            parts.append(f"(status: {self.status})")
        if self.detail and self.detail != self.message:
            parts.append(f"Details: {self.detail}")
        return " ".join(parts)


class NetworkListAuthError(NetworkListAPIError):
    """Authentication or authorization error.

    Raised when the EdgeGrid credentials are rejected or the API client
    lacks access to network lists (or to the switched account).
    """


class NetworkListNotFoundError(NetworkListAPIError):
    """Network list or activation not found."""


class NetworkListValidationError(NetworkListAPIError):
    """Request rejected by the service's validation.

    Raised for malformed elements, invalid list types or bad names.
    """


class NetworkListConflictError(NetworkListAPIError):
    """Conflict error.

    Raised when an operation conflicts with existing state, e.g. deleting
    a list that is still active, or updating with a stale sync point.
    """


class NetworkListRateLimitError(NetworkListAPIError):
    """Rate limit exceeded error.

    Attributes:
        retry_after: Seconds to wait before retrying (if provided)
    """

    def __init__(
        self,
        message: str = "Rate limit exceeded",
        retry_after: int | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize rate limit error.

        Args:
            message: Error message
            retry_after: Seconds to wait before retrying
            **kwargs: Additional arguments for base class
        """
        super().__init__(message, **kwargs)
        self.retry_after = retry_after

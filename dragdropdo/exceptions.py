"""Exception classes for the D3 business API client."""

from typing import Any, Optional


class D3ClientError(Exception):
    """Base error for every failure raised by the client.

    Transport and parse failures that are not classified further are raised
    as this class directly.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[int] = None,
        details: Any = None,
    ):
        """Initialize D3ClientError.

        Args:
            message: Human readable description of the failure.
            status_code: HTTP status returned by the service, if any.
            code: Service defined numeric error code, if any.
            details: Raw error payload returned by the service, if any.
        """
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details


class D3ValidationError(D3ClientError):
    """Raised when caller supplied arguments are invalid."""


class D3UploadError(D3ClientError):
    """Raised when any step of the multipart upload fails."""


class D3APIError(D3ClientError):
    """Raised when the service answers a request with a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        code: Optional[int] = None,
        details: Any = None,
    ):
        """Initialize D3APIError.

        Args:
            message: Error message extracted from the response body.
            status_code: HTTP status of the response.
            code: Service defined numeric error code, when parseable.
            details: Decoded error body.
        """
        super().__init__(message, status_code=status_code, code=code, details=details)

    def __str__(self) -> str:
        return f"{self.message} (status {self.status_code})"


class D3TimeoutError(D3ClientError):
    """Raised when polling does not reach a terminal state in time."""

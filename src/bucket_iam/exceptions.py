"""Custom exception classes for the bucket IAM client.

Two kinds of failure exist:
- Argument errors, raised synchronously before any request is sent
- Transport errors, raised by the request executor and passed through the
  IAM accessor untouched
"""

from __future__ import annotations

from typing import Any


class BucketIamError(Exception):
    """Base exception class for all bucket IAM errors."""

    pass


class InvalidArgumentError(BucketIamError):
    """Raised when an operation is called with an argument it cannot use."""

    pass


class TransportError(BucketIamError):
    """Raised when a request could not be completed.

    Args:
        message: Human readable description of the failure
        response: Raw HTTP response, if one was received
        status_code: HTTP status code, if one was received
    """

    def __init__(
        self,
        message: str,
        *,
        response: Any | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.response = response
        self.status_code = status_code


class ApiError(TransportError):
    """Raised when the service answers with a non-success status."""

    def __init__(
        self,
        message: str,
        *,
        response: Any | None = None,
        status_code: int | None = None,
        body: Any | None = None,
    ) -> None:
        super().__init__(message, response=response, status_code=status_code)
        self.body = body


class InvalidResponseError(TransportError):
    """Raised when a success response does not have the expected shape."""

    pass

r"""Classified errors raised by the request engine.

Every failed call surfaces exactly one subclass of ``ApiError``. The
``kind`` attribute mirrors the subclass so calling code can branch either
with ``except`` clauses or by inspecting ``error.kind``.
"""

from __future__ import annotations

__all__ = [
    "ApiError",
    "ClientError",
    "ErrorKind",
    "NetworkError",
    "RequestCancelledError",
    "RequestTimeoutError",
    "ResponseValidationError",
    "ServerError",
]

from enum import Enum
from typing import Any


class ErrorKind(str, Enum):
    """Kinds of terminal failure a call can end with."""

    NETWORK = "network"
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    VALIDATION_ERROR = "validation_error"


class ApiError(Exception):
    """Base class of all errors raised by the request engine.

    Args:
        message: Human-readable description of the failure.
        method: The HTTP method of the failed call.
        url: The full URL of the failed call.
        status_code: The HTTP status code of the last response, if any.
        retryable: Whether the failure class was eligible for retry. This is
            informational only: by the time the error is raised, any
            retries have already been spent.
        attempts: Number of attempts that were made.
        response_body: The parsed (or raw) body of the last response, if any.

    Example:
        ```pycon
        >>> from farmclient.exceptions import ServerError
        >>> error = ServerError(
        ...     "boom", method="GET", url="https://api.example.com/farms", status_code=503
        ... )
        >>> error.kind.value
        'server_error'
        >>> error.status_code
        503

        ```
    """

    kind: ErrorKind

    def __init__(
        self,
        message: str,
        *,
        method: str | None = None,
        url: str | None = None,
        status_code: int | None = None,
        retryable: bool = False,
        attempts: int = 1,
        response_body: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.method = method
        self.url = url
        self.status_code = status_code
        self.retryable = retryable
        self.attempts = attempts
        self.response_body = response_body

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(kind={self.kind.value!r}, status_code={self.status_code}, "
            f"message={self.message!r})"
        )


class NetworkError(ApiError):
    """No response was received (connection refused, DNS failure, ...)."""

    kind = ErrorKind.NETWORK


class RequestTimeoutError(ApiError):
    """The deadline of the final attempt elapsed before a response arrived."""

    kind = ErrorKind.TIMEOUT


class RequestCancelledError(ApiError):
    """The caller fired the cancellation token."""

    kind = ErrorKind.CANCELLED


class ClientError(ApiError):
    """The server answered with a non-retryable or exhausted 4xx status."""

    kind = ErrorKind.CLIENT_ERROR


class ServerError(ApiError):
    """The server answered with a 5xx status and retries are exhausted."""

    kind = ErrorKind.SERVER_ERROR


class ResponseValidationError(ApiError):
    """A successful response did not match the expected schema.

    Args:
        message: Human-readable description of the mismatch.
        issues: One mapping per problem, each with ``loc``, ``msg`` and
            ``type`` keys.
        **kwargs: Forwarded to ``ApiError``.
    """

    kind = ErrorKind.VALIDATION_ERROR

    def __init__(
        self, message: str, *, issues: list[dict[str, Any]] | None = None, **kwargs: Any
    ) -> None:
        super().__init__(message, **kwargs)
        self.issues = issues or []

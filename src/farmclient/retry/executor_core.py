r"""Conversion of the last attempt outcome into a classified error."""

from __future__ import annotations

__all__ = ["create_error"]

from typing import TYPE_CHECKING

from farmclient.core.http_logic import error_message
from farmclient.core.outcome import Cancelled, HttpFailure, NetworkFailure, TimeoutFailure
from farmclient.exceptions import (
    ApiError,
    ClientError,
    NetworkError,
    RequestCancelledError,
    RequestTimeoutError,
    ServerError,
)

if TYPE_CHECKING:
    from farmclient.core.config import RetryPolicy
    from farmclient.core.descriptor import RequestDescriptor
    from farmclient.core.outcome import AttemptOutcome


def create_error(
    descriptor: RequestDescriptor,
    outcome: AttemptOutcome,
    attempts: int,
    policy: RetryPolicy,
) -> ApiError:
    """Create the classified error of a failed call.

    Args:
        descriptor: The descriptor of the call.
        outcome: The outcome of the last attempt.
        attempts: The number of attempts made.
        policy: The retry policy, used to tell whether the failure was
            retry-eligible.

    Returns:
        The error to raise. The transport exception, if any, is attached
        as ``__cause__``.

    Raises:
        TypeError: If ``outcome`` is a ``Success``.

    Example:
        ```pycon
        >>> from farmclient.core.config import RetryPolicy
        >>> from farmclient.core.descriptor import RequestDescriptor
        >>> from farmclient.core.outcome import HttpFailure
        >>> from farmclient.retry.executor_core import create_error
        >>> descriptor = RequestDescriptor(
        ...     method="GET", path="/farms/1", url="https://api.example.com/farms/1"
        ... )
        >>> error = create_error(
        ...     descriptor, HttpFailure(404, {"message": "Farm not found"}), 1, RetryPolicy()
        ... )
        >>> type(error).__name__, error.status_code, error.message, error.retryable
        ('ClientError', 404, 'Farm not found', False)

        ```
    """
    context = {"method": descriptor.method, "url": descriptor.url, "attempts": attempts}
    if isinstance(outcome, Cancelled):
        msg = f"{descriptor.method} request to {descriptor.url} was cancelled"
        if outcome.reason:
            msg = f"{msg}: {outcome.reason}"
        return RequestCancelledError(msg, **context)
    if isinstance(outcome, TimeoutFailure):
        error: ApiError = RequestTimeoutError(
            f"Request timeout after {outcome.timeout}s ({attempts} attempts)",
            status_code=outcome.status_code,
            retryable=True,
            **context,
        )
        error.__cause__ = outcome.cause
        return error
    if isinstance(outcome, NetworkFailure):
        error = NetworkError(
            f"{descriptor.method} request to {descriptor.url} failed after "
            f"{attempts} attempts: {outcome.cause}",
            retryable=True,
            **context,
        )
        error.__cause__ = outcome.cause
        return error
    if isinstance(outcome, HttpFailure):
        error_cls = ServerError if outcome.status_code >= 500 else ClientError
        return error_cls(
            error_message(descriptor.method, descriptor.path, outcome.status_code, outcome.body),
            status_code=outcome.status_code,
            retryable=outcome.status_code in policy.retryable_status_codes,
            response_body=outcome.body,
            **context,
        )
    msg = f"cannot create an error from {outcome!r}"
    raise TypeError(msg)

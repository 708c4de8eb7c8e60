r"""Snapshots handed to the lifecycle callbacks of ``ClientConfig``.

Four hooks observe a call: ``on_request`` fires before each attempt,
``on_retry`` before each backoff sleep, and exactly one of
``on_success`` or ``on_failure`` when the call settles. Hooks run
inline in the retry loop and receive frozen snapshots, so they cannot
alter the call state. An exception raised by a hook is not caught: it
propagates out of the call.

Example:
    ```pycon
    >>> from farmclient.callbacks import RetryInfo
    >>> from farmclient.core.config import ClientConfig
    >>> def warn_on_retry(info: RetryInfo) -> None:
    ...     print(f"{info.method} {info.url}: attempt {info.attempt} in {info.wait_time}s")
    ...
    >>> config = ClientConfig(base_url="https://api.example.com", on_retry=warn_on_retry)

    ```
"""

from __future__ import annotations

__all__ = ["CallInfo", "FailureInfo", "RequestInfo", "ResponseInfo", "RetryInfo"]

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class CallInfo:
    """Fields shared by every callback payload.

    Attributes:
        url: Full URL of the call, query string included.
        method: Upper-case HTTP method.
        attempt: 1-based number of the attempt the payload refers to.
        max_retries: The ``RetryPolicy.max_retries`` in effect.
    """

    url: str
    method: str
    attempt: int
    max_retries: int


@dataclass(frozen=True)
class RequestInfo(CallInfo):
    """Payload of ``on_request``: ``attempt`` is about to be sent."""


@dataclass(frozen=True)
class RetryInfo(CallInfo):
    """Payload of ``on_retry``.

    ``attempt`` is the attempt that will run once the backoff is over, so
    the first retry reports 2.

    Attributes:
        wait_time: Backoff before the next attempt, in seconds.
        error: Transport exception of the failed attempt, ``None`` for an
            HTTP failure or a deadline expiry.
        status_code: Status of the failed attempt (408 for a timeout).
    """

    wait_time: float
    error: BaseException | None
    status_code: int | None


@dataclass(frozen=True)
class ResponseInfo(CallInfo):
    """Payload of ``on_success``.

    Attributes:
        status_code: The 2xx status that settled the call.
        body: What the caller receives (validated when a validator is set).
        total_time: Seconds elapsed since the first attempt started.
    """

    status_code: int
    body: Any
    total_time: float


@dataclass(frozen=True)
class FailureInfo(CallInfo):
    """Payload of ``on_failure``.

    Attributes:
        error: The ``ApiError`` about to be raised.
        status_code: Its status code, if any.
        total_time: Seconds elapsed since the first attempt started.
    """

    error: Exception
    status_code: int | None
    total_time: float

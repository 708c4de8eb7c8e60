r"""Outcomes of a single attempt.

Each physical attempt produces exactly one of the frozen dataclasses
below. The retry loop inspects them with ``isinstance`` and only turns the
last one into an exception once the call is over.
"""

from __future__ import annotations

__all__ = [
    "AttemptOutcome",
    "Cancelled",
    "HttpFailure",
    "NetworkFailure",
    "Success",
    "TimeoutFailure",
]

from dataclasses import dataclass
from typing import Any, ClassVar, Union


@dataclass(frozen=True)
class Success:
    """A 2xx response.

    Attributes:
        status_code: The HTTP status code.
        body: The parsed JSON body, the raw text when it is not JSON, or
            ``None`` when the body is empty.
    """

    status_code: int
    body: Any


@dataclass(frozen=True)
class HttpFailure:
    """A response with a non-2xx status.

    Attributes:
        status_code: The HTTP status code.
        body: The parsed JSON body, or the raw text when it is not JSON.
    """

    status_code: int
    body: Any


@dataclass(frozen=True)
class NetworkFailure:
    """No response was received.

    Attributes:
        cause: The transport exception.
    """

    cause: BaseException


@dataclass(frozen=True)
class TimeoutFailure:
    """The attempt did not complete before its deadline.

    Attributes:
        timeout: The deadline of the attempt in seconds.
        cause: The transport timeout exception, or ``None`` when the
            deadline timer fired first.
    """

    timeout: float
    cause: BaseException | None = None

    # Timeouts are treated like a 408 response when classified.
    status_code: ClassVar[int] = 408


@dataclass(frozen=True)
class Cancelled:
    """The caller's cancellation token fired during the attempt.

    Attributes:
        reason: The optional reason given when cancelling.
    """

    reason: str | None = None


AttemptOutcome = Union[Success, HttpFailure, NetworkFailure, TimeoutFailure, Cancelled]

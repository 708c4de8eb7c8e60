r"""Doubling backoff used between the attempts of a call."""

from __future__ import annotations

__all__ = ["ExponentialBackoff"]

from farmclient.backoff.base import BaseBackoffStrategy
from farmclient.core.validation import validate_delays


class ExponentialBackoff(BaseBackoffStrategy):
    """Wait ``base_delay * 2 ** attempt`` seconds, with no jitter.

    Two calls with the same arguments always return the same delay, so a
    retry sequence is reproducible from the policy alone.

    Args:
        base_delay: Wait in seconds before the first retry.
        max_delay: Optional ceiling in seconds on any single wait.
            ``None`` leaves the growth unbounded.

    Raises:
        ValueError: If ``base_delay`` is negative or ``max_delay`` is not
            positive.

    Example:
        ```pycon
        >>> from farmclient.backoff import ExponentialBackoff
        >>> [ExponentialBackoff(0.1).calculate(attempt) for attempt in range(3)]
        [0.1, 0.2, 0.4]
        >>> ExponentialBackoff(1.0, max_delay=5.0).calculate(10)
        5.0

        ```
    """

    def __init__(self, base_delay: float = 1.0, max_delay: float | None = None) -> None:
        validate_delays(base_delay, max_delay)
        self.base_delay = base_delay
        self.max_delay = max_delay

    def __repr__(self) -> str:
        return f"{type(self).__name__}(base_delay={self.base_delay}, max_delay={self.max_delay})"

    def calculate(self, attempt: int) -> float:
        delay = self.base_delay * 2**attempt
        return delay if self.max_delay is None else min(delay, self.max_delay)

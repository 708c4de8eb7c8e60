r"""Backoff delay calculation between attempts."""

from __future__ import annotations

__all__ = ["RetryStrategy", "delay_for"]

from typing import TYPE_CHECKING

from farmclient.backoff.exponential import ExponentialBackoff

if TYPE_CHECKING:
    from farmclient.core.config import RetryPolicy


def delay_for(attempt: int, policy: RetryPolicy) -> float:
    """Return the wait in seconds after failed attempt ``attempt``.

    The delay is ``policy.base_delay * 2 ** attempt``. No jitter is added,
    so the sequence of delays is fully determined by the policy.

    Args:
        attempt: The index of the failed attempt (0-indexed).
        policy: The retry policy.

    Returns:
        The delay in seconds.

    Example:
        ```pycon
        >>> from farmclient.core.config import RetryPolicy
        >>> from farmclient.retry.strategy import delay_for
        >>> policy = RetryPolicy(base_delay=1.0)
        >>> [delay_for(attempt, policy) for attempt in range(3)]
        [1.0, 2.0, 4.0]

        ```
    """
    return ExponentialBackoff(policy.base_delay, policy.max_delay).calculate(attempt)


class RetryStrategy:
    """Calculates the delays between the attempts of a call.

    Args:
        policy: The retry policy shared by every call.

    Attributes:
        backoff: The backoff strategy built from the policy.
    """

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy
        self.backoff = ExponentialBackoff(policy.base_delay, policy.max_delay)

    def delay_for(self, attempt: int) -> float:
        """Return the wait in seconds after failed attempt ``attempt``."""
        return self.backoff.calculate(attempt)

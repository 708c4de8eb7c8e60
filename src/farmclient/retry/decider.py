r"""Retry decision logic.

This module decides, from the outcome of an attempt and the retry
policy, whether another attempt should be made.
"""

from __future__ import annotations

__all__ = ["RetryDecider", "should_retry"]

import logging
from typing import TYPE_CHECKING

from farmclient.core.outcome import HttpFailure, NetworkFailure, TimeoutFailure

if TYPE_CHECKING:
    from farmclient.core.config import RetryPolicy
    from farmclient.core.outcome import AttemptOutcome

logger: logging.Logger = logging.getLogger(__name__)


def should_retry(attempt: int, outcome: AttemptOutcome, policy: RetryPolicy) -> bool:
    """Decide whether the call should be attempted again.

    Network failures and timeouts are always transient; HTTP failures are
    transient only when their status is in the retryable set. Successes
    and cancellations are terminal.

    Args:
        attempt: The index of the attempt that produced ``outcome``
            (0-indexed).
        outcome: The outcome of that attempt.
        policy: The retry policy.

    Returns:
        ``True`` if ``attempt < policy.max_retries`` and the outcome is
        transient.

    Example:
        ```pycon
        >>> from farmclient.core.config import RetryPolicy
        >>> from farmclient.core.outcome import HttpFailure
        >>> from farmclient.retry.decider import should_retry
        >>> policy = RetryPolicy(max_retries=1)
        >>> should_retry(0, HttpFailure(status_code=503, body=None), policy)
        True
        >>> should_retry(1, HttpFailure(status_code=503, body=None), policy)
        False
        >>> should_retry(0, HttpFailure(status_code=404, body=None), policy)
        False

        ```
    """
    if attempt >= policy.max_retries:
        return False
    if isinstance(outcome, (NetworkFailure, TimeoutFailure)):
        return True
    if isinstance(outcome, HttpFailure):
        return outcome.status_code in policy.retryable_status_codes
    return False


class RetryDecider:
    """Decides whether a call should be retried.

    Args:
        policy: The retry policy shared by every call.
    """

    def __init__(self, policy: RetryPolicy) -> None:
        self.policy = policy

    def should_retry(self, attempt: int, outcome: AttemptOutcome) -> bool:
        """Decide whether the call should be attempted again.

        Args:
            attempt: The index of the attempt that produced ``outcome``.
            outcome: The outcome of that attempt.

        Returns:
            ``True`` if another attempt should be made.
        """
        retry = should_retry(attempt, outcome, self.policy)
        if not retry and attempt >= self.policy.max_retries:
            logger.debug(f"Retries exhausted after {attempt + 1} attempts")
        return retry

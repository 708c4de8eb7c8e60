r"""Retry package implementing the attempt loop of the request engine.

Public API:
    - RetryDecider / should_retry: Whether an outcome is worth another attempt
    - RetryStrategy / delay_for: Backoff delay between attempts
    - run_attempt: One attempt under its deadline and cancellation token
    - CallbackManager: Manager for callback invocations
    - AsyncRetryExecutor: The attempt loop of one call
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "CallbackManager",
    "RetryDecider",
    "RetryStrategy",
    "delay_for",
    "run_attempt",
    "should_retry",
]

from farmclient.retry.attempt import run_attempt
from farmclient.retry.decider import RetryDecider, should_retry
from farmclient.retry.executor_async import AsyncRetryExecutor
from farmclient.retry.manager import CallbackManager
from farmclient.retry.strategy import RetryStrategy, delay_for

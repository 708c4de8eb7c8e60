r"""Shared test helpers for driving the request engine.

The engine is exercised end to end through ``httpx.MockTransport``: a
handler receives every ``httpx.Request`` and returns a response (or
raises a transport error), so no network access is needed.
"""

from __future__ import annotations

__all__ = [
    "BASE_URL",
    "SequenceHandler",
    "SlowHandler",
    "make_client",
    "make_config",
]

import asyncio
from typing import TYPE_CHECKING, Any

import httpx

from farmclient.core.config import ClientConfig, RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Callable

BASE_URL = "https://api.example.com"


class SequenceHandler:
    """MockTransport handler replaying a fixed sequence of results.

    Each result is either an ``httpx.Response`` or an exception to raise.
    Once the sequence is exhausted, the last result is repeated.

    Args:
        *results: The results to return, in order.
    """

    def __init__(self, *results: httpx.Response | Exception) -> None:
        self.results = list(results)
        self.requests: list[httpx.Request] = []

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.results[min(len(self.requests), len(self.results)) - 1]
        if isinstance(result, Exception):
            raise result
        return result


class SlowHandler:
    """Async MockTransport handler answering after ``delay`` seconds.

    Args:
        delay: The time to wait before answering.
        response: The response to return, 200 with an empty JSON object
            by default.
    """

    def __init__(self, delay: float, response: httpx.Response | None = None) -> None:
        self.delay = delay
        self.response = response
        self.requests: list[httpx.Request] = []
        self.completed = 0

    @property
    def call_count(self) -> int:
        return len(self.requests)

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        await asyncio.sleep(self.delay)
        self.completed += 1
        return self.response or httpx.Response(200, json={})


def make_client(handler: Callable[[httpx.Request], Any]) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` routed to ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


def make_config(
    max_retries: int = 3,
    base_delay: float = 0.01,
    retryable_status_codes: frozenset[int] | None = None,
    **kwargs: Any,
) -> ClientConfig:
    """Create a ``ClientConfig`` pointing at ``BASE_URL``."""
    policy = RetryPolicy(max_retries=max_retries, base_delay=base_delay).merge(
        retryable_status_codes=retryable_status_codes
    )
    return ClientConfig(base_url=BASE_URL, retry_policy=policy, **kwargs)

r"""Dispatch of loop events to the callbacks of a ``ClientConfig``."""

from __future__ import annotations

__all__ = ["CallbackManager"]

import time
from typing import TYPE_CHECKING, Any

from farmclient.callbacks import FailureInfo, RequestInfo, ResponseInfo, RetryInfo

if TYPE_CHECKING:
    from collections.abc import Callable

    from farmclient.core.config import ClientConfig


class CallbackManager:
    """Builds callback payloads and hands them to the configured hooks.

    The retry loop counts attempts from 0; payloads count from 1. Every
    method is a no-op when its hook is not set.

    Args:
        on_request: Hook called before each attempt.
        on_retry: Hook called before each backoff sleep.
        on_success: Hook called once when a call succeeds.
        on_failure: Hook called once when a call fails.
    """

    def __init__(
        self,
        on_request: Callable[[RequestInfo], None] | None = None,
        on_retry: Callable[[RetryInfo], None] | None = None,
        on_success: Callable[[ResponseInfo], None] | None = None,
        on_failure: Callable[[FailureInfo], None] | None = None,
    ) -> None:
        self._on_request = on_request
        self._on_retry = on_retry
        self._on_success = on_success
        self._on_failure = on_failure

    @classmethod
    def from_config(cls, config: ClientConfig) -> CallbackManager:
        return cls(config.on_request, config.on_retry, config.on_success, config.on_failure)

    @staticmethod
    def _call(url: str, method: str, number: int, max_retries: int) -> dict[str, Any]:
        return {"url": url, "method": method, "attempt": number, "max_retries": max_retries}

    def on_request(self, url: str, method: str, attempt: int, max_retries: int) -> None:
        if self._on_request is not None:
            self._on_request(RequestInfo(**self._call(url, method, attempt + 1, max_retries)))

    def on_retry(
        self,
        url: str,
        method: str,
        attempt: int,
        max_retries: int,
        sleep_time: float,
        error: BaseException | None,
        status_code: int | None,
    ) -> None:
        """Report the backoff following failed attempt ``attempt``.

        The payload names the attempt that will run after the sleep, i.e.
        ``attempt + 2`` in 1-based numbering.
        """
        if self._on_retry is None:
            return
        self._on_retry(
            RetryInfo(
                **self._call(url, method, attempt + 2, max_retries),
                wait_time=sleep_time,
                error=error,
                status_code=status_code,
            )
        )

    def on_success(
        self,
        url: str,
        method: str,
        attempt: int,
        max_retries: int,
        status_code: int,
        body: Any,
        start_time: float,
    ) -> None:
        if self._on_success is None:
            return
        self._on_success(
            ResponseInfo(
                **self._call(url, method, attempt + 1, max_retries),
                status_code=status_code,
                body=body,
                total_time=time.time() - start_time,
            )
        )

    def on_failure(
        self,
        url: str,
        method: str,
        attempt: int,
        max_retries: int,
        error: Exception,
        status_code: int | None,
        start_time: float,
    ) -> None:
        if self._on_failure is None:
            return
        self._on_failure(
            FailureInfo(
                **self._call(url, method, attempt + 1, max_retries),
                error=error,
                status_code=status_code,
                total_time=time.time() - start_time,
            )
        )

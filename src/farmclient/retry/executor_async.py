r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that runs the attempts
of one logical call: it builds the headers of each attempt, runs the
attempt under its deadline and cancellation token, consults the retry
policy, sleeps between attempts, and finally returns the validated body
or raises a classified error.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import logging
import time
from typing import TYPE_CHECKING, Any

from farmclient.cancellation import sleep
from farmclient.core.headers import build_headers
from farmclient.core.outcome import Cancelled, HttpFailure, NetworkFailure, Success, TimeoutFailure
from farmclient.exceptions import ResponseValidationError
from farmclient.retry.attempt import run_attempt
from farmclient.retry.decider import RetryDecider
from farmclient.retry.executor_core import create_error
from farmclient.retry.manager import CallbackManager
from farmclient.retry.strategy import RetryStrategy
from farmclient.utils.request_logging import RequestLogger
from farmclient.validators import validate_response

if TYPE_CHECKING:
    import httpx

    from farmclient.core.config import ClientConfig
    from farmclient.core.descriptor import RequestDescriptor
    from farmclient.core.outcome import AttemptOutcome
    from farmclient.exceptions import ApiError

logger: logging.Logger = logging.getLogger(__name__)


class AsyncRetryExecutor:
    """Executes the attempts of a call with automatic retry logic.

    The executor is stateless across calls: each ``execute`` call keeps
    its own attempt counter, so one executor can serve any number of
    concurrent calls.

    The executor orchestrates the following components:
    - build_headers: Re-reads the access token for every attempt
    - run_attempt: Races the attempt, its deadline and the cancellation token
    - RetryDecider: Decides whether an outcome is worth another attempt
    - RetryStrategy: Calculates the backoff delay
    - CallbackManager: Invokes user-defined callbacks at lifecycle events
    - RequestLogger: Emits the log lines enabled by ``LogConfig``

    Args:
        config: The client configuration.

    Attributes:
        config: The client configuration.
        decider: Logic for deciding whether to retry.
        strategy: Strategy for calculating retry delays.
        callbacks: Manager for invoking callbacks.
        request_logger: Emitter of request/response/error log lines.
    """

    def __init__(self, config: ClientConfig) -> None:
        self.config = config
        self.decider: RetryDecider = RetryDecider(config.retry_policy)
        self.strategy: RetryStrategy = RetryStrategy(config.retry_policy)
        self.callbacks: CallbackManager = CallbackManager.from_config(config)
        self.request_logger: RequestLogger = RequestLogger(config.log_config)

    async def execute(self, client: httpx.AsyncClient, descriptor: RequestDescriptor) -> Any:
        """Execute a call with automatic retry logic.

        Attempts the request up to ``max_retries + 1`` times. Attempts are
        strictly sequential: the next one starts only after the previous
        one has fully terminated and the backoff delay has elapsed.

        Args:
            client: The HTTP client used to send the attempts.
            descriptor: The descriptor of the call.

        Returns:
            The parsed response body, or the validator's output when the
            descriptor carries a validator.

        Raises:
            RequestCancelledError: If the cancellation token fired.
            RequestTimeoutError: If the last attempt exceeded its deadline.
            NetworkError: If the last attempt received no response.
            ClientError: If the last response had a 4xx status (or any
                other non-2xx status below 500).
            ServerError: If the last response had a 5xx status.
            ResponseValidationError: If the successful body did not match
                the validator.
        """
        policy = self.config.retry_policy
        start_time = time.time()
        attempt = 0
        while True:
            outcome = await self._attempt(client, descriptor, attempt)

            if isinstance(outcome, Success):
                return self._succeed(descriptor, outcome, attempt, start_time)
            if isinstance(outcome, Cancelled) or not self.decider.should_retry(attempt, outcome):
                raise self._fail(descriptor, outcome, attempt, start_time)

            sleep_time = self.strategy.delay_for(attempt)
            logger.debug(
                f"{descriptor.method} to {descriptor.url}: will retry ({_describe(outcome)}) "
                f"in {sleep_time:.2f}s"
            )
            self.callbacks.on_retry(
                descriptor.url,
                descriptor.method,
                attempt,
                policy.max_retries,
                sleep_time,
                getattr(outcome, "cause", None),
                getattr(outcome, "status_code", None),
            )
            if not await sleep(sleep_time, descriptor.cancel_token):
                token = descriptor.cancel_token
                raise self._fail(
                    descriptor, Cancelled(reason=token.reason if token else None), attempt, start_time
                )
            attempt += 1

    async def _attempt(
        self, client: httpx.AsyncClient, descriptor: RequestDescriptor, attempt: int
    ) -> AttemptOutcome:
        headers = build_headers(self.config, descriptor.headers)
        request = client.build_request(
            descriptor.method,
            descriptor.url,
            headers=headers,
            content=descriptor.content,
            timeout=descriptor.timeout,
        )
        self.callbacks.on_request(
            descriptor.url, descriptor.method, attempt, self.config.retry_policy.max_retries
        )
        self.request_logger.log_request(descriptor.method, descriptor.url, attempt, descriptor.content)

        outcome = await run_attempt(
            lambda: client.send(request),
            timeout=descriptor.timeout,
            cancel_token=descriptor.cancel_token,
        )
        if isinstance(outcome, (Success, HttpFailure)):
            self.request_logger.log_response(
                descriptor.method, descriptor.url, outcome.status_code, outcome.body
            )
        return outcome

    def _succeed(
        self, descriptor: RequestDescriptor, outcome: Success, attempt: int, start_time: float
    ) -> Any:
        body = outcome.body
        if descriptor.validator is not None:
            try:
                body = validate_response(descriptor.validator, outcome.body)
            except ResponseValidationError as exc:
                error = ResponseValidationError(
                    exc.message,
                    issues=exc.issues,
                    method=descriptor.method,
                    url=descriptor.url,
                    status_code=outcome.status_code,
                    attempts=attempt + 1,
                    response_body=outcome.body,
                )
                self._report_failure(descriptor, error, attempt, start_time)
                raise error from exc
        self.callbacks.on_success(
            descriptor.url,
            descriptor.method,
            attempt,
            self.config.retry_policy.max_retries,
            outcome.status_code,
            body,
            start_time,
        )
        return body

    def _fail(
        self,
        descriptor: RequestDescriptor,
        outcome: AttemptOutcome,
        attempt: int,
        start_time: float,
    ) -> ApiError:
        error = create_error(descriptor, outcome, attempt + 1, self.config.retry_policy)
        self._report_failure(descriptor, error, attempt, start_time)
        return error

    def _report_failure(
        self, descriptor: RequestDescriptor, error: ApiError, attempt: int, start_time: float
    ) -> None:
        logger.debug(f"{descriptor.method} to {descriptor.url} failed: {error!r}")
        self.request_logger.log_error(descriptor.method, descriptor.url, error)
        self.callbacks.on_failure(
            descriptor.url,
            descriptor.method,
            attempt,
            self.config.retry_policy.max_retries,
            error,
            error.status_code,
            start_time,
        )


def _describe(outcome: AttemptOutcome) -> str:
    if isinstance(outcome, HttpFailure):
        return f"status {outcome.status_code}"
    if isinstance(outcome, TimeoutFailure):
        return "timeout"
    if isinstance(outcome, NetworkFailure):
        return type(outcome.cause).__name__
    return type(outcome).__name__

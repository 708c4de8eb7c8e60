r"""Execution of a single attempt under a deadline and a cancellation token.

Three things race while an attempt is in flight: the attempt itself, the
deadline timer and the caller's cancellation token. Whichever completes
first determines the outcome. The losers are cancelled, and the attempt
is awaited until it has fully terminated, before this module returns.
"""

from __future__ import annotations

__all__ = ["classify_response", "run_attempt"]

import asyncio
import logging
from typing import TYPE_CHECKING

import httpx

from farmclient.core.http_logic import parse_body
from farmclient.core.outcome import (
    Cancelled,
    HttpFailure,
    NetworkFailure,
    Success,
    TimeoutFailure,
)

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from farmclient.cancellation import CancellationToken
    from farmclient.core.outcome import AttemptOutcome

logger: logging.Logger = logging.getLogger(__name__)


def classify_response(response: httpx.Response) -> Success | HttpFailure:
    """Turn a received response into an attempt outcome.

    Args:
        response: The HTTP response, with its body already read.

    Returns:
        ``Success`` for a 2xx status, ``HttpFailure`` otherwise.
    """
    body = parse_body(response)
    if response.is_success:
        return Success(status_code=response.status_code, body=body)
    return HttpFailure(status_code=response.status_code, body=body)


async def run_attempt(
    send: Callable[[], Awaitable[httpx.Response]],
    *,
    timeout: float,
    cancel_token: CancellationToken | None = None,
) -> AttemptOutcome:
    """Run one attempt and classify its outcome.

    Args:
        send: Zero-argument coroutine function issuing the request.
        timeout: The deadline of the attempt in seconds.
        cancel_token: Optional token aborting the attempt.

    Returns:
        ``Success`` or ``HttpFailure`` when a response arrived in time,
        ``NetworkFailure`` when the transport failed, ``TimeoutFailure``
        when the deadline elapsed (or the transport timed out), and
        ``Cancelled`` when the token fired first.
    """
    if cancel_token is not None and cancel_token.cancelled:
        return Cancelled(reason=cancel_token.reason)

    attempt = asyncio.ensure_future(send())
    waiters: set[asyncio.Future] = {attempt}
    canceller: asyncio.Future | None = None
    if cancel_token is not None:
        canceller = asyncio.ensure_future(cancel_token.wait())
        waiters.add(canceller)

    try:
        done, _ = await asyncio.wait(waiters, timeout=timeout, return_when=asyncio.FIRST_COMPLETED)
    finally:
        for waiter in waiters:
            if not waiter.done():
                waiter.cancel()

    if attempt in done:
        try:
            response = attempt.result()
        except httpx.TimeoutException as exc:
            logger.debug(f"Transport timed out: {exc!r}")
            return TimeoutFailure(timeout=timeout, cause=exc)
        except httpx.RequestError as exc:
            logger.debug(f"Transport failed: {exc!r}")
            return NetworkFailure(cause=exc)
        return classify_response(response)

    # The attempt lost the race: wait until its cancellation has completed
    # so the next attempt never overlaps with it.
    await asyncio.wait({attempt})
    if not attempt.cancelled():
        attempt.exception()
    if canceller is not None and canceller in done:
        logger.debug("Attempt aborted by cancellation token")
        return Cancelled(reason=cancel_token.reason)
    logger.debug(f"Attempt exceeded its {timeout}s deadline")
    return TimeoutFailure(timeout=timeout)

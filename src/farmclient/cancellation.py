r"""Cooperative cancellation of in-flight calls.

A ``CancellationToken`` is created by the caller, passed with the
options of a call, and fired with ``cancel()``. Once fired, the in-flight
attempt or backoff sleep of the call is aborted and the call raises
``RequestCancelledError``. Firing a token never affects other calls.

Example:
    ```pycon
    >>> import asyncio
    >>> from farmclient.cancellation import CancellationToken
    >>> async def main():
    ...     token = CancellationToken()
    ...     asyncio.get_running_loop().call_later(0.01, token.cancel, "user left the page")
    ...     await token.wait()
    ...     return token.reason
    ...
    >>> asyncio.run(main())
    'user left the page'

    ```
"""

from __future__ import annotations

__all__ = ["CancellationToken", "sleep"]

import asyncio


class CancellationToken:
    """A one-shot signal used to abort a call.

    The token must be fired from the thread running the event loop of the
    call (use ``loop.call_soon_threadsafe(token.cancel)`` from other
    threads).
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()
        self._reason: str | None = None

    @property
    def cancelled(self) -> bool:
        """``True`` once ``cancel`` has been called."""
        return self._event.is_set()

    @property
    def reason(self) -> str | None:
        """The reason given to the first ``cancel`` call, if any."""
        return self._reason

    def cancel(self, reason: str | None = None) -> None:
        """Fire the token. Calling it again has no effect.

        Args:
            reason: Optional human-readable reason, included in the
                message of the resulting error.
        """
        if self._event.is_set():
            return
        self._reason = reason
        self._event.set()

    async def wait(self) -> None:
        """Wait until the token is fired."""
        await self._event.wait()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(cancelled={self.cancelled}, reason={self._reason!r})"


async def sleep(delay: float, cancel_token: CancellationToken | None = None) -> bool:
    """Sleep for ``delay`` seconds unless the token fires first.

    Args:
        delay: The sleep duration in seconds.
        cancel_token: Optional token interrupting the sleep.

    Returns:
        ``True`` if the full delay elapsed, ``False`` if the token fired
        before or during the sleep.
    """
    if cancel_token is None:
        await asyncio.sleep(delay)
        return True
    if cancel_token.cancelled:
        return False
    waiter = asyncio.ensure_future(cancel_token.wait())
    try:
        await asyncio.wait({waiter}, timeout=delay)
    finally:
        if not waiter.done():
            waiter.cancel()
    return not cancel_token.cancelled

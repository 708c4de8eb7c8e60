r"""Parameter validation utilities for the client configuration.

This module provides validation functions for the configuration values
to ensure they meet the required constraints before being used by the
request engine.
"""

from __future__ import annotations

__all__ = [
    "validate_base_url",
    "validate_delays",
    "validate_log_level",
    "validate_retry_params",
    "validate_status_codes",
    "validate_timeout",
]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable

LOG_LEVELS = ("debug", "info", "warn", "error")


def validate_timeout(timeout: float | None) -> None:
    """Validate timeout parameter.

    Args:
        timeout: Maximum seconds to wait for a single attempt.
            Must be > 0 if provided.

    Raises:
        ValueError: If timeout is a numeric value <= 0.

    Example:
        ```pycon
        >>> from farmclient.core.validation import validate_timeout
        >>> validate_timeout(10.0)
        >>> validate_timeout(None)
        >>> validate_timeout(0)
        Traceback (most recent call last):
        ...
        ValueError: timeout must be > 0, got 0

        ```
    """
    if timeout is not None and timeout <= 0:
        msg = f"timeout must be > 0, got {timeout}"
        raise ValueError(msg)


def validate_retry_params(
    max_retries: int,
    base_delay: float = 0.0,
    max_delay: float | None = None,
) -> None:
    """Validate retry parameters.

    Args:
        max_retries: Maximum number of retry attempts for failed requests.
            Must be >= 0. A value of 0 means no retries (only the initial attempt).
        base_delay: Base delay in seconds of the exponential backoff.
            Must be >= 0.
        max_delay: Optional cap on a single backoff delay in seconds.
            Must be > 0 if provided.

    Raises:
        ValueError: If max_retries or base_delay are negative,
            or if max_delay is non-positive.

    Example:
        ```pycon
        >>> from farmclient.core.validation import validate_retry_params
        >>> validate_retry_params(max_retries=3)
        >>> validate_retry_params(max_retries=3, base_delay=1.0, max_delay=30.0)

        ```
    """
    if isinstance(max_retries, bool) or not isinstance(max_retries, int):
        msg = f"max_retries must be an int, got {type(max_retries).__name__}"
        raise ValueError(msg)
    if max_retries < 0:
        msg = f"max_retries must be >= 0, got {max_retries}"
        raise ValueError(msg)
    validate_delays(base_delay, max_delay)


def validate_delays(base_delay: float, max_delay: float | None = None) -> None:
    """Validate the base delay and optional cap of a backoff.

    Raises:
        ValueError: If ``base_delay`` is negative or ``max_delay`` is not
            positive.
    """
    if base_delay < 0:
        msg = f"base_delay must be >= 0, got {base_delay}"
        raise ValueError(msg)
    if max_delay is not None and max_delay <= 0:
        msg = f"max_delay must be > 0, got {max_delay}"
        raise ValueError(msg)


def validate_status_codes(status_codes: Iterable[int]) -> None:
    """Validate that every status code is a valid HTTP status.

    Args:
        status_codes: The HTTP status codes to check.

    Raises:
        ValueError: If a status code is outside ``[100, 599]``.
    """
    for code in status_codes:
        if not 100 <= code <= 599:
            msg = f"invalid HTTP status code in retryable_status_codes: {code}"
            raise ValueError(msg)


def validate_base_url(base_url: str) -> None:
    """Validate the base URL of the API.

    Args:
        base_url: The base URL, e.g. ``https://api.example.com``.

    Raises:
        ValueError: If the URL is empty or not an http(s) URL.
    """
    if not base_url:
        msg = "base_url must not be empty"
        raise ValueError(msg)
    if not base_url.startswith(("http://", "https://")):
        msg = f"base_url must start with http:// or https://, got {base_url!r}"
        raise ValueError(msg)


def validate_log_level(level: str) -> None:
    """Validate a log level name.

    Args:
        level: One of ``debug``, ``info``, ``warn`` or ``error``.

    Raises:
        ValueError: If the level is unknown.
    """
    if level not in LOG_LEVELS:
        msg = f"level must be one of {LOG_LEVELS}, got {level!r}"
        raise ValueError(msg)

r"""Configuration dataclasses and defaults for the request engine.

This module provides configuration constants and immutable
dataclass-based configuration objects. A single ``ClientConfig`` is
shared read-only by every call issued through a ``RequestEngine``.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BASE_DELAY",
    "DEFAULT_HEADERS",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "RETRY_STATUS_CODES",
    "ClientConfig",
    "LogConfig",
    "RetryPolicy",
]

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from farmclient.core.validation import (
    validate_base_url,
    validate_log_level,
    validate_retry_params,
    validate_status_codes,
    validate_timeout,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from farmclient.callbacks import FailureInfo, RequestInfo, ResponseInfo, RetryInfo


# Default timeout in seconds for a single attempt
DEFAULT_TIMEOUT = 30.0

# Default maximum number of retry attempts
# Total attempts = max_retries + 1 (initial attempt)
DEFAULT_MAX_RETRIES = 3

# Default base delay in seconds for exponential backoff
# Wait time = base_delay * (2 ** attempt)
# With 1.0: 1st retry waits 1s, 2nd waits 2s, 3rd waits 4s
DEFAULT_BASE_DELAY = 1.0

# HTTP status codes that should trigger automatic retry
# 408: Request Timeout
# 429: Too Many Requests - Rate limiting
# 500: Internal Server Error - Temporary server issue
# 502: Bad Gateway - Upstream server error
# 503: Service Unavailable - Server overloaded or down
# 504: Gateway Timeout - Upstream server timeout
RETRY_STATUS_CODES = frozenset({408, 429, 500, 502, 503, 504})

DEFAULT_HEADERS: Mapping[str, str] = MappingProxyType({"Content-Type": "application/json"})


@dataclass(frozen=True)
class RetryPolicy:
    """Retry behavior shared by every call of an engine.

    Args:
        max_retries: Maximum number of retries after the initial attempt.
            Must be >= 0.
        base_delay: Base delay in seconds of the exponential backoff.
            Must be >= 0.
        retryable_status_codes: HTTP status codes treated as transient.
        max_delay: Optional cap in seconds on a single backoff delay.
            ``None`` (the default) leaves the backoff uncapped.

    Example:
        ```pycon
        >>> from farmclient.core.config import RetryPolicy
        >>> policy = RetryPolicy(max_retries=2, base_delay=0.1)
        >>> policy.max_retries
        2
        >>> sorted(policy.retryable_status_codes)
        [408, 429, 500, 502, 503, 504]

        ```
    """

    max_retries: int = DEFAULT_MAX_RETRIES
    base_delay: float = DEFAULT_BASE_DELAY
    retryable_status_codes: frozenset[int] = RETRY_STATUS_CODES
    max_delay: float | None = None

    def __post_init__(self) -> None:
        validate_retry_params(
            max_retries=self.max_retries,
            base_delay=self.base_delay,
            max_delay=self.max_delay,
        )
        codes = frozenset(self.retryable_status_codes)
        validate_status_codes(codes)
        object.__setattr__(self, "retryable_status_codes", codes)

    def merge(self, **overrides: Any) -> RetryPolicy:
        """Create a new policy with the non-``None`` overrides applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


@dataclass(frozen=True)
class LogConfig:
    """Request/response logging switches.

    Logging is purely observational: whatever these values are, the retry
    and error behavior of the engine is identical.

    Args:
        enabled: Master switch for request, response and error log lines.
        level: One of ``debug``, ``info``, ``warn`` or ``error``. Request and
            response lines are only emitted at ``debug`` and ``info``;
            ``debug`` also logs bodies.
        log_requests: Log every outgoing attempt.
        log_responses: Log every received response.
    """

    enabled: bool = False
    level: str = "error"
    log_requests: bool = False
    log_responses: bool = False

    def __post_init__(self) -> None:
        validate_log_level(self.level)


@dataclass(frozen=True)
class ClientConfig:
    """Immutable configuration of a ``RequestEngine``.

    Args:
        base_url: Base URL of the API, e.g. ``https://api.example.com``.
            A trailing slash is ignored.
        default_headers: Headers sent with every request. Per-call headers
            win on key collision.
        get_access_token: Optional callable returning the current access
            token (or ``None`` when unauthenticated). It is invoked once per
            attempt, so a token refreshed mid-retry is honored.
        timeout: Default deadline in seconds of a single attempt.
        retry_policy: The retry policy shared by every call.
        log_config: Request/response logging switches.
        on_request: Optional callback called before each attempt.
        on_retry: Optional callback called before each backoff sleep.
        on_success: Optional callback called when a call succeeds.
        on_failure: Optional callback called when a call fails.

    Example:
        ```pycon
        >>> from farmclient.core.config import ClientConfig, RetryPolicy
        >>> config = ClientConfig(
        ...     base_url="https://api.example.com",
        ...     get_access_token=lambda: "secret",
        ...     retry_policy=RetryPolicy(max_retries=5),
        ... )
        >>> config.timeout
        30.0
        >>> config.merge(timeout=5.0).timeout
        5.0
        >>> config.timeout  # Original unchanged
        30.0

        ```
    """

    base_url: str
    default_headers: Mapping[str, str] = field(default_factory=lambda: DEFAULT_HEADERS)
    get_access_token: Callable[[], str | None] | None = None
    timeout: float = DEFAULT_TIMEOUT
    retry_policy: RetryPolicy = field(default_factory=RetryPolicy)
    log_config: LogConfig = field(default_factory=LogConfig)
    on_request: Callable[[RequestInfo], None] | None = None
    on_retry: Callable[[RetryInfo], None] | None = None
    on_success: Callable[[ResponseInfo], None] | None = None
    on_failure: Callable[[FailureInfo], None] | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
        """
        validate_base_url(self.base_url)
        validate_timeout(self.timeout)
        # Freeze the headers so that later mutation of the caller's dict
        # cannot leak into in-flight calls.
        object.__setattr__(self, "default_headers", MappingProxyType(dict(self.default_headers)))

    def merge(self, **overrides: Any) -> ClientConfig:
        """Create a new config with specified parameters overridden.

        Only non-``None`` override values are applied.

        Args:
            **overrides: Keyword arguments for parameters to override.

        Returns:
            A new ClientConfig instance with overrides applied.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

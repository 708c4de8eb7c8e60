r"""farmclient - Request engine of the farm-management API client.

This package provides the shared request engine every resource method of
the SDK delegates to. Built on top of httpx, it gives every call uniform
failure semantics.

Key Features:
    - Bearer token injection, re-reading the token on every attempt
    - Per-attempt deadlines and cooperative cancellation
    - Automatic retry of transient failures (408, 429, 500, 502, 503, 504,
      network errors and timeouts) with deterministic exponential backoff
    - A fixed error taxonomy: NetworkError, RequestTimeoutError,
      RequestCancelledError, ClientError, ServerError and
      ResponseValidationError
    - Optional pydantic validation of successful response bodies
    - Lifecycle callbacks and opt-in request/response logging

Example:
    ```pycon
    >>> from farmclient import ClientConfig, RequestEngine, RetryPolicy
    >>> config = ClientConfig(
    ...     base_url="https://api.example.com",
    ...     get_access_token=lambda: "secret",
    ...     retry_policy=RetryPolicy(max_retries=2, base_delay=0.5),
    ... )
    >>> async def list_farms():  # doctest: +SKIP
    ...     async with RequestEngine(config) as engine:
    ...         return await engine.get("/api/v1/farms", params={"farmer_id": "f-1"})
    ...

    ```
"""

from __future__ import annotations

__all__ = [
    "ApiError",
    "CancellationToken",
    "ClientConfig",
    "ClientError",
    "ErrorKind",
    "LogConfig",
    "NetworkError",
    "RequestCancelledError",
    "RequestEngine",
    "RequestOptions",
    "RequestTimeoutError",
    "ResponseValidationError",
    "RetryPolicy",
    "ServerError",
    "__version__",
]

from importlib.metadata import PackageNotFoundError, version

from farmclient.cancellation import CancellationToken
from farmclient.core.config import ClientConfig, LogConfig, RetryPolicy
from farmclient.core.descriptor import RequestOptions
from farmclient.engine import RequestEngine
from farmclient.exceptions import (
    ApiError,
    ClientError,
    ErrorKind,
    NetworkError,
    RequestCancelledError,
    RequestTimeoutError,
    ResponseValidationError,
    ServerError,
)

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"

r"""Configuration, request building and attempt outcomes."""

from __future__ import annotations

__all__ = [
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_TIMEOUT",
    "RETRY_STATUS_CODES",
    "ClientConfig",
    "LogConfig",
    "RequestDescriptor",
    "RequestOptions",
    "RetryPolicy",
    "build_descriptor",
    "build_headers",
]

from farmclient.core.config import (
    DEFAULT_MAX_RETRIES,
    DEFAULT_TIMEOUT,
    RETRY_STATUS_CODES,
    ClientConfig,
    LogConfig,
    RetryPolicy,
)
from farmclient.core.descriptor import RequestDescriptor, RequestOptions, build_descriptor
from farmclient.core.headers import build_headers

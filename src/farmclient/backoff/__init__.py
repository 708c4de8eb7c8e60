r"""Backoff strategies for retry delays."""

from __future__ import annotations

__all__ = ["BaseBackoffStrategy", "ExponentialBackoff"]

from farmclient.backoff.base import BaseBackoffStrategy
from farmclient.backoff.exponential import ExponentialBackoff

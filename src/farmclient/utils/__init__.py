r"""Logging utilities."""

from __future__ import annotations

__all__ = ["RequestLogger", "StructuredFormatter", "log_structured"]

from farmclient.utils.request_logging import RequestLogger
from farmclient.utils.structured_logging import StructuredFormatter, log_structured

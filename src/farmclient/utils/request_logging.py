r"""Request, response and error log lines controlled by ``LogConfig``.

Lines are emitted on the ``farmclient.requests`` logger. Their level is
the one configured in ``LogConfig``; error lines are always logged at
``ERROR``. Nothing here can raise into the request engine, and the engine
behaves the same whether logging is enabled or not.
"""

from __future__ import annotations

__all__ = ["LOG_LEVELS", "RequestLogger"]

import logging
from typing import TYPE_CHECKING, Any

from farmclient.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from farmclient.core.config import LogConfig

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

logger: logging.Logger = logging.getLogger("farmclient.requests")


class RequestLogger:
    """Emits the log lines switched on by a ``LogConfig``.

    Args:
        config: The logging switches.
    """

    def __init__(self, config: LogConfig) -> None:
        self.config = config
        self.level = LOG_LEVELS[config.level]

    def _verbose(self) -> bool:
        # Request and response lines exist only at debug and info.
        return self.config.enabled and self.level <= logging.INFO

    def log_request(self, method: str, url: str, attempt: int, body: Any = None) -> None:
        """Log an outgoing attempt (0-indexed ``attempt``)."""
        if not (self._verbose() and self.config.log_requests):
            return
        extra: dict[str, Any] = {"method": method, "url": url, "attempt": attempt + 1}
        if self.level == logging.DEBUG:
            extra["body"] = body
        log_structured(logger, self.level, f"[{self.config.level.upper()}] {method} {url}", **extra)

    def log_response(self, method: str, url: str, status_code: int, body: Any = None) -> None:
        """Log a received response."""
        if not (self._verbose() and self.config.log_responses):
            return
        extra: dict[str, Any] = {"method": method, "url": url, "status_code": status_code}
        if self.level == logging.DEBUG:
            extra["body"] = body
        log_structured(
            logger,
            self.level,
            f"[{self.config.level.upper()}] {method} {url} - {status_code}",
            **extra,
        )

    def log_error(self, method: str, url: str, error: BaseException) -> None:
        """Log the terminal error of a call."""
        if not self.config.enabled:
            return
        log_structured(
            logger,
            logging.ERROR,
            f"[ERROR] {method} {url} - {error}",
            method=method,
            url=url,
            error_type=type(error).__name__,
        )

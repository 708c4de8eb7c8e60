r"""JSON log lines for the request engine.

Nothing is configured by default. To get one JSON object per log line,
install ``StructuredFormatter`` on a handler of the ``farmclient``
logger. A correlation ID set with ``set_correlation_id`` is attached to
every line logged from the same context (thread or asyncio task), which
lets the lines of one sync job or one inbound web request be grouped.

Example:
    ```python
    import logging
    from farmclient.utils.structured_logging import StructuredFormatter, set_correlation_id

    handler = logging.StreamHandler()
    handler.setFormatter(StructuredFormatter())
    logging.getLogger("farmclient").addHandler(handler)

    set_correlation_id("sync-job-17")
    ```
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "clear_correlation_id",
    "get_correlation_id",
    "log_structured",
    "set_correlation_id",
]

import contextvars
import json
import logging
import time
from typing import Any

_correlation_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "farmclient_correlation_id", default=None
)

# Attributes every LogRecord carries; anything else was passed via ``extra``.
_RESERVED_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None)).keys()
) | {"message", "asctime", "taskName"}


def get_correlation_id() -> str | None:
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Tag the log lines of the current context with ``correlation_id``."""
    _correlation_id.set(correlation_id)


def clear_correlation_id() -> None:
    _correlation_id.set(None)


class StructuredFormatter(logging.Formatter):
    """Render each record as a single JSON object.

    Keys: ``timestamp`` (ISO 8601, UTC), ``level``, ``logger``,
    ``message`` and ``source`` (``module:line``), then ``correlation_id``
    and ``exception`` when present, then every ``extra`` field. Values
    JSON cannot encode (bytes bodies, exceptions, ...) are rendered with
    ``str``.

    Example:
        ```pycon
        >>> import json
        >>> import logging
        >>> from farmclient.utils.structured_logging import StructuredFormatter
        >>> record = logging.LogRecord(
        ...     "farmclient.requests", logging.INFO, "engine.py", 7, "[INFO] GET /farms", None, None
        ... )
        >>> record.status_code = 200
        >>> line = json.loads(StructuredFormatter().format(record))
        >>> line["message"], line["source"], line["status_code"]
        ('[INFO] GET /farms', 'engine:7', 200)

        ```
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": f"{record.module}:{record.lineno}",
        }
        correlation_id = _correlation_id.get()
        if correlation_id is not None:
            payload["correlation_id"] = correlation_id
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        payload.update(
            (key, value) for key, value in vars(record).items() if key not in _RESERVED_ATTRS
        )
        return json.dumps(payload, default=str)

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:  # noqa: N802
        stamp = time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
        return f"{stamp}.{int(record.msecs):03d}Z"


def log_structured(logger: logging.Logger, level: int, message: str, **fields: Any) -> None:
    """Log ``message`` with ``fields`` attached as record attributes.

    ``StructuredFormatter`` emits the fields as JSON keys; plain
    formatters ignore them.
    """
    logger.log(level, message, extra=fields)

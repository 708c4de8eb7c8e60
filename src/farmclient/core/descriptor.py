r"""Per-call options and the immutable description of one logical call."""

from __future__ import annotations

__all__ = ["HTTP_METHODS", "RequestDescriptor", "RequestOptions", "build_descriptor"]

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from farmclient.core.http_logic import build_url, serialize_body
from farmclient.core.validation import validate_timeout

if TYPE_CHECKING:
    from collections.abc import Mapping

    from farmclient.cancellation import CancellationToken
    from farmclient.core.config import ClientConfig
    from farmclient.core.http_logic import QueryParams
    from farmclient.validators import Validator

HTTP_METHODS = ("GET", "POST", "PUT", "PATCH", "DELETE")


@dataclass(frozen=True)
class RequestOptions:
    """Optional settings of a single call.

    Args:
        headers: Headers merged over the configured default headers.
        params: Query parameters; ``None`` values are omitted.
        timeout: Deadline in seconds of each attempt, overriding
            ``ClientConfig.timeout``.
        cancel_token: Token the caller can fire to abort the call.
        validator: Schema the successful response body must match.
    """

    headers: Mapping[str, str] | None = None
    params: QueryParams | None = None
    timeout: float | None = None
    cancel_token: CancellationToken | None = None
    validator: Validator | None = None

    def __post_init__(self) -> None:
        validate_timeout(self.timeout)


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to issue the attempts of one call.

    Attributes:
        method: The upper-case HTTP method.
        path: The requested path, used in error messages.
        url: The full URL including the query string.
        content: The serialized JSON body, or ``None``.
        headers: The per-call header overrides.
        timeout: The deadline in seconds of each attempt.
        cancel_token: The caller's cancellation token, if any.
        validator: The response schema, if any.
    """

    method: str
    path: str
    url: str
    content: bytes | None = None
    headers: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    timeout: float = 30.0
    cancel_token: CancellationToken | None = None
    validator: Validator | None = None


def build_descriptor(
    config: ClientConfig,
    method: str,
    path: str,
    body: Any = None,
    options: RequestOptions | None = None,
) -> RequestDescriptor:
    """Build the descriptor of a call.

    Args:
        config: The client configuration.
        method: The HTTP method, case-insensitive.
        path: The path of the endpoint.
        body: Optional structured body, serialized as JSON.
        options: Optional per-call options.

    Returns:
        The descriptor of the call.

    Raises:
        ValueError: If the method is not one of GET, POST, PUT, PATCH or
            DELETE.

    Example:
        ```pycon
        >>> from farmclient.core.config import ClientConfig
        >>> from farmclient.core.descriptor import RequestOptions, build_descriptor
        >>> config = ClientConfig(base_url="https://api.example.com")
        >>> descriptor = build_descriptor(
        ...     config, "get", "/farms", options=RequestOptions(params={"farmer_id": "f-1"})
        ... )
        >>> descriptor.method, descriptor.url
        ('GET', 'https://api.example.com/farms?farmer_id=f-1')

        ```
    """
    normalized = method.upper()
    if normalized not in HTTP_METHODS:
        msg = f"method must be one of {HTTP_METHODS}, got {method!r}"
        raise ValueError(msg)
    options = options or RequestOptions()
    return RequestDescriptor(
        method=normalized,
        path=path,
        url=build_url(config.base_url, path, options.params),
        content=serialize_body(body),
        headers=MappingProxyType(dict(options.headers or {})),
        timeout=options.timeout if options.timeout is not None else config.timeout,
        cancel_token=options.cancel_token,
        validator=options.validator,
    )

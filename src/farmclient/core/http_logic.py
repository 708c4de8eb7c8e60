r"""Request building and response body helpers.

This module contains the pure helpers used while building a request
(URL, query string, JSON payload) and while interpreting a response
(body parsing, error message extraction).
"""

from __future__ import annotations

__all__ = [
    "QueryParams",
    "build_url",
    "encode_query_params",
    "error_message",
    "parse_body",
    "serialize_body",
]

from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Union

import httpx
from pydantic import TypeAdapter

if TYPE_CHECKING:
    from collections.abc import Iterable

QueryValue = Union[str, int, float, bool, None]
QueryParams = Union[Mapping[str, Any], Sequence[tuple[str, Any]]]

_JSON_ADAPTER: TypeAdapter[Any] = TypeAdapter(Any)


def _encode_scalar(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def encode_query_params(params: QueryParams | None) -> list[tuple[str, str]]:
    """Encode query parameters as ordered string pairs.

    Parameters whose value is ``None`` are omitted. Booleans are encoded as
    ``true``/``false``, and list or tuple values expand to one pair per
    item (``ids=a&ids=b``). Endpoints expecting a comma-joined value
    (``ids=a,b``) must be given a pre-joined string.

    Args:
        params: A mapping or a sequence of ``(key, value)`` pairs.

    Returns:
        The encoded pairs, in the order they were given.

    Example:
        ```pycon
        >>> from farmclient.core.http_logic import encode_query_params
        >>> encode_query_params({"page": 2, "active": True, "q": None, "ids": ["a", "b"]})
        [('page', '2'), ('active', 'true'), ('ids', 'a'), ('ids', 'b')]

        ```
    """
    if not params:
        return []
    items: Iterable[tuple[str, Any]] = params.items() if isinstance(params, Mapping) else params
    pairs = []
    for key, value in items:
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            pairs.extend((key, _encode_scalar(item)) for item in value if item is not None)
        else:
            pairs.append((key, _encode_scalar(value)))
    return pairs


def build_url(base_url: str, path: str, params: QueryParams | None = None) -> str:
    """Build the full URL of a request.

    Args:
        base_url: The base URL of the API. A trailing slash is ignored.
        path: The path of the endpoint, e.g. ``/farmers``. A missing
            leading slash is added.
        params: Optional query parameters (see ``encode_query_params``).
            They are merged with any query already present in ``path``.

    Returns:
        The full URL.

    Example:
        ```pycon
        >>> from farmclient.core.http_logic import build_url
        >>> build_url("https://api.example.com/", "/farmers", {"page": 1, "q": None})
        'https://api.example.com/farmers?page=1'

        ```
    """
    if path and not path.startswith("/"):
        path = f"/{path}"
    url = httpx.URL(f"{base_url.rstrip('/')}{path}")
    pairs = encode_query_params(params)
    if pairs:
        url = url.copy_merge_params(pairs)
    return str(url)


def serialize_body(body: Any) -> bytes | None:
    """Serialize a request body to JSON bytes.

    Pydantic models, dataclasses, dates and enums are serialized in JSON
    mode. ``None`` means no body.

    Args:
        body: The structured data to send.

    Returns:
        The JSON payload, or ``None`` when there is no body.

    Example:
        ```pycon
        >>> from farmclient.core.http_logic import serialize_body
        >>> serialize_body({"name": "North field", "area": 2.5})
        b'{"name":"North field","area":2.5}'
        >>> serialize_body(None) is None
        True

        ```
    """
    if body is None:
        return None
    return _JSON_ADAPTER.dump_json(body)


def parse_body(response: httpx.Response) -> Any:
    """Parse the body of a response.

    Args:
        response: The HTTP response.

    Returns:
        The decoded JSON value, the raw text when the body is not valid
        JSON, or ``None`` when the body is empty.
    """
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def error_message(method: str, path: str, status_code: int, body: Any) -> str:
    """Build the message of an HTTP failure.

    A JSON object body contributes its ``message`` field, or else its
    ``error`` field. A plain-text body is appended to the default message.

    Args:
        method: The HTTP method.
        path: The requested path.
        status_code: The HTTP status code.
        body: The parsed body of the response.

    Returns:
        The error message.

    Example:
        ```pycon
        >>> from farmclient.core.http_logic import error_message
        >>> error_message("GET", "/farms/1", 404, {"message": "Farm not found"})
        'Farm not found'
        >>> error_message("GET", "/farms/1", 502, "Bad Gateway")
        'API GET /farms/1 failed: 502 Bad Gateway'

        ```
    """
    default = f"API {method} {path} failed: {status_code}"
    if isinstance(body, Mapping):
        detail = body.get("message") or body.get("error")
        return str(detail) if detail else default
    if isinstance(body, str) and body:
        return f"{default} {body}"
    return default

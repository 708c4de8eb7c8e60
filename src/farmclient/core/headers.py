r"""Header construction for outgoing attempts."""

from __future__ import annotations

__all__ = ["build_headers"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from farmclient.core.config import ClientConfig


def build_headers(config: ClientConfig, overrides: Mapping[str, str] | None = None) -> dict[str, str]:
    """Build the headers of one attempt.

    The default headers of the configuration are merged with the per-call
    overrides (overrides win on key collision). The access token callback
    is invoked on every call of this function, and a non-empty token is
    sent as ``Authorization: Bearer <token>``. An empty or ``None`` token
    leaves the header out. Exceptions raised by the token callback are
    propagated unchanged.

    Args:
        config: The client configuration.
        overrides: Optional per-call headers.

    Returns:
        A new dictionary of headers.

    Example:
        ```pycon
        >>> from farmclient.core.config import ClientConfig
        >>> from farmclient.core.headers import build_headers
        >>> config = ClientConfig(base_url="https://api.example.com", get_access_token=lambda: "abc")
        >>> build_headers(config, {"X-Request-Id": "42"})
        {'Content-Type': 'application/json', 'X-Request-Id': '42', 'Authorization': 'Bearer abc'}

        ```
    """
    headers = {**config.default_headers, **(overrides or {})}
    if config.get_access_token is not None:
        token = config.get_access_token()
        if token:
            headers["Authorization"] = f"Bearer {token}"
    return headers

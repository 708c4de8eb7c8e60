r"""The request engine shared by every resource method of the SDK.

This module provides the ``RequestEngine`` class: an async context
manager wrapping an ``httpx.AsyncClient`` that gives every call uniform
authentication, timeout, cancellation, retry and error semantics.
Resource services receive one engine instance and delegate to it.
"""

from __future__ import annotations

__all__ = ["RequestEngine"]

from dataclasses import replace
from typing import TYPE_CHECKING, Any

import httpx

from farmclient.core.descriptor import RequestOptions, build_descriptor
from farmclient.retry.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    from types import TracebackType
    from typing import Self

    from farmclient.core.config import ClientConfig


class RequestEngine:
    r"""Asynchronous request engine.

    The engine is safe to share between concurrent calls: each call has
    its own attempt counter, deadline and cancellation token, and the only
    state shared between calls is the immutable configuration.

    Args:
        config: The client configuration.
        client: Optional externally owned ``httpx.AsyncClient``. It is
            used as is and never closed by the engine. When omitted, the
            engine creates its own client, which follows redirects, when
            entering its context and closes it on exit.

    Example:
        ```pycon
        >>> import asyncio
        >>> from farmclient import ClientConfig, RequestEngine
        >>> async def main():  # doctest: +SKIP
        ...     config = ClientConfig(
        ...         base_url="https://api.example.com", get_access_token=lambda: "secret"
        ...     )
        ...     async with RequestEngine(config) as engine:
        ...         farmers = await engine.get("/api/v1/farmers", params={"page": 1})
        ...         farm = await engine.post("/api/v1/farms", {"name": "North field"})
        ...
        >>> asyncio.run(main())  # doctest: +SKIP

        ```
    """

    def __init__(self, config: ClientConfig, *, client: httpx.AsyncClient | None = None) -> None:
        self._config = config
        self._executor = AsyncRetryExecutor(config)
        self._client = client
        self._owns_client = client is None

    @property
    def config(self) -> ClientConfig:
        """The configuration shared by every call."""
        return self._config

    async def __aenter__(self) -> Self:
        if self._owns_client and self._client is None:
            # Deadlines are enforced per attempt by the engine.
            self._client = httpx.AsyncClient(timeout=None, follow_redirects=True)
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying client if the engine created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _ensure_client(self) -> httpx.AsyncClient:
        """Return the HTTP client.

        Raises:
            RuntimeError: If the engine owns its client and is used outside
                of its ``async with`` block.
        """
        if self._client is None:
            msg = "RequestEngine must be used within an async context manager (async with statement)"
            raise RuntimeError(msg)
        return self._client

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        options: RequestOptions | None = None,
        **option_overrides: Any,
    ) -> Any:
        r"""Send a request with automatic retry logic.

        Args:
            method: HTTP method: GET, POST, PUT, PATCH or DELETE.
            path: Path of the endpoint, appended to the base URL.
            body: Optional structured body, sent as JSON.
            options: Optional per-call options.
            **option_overrides: Per-call options given as keyword arguments
                (``headers``, ``params``, ``timeout``, ``cancel_token``,
                ``validator``). Non-``None`` values override the fields of
                ``options``.

        Returns:
            The parsed JSON body (``None`` for an empty body, the raw text
            for a non-JSON body), or the validator's output.

        Raises:
            RuntimeError: If called outside of the context manager without
                an injected client.
            ValueError: If the method or an option is invalid.
            ApiError: One of its subclasses when the call fails.
        """
        client = self._ensure_client()
        options = options or RequestOptions()
        overrides = {k: v for k, v in option_overrides.items() if v is not None}
        if overrides:
            options = replace(options, **overrides)
        descriptor = build_descriptor(self._config, method, path, body, options)
        return await self._executor.execute(client, descriptor)

    async def get(self, path: str, options: RequestOptions | None = None, **kwargs: Any) -> Any:
        """Send a GET request (see ``request``)."""
        return await self.request("GET", path, None, options, **kwargs)

    async def post(
        self, path: str, body: Any = None, options: RequestOptions | None = None, **kwargs: Any
    ) -> Any:
        """Send a POST request (see ``request``)."""
        return await self.request("POST", path, body, options, **kwargs)

    async def put(
        self, path: str, body: Any = None, options: RequestOptions | None = None, **kwargs: Any
    ) -> Any:
        """Send a PUT request (see ``request``)."""
        return await self.request("PUT", path, body, options, **kwargs)

    async def patch(
        self, path: str, body: Any = None, options: RequestOptions | None = None, **kwargs: Any
    ) -> Any:
        """Send a PATCH request (see ``request``)."""
        return await self.request("PATCH", path, body, options, **kwargs)

    async def delete(self, path: str, options: RequestOptions | None = None, **kwargs: Any) -> Any:
        """Send a DELETE request (see ``request``)."""
        return await self.request("DELETE", path, None, options, **kwargs)

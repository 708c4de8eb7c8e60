r"""Unit tests for asynchronous retry executor."""

from __future__ import annotations

from unittest.mock import Mock

import httpx
import pytest
from pydantic import BaseModel

from farmclient.callbacks import FailureInfo, RequestInfo, ResponseInfo, RetryInfo
from farmclient.core.descriptor import RequestOptions, build_descriptor
from farmclient.exceptions import (
    ClientError,
    NetworkError,
    ResponseValidationError,
    ServerError,
)
from farmclient.retry import AsyncRetryExecutor, CallbackManager, RetryDecider, RetryStrategy
from farmclient.utils.request_logging import RequestLogger
from tests.helpers import SequenceHandler, make_client, make_config


class Farm(BaseModel):
    id: str
    area: float


def test_async_retry_executor_creation() -> None:
    config = make_config()
    executor = AsyncRetryExecutor(config)
    assert executor.config is config
    assert isinstance(executor.decider, RetryDecider)
    assert isinstance(executor.strategy, RetryStrategy)
    assert isinstance(executor.callbacks, CallbackManager)
    assert isinstance(executor.request_logger, RequestLogger)


@pytest.mark.asyncio
async def test_async_retry_executor_successful_request(mock_asleep: Mock) -> None:
    """Test successful async request without retries."""
    config = make_config()
    handler = SequenceHandler(httpx.Response(200, json={"id": "f-1"}))
    async with make_client(handler) as client:
        result = await AsyncRetryExecutor(config).execute(
            client, build_descriptor(config, "GET", "/farms/f-1")
        )
    assert result == {"id": "f-1"}
    assert handler.call_count == 1
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_async_retry_executor_sends_request(mock_asleep: Mock) -> None:
    config = make_config(get_access_token=lambda: "secret")
    handler = SequenceHandler(httpx.Response(201, json={"id": "f-2"}))
    descriptor = build_descriptor(
        config,
        "POST",
        "/farms",
        {"name": "North"},
        RequestOptions(headers={"X-Trace": "abc"}, params={"dry_run": False}),
    )
    async with make_client(handler) as client:
        await AsyncRetryExecutor(config).execute(client, descriptor)

    request = handler.requests[0]
    assert request.method == "POST"
    assert str(request.url) == "https://api.example.com/farms?dry_run=false"
    assert request.headers["Authorization"] == "Bearer secret"
    assert request.headers["Content-Type"] == "application/json"
    assert request.headers["X-Trace"] == "abc"
    assert request.content == b'{"name":"North"}'


@pytest.mark.asyncio
async def test_async_retry_executor_retry_on_retryable_status(mock_asleep: Mock) -> None:
    """Test async retry on retryable status code."""
    config = make_config(max_retries=2, base_delay=0.5)
    handler = SequenceHandler(httpx.Response(502), httpx.Response(200, json=[]))
    async with make_client(handler) as client:
        result = await AsyncRetryExecutor(config).execute(
            client, build_descriptor(config, "GET", "/farms")
        )
    assert result == []
    assert handler.call_count == 2
    mock_asleep.assert_called_once_with(0.5)


@pytest.mark.asyncio
async def test_async_retry_executor_exhausted(mock_asleep: Mock) -> None:
    config = make_config(max_retries=2, base_delay=1.0)
    handler = SequenceHandler(httpx.Response(500, json={"message": "db down"}))
    async with make_client(handler) as client:
        with pytest.raises(ServerError, match=r"db down") as exc_info:
            await AsyncRetryExecutor(config).execute(
                client, build_descriptor(config, "GET", "/farms")
            )
    assert exc_info.value.attempts == 3
    assert handler.call_count == 3
    assert [call.args[0] for call in mock_asleep.call_args_list] == [1.0, 2.0]


@pytest.mark.asyncio
async def test_async_retry_executor_non_retryable_status(mock_asleep: Mock) -> None:
    config = make_config()
    handler = SequenceHandler(httpx.Response(422, json={"error": "invalid area"}))
    async with make_client(handler) as client:
        with pytest.raises(ClientError, match=r"invalid area"):
            await AsyncRetryExecutor(config).execute(
                client, build_descriptor(config, "POST", "/farms", {"area": -1})
            )
    assert handler.call_count == 1
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_async_retry_executor_network_error(mock_asleep: Mock) -> None:
    config = make_config(max_retries=1)
    handler = SequenceHandler(httpx.ConnectError("connection refused"))
    async with make_client(handler) as client:
        with pytest.raises(NetworkError) as exc_info:
            await AsyncRetryExecutor(config).execute(
                client, build_descriptor(config, "GET", "/farms")
            )
    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)
    assert handler.call_count == 2


@pytest.mark.asyncio
async def test_async_retry_executor_validator(mock_asleep: Mock) -> None:
    config = make_config()
    handler = SequenceHandler(httpx.Response(200, json={"id": "f-1", "area": "2.5"}))
    descriptor = build_descriptor(config, "GET", "/farms/f-1", options=RequestOptions(validator=Farm))
    async with make_client(handler) as client:
        result = await AsyncRetryExecutor(config).execute(client, descriptor)
    assert result == Farm(id="f-1", area=2.5)


@pytest.mark.asyncio
async def test_async_retry_executor_validation_error(mock_asleep: Mock) -> None:
    config = make_config()
    handler = SequenceHandler(httpx.Response(200, json={"id": "f-1"}))
    descriptor = build_descriptor(config, "GET", "/farms/f-1", options=RequestOptions(validator=Farm))
    async with make_client(handler) as client:
        with pytest.raises(ResponseValidationError) as exc_info:
            await AsyncRetryExecutor(config).execute(client, descriptor)
    error = exc_info.value
    assert error.status_code == 200
    assert error.url == "https://api.example.com/farms/f-1"
    assert error.response_body == {"id": "f-1"}
    assert error.issues[0]["loc"] == ("area",)
    assert handler.call_count == 1


@pytest.mark.asyncio
async def test_async_retry_executor_callbacks_on_success(mock_asleep: Mock) -> None:
    on_request, on_retry, on_success, on_failure = Mock(), Mock(), Mock(), Mock()
    config = make_config(
        base_delay=0.25,
        on_request=on_request,
        on_retry=on_retry,
        on_success=on_success,
        on_failure=on_failure,
    )
    handler = SequenceHandler(httpx.Response(503), httpx.Response(200, json={"ok": True}))
    async with make_client(handler) as client:
        await AsyncRetryExecutor(config).execute(client, build_descriptor(config, "GET", "/farms"))

    url = "https://api.example.com/farms"
    assert on_request.call_args_list[0].args[0] == RequestInfo(
        url=url, method="GET", attempt=1, max_retries=3
    )
    assert on_request.call_args_list[1].args[0].attempt == 2
    assert on_retry.call_args.args[0] == RetryInfo(
        url=url,
        method="GET",
        attempt=2,
        max_retries=3,
        wait_time=0.25,
        error=None,
        status_code=503,
    )
    info = on_success.call_args.args[0]
    assert isinstance(info, ResponseInfo)
    assert info.attempt == 2
    assert info.status_code == 200
    assert info.body == {"ok": True}
    on_failure.assert_not_called()


@pytest.mark.asyncio
async def test_async_retry_executor_callbacks_on_failure(mock_asleep: Mock) -> None:
    on_success, on_failure = Mock(), Mock()
    config = make_config(max_retries=0, on_success=on_success, on_failure=on_failure)
    handler = SequenceHandler(httpx.Response(404))
    async with make_client(handler) as client:
        with pytest.raises(ClientError) as exc_info:
            await AsyncRetryExecutor(config).execute(
                client, build_descriptor(config, "GET", "/farms/x")
            )
    info = on_failure.call_args.args[0]
    assert isinstance(info, FailureInfo)
    assert info.error is exc_info.value
    assert info.status_code == 404
    assert info.attempt == 1
    on_success.assert_not_called()

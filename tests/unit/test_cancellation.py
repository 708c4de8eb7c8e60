from __future__ import annotations

import asyncio
from unittest.mock import Mock

import pytest

from farmclient.cancellation import CancellationToken, sleep

#######################################
#     Tests for CancellationToken     #
#######################################


@pytest.mark.asyncio
async def test_cancellation_token_initial_state() -> None:
    token = CancellationToken()
    assert not token.cancelled
    assert token.reason is None


@pytest.mark.asyncio
async def test_cancellation_token_cancel() -> None:
    token = CancellationToken()
    token.cancel("user left")
    assert token.cancelled
    assert token.reason == "user left"


@pytest.mark.asyncio
async def test_cancellation_token_cancel_is_idempotent() -> None:
    token = CancellationToken()
    token.cancel("first")
    token.cancel("second")
    assert token.cancelled
    assert token.reason == "first"


@pytest.mark.asyncio
async def test_cancellation_token_repr() -> None:
    token = CancellationToken()
    assert repr(token) == "CancellationToken(cancelled=False, reason=None)"
    token.cancel("stop")
    assert repr(token) == "CancellationToken(cancelled=True, reason='stop')"


@pytest.mark.asyncio
async def test_cancellation_token_wait() -> None:
    token = CancellationToken()
    asyncio.get_running_loop().call_later(0.01, token.cancel)
    await asyncio.wait_for(token.wait(), timeout=1.0)
    assert token.cancelled


###########################
#     Tests for sleep     #
###########################


@pytest.mark.asyncio
async def test_sleep_without_token(mock_asleep: Mock) -> None:
    assert await sleep(1.5)
    mock_asleep.assert_called_once_with(1.5)


@pytest.mark.asyncio
async def test_sleep_full_delay() -> None:
    assert await sleep(0.01, CancellationToken())


@pytest.mark.asyncio
async def test_sleep_token_already_fired() -> None:
    token = CancellationToken()
    token.cancel()
    assert not await sleep(10.0, token)


@pytest.mark.asyncio
async def test_sleep_interrupted() -> None:
    token = CancellationToken()
    loop = asyncio.get_running_loop()
    loop.call_later(0.01, token.cancel)
    start = loop.time()
    assert not await sleep(10.0, token)
    assert loop.time() - start < 5.0
